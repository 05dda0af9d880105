"""Class Attendance package.

This package is organized by feature modules (courses, students, attendance,
reports) with a thin Flask controller layer over service/repository layers.
The check-in engine lives in ``attendance``.
"""
