"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_RADIUS_METERS = 50
EARTH_RADIUS_METERS = 6_371_000

CODE_DIGITS = 4
CODE_MODULUS = 10 ** CODE_DIGITS
CODE_GRACE_SECONDS = 10

DEFAULT_DURATION_HOURS = 1
DEFAULT_TOTAL_SESSIONS = 40

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
