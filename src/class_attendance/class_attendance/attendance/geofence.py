from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_RADIUS_METERS, EARTH_RADIUS_METERS
from ..core.exceptions import OutOfRange, PermissionDenied
from ..courses.model import Course
from .capabilities import Coordinates, LocationProvider

logger = logging.getLogger(__name__)


def haversine_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in meters."""
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (math.sin(delta_lat / 2) ** 2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) *
         math.sin(delta_lon / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_METERS * c


@dataclass(frozen=True)
class GeofenceResult:
    within_range: bool
    distance_meters: Optional[float]
    radius_meters: float


class GeofenceValidator:
    """Device must be within the course radius; skipped for courses without a location."""

    def __init__(self, *, default_radius_meters: float = DEFAULT_RADIUS_METERS):
        self._default_radius = float(default_radius_meters)

    def radius_for(self, course: Course) -> float:
        if course.radius_meters is None:
            return self._default_radius
        return float(course.radius_meters)

    def evaluate(self, course: Course, position: Coordinates) -> GeofenceResult:
        radius = self.radius_for(course)
        distance = haversine_meters(position.latitude, position.longitude, course.latitude, course.longitude)
        return GeofenceResult(within_range=distance <= radius, distance_meters=distance, radius_meters=radius)

    def check(self, course: Course, location: Optional[LocationProvider]) -> GeofenceResult:
        """Fetch the device position and compare; raises OutOfRange / PermissionDenied."""
        if not course.has_location:
            return GeofenceResult(within_range=True, distance_meters=None, radius_meters=self.radius_for(course))

        if location is None:
            raise PermissionDenied("Location permission is required to verify you are in class.")
        try:
            position = location.current_position()
        except TimeoutError as e:
            raise PermissionDenied("Could not get your location in time. Please try again.") from e

        result = self.evaluate(course, position)
        if not result.within_range:
            logger.info(
                "Device %.0fm from %s (radius %.0fm)", result.distance_meters, course.code, result.radius_meters
            )
            raise OutOfRange(result.distance_meters, result.radius_meters)
        return result
