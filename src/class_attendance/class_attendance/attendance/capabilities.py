"""Device capabilities the check-in flow waits on, in a fixed order.

The engine only sees these ports. On the HTTP surface the mobile client
performs the prompt itself and posts the outcome, which the ``Reported*``
adapters replay.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from ..core.exceptions import PermissionDenied


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


class LocationProvider(Protocol):
    def current_position(self) -> Coordinates:
        """Highest-accuracy fix.

        Raises PermissionDenied when denied or unobtainable, TimeoutError when
        the fix does not arrive in time, AttemptCancelled when the user backs out.
        """

        raise NotImplementedError


class BiometricVerifier(Protocol):
    def authenticate(self, prompt: str) -> bool:
        """Opaque match oracle: True on a match, False otherwise.

        Raises AttemptCancelled when the user dismisses the prompt.
        """

        raise NotImplementedError


class DeviceVerifier(Protocol):
    def confirm(self, prompt: str) -> bool:
        raise NotImplementedError


class ReportedLocation(LocationProvider):
    def __init__(self, latitude: Optional[float], longitude: Optional[float]):
        self._latitude = latitude
        self._longitude = longitude

    def current_position(self) -> Coordinates:
        if self._latitude is None or self._longitude is None:
            raise PermissionDenied("Location permission is required to verify you are in class.")
        return Coordinates(latitude=float(self._latitude), longitude=float(self._longitude))


class ReportedBiometric(BiometricVerifier):
    def __init__(self, success: Optional[bool]):
        self._success = success

    def authenticate(self, prompt: str) -> bool:
        if self._success is None:
            raise PermissionDenied("Your device does not support or have biometrics enrolled.")
        return bool(self._success)


class ReportedDeviceConfirmation(DeviceVerifier):
    def __init__(self, confirmed: bool):
        self._confirmed = confirmed

    def confirm(self, prompt: str) -> bool:
        return bool(self._confirmed)
