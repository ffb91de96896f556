"""Device location sources for the form controller."""

from __future__ import annotations

from typing import Optional, Protocol

from ..schemas.distance import Coordinates

UNSUPPORTED = "Geolocation is not supported by your browser"
UNAVAILABLE = "Unable to retrieve your location"


class LocationUnavailableError(Exception):
    """The location source refused or failed to produce a position."""


class Locator(Protocol):
    async def current_position(self) -> Coordinates: ...


class StaticLocator:
    """Report a fixed position, or deny access when none was given."""

    def __init__(self, coordinates: Optional[Coordinates] = None) -> None:
        self.coordinates = coordinates

    async def current_position(self) -> Coordinates:
        if self.coordinates is None:
            raise LocationUnavailableError("User denied Geolocation")
        return self.coordinates
