"""Schemas for distance lookups and their normalized results."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ..utils.errors import InputError, MISSING_LOCATIONS


class Coordinates(BaseModel):
    """A latitude/longitude pair captured from the device."""

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)

    model_config = {"frozen": True}

    def as_query(self) -> str:
        return f"{self.lat},{self.lng}"

    def display(self) -> tuple[str, str]:
        return f"{self.lat:.6f}", f"{self.lng:.6f}"

    @classmethod
    def parse(cls, value: str) -> Optional["Coordinates"]:
        """Return coordinates for a ``"lat,lng"`` string, else ``None``."""
        parts = value.split(",")
        if len(parts) != 2:
            return None
        try:
            return cls(lat=float(parts[0]), lng=float(parts[1]))
        except ValueError:
            # Non-numeric parts or out-of-range values (pydantic errors are ValueErrors)
            return None


class LocationInput(BaseModel):
    """Free text typed by the user, or coordinates from geolocation."""

    text: Optional[str] = None
    coordinates: Optional[Coordinates] = None

    @model_validator(mode="after")
    def exactly_one(self) -> "LocationInput":
        if (self.text is None) == (self.coordinates is None):
            raise ValueError("provide either text or coordinates")
        return self

    def as_query(self) -> str:
        if self.coordinates is not None:
            return self.coordinates.as_query()
        return (self.text or "").strip()


class DistanceQuery(BaseModel):
    origin: str
    destination: str

    @field_validator("origin", "destination", mode="before")
    def strip_and_require(cls, v):
        # InputError is not a ValueError, so it escapes pydantic unchanged
        if v is None or (isinstance(v, str) and not v.strip()):
            raise InputError(MISSING_LOCATIONS)
        if isinstance(v, str):
            return v.strip()
        return v

    @classmethod
    def from_form(cls, origin: Optional[str], destination: Optional[str]) -> "DistanceQuery":
        """Build a query from raw form values or raise :class:`InputError`."""
        return cls(origin=origin or "", destination=destination or "")


class DistanceStatus(str, Enum):
    OK = "OK"
    NOT_FOUND = "NOT_FOUND"
    ZERO_RESULTS = "ZERO_RESULTS"
    ERROR = "ERROR"


class DistanceMatrixResult(BaseModel):
    """Provider answer reduced to the first origin/destination element."""

    status_code: DistanceStatus
    distance_meters: Optional[float] = None
    duration_seconds: Optional[float] = None
    distance_text: Optional[str] = None
    duration_text: Optional[str] = None
    origin_address: Optional[str] = None
    destination_address: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status_code is DistanceStatus.OK


class DistanceDisplay(BaseModel):
    """Converted values shown to the user."""

    distance: str = Field(..., description="e.g. '10.00 miles'")
    duration: Optional[str] = Field(None, description="e.g. '1 hour 5 mins'")
    miles: float
    origin_address: Optional[str] = None
    destination_address: Optional[str] = None
