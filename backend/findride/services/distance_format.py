"""Normalize Distance Matrix payloads and convert them for display.

The provider reports metres and seconds; the form shows miles rounded to two
decimals and a duration phrase such as ``"1 hour 5 mins"``.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional

import logging

from ..schemas.distance import DistanceDisplay, DistanceMatrixResult, DistanceStatus

logger = logging.getLogger(__name__)

MILES_PER_METER = Decimal("0.000621371")

_ELEMENT_STATUSES = {
    "OK": DistanceStatus.OK,
    "NOT_FOUND": DistanceStatus.NOT_FOUND,
    "ZERO_RESULTS": DistanceStatus.ZERO_RESULTS,
}


def _first(seq: Any) -> dict:
    if isinstance(seq, list) and seq and isinstance(seq[0], dict):
        return seq[0]
    return {}


def _value(block: Any) -> Optional[float]:
    if not isinstance(block, dict):
        return None
    value = block.get("value")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _text(block: Any) -> Optional[str]:
    if isinstance(block, dict) and isinstance(block.get("text"), str):
        return block["text"]
    return None


def normalize_distance_matrix(payload: Any) -> DistanceMatrixResult:
    """Reduce a Distance Matrix response to its first element.

    Anything other than a top-level ``OK`` with an ``OK`` element carrying a
    distance value is reported without metrics.
    """
    if not isinstance(payload, dict):
        return DistanceMatrixResult(status_code=DistanceStatus.ERROR)

    if payload.get("status") != "OK":
        logger.info("Distance Matrix status %s", payload.get("status"))
        return DistanceMatrixResult(status_code=DistanceStatus.ERROR)

    element = _first(_first(payload.get("rows")).get("elements"))
    status = _ELEMENT_STATUSES.get(element.get("status"), DistanceStatus.ERROR)
    meters = _value(element.get("distance"))
    if status is not DistanceStatus.OK or meters is None:
        if status is DistanceStatus.OK:
            status = DistanceStatus.ERROR
        return DistanceMatrixResult(status_code=status)

    origins = payload.get("origin_addresses") or []
    destinations = payload.get("destination_addresses") or []
    return DistanceMatrixResult(
        status_code=DistanceStatus.OK,
        distance_meters=meters,
        duration_seconds=_value(element.get("duration")),
        distance_text=_text(element.get("distance")),
        duration_text=_text(element.get("duration")),
        origin_address=origins[0] if origins else None,
        destination_address=destinations[0] if destinations else None,
    )


def meters_to_miles(meters: float) -> Decimal:
    """Convert metres to miles, rounded half-up to two decimals."""
    miles = Decimal(str(meters)) * MILES_PER_METER
    return miles.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def format_miles(meters: float) -> str:
    return f"{meters_to_miles(meters)} miles"


def _plural(count: int, unit: str, plural: str) -> str:
    return f"{count} {unit if count == 1 else plural}"


def format_duration(seconds: float) -> str:
    """Render seconds the way the provider phrases durations.

    Rounds to the nearest minute; anything under a minute shows as ``1 min``.
    """
    if seconds <= 0:
        return "0 mins"
    minutes = max(1, int((Decimal(str(seconds)) / 60).quantize(Decimal("1"), rounding=ROUND_HALF_UP)))
    days, rem = divmod(minutes, 60 * 24)
    hours, mins = divmod(rem, 60)
    if days:
        parts = [_plural(days, "day", "days")]
        if hours:
            parts.append(_plural(hours, "hour", "hours"))
        return " ".join(parts)
    if hours:
        parts = [_plural(hours, "hour", "hours")]
        if mins:
            parts.append(_plural(mins, "min", "mins"))
        return " ".join(parts)
    return _plural(mins, "min", "mins")


def to_display(result: DistanceMatrixResult) -> DistanceDisplay:
    if not result.ok or result.distance_meters is None:
        raise ValueError("only OK results can be displayed")
    duration = None
    if result.duration_seconds is not None:
        duration = format_duration(result.duration_seconds)
    return DistanceDisplay(
        distance=format_miles(result.distance_meters),
        duration=duration,
        miles=float(meters_to_miles(result.distance_meters)),
        origin_address=result.origin_address,
        destination_address=result.destination_address,
    )
