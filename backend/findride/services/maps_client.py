"""Thin Google Maps Platform client used by the distance proxy.

Provides `fetch_distance_matrix(origin, destination, config)` and
`fetch_geocode(location, config)`; both return the provider's JSON unchanged.

- Travel mode is always ``driving``.
- Parameters are passed to httpx so they are percent-encoded on the wire.
- Raises `TransportError` when no response arrives (connect failure, timeout)
  and `ProviderError` when the provider answers with a non-2xx status or a
  body that is not a JSON object. Callers decide what reaches the client.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

import httpx

from ..core.config import ProviderConfig
from ..schemas.distance import Coordinates
from ..utils.errors import ProviderError, TransportError

logger = logging.getLogger(__name__)

TRAVEL_MODE = "driving"


class InvalidProviderResponse(ProviderError):
    """The provider answered 2xx but the body is not a JSON object."""


def _redacted(params: Dict[str, Any]) -> Dict[str, Any]:
    return {k: ("***" if k == "key" else v) for k, v in params.items()}


def _get_json(url: str, params: Dict[str, Any], timeout: float) -> Dict[str, Any]:
    logger.debug("Maps request %s params=%s", url, _redacted(params))
    try:
        resp = httpx.get(url, params=params, timeout=timeout)
    except httpx.RequestError as exc:
        # httpx embeds the request URL (and key) in some messages; log the type only
        logger.error("Maps request to %s failed: %s", url, type(exc).__name__)
        raise TransportError() from exc
    try:
        resp.raise_for_status()
    except httpx.HTTPStatusError as exc:
        logger.error("Maps request to %s returned HTTP %s", url, resp.status_code)
        raise ProviderError(f"HTTP {resp.status_code}") from exc
    try:
        data = resp.json()
    except ValueError as exc:
        logger.error("Maps response from %s was not JSON", url)
        raise InvalidProviderResponse("Invalid response from maps provider") from exc
    if not isinstance(data, dict):
        raise InvalidProviderResponse("Invalid response from maps provider")
    logger.debug("Maps response status=%s", data.get("status"))
    return data


def fetch_distance_matrix(origin: str, destination: str, config: ProviderConfig) -> Dict[str, Any]:
    """Return the Distance Matrix JSON for a single origin/destination pair."""
    params = {
        "origins": origin,
        "destinations": destination,
        "mode": TRAVEL_MODE,
        "key": config.api_key,
    }
    return _get_json(config.distance_matrix_url, params, config.timeout)


def fetch_geocode(location: str, config: ProviderConfig) -> Dict[str, Any]:
    """Geocode an address, or reverse geocode a ``"lat,lng"`` string."""
    coords = Coordinates.parse(location)
    if coords is not None:
        params = {"latlng": coords.as_query(), "key": config.api_key}
    else:
        params = {"address": location, "key": config.api_key}
    return _get_json(config.geocode_url, params, config.timeout)
