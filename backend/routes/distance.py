import logging
from typing import Optional

from fastapi import APIRouter, Query, Request, status

from findride.core.config import load_provider_config
from findride.services import maps_client
from findride.utils.errors import ConfigError, ProviderError, TransportError, error_json

router = APIRouter(tags=["distance"])
logger = logging.getLogger(__name__)

LOOKUP_TYPES = ("distance", "geocode")


@router.api_route("/distance", methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
def get_distance(
    request: Request,
    from_location: Optional[str] = Query(None, alias="from"),
    to_location: Optional[str] = Query(None, alias="to"),
    lookup_type: Optional[str] = Query(None, alias="type"),
):
    """Proxy Google Distance Matrix (or Geocoding) and return its JSON response."""
    if request.method != "GET":
        return error_json("Method not allowed", status.HTTP_405_METHOD_NOT_ALLOWED)

    origin = (from_location or "").strip()
    destination = (to_location or "").strip()
    if not origin or not destination:
        return error_json("Missing required parameters", status.HTTP_400_BAD_REQUEST)

    mode = (lookup_type or "distance").strip().lower()
    if mode not in LOOKUP_TYPES:
        return error_json("Invalid request parameters", status.HTTP_400_BAD_REQUEST)

    try:
        config = load_provider_config()
    except ConfigError as exc:
        return error_json(exc.message, status.HTTP_500_INTERNAL_SERVER_ERROR)

    logger.debug("Distance lookup type=%s origins=%s destinations=%s", mode, origin, destination)
    try:
        if mode == "geocode":
            return {
                "origin": maps_client.fetch_geocode(origin, config),
                "destination": maps_client.fetch_geocode(destination, config),
            }
        return maps_client.fetch_distance_matrix(origin, destination, config)
    except maps_client.InvalidProviderResponse as exc:
        logger.error("Distance lookup could not be processed: %s", exc)
        return error_json("Failed to process request")
    except (TransportError, ProviderError) as exc:
        logger.error("Distance lookup failed: %s %s", type(exc).__name__, exc)
        return error_json("Failed to fetch distance data")
    except Exception as exc:  # pragma: no cover - unexpected failure
        logger.exception("Distance lookup crashed: %s", exc)
        return error_json("Failed to process request")
