from typing import Optional
from fastapi import status
from fastapi.responses import ORJSONResponse
import httpx
import logging

logger = logging.getLogger(__name__)

MISSING_LOCATIONS = "Please fill in both locations."
UNABLE_TO_CALCULATE = "Unable to calculate distance. Please try again."
NO_RESPONSE = (
    "No response received from the server. "
    "Please check your internet connection and try again."
)
UNKNOWN_ERROR = "An unknown error occurred"


class FindRideError(Exception):
    """Base class for every failure surfaced to a user."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    @property
    def user_message(self) -> str:
        return self.message


class InputError(FindRideError):
    """Missing or blank origin/destination. Never reaches the network."""


class ConfigError(FindRideError):
    """A required credential or setting is missing."""


class ProviderError(FindRideError):
    """The remote service answered with an error status or message."""

    @property
    def user_message(self) -> str:
        return f"Error: {self.message}"


class TransportError(FindRideError):
    """No response reached the caller (connect failure or timeout)."""

    def __init__(self, message: str = NO_RESPONSE) -> None:
        super().__init__(message)


class UnknownError(FindRideError):
    @property
    def user_message(self) -> str:
        return f"Error: {self.message or UNKNOWN_ERROR}"


def error_json(
    message: str,
    code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
) -> ORJSONResponse:
    """Return the fixed ``{"error": ...}`` body and log it."""
    log = logger.error if code >= 500 else logger.warning
    log("%s %s", code, message)
    return ORJSONResponse(status_code=code, content={"error": message})


def _response_message(response: httpx.Response) -> Optional[str]:
    try:
        data = response.json()
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    msg = data.get("error_message") or data.get("error")
    if isinstance(msg, str) and msg.strip():
        return msg.strip()
    return None


def classify_failure(exc: BaseException) -> FindRideError:
    """Map a failed proxy call to exactly one user-facing error.

    Order: provider-reported message, then no-response, then unknown.
    """
    if isinstance(exc, FindRideError) and not isinstance(exc, (InputError, ConfigError)):
        return exc
    if isinstance(exc, httpx.HTTPStatusError):
        message = _response_message(exc.response)
        if message:
            return ProviderError(message)
    if isinstance(exc, httpx.RequestError):
        return TransportError()
    return UnknownError(str(exc))
