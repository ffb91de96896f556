from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from pydantic import field_validator, model_validator
from dataclasses import dataclass
from typing import Annotated, Any
import json
import logging
from pathlib import Path
import os

from ..utils.errors import ConfigError

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    API_PREFIX: str = "/api"

    # Server-side Google Maps credential used by the distance proxy.
    GOOGLE_MAPS_API_KEY: str = ""
    # Browser key for the map widget. The backend never serves it but accepts
    # it so a `.env` shared with the frontend loads without validation errors.
    NEXT_PUBLIC_GOOGLE_MAPS_API_KEY: str = ""

    # Provider endpoints and request timeout (seconds)
    DISTANCE_MATRIX_URL: str = "https://maps.googleapis.com/maps/api/distancematrix/json"
    GEOCODE_URL: str = "https://maps.googleapis.com/maps/api/geocode/json"
    GOOGLE_MAPS_TIMEOUT: float = 10.0

    # Base URL the client controller and CLI use to reach the proxy
    FINDRIDE_API_BASE: str = "http://localhost:8000"

    # CORS origins; NoDecode lets plain comma-separated values through
    CORS_ORIGINS: Annotated[list[str], NoDecode] = ["http://localhost:3000"]
    CORS_ALLOW_ALL: bool = False

    LOG_LEVEL: str = "INFO"
    ENABLE_CONSOLE_TRACING: bool = False

    model_config = SettingsConfigDict(extra="ignore", case_sensitive=True)

    @field_validator("CORS_ORIGINS", mode="before")
    def split_origins(cls, v: Any) -> list[str]:
        """Parse comma-separated or JSON list of origins from environment."""
        if isinstance(v, str):
            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return parsed
            except json.JSONDecodeError:
                pass
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator(
        "GOOGLE_MAPS_API_KEY",
        "NEXT_PUBLIC_GOOGLE_MAPS_API_KEY",
        "FINDRIDE_API_BASE",
        mode="before",
    )
    def strip_whitespace(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("GOOGLE_MAPS_TIMEOUT")
    def positive_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("GOOGLE_MAPS_TIMEOUT must be positive")
        return v

    @model_validator(mode="after")
    def allow_all_if_requested(self) -> "Settings":
        if self.CORS_ALLOW_ALL:
            self.CORS_ORIGINS = ["*"]
        return self


def load_settings() -> "Settings":
    return Settings(_env_file=os.getenv("ENV_FILE", str(Path(__file__).resolve().parents[3] / ".env")))


settings = load_settings()


@dataclass(frozen=True)
class ProviderConfig:
    """Validated Google Maps settings handed to the provider client."""

    api_key: str
    distance_matrix_url: str
    geocode_url: str
    timeout: float

    def __repr__(self) -> str:
        # Keep the credential out of logs and tracebacks
        return (
            f"ProviderConfig(api_key='***', distance_matrix_url={self.distance_matrix_url!r}, "
            f"geocode_url={self.geocode_url!r}, timeout={self.timeout!r})"
        )


def _google_maps_api_key() -> str:
    env_key = (os.getenv("GOOGLE_MAPS_API_KEY") or "").strip()
    if env_key:
        return env_key
    return (getattr(settings, "GOOGLE_MAPS_API_KEY", "") or "").strip()


def _google_maps_timeout() -> float:
    env_timeout = os.getenv("GOOGLE_MAPS_TIMEOUT")
    if env_timeout:
        try:
            value = float(env_timeout)
        except ValueError:
            value = 0.0
        if value > 0:
            return value
        logger.warning(
            "Ignoring invalid GOOGLE_MAPS_TIMEOUT=%r; using %s",
            env_timeout,
            settings.GOOGLE_MAPS_TIMEOUT,
        )
    return settings.GOOGLE_MAPS_TIMEOUT


def load_provider_config() -> ProviderConfig:
    """Return the provider configuration or raise :class:`ConfigError`.

    Environment variables win over values loaded from ``.env`` so deployments
    (and tests) can rotate the key without rebuilding settings.
    """
    api_key = _google_maps_api_key()
    if not api_key:
        raise ConfigError("Google Maps API key is not configured")
    return ProviderConfig(
        api_key=api_key,
        distance_matrix_url=settings.DISTANCE_MATRIX_URL,
        geocode_url=settings.GEOCODE_URL,
        timeout=_google_maps_timeout(),
    )


def api_base() -> str:
    env_base = os.getenv("FINDRIDE_API_BASE", "").strip()
    if env_base:
        return env_base.rstrip("/")
    return (settings.FINDRIDE_API_BASE or "http://localhost:8000").rstrip("/")
