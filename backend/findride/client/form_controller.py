"""Form controller behind the "find a ride" page.

Owns the origin/destination inputs, sends one resolution request at a time
through the distance proxy and keeps an explicit UI state:

    IDLE -> LOADING -> SUCCESS | FAILED

Blank inputs fail immediately without touching the network. While a request
is in flight further submits are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import logging

import httpx

from ..core.config import api_base
from ..schemas.distance import Coordinates, DistanceDisplay, DistanceQuery, LocationInput
from ..services.distance_format import normalize_distance_matrix, to_display
from ..utils.errors import InputError, UNABLE_TO_CALCULATE, classify_failure
from .geolocation import UNAVAILABLE, UNSUPPORTED, LocationUnavailableError, Locator

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 10.0


class UiPhase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class UiState:
    phase: UiPhase = UiPhase.IDLE
    error: Optional[str] = None
    result: Optional[DistanceDisplay] = None

    @property
    def loading(self) -> bool:
        return self.phase is UiPhase.LOADING


@dataclass
class FormInput:
    origin: str = ""
    destination: str = ""
    coordinates: Optional[Coordinates] = field(default=None)


class FormController:
    """Drive one form instance against the distance proxy.

    ``client`` is an ``httpx.AsyncClient``. ``api_base_url`` defaults to
    FINDRIDE_API_BASE; pass ``""`` to rely on the client's own ``base_url``.
    ``locator`` is optional; without one, location sharing reports that
    geolocation is unsupported.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        locator: Optional[Locator] = None,
        api_base_url: Optional[str] = None,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.client = client
        self.locator = locator
        self.api_base_url = (api_base_url if api_base_url is not None else api_base()).rstrip("/")
        self.timeout = timeout
        self.form = FormInput()
        self.state = UiState()
        self.locating = False
        self.resolving = False

    @property
    def map_center(self) -> Coordinates:
        if self.form.coordinates is not None:
            return self.form.coordinates
        return Coordinates(lat=0, lng=0)

    def _fail(self, message: str) -> UiState:
        self.state = UiState(phase=UiPhase.FAILED, error=message)
        return self.state

    async def share_location(self) -> UiState:
        """Capture the device position and use it as the origin."""
        if self.locating or self.resolving:
            # A pending distance request owns the state until it settles
            return self.state
        if self.locator is None:
            return self._fail(UNSUPPORTED)
        self.locating = True
        try:
            coords = await self.locator.current_position()
        except LocationUnavailableError as exc:
            logger.warning("Location unavailable: %s", exc)
            self.form.coordinates = None
            self.form.origin = ""
            return self._fail(UNAVAILABLE)
        finally:
            self.locating = False
        self.form.coordinates = coords
        self.form.origin = LocationInput(coordinates=coords).as_query()
        phase = UiPhase.IDLE if self.state.phase is UiPhase.FAILED else self.state.phase
        self.state = UiState(phase=phase, result=self.state.result)
        return self.state

    async def submit(self, origin: Optional[str] = None, destination: Optional[str] = None) -> UiState:
        """Resolve the distance between ``origin`` and ``destination``.

        Arguments default to the current form values.
        """
        if self.resolving:
            logger.info("Ignoring submit while a distance request is in flight")
            return self.state

        if origin is not None and origin != self.form.origin:
            self.form.origin = origin
            self.form.coordinates = None
        if destination is not None:
            self.form.destination = destination
        try:
            query = DistanceQuery.from_form(self.form.origin, self.form.destination)
        except InputError as exc:
            return self._fail(exc.user_message)

        self.resolving = True
        self.state = UiState(phase=UiPhase.LOADING)
        try:
            payload = await self._fetch(query)
            result = normalize_distance_matrix(payload)
            if result.ok:
                self.state = UiState(phase=UiPhase.SUCCESS, result=to_display(result))
            else:
                logger.info("Distance unavailable: %s", result.status_code.value)
                self._fail(UNABLE_TO_CALCULATE)
        except Exception as exc:
            logger.error("Error calculating distance: %s", exc)
            self._fail(classify_failure(exc).user_message)
        finally:
            self.resolving = False
            if self.state.loading:
                # Cancelled mid-flight; drop back so the form can be resubmitted
                self.state = UiState(phase=UiPhase.IDLE)
        return self.state

    async def _fetch(self, query: DistanceQuery):
        resp = await self.client.get(
            f"{self.api_base_url}/api/distance",
            params={"from": query.origin, "to": query.destination},
            headers={"Accept": "application/json"},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return resp.json()
