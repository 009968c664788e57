"""
Location service capability.

The platform owns permission prompts and position fixes; the tracker only
needs the small interface below. ``SimulatedLocationService`` implements it
in-process for the HTTP API, the command line and the tests.
"""
from __future__ import annotations

import logging
from threading import Lock
from typing import Callable, Optional, Protocol

from user_location.models.location import AuthorizationState, Coordinate

logger = logging.getLogger(__name__)

AuthorizationHandler = Callable[[Optional[AuthorizationState]], object]


class LocationService(Protocol):
    def location_services_enabled(self) -> bool: ...

    def set_authorization_handler(self, handler: AuthorizationHandler) -> None: ...

    def request_permission(self) -> None: ...

    def current_authorization_state(self) -> AuthorizationState: ...

    def current_coordinate(self) -> Optional[Coordinate]: ...


class SimulatedLocationService:
    """In-memory location service.

    ``grant_on_request`` is the state the simulated user picks when a
    permission prompt is shown; ``None`` leaves the prompt unanswered.
    """

    def __init__(
        self,
        enabled: bool = True,
        state: AuthorizationState = AuthorizationState.UNDETERMINED,
        coordinate: Optional[Coordinate] = None,
        grant_on_request: Optional[AuthorizationState] = None,
    ):
        self.enabled = enabled
        self.grant_on_request = grant_on_request
        self.permission_requests = 0
        self._state = state
        self._coordinate = coordinate
        self._handler: Optional[AuthorizationHandler] = None
        self._lock = Lock()

    def location_services_enabled(self) -> bool:
        return self.enabled

    def set_authorization_handler(self, handler: AuthorizationHandler) -> None:
        self._handler = handler

    def request_permission(self) -> None:
        self.permission_requests += 1
        logger.info("Requesting when-in-use location permission")
        if self.grant_on_request is not None:
            self.set_authorization_state(self.grant_on_request)

    def current_authorization_state(self) -> AuthorizationState:
        with self._lock:
            return self._state

    def current_coordinate(self) -> Optional[Coordinate]:
        with self._lock:
            return self._coordinate

    def set_coordinate(self, coordinate: Optional[Coordinate]) -> None:
        with self._lock:
            self._coordinate = coordinate

    def set_authorization_state(self, state: AuthorizationState):
        """Change the permission level and notify the registered handler."""
        with self._lock:
            self._state = state
        if self._handler is None:
            return None
        return self._handler(state)
