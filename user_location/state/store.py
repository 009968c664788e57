"""
View State Store
--------------
Thread-safe holder of the values a map screen renders: the displayed region,
the resolved address and the status of the address lookup.

Every geocoding request is tagged with a monotonically increasing request id
obtained from ``begin_request``. Only the latest request may publish; a
completion carrying an older id is dropped, so overlapping lookups always
settle on the most recently requested coordinate.
"""
import logging
from dataclasses import dataclass, replace
from threading import Lock
from typing import Callable, List, Optional

from user_location.models.location import (
    DEFAULT_REGION,
    PENDING_ADDRESS,
    AuthorizationState,
    MapRegion,
)
from user_location.models.status import AddressStatus, ErrorKind

# Get logger
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewState:
    region: MapRegion = DEFAULT_REGION
    address: str = PENDING_ADDRESS
    status: AddressStatus = AddressStatus.PENDING
    error: Optional[ErrorKind] = None
    error_message: Optional[str] = None
    # None until the first authorization event is observed
    authorization_state: Optional[AuthorizationState] = None
    request_id: int = 0

    def to_dict(self):
        return {
            "region": {
                "center": {
                    "latitude": self.region.center.latitude,
                    "longitude": self.region.center.longitude,
                },
                "span": {
                    "latitude_delta": self.region.span.latitude_delta,
                    "longitude_delta": self.region.span.longitude_delta,
                },
            },
            "address": self.address,
            "status": self.status.value,
            "error": self.error.value if self.error else None,
            "error_message": self.error_message,
            "authorization_state": self.authorization_state.value if self.authorization_state else None,
            "request_id": self.request_id,
        }


Subscriber = Callable[[ViewState], None]


class ViewStateStore:
    def __init__(self, initial: Optional[ViewState] = None):
        self._state = initial or ViewState()
        self._subscribers: List[Subscriber] = []
        self._lock = Lock()

    @property
    def snapshot(self) -> ViewState:
        with self._lock:
            return self._state

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback invoked with each new snapshot.

        Returns:
            A function that removes the subscription when called
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def set_region(self, region: MapRegion) -> ViewState:
        return self._update(region=region)

    def set_authorization_state(self, state: AuthorizationState) -> ViewState:
        return self._update(authorization_state=state)

    def begin_request(self, region: Optional[MapRegion] = None) -> int:
        """
        Start a new lookup and return its request id.

        When ``region`` is given it is published in the same update, so the
        displayed region always belongs to the latest request.
        """
        with self._lock:
            request_id = self._state.request_id + 1
            self._state = replace(
                self._state,
                region=region or self._state.region,
                request_id=request_id,
                status=AddressStatus.RESOLVING,
                error=None,
                error_message=None,
            )
            state = self._state
        self._notify(state)
        return request_id

    def is_current(self, request_id: int) -> bool:
        with self._lock:
            return request_id == self._state.request_id

    def publish_address(self, request_id: int, address: str) -> bool:
        """Publish a resolved address if ``request_id`` is still the latest request."""
        return self._update_if_current(
            request_id,
            address=address,
            status=AddressStatus.RESOLVED,
            error=None,
            error_message=None,
        )

    def publish_failure(self, kind: ErrorKind, message: str, request_id: Optional[int] = None) -> bool:
        """
        Record a failure while keeping the last published address.

        Without ``request_id`` the failure comes from outside a lookup (service
        disabled, permission refused) and supersedes any request in flight.
        """
        if request_id is not None:
            return self._update_if_current(
                request_id,
                status=AddressStatus.FAILED,
                error=kind,
                error_message=message,
            )

        with self._lock:
            self._state = replace(
                self._state,
                request_id=self._state.request_id + 1,
                status=AddressStatus.FAILED,
                error=kind,
                error_message=message,
            )
            state = self._state
        self._notify(state)
        return True

    def _update_if_current(self, request_id, **changes):
        with self._lock:
            if request_id != self._state.request_id:
                latest = self._state.request_id
                state = None
            else:
                self._state = replace(self._state, **changes)
                state = self._state
        if state is None:
            logger.debug(f"Dropping stale completion for request {request_id} (latest is {latest})")
            return False
        self._notify(state)
        return True

    def _update(self, **changes):
        with self._lock:
            self._state = replace(self._state, **changes)
            state = self._state
        self._notify(state)
        return state

    def _notify(self, state):
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(state)
            except Exception as e:
                logger.error(f"View state subscriber {callback!r} failed: {e}", exc_info=True)
