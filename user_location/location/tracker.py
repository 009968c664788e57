"""
Location Authorization Tracker
----------------------------
Reacts to platform authorization changes. When access is granted it centres
the map on the current position (or the last known one), remembers that
position and starts a background reverse geocoding request for it.
"""
import concurrent.futures
import logging
from threading import RLock

from user_location.location.service import LocationService
from user_location.models.location import (
    AUTHORIZED_STATES,
    DEFAULT_SPAN,
    STARTING_LOCATION,
    AuthorizationState,
    MapRegion,
    format_coordinates,
)
from user_location.models.status import ErrorKind

# Get logger
logger = logging.getLogger(__name__)


class LocationAuthorizationTracker:
    def __init__(self, service: LocationService, geocoder, store, executor=None):
        self.service = service
        self.geocoder = geocoder
        self.store = store
        self._executor = executor or concurrent.futures.ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="geocoder"
        )
        self._previous_coordinates = STARTING_LOCATION
        self._lock = RLock()

    @property
    def previous_coordinates(self):
        with self._lock:
            return self._previous_coordinates

    def initialize(self):
        """
        Hook the tracker up to the location service.

        Reports SERVICE_DISABLED and stops when location services are off.
        Otherwise registers the authorization handler and evaluates the
        current authorization state once.

        Returns:
            The geocoding Future if the current state already grants access
        """
        if not self.service.location_services_enabled():
            logger.warning("Location services are turned off; ask the user to enable them")
            self.store.publish_failure(ErrorKind.SERVICE_DISABLED, "Location services are disabled")
            return None

        self.service.set_authorization_handler(self.on_authorization_changed)
        return self.on_authorization_changed(self.service.current_authorization_state())

    def on_authorization_changed(self, state=None):
        """
        Route an authorization change to its handler.

        Args:
            state: New AuthorizationState; queried from the service when omitted

        Returns:
            Future of the geocoding request started for an authorized state,
            otherwise None
        """
        if state is None:
            state = self.service.current_authorization_state()

        try:
            state = AuthorizationState(state)
        except ValueError:
            logger.debug(f"Ignoring unknown authorization state {state!r}")
            return None

        self.store.set_authorization_state(state)

        if state == AuthorizationState.UNDETERMINED:
            self.service.request_permission()
        elif state == AuthorizationState.RESTRICTED:
            logger.warning("Location is restricted, likely due to parental controls")
            self.store.publish_failure(
                ErrorKind.PERMISSION_RESTRICTED, "Location access is restricted on this device"
            )
        elif state == AuthorizationState.DENIED:
            logger.warning("Location permission denied; it can be changed in Settings")
            self.store.publish_failure(ErrorKind.PERMISSION_DENIED, "Location permission was denied")
        elif state in AUTHORIZED_STATES:
            return self._locate_and_resolve()
        return None

    def _locate_and_resolve(self):
        # Re-entrant: store subscribers may deliver another event on this thread
        with self._lock:
            coordinate = self.service.current_coordinate() or self._previous_coordinates
            # Kept as fallback for the next event without a fix
            self._previous_coordinates = coordinate
            coordinates = format_coordinates(coordinate)
            request_id = self.store.begin_request(region=MapRegion(center=coordinate, span=DEFAULT_SPAN))

        logger.info(f"Resolving address for ({coordinates}), request {request_id}")
        return self._executor.submit(self.geocoder.resolve, coordinates, request_id)

    def shutdown(self, wait=True):
        self._executor.shutdown(wait=wait)
