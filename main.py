"""
Main entrypoint for the user location view-model.

Usage:
    GOOGLE_MAPS_API_KEY=... python main.py [LATITUDE LONGITUDE]

Simulates a device that grants when-in-use location access, lets the tracker
centre the map on the given position (the starting location when omitted) and
prints the resolved street address.

The HTTP API can be served with `uvicorn user_location.api.app:app`.
"""
import argparse
import logging

from user_location import config
from user_location.geocoding.google import GoogleReverseGeocoder
from user_location.location.service import SimulatedLocationService
from user_location.location.tracker import LocationAuthorizationTracker
from user_location.models.location import AuthorizationState, Coordinate
from user_location.models.status import AddressStatus
from user_location.state.store import ViewStateStore

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Resolve the address of a device location")
    parser.add_argument("latitude", type=float, nargs="?")
    parser.add_argument("longitude", type=float, nargs="?")
    args = parser.parse_args(argv)
    if (args.latitude is None) != (args.longitude is None):
        parser.error("latitude and longitude must be given together")
    return args


def main(argv=None):
    """
    Run one authorization cycle and print the outcome.

    Returns:
        0 when an address was resolved, 1 otherwise
    """
    logging.basicConfig(
        level=config.get_log_level(),
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()]
    )
    args = parse_args(argv)

    coordinate = None
    if args.latitude is not None and args.longitude is not None:
        coordinate = Coordinate(latitude=args.latitude, longitude=args.longitude)

    store = ViewStateStore()
    service = SimulatedLocationService(
        coordinate=coordinate,
        grant_on_request=AuthorizationState.AUTHORIZED_WHEN_IN_USE,
    )
    tracker = LocationAuthorizationTracker(service, GoogleReverseGeocoder(store=store), store)

    try:
        tracker.initialize()
    finally:
        # Waits for the lookup started by the permission grant
        tracker.shutdown(wait=True)

    state = store.snapshot
    center = state.region.center
    print(f"Map centred on {center.latitude},{center.longitude}")
    if state.status == AddressStatus.RESOLVED:
        print(f"Address: {state.address}")
        return 0

    error = state.error.value if state.error else "unknown"
    print(f"Address lookup failed ({error}): {state.error_message}")
    return 1


if __name__ == "__main__":
    exit_code = main()
    print(f"Exiting with code {exit_code}")
    raise SystemExit(exit_code)
