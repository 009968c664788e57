from user_location.models.location import DEFAULT_SPAN, PENDING_ADDRESS, Coordinate, MapRegion
from user_location.models.status import AddressStatus, ErrorKind
from user_location.state.store import ViewStateStore


def test_initial_snapshot():
    state = ViewStateStore().snapshot

    assert state.address == PENDING_ADDRESS
    assert state.status == AddressStatus.PENDING
    assert state.authorization_state is None
    assert state.request_id == 0


def test_subscribers_receive_each_snapshot():
    store = ViewStateStore()
    seen = []
    store.subscribe(seen.append)

    region = MapRegion(center=Coordinate(1.0, 2.0), span=DEFAULT_SPAN)
    store.set_region(region)
    request_id = store.begin_request()
    store.publish_address(request_id, "1 Main St")

    assert [s.status for s in seen] == [AddressStatus.PENDING, AddressStatus.RESOLVING, AddressStatus.RESOLVED]
    assert seen[0].region == region
    assert seen[-1].address == "1 Main St"


def test_unsubscribe_stops_notifications():
    store = ViewStateStore()
    seen = []
    unsubscribe = store.subscribe(seen.append)

    unsubscribe()
    store.begin_request()

    assert seen == []


def test_failing_subscriber_does_not_block_others():
    store = ViewStateStore()
    seen = []

    def broken(state):
        raise RuntimeError("render failed")

    store.subscribe(broken)
    store.subscribe(seen.append)
    store.begin_request()

    assert len(seen) == 1


def test_stale_completion_is_dropped():
    store = ViewStateStore()
    first = store.begin_request()
    second = store.begin_request()

    assert store.publish_address(first, "old address") is False
    assert store.publish_failure(ErrorKind.DECODE_FAILURE, "late", request_id=first) is False
    assert store.snapshot.address == PENDING_ADDRESS
    assert store.snapshot.status == AddressStatus.RESOLVING

    assert store.publish_address(second, "new address") is True
    assert store.snapshot.address == "new address"


def test_failure_keeps_address_and_next_request_clears_error():
    store = ViewStateStore()
    store.publish_address(store.begin_request(), "1 Main St")

    store.publish_failure(ErrorKind.DECODE_FAILURE, "bad json", request_id=store.begin_request())

    assert store.snapshot.address == "1 Main St"
    assert store.snapshot.error == ErrorKind.DECODE_FAILURE

    store.begin_request()

    assert store.snapshot.error is None
    assert store.snapshot.error_message is None
    assert store.snapshot.status == AddressStatus.RESOLVING


def test_untagged_failure_invalidates_request_in_flight():
    store = ViewStateStore()
    request_id = store.begin_request()

    store.publish_failure(ErrorKind.PERMISSION_DENIED, "denied")

    assert store.is_current(request_id) is False
    assert store.publish_address(request_id, "1 Main St") is False


def test_to_dict():
    store = ViewStateStore()
    store.publish_failure(ErrorKind.SERVICE_DISABLED, "off")

    data = store.snapshot.to_dict()

    assert data["address"] == PENDING_ADDRESS
    assert data["status"] == "failed"
    assert data["error"] == "service_disabled"
    assert data["region"]["center"] == {"latitude": 37.331516, "longitude": -121.891054}
    assert data["authorization_state"] is None
