import concurrent.futures
import copy
import json

import pytest

from user_location.geocoding.google import GoogleReverseGeocoder
from user_location.state.store import ViewStateStore

SANTA_CLARA_ADDRESS = "500 El Camino Real, Santa Clara, CA 95053, USA"

SAMPLE_RESPONSE = {
    "plus_code": {
        "compound_code": "FW2P+X4 Santa Clara, CA, USA",
        "global_code": "849VFW2P+X4",
    },
    "results": [
        {
            "address_components": [
                {"long_name": "500", "short_name": "500", "types": ["street_number"]},
                {"long_name": "El Camino Real", "short_name": "El Camino Real", "types": ["route"]},
                {"long_name": "Santa Clara", "short_name": "Santa Clara", "types": ["locality", "political"]},
                {"long_name": "California", "short_name": "CA", "types": ["administrative_area_level_1", "political"]},
                {"long_name": "95053", "short_name": "95053", "types": ["postal_code"]},
            ],
            "formatted_address": SANTA_CLARA_ADDRESS,
            "geometry": {
                "location": {"lat": 37.3496418, "lng": -121.9389875},
                "location_type": "ROOFTOP",
                "viewport": {
                    "northeast": {"lat": 37.3509907802915, "lng": -121.9376385197085},
                    "southwest": {"lat": 37.3482928197085, "lng": -121.9403364802915},
                },
            },
            "place_id": "ChIJH1XU7ug0joARoSR4u4YCx0Y",
            "plus_code": {
                "compound_code": "929J+VC Santa Clara, CA, USA",
                "global_code": "849V929J+VC",
            },
            "types": ["street_address"],
        }
    ],
    "status": "OK",
}


class FakeResponse:
    def __init__(self, body, status_code=200):
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        self.text = body
        self.content = body.encode("utf-8")
        self.status_code = status_code


class ImmediateExecutor(concurrent.futures.Executor):
    """Runs submitted work inline so tests observe results synchronously."""

    def __init__(self):
        self.shutdown_calls = 0

    def submit(self, fn, *args, **kwargs):
        future = concurrent.futures.Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future

    def shutdown(self, wait=True, **kwargs):
        self.shutdown_calls += 1


@pytest.fixture
def sample_payload():
    return copy.deepcopy(SAMPLE_RESPONSE)


@pytest.fixture
def store():
    return ViewStateStore()


@pytest.fixture
def geocoder(store):
    return GoogleReverseGeocoder(
        store=store,
        api_key="test-key",
        base_url="https://maps.googleapis.com/maps/api/geocode/json",
        timeout=5,
    )


@pytest.fixture
def fake_get(monkeypatch):
    """Replace requests.get; set ``fake_get.response`` or ``fake_get.error``."""

    class _FakeGet:
        def __init__(self):
            self.calls = []
            self.response = FakeResponse(SAMPLE_RESPONSE)
            self.error = None

        def __call__(self, url, **kwargs):
            self.calls.append((url, kwargs))
            if self.error is not None:
                raise self.error
            return self.response

    fake = _FakeGet()
    monkeypatch.setattr("requests.get", fake)
    return fake
