"""
Google Reverse Geocoding
----------------------
Resolves a "lat,lng" string to the first rooftop street address returned by
the Google Geocoding API and publishes it to the view state store.
"""
import logging
import math
from typing import Optional

import requests
from pydantic import ValidationError

from user_location import config
from user_location.models.geocode import GeocodeResponse
from user_location.models.status import ErrorKind

# Constants
LOCATION_TYPE = "ROOFTOP"
RESULT_TYPE = "street_address"

# Get logger
logger = logging.getLogger(__name__)


class GeocodingError(Exception):
    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


def parse_coordinate_string(coordinates: str):
    """
    Validate a "lat,lng" string.

    Returns:
        Tuple of (latitude, longitude)

    Raises:
        GeocodingError: MALFORMED_REQUEST_URL when the string is not two
        finite decimals within the latitude/longitude ranges
    """
    parts = (coordinates or "").split(",")
    if len(parts) != 2:
        raise GeocodingError(ErrorKind.MALFORMED_REQUEST_URL, f"Malformed coordinates: {coordinates!r}")
    try:
        latitude, longitude = float(parts[0]), float(parts[1])
    except ValueError:
        raise GeocodingError(ErrorKind.MALFORMED_REQUEST_URL, f"Malformed coordinates: {coordinates!r}")
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise GeocodingError(ErrorKind.MALFORMED_REQUEST_URL, f"Malformed coordinates: {coordinates!r}")
    if not (-90 <= latitude <= 90 and -180 <= longitude <= 180):
        raise GeocodingError(ErrorKind.MALFORMED_REQUEST_URL, f"Coordinates out of range: {coordinates!r}")
    return latitude, longitude


class GoogleReverseGeocoder:
    """Google Geocoding API client bound to a view state store."""

    def __init__(self, store, api_key=None, base_url=None, timeout=None):
        self.store = store
        self.api_key = api_key if api_key is not None else config.get_api_key()
        self.base_url = base_url or config.get_base_url()
        self.timeout = timeout if timeout is not None else config.get_request_timeout()
        if not self.api_key:
            logger.warning("Google Maps API key not configured - set GOOGLE_MAPS_API_KEY to enable geocoding")

    def build_params(self, coordinates: str):
        parse_coordinate_string(coordinates)
        if not self.api_key:
            raise GeocodingError(ErrorKind.MISSING_API_KEY, "Missing Google Maps API key")
        return {
            "latlng": coordinates.strip(),
            "location_type": LOCATION_TYPE,
            "result_type": RESULT_TYPE,
            "key": self.api_key,
        }

    def build_request_url(self, coordinates: str) -> str:
        params = self.build_params(coordinates)
        return requests.Request("GET", self.base_url, params=params).prepare().url

    def fetch(self, coordinates: str) -> GeocodeResponse:
        """
        Call the geocoding endpoint and decode the response envelope.

        The HTTP status code is not interpreted; the body decides. Error
        responses from Google still carry a ``status`` and an empty result
        list.
        """
        params = self.build_params(coordinates)

        try:
            response = requests.get(self.base_url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise GeocodingError(ErrorKind.REQUEST_FAILED, f"Network error for coordinates ({coordinates}): {e}")

        body = response.content
        if not body:
            raise GeocodingError(
                ErrorKind.REQUEST_FAILED,
                f"Empty response (HTTP {response.status_code}) for coordinates ({coordinates})",
            )

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Geocoding response for ({coordinates}): {response.text}")

        try:
            return GeocodeResponse.model_validate_json(body)
        except ValidationError as e:
            raise GeocodingError(ErrorKind.DECODE_FAILURE, f"Could not decode JSON response: {e.errors()}")

    def lookup(self, coordinates: str) -> str:
        """
        Resolve coordinates to the first formatted address.

        Raises:
            GeocodingError: on any failure, EMPTY_RESULT_SET when the provider
            returned no results
        """
        decoded = self.fetch(coordinates)
        address = decoded.first_address()
        if address is None:
            raise GeocodingError(
                ErrorKind.EMPTY_RESULT_SET,
                f"No address found for coordinates ({coordinates}) (status {decoded.status})",
            )
        return address

    def resolve(self, coordinates: str, request_id: Optional[int] = None) -> None:
        """
        Look up ``coordinates`` and publish the outcome to the store.

        Failures are logged and published as an error on the store; the
        previously published address is kept. Nothing is raised.
        """
        if request_id is None:
            request_id = self.store.begin_request()

        try:
            address = self.lookup(coordinates)
        except GeocodingError as e:
            logger.error(f"ERROR: {e.kind.value}: {e.message}")
            self.store.publish_failure(e.kind, e.message, request_id=request_id)
            return

        if self.store.publish_address(request_id, address):
            logger.info(f"Successfully geocoded coordinates ({coordinates})")
        else:
            logger.debug(f"Discarded address for superseded request {request_id}")
