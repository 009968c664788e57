from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from user_location.models.location import Coordinate


class GeocodeModel(BaseModel):
    # lat/lng are aliased; attributes can be set by either name
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class PlusCode(GeocodeModel):
    compound_code: Optional[str] = None
    global_code: str


class LatLng(GeocodeModel):
    latitude: float = Field(alias="lat")
    longitude: float = Field(alias="lng")

    def to_coordinate(self):
        return Coordinate(latitude=self.latitude, longitude=self.longitude)


class Viewport(GeocodeModel):
    northeast: LatLng
    southwest: LatLng


class Geometry(GeocodeModel):
    location: LatLng
    location_type: str
    viewport: Viewport


class AddressComponent(GeocodeModel):
    long_name: str
    short_name: str
    types: List[str] = Field(default_factory=list)


class GeocodeResult(GeocodeModel):
    formatted_address: str
    place_id: str = ""
    geometry: Optional[Geometry] = None
    address_components: List[AddressComponent] = Field(default_factory=list)
    plus_code: Optional[PlusCode] = None
    types: List[str] = Field(default_factory=list)


class GeocodeResponse(GeocodeModel):
    """
    Envelope returned by the Google Geocoding API.

    ``results`` is required: a payload without it does not decode. The
    top-level plus code is informational and may be absent.
    """

    plus_code: Optional[PlusCode] = None
    results: List[GeocodeResult]
    status: str

    def first_result(self):
        if not self.results:
            return None
        return self.results[0]

    def first_address(self):
        result = self.first_result()
        if result is None:
            return None
        return result.formatted_address
