from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class CoordinateSpan:
    latitude_delta: float
    longitude_delta: float


@dataclass(frozen=True)
class MapRegion:
    center: Coordinate
    span: CoordinateSpan


# Apple Park, used until the first fix arrives
STARTING_LOCATION = Coordinate(latitude=37.331516, longitude=-121.891054)
DEFAULT_SPAN = CoordinateSpan(latitude_delta=0.01, longitude_delta=0.01)
DEFAULT_REGION = MapRegion(center=STARTING_LOCATION, span=DEFAULT_SPAN)

PENDING_ADDRESS = "Pending Address"


class AuthorizationState(str, Enum):
    """Location permission level reported by the platform."""

    UNDETERMINED = "undetermined"
    RESTRICTED = "restricted"
    DENIED = "denied"
    AUTHORIZED_ALWAYS = "authorized_always"
    AUTHORIZED_WHEN_IN_USE = "authorized_when_in_use"


AUTHORIZED_STATES = frozenset({
    AuthorizationState.AUTHORIZED_ALWAYS,
    AuthorizationState.AUTHORIZED_WHEN_IN_USE,
})


def _decimal_string(value):
    # Shortest round-trip digits, always in positional notation ("0.00005", not "5e-05")
    return format(Decimal(repr(float(value))), "f")


def format_coordinates(coordinate):
    """
    Render a coordinate as the "lat,lng" string the geocoding API expects.

    Uses the shortest round-trip decimal digits of each float written out in
    positional notation, so the output never depends on the process locale
    and never switches to exponent form for values close to zero.

    Args:
        coordinate: Coordinate to render

    Returns:
        String such as "37.331516,-121.891054"
    """
    return f"{_decimal_string(coordinate.latitude)},{_decimal_string(coordinate.longitude)}"
