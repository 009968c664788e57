from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field
import logging

from user_location import config
from user_location.geocoding.google import GeocodingError, GoogleReverseGeocoder
from user_location.location.service import SimulatedLocationService
from user_location.location.tracker import LocationAuthorizationTracker
from user_location.models.location import AuthorizationState, Coordinate, format_coordinates
from user_location.models.status import ErrorKind
from user_location.state.store import ViewStateStore

# Configure logging
logging.basicConfig(
    level=config.get_log_level(),
    format="%(asctime)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)

view_state = ViewStateStore()
location_service = SimulatedLocationService()
geocoder = GoogleReverseGeocoder(store=view_state)
tracker = LocationAuthorizationTracker(location_service, geocoder, view_state)


@asynccontextmanager
async def lifespan(app):
    # Uses the module globals bound at startup
    tracker.initialize()
    logger.info("Location tracker started")
    try:
        yield
    finally:
        tracker.shutdown(wait=False)
        logger.info("Location tracker stopped")


app = FastAPI(
    title="User Location API",
    description="Map region and reverse geocoded address for the current device location",
    version="1.0.0",
    lifespan=lifespan
)

# HTTP status for each lookup failure
ERROR_STATUS_CODES = {
    ErrorKind.MALFORMED_REQUEST_URL: 400,
    ErrorKind.EMPTY_RESULT_SET: 404,
    ErrorKind.REQUEST_FAILED: 502,
    ErrorKind.DECODE_FAILURE: 502,
    ErrorKind.MISSING_API_KEY: 503,
}


class CoordinateIn(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class AuthorizationIn(BaseModel):
    state: AuthorizationState


@app.get("/")
def read_root():
    return {"message": "Welcome to the User Location API"}


@app.get("/state")
def get_state():
    return view_state.snapshot.to_dict()


@app.post("/location")
def set_location(coordinate: CoordinateIn):
    """
    Set the position the location service reports as its live fix.
    Takes effect on the next authorization change.
    """
    location_service.set_coordinate(Coordinate(latitude=coordinate.latitude, longitude=coordinate.longitude))
    return {
        "message": "Location updated",
        "latitude": coordinate.latitude,
        "longitude": coordinate.longitude
    }


@app.post("/authorization")
def change_authorization(body: AuthorizationIn):
    """
    Deliver an authorization change to the tracker. An authorized state starts
    a background address lookup whose outcome appears on /state.
    """
    try:
        future = location_service.set_authorization_state(body.state)
        return {
            "message": f"Authorization changed to {body.state.value}",
            "status": "processing" if future is not None else "done",
            "state": view_state.snapshot.to_dict()
        }
    except Exception as e:
        logger.error(f"Error changing authorization: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/geocode")
def geocode(latitude: float, longitude: float):
    """Resolve a coordinate directly without touching the view state."""
    coordinates = format_coordinates(Coordinate(latitude=latitude, longitude=longitude))
    try:
        address = geocoder.lookup(coordinates)
    except GeocodingError as e:
        logger.error(f"Error geocoding ({coordinates}): {e.message}")
        raise HTTPException(
            status_code=ERROR_STATUS_CODES.get(e.kind, 500),
            detail={"error": e.kind.value, "message": e.message}
        )
    return {"coordinates": coordinates, "address": address}
