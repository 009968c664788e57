"""
Configuration
-----------
Runtime settings read from the environment. The Google API key is a secret
and must only ever come from GOOGLE_MAPS_API_KEY, never from source.
"""
import os

GOOGLE_GEOCODING_URL = "https://maps.googleapis.com/maps/api/geocode/json"


def get_api_key():
    return os.getenv("GOOGLE_MAPS_API_KEY", "").strip()


def get_base_url():
    return os.getenv("GEOCODING_BASE_URL") or GOOGLE_GEOCODING_URL


def get_request_timeout():
    raw = os.getenv("GEOCODING_TIMEOUT")
    if not raw:
        return 10.0
    try:
        return float(raw)
    except ValueError:
        return 10.0


def get_log_level():
    return os.getenv("LOG_LEVEL", "INFO").upper()
