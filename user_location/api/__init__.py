"""
API Module
---------
Provides RESTful API endpoints for the location view state using FastAPI.
Features include:
- Reading the current map region and address
- Pushing authorization and position changes into the location service
- Geocoding addresses from coordinates
"""
