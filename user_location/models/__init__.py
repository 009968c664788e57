"""
Data Models Module
----------------
Contains the location value types, the Pydantic models for the Google
Geocoding API response and the status/error enums published to the view.
"""
