"""
Geocoding Module
--------------
Handles reverse geocoding operations to convert geographic coordinates to human-readable addresses.
Uses the Google Geocoding API restricted to rooftop street addresses.
"""
