"""
Location Module
-------------
Tracks the platform location authorization state and drives reverse geocoding
whenever access is granted.
"""
