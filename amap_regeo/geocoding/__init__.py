"""
Geocoding Module
--------------
Handles reverse geocoding operations to convert geographic coordinates to Chinese administrative addresses.
Uses the AMap regeo API behind a token bucket rate limiter.
"""
