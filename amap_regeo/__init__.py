"""
amap_regeo
----------
Reverse geocoding client for the AMap (Gaode) web service API.
Turns a longitude/latitude pair into a normalized Chinese administrative address.
"""
from amap_regeo.geocoding.amap import AMapClient, batch_reverse_geocode
from amap_regeo.geocoding.errors import (
    GeocodeError, TransportError, DecodeError, ProviderError, ValidationError, WaitCancelled
)
from amap_regeo.geocoding.rate_limiter import TokenBucket
from amap_regeo.models.address import AddressInfo

__all__ = [
    "AMapClient", "batch_reverse_geocode", "TokenBucket", "AddressInfo",
    "GeocodeError", "TransportError", "DecodeError", "ProviderError", "ValidationError", "WaitCancelled",
]
