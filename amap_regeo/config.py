"""
Configuration Module
------------------
Reads client settings from the environment.
"""
import os

# Credential for the AMap web service API
AMAP_KEY = os.getenv("AMAP_KEY")

AMAP_REGEO_URL = os.getenv("AMAP_REGEO_URL", "https://restapi.amap.com/v3/geocode/regeo")

# Seconds before an outbound request is abandoned
REQUEST_TIMEOUT = float(os.getenv("AMAP_REQUEST_TIMEOUT", "10"))

# Tokens per second granted to a client, bucket capacity is always one
RATE_LIMIT = float(os.getenv("AMAP_RATE_LIMIT", "1"))
