import json
import logging
from unittest.mock import Mock

import pytest
import requests

from amap_regeo.geocoding.amap import AMapClient
from amap_regeo.geocoding.rate_limiter import TokenBucket


def make_response(payload, status_code=200):
    response = requests.Response()
    response.status_code = status_code
    if isinstance(payload, bytes):
        response._content = payload
    else:
        response._content = json.dumps(payload, ensure_ascii=False).encode("utf-8")
    return response


def regeo_body(province="广东省", city="深圳市", district="南山区", township="粤海街道",
               adcode="440305", formatted_address="广东省深圳市南山区某路1号"):
    return {
        "status": "1",
        "info": "OK",
        "infocode": "10000",
        "regeocode": {
            "addressComponent": {
                "province": province,
                "city": city,
                "district": district,
                "township": township,
                "adcode": adcode,
            },
            "formatted_address": formatted_address,
        },
    }


@pytest.fixture
def test_logger():
    return logging.getLogger("tests.amap")


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def client(session, test_logger):
    return AMapClient("test-key", test_logger, limiter=TokenBucket(rate=1000), session=session)
