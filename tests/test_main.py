import json

from amap_regeo import config
from amap_regeo.geocoding.amap import AMapClient
from amap_regeo.geocoding.errors import ProviderError
from amap_regeo.models.address import AddressInfo

import main


def test_prints_address_as_json(monkeypatch, capsys):
    monkeypatch.setattr(config, "AMAP_KEY", "env-key")
    address = AddressInfo(
        province="广东省", province_code="44", city="广东省", city_code="4403",
        district="某街道", district_code="440305", address="某路1号",
    )
    monkeypatch.setattr(AMapClient, "reverse_geocode", lambda self, identifier, lng, lat: address)

    assert main.main(["store-1", "113.93", "22.53"]) == 0

    printed = json.loads(capsys.readouterr().out)
    assert printed["districtCode"] == "440305"
    assert printed["city"] == "广东省"


def test_reports_provider_failure(monkeypatch, capsys):
    monkeypatch.setattr(config, "AMAP_KEY", "env-key")

    def fail(self, identifier, lng, lat):
        raise ProviderError("INVALID_USER_KEY", "10001")

    monkeypatch.setattr(AMapClient, "reverse_geocode", fail)

    assert main.main(["store-1", "113.93", "22.53"]) == 1
    assert "INVALID_USER_KEY(10001)" in capsys.readouterr().out


def test_missing_key(monkeypatch, capsys):
    monkeypatch.setattr(config, "AMAP_KEY", None)

    assert main.main(["store-1", "113.93", "22.53"]) == 1
    assert "AMAP_KEY" in capsys.readouterr().out


def test_wrong_argument_count(capsys):
    assert main.main(["store-1"]) == 1
    assert "Usage" in capsys.readouterr().out
