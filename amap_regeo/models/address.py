from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def to_text(value: Any) -> str:
    """
    Normalize a loosely typed JSON scalar to a string.

    AMap sends the same field as a string, a number or an empty array
    depending on the location, so every variant is folded to text here.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (list, tuple)) and not value:
        return ""
    raise ValueError(f"expected a scalar value, got {type(value).__name__}")


class AddressComponent(BaseModel):
    province: str = ""
    city: str = ""
    district: str = ""
    township: str = ""
    adcode: str = ""

    @field_validator("province", "city", "district", "township", "adcode", mode="before")
    @classmethod
    def coerce_scalar(cls, value):
        return to_text(value)


class Regeocode(BaseModel):
    address_component: AddressComponent = Field(default_factory=AddressComponent, alias="addressComponent")
    formatted_address: str = ""

    @field_validator("address_component", mode="before")
    @classmethod
    def empty_component(cls, value):
        # Missing components come back as null or []
        if value is None or value == []:
            return {}
        return value

    @field_validator("formatted_address", mode="before")
    @classmethod
    def coerce_scalar(cls, value):
        return to_text(value)


class GeocodeResponse(BaseModel):
    """Raw body of a /v3/geocode/regeo call. Discarded once mapped to an AddressInfo."""
    status: str = ""
    regeocode: Regeocode = Field(default_factory=Regeocode)
    info: str = ""
    infocode: str = ""

    @field_validator("regeocode", mode="before")
    @classmethod
    def empty_regeocode(cls, value):
        if value is None or value == []:
            return {}
        return value


class AddressInfo(BaseModel):
    """Normalized address. Codes are prefixes of the 6 digit adcode."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    province: str
    province_code: str = Field(alias="provinceCode")
    city: str
    city_code: str = Field(alias="cityCode")
    district: str
    district_code: str = Field(alias="districtCode")
    address: str

    @model_validator(mode="after")
    def check_codes(self):
        if len(self.district_code) != 6:
            raise ValueError("district code must be 6 characters")
        if self.province_code != self.district_code[:2] or self.city_code != self.district_code[:4]:
            raise ValueError("province and city codes must prefix the district code")
        return self
