import pytest

from core.models.quantity_kind import LWM2M_PREFIX
from core.processing.quantity_mapper import map_quantity_kind


@pytest.mark.parametrize("code, expected", [
    ("3303", "Temperature"),
    ("3304", "RelativeHumidity"),
    ("3301", "Illuminance"),
    ("3302", "diwise:Presence"),
    ("3200", "diwise:DigitalInput"),
    ("3323", "Pressure"),
    ("3327", "Conductivity"),
    ("3328", "Power"),
    ("3330", "Distance"),
    ("3331", "Energy"),
    ("3424", "Volume"),
])
def test_known_codes(code: str, expected: str):
    assert map_quantity_kind(LWM2M_PREFIX + code, "") == expected


def test_matching_is_case_insensitive():
    assert map_quantity_kind("URN:OMA:LWM2M:EXT:3303", "") == "Temperature"


def test_air_quality_concentration():
    """Record name 17 on the air quality object is a concentration reading."""
    assert map_quantity_kind(LWM2M_PREFIX + "3428", "17") == "Concentration"


@pytest.mark.parametrize("name", ["", "1", "170", "temperature"])
def test_air_quality_fallback(name: str):
    assert map_quantity_kind(LWM2M_PREFIX + "3428", name) == "diwise:AirQuality"


def test_unknown_code_passes_through_unchanged():
    assert map_quantity_kind("urn:oma:lwm2m:ext:9999", "") == "urn:oma:lwm2m:ext:9999"
    assert map_quantity_kind("Vendor:Thing", "x") == "Vendor:Thing"


def test_empty_code_maps_to_empty():
    assert map_quantity_kind("", "") == ""
