import pytest
from app.mapping.country_mapper import CountryMapper

DESTINATIONS = ["France", "Germany", "Korea, South", "United Kingdom", "United States"]


@pytest.mark.parametrize("value, expected", [
    ("France", "France"),
    ("  germany ", "Germany"),
    ("korea, south", "Korea, South"),
    ("FR", "France"),
    ("DEU", "Germany"),
    ("276", "Germany"),
    ("USA", "United States"),
    ("GB", "United Kingdom"),
    ("KR", "Korea, South"),
    ("KOR", "Korea, South"),
    ("410", "Korea, South"),
])
def test_resolve(value, expected):
    assert CountryMapper.resolve(value, DESTINATIONS) == expected


@pytest.mark.parametrize("value", ["Atlantis", "XX", "JP", ""])
def test_resolve_unknown(value):
    with pytest.raises(ValueError):
        CountryMapper.resolve(value, DESTINATIONS)


def test_convert_code_to_names():
    assert "France" in CountryMapper.convert_code_to_names("FRA")


def test_convert_invalid_code():
    with pytest.raises(ValueError):
        CountryMapper.convert_code_to_names("ZZZ")


def test_common_name_preferred_by_tariff():
    assert CountryMapper.resolve("KOR", ["South Korea", "Japan"]) == "South Korea"
    assert "Korea, South" in CountryMapper.convert_code_to_names("KR")
