import pytest

from lead_importer.countries import (
    PycountryLookup,
    coerce_numeric_country_code,
    convert_country_code_to_alpha2,
    try_convert_country_code_to_alpha2,
)


@pytest.fixture()
def lookup():
    return PycountryLookup()


@pytest.mark.parametrize("code", ["US", "us", "GB", "USA", "gbr", "840", "004", "4"])
def test_is_valid_code_accepts_all_representations(lookup, code):
    assert lookup.is_valid_code(code)


@pytest.mark.parametrize("code", ["", "  ", "XX", "XXX", "999", "INVALID", "U5"])
def test_is_valid_code_rejects_unknown_codes(lookup, code):
    assert not lookup.is_valid_code(code)


def test_numeric_to_alpha2(lookup):
    assert lookup.numeric_to_alpha2("840") == "US"
    assert lookup.numeric_to_alpha2("250") == "FR"
    assert lookup.numeric_to_alpha2("999") is None
    assert lookup.numeric_to_alpha2("USA") is None


def test_alpha3_to_alpha2(lookup):
    assert lookup.alpha3_to_alpha2("DEU") == "DE"
    assert lookup.alpha3_to_alpha2("deu") == "DE"
    assert lookup.alpha3_to_alpha2("XXX") is None
    assert lookup.alpha3_to_alpha2("DE") is None


def test_coerce_numeric_country_code_only_touches_numbers(lookup):
    assert coerce_numeric_country_code("840", lookup) == "US"
    assert coerce_numeric_country_code("36", lookup) == "AU"
    assert coerce_numeric_country_code("999", lookup) == "999"
    assert coerce_numeric_country_code("AUS", lookup) == "AUS"
    assert coerce_numeric_country_code("garbage", lookup) == "garbage"


def test_bulk_import_conversion_handles_alpha3(lookup):
    assert convert_country_code_to_alpha2("AUS", lookup) == "AU"
    assert convert_country_code_to_alpha2("36", lookup) == "AU"
    assert convert_country_code_to_alpha2("AU", lookup) == "AU"
    assert try_convert_country_code_to_alpha2("aus", lookup) == "AU"
    assert try_convert_country_code_to_alpha2("au", lookup) == "AU"
    assert try_convert_country_code_to_alpha2("XXX", lookup) is None
    assert try_convert_country_code_to_alpha2("INVALID", lookup) is None
