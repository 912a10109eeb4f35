"""
Test slug and country code normalization
"""

import pytest

from parts_catalog.utils.normalization import clean_text, is_valid_country_code, normalize_country_code, slugify


@pytest.mark.parametrize(
    "name,expected",
    [
        ("Tesla", "tesla"),
        ("Mercedes-Benz", "mercedes-benz"),
        ("Rolls  Royce", "rolls-royce"),
        ("  Alfa Romeo!  ", "alfa-romeo"),
        ("Škoda Auto", "koda-auto"),
        ("BMW (Bayerische) Motoren", "bmw-bayerische-motoren"),
        ("---", ""),
    ],
)
def test_slugify(name, expected):
    assert slugify(name) == expected


def test_slugify_is_deterministic():
    assert slugify("Aston Martin") == slugify("Aston Martin")


def test_normalize_country_code():
    assert normalize_country_code("us") == "US"
    assert normalize_country_code(" de ") == "DE"
    assert normalize_country_code("") is None
    assert normalize_country_code(None) is None


@pytest.mark.parametrize("code,valid", [("US", True), ("JP", True), ("USA", False), ("U1", False), ("u", False)])
def test_is_valid_country_code(code, valid):
    assert is_valid_country_code(code) is valid


def test_clean_text():
    assert clean_text("  Tesla Inc.  ") == "Tesla Inc."
    assert clean_text("   ") is None
    assert clean_text(None) is None
