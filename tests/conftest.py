"""Shared test fixtures for mapsidentity tests."""

import pytest

from mapsidentity.countries.countryapi import clear_cache
from mapsidentity.countries.countrymodels import CountryRecord


@pytest.fixture
def small_corpus():
    """A hand-built corpus so resolution tests do not depend on pycountry's naming."""
    return (
        CountryRecord("AE", "United Arab Emirates"),
        CountryRecord("CA", "Canada"),
        CountryRecord("CI", "Côte d'Ivoire"),
        CountryRecord("DE", "Germany"),
        CountryRecord("FR", "France"),
        CountryRecord("GB", "United Kingdom"),
        CountryRecord("TZ", "Tanzania, United Republic of"),
        CountryRecord("UA", "Ukraine"),
        CountryRecord("US", "United States"),
        CountryRecord("UM", "United States Minor Outlying Islands"),
    )


@pytest.fixture
def sample_codes():
    """Codes as users type them and the alpha-2 code they should resolve to."""
    return {
        "US": "US",
        "us": "US",
        "USA": "US",
        "usa": "US",
        "GBR": "GB",
        "DEU": "DE",
        "fra": "FR",
        "Ca": "CA",
    }


@pytest.fixture(autouse=True)
def fresh_country_cache(monkeypatch):
    """Isolate tests from cached corpora and from a developer's environment."""
    monkeypatch.delenv("MAPSIDENTITY_COUNTRIES_PATH", raising=False)
    clear_cache()
    yield
    clear_cache()
