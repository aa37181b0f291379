"""Country code resolution and country search."""

from mapsidentity.countries.countryapi import (
    load_countries,
    load_code_aliases,
    country_identifier,
    country_info,
    search_countries,
    list_countries,
)
from mapsidentity.countries.countryidentity import (
    calculate_string_similarity,
    resolve_by_code,
    search,
)
from mapsidentity.countries.countrymodels import (
    CountryRecord,
    MatchMethod,
    MatchType,
    Found,
    NotFound,
    Suggestion,
    SearchMatch,
    SearchResult,
)

__all__ = [
    "load_countries",
    "load_code_aliases",
    "country_identifier",
    "country_info",
    "search_countries",
    "list_countries",
    "calculate_string_similarity",
    "resolve_by_code",
    "search",
    "CountryRecord",
    "MatchMethod",
    "MatchType",
    "Found",
    "NotFound",
    "Suggestion",
    "SearchMatch",
    "SearchResult",
]
