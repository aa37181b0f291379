"""Maps Identity - country resolution and batch IP geolocation for maps tooling

Public API for resolving country codes, searching countries, and geolocating
IP addresses with bounded concurrency.

Usage:
    from mapsidentity import country_identifier, search_countries, geolocate_ips

    # Resolve an ISO alpha-2 / alpha-3 code
    result = country_identifier("USA")   # Found(record=CountryRecord(code='US', ...), ...)

    # Misses carry suggestions instead of raising
    result = country_identifier("UX")    # NotFound(query='UX', suggestions=(...))

    # Ranked search over names and codes
    hits = search_countries("united", max_results=5)

    # Country for many IPs, at most 10 lookups in flight
    summary = geolocate_ips(["8.8.8.8", "1.1.1.1"])
"""

__version__ = "0.0.1"

# ============================================================================
# Country Resolution API
# ============================================================================

from .countries.countryapi import (
    load_countries,       # Load the country corpus (cached)
    country_identifier,   # Primary API - resolve code -> Found / NotFound
    country_info,         # Code lookup as a response envelope
    search_countries,     # Ranked search over names and codes
    list_countries,       # Corpus as a DataFrame
)

from .countries.countryidentity import (
    calculate_string_similarity,  # Normalized Levenshtein similarity
    resolve_by_code,              # Resolution over an explicit corpus
    search,                       # Search over an explicit corpus
)

from .countries.countrymodels import (
    CountryRecord,
    MatchMethod,
    MatchType,
    Found,
    NotFound,
    SearchResult,
)

# ============================================================================
# Batch Processing API
# ============================================================================

from .batch.batchprocessor import (
    Ok,
    Err,
    BatchItem,
    process_batch,   # Bounded-concurrency fan-out over async operations
    batch_summary,   # Success/failure accounting for a finished batch
)

# ============================================================================
# Geolocation API
# ============================================================================

from .geolocation.geolocationapi import (
    geolocate_ip,          # Country for one IP address
    geolocate_ips,         # Country for many IP addresses (sync)
    geolocate_ips_async,   # Country for many IP addresses (async)
)

from .geolocation.ipvalidate import (
    describe_ip,           # Address family / private / loopback facts
)

__all__ = [
    # Version
    "__version__",

    # ========================================================================
    # PRIMARY APIS - Start here!
    # ========================================================================
    "country_identifier",   # Resolve code -> Found / NotFound
    "search_countries",     # Ranked country search
    "geolocate_ips",        # Batch IP -> country

    # ========================================================================
    # Country Resolution
    # ========================================================================
    "load_countries",
    "country_info",
    "list_countries",
    "calculate_string_similarity",
    "resolve_by_code",
    "search",
    "CountryRecord",
    "MatchMethod",
    "MatchType",
    "Found",
    "NotFound",
    "SearchResult",

    # ========================================================================
    # Batch Processing
    # ========================================================================
    "Ok",
    "Err",
    "BatchItem",
    "process_batch",
    "batch_summary",

    # ========================================================================
    # Geolocation
    # ========================================================================
    "geolocate_ip",
    "geolocate_ips_async",
    "describe_ip",
]
