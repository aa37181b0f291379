"""Country resolution API.

Public, cached entry points over countryidentity. The corpus is loaded once
per process and shared read-only by every call.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

import pandas as pd

try:
    import pycountry
except ImportError as e:
    raise ImportError("pycountry not installed. pip install pycountry") from e

from mapsidentity.countries.countryidentity import (
    resolve_by_code,
    search,
)
from mapsidentity.countries.countrymodels import (
    CountryRecord,
    ResolutionResult,
    SearchResult,
)
from mapsidentity.countries.countrynormalize import THREE_TO_TWO
from mapsidentity.countries.data.build_countries import build_country_frame
from mapsidentity.utils.dataloader import (
    find_data_file,
    format_not_found_error,
    load_parquet_or_csv,
)
from mapsidentity.utils.validation import validate_range, validate_string_input

logger = logging.getLogger(__name__)

COUNTRIES_PATH_ENV = "MAPSIDENTITY_COUNTRIES_PATH"
MAX_SEARCH_RESULTS = 50


def _records_from_frame(df: pd.DataFrame) -> Tuple[CountryRecord, ...]:
    missing = [col for col in ("code", "name") if col not in df.columns]
    if missing:
        raise ValueError(f"Country data is missing required column(s): {', '.join(missing)}")

    df = df[["code", "name"]].dropna().astype(str)
    df["code"] = df["code"].str.strip().str.upper()
    df["name"] = df["name"].str.strip()
    df = df[(df["code"] != "") & (df["name"] != "")]
    df = df.drop_duplicates(subset="code", keep="first")

    return tuple(CountryRecord(code, name) for code, name in df.itertuples(index=False))


def _records_from_pycountry() -> Tuple[CountryRecord, ...]:
    return _records_from_frame(build_country_frame())


@lru_cache(maxsize=1)
def load_countries(path: Optional[Union[str, Path]] = None) -> Tuple[CountryRecord, ...]:
    """Load the country corpus.

    Search order:
      1. Explicit `path` (parquet or csv with `code` and `name` columns)
      2. MAPSIDENTITY_COUNTRIES_PATH environment variable
      3. Packaged data: countries/data/countries.parquet or countries.csv
      4. pycountry, built in memory (ordered by code)

    Codes are upper-cased and duplicate codes dropped (first wins). File
    order is kept, since suggestion ties are broken by corpus order.

    Returns:
        Tuple of CountryRecord

    Raises:
        FileNotFoundError: If an explicit path or env path does not exist
        ValueError: If the file lacks the code/name columns
    """
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(format_not_found_error(
                subject="countries",
                searched_locations=[("Explicit path", path)],
                fix_instructions=["Pass a path to an existing countries .parquet or .csv file."],
            ))
    else:
        env_path = os.environ.get(COUNTRIES_PATH_ENV)
        if env_path:
            path = Path(env_path)
            if not path.exists():
                raise FileNotFoundError(format_not_found_error(
                    subject="countries",
                    searched_locations=[("Environment variable", path)],
                    fix_instructions=[f"Point {COUNTRIES_PATH_ENV} at an existing file, or unset it."],
                ))

    if path is None:
        path = find_data_file(__file__, ["countries.parquet", "countries.csv"])

    if path is None:
        records = _records_from_pycountry()
        logger.info(f"Loaded {len(records)} countries from pycountry")
        return records

    records = _records_from_frame(load_parquet_or_csv(path))
    logger.info(f"Loaded {len(records)} countries from {path}")
    return records


@lru_cache(maxsize=1)
def load_code_aliases() -> Mapping[str, str]:
    """alpha-3 -> alpha-2 for every ISO country; the common-code table wins on conflicts."""
    aliases = {
        c.alpha_3.upper(): c.alpha_2.upper()
        for c in pycountry.countries
        if getattr(c, "alpha_3", None) and getattr(c, "alpha_2", None)
    }
    aliases.update(THREE_TO_TWO)
    return MappingProxyType(aliases)


def clear_cache():
    """Clear cached corpus and alias table (e.g. after changing the data file)."""
    load_countries.cache_clear()
    load_code_aliases.cache_clear()


def _validate_code(code: str) -> str:
    code = validate_string_input(code, field_name="Country code")
    if not (2 <= len(code) <= 3) or not code.isalpha():
        raise ValueError("Country code must be 2 or 3 letters")
    return code


def country_identifier(code: str) -> ResolutionResult:
    """Resolve an ISO 3166-1 alpha-2/alpha-3 code against the loaded corpus.

    Args:
        code: e.g. "US", "usa", "GBR"

    Returns:
        Found or NotFound (with suggestions)

    Raises:
        ValueError: If code is blank or not 2-3 letters

    Examples:
        >>> country_identifier("USA").record.name
        'United States'

        >>> country_identifier("ZZ").found
        False
    """
    code = _validate_code(code)
    return resolve_by_code(code, load_countries(), aliases=load_code_aliases())


def country_info(code: str) -> dict:
    """Country lookup as a response envelope.

    Never raises for bad input: validation errors and misses are reported in
    the envelope, misses with similarity-ranked suggestions.

    Examples:
        >>> country_info("DEU")
        {'success': True, 'country': {'code': 'DE', 'name': 'Germany'}, 'match_method': 'exact_code'}
    """
    try:
        result = country_identifier(code)
    except ValueError as e:
        return {"success": False, "error": str(e)}

    if result.found:
        logger.info(f"Country found: {result.record.code} - {result.record.name}")
        return {
            "success": True,
            "country": result.record.to_dict(),
            "match_method": result.match_method.value,
        }

    return {
        "success": False,
        "error": f"No country found for '{result.query.upper()}'",
        "suggestions": [s.to_dict() for s in result.suggestions],
    }


def search_countries(term: str, max_results: int = 10) -> SearchResult:
    """Ranked search over country codes and names.

    Args:
        term: At least 2 characters after trimming (e.g. "Uni", "DE")
        max_results: Clamped to 1..50

    Raises:
        ValueError: If term is blank or shorter than 2 characters

    Examples:
        >>> [m.record.code for m in search_countries("united kingdom").matches]
        ['GB']
    """
    term = validate_string_input(term, min_length=2, field_name="Search term")
    max_results = validate_range(max_results, 1, MAX_SEARCH_RESULTS, "maxResults")
    return search(term, load_countries(), max_results=max_results)


def list_countries() -> pd.DataFrame:
    """The loaded corpus as a DataFrame with `code` and `name` columns."""
    return pd.DataFrame([r.to_dict() for r in load_countries()], columns=["code", "name"])


__all__ = [
    "load_countries",
    "load_code_aliases",
    "clear_cache",
    "country_identifier",
    "country_info",
    "search_countries",
    "list_countries",
]
