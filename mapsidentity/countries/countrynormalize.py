"""
Country Code Normalization
--------------------------

Helpers that turn a caller-supplied code into the forms the resolver tries:
  1. normalize_code: trim + uppercase
  2. to_two_letter: alpha-3 -> alpha-2 through an alias table
  3. code_variations: case variants for corpora that are not upper-cased

Examples:
  >>> normalize_code(" usa ")
  'USA'

  >>> to_two_letter("gbr")
  'GB'

  >>> code_variations("us")
  ['us', 'US', 'Us']
"""

from types import MappingProxyType
from typing import List, Mapping, Optional


# Common alpha-3 codes accepted without consulting the full ISO table.
THREE_TO_TWO: Mapping[str, str] = MappingProxyType({
    "USA": "US", "CAN": "CA", "GBR": "GB", "DEU": "DE", "FRA": "FR",
    "JPN": "JP", "AUS": "AU", "CHN": "CN", "IND": "IN", "BRA": "BR",
    "RUS": "RU", "ITA": "IT", "ESP": "ES", "MEX": "MX", "KOR": "KR",
    "NLD": "NL", "BEL": "BE", "CHE": "CH", "AUT": "AT", "SWE": "SE",
    "NOR": "NO", "DNK": "DK", "FIN": "FI", "POL": "PL", "TUR": "TR",
})


def normalize_code(code: str) -> str:
    """Trim and uppercase a country code. Non-strings normalize to ''."""
    if not isinstance(code, str):
        return ""
    return code.strip().upper()


def to_two_letter(code: str, aliases: Mapping[str, str] = THREE_TO_TWO) -> Optional[str]:
    """Map an alpha-3 code to alpha-2 using `aliases`, or None if unknown."""
    return aliases.get(normalize_code(code))


def code_variations(code: str) -> List[str]:
    """Distinct case variants of a code, in lookup order.

    Lower and upper case always; Title case as well for 2-letter codes.
    """
    if not isinstance(code, str) or not code.strip():
        return []

    code = code.strip()
    candidates = [code.lower(), code.upper()]
    if len(code) == 2:
        candidates.append(code[0].upper() + code[1:].lower())

    variations = []
    for c in candidates:
        if c not in variations:
            variations.append(c)
    return variations


__all__ = [
    "THREE_TO_TWO",
    "normalize_code",
    "to_two_letter",
    "code_variations",
]
