"""Caller-layer input validation.

The resolution and batch engines assume well-formed arguments. These helpers
are what the public API layers use to get there: each one either returns the
normalized value or raises ValueError with a message suitable for showing to
the end user.
"""

from __future__ import annotations

import json
from typing import Iterable, List, Optional


def validate_string_input(
    value: Optional[str],
    min_length: int = 1,
    max_length: int = 2048,
    field_name: str = "Input",
) -> str:
    """Validate a free-text argument and return it trimmed.

    Examples:
        >>> validate_string_input("  Uni ", min_length=2, field_name="Search term")
        'Uni'
    """
    if value is None or not str(value).strip():
        raise ValueError(f"{field_name} is required")

    trimmed = str(value).strip()
    if len(trimmed) < min_length:
        raise ValueError(f"{field_name} must be at least {min_length} characters long")

    if len(trimmed) > max_length:
        raise ValueError(f"{field_name} exceeds maximum length of {max_length} characters")

    return trimmed


def validate_range(
    value: int,
    min_value: int,
    max_value: int,
    field_name: str = "Value",
    *,
    clamp: bool = True,
) -> int:
    """Validate an integer range argument such as max_results.

    With clamp=True (the default) an out-of-range value is pulled to the
    nearest bound instead of rejected.

    Examples:
        >>> validate_range(500, 1, 50, "maxResults")
        50

        >>> validate_range(0, 1, 50, "maxResults")
        1
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field_name} must be an integer")

    if value < min_value or value > max_value:
        if not clamp:
            raise ValueError(f"{field_name} must be between {min_value} and {max_value}")
        return max(min_value, min(max_value, value))

    return value


def validate_array_input(
    values: Optional[Iterable[str]],
    max_count: int = 100,
    field_name: str = "Array",
) -> List[str]:
    """Validate a list argument and de-duplicate it.

    Blank entries are dropped, remaining entries trimmed, and duplicates
    removed case-insensitively (first spelling wins, order preserved).

    Examples:
        >>> validate_array_input(["8.8.8.8", " 8.8.8.8", "", "1.1.1.1"], field_name="IP address")
        ['8.8.8.8', '1.1.1.1']
    """
    label = field_name.lower()
    plural = label + ("es" if label.endswith("s") else "s")
    values = list(values) if values is not None else []

    if not values:
        raise ValueError(f"At least one {label} is required")

    if len(values) > max_count:
        raise ValueError(f"Maximum {max_count} {plural} allowed")

    unique = []
    seen = set()
    for v in values:
        if v is None or not str(v).strip():
            continue
        trimmed = str(v).strip()
        key = trimmed.casefold()
        if key not in seen:
            seen.add(key)
            unique.append(trimmed)

    if not unique:
        raise ValueError(f"No valid {plural} provided")

    return unique


def validate_coordinates(latitude: float, longitude: float) -> tuple[float, float]:
    """Validate a latitude/longitude pair and return it as floats."""
    if latitude < -90 or latitude > 90:
        raise ValueError("Latitude must be between -90 and 90 degrees")

    if longitude < -180 or longitude > 180:
        raise ValueError("Longitude must be between -180 and 180 degrees")

    return float(latitude), float(longitude)


def validate_boolean_string(value: Optional[str], field_name: str = "Value") -> bool:
    """Parse 'true'/'false' (any case) into a bool."""
    if value is None or not str(value).strip():
        raise ValueError(f"{field_name} is required")

    lowered = str(value).strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False

    raise ValueError(f"Invalid {field_name}. Use 'true' or 'false'")


def parse_bounding_box(text: str) -> dict:
    """Parse a JSON bounding box into {'west', 'south', 'east', 'north'} floats.

    Examples:
        >>> parse_bounding_box('{"west": -122.5, "south": 47.4, "east": -122.2, "north": 47.8}')
        {'west': -122.5, 'south': 47.4, 'east': -122.2, 'north': 47.8}
    """
    try:
        data = json.loads(text)
    except (TypeError, json.JSONDecodeError) as e:
        raise ValueError("Invalid bounding box JSON format") from e

    keys = ("west", "south", "east", "north")
    if not isinstance(data, dict) or any(k not in data for k in keys):
        raise ValueError("Bounding box must contain 'west', 'south', 'east', and 'north' properties")

    try:
        return {k: float(data[k]) for k in keys}
    except (TypeError, ValueError) as e:
        raise ValueError("Invalid bounding box JSON format") from e


__all__ = [
    "validate_string_input",
    "validate_range",
    "validate_array_input",
    "validate_coordinates",
    "validate_boolean_string",
    "parse_bounding_box",
]
