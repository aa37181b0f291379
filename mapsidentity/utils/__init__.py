"""Shared utilities for the mapsidentity package."""

from mapsidentity.utils.dataloader import (
    find_data_file,
    load_parquet_or_csv,
    format_not_found_error,
)
from mapsidentity.utils.normalize import (
    normalize_name,
    normalize_quotes,
    fold,
)
from mapsidentity.utils.validation import (
    validate_string_input,
    validate_range,
    validate_array_input,
    validate_coordinates,
    validate_boolean_string,
    parse_bounding_box,
)

__all__ = [
    # Data loading
    "find_data_file",
    "load_parquet_or_csv",
    "format_not_found_error",
    # Normalization
    "normalize_name",
    "normalize_quotes",
    "fold",
    # Validation
    "validate_string_input",
    "validate_range",
    "validate_array_input",
    "validate_coordinates",
    "validate_boolean_string",
    "parse_bounding_box",
]
