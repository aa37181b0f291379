"""Shared data loading utilities for reference tables.

Reference tables (e.g. the country corpus) are looked up in a small set of
standard locations so that a packaged build and a development checkout
behave the same way.
"""

from pathlib import Path
from typing import List, Optional, Tuple, Union

import pandas as pd


def find_data_file(
    module_file: str,
    filenames: List[str],
    search_dev_tables: bool = True,
    subdirectory: Optional[str] = None,
) -> Optional[Path]:
    """Find a data file by searching standard locations.

    Search priority:
    1. Module-local data: {module_dir}/data/
    2. Development data: tables/{subdirectory}/ (if search_dev_tables=True)

    Args:
        module_file: __file__ from the calling module
        filenames: Candidate filenames in preference order
            (e.g., ['countries.parquet', 'countries.csv'])
        search_dev_tables: Whether to search the repository tables/ directory
        subdirectory: Subdirectory of tables/ to search (defaults to the
            name of the calling module's package)

    Returns:
        Path to found file, or None if not found

    Examples:
        >>> path = find_data_file(__file__, ['countries.parquet', 'countries.csv'])
    """
    module_dir = Path(module_file).parent

    data_dir = module_dir / "data"
    for filename in filenames:
        p = data_dir / filename
        if p.exists():
            return p

    if search_dev_tables:
        subdirectory = subdirectory or module_dir.name
        tables_dir = module_dir.parent.parent / "tables" / subdirectory
        for filename in filenames:
            p = tables_dir / filename
            if p.exists():
                return p

    return None


def load_parquet_or_csv(file_path: Union[str, Path]) -> pd.DataFrame:
    """Load DataFrame from parquet or CSV file based on extension.

    CSV files are read with every column as string so that codes such
    as 'NA' (Namibia) survive the round trip.

    Raises:
        ValueError: If file extension is not .parquet or .csv
    """
    file_path = Path(file_path)
    if file_path.suffix == ".parquet":
        return pd.read_parquet(file_path)
    elif file_path.suffix == ".csv":
        return pd.read_csv(file_path, dtype=str, keep_default_na=False)
    else:
        raise ValueError(f"Unsupported file format: {file_path.suffix}. Use .parquet or .csv")


def format_not_found_error(
    subject: str,
    searched_locations: List[Tuple[str, Union[str, Path]]],
    fix_instructions: List[str],
) -> str:
    """Format a helpful FileNotFoundError message.

    Args:
        subject: What was being looked for (e.g., 'countries')
        searched_locations: List of (description, path) tuples for locations searched
        fix_instructions: List of commands/instructions to fix the issue

    Returns:
        Formatted error message string
    """
    lines = [f"No {subject} data found in standard locations.\n"]

    lines.append("Searched:")
    for i, (desc, path) in enumerate(searched_locations, 1):
        lines.append(f"  {i}. {desc}: {path}")

    lines.append("\nTo fix:")
    for instruction in fix_instructions:
        lines.append(f"  • {instruction}")

    return "\n".join(lines)


__all__ = [
    "find_data_file",
    "load_parquet_or_csv",
    "format_not_found_error",
]
