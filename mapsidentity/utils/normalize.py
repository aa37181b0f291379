"""Shared text normalization utilities."""

import re
import unicodedata


def normalize_name(s: str, *, allowed_chars: str = r"a-z0-9\s\-") -> str:
    """Aggressive normalization for accent- and punctuation-blind matching.

    Transformations:
      1. Unicode normalization (NFKD) and ASCII transliteration
      2. Lowercase
      3. Remove punctuation (keep only allowed_chars)
      4. Collapse whitespace

    Examples:
        >>> normalize_name("Côte d'Ivoire")
        'cote d ivoire'

        >>> normalize_name("  Korea,   Republic of ")
        'korea republic of'
    """
    if not s:
        return ""

    # Unicode normalization and ASCII conversion
    s = unicodedata.normalize("NFKD", s)
    s = s.encode("ascii", "ignore").decode("ascii")

    s = s.lower()

    # Remove punctuation except allowed characters
    s = re.sub(rf"[^{allowed_chars}]", " ", s)

    # Collapse whitespace
    s = re.sub(r"\s+", " ", s).strip()

    return s


def normalize_quotes(s: str) -> str:
    """Normalize curly quotes and apostrophes to their ASCII forms.

    Examples:
        >>> normalize_quotes("Côte d’Ivoire")
        "Côte d'Ivoire"
    """
    s = s.replace("‘", "'").replace("’", "'")
    s = s.replace("“", '"').replace("”", '"')
    return s


def fold(s: str) -> str:
    """Case-insensitive comparison key.

    Trims, normalizes quotes, collapses internal whitespace and casefolds.
    Accents are kept: 'Åland' and 'Aland' are different keys.

    Examples:
        >>> fold("  United   Kingdom ")
        'united kingdom'

        >>> fold("Côte d’Ivoire")
        "côte d'ivoire"
    """
    if not s:
        return ""

    s = unicodedata.normalize("NFC", normalize_quotes(s))
    s = re.sub(r"\s+", " ", s).strip()
    return s.casefold()


__all__ = [
    "normalize_name",
    "normalize_quotes",
    "fold",
]
