"""
Country Code Resolution and Search
----------------------------------

Deterministic fallback chain for code lookup (first hit wins):
  1) Exact code match (alpha-3 codes first mapped through the alias table)
  2) Alternative case formats of a 2-letter code
  3) Case-insensitive scan over every corpus code
  4) Levenshtein suggestions (never auto-accepted)

Ranked free-text search over codes and names:
  exact code 100 > exact name 90 > name prefix 80 > name substring 60 > word prefix 40

API:
  calculate_string_similarity(a, b) -> float
  resolve_by_code(query, corpus, aliases=THREE_TO_TWO) -> Found | NotFound
  search(term, corpus, max_results=10) -> SearchResult

Examples:
  >>> corpus = [CountryRecord("US", "United States"), CountryRecord("GB", "United Kingdom")]
  >>> resolve_by_code("USA", corpus)
  Found(record=CountryRecord(code='US', name='United States'), match_method=<MatchMethod.EXACT_CODE: 'exact_code'>)

  >>> [m.record.code for m in search("united", corpus).matches]
  ['GB', 'US']
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, Mapping, Optional, Sequence

try:
    from rapidfuzz.distance import Levenshtein
except ImportError as e:
    raise ImportError("rapidfuzz not installed. pip install rapidfuzz") from e

from mapsidentity.countries.countrymodels import (
    MATCH_SCORES,
    CountryRecord,
    Found,
    MatchMethod,
    MatchType,
    NotFound,
    ResolutionResult,
    SearchMatch,
    SearchResult,
    Suggestion,
)
from mapsidentity.countries.countrynormalize import (
    THREE_TO_TWO,
    code_variations,
    normalize_code,
)
from mapsidentity.utils.normalize import fold, normalize_name

logger = logging.getLogger(__name__)

FUZZY_THRESHOLD = 0.5
MAX_SUGGESTIONS = 5
FALLBACK_CODES = ("US", "GB", "CA")
WORD_PREFIX_MIN_LENGTH = 3


def calculate_string_similarity(a: str, b: str) -> float:
    """Normalized Levenshtein similarity in [0, 1].

    (longest length - edit distance) / longest length, with unit costs for
    insert, delete and substitute. Comparison is case-sensitive; callers
    normalize case first when they want otherwise.

    Examples:
        >>> calculate_string_similarity("US", "US")
        1.0
        >>> calculate_string_similarity("US", "UA")
        0.5
        >>> calculate_string_similarity("us", "US")
        0.0
        >>> calculate_string_similarity("", "US")
        0.0
    """
    if not a or not b:
        return 0.0

    longest = max(len(a), len(b))
    distance = Levenshtein.distance(a, b)
    return (longest - distance) / longest


def _index_by_code(corpus: Iterable[CountryRecord]) -> Dict[str, CountryRecord]:
    """Map code -> record; the first record wins on duplicate codes."""
    index: Dict[str, CountryRecord] = {}
    for record in corpus:
        index.setdefault(record.code, record)
    return index


def _suggest(
    code: str,
    corpus: Sequence[CountryRecord],
    *,
    threshold: float,
    max_suggestions: int,
    fallback_codes: Iterable[str],
) -> tuple[Suggestion, ...]:
    scored = []
    for record in corpus:
        similarity = calculate_string_similarity(record.code, code)
        if similarity > threshold:
            scored.append(Suggestion(record, similarity))

    # Stable sort keeps corpus order among equal similarities
    scored.sort(key=lambda s: s.similarity, reverse=True)
    if scored:
        return tuple(scored[:max_suggestions])

    index = _index_by_code(corpus)
    fallback = []
    for fallback_code in fallback_codes:
        record = index.get(fallback_code)
        if record is not None:
            fallback.append(Suggestion(record, calculate_string_similarity(record.code, code)))
    return tuple(fallback)


def resolve_by_code(
    query: str,
    corpus: Sequence[CountryRecord],
    *,
    aliases: Mapping[str, str] = THREE_TO_TWO,
    threshold: float = FUZZY_THRESHOLD,
    max_suggestions: int = MAX_SUGGESTIONS,
    fallback_codes: Iterable[str] = FALLBACK_CODES,
) -> ResolutionResult:
    """
    Resolve an alpha-2 or alpha-3 code to a corpus record.

    Never raises for unknown or malformed input: a miss is a NotFound carrying
    up to `max_suggestions` codes whose similarity exceeds `threshold`, or the
    `fallback_codes` present in the corpus when nothing is close enough.

    Args:
        query: Code as typed by the user (e.g. "US", "usa", "Gb")
        corpus: Ordered sequence of CountryRecord
        aliases: alpha-3 -> alpha-2 table applied to 3-letter queries
        threshold: Minimum (exclusive) similarity for a suggestion
        max_suggestions: Maximum number of similarity-ranked suggestions
        fallback_codes: Codes suggested when no code is similar enough

    Returns:
        Found(record, match_method) or NotFound(query, suggestions)
    """
    raw = query if isinstance(query, str) else ""
    code = normalize_code(raw)

    if len(code) == 3:
        code = aliases.get(code, code)

    if code:
        index = _index_by_code(corpus)

        # 1) Exact code
        record = index.get(code)
        if record is not None:
            logger.debug(f"Resolved {raw!r} by exact code -> {record.code}")
            return Found(record, MatchMethod.EXACT_CODE)

        # 2) Alternative case formats
        if len(code) == 2:
            for variant in code_variations(code):
                record = index.get(variant)
                if record is not None:
                    logger.debug(f"Resolved {raw!r} by alternative format {variant!r}")
                    return Found(record, MatchMethod.ALTERNATIVE_FORMAT)

        # 3) Case-insensitive scan
        folded = code.casefold()
        for record in corpus:
            if record.code.casefold() == folded:
                logger.debug(f"Resolved {raw!r} by case-insensitive scan -> {record.code}")
                return Found(record, MatchMethod.CASE_INSENSITIVE)

    # 4) Suggestions only
    suggestions = _suggest(
        code,
        corpus,
        threshold=threshold,
        max_suggestions=max_suggestions,
        fallback_codes=fallback_codes,
    )
    logger.debug(f"No country for {raw!r}; {len(suggestions)} suggestion(s)")
    return NotFound(raw.strip(), suggestions)


def _tokens(name: str) -> list[str]:
    return re.split(r"[\s\-]+", normalize_name(name))


def _match_type(key: str, word_key: Optional[str], record: CountryRecord) -> Optional[MatchType]:
    """First search rule that matches `record`, or None."""
    if fold(record.code) == key:
        return MatchType.EXACT_CODE

    name = fold(record.name)
    if name == key:
        return MatchType.EXACT_NAME
    if name.startswith(key):
        return MatchType.NAME_STARTS_WITH
    if key in name:
        return MatchType.NAME_CONTAINS

    # Word prefixes are compared accent- and punctuation-blind, so "cote"
    # finds "Côte d'Ivoire" even though the substring rule does not.
    if word_key and any(token.startswith(word_key) for token in _tokens(record.name)):
        return MatchType.WORD_PREFIX

    return None


def search(
    term: str,
    corpus: Sequence[CountryRecord],
    max_results: int = 10,
) -> SearchResult:
    """
    Ranked search over codes and names.

    Each entry is scored by the first rule that matches it (see MATCH_SCORES);
    entries matching no rule are excluded. Results are sorted by score
    descending with ties broken by name (code-point order), then truncated.

    Args:
        term: Search text; callers enforce a minimum of 2 characters
        corpus: Ordered sequence of CountryRecord
        max_results: Page size, must be >= 1

    Returns:
        SearchResult (empty when nothing matches or the corpus is empty)

    Raises:
        ValueError: If max_results < 1
    """
    if max_results < 1:
        raise ValueError(f"max_results must be >= 1, got {max_results}")

    term = term.strip() if isinstance(term, str) else ""
    key = fold(term)
    if not key:
        return SearchResult(term=term, max_results=max_results)

    word_key = None
    if len(term) >= WORD_PREFIX_MIN_LENGTH:
        word_key = normalize_name(term) or None

    matches = []
    for record in corpus:
        match_type = _match_type(key, word_key, record)
        if match_type is not None:
            matches.append(SearchMatch(record, MATCH_SCORES[match_type], match_type))

    matches.sort(key=lambda m: (-m.score, m.record.name))
    logger.debug(f"Search {term!r}: {len(matches)} match(es)")

    return SearchResult(
        term=term,
        matches=tuple(matches[:max_results]),
        max_results=max_results,
        total_matches=len(matches),
    )


__all__ = [
    "FUZZY_THRESHOLD",
    "MAX_SUGGESTIONS",
    "FALLBACK_CODES",
    "calculate_string_similarity",
    "resolve_by_code",
    "search",
]
