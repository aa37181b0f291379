"""Value types for country resolution and search.

Resolution never signals a miss with an exception: resolve_by_code returns
either Found or NotFound, and search always returns a SearchResult (possibly
empty).
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple, Union


@dataclass(frozen=True)
class CountryRecord:
    """One row of the country corpus: ISO 3166-1 alpha-2 code and display name."""

    code: str
    name: str

    def to_dict(self) -> dict:
        return {"code": self.code, "name": self.name}


class MatchMethod(str, Enum):
    """How resolve_by_code arrived at a Found result."""

    EXACT_CODE = "exact_code"
    CASE_INSENSITIVE = "case_insensitive"
    ALTERNATIVE_FORMAT = "alternative_format"
    FUZZY = "fuzzy"  # reserved; code resolution never auto-accepts a fuzzy hit


class MatchType(str, Enum):
    """Which search rule matched a corpus entry."""

    EXACT_CODE = "exact_code"
    EXACT_NAME = "exact_name"
    NAME_STARTS_WITH = "name_starts_with"
    NAME_CONTAINS = "name_contains"
    WORD_PREFIX = "word_prefix"


MATCH_SCORES = {
    MatchType.EXACT_CODE: 100,
    MatchType.EXACT_NAME: 90,
    MatchType.NAME_STARTS_WITH: 80,
    MatchType.NAME_CONTAINS: 60,
    MatchType.WORD_PREFIX: 40,
}


@dataclass(frozen=True)
class Suggestion:
    record: CountryRecord
    similarity: float

    def to_dict(self) -> dict:
        return {**self.record.to_dict(), "similarity": round(self.similarity, 4)}


@dataclass(frozen=True)
class Found:
    record: CountryRecord
    match_method: MatchMethod

    found = True


@dataclass(frozen=True)
class NotFound:
    query: str
    suggestions: Tuple[Suggestion, ...] = ()

    found = False


ResolutionResult = Union[Found, NotFound]


@dataclass(frozen=True)
class SearchMatch:
    record: CountryRecord
    score: int
    match_type: MatchType

    def to_dict(self) -> dict:
        return {**self.record.to_dict(), "score": self.score, "match_type": self.match_type.value}


@dataclass(frozen=True)
class SearchResult:
    """Ranked search output.

    Attributes:
        term: The trimmed search term
        matches: Matches sorted by (score desc, name asc), at most max_results
        max_results: The limit the search ran with
        total_matches: How many corpus entries matched before truncation
    """

    term: str
    matches: Tuple[SearchMatch, ...] = ()
    max_results: int = 10
    total_matches: int = 0
    match_types: dict = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        histogram = Counter(m.match_type.value for m in self.matches)
        object.__setattr__(self, "match_types", dict(histogram))

    @property
    def count(self) -> int:
        return len(self.matches)

    @property
    def has_more(self) -> bool:
        # A full page is the "more results may exist" signal.
        return self.count == self.max_results

    def to_dict(self) -> dict:
        return {
            "term": self.term,
            "count": self.count,
            "has_more": self.has_more,
            "match_types": dict(self.match_types),
            "results": [m.to_dict() for m in self.matches],
        }


__all__ = [
    "CountryRecord",
    "MatchMethod",
    "MatchType",
    "MATCH_SCORES",
    "Suggestion",
    "Found",
    "NotFound",
    "ResolutionResult",
    "SearchMatch",
    "SearchResult",
]
