"""Data models for the matching engine.

This module defines the match classification, the result returned for one
form field, and the read-only index the matcher searches.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, Tuple


class MatchType(str, Enum):
    """Classification rule that produced a match, strongest first."""

    EXACT = "exact"
    PREFIX = "prefix"
    SUFFIX = "suffix"
    CONTAINS = "contains"
    SUBSTRING = "substring"

    @property
    def base_score(self) -> int:
        """Score before length adjustments."""
        return BASE_SCORES[self]


BASE_SCORES: Dict[MatchType, int] = {
    MatchType.EXACT: 100,
    MatchType.PREFIX: 85,
    MatchType.SUFFIX: 80,
    MatchType.CONTAINS: 70,
    MatchType.SUBSTRING: 60,
}

UNCLASSIFIED_SCORE = 50
MAX_CONFIDENCE = 100


@dataclass(frozen=True)
class MatchResult:
    """Best profile key found for one form field.

    Attributes:
        stored_key: Original profile key (as the user wrote it)
        match_type: Rule that matched
        confidence: Score in [0, 100]; 100 only for exact matches
    """

    stored_key: str
    match_type: MatchType
    confidence: int

    def to_dict(self) -> Dict[str, object]:
        """Serialize for logs and CLI output."""
        return {
            "stored_key": self.stored_key,
            "match_type": self.match_type.value,
            "confidence": self.confidence,
        }


class NormalizedIndex(Mapping):
    """Ordered, read-only map from normalized key to original profile key.

    Iteration follows first-insertion order of each normalized key; when a
    later registration replaces the target of an existing normalized key, the
    entry keeps its original position. Tie-breaking in the score engine relies
    on this order.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[Tuple[str, str]] = ()):
        data: Dict[str, str] = {}
        for normalized_key, original_key in entries:
            data[normalized_key] = original_key
        self._entries = data

    def __getitem__(self, normalized_key: str) -> str:
        return self._entries[normalized_key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"NormalizedIndex({self._entries!r})"

    def pairs(self) -> Iterator[Tuple[str, str]]:
        """Yield (normalized_key, original_key) pairs in index order."""
        return iter(self._entries.items())
