"""Classification and scoring of a normalized label against normalized keys.

Rules are tried in priority order and the first one that holds decides the
match type, even when a later rule would also hold:

1. exact      label == key
2. prefix     label starts with ``key_``, or with key when key has 3+ chars
3. suffix     label ends with ``_key``, or with key when key has 3+ chars
4. contains   key has 3+ chars and appears inside label
5. substring  label has 3+ chars and appears inside key
"""

from typing import Optional

from .models import (
    MAX_CONFIDENCE,
    UNCLASSIFIED_SCORE,
    MatchResult,
    MatchType,
    NormalizedIndex,
)

MIN_PARTIAL_LENGTH = 3


def classify(candidate: str, key: str) -> Optional[MatchType]:
    """Classify a normalized candidate label against a normalized key.

    Args:
        candidate: Normalized label from the form
        key: Normalized index key

    Returns:
        The first matching MatchType, or None
    """
    if candidate == key:
        return MatchType.EXACT

    long_key = len(key) >= MIN_PARTIAL_LENGTH

    if candidate.startswith(key + "_") or (candidate.startswith(key) and long_key):
        return MatchType.PREFIX

    if candidate.endswith("_" + key) or (candidate.endswith(key) and long_key):
        return MatchType.SUFFIX

    if long_key and key in candidate:
        return MatchType.CONTAINS

    if len(candidate) >= MIN_PARTIAL_LENGTH and candidate in key:
        return MatchType.SUBSTRING

    return None


def score(candidate: str, key: str, match_type: Optional[MatchType]) -> int:
    """Compute the confidence of a classified pair.

    Starts from the match type's base score and adds 5 when the key covers
    more than half of the candidate's length, 5 more above 70%. Exact
    matches are always 100.

    Args:
        candidate: Normalized label
        key: Normalized index key
        match_type: Result of classify()

    Returns:
        Confidence in [0, 100]
    """
    result = match_type.base_score if match_type is not None else UNCLASSIFIED_SCORE

    if len(candidate) > 0:
        ratio = len(key) / len(candidate)
        if ratio > 0.5:
            result += 5
        if ratio > 0.7:
            result += 5

    if match_type is MatchType.EXACT:
        result = MAX_CONFIDENCE

    return max(0, min(result, MAX_CONFIDENCE))


def match_field(candidate: str, index: NormalizedIndex) -> Optional[MatchResult]:
    """Find the best index entry for one normalized label.

    Entries are visited in index order and a later entry only replaces the
    current best on a strictly higher score.

    Args:
        candidate: Normalized label
        index: Normalized index to search

    Returns:
        Best MatchResult, or None when no entry classifies
    """
    best: Optional[MatchResult] = None

    for normalized_key, original_key in index.pairs():
        match_type = classify(candidate, normalized_key)
        if match_type is None:
            continue

        confidence = score(candidate, normalized_key, match_type)
        if best is None or confidence > best.confidence:
            best = MatchResult(
                stored_key=original_key,
                match_type=match_type,
                confidence=confidence,
            )

    return best
