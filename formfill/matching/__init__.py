"""Matching of form field labels against a profile.

This module provides:
- MatchType / MatchResult: classification and best result for one field
- NormalizedIndex: ordered read-only map of normalized keys to profile keys
- AliasRegistry: two-phase index construction (profile keys, then aliases)
- classify / score / match_field: the scoring rules
- FieldMatcher: orchestration over candidate labels and their variations
"""

from .engine import FieldMatcher
from .models import MatchResult, MatchType, NormalizedIndex
from .registry import AliasRegistry
from .scoring import classify, match_field, score

__all__ = [
    "FieldMatcher",
    "AliasRegistry",
    "MatchResult",
    "MatchType",
    "NormalizedIndex",
    "classify",
    "score",
    "match_field",
]
