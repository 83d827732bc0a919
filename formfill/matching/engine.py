"""Field matching engine.

FieldMatcher ties the pieces together for one profile snapshot:
1. Builds the normalized index once, at construction
2. Expands each candidate label into its variations
3. Scores every variation against the whole index
4. Returns the single best result across all candidates
"""

import logging
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Sequence

from formfill.config.loader import resolve_alias_table
from formfill.config.models import AliasRecord, AppConfig
from formfill.logging import get_logger
from formfill.normalization import label_variations

from .models import NormalizedIndex, MatchResult
from .registry import AliasRegistry
from .scoring import match_field

logger = get_logger(__name__, component="matching")


class FieldMatcher:
    """Matches form field labels against a profile snapshot.

    The profile is copied and the index built in __init__; nothing changes
    afterwards, so one instance can serve concurrent readers. Build a new
    matcher when the profile changes.
    """

    def __init__(
        self,
        profile: Mapping[str, str],
        alias_table: Optional[Sequence[AliasRecord]] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize FieldMatcher.

        Args:
            profile: Profile key to value mapping
            alias_table: Ordered alias records (defaults to the packaged table)
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.logger = logger_instance or logger
        self._profile = MappingProxyType(dict(profile))
        self._index = AliasRegistry(alias_table, logger_instance=self.logger).build(self._profile)

    @classmethod
    def from_config(
        cls, profile: Mapping[str, str], app_config: AppConfig
    ) -> "FieldMatcher":
        """Create a matcher using the alias table an AppConfig resolves to."""
        return cls(profile, alias_table=resolve_alias_table(app_config))

    @property
    def profile(self) -> Mapping[str, str]:
        """Read-only view of the profile snapshot."""
        return self._profile

    @property
    def index(self) -> NormalizedIndex:
        return self._index

    def find_match(
        self, primary_label: Optional[str], fallback_labels: Iterable[Optional[str]] = ()
    ) -> Optional[MatchResult]:
        """Find the best profile key for one form field.

        Candidates are tried in order (primary first), each with its
        variations. The running best is replaced only by a strictly higher
        confidence, so the earliest candidate wins ties.

        Args:
            primary_label: Highest-priority label for the field
            fallback_labels: Further labels, in priority order

        Returns:
            Best MatchResult, or None when nothing matched (do not fill)
        """
        candidates = [primary_label, *fallback_labels]
        best: Optional[MatchResult] = None
        best_variation = None

        for candidate in candidates:
            for variation in label_variations(candidate):
                match = match_field(variation, self._index)
                if match and (best is None or match.confidence > best.confidence):
                    best = match
                    best_variation = variation

        if best is None:
            self.logger.debug(
                "No profile key matched field",
                extra={
                    "event": "matching.field.unmatched",
                    "primary_label": primary_label,
                    "candidate_count": len(candidates),
                },
            )
        else:
            self.logger.debug(
                f"Field matched: {best.stored_key}",
                extra={
                    "event": "matching.field.matched",
                    "primary_label": primary_label,
                    "variation": best_variation,
                    **best.to_dict(),
                },
            )

        return best

    def get_value(self, stored_key: str) -> str:
        """Return the profile value for a key, or '' when absent."""
        return self._profile.get(stored_key) or ""
