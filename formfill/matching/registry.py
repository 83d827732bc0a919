"""Alias registry: builds the normalized index for one profile snapshot.

The index is built in two phases over a single ordered map:

1. Base phase: every profile key is registered under its normalized form.
2. Alias phase: for each alias record, the first profile key owning the
   concept (its normalized form contains the concept, or the concept contains
   it) is registered under every alias phrase of that record.

Both phases write into the same map and the later write wins. An alias whose
normalized form equals a normalized profile key therefore redirects that
entry to the concept owner. This is intentional and relied upon by callers.
"""

import logging
from typing import Dict, Mapping, Optional, Sequence

from formfill.config.loader import load_alias_table
from formfill.config.models import AliasRecord
from formfill.logging import get_logger
from formfill.normalization import normalize

from .models import NormalizedIndex

logger = get_logger(__name__, component="matching")


class AliasRegistry:
    """Builds NormalizedIndex instances from profile snapshots.

    The alias table is fixed for the lifetime of the registry; each call to
    build() produces a fresh, independent index.
    """

    def __init__(
        self,
        alias_table: Optional[Sequence[AliasRecord]] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize AliasRegistry.

        Args:
            alias_table: Ordered alias records (defaults to the packaged table)
            logger_instance: Optional logger instance (defaults to module logger)
        """
        if alias_table is None:
            alias_table = load_alias_table()
        self.alias_table = tuple(alias_table)
        self.logger = logger_instance or logger

    def build(self, profile: Mapping[str, str]) -> NormalizedIndex:
        """Build the normalized index for a profile snapshot.

        Args:
            profile: Profile key to value mapping (iteration order matters)

        Returns:
            NormalizedIndex mapping normalized keys and aliases to profile keys
        """
        entries: Dict[str, str] = {}

        # Phase 1: profile keys
        for key in profile:
            entries[normalize(key)] = key

        base_count = len(entries)

        # Phase 2: aliases, last write wins
        alias_count = 0
        for record in self.alias_table:
            owner = self.find_concept_owner(record.concept, profile)
            if owner is None:
                continue

            for alias in record.aliases:
                normalized_alias = normalize(alias)
                previous = entries.get(normalized_alias)
                if previous is not None and previous != owner:
                    self.logger.debug(
                        f"Alias '{normalized_alias}' now resolves to '{owner}' instead of '{previous}'",
                        extra={
                            "event": "matching.index.alias_overwrite",
                            "alias": normalized_alias,
                            "concept": record.concept,
                            "previous_key": previous,
                            "stored_key": owner,
                        },
                    )
                entries[normalized_alias] = owner
                alias_count += 1

        index = NormalizedIndex(entries.items())

        self.logger.debug(
            "Normalized index built",
            extra={
                "event": "matching.index.built",
                "profile_keys": len(profile),
                "base_entries": base_count,
                "alias_registrations": alias_count,
                "index_size": len(index),
            },
        )
        return index

    @staticmethod
    def find_concept_owner(concept: str, profile: Mapping[str, str]) -> Optional[str]:
        """Return the first profile key that owns a concept, if any.

        A key owns the concept when its normalized form contains the concept
        or is contained in it. A key normalizing to an empty string is
        contained in every concept, so it owns any concept no earlier key owns.
        """
        for key in profile:
            normalized_key = normalize(key)
            if concept in normalized_key or normalized_key in concept:
                return key
        return None
