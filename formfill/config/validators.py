"""Non-fatal checks for alias tables and profiles."""

import warnings
from typing import Any, Dict, List, Mapping

from formfill.normalization import normalize


def check_alias_warnings(records: List[Dict[str, Any]]) -> List[str]:
    """
    Check raw alias records for suspicious but valid entries.

    Args:
        records: Alias records as loaded from YAML (before model validation)

    Returns:
        List of warning messages
    """
    warning_messages = []
    seen_concepts = set()
    alias_owners: Dict[str, str] = {}

    for record in records:
        if not isinstance(record, dict):
            continue
        concept = str(record.get("concept", "")).strip()
        aliases = record.get("aliases") or []

        if concept in seen_concepts:
            warning_messages.append(
                f"Concept '{concept}' is listed more than once; its aliases are registered twice"
            )
        seen_concepts.add(concept)

        if not aliases:
            warning_messages.append(f"Concept '{concept}' has no aliases and does nothing")
            continue

        for alias in aliases:
            if not isinstance(alias, str):
                continue
            normalized = normalize(alias)
            if not normalized:
                warning_messages.append(
                    f"Alias '{alias}' of concept '{concept}' normalizes to an empty string"
                )
                continue
            owner = alias_owners.get(normalized)
            if owner is not None and owner != concept:
                warning_messages.append(
                    f"Alias '{normalized}' is registered by both '{owner}' and '{concept}'; "
                    f"the later registration wins"
                )
            alias_owners[normalized] = concept

    return warning_messages


def check_profile_warnings(profile: Mapping[str, str]) -> List[str]:
    """
    Check a profile for keys that collide or normalize to nothing.

    Args:
        profile: Profile mapping of key to value

    Returns:
        List of warning messages
    """
    warning_messages = []
    owners: Dict[str, str] = {}

    for key in profile:
        normalized = normalize(key)
        if not normalized:
            warning_messages.append(
                f"Profile key '{key}' normalizes to an empty string and will own "
                f"every alias concept that no earlier key owns"
            )
            continue
        if normalized in owners:
            warning_messages.append(
                f"Profile keys '{owners[normalized]}' and '{key}' share the normalized form "
                f"'{normalized}'; only '{key}' can be matched"
            )
        owners[normalized] = key

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
