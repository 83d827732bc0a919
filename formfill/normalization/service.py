"""Label normalization.

Turns raw form labels ("Expected CTC *", "user-email", "Phone (Mobile)")
into underscore-delimited tokens that can be compared character for
character:

1. Lowercase
2. Drop wildcard and bracket punctuation: ``* : ? ( ) [ ]``
3. Collapse whitespace, hyphen, period and slash runs into ``_``
4. Drop anything outside ``[a-z0-9_]``
5. Collapse repeated underscores and trim them from both ends

The result is idempotent: normalizing a normalized label returns it unchanged.
"""

import re
from typing import Any, Tuple

COMMON_PREFIXES = frozenset(
    {"input", "field", "form", "user", "applicant", "candidate", "txt", "text", "lbl", "label"}
)

COMMON_SUFFIXES = frozenset(
    {
        "input", "field", "box", "text", "value", "data", "id",
        "required", "req", "mandatory", "optional", "opt", "star",
    }
)

_PUNCTUATION_RE = re.compile(r"[*:?()\[\]]")
_SEPARATOR_RE = re.compile(r"[\s\-./]+")
_INVALID_RE = re.compile(r"[^a-z0-9_]")
_UNDERSCORES_RE = re.compile(r"_+")


def normalize(label: Any) -> str:
    """Normalize a raw label into its comparable form.

    Args:
        label: Raw label; None or empty yields ``''``, non-strings are converted with str()

    Returns:
        Normalized label, possibly empty
    """
    if label is None:
        return ""
    if not isinstance(label, str):
        label = str(label)
    if not label:
        return ""

    normalized = label.lower()
    normalized = _PUNCTUATION_RE.sub("", normalized)
    normalized = _SEPARATOR_RE.sub("_", normalized)
    normalized = _INVALID_RE.sub("", normalized)
    normalized = _UNDERSCORES_RE.sub("_", normalized)
    return normalized.strip("_")


def strip_common_affixes(normalized: str) -> str:
    """Drop one generic leading and one generic trailing token.

    ``input_email_field`` becomes ``email``; a single token is never removed,
    so ``input`` stays ``input``.

    Args:
        normalized: Already-normalized label

    Returns:
        The looser variation (equal to the input when nothing was dropped)
    """
    parts = normalized.split("_")

    if len(parts) > 1 and parts[0] in COMMON_PREFIXES:
        parts = parts[1:]

    if len(parts) > 1 and parts[-1] in COMMON_SUFFIXES:
        parts = parts[:-1]

    return "_".join(parts)


def label_variations(label: Any) -> Tuple[str, ...]:
    """Return the forms of a label to try when matching, strictest first.

    Args:
        label: Raw label

    Returns:
        Empty tuple when the label normalizes to nothing, otherwise the
        normalized form followed by its affix-stripped form when that differs
    """
    normalized = normalize(label)
    if not normalized:
        return ()

    cleaned = strip_common_affixes(normalized)
    if cleaned != normalized:
        return (normalized, cleaned)
    return (normalized,)
