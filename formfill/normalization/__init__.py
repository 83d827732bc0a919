"""Label normalization.

This module provides:
- normalize: canonical underscore-delimited form of a raw label
- strip_common_affixes: looser variation without generic prefix/suffix tokens
- label_variations: the ordered forms tried for one candidate label
"""

from .service import (
    COMMON_PREFIXES,
    COMMON_SUFFIXES,
    label_variations,
    normalize,
    strip_common_affixes,
)

__all__ = [
    "normalize",
    "strip_common_affixes",
    "label_variations",
    "COMMON_PREFIXES",
    "COMMON_SUFFIXES",
]
