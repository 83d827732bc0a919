"""Fill planning on top of the matcher.

This module provides:
- field_candidates / is_fillable: label extraction from control descriptions
- select_option: option choice for select controls
- FormFiller: per-page fill decisions returned as a FillReport
"""

from .candidates import FILLABLE_ATTRIBUTES, field_candidates, has_existing_value, is_fillable
from .models import FieldFill, FieldSkip, FillReport, SkipReason
from .options import select_option
from .service import FormFiller

__all__ = [
    "FormFiller",
    "FillReport",
    "FieldFill",
    "FieldSkip",
    "SkipReason",
    "FILLABLE_ATTRIBUTES",
    "field_candidates",
    "has_existing_value",
    "is_fillable",
    "select_option",
]
