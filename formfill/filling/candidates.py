"""Label candidates and fillability for a form control."""

from typing import List

from formfill.domain.models import FormField

# Attributes read for labels, highest priority first
FILLABLE_ATTRIBUTES = ("name", "id", "aria-label", "placeholder", "data-name", "data-field")

SKIPPED_INPUT_TYPES = frozenset({"submit", "button", "hidden", "image", "reset", "file"})

# Values a control may hold that still count as "nothing selected"
PLACEHOLDER_VALUES = frozenset({"0", "-1"})


def field_candidates(field: FormField) -> List[str]:
    """Collect the label candidates for a control, in priority order.

    Non-blank attribute values from FILLABLE_ATTRIBUTES come first, then the
    associated label text when the control has an id.

    Args:
        field: Control description

    Returns:
        Trimmed candidate labels; the first is the primary label
    """
    candidates = []

    for attr in FILLABLE_ATTRIBUTES:
        value = field.attributes.get(attr)
        if value and value.strip():
            candidates.append(value.strip())

    if field.element_id and field.label_text and field.label_text.strip():
        candidates.append(field.label_text.strip())

    return candidates


def is_fillable(field: FormField) -> bool:
    """Whether a control can take a profile value.

    textarea and select always can; input can unless it is a button-like or
    file type; every other tag cannot.
    """
    if field.tag in ("textarea", "select"):
        return True
    if field.tag == "input":
        return field.input_type not in SKIPPED_INPUT_TYPES
    return False


def has_existing_value(value: str) -> bool:
    """Whether a control already holds a real value that must not be overwritten."""
    if not value or not value.strip():
        return False
    return value not in PLACEHOLDER_VALUES
