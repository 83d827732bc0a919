"""Option selection for choice controls.

This is a separate, simpler fuzzy matcher than the label matcher. Options
are scanned in order with the lowercased, trimmed profile value:

1. Exact match on option value or text: selected immediately.
2. Contains match (value longer than one character found in the option text
   or value): remembered; selected immediately if the text starts with it.
3. Dialling-code match (value starts with ``+`` or is all digits): remembered
   when the option text contains the value or the digits in parentheses,
   e.g. ``+91`` against ``India (+91)`` or ``India (91)``.

When no option is selected immediately, the last remembered option wins.
"""

import re
from typing import Optional, Sequence

from formfill.domain.models import SelectOption

_DIGITS_RE = re.compile(r"^\d+$")


def _looks_like_dial_code(value: str) -> bool:
    return value.startswith("+") or bool(_DIGITS_RE.match(value))


def select_option(options: Sequence[SelectOption], value: object) -> Optional[SelectOption]:
    """Pick the option of a choice control that best represents a value.

    Args:
        options: Options in document order
        value: Profile value to represent

    Returns:
        The chosen option, or None when nothing fits
    """
    wanted = str(value).strip().lower() if value is not None else ""
    if not wanted:
        return None

    chosen: Optional[SelectOption] = None

    for option in options:
        option_value = option.value.lower()
        option_text = option.text.lower()

        if option_value == wanted or option_text == wanted:
            return option

        if len(wanted) > 1 and (wanted in option_text or wanted in option_value):
            chosen = option
            if option_text.startswith(wanted):
                return option

        if _looks_like_dial_code(wanted):
            digits = wanted.replace("+", "", 1)
            if wanted in option_text or f"({digits})" in option_text:
                chosen = option

    return chosen
