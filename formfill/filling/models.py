"""Data models for fill planning results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class SkipReason(str, Enum):
    """Why a fillable control was left alone."""

    NO_CANDIDATES = "no_candidates"
    NO_MATCH = "no_match"
    LOW_CONFIDENCE = "low_confidence"
    EMPTY_VALUE = "empty_value"
    HAS_VALUE = "has_value"
    NO_OPTION = "no_option"


@dataclass(frozen=True)
class FieldFill:
    """A control the planner decided to fill.

    Attributes:
        field_label: Primary label of the control
        stored_key: Profile key that matched
        value: Value to write (for select controls, the chosen option's value)
        confidence: Match confidence
        match_type: Match rule name
        option_text: Text of the chosen option, for select controls
    """

    field_label: str
    stored_key: str
    value: str
    confidence: int
    match_type: str
    option_text: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        data: Dict[str, object] = {
            "field": self.field_label,
            "matched_key": self.stored_key,
            "value": self.value,
            "confidence": self.confidence,
            "match_type": self.match_type,
        }
        if self.option_text is not None:
            data["option_text"] = self.option_text
        return data


@dataclass(frozen=True)
class FieldSkip:
    """A fillable control the planner left alone, and why."""

    field_label: Optional[str]
    reason: SkipReason
    stored_key: Optional[str] = None


@dataclass
class FillReport:
    """Outcome of planning fills for one page.

    Attributes:
        enabled: Whether filling was enabled for this run
        found: Number of fillable controls seen
        fills: Controls to fill, in page order
        skips: Fillable controls left alone, in page order
    """

    enabled: bool = True
    found: int = 0
    fills: List[FieldFill] = field(default_factory=list)
    skips: List[FieldSkip] = field(default_factory=list)

    @property
    def filled(self) -> int:
        return len(self.fills)

    @property
    def summary(self) -> str:
        """One-line description such as 'Filled 3 of 7 fields'."""
        if not self.enabled:
            return "Auto-fill is disabled"
        if not self.fills:
            return f"No matching fields found (scanned {self.found} fields)"
        return f"Filled {self.filled} of {self.found} fields"

    def to_dict(self) -> Dict[str, object]:
        return {
            "enabled": self.enabled,
            "found": self.found,
            "filled": self.filled,
            "results": [fill.to_dict() for fill in self.fills],
            "skipped": [
                {"field": skip.field_label, "reason": skip.reason.value, "matched_key": skip.stored_key}
                for skip in self.skips
            ],
        }
