"""Core domain models for profiles and form controls.

This module defines the data structures passed between the loaders, the
matcher and the fill planner:
- Profile: validated snapshot of the user's key/value facts
- SelectOption: one option of a choice control
- FormField: plain-data description of a form control as seen on a page
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


def _coerce_scalar(value: Any) -> Any:
    """Turn YAML scalars (numbers, booleans) into the strings a form would hold."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


class Profile(BaseModel):
    """Snapshot of the user's stored facts.

    Keys and values are trimmed and must be non-empty. Entry order is kept
    as given, since it decides which key owns an alias concept.
    """

    entries: Dict[str, str] = Field(default_factory=dict, description="Key to value mapping")

    @field_validator("entries", mode="before")
    @classmethod
    def coerce_entries(cls, v: Any) -> Any:
        """Coerce scalar values to strings and trim keys and values."""
        if v is None:
            return {}
        if not isinstance(v, dict):
            return v

        cleaned: Dict[Any, Any] = {}
        for key, value in v.items():
            if value is None:
                raise ValueError(f"Profile key '{key}' has no value")
            if isinstance(value, (dict, list)):
                raise ValueError(f"Profile key '{key}' must hold a single value, not a {type(value).__name__}")
            key_str = str(_coerce_scalar(key)).strip()
            value = _coerce_scalar(value)
            if isinstance(value, str):
                value = value.strip()
            if not key_str:
                raise ValueError("Profile keys cannot be empty or whitespace-only")
            if value == "":
                raise ValueError(f"Profile key '{key_str}' has an empty value")
            cleaned[key_str] = value
        return cleaned

    def as_dict(self) -> Dict[str, str]:
        """Return a plain copy of the entries."""
        return dict(self.entries)

    model_config = {"json_schema_extra": {"example": {
        "entries": {
            "first_name": "Jane",
            "expected_salary": "90000",
            "phone_country_code": "+91",
        }
    }}}


class SelectOption(BaseModel):
    """One option of a choice control."""

    value: str = Field("", description="Submitted value of the option")
    text: str = Field("", description="Visible option text")

    @field_validator("value", "text", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Any:
        if v is None:
            return ""
        return _coerce_scalar(v)

    model_config = {"frozen": True}


class FormField(BaseModel):
    """Plain-data description of a form control.

    Whatever scans the page fills these in; nothing here touches a real DOM.
    ``label_text`` is the text of the ``<label for=...>`` pointing at the
    control, when there is one.
    """

    tag: str = Field("input", description="Element tag name (input, textarea, select)")
    type: Optional[str] = Field(None, description="Value of the type attribute, if any")
    attributes: Dict[str, str] = Field(
        default_factory=dict, description="Attribute name to attribute value"
    )
    label_text: Optional[str] = Field(None, description="Associated label text")
    value: str = Field("", description="Value the control currently holds")
    options: List[SelectOption] = Field(
        default_factory=list, description="Options of a select control"
    )

    @field_validator("tag")
    @classmethod
    def lower_tag(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("attributes", mode="before")
    @classmethod
    def coerce_attributes(cls, v: Any) -> Any:
        """Drop attributes without a value and stringify scalars."""
        if not isinstance(v, dict):
            return v
        return {
            str(name).lower(): str(_coerce_scalar(value))
            for name, value in v.items()
            if value is not None
        }

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v: Any) -> Any:
        if v is None:
            return ""
        return _coerce_scalar(v)

    @property
    def input_type(self) -> str:
        """Effective input type, defaulting to ``text`` like a browser does."""
        declared = self.type or self.attributes.get("type") or "text"
        return declared.strip().lower() or "text"

    @property
    def element_id(self) -> Optional[str]:
        return self.attributes.get("id") or None
