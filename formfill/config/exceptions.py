"""Exceptions raised while loading configuration, alias tables and profiles."""

from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError


class ConfigurationError(Exception):
    """
    Raised when a configuration, alias table or profile file cannot be used.

    Carries the list of individual problems and suggestions for fixing them,
    rendered together into the exception message.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        suggestions: Optional[List[str]] = None,
        source: Optional[Union[str, Path]] = None,
    ):
        """
        Initialize ConfigurationError.

        Args:
            message: Primary error message
            errors: Individual validation errors
            suggestions: Hints for fixing the errors
            source: File the error relates to, if any
        """
        self.message = message
        self.errors = errors or []
        self.suggestions = suggestions or []
        self.source = str(source) if source is not None else None
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]
        if self.source:
            parts[0] = f"{self.message} ({self.source})"

        if self.errors:
            parts.append("\nValidation Errors:")
            for i, error in enumerate(self.errors, 1):
                parts.append(f"  {i}. {error}")

        if self.suggestions:
            parts.append("\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"  - {suggestion}")

        return "\n".join(parts)

    @classmethod
    def from_validation_error(
        cls,
        message: str,
        error: ValidationError,
        suggestions: Optional[List[str]] = None,
        source: Optional[Union[str, Path]] = None,
    ) -> "ConfigurationError":
        """Build a ConfigurationError from a pydantic ValidationError.

        Each pydantic error becomes one line naming the offending field path.
        """
        errors = []
        for item in error.errors():
            field_path = " -> ".join(str(loc) for loc in item["loc"]) or "<root>"
            error_type = item["type"]

            if error_type == "missing":
                errors.append(f"Missing required field: {field_path}")
            elif error_type in ("string_type", "int_type", "bool_type", "list_type", "dict_type"):
                expected = error_type.replace("_type", "")
                errors.append(
                    f"Invalid type for '{field_path}': expected {expected}, got {item.get('input')!r}"
                )
            elif "enum" in error_type:
                errors.append(f"Invalid value for '{field_path}': {item['msg']}")
            else:
                errors.append(f"{field_path}: {item['msg']}")

        return cls(message, errors=errors, suggestions=suggestions, source=source)
