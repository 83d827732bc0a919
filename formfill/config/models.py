"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from formfill.normalization import normalize


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class AliasRecord(BaseModel):
    """One concept of the alias table and the synonym phrases registered for it.

    ``concept`` is compared against normalized profile keys, so it must already
    be in normalized form (``expected_ctc``, not ``Expected CTC``). Alias phrases
    may be written freely; they are normalized when the index is built.
    """

    concept: str = Field(..., min_length=1, description="Canonical concept name")
    aliases: List[str] = Field(
        default_factory=list,
        description="Synonym phrases resolved to the profile key owning the concept",
    )

    @field_validator("concept")
    @classmethod
    def concept_is_normalized(cls, v: str) -> str:
        """Reject concepts that would never match a normalized key."""
        stripped = v.strip()
        canonical = normalize(stripped)
        if not canonical:
            raise ValueError("Concept cannot be empty or punctuation-only")
        if canonical != stripped:
            raise ValueError(
                f"Concept '{stripped}' is not in normalized form; use '{canonical}'"
            )
        return stripped

    @field_validator("aliases")
    @classmethod
    def strip_aliases(cls, v: List[str]) -> List[str]:
        """Strip whitespace and drop blank alias phrases, keeping order."""
        return [alias.strip() for alias in v if alias and alias.strip()]

    model_config = {"frozen": True}


class FillConfig(BaseModel):
    """Settings for the fill planner."""

    enabled: bool = Field(True, description="Whether fields are filled at all")
    min_confidence: int = Field(
        0, ge=0, le=100, description="Matches below this confidence are not filled"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True, "validate_default": True}


class AppConfig(BaseModel):
    """Root configuration model."""

    profile: Optional[str] = Field(
        None, description="Path to the profile file (YAML or JSON)"
    )
    use_default_aliases: bool = Field(
        True, description="Start from the packaged alias table"
    )
    aliases: List[AliasRecord] = Field(
        default_factory=list,
        description="Additional alias records, registered after the defaults",
    )
    fill: FillConfig = Field(default_factory=FillConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("profile")
    @classmethod
    def strip_profile(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        stripped = v.strip()
        return stripped or None
