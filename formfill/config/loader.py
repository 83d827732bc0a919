"""Loaders for the app config, alias table, profile and form description files."""

import json
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from formfill.domain.models import FormField, Profile

from .exceptions import ConfigurationError
from .models import AliasRecord, AppConfig
from .validators import check_alias_warnings, check_profile_warnings, emit_warnings

DEFAULT_ALIAS_RESOURCE = "aliases.yaml"


def _parse_document(text: str, source: str, is_json: bool) -> Any:
    """Parse YAML or JSON text, raising ConfigurationError on syntax errors."""
    if is_json:
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Failed to parse JSON: {e}",
                suggestions=["Check the JSON syntax (quotes, commas, brackets)"],
                source=source,
            )

    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML: {e}",
            suggestions=[
                "Check YAML syntax in the file",
                "Ensure proper indentation (use spaces, not tabs)",
            ],
            source=source,
        )


def _read_document(path: Path) -> Any:
    """Read a YAML or JSON file; the format is picked from the suffix."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigurationError(
            "File not found",
            suggestions=[f"Ensure {path} exists and is readable"],
            source=path,
        )
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read file: {e}",
            suggestions=["Check file permissions"],
            source=path,
        )

    return _parse_document(text, str(path), Path(path).suffix.lower() == ".json")


def _find_config_file(config_path: Optional[Path] = None) -> Optional[Path]:
    """
    Find the configuration file using fallback logic.

    Args:
        config_path: Optional explicit path to config file

    Returns:
        Path to the configuration file, or None when no default file exists

    Raises:
        ConfigurationError: If an explicit path does not exist
    """
    if config_path:
        if not Path(config_path).exists():
            raise ConfigurationError(
                "Specified configuration file not found",
                suggestions=[
                    f"Ensure {config_path} exists",
                    "Omit --config to run with the built-in defaults",
                ],
                source=config_path,
            )
        return Path(config_path)

    candidates = [
        Path("formfill.yaml"),
        Path("config") / "formfill.yaml",
    ]
    for candidate in candidates:
        if candidate.exists():
            return candidate

    return None


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """
    Load and validate the application configuration.

    Looks for the file in this order:
    1. The provided config_path
    2. formfill.yaml in the current directory
    3. ./config/formfill.yaml
    4. Built-in defaults when none of the above exist

    Args:
        config_path: Optional path to configuration file

    Returns:
        Validated AppConfig

    Raises:
        ConfigurationError: If the file is unreadable or invalid
    """
    config_file = _find_config_file(config_path)
    if config_file is None:
        return AppConfig()

    config_dict = _read_document(config_file)
    if config_dict is None:
        return AppConfig()
    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            "Configuration must be a mapping at the top level",
            suggestions=["Start the file with keys such as 'profile', 'aliases' or 'fill'"],
            source=config_file,
        )

    aliases = config_dict.get("aliases")
    if isinstance(aliases, list):
        emit_warnings(check_alias_warnings(aliases))

    try:
        return AppConfig.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError.from_validation_error(
            "Configuration validation failed",
            e,
            suggestions=[
                "Check that alias concepts are written in normalized form",
                "Verify field types match the expected schema",
            ],
            source=config_file,
        )


def _alias_records_from_document(document: Any, source: str) -> List[AliasRecord]:
    if isinstance(document, dict):
        document = document.get("aliases")
    if document is None:
        return []
    if not isinstance(document, list):
        raise ConfigurationError(
            "Alias table must be a list of {concept, aliases} records",
            source=source,
        )

    emit_warnings(check_alias_warnings(document))

    records = []
    errors = []
    for idx, raw in enumerate(document):
        try:
            records.append(AliasRecord.model_validate(raw))
        except ValidationError as e:
            for item in e.errors():
                field_path = " -> ".join(str(loc) for loc in item["loc"])
                errors.append(f"aliases -> {idx} -> {field_path}: {item['msg']}")

    if errors:
        raise ConfigurationError(
            "Alias table validation failed",
            errors=errors,
            suggestions=["Each record needs a normalized 'concept' and a list of 'aliases'"],
            source=source,
        )
    return records


def load_alias_table(path: Optional[Path] = None) -> List[AliasRecord]:
    """
    Load an alias table.

    Args:
        path: YAML/JSON file holding either a list of records or a mapping with
            an ``aliases`` list. When omitted, the packaged default table is used.

    Returns:
        Alias records in file order

    Raises:
        ConfigurationError: If the file is unreadable or invalid
    """
    if path is None:
        text = resources.files("formfill.config").joinpath(DEFAULT_ALIAS_RESOURCE).read_text(
            encoding="utf-8"
        )
        document = _parse_document(text, DEFAULT_ALIAS_RESOURCE, is_json=False)
        return _alias_records_from_document(document, DEFAULT_ALIAS_RESOURCE)

    return _alias_records_from_document(_read_document(path), str(path))


def resolve_alias_table(app_config: AppConfig) -> List[AliasRecord]:
    """Return the effective alias table: packaged defaults first, then configured records."""
    records: List[AliasRecord] = []
    if app_config.use_default_aliases:
        records.extend(load_alias_table())
    records.extend(app_config.aliases)
    return records


def load_profile(path: Path) -> Dict[str, str]:
    """
    Load a profile snapshot from a YAML or JSON mapping.

    Args:
        path: Profile file path

    Returns:
        Ordered mapping of profile key to value

    Raises:
        ConfigurationError: If the file is unreadable or holds invalid entries
    """
    document = _read_document(path)
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ConfigurationError(
            "Profile must be a mapping of key to value",
            suggestions=["Write one 'key: value' pair per line"],
            source=path,
        )

    try:
        profile = Profile.model_validate({"entries": document})
    except ValidationError as e:
        raise ConfigurationError.from_validation_error(
            "Profile validation failed",
            e,
            suggestions=["Give every key a non-empty single value"],
            source=path,
        )

    emit_warnings(check_profile_warnings(profile.entries))
    return profile.as_dict()


def load_form(path: Path) -> List[FormField]:
    """
    Load form control descriptions.

    Args:
        path: YAML/JSON file holding a list of fields or a mapping with a
            ``fields`` list

    Returns:
        FormField models in document order

    Raises:
        ConfigurationError: If the file is unreadable or invalid
    """
    document = _read_document(path)
    if isinstance(document, dict):
        document = document.get("fields")
    if document is None:
        return []
    if not isinstance(document, list):
        raise ConfigurationError(
            "Form description must be a list of fields",
            source=path,
        )

    fields = []
    errors = []
    for idx, raw in enumerate(document):
        try:
            fields.append(FormField.model_validate(raw))
        except ValidationError as e:
            for item in e.errors():
                field_path = " -> ".join(str(loc) for loc in item["loc"])
                errors.append(f"fields -> {idx} -> {field_path}: {item['msg']}")

    if errors:
        raise ConfigurationError(
            "Form description validation failed",
            errors=errors,
            source=path,
        )
    return fields


def validate_config_file(config_path: Path) -> bool:
    """
    Validate a configuration file and its alias records.

    Args:
        config_path: Path to configuration file

    Returns:
        True if valid, False otherwise (errors printed to stdout)
    """
    try:
        load_config(config_path)
        print(f"✓ Configuration file {config_path} is valid")
        return True
    except ConfigurationError as e:
        print(f"✗ Configuration validation failed:\n{e}")
        return False
