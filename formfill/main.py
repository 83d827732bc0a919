"""Command-line entry point for formfill."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from formfill.config.environment import EnvironmentConfig, load_environment_config
from formfill.config.exceptions import ConfigurationError
from formfill.config.loader import load_config, load_form, load_profile, validate_config_file
from formfill.config.models import AppConfig
from formfill.filling.service import FormFiller
from formfill.logging import get_logger
from formfill.logging.config import configure_logging
from formfill.logging.context import log_context
from formfill.matching.engine import FieldMatcher

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path],
    log_level_override: Optional[str] = None,
    profile_override: Optional[Path] = None,
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and apply overrides.

    Priority for log level and profile path: CLI > environment > config file.

    Args:
        config_path: Optional path to the configuration file
        log_level_override: Log level from the command line
        profile_override: Profile path from the command line

    Returns:
        Tuple of (AppConfig, EnvironmentConfig); env_config.log_level,
        env_config.log_format and env_config.profile_path are always resolved

    Raises:
        ConfigurationError: If configuration is invalid or no profile is given
    """
    app_config = load_config(config_path)
    env_config = load_environment_config()

    if log_level_override:
        env_config.log_level = log_level_override.upper()
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level

    if not env_config.log_format:
        env_config.log_format = app_config.logging.format

    if profile_override:
        env_config.profile_path = str(profile_override)
    elif not env_config.profile_path:
        env_config.profile_path = app_config.profile

    if not env_config.profile_path:
        raise ConfigurationError(
            "No profile file given",
            suggestions=[
                "Pass --profile path/to/profile.yaml",
                "Set FORMFILL_PROFILE in the environment or .env file",
                "Set 'profile' in the configuration file",
            ],
        )

    return app_config, env_config


def _print_match(matcher: FieldMatcher, labels: List[str], as_json: bool) -> None:
    with log_context(primary_label=labels[0]):
        match = matcher.find_match(labels[0], labels[1:])

    value = matcher.get_value(match.stored_key) if match else ""

    if as_json:
        print(json.dumps({"match": match.to_dict() if match else None, "value": value}))
    elif match is None:
        print("No match")
    else:
        print(f"{match.stored_key} ({match.match_type.value}, {match.confidence}): {value}")


def _print_fill_plan(filler: FormFiller, form_path: Path, as_json: bool) -> None:
    fields = load_form(form_path)
    report = filler.plan(fields)

    if as_json:
        print(json.dumps(report.to_dict(), ensure_ascii=False))
        return

    print(report.summary)
    for fill in report.fills:
        print(
            f"  {fill.field_label} -> {fill.stored_key} "
            f"({fill.match_type}, {fill.confidence}): {fill.value}"
        )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for success, 1 for configuration errors or an invalid
        file passed to --validate-config).
    """
    parser = argparse.ArgumentParser(
        description="formfill - match web form field labels against your stored profile"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: formfill.yaml if present)",
    )
    parser.add_argument(
        "--profile",
        type=Path,
        default=None,
        help="Profile file (YAML or JSON mapping of key to value)",
    )
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument(
        "--label",
        action="append",
        help="Field label to match; repeat for fallbacks (first one is primary)",
    )
    target.add_argument(
        "--form",
        type=Path,
        help="Form description file (YAML or JSON list of fields) to plan fills for",
    )
    target.add_argument(
        "--validate-config",
        action="store_true",
        help="Validate the file given with --config and exit",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print machine-readable JSON",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )

    args = parser.parse_args(argv)

    if args.validate_config:
        if args.config is None:
            parser.error("--validate-config requires --config")
        return 0 if validate_config_file(args.config) else 1

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level, args.profile)
        configure_logging(
            level=env_config.log_level,
            format_type=env_config.log_format,
            environment=env_config.environment,
        )

        profile = load_profile(Path(env_config.profile_path))
        logger.info(
            "Profile loaded",
            extra={
                "event": "profile.loaded",
                "profile_path": env_config.profile_path,
                "profile_keys": len(profile),
            },
        )

        matcher = FieldMatcher.from_config(profile, app_config)

        if args.label:
            _print_match(matcher, args.label, args.json)
        else:
            filler = FormFiller(
                matcher,
                enabled=app_config.fill.enabled,
                min_confidence=app_config.fill.min_confidence,
            )
            _print_fill_plan(filler, args.form, args.json)

        return 0

    except ConfigurationError as e:
        logger.error(
            "Configuration error",
            extra={"event": "config.error", "error": e.message},
        )
        print(f"Configuration error:\n{e}", file=sys.stderr)
        return 1


def cli() -> None:
    """Console script wrapper."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
