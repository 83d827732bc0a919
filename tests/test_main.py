"""Tests for the command-line entry point."""

import json
import logging
from pathlib import Path

import pytest

from formfill.config import ConfigurationError
from formfill.main import load_runtime_config, main

FIXTURES_DIR = Path(__file__).parent / "fixtures"
PROFILE = str(FIXTURES_DIR / "profile.yaml")
FORM = str(FIXTURES_DIR / "form.yaml")


@pytest.fixture(autouse=True)
def isolated_run(tmp_path, monkeypatch):
    """Run from an empty directory with no FORMFILL_* variables and restore logging after."""
    for name in ("FORMFILL_LOG_LEVEL", "FORMFILL_LOG_FORMAT", "FORMFILL_ENVIRONMENT", "FORMFILL_PROFILE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)

    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield tmp_path
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


class TestMatchLabel:
    """Tests for --label."""

    def test_alias_match(self, capsys):
        exit_code = main(["--profile", PROFILE, "--label", "Expected CTC *"])

        assert exit_code == 0
        assert capsys.readouterr().out.strip() == "expected_salary (exact, 100): 90000"

    def test_fallback_label_used(self, capsys):
        exit_code = main(["--profile", PROFILE, "--label", "zz", "--label", "Email"])

        assert exit_code == 0
        assert capsys.readouterr().out.strip() == "email (exact, 100): jane@example.com"

    def test_json_output(self, capsys):
        exit_code = main(["--profile", PROFILE, "--label", "Your email address", "--json"])

        assert exit_code == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload == {
            "match": {"stored_key": "email", "match_type": "contains", "confidence": 70},
            "value": "jane@example.com",
        }

    def test_no_match(self, capsys):
        exit_code = main(["--profile", PROFILE, "--label", "Favourite colour"])

        assert exit_code == 0
        assert capsys.readouterr().out.strip() == "No match"

    def test_no_match_json(self, capsys):
        main(["--profile", PROFILE, "--label", "Favourite colour", "--json"])

        assert json.loads(capsys.readouterr().out) == {"match": None, "value": ""}


class TestFillPlan:
    """Tests for --form."""

    def test_plan_json(self, capsys):
        exit_code = main(["--profile", PROFILE, "--form", FORM, "--json"])

        assert exit_code == 0
        report = json.loads(capsys.readouterr().out)
        assert report["found"] == 4
        assert report["filled"] == 3
        assert [r["matched_key"] for r in report["results"]] == [
            "email",
            "phone_country_code",
            "expected_salary",
        ]
        assert report["results"][1]["option_text"] == "India (+91)"

    def test_plan_text(self, capsys):
        main(["--profile", PROFILE, "--form", FORM])

        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "Filled 3 of 4 fields"
        assert "  email -> email (exact, 100): jane@example.com" in lines

    def test_fill_disabled_in_config(self, isolated_run, capsys):
        config_file = isolated_run / "formfill.yaml"
        config_file.write_text("fill:\n  enabled: false\n")

        main(["--profile", PROFILE, "--form", FORM])

        assert capsys.readouterr().out.strip() == "Auto-fill is disabled"


class TestErrors:
    """Tests for exit codes on failure."""

    def test_missing_profile_argument(self, capsys):
        exit_code = main(["--label", "Email"])

        assert exit_code == 1
        assert "No profile file given" in capsys.readouterr().err

    def test_profile_file_not_found(self, capsys):
        exit_code = main(["--profile", "missing.yaml", "--label", "Email"])

        assert exit_code == 1
        assert "File not found" in capsys.readouterr().err

    def test_invalid_config(self, capsys):
        exit_code = main(
            [
                "--config",
                str(FIXTURES_DIR / "invalid_concept_config.yaml"),
                "--profile",
                PROFILE,
                "--label",
                "Email",
            ]
        )

        assert exit_code == 1
        assert "Configuration error" in capsys.readouterr().err

    def test_label_or_form_required(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["--profile", PROFILE])

        assert exc_info.value.code == 2

    def test_label_and_form_are_exclusive(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["--profile", PROFILE, "--label", "Email", "--form", FORM])

        assert exc_info.value.code == 2


class TestLoadRuntimeConfig:
    """Tests for override priority in load_runtime_config()."""

    def test_config_values_used_by_default(self):
        app_config, env_config = load_runtime_config(FIXTURES_DIR / "valid_config.yaml")

        assert env_config.log_level == "WARNING"
        assert env_config.log_format == "json"
        assert env_config.profile_path == "profile.yaml"
        assert app_config.fill.min_confidence == 70

    def test_environment_beats_config(self, monkeypatch):
        monkeypatch.setenv("FORMFILL_LOG_LEVEL", "error")
        monkeypatch.setenv("FORMFILL_PROFILE", "from-env.yaml")

        _, env_config = load_runtime_config(FIXTURES_DIR / "valid_config.yaml")

        assert env_config.log_level == "ERROR"
        assert env_config.profile_path == "from-env.yaml"

    def test_cli_beats_environment(self, monkeypatch):
        monkeypatch.setenv("FORMFILL_LOG_LEVEL", "ERROR")
        monkeypatch.setenv("FORMFILL_PROFILE", "from-env.yaml")

        _, env_config = load_runtime_config(
            FIXTURES_DIR / "valid_config.yaml",
            log_level_override="debug",
            profile_override=Path("from-cli.yaml"),
        )

        assert env_config.log_level == "DEBUG"
        assert env_config.profile_path == "from-cli.yaml"

    def test_no_profile_anywhere(self):
        with pytest.raises(ConfigurationError, match="No profile file given"):
            load_runtime_config(None)

    def test_defaults_without_config_or_environment(self, capsys):
        """Test that built-in logging defaults reach configure_logging as plain strings."""
        _, env_config = load_runtime_config(None, profile_override=Path(PROFILE))

        assert env_config.log_level == "INFO"
        assert type(env_config.log_level) is str
        assert type(env_config.log_format) is str
        assert main(["--profile", PROFILE, "--label", "Email"]) == 0
        assert capsys.readouterr().out.strip() == "email (exact, 100): jane@example.com"


class TestValidateConfig:
    """Tests for --validate-config."""

    def test_valid_file(self, capsys):
        exit_code = main(["--config", str(FIXTURES_DIR / "valid_config.yaml"), "--validate-config"])

        assert exit_code == 0
        assert "is valid" in capsys.readouterr().out

    def test_invalid_file(self, capsys):
        exit_code = main(
            ["--config", str(FIXTURES_DIR / "invalid_concept_config.yaml"), "--validate-config"]
        )

        assert exit_code == 1
        assert "validation failed" in capsys.readouterr().out

    def test_needs_config_path(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["--validate-config"])

        assert exc_info.value.code == 2
