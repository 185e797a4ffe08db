"""Tests for environment name resolution."""

from pathlib import Path

import pytest

from envcascade.config import MissingEnvironmentPolicy
from envcascade.exceptions import (
    EmptyEnvironmentError,
    EnvironmentNotConfiguredError,
    EnvironmentResolutionError,
)
from envcascade.resolver import MarkerFileResolver, ProcessEnvironmentResolver, extract_assignment


class TestExtractAssignment:
    def test_plain_value(self, write_file):
        path = write_file(".env.local", "FOO=bar\nAPP_ENV=staging\n")
        assert extract_assignment(path, "APP_ENV") == "staging"

    def test_quotes_and_spaces_trimmed(self, write_file):
        path = write_file(".env.local", 'APP_ENV = "prod"  \n')
        assert extract_assignment(path, "APP_ENV") == "prod"

    def test_single_quotes_trimmed(self, write_file):
        path = write_file(".env.local", "APP_ENV='qa'\n")
        assert extract_assignment(path, "APP_ENV") == "qa"

    def test_first_match_wins(self, write_file):
        path = write_file(".env.local", "APP_ENV=first\nAPP_ENV=second\n")
        assert extract_assignment(path, "APP_ENV") == "first"

    def test_name_must_start_the_line(self, write_file):
        path = write_file(".env.local", "MY_APP_ENV=wrong\n# APP_ENV=commented\n")
        assert extract_assignment(path, "APP_ENV") is None

    def test_empty_quoted_value_is_none(self, write_file):
        path = write_file(".env.local", 'APP_ENV=""\n')
        assert extract_assignment(path, "APP_ENV") is None

    def test_missing_file_is_none(self, tmp_path: Path):
        assert extract_assignment(tmp_path / ".env.local", "APP_ENV") is None

    def test_other_variable_name(self, write_file):
        path = write_file("vars", "STAGE=blue\n")
        assert extract_assignment(path, "STAGE") == "blue"


class TestProcessEnvironmentResolver:
    def test_explicit_scope_first(self, tmp_path: Path):
        resolver = ProcessEnvironmentResolver()
        result = resolver.resolve(tmp_path, scopes=({"APP_ENV": "explicit"}, {"APP_ENV": "inherited"}))
        assert result == "explicit"

    def test_empty_explicit_falls_through_to_inherited(self, tmp_path: Path):
        resolver = ProcessEnvironmentResolver()
        result = resolver.resolve(tmp_path, scopes=({"APP_ENV": "  "}, {"APP_ENV": "inherited"}))
        assert result == "inherited"

    def test_local_file_after_scopes(self, tmp_path: Path, write_file):
        write_file(".env.local", "APP_ENV=from-file\n")
        resolver = ProcessEnvironmentResolver()
        assert resolver.resolve(tmp_path, scopes=({}, {})) == "from-file"

    def test_scope_beats_local_file(self, tmp_path: Path, write_file):
        write_file(".env.local", "APP_ENV=from-file\n")
        resolver = ProcessEnvironmentResolver()
        assert resolver.resolve(tmp_path, scopes=({"APP_ENV": "prod"},)) == "prod"

    def test_skip_policy_returns_none(self, tmp_path: Path):
        resolver = ProcessEnvironmentResolver(policy=MissingEnvironmentPolicy.SKIP)
        assert resolver.resolve(tmp_path, scopes=({}, {})) is None

    def test_default_policy_returns_default(self, tmp_path: Path):
        resolver = ProcessEnvironmentResolver(
            policy=MissingEnvironmentPolicy.DEFAULT, default_environment="production"
        )
        assert resolver.resolve(tmp_path, scopes=({}, {})) == "production"

    def test_custom_variable(self, tmp_path: Path):
        resolver = ProcessEnvironmentResolver(variable="STAGE")
        assert resolver.resolve(tmp_path, scopes=({"APP_ENV": "x", "STAGE": "y"},)) == "y"

    def test_defaults_to_process_environment(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("APP_ENV", "from-process")
        assert ProcessEnvironmentResolver().resolve(tmp_path) == "from-process"

    def test_not_cached(self, tmp_path: Path, write_file):
        resolver = ProcessEnvironmentResolver()
        write_file(".env.local", "APP_ENV=one\n")
        assert resolver.resolve(tmp_path, scopes=()) == "one"
        write_file(".env.local", "APP_ENV=two\n")
        assert resolver.resolve(tmp_path, scopes=()) == "two"


class TestMarkerFileResolver:
    def test_reads_trimmed_contents(self, tmp_path: Path, write_file):
        write_file(".environment", "  staging\n")
        assert MarkerFileResolver().resolve(tmp_path) == "staging"

    def test_missing_marker(self, tmp_path: Path):
        with pytest.raises(EnvironmentNotConfiguredError) as exc_info:
            MarkerFileResolver().resolve(tmp_path)

        assert exc_info.value.code == "ENVIRONMENT_NOT_CONFIGURED"
        assert str(tmp_path / ".environment") in exc_info.value.message

    def test_empty_marker(self, tmp_path: Path, write_file):
        write_file(".environment", " \n\t\n")
        with pytest.raises(EmptyEnvironmentError) as exc_info:
            MarkerFileResolver().resolve(tmp_path)

        assert exc_info.value.code == "ENVIRONMENT_EMPTY"
        assert "empty" in exc_info.value.message

    def test_missing_and_empty_share_a_base(self):
        assert issubclass(EnvironmentNotConfiguredError, EnvironmentResolutionError)
        assert issubclass(EmptyEnvironmentError, EnvironmentResolutionError)
        assert not issubclass(EnvironmentNotConfiguredError, EmptyEnvironmentError)

    def test_custom_marker_name(self, tmp_path: Path, write_file):
        write_file("ENV", "prod")
        assert MarkerFileResolver("ENV").resolve(tmp_path) == "prod"

    def test_no_character_validation(self, tmp_path: Path, write_file):
        write_file(".environment", "eu-west_1.prod")
        assert MarkerFileResolver().resolve(tmp_path) == "eu-west_1.prod"
