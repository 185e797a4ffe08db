"""Tests for the envcascade exception hierarchy."""

import pytest

from envcascade.exceptions import (
    ConfigParseError,
    ConfigurationError,
    EmptyEnvironmentError,
    EnvCascadeError,
    EnvironmentNotConfiguredError,
    EnvironmentResolutionError,
    ProtectedFileWriteError,
    RequiredConfigMissingError,
    UnsupportedFormatError,
)


class TestEnvCascadeError:
    def test_basic_construction(self):
        error = EnvCascadeError("TEST_CODE", "Test message")

        assert error.code == "TEST_CODE"
        assert error.message == "Test message"
        assert error.details == {}

    def test_str_without_details(self):
        assert str(EnvCascadeError("TEST_CODE", "Test message")) == "TEST_CODE: Test message"

    def test_str_with_details(self):
        result = str(EnvCascadeError("TEST_CODE", "Test message", details={"foo": "bar"}))
        assert "TEST_CODE" in result
        assert "foo" in result

    def test_args_contains_message(self):
        assert "The error message" in EnvCascadeError("CODE", "The error message").args

    def test_to_dict(self):
        error = EnvCascadeError("CODE", "msg", details={"path": "/x"})
        assert error.to_dict() == {"code": "CODE", "message": "msg", "details": {"path": "/x"}}


class TestSpecificErrors:
    def test_not_configured(self):
        error = EnvironmentNotConfiguredError("/cfg/.environment")
        assert error.code == "ENVIRONMENT_NOT_CONFIGURED"
        assert error.message == "Environment not configured. Create /cfg/.environment"
        assert error.details == {"path": "/cfg/.environment"}

    def test_empty(self):
        error = EmptyEnvironmentError("/cfg/.environment")
        assert error.code == "ENVIRONMENT_EMPTY"
        assert error.message == "Environment file is empty: /cfg/.environment"

    def test_required_missing(self):
        error = RequiredConfigMissingError("/cfg/base.yaml")
        assert error.message == "Required config missing: /cfg/base.yaml"

    def test_parse_error_positional_message(self):
        error = ConfigParseError("bad", details={"path": "/x"})
        assert error.code == "CONFIG_PARSE_ERROR"
        assert error.message == "bad"

    def test_unsupported_format(self):
        error = UnsupportedFormatError("/cfg/base.php")
        assert error.code == "UNSUPPORTED_FORMAT"
        assert isinstance(error, ConfigParseError)

    def test_protected_write(self):
        error = ProtectedFileWriteError("app_env")
        assert error.details == {"file_key": "app_env"}
        assert "protected" in error.message

    @pytest.mark.parametrize(
        "cls",
        [
            ConfigurationError,
            EnvironmentResolutionError,
            RequiredConfigMissingError,
            ConfigParseError,
            ProtectedFileWriteError,
        ],
    )
    def test_all_inherit_from_base(self, cls):
        assert issubclass(cls, EnvCascadeError)

    def test_catch_any_resolution_failure(self):
        with pytest.raises(EnvironmentResolutionError):
            raise EmptyEnvironmentError("/x")
