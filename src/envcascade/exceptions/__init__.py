"""Exceptions for envcascade.

All exceptions include structured error information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context for debugging

The structured pipeline raises these; the dotenv cascade catches and logs them.

Usage:
    from envcascade.exceptions import (
        EnvCascadeError,
        EnvironmentNotConfiguredError,
        EmptyEnvironmentError,
        RequiredConfigMissingError,
    )
"""

from envcascade.exceptions.base import (
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

__all__ = [
    "EnvCascadeError",
    "ConfigurationError",
    "EnvironmentResolutionError",
    "EnvironmentNotConfiguredError",
    "EmptyEnvironmentError",
    "RequiredConfigMissingError",
    "ConfigParseError",
    "UnsupportedFormatError",
    "ProtectedFileWriteError",
]
