"""Exception classes for envcascade.

Every error carries structured information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context (paths, environment names)
"""

from typing import Any, Dict, Optional


class EnvCascadeError(Exception):
    """Base exception for all envcascade errors.

    Attributes:
        code: Machine-readable error code (e.g., "REQUIRED_CONFIG_MISSING")
        message: Human-readable error message
        details: Optional additional context for debugging
    """

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.code}: {self.message} (details: {self.details})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary for JSON output."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(EnvCascadeError):
    """Loader settings are invalid or incomplete."""

    pass


class EnvironmentResolutionError(EnvCascadeError):
    """Base for failures to determine the active environment name."""

    pass


class EnvironmentNotConfiguredError(EnvironmentResolutionError):
    """The environment marker file does not exist."""

    def __init__(self, marker_path: str):
        super().__init__(
            code="ENVIRONMENT_NOT_CONFIGURED",
            message=f"Environment not configured. Create {marker_path}",
            details={"path": marker_path},
        )


class EmptyEnvironmentError(EnvironmentResolutionError):
    """The environment marker file exists but holds nothing after trimming."""

    def __init__(self, marker_path: str):
        super().__init__(
            code="ENVIRONMENT_EMPTY",
            message=f"Environment file is empty: {marker_path}",
            details={"path": marker_path},
        )


class RequiredConfigMissingError(EnvCascadeError):
    """The base structured document is absent."""

    def __init__(self, path: str):
        super().__init__(
            code="REQUIRED_CONFIG_MISSING",
            message=f"Required config missing: {path}",
            details={"path": path},
        )


class ConfigParseError(EnvCascadeError):
    """A configuration document could not be read as a mapping.

    The message may be passed as the first positional argument,
    as in `raise ConfigParseError("bad yaml", details={...})`.
    """

    def __init__(
        self, message: str, code: str = "CONFIG_PARSE_ERROR", details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(code=code, message=message, details=details)


class UnsupportedFormatError(ConfigParseError):
    """The document extension has no registered reader."""

    def __init__(self, path: str):
        super().__init__(
            f"Unsupported config format: {path}",
            code="UNSUPPORTED_FORMAT",
            details={"path": path},
        )


class ProtectedFileWriteError(EnvCascadeError):
    """A write to a protected deployment file was blocked."""

    def __init__(self, file_key: str):
        super().__init__(
            code="PROTECTED_FILE_WRITE",
            message=(
                f"{file_key} is protected from writes. "
                "Configuration should be managed via .env files."
            ),
            details={"file_key": file_key},
        )
