"""Dataclass-based settings for the envcascade loaders.

Every option can be given explicitly or read from environment variables
under a parameterized prefix (default: ENVCASCADE).
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional

from envcascade.exceptions import ConfigurationError

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class MissingEnvironmentPolicy(str, Enum):
    """What the dotenv cascade does when no environment name is found.

    SKIP: load only .env and .env.local
    DEFAULT: use LoaderSettings.default_environment
    """

    SKIP = "skip"
    DEFAULT = "default"


def _parse_bool(value: Optional[str], name: str, default: bool) -> bool:
    if value is None or value.strip() == "":
        return default
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(
        "INVALID_SETTING",
        f"{name} must be a boolean, got {value!r}",
        details={"setting": name, "value": value},
    )


@dataclass
class LoaderSettings:
    """Options shared by both cascades

    Attributes:
        env_var: Variable naming the active environment (e.g. APP_ENV)
        missing_environment: Policy applied when env_var cannot be resolved
        default_environment: Name used under MissingEnvironmentPolicy.DEFAULT
        mirror: Write the dotenv namespace into the environment sink
        override_existing: Let files override variables already in the sink
        config_dir: Structured document directory, relative to the base path
        marker_file: Marker file name inside config_dir
        mode_key: Top-level structured key reported as the application mode
    """

    env_var: str = "APP_ENV"
    missing_environment: MissingEnvironmentPolicy = MissingEnvironmentPolicy.SKIP
    default_environment: str = "dev"
    mirror: bool = True
    override_existing: bool = False
    config_dir: Path = Path("app/etc/env")
    marker_file: str = ".environment"
    mode_key: str = "MAGE_MODE"

    def __post_init__(self) -> None:
        if isinstance(self.config_dir, str):
            self.config_dir = Path(self.config_dir)

        if not isinstance(self.missing_environment, MissingEnvironmentPolicy):
            try:
                self.missing_environment = MissingEnvironmentPolicy(
                    str(self.missing_environment).strip().lower()
                )
            except ValueError:
                allowed = [p.value for p in MissingEnvironmentPolicy]
                raise ConfigurationError(
                    "INVALID_SETTING",
                    f"Invalid missing-environment policy {self.missing_environment!r}. "
                    f"Expected one of {allowed}.",
                    details={"setting": "missing_environment"},
                ) from None

        if not self.env_var.strip():
            raise ConfigurationError(
                "INVALID_SETTING", "env_var must not be empty", details={"setting": "env_var"}
            )

        if (
            self.missing_environment is MissingEnvironmentPolicy.DEFAULT
            and not self.default_environment.strip()
        ):
            raise ConfigurationError(
                "INVALID_SETTING",
                "default_environment is required when the missing-environment policy is 'default'",
                details={"setting": "default_environment"},
            )

    @classmethod
    def from_env(
        cls,
        prefix: str = "ENVCASCADE",
        env: Optional[Mapping[str, str]] = None,
    ) -> "LoaderSettings":
        """Load settings from environment variables

        Args:
            prefix: Environment variable prefix
            env: Mapping to read instead of os.environ

        Environment variables:
            {prefix}_ENV_VAR: Variable naming the environment (default: APP_ENV)
            {prefix}_MISSING_ENV: "skip" or "default" (default: skip)
            {prefix}_DEFAULT_ENV: Default environment name (default: dev)
            {prefix}_MIRROR: Mirror values into the process environment (default: true)
            {prefix}_OVERRIDE: Files override existing variables (default: false)
            {prefix}_CONFIG_DIR: Structured config directory (default: app/etc/env)
            {prefix}_MARKER_FILE: Marker file name (default: .environment)
            {prefix}_MODE_KEY: Mode key shown by the status report (default: MAGE_MODE)
        """
        source = os.environ if env is None else env

        return cls(
            env_var=source.get(f"{prefix}_ENV_VAR", "APP_ENV"),
            missing_environment=source.get(f"{prefix}_MISSING_ENV", "skip"),  # type: ignore[arg-type]
            default_environment=source.get(f"{prefix}_DEFAULT_ENV", "dev"),
            mirror=_parse_bool(source.get(f"{prefix}_MIRROR"), f"{prefix}_MIRROR", True),
            override_existing=_parse_bool(
                source.get(f"{prefix}_OVERRIDE"), f"{prefix}_OVERRIDE", False
            ),
            config_dir=Path(source.get(f"{prefix}_CONFIG_DIR", "app/etc/env")),
            marker_file=source.get(f"{prefix}_MARKER_FILE", ".environment"),
            mode_key=source.get(f"{prefix}_MODE_KEY", "MAGE_MODE"),
        )

    def resolve_config_dir(self, base_path: Path) -> Path:
        """Absolute config directory for a base path."""
        if self.config_dir.is_absolute():
            return self.config_dir
        return Path(base_path) / self.config_dir


_settings: Optional[LoaderSettings] = None


def get_settings(reload: bool = False, prefix: str = "ENVCASCADE") -> LoaderSettings:
    """Get the process-wide settings, reading the environment on first use."""
    global _settings
    if _settings is None or reload:
        _settings = LoaderSettings.from_env(prefix=prefix)
    return _settings


def reset_settings() -> None:
    """Forget the cached settings (for tests)."""
    global _settings
    _settings = None
