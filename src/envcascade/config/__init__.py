"""Loader settings for envcascade.

Example:
    from envcascade.config import LoaderSettings, MissingEnvironmentPolicy

    settings = LoaderSettings.from_env()
    settings = LoaderSettings(missing_environment=MissingEnvironmentPolicy.DEFAULT)
"""

from envcascade.config.settings import (
    LoaderSettings,
    MissingEnvironmentPolicy,
    get_settings,
    reset_settings,
)

__all__ = [
    "LoaderSettings",
    "MissingEnvironmentPolicy",
    "get_settings",
    "reset_settings",
]
