"""Early-process hook: load the dotenv cascade into os.environ.

Call once, before the host reads its configuration:

    from envcascade.bootstrap import bootstrap
    bootstrap("/srv/app")

Never raises; failures go to stderr.
"""

import os
from pathlib import Path
from typing import Dict, Optional, Union

from envcascade.cascade import CascadeLoader
from envcascade.config import LoaderSettings
from envcascade.exceptions import ConfigurationError
from envcascade.logger import DefaultLogger
from envcascade.sinks import ProcessEnvironmentSink

BASE_PATH_VAR = "ENVCASCADE_BASE_PATH"


def bootstrap(
    base_path: Optional[Union[str, Path]] = None,
    settings: Optional[LoaderSettings] = None,
) -> Dict[str, str]:
    """Load .env files from ``base_path`` (default: $ENVCASCADE_BASE_PATH or cwd)."""
    logger = DefaultLogger(min_level="WARNING")

    if base_path is None:
        base_path = os.environ.get(BASE_PATH_VAR) or Path.cwd()

    if settings is None:
        try:
            settings = LoaderSettings.from_env()
        except ConfigurationError as e:
            logger.error(f"Invalid loader settings, using defaults: {e.message}", code=e.code)
            settings = LoaderSettings()

    loader = CascadeLoader(settings=settings, sink=ProcessEnvironmentSink(), logger=logger)
    return loader.load(base_path)


__all__ = ["bootstrap", "BASE_PATH_VAR"]
