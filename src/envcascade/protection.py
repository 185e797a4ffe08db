"""Write protection for deployment config files.

Hosts that persist deployment configuration (an env file and a config
file, keyed by file key) pass each pending write through
WriteProtectionGuard.filter_write before touching disk. Protected keys are
either rejected with ProtectedFileWriteError or stripped from the write.
"""

from enum import Enum
from typing import Any, Dict, Mapping, Optional

from envcascade.exceptions import ProtectedFileWriteError
from envcascade.logger import Logger, get_logger

APP_ENV = "app_env"
APP_CONFIG = "app_config"


class ProtectionMode(str, Enum):
    RAISE = "raise"
    STRIP = "strip"


class WriteProtectionGuard:
    """Block or strip writes to protected deployment files."""

    def __init__(
        self,
        protect_env: bool = True,
        protect_config: bool = False,
        mode: ProtectionMode = ProtectionMode.RAISE,
        logger: Optional[Logger] = None,
    ) -> None:
        self.protect_env = protect_env
        self.protect_config = protect_config
        self.mode = ProtectionMode(mode)
        self.logger = logger or get_logger()

    def is_protected(self, file_key: str) -> bool:
        if file_key == APP_ENV:
            return self.protect_env
        if file_key == APP_CONFIG:
            return self.protect_config
        return False

    def filter_write(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Return the part of ``data`` that may be written.

        Raises:
            ProtectedFileWriteError: In RAISE mode, for the first protected key
        """
        allowed: Dict[str, Any] = {}
        for file_key, payload in data.items():
            if not self.is_protected(file_key):
                allowed[file_key] = payload
                continue

            self.logger.warning(
                "Blocked attempt to write to a protected config file",
                file_key=file_key,
                mode=self.mode.value,
            )
            if self.mode is ProtectionMode.RAISE:
                raise ProtectedFileWriteError(file_key)
        return allowed


__all__ = ["APP_ENV", "APP_CONFIG", "ProtectionMode", "WriteProtectionGuard"]
