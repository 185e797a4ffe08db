"""
Stream logger used as the bootstrap side channel.

Writes single formatted lines straight to a stream (stderr by default)
without touching the `logging` module, which the host may not have
configured yet when the dotenv cascade runs.
"""

import sys
import uuid
from datetime import datetime, timezone
from typing import Any, Optional, TextIO

from .interface import Logger

_LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40, "CRITICAL": 50}


class DefaultLogger(Logger):
    """Plain stream logger with session tracking.

    Example:
        logger = DefaultLogger(name="envcascade", min_level="WARNING")
        logger.error("Failed to load .env files", source_file="/srv/.env")
    """

    def __init__(
        self,
        name: str = "envcascade",
        output: Optional[TextIO] = None,
        include_timestamp: bool = True,
        min_level: str = "DEBUG",
    ):
        """Initialize the stream logger.

        Args:
            name: Logger name (included in every line)
            output: Output stream; resolved to sys.stderr at write time when None
            include_timestamp: Whether to prefix lines with an ISO timestamp
            min_level: Lowest level name that is written
        """
        self._name = name
        self._session_id = str(uuid.uuid4())
        self._output = output
        self._include_timestamp = include_timestamp
        self._min_level = _LEVELS.get(min_level.upper(), 10)

    def get_session_id(self) -> str:
        return self._session_id

    def _format_message(self, level: str, message: str, **kwargs: Any) -> str:
        parts = []

        if self._include_timestamp:
            parts.append(datetime.now(timezone.utc).isoformat())

        parts.append(f"[{level}]")
        parts.append(f"[{self._name}]")
        parts.append(f"[session:{self._session_id[:8]}]")
        parts.append(message)

        if kwargs:
            extra = " ".join(f"{k}={v}" for k, v in kwargs.items())
            parts.append(f"({extra})")

        return " ".join(parts)

    def _log(self, level: str, message: str, **kwargs: Any) -> None:
        if _LEVELS[level] < self._min_level:
            return
        stream = self._output if self._output is not None else sys.stderr
        print(self._format_message(level, message, **kwargs), file=stream, flush=True)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log("DEBUG", message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log("INFO", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log("WARNING", message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log("ERROR", message, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._log("CRITICAL", message, **kwargs)
