"""Environment sinks: where the dotenv cascade publishes its values.

The cascade never touches ``os.environ`` directly. It reads and writes
through an EnvironmentSink so tests and hosts that prefer explicit
propagation can substitute an in-memory store.
"""

import os
import threading
from abc import ABC, abstractmethod
from typing import Dict, Mapping, MutableMapping, Optional


class EnvironmentSink(ABC):
    """Key/value store the dotenv cascade reads from and writes to."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def snapshot(self) -> Dict[str, str]:
        """Copy of every key currently held."""
        pass

    def update(self, values: Mapping[str, str]) -> None:
        for key, value in values.items():
            self.set(key, value)


class ProcessEnvironmentSink(EnvironmentSink):
    """Sink backed by the process environment table.

    Writes are serialized with a lock; the environment is expected to be
    written once at startup and only read afterwards.
    """

    _lock = threading.Lock()

    def __init__(self, environ: Optional[MutableMapping[str, str]] = None):
        self._environ = os.environ if environ is None else environ

    def get(self, key: str) -> Optional[str]:
        return self._environ.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._environ[key] = value

    def update(self, values: Mapping[str, str]) -> None:
        with self._lock:
            for key, value in values.items():
                self._environ[key] = value

    def snapshot(self) -> Dict[str, str]:
        return dict(self._environ)


class MemoryEnvironmentSink(EnvironmentSink):
    """In-memory sink for tests and explicit propagation."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def snapshot(self) -> Dict[str, str]:
        return dict(self._values)


__all__ = ["EnvironmentSink", "ProcessEnvironmentSink", "MemoryEnvironmentSink"]
