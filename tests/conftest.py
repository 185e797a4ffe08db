"""Shared fixtures for envcascade tests."""

import io
import os
from pathlib import Path
from typing import Callable

import pytest

from envcascade.config import reset_settings
from envcascade.logger import DefaultLogger


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch):
    """Keep host variables from leaking into resolution."""
    for name in list(os.environ):
        if name == "APP_ENV" or name.startswith("ENVCASCADE_"):
            monkeypatch.delenv(name)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[..., Path]:
    """Write a text file relative to tmp_path and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def log_output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def stream_logger(log_output: io.StringIO) -> DefaultLogger:
    return DefaultLogger(output=log_output, include_timestamp=False)
