"""Reading structured configuration documents.

Documents are data, never code: YAML is read with ``yaml.safe_load`` and
JSON with ``json.load``. Each must hold a mapping at its root; an empty
file counts as an empty mapping.
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Sequence, TextIO

import yaml

from envcascade.exceptions import ConfigParseError, UnsupportedFormatError

DEFAULT_EXTENSIONS = (".yaml", ".yml", ".json")


def _read_yaml(stream: TextIO) -> Any:
    return yaml.safe_load(stream)


def _read_json(stream: TextIO) -> Any:
    text = stream.read()
    if not text.strip():
        return None
    return json.loads(text)


_READERS: Dict[str, Callable[[TextIO], Any]] = {
    ".yaml": _read_yaml,
    ".yml": _read_yaml,
    ".json": _read_json,
}


def read_document(path: Path) -> Dict[str, Any]:
    """Read one document into a dict.

    Raises:
        UnsupportedFormatError: No reader for the file extension
        ConfigParseError: Invalid syntax, a non-mapping root, or an unreadable file
    """
    reader = _READERS.get(path.suffix.lower())
    if reader is None:
        raise UnsupportedFormatError(str(path))

    try:
        with open(path, encoding="utf-8") as f:
            data = reader(f)
    except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigParseError(
            f"Invalid config document {path}: {e}", details={"path": str(path)}
        ) from e
    except OSError as e:
        raise ConfigParseError(
            f"Cannot read config document {path}: {e}",
            code="CONFIG_READ_ERROR",
            details={"path": str(path), "errno": e.errno},
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigParseError(
            f"Config document root must be a mapping, got {type(data).__name__}: {path}",
            details={"path": str(path), "root_type": type(data).__name__},
        )
    return data


def find_document(
    config_dir: Path, stem: str, extensions: Sequence[str] = DEFAULT_EXTENSIONS
) -> Optional[Path]:
    """First existing ``config_dir/stem{ext}`` in extension order, if any."""
    for ext in extensions:
        candidate = config_dir / f"{stem}{ext}"
        if candidate.is_file():
            return candidate
    return None


__all__ = ["DEFAULT_EXTENSIONS", "read_document", "find_document"]
