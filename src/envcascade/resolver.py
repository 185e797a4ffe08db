"""Environment name resolution.

Two strategies:

ProcessEnvironmentResolver (dotenv cascade)
    1. explicit scope: values already loaded into the environment sink
    2. inherited scope: the parent process environment
    3. the NAME = value assignment in .env.local
    4. MissingEnvironmentPolicy: None (skip) or the configured default

MarkerFileResolver (structured cascade)
    The trimmed contents of a single marker file. A missing or empty
    marker is an error; the two cases raise different exceptions.

Nothing is cached: every call reads the files and environment again.
"""

import os
import re
from pathlib import Path
from typing import Mapping, Optional, Sequence, Union

from envcascade.config import MissingEnvironmentPolicy
from envcascade.exceptions import (
    EmptyEnvironmentError,
    EnvironmentNotConfiguredError,
    EnvironmentResolutionError,
)

PathLike = Union[str, Path]


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip().strip("\"'")
    return value or None


def extract_assignment(path: PathLike, name: str) -> Optional[str]:
    """Return the value of the first ``NAME = value`` line in a file.

    Surrounding whitespace and quotes are trimmed. A missing file, no
    matching line, or an empty value all give None.
    """
    path = Path(path)
    if not path.is_file():
        return None

    content = path.read_text(encoding="utf-8", errors="replace")
    match = re.search(rf"^{re.escape(name)}[ \t]*=[ \t]*(.+)$", content, re.MULTILINE)
    if match is None:
        return None
    return _clean(match.group(1))


class ProcessEnvironmentResolver:
    """Resolve the environment name from process variables or .env.local."""

    def __init__(
        self,
        variable: str = "APP_ENV",
        policy: MissingEnvironmentPolicy = MissingEnvironmentPolicy.SKIP,
        default_environment: str = "dev",
        local_file: str = ".env.local",
    ):
        self.variable = variable
        self.policy = MissingEnvironmentPolicy(policy)
        self.default_environment = default_environment
        self.local_file = local_file

    def resolve(
        self,
        base_path: PathLike,
        scopes: Optional[Sequence[Mapping[str, str]]] = None,
    ) -> Optional[str]:
        """Return the environment name, or None when layers should be skipped.

        Args:
            base_path: Directory holding the .env files
            scopes: Variable scopes checked in order (explicit, then inherited);
                defaults to the process environment only
        """
        if scopes is None:
            scopes = (os.environ,)

        for scope in scopes:
            value = scope.get(self.variable)
            if value is not None and value.strip():
                return value

        from_file = extract_assignment(Path(base_path) / self.local_file, self.variable)
        if from_file is not None:
            return from_file

        if self.policy is MissingEnvironmentPolicy.DEFAULT:
            return self.default_environment
        return None


class MarkerFileResolver:
    """Resolve the environment name from a marker file in the config directory."""

    def __init__(self, marker_name: str = ".environment"):
        self.marker_name = marker_name

    def marker_path(self, config_dir: PathLike) -> Path:
        return Path(config_dir) / self.marker_name

    def resolve(self, config_dir: PathLike) -> str:
        """Read the marker file.

        Raises:
            EnvironmentNotConfiguredError: The marker file does not exist
            EmptyEnvironmentError: The marker file is blank
            EnvironmentResolutionError: The marker file cannot be read
        """
        marker = self.marker_path(config_dir)
        if not marker.is_file():
            raise EnvironmentNotConfiguredError(str(marker))

        try:
            environment = marker.read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError) as e:
            raise EnvironmentResolutionError(
                code="ENVIRONMENT_UNREADABLE",
                message=f"Cannot read environment file {marker}: {e}",
                details={"path": str(marker)},
            ) from e
        if not environment:
            raise EmptyEnvironmentError(str(marker))
        return environment


__all__ = ["extract_assignment", "ProcessEnvironmentResolver", "MarkerFileResolver"]
