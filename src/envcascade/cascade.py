"""Dotenv cascade loader.

Loads .env files in cascading order, later files winning on key collision:
1) .env (committed defaults for all environments)
2) .env.local (machine-specific overrides, not committed)
3) .env.{environment} (committed, environment-specific)
4) .env.{environment}.local (machine-specific and environment-specific)

Files 3 and 4 take part only when an environment name is resolved.
Line syntax (quoting, comments) is handled by python-dotenv.

${VAR} and ${VAR:-default} references are expanded across the whole
cascade: a later file sees keys set by earlier files and earlier lines.
Lookup order is pinned sink values, then the cascade so far, then the
inherited environment.

This runs during early bootstrap, so load() never raises: failures are
logged to the side-channel logger and an empty namespace is returned.
"""

import os
import traceback
from collections import ChainMap
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Set, Union

from dotenv import dotenv_values
from dotenv.variables import parse_variables

from envcascade.candidates import CandidateFile, CandidateRole
from envcascade.config import LoaderSettings
from envcascade.logger import DefaultLogger, Logger
from envcascade.resolver import ProcessEnvironmentResolver
from envcascade.sinks import EnvironmentSink, ProcessEnvironmentSink

DEFAULT_FILE = ".env"
LOCAL_FILE = ".env.local"


def expand_variables(value: str, scope: Mapping[str, str]) -> str:
    """Expand ${VAR} references in a raw dotenv value against ``scope``."""
    return "".join(atom.resolve(scope) for atom in parse_variables(value))


class CascadeLoader:
    """Load the .env cascade into an environment sink."""

    def __init__(
        self,
        settings: Optional[LoaderSettings] = None,
        sink: Optional[EnvironmentSink] = None,
        resolver: Optional[ProcessEnvironmentResolver] = None,
        logger: Optional[Logger] = None,
        inherited: Optional[Mapping[str, str]] = None,
    ) -> None:
        """
        Args:
            settings: Loader options (default: LoaderSettings())
            sink: Where values are read from and mirrored to (default: os.environ)
            resolver: Environment resolver (default: built from settings)
            logger: Side-channel logger (default: stderr, warnings and above)
            inherited: Parent-process variables (default: os.environ)
        """
        self.settings = settings or LoaderSettings()
        self.sink = sink if sink is not None else ProcessEnvironmentSink()
        self.resolver = resolver or ProcessEnvironmentResolver(
            variable=self.settings.env_var,
            policy=self.settings.missing_environment,
            default_environment=self.settings.default_environment,
            local_file=LOCAL_FILE,
        )
        self.logger = logger or DefaultLogger(min_level="WARNING")
        self._inherited = inherited
        # Keys this loader wrote; a reload may overwrite them
        self._managed: Set[str] = set()

    def candidates(self, base_path: Union[str, Path], environment: Optional[str]) -> List[CandidateFile]:
        """Ordered candidate files for a base path and environment."""
        base = Path(base_path)
        files = [
            CandidateFile.at(base / DEFAULT_FILE, CandidateRole.ENV_DEFAULT),
            CandidateFile.at(base / LOCAL_FILE, CandidateRole.ENV_LOCAL),
        ]
        if environment is not None:
            files.append(
                CandidateFile.at(base / f".env.{environment}", CandidateRole.ENV_ENVIRONMENT)
            )
            files.append(
                CandidateFile.at(
                    base / f".env.{environment}.local", CandidateRole.ENV_ENVIRONMENT_LOCAL
                )
            )
        return files

    def resolve_environment(self, base_path: Union[str, Path]) -> Optional[str]:
        inherited = os.environ if self._inherited is None else self._inherited
        return self.resolver.resolve(base_path, scopes=(self.sink.snapshot(), inherited))

    def load(self, base_path: Union[str, Path]) -> Dict[str, str]:
        """Load the cascade from ``base_path``.

        Returns:
            The effective key/value namespace; empty when there is no .env
            file or loading failed.
        """
        current: Optional[Path] = None
        try:
            base = Path(base_path)
            if not (base / DEFAULT_FILE).is_file():
                return {}

            existing = self.sink.snapshot()
            environment = self.resolve_environment(base)
            self.logger.debug(
                "Resolved environment",
                environment=environment,
                policy=self.settings.missing_environment.value,
            )

            # Values already in the sink that the files may not replace
            pinned: Dict[str, str] = {}
            if not self.settings.override_existing:
                pinned = {k: v for k, v in existing.items() if k not in self._managed}
            inherited = os.environ if self._inherited is None else self._inherited

            namespace: Dict[str, str] = {}
            scope = ChainMap(pinned, namespace, inherited)
            for candidate in self.candidates(base, environment):
                if not candidate.exists:
                    continue
                current = candidate.path
                for key, value in dotenv_values(candidate.path, interpolate=False).items():
                    if value is not None:
                        namespace[key] = expand_variables(value, scope)
                self.logger.debug("Loaded env file", path=str(candidate.path))
            current = None

            preserved: Set[str] = set()
            if not self.settings.override_existing:
                for key in namespace:
                    if key in existing and key not in self._managed:
                        namespace[key] = existing[key]
                        preserved.add(key)

            if self.settings.mirror:
                self.sink.update(
                    {k: v for k, v in namespace.items() if existing.get(k) != v}
                )
                self._managed.update(set(namespace) - preserved)

            return namespace
        except Exception as e:
            frame = traceback.extract_tb(e.__traceback__)[-1] if e.__traceback__ else None
            self.logger.error(
                f"Failed to load .env files: {e}",
                env_file=str(current) if current else None,
                source_file=frame.filename if frame else None,
                source_line=frame.lineno if frame else None,
            )
            return {}


def load_from_path(
    base_path: Union[str, Path],
    settings: Optional[LoaderSettings] = None,
    sink: Optional[EnvironmentSink] = None,
) -> Dict[str, str]:
    """Convenience wrapper: one CascadeLoader run."""
    return CascadeLoader(settings=settings, sink=sink).load(base_path)


__all__ = ["CascadeLoader", "load_from_path", "expand_variables", "DEFAULT_FILE", "LOCAL_FILE"]
