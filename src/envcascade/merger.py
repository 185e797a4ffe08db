"""Structured configuration cascade.

Loading order:
1. base (required)
2. {environment} (optional)
3. local (optional)

The environment comes from the marker file in the config directory. Each
layer is deep-merged onto the previous result. Every failure propagates to
the caller.
"""

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from envcascade.candidates import CandidateFile, CandidateRole
from envcascade.documents import DEFAULT_EXTENSIONS, find_document, read_document
from envcascade.exceptions import ConfigurationError, RequiredConfigMissingError
from envcascade.logger import Logger, get_logger
from envcascade.merge import deep_merge
from envcascade.resolver import MarkerFileResolver

BASE_STEM = "base"
LOCAL_STEM = "local"

_MISSING = object()


class ConfigMerger:
    """Load and deep-merge the structured documents of a config directory."""

    def __init__(
        self,
        resolver: Optional[MarkerFileResolver] = None,
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
        logger: Optional[Logger] = None,
    ) -> None:
        self.resolver = resolver or MarkerFileResolver()
        self.extensions = tuple(extensions)
        if not self.extensions:
            raise ConfigurationError(
                "INVALID_SETTING",
                "extensions must not be empty",
                details={"setting": "extensions"},
            )
        self.logger = logger or get_logger()

    def _candidate(self, config_dir: Path, stem: str, role: CandidateRole) -> CandidateFile:
        found = find_document(config_dir, stem, self.extensions)
        if found is None:
            return CandidateFile(config_dir / f"{stem}{self.extensions[0]}", role, False)
        return CandidateFile(found, role, True)

    def candidates(self, config_dir: Union[str, Path], environment: str) -> List[CandidateFile]:
        """The three layers in load order, with existence flags."""
        config_dir = Path(config_dir)
        return [
            self._candidate(config_dir, BASE_STEM, CandidateRole.BASE),
            self._candidate(config_dir, environment, CandidateRole.ENVIRONMENT),
            self._candidate(config_dir, LOCAL_STEM, CandidateRole.LOCAL),
        ]

    def load(self, config_dir: Union[str, Path]) -> Dict[str, Any]:
        """Resolve the environment and return the merged document.

        Raises:
            EnvironmentNotConfiguredError: The marker file is missing
            EmptyEnvironmentError: The marker file is blank
            RequiredConfigMissingError: No base document
            ConfigParseError: A document could not be read
        """
        config_dir = Path(config_dir)
        environment = self.resolver.resolve(config_dir)

        base, env_layer, local_layer = self.candidates(config_dir, environment)
        if not base.exists:
            raise RequiredConfigMissingError(str(base.path))

        config = read_document(base.path)
        applied = [base.path.name]

        for layer in (env_layer, local_layer):
            if layer.exists:
                config = deep_merge(config, read_document(layer.path))
                applied.append(layer.path.name)

        self.logger.info(
            "Structured config loaded",
            environment=environment,
            config_dir=str(config_dir),
            layers=",".join(applied),
        )
        return config


def load_config(config_dir: Union[str, Path], marker_file: str = ".environment") -> Dict[str, Any]:
    """Convenience wrapper: one ConfigMerger run."""
    return ConfigMerger(resolver=MarkerFileResolver(marker_file)).load(config_dir)


def get_path(document: Mapping[str, Any], path: str, default: Any = None) -> Any:
    """Look up a nested key written as ``a/b/c``.

    Example:
        >>> get_path({"db": {"connection": {"default": {"host": "db"}}}},
        ...          "db/connection/default/host")
        'db'
    """
    node: Any = document
    for part in path.strip("/").split("/"):
        if not isinstance(node, Mapping):
            return default
        node = node.get(part, _MISSING)
        if node is _MISSING:
            return default
    return node


__all__ = ["ConfigMerger", "load_config", "get_path"]
