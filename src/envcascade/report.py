"""Read-only status report of both cascades.

Shows which environment each cascade resolves to, which files it would
load (in order, with existence flags) and a few values of the merged
structured document. Nothing is written to the process environment.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from envcascade.candidates import CandidateFile
from envcascade.cascade import DEFAULT_FILE, CascadeLoader
from envcascade.config import LoaderSettings
from envcascade.exceptions import EnvCascadeError
from envcascade.logger import Logger, get_logger
from envcascade.merger import ConfigMerger, get_path
from envcascade.resolver import MarkerFileResolver
from envcascade.sinks import MemoryEnvironmentSink

# Reported after the mode key, which comes from LoaderSettings.mode_key
DB_REPORT_KEYS = (
    "db/connection/default/host",
    "db/connection/default/dbname",
    "db/connection/default/username",
)


@dataclass
class StatusReport:
    base_path: Path
    config_dir: Path
    missing_environment_policy: str
    dotenv_enabled: bool
    dotenv_environment: Optional[str]
    dotenv_files: List[CandidateFile] = field(default_factory=list)
    config_environment: Optional[str] = None
    config_files: List[CandidateFile] = field(default_factory=list)
    config_values: Dict[str, Any] = field(default_factory=dict)
    config_error: Optional[EnvCascadeError] = None

    @property
    def ok(self) -> bool:
        return self.config_error is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "base_path": str(self.base_path),
            "config_dir": str(self.config_dir),
            "dotenv": {
                "enabled": self.dotenv_enabled,
                "environment": self.dotenv_environment,
                "missing_environment_policy": self.missing_environment_policy,
                "files": [f.to_dict() for f in self.dotenv_files],
            },
            "config": {
                "environment": self.config_environment,
                "files": [f.to_dict() for f in self.config_files],
                "values": self.config_values,
                "error": self.config_error.to_dict() if self.config_error else None,
            },
        }


def build_status(
    base_path: Union[str, Path],
    settings: Optional[LoaderSettings] = None,
    config_dir: Optional[Union[str, Path]] = None,
    keys: Optional[Sequence[str]] = None,
    logger: Optional[Logger] = None,
) -> StatusReport:
    """Inspect both cascades under ``base_path``.

    A failing structured cascade is recorded in ``config_error`` rather
    than raised. ``keys`` defaults to the settings' mode key followed by
    DB_REPORT_KEYS.
    """
    settings = settings or LoaderSettings()
    base = Path(base_path)
    resolved_dir = Path(config_dir) if config_dir else settings.resolve_config_dir(base)

    loader = CascadeLoader(settings=settings, sink=MemoryEnvironmentSink())
    dotenv_enabled = (base / DEFAULT_FILE).is_file()
    dotenv_environment = loader.resolve_environment(base)

    report = StatusReport(
        base_path=base,
        config_dir=resolved_dir,
        missing_environment_policy=settings.missing_environment.value,
        dotenv_enabled=dotenv_enabled,
        dotenv_environment=dotenv_environment,
        dotenv_files=loader.candidates(base, dotenv_environment),
    )

    merger = ConfigMerger(
        resolver=MarkerFileResolver(settings.marker_file),
        logger=logger or get_logger(),
    )
    try:
        report.config_environment = merger.resolver.resolve(resolved_dir)
        report.config_files = merger.candidates(resolved_dir, report.config_environment)
        document = merger.load(resolved_dir)
    except EnvCascadeError as e:
        report.config_error = e
        return report

    if keys is None:
        keys = (settings.mode_key,) + DB_REPORT_KEYS
    report.config_values = {key: get_path(document, key) for key in keys}
    return report


__all__ = ["StatusReport", "build_status", "DB_REPORT_KEYS"]
