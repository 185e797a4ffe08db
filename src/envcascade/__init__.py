"""envcascade - layered environment configuration loading.

Two cascades share one environment-resolution and merge core:
- dotenv: .env, .env.local, .env.{env}, .env.{env}.local into an environment sink
- structured: base, {env}, local YAML/JSON documents deep-merged into a dict

Also provides:
- logger: Structured and stream loggers
- config: Loader settings read from ENVCASCADE_* variables
- exceptions: Exception classes with structured error info
"""

__version__ = "1.0.0"

from envcascade.bootstrap import bootstrap
from envcascade.candidates import CandidateFile, CandidateRole
from envcascade.cascade import CascadeLoader, load_from_path
from envcascade.config import (
    LoaderSettings,
    MissingEnvironmentPolicy,
    get_settings,
    reset_settings,
)
from envcascade.exceptions import (
    ConfigParseError,
    ConfigurationError,
    EmptyEnvironmentError,
    EnvCascadeError,
    EnvironmentNotConfiguredError,
    EnvironmentResolutionError,
    ProtectedFileWriteError,
    RequiredConfigMissingError,
    UnsupportedFormatError,
)
from envcascade.logger import DefaultLogger, Logger, StructuredLogger, create_logger, get_logger
from envcascade.merge import deep_merge, merge_documents
from envcascade.merger import ConfigMerger, get_path, load_config
from envcascade.protection import ProtectionMode, WriteProtectionGuard
from envcascade.resolver import MarkerFileResolver, ProcessEnvironmentResolver, extract_assignment
from envcascade.sinks import EnvironmentSink, MemoryEnvironmentSink, ProcessEnvironmentSink

__all__ = [
    "__version__",
    # Loaders
    "CascadeLoader",
    "load_from_path",
    "ConfigMerger",
    "load_config",
    "get_path",
    "bootstrap",
    # Resolution
    "ProcessEnvironmentResolver",
    "MarkerFileResolver",
    "extract_assignment",
    # Merge
    "deep_merge",
    "merge_documents",
    # Candidates and sinks
    "CandidateFile",
    "CandidateRole",
    "EnvironmentSink",
    "ProcessEnvironmentSink",
    "MemoryEnvironmentSink",
    # Settings
    "LoaderSettings",
    "MissingEnvironmentPolicy",
    "get_settings",
    "reset_settings",
    # Write protection
    "WriteProtectionGuard",
    "ProtectionMode",
    # Logger
    "Logger",
    "DefaultLogger",
    "StructuredLogger",
    "create_logger",
    "get_logger",
    # Exceptions
    "EnvCascadeError",
    "ConfigurationError",
    "EnvironmentResolutionError",
    "EnvironmentNotConfiguredError",
    "EmptyEnvironmentError",
    "RequiredConfigMissingError",
    "ConfigParseError",
    "UnsupportedFormatError",
    "ProtectedFileWriteError",
]
