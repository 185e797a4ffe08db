"""Candidate files of both cascades."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict


class CandidateRole(str, Enum):
    """Position of a file in its cascade."""

    ENV_DEFAULT = "env-default"
    ENV_LOCAL = "env-local"
    ENV_ENVIRONMENT = "env-environment"
    ENV_ENVIRONMENT_LOCAL = "env-environment-local"
    BASE = "base"
    ENVIRONMENT = "environment-specific"
    LOCAL = "local-override"


@dataclass(frozen=True)
class CandidateFile:
    """A file that may take part in a cascade.

    ``exists`` is sampled when the candidate is built and never cached
    beyond that.
    """

    path: Path
    role: CandidateRole
    exists: bool

    @classmethod
    def at(cls, path: Path, role: CandidateRole) -> "CandidateFile":
        return cls(path=path, role=role, exists=path.is_file())

    def to_dict(self) -> Dict[str, Any]:
        return {"path": str(self.path), "role": self.role.value, "exists": self.exists}


__all__ = ["CandidateRole", "CandidateFile"]
