"""Non-fatal problems collected while processing a commit history."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class DiagnosticKind(StrEnum):
    MALFORMED_COMMIT = "malformed_commit"
    UNKNOWN_TYPE = "unknown_type"


@dataclass(frozen=True)
class Diagnostic:
    """A problem with a single commit that did not abort the run."""

    kind: DiagnosticKind
    hash: str
    message: str

    @property
    def short_hash(self) -> str:
        return self.hash[:7]
