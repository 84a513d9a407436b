"""Exception hierarchy for semrel-py.

All errors raised by the package derive from :class:`SemrelError` so callers
can catch everything with a single ``except`` clause. Non-fatal problems
(malformed commits, unknown types) are reported as diagnostics instead of
being raised out of a release computation.
"""

from __future__ import annotations


class SemrelError(Exception):
    """Base exception for semrel-py."""

    def __init__(self, message: str, *, details: str | None = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}\n{self.details}"
        return self.message


# =============================================================================
# Configuration
# =============================================================================


class ConfigError(SemrelError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """A configuration file was expected but does not exist."""


class ConfigValidationError(ConfigError):
    """Configuration data failed validation."""


# =============================================================================
# Versions
# =============================================================================


class VersionParseError(SemrelError):
    """A string is not a valid semantic version."""


# =============================================================================
# Commits
# =============================================================================


class CommitParseError(SemrelError):
    """A commit message could not be parsed."""


class MalformedCommitError(CommitParseError):
    """The commit header does not match ``type(scope)!: subject``."""

    def __init__(self, commit_hash: str, header: str) -> None:
        self.commit_hash = commit_hash
        self.header = header
        super().__init__(
            f"Commit {commit_hash[:7] or '<unknown>'} is not a conventional commit",
            details=f"header: {header!r}",
        )


# =============================================================================
# Rendering
# =============================================================================


class TemplateSubstitutionError(SemrelError):
    """A template references a placeholder that has no value."""

    def __init__(self, template: str, placeholder: str) -> None:
        self.template = template
        self.placeholder = placeholder
        super().__init__(f"No value for placeholder {{{{{placeholder}}}}} in {template!r}")


# =============================================================================
# Release
# =============================================================================


class ReleaseError(SemrelError):
    """A release could not be computed."""


class EmptyCommitHistoryError(ReleaseError):
    """The commit history handed to the engine is empty."""
