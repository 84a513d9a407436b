"""Conventional commit parsing.

A conventional commit message has the shape::

    type(scope)!: subject

    optional body paragraphs

    Footer-Token: value
    BREAKING CHANGE: description
    Closes #12

``(scope)`` and ``!`` are optional. Messages whose header does not match are
rejected with :class:`~semrel_py.exceptions.MalformedCommitError`; they are
never given a default type.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from semrel_py.core.diagnostics import Diagnostic, DiagnosticKind
from semrel_py.exceptions import MalformedCommitError

logger = logging.getLogger(__name__)

HEADER_PATTERN: re.Pattern[str] = re.compile(
    r"^(?P<type>[A-Za-z][\w-]*)"  # type (e.g. feat, fix, chore)
    r"(?:\((?P<scope>[^()\r\n]*)\))?"  # optional scope in parens
    r"(?P<breaking>!)?"  # optional breaking change indicator
    r":[ \t]+"
    r"(?P<subject>\S.*)$"
)

# Start of a footer entry: "Token: value" or "Token #value".
FOOTER_TOKEN_PATTERN: re.Pattern[str] = re.compile(
    r"^(?P<token>BREAKING[ -]CHANGE|[A-Za-z][\w-]*)(?::[ \t]+|[ \t]+(?=#))(?P<value>.*)$"
)

BREAKING_TOKENS = frozenset({"BREAKING CHANGE", "BREAKING-CHANGE"})

# Issue references: "#12" or "owner/repo#12".
REFERENCE_PATTERN: re.Pattern[str] = re.compile(r"(?:[\w.-]+/[\w.-]+)?#\d+")


@dataclass(frozen=True)
class RawCommit:
    """A commit as supplied by the commit-history source."""

    hash: str
    message: str
    author: str | None = None


@dataclass(frozen=True)
class CommitRecord:
    """A parsed conventional commit."""

    hash: str
    type_tag: str
    subject: str
    scope: str | None = None
    body: str | None = None
    breaking_change: bool = False
    footer_references: tuple[str, ...] = ()
    breaking_notes: tuple[str, ...] = ()
    author: str | None = None

    @property
    def short_hash(self) -> str:
        return self.hash[:7]


@dataclass(frozen=True)
class ParseResult:
    """Commits that parsed, plus diagnostics for the ones that did not."""

    commits: list[CommitRecord] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)


def parse_commit(raw: RawCommit) -> CommitRecord:
    """Parse one raw commit.

    Raises:
        MalformedCommitError: If the header is not a conventional commit header
    """
    lines = raw.message.strip().splitlines()
    header = lines[0].strip() if lines else ""

    match = HEADER_PATTERN.match(header)
    if not match:
        raise MalformedCommitError(raw.hash, header)

    body_lines, footers = _split_footers(lines[1:])

    breaking = bool(match.group("breaking"))
    notes: list[str] = []
    references: list[str] = []
    for token, value in footers:
        if token in BREAKING_TOKENS:
            breaking = True
            notes.append(value)
            continue
        for reference in REFERENCE_PATTERN.findall(value):
            if reference not in references:
                references.append(reference)

    body = "\n".join(body_lines).strip() or None
    scope = match.group("scope")

    return CommitRecord(
        hash=raw.hash,
        type_tag=match.group("type").lower(),
        subject=match.group("subject").strip(),
        scope=scope if scope else None,
        body=body,
        breaking_change=breaking,
        footer_references=tuple(references),
        breaking_notes=tuple(notes),
        author=raw.author,
    )


def _split_footers(lines: Sequence[str]) -> tuple[list[str], list[tuple[str, str]]]:
    """Split the lines after the header into body lines and footer entries.

    Footers are the trailing paragraphs that each open with a footer token,
    so a body paragraph such as ``Note: ...`` stays in the body. A
    ``BREAKING CHANGE`` paragraph starts the footer block wherever it is.
    Lines that do not start a new token continue the previous entry.
    """
    paragraph_starts = [
        index
        for index, line in enumerate(lines)
        if line.strip() and (index == 0 or not lines[index - 1].strip())
    ]

    start = None
    for index in reversed(paragraph_starts):
        if not FOOTER_TOKEN_PATTERN.match(lines[index]):
            break
        start = index

    for index in paragraph_starts:
        if start is not None and index >= start:
            break
        match = FOOTER_TOKEN_PATTERN.match(lines[index])
        if match and match.group("token") in BREAKING_TOKENS:
            start = index
            break

    if start is None:
        return list(lines), []

    footers: list[tuple[str, str]] = []
    for line in lines[start:]:
        match = FOOTER_TOKEN_PATTERN.match(line)
        if match:
            footers.append((match.group("token"), match.group("value").strip()))
        elif footers and line.strip():
            token, value = footers[-1]
            footers[-1] = (token, f"{value}\n{line.strip()}".strip())
    return list(lines[:start]), footers


def parse_commits(raw_commits: Iterable[RawCommit]) -> ParseResult:
    """Parse a commit history, collecting malformed commits as diagnostics.

    Order is preserved; malformed commits are excluded from the result.
    """
    result = ParseResult()
    for raw in raw_commits:
        try:
            record = parse_commit(raw)
        except MalformedCommitError as e:
            logger.debug("Skipping malformed commit %s: %r", raw.hash[:7], e.header)
            result.diagnostics.append(
                Diagnostic(kind=DiagnosticKind.MALFORMED_COMMIT, hash=raw.hash, message=str(e))
            )
            continue
        logger.debug("Parsed commit %s as %r", record.short_hash, record.type_tag)
        result.commits.append(record)
    return result


def filter_skip_release_commits(
    commits: Iterable[RawCommit],
    patterns: Sequence[str],
) -> list[RawCommit]:
    """Drop commits whose message contains a skip-release marker.

    Markers are matched case-insensitively anywhere in the message.
    """
    if not patterns:
        return list(commits)

    lowered = [p.lower() for p in patterns]
    kept = []
    for commit in commits:
        message = commit.message.lower()
        if any(p in message for p in lowered):
            logger.debug("Commit %s carries a skip-release marker", commit.hash[:7])
            continue
        kept.append(commit)
    return kept
