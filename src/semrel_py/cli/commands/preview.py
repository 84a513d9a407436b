"""Implementation of the 'preview' command.

The preview command computes the next release from commits supplied by the
caller and prints the version, diagnostics and changelog. It changes
nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from semrel_py.config import load_config
from semrel_py.core.release import ReleasePlan, prepare_release
from semrel_py.exceptions import SemrelError

if TYPE_CHECKING:
    from datetime import date

    from rich.console import Console

    from semrel_py.core.commits import RawCommit


def configure_logging(console: Console, *, verbose: bool = False) -> logging.Handler:
    """Route package logs through rich on ``console``."""
    level = logging.DEBUG if verbose else logging.WARNING
    handler = RichHandler(console=console, level=level, show_path=False, rich_tracebacks=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    package_logger = logging.getLogger("semrel_py")
    package_logger.setLevel(level)
    package_logger.handlers = [handler]
    package_logger.propagate = False
    return handler


def run_preview(
    path: str | None,
    raw_commits: Sequence[RawCommit],
    current_version: str,
    previous_tag: str | None,
    console: Console,
    err_console: Console,
    *,
    prerelease: str | None = None,
    release_date: date | None = None,
    verbose: bool = False,
) -> ReleasePlan | None:
    """Run the preview command.

    Args:
        path: Optional path to the project directory or a config file
        raw_commits: Commits since the previous release, oldest first
        current_version: Version of the previous release
        previous_tag: Tag of the previous release, ``None`` on a first release
        console: Console for standard output
        err_console: Console for error output
        prerelease: Pre-release identifier (e.g., "alpha", "beta", "rc")
        release_date: Date shown in the changelog heading
        verbose: Show debug logs

    Returns:
        The release plan, or ``None`` when there is nothing to release
    """
    configure_logging(err_console, verbose=verbose)
    project_path = Path(path) if path else Path.cwd()

    # Load configuration
    try:
        config = load_config(project_path)
    except SemrelError as e:
        err_console.print(f"[red]Error loading config:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    try:
        plan = prepare_release(
            raw_commits,
            current_version,
            config,
            previous_tag=previous_tag,
            prerelease=prerelease,
            release_date=release_date,
        )
    except SemrelError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    if plan.diagnostics:
        err_console.print(_diagnostics_table(plan))

    if not plan.should_release:
        console.print(
            "[yellow]No releasable changes found (only hidden or non-release commit types).[/]"
        )
        return None

    console.print(
        f"\n[yellow]PREVIEW[/] - Releasing [cyan]{plan.current_version}[/] "
        f"as [green]{plan.next_version}[/] ({plan.bump} bump)\n"
    )
    console.print(
        Panel(
            Markdown(plan.changelog),
            title=f"[green]Changelog for {plan.current_tag}[/]",
            border_style="green",
        )
    )
    console.print(f"[dim]Release commit:[/] {escape(plan.release_message or '')}")
    return plan


def _diagnostics_table(plan: ReleasePlan) -> Table:
    table = Table(title="Skipped or unrecognized commits", title_style="yellow")
    table.add_column("Commit", style="cyan", no_wrap=True)
    table.add_column("Kind", style="yellow")
    table.add_column("Message")
    for diagnostic in plan.diagnostics:
        table.add_row(diagnostic.short_hash, str(diagnostic.kind), escape(diagnostic.message))
    return table
