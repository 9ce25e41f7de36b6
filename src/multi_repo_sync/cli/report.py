"""Rich tables summarizing each phase of a run."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from multi_repo_sync.schemas.github_api import (
    GitHubMergeResult,
    GitHubPullRequest,
    GitHubRelease,
)
from multi_repo_sync.sync.enums import SyncPhase
from multi_repo_sync.sync.results import (
    BranchPair,
    StageFailure,
    StageResult,
    StageSuccess,
    SyncRunResult,
)

PHASE_TITLES = {
    SyncPhase.PULL_REQUESTS: "Pull requests",
    SyncPhase.MERGES: "Merges",
    SyncPhase.RELEASES: "Releases",
}


def describe_result(value: Any) -> str:
    """Short human-readable description of a stage's forge object."""
    match value:
        case GitHubPullRequest():
            return f"{value.title} {value.html_url}"
        case GitHubMergeResult():
            return f"{value.message} {value.sha}".strip()
        case GitHubRelease():
            return value.html_url
        case BranchPair():
            return f"{value.base.name} -> {value.head.name}"
        case _:
            return str(value)


def build_phase_table(phase: SyncPhase, results: Sequence[StageResult[Any]]) -> Table:
    """Build the table for one phase: one row per repository, in input order."""
    table = Table(title=PHASE_TITLES[phase])
    table.add_column("Repo", style="cyan")
    table.add_column("Owner")
    table.add_column("Status", justify="center")
    table.add_column("Result")
    table.add_column("Errors", style="red")

    for result in results:
        match result:
            case StageSuccess():
                text, errors = describe_result(result.value), ""
            case StageFailure():
                text, errors = "No result", "\n".join(result.messages)
        table.add_row(
            escape(result.repo),
            escape(result.owner),
            result.status.glyph,
            escape(text),
            escape(errors),
        )

    return table


def print_phase(
    console: Console,
    phase: SyncPhase,
    results: Sequence[StageResult[Any]] | None,
) -> None:
    """Print a phase table, or a notice when the phase was skipped."""
    if results is None:
        console.print(f"[dim]{PHASE_TITLES[phase]}: skipped (no --release given)[/dim]")
        return
    console.print(build_phase_table(phase, results))


def print_summary(console: Console, result: SyncRunResult) -> None:
    """Print the closing summary lines of a run."""
    console.print()
    console.print("[bold]Release Sync Complete[/bold]")
    console.print(f"  Repositories: {len(result.pull_requests)}")
    console.print(f"  [green]Succeeded:[/green]    {result.repos_succeeded}")
    if result.repos_failed:
        console.print(f"  [red]Failed:[/red]       {result.repos_failed}")
    if result.release_name:
        console.print(f"  Release:      {result.release_name}")
    console.print(f"  Duration: {result.duration_seconds:.1f}s")
