"""Main CLI application for multi-repo-sync."""

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.markup import escape

from multi_repo_sync import __version__
from multi_repo_sync.cli.common import (
    ConfigPathOption,
    OutputFormatOption,
    ReleaseOption,
    console,
    run_async_command,
)
from multi_repo_sync.cli.report import print_phase, print_summary
from multi_repo_sync.config import get_settings
from multi_repo_sync.github import GitHubClient
from multi_repo_sync.logging import get_logger, setup_logging
from multi_repo_sync.schemas.sync_config import ConfigFileError, load_sync_config
from multi_repo_sync.sync import (
    OutputFormat,
    ReleaseSyncOrchestrator,
    StageResult,
    SyncPhase,
    SyncRunResult,
)

app = typer.Typer(
    name="multi-repo-sync",
    help="Open, merge and release a pull request in every configured repository.",
    add_completion=False,
)

logger = get_logger(__name__)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"multi-repo-sync version {__version__}")
        raise typer.Exit()


@app.command()
def sync(
    config_path: ConfigPathOption = None,
    release: ReleaseOption = None,
    output_format: OutputFormatOption = OutputFormat.TEXT,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-error output (WARNING level).",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Promote origin into target in every configured repository.

    For each repository: check both branches exist, open a PR, merge it and,
    with --release, cut a release from the merge commit.

    Examples:
        multi-repo-sync
        multi-repo-sync --config fleet.json
        multi-repo-sync --config fleet.json --release v2.3.0
        multi-repo-sync -v --format json
    """
    settings = get_settings()
    log_config = settings.logging

    setup_logging(
        level=settings.log_level,
        verbose=verbose,
        quiet=quiet,
        log_file=Path(log_config.log_file) if log_config.log_file else None,
        rotation=log_config.rotation,
        retention=log_config.retention,
        serialize=log_config.serialize,
    )

    path = config_path or Path(settings.config_file)
    try:
        sync_config = load_sync_config(path)
    except ConfigFileError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from None

    if not sync_config.repositories:
        console.print(f"[yellow]No repositories configured in {path}.[/yellow]")
        return

    text_output = output_format == OutputFormat.TEXT

    def _on_phase_complete(
        phase: SyncPhase, results: Sequence[StageResult[Any]] | None
    ) -> None:
        if text_output:
            print_phase(console, phase, results)

    async def _sync() -> SyncRunResult:
        async with GitHubClient(sync_config.credential or None) as client:
            user = await client.get_authenticated_user()
            logger.info("Authenticated as {}", user.login)

            orchestrator = ReleaseSyncOrchestrator(
                client,
                sync_config,
                on_phase_complete=_on_phase_complete,
            )
            return await orchestrator.run(release_name=release)

    if text_output:
        count = len(sync_config.repositories)
        console.print(f"[dim]Syncing {count} repositories from {path}...[/dim]")
        if release:
            console.print(f"[dim]  Release: {release}[/dim]")
        console.print()

    result = run_async_command(_sync(), error_prefix="Release sync failed")

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(result.to_dict()))
        return

    print_summary(console, result)


if __name__ == "__main__":
    app()
