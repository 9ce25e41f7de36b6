"""Common CLI option types and helpers.

This module centralizes reusable CLI options and provides
`run_async_command`, the unified async execution wrapper with error handling.
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from pathlib import Path
from typing import Annotated, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from multi_repo_sync.sync.enums import OutputFormat

# Shared console instance for CLI output
console = Console()

T = TypeVar("T")


def run_async_command(
    coro: Coroutine[object, object, T],
    *,
    error_prefix: str = "Error",
) -> T:
    """Execute async code from synchronous CLI command with unified error handling.

    Uses asyncio.run() for clean event loop management. Catches exceptions,
    prints user-friendly error messages, and exits with code 1.

    Args:
        coro: Async coroutine to execute
        error_prefix: Prefix for error messages (default: "Error")

    Returns:
        Result from the coroutine

    Raises:
        typer.Exit: Re-raised from deliberate exits, or raised with code 1 on error
    """
    try:
        return asyncio.run(coro)
    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]{error_prefix}:[/red] {escape(str(e))}")
        raise typer.Exit(1) from None


# Typer requires function calls as default arguments, which triggers B008.
# Using Annotated with a centralized type alias keeps the noqa in one place.

OutputFormatOption = Annotated[
    OutputFormat,
    typer.Option(
        "--format",
        "-f",
        help="Output format",
    ),
]
"""Output format option type for CLI commands.

Usage:
    def command(output_format: OutputFormatOption = OutputFormat.TEXT):
"""

ConfigPathOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to the JSON config file (defaults to CONFIG_FILE or ./config.json)",
        dir_okay=False,
    ),
]
"""Config file override option.

Usage:
    def command(config_path: ConfigPathOption = None):
"""

ReleaseOption = Annotated[
    str | None,
    typer.Option(
        "--release",
        "-r",
        help="Tag name for a release cut from each merge commit. "
        "Without it no release is created.",
    ),
]
"""Release tag option; its absence disables the release phase.

Usage:
    def command(release: ReleaseOption = None):
"""
