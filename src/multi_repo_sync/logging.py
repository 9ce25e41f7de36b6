"""Logging setup for multi-repo-sync, built on loguru.

Every record carries a ``name`` extra: the module for ``get_logger`` loggers,
``sync`` plus a ``repo`` (and ``stage``) for pipeline loggers, and the stdlib
logger name for records forwarded from httpx, which githubkit uses.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from loguru import logger

if TYPE_CHECKING:
    from loguru import Logger

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

CONSOLE_FORMAT = (
    "<dim>{time:HH:mm:ss}</dim> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>{extra[repo_suffix]} - "
    "<level>{message}</level>"
)

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[name]} | {extra} | {message}"


class InterceptHandler(logging.Handler):
    """Forward stdlib log records to loguru under the stdlib logger's name."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging's own frames so loguru reports the real caller
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).bind(name=record.name).log(
            level, record.getMessage()
        )


def _add_repo_suffix(record: dict) -> None:
    repo = record["extra"].get("repo")
    record["extra"]["repo_suffix"] = f" [{repo}]" if repo else ""


def setup_logging(
    level: LogLevel = "INFO",
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    serialize: bool = False,
) -> Logger:
    """Configure loguru sinks for a CLI run.

    ``verbose`` (DEBUG) wins over ``quiet`` (WARNING); either overrides
    ``level``. The optional file sink always records DEBUG and above.
    """
    effective: LogLevel = "DEBUG" if verbose else "WARNING" if quiet else level

    logger.remove()
    logger.configure(extra={"name": "multi_repo_sync"}, patcher=_add_repo_suffix)
    logger.add(sys.stderr, level=effective, format=CONSOLE_FORMAT, colorize=True, diagnose=False)

    if log_file:
        logger.add(
            log_file,
            level="DEBUG",
            format=FILE_FORMAT,
            rotation=rotation,
            retention=retention,
            compression="gz",
            serialize=serialize,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    # httpx logs every request at INFO
    transport_level = logging.DEBUG if effective in ("TRACE", "DEBUG") else logging.WARNING
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(transport_level)

    return logger


def get_logger(name: str) -> Logger:
    """Logger bound to a module name: ``logger = get_logger(__name__)``."""
    return logger.bind(name=name)


def bind_repo(owner: str, repo: str, *, stage: str | None = None) -> Logger:
    """Logger for one repository's pipeline, optionally tagged with its stage."""
    context = {"name": "sync", "repo": f"{owner}/{repo}"}
    if stage is not None:
        context["stage"] = stage
    return logger.bind(**context)


def reset_logging() -> None:
    """Drop every sink and the default extras (used between tests)."""
    logger.remove()
    logger.configure(extra={})
