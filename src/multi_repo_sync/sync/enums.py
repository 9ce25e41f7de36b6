"""Enums for the release pipeline."""

from enum import Enum


class SyncPhase(str, Enum):
    """Fleet-wide phases, run one after another.

    Every repository settles a phase before any repository enters the next.
    """

    PULL_REQUESTS = "pull_requests"
    """Pre-flight wait, branch guard and PR creation."""

    MERGES = "merges"
    """Merge of the PRs opened in the previous phase."""

    RELEASES = "releases"
    """Release cut from the merge commit (only when a release name is given)."""


class StageStatus(str, Enum):
    """Outcome of one stage for one repository."""

    OK = "ok"
    FAILED = "failed"
    SKIPPED = "skipped"

    @property
    def glyph(self) -> str:
        """Status glyph used in the report tables."""
        return {"ok": "✅", "failed": "❌", "skipped": "➖"}[self.value]


class BranchRole(str, Enum):
    """Which side of the sync a branch is on."""

    ORIGIN = "origin"
    """Branch merged from (the PR head)."""

    TARGET = "target"
    """Branch merged into (the PR base)."""


class OutputFormat(str, Enum):
    """Output format for CLI commands."""

    TEXT = "text"
    """Human-readable tables."""

    JSON = "json"
    """Machine-readable JSON output."""
