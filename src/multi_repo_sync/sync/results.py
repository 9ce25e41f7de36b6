"""Result objects threaded through the release pipeline.

Each stage returns a ``StageResult``: either a ``StageSuccess`` carrying the
forge object produced by the stage, or a ``StageFailure`` carrying every
error recorded for the repository. Failures are values; stages never raise.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeAlias, TypeVar

from pydantic import BaseModel

from multi_repo_sync.schemas.github_api import GitHubBranch

from .enums import StageStatus

T = TypeVar("T")


@dataclass(frozen=True)
class StageSuccess(Generic[T]):
    """A stage completed for one repository."""

    owner: str
    repo: str
    value: T
    """Forge object produced by the stage (branch pair, PR, merge, release)."""

    @property
    def status(self) -> StageStatus:
        return StageStatus.OK

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        value: Any = self.value
        if isinstance(value, BaseModel):
            value = value.model_dump(mode="json")
        elif isinstance(value, BranchPair):
            value = value.to_dict()
        return {
            "owner": self.owner,
            "repo": self.repo,
            "status": self.status.value,
            "result": value,
        }


@dataclass(frozen=True)
class StageFailure:
    """A stage (or an earlier one) failed for one repository."""

    owner: str
    repo: str
    errors: list[Exception] = field(default_factory=list)
    """Every error recorded, in the order they were found."""

    @property
    def status(self) -> StageStatus:
        return StageStatus.FAILED

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def messages(self) -> list[str]:
        """Error messages for reporting."""
        return [str(e) for e in self.errors]

    def propagate(self) -> StageFailure:
        """Carry this failure into the next stage without touching the forge."""
        return StageFailure(owner=self.owner, repo=self.repo, errors=list(self.errors))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "owner": self.owner,
            "repo": self.repo,
            "status": self.status.value,
            "errors": self.messages,
            "error_types": [type(e).__name__ for e in self.errors],
        }

    @classmethod
    def from_error(cls, owner: str, repo: str, error: Exception) -> StageFailure:
        """Create a single-error failure.

        Args:
            owner: Repository owner
            repo: Repository name
            error: The exception that caused the failure

        Returns:
            StageFailure with one error
        """
        return cls(owner=owner, repo=repo, errors=[error])


StageResult: TypeAlias = StageSuccess[T] | StageFailure


@dataclass(frozen=True)
class BranchPair:
    """Both branches of a repository, as found by the branch guard."""

    base: GitHubBranch
    """The origin branch (merged from)."""

    head: GitHubBranch
    """The target branch (merged into)."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "base": self.base.model_dump(mode="json"),
            "head": self.head.model_dump(mode="json"),
        }


def _stage_status(results: list[Any] | None, index: int) -> StageStatus:
    if results is None:
        return StageStatus.SKIPPED
    return results[index].status


@dataclass
class SyncRunResult:
    """Outcome of a full run: one result list per phase, aligned by input order."""

    pull_requests: list[StageResult[Any]] = field(default_factory=list)
    """Outcome of the PR phase (wait, branch guard, PR creation)."""

    merges: list[StageResult[Any]] = field(default_factory=list)
    """Outcome of the merge phase."""

    releases: list[StageResult[Any]] | None = None
    """Outcome of the release phase, None when no release name was given."""

    release_name: str | None = None
    """Tag applied to every release of the run."""

    duration_seconds: float = 0.0
    """Total time taken by all phases."""

    @property
    def release_skipped(self) -> bool:
        """True when the release phase did not run at all."""
        return self.releases is None

    @property
    def repos_succeeded(self) -> int:
        """Repositories whose last executed phase succeeded."""
        final = self.releases if self.releases is not None else self.merges
        return sum(1 for r in final if isinstance(r, StageSuccess))

    @property
    def repos_failed(self) -> int:
        """Repositories that failed at some stage."""
        return len(self.pull_requests) - self.repos_succeeded

    def repository_outcomes(self) -> list[dict[str, str]]:
        """Per-repository stage statuses, in input order."""
        outcomes: list[dict[str, str]] = []
        for index, pr in enumerate(self.pull_requests):
            outcomes.append(
                {
                    "repository": pr.full_name,
                    "pull_request": pr.status.value,
                    "merge": _stage_status(self.merges, index).value,
                    "release": _stage_status(self.releases, index).value,
                }
            )
        return outcomes

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "summary": {
                "total_repos": len(self.pull_requests),
                "repos_succeeded": self.repos_succeeded,
                "repos_failed": self.repos_failed,
                "release_name": self.release_name,
                "duration_seconds": round(self.duration_seconds, 2),
            },
            "repositories": self.repository_outcomes(),
            "pull_requests": [r.to_dict() for r in self.pull_requests],
            "merges": [r.to_dict() for r in self.merges],
            "releases": (
                [r.to_dict() for r in self.releases] if self.releases is not None else None
            ),
        }
