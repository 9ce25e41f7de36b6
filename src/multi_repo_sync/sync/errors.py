"""Errors recorded in stage failures.

Client errors (transport, auth, merge refusals) are recorded as raised by
:class:`~multi_repo_sync.github.GitHubClient`; the classes here cover the
failures the pipeline itself classifies.
"""

from .enums import BranchRole


class SyncError(Exception):
    """Base exception for pipeline-level failures."""

    def __init__(self, message: str, owner: str, repo: str) -> None:
        super().__init__(message)
        self.owner = owner
        self.repo = repo


class BranchNotFoundError(SyncError):
    """A configured branch was not found after scanning every branch page."""

    def __init__(self, owner: str, repo: str, branch: str, role: BranchRole) -> None:
        label = "origin" if role is BranchRole.ORIGIN else "target"
        super().__init__(
            f"Could not find {label} branch for repo: {repo}, branch: {branch}",
            owner,
            repo,
        )
        self.branch = branch
        self.role = role


class PullRequestValidationError(SyncError):
    """One reason GitHub gave for rejecting a pull request (HTTP 422)."""

    def __init__(self, owner: str, repo: str, reason: str) -> None:
        super().__init__(f"{reason} on repo {repo}", owner, repo)
        self.reason = reason
