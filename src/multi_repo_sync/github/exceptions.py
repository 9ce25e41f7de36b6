"""GitHub client exceptions."""

from dataclasses import dataclass
from datetime import datetime


class GitHubClientError(Exception):
    """Base exception for GitHub client errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GitHubAuthenticationError(GitHubClientError):
    """Raised when authentication fails (401)."""

    pass


class GitHubRateLimitError(GitHubClientError):
    """Raised when rate limit is exceeded (403 with rate limit headers).

    The pipeline never retries. The reset time is appended to the message so
    it shows up wherever the error is reported.
    """

    def __init__(self, message: str, reset_at: datetime | None = None) -> None:
        if reset_at is not None:
            message = f"{message} (resets at {reset_at:%Y-%m-%d %H:%M:%S} UTC)"
        super().__init__(message, status_code=403)
        self.reset_at = reset_at


class GitHubNotFoundError(GitHubClientError):
    """Raised when a resource is not found (404)."""

    pass


class GitHubMergeError(GitHubClientError):
    """Raised when GitHub refuses to merge a pull request (405 or 409)."""

    pass


@dataclass(frozen=True)
class ValidationErrorDetail:
    """One entry of the ``errors`` array of a 422 response."""

    resource: str | None = None
    field: str | None = None
    code: str | None = None
    message: str | None = None

    def describe(self) -> str:
        """Human-readable reason, falling back to code/field when GitHub sends no message."""
        if self.message:
            return self.message
        parts = [p for p in (self.resource, self.field, self.code) if p]
        return " ".join(parts) if parts else "Validation failed"


class GitHubValidationError(GitHubClientError):
    """Raised when GitHub rejects a request as unprocessable (422).

    Typical causes when opening a pull request: one already exists for the
    branch pair, or there are no commits between the branches.
    """

    def __init__(self, message: str, errors: list[ValidationErrorDetail] | None = None) -> None:
        super().__init__(message, status_code=422)
        self.errors = errors or []
