"""GitHub API client module.

This module provides:
- GitHubClient: Async GitHub API client for branches, PRs, merges and releases
- Exceptions raised by the client
"""

from .client import GitHubClient
from .exceptions import (
    GitHubAuthenticationError,
    GitHubClientError,
    GitHubMergeError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    GitHubValidationError,
    ValidationErrorDetail,
)

__all__ = [
    # Client
    "GitHubClient",
    # Exceptions
    "GitHubAuthenticationError",
    "GitHubClientError",
    "GitHubMergeError",
    "GitHubNotFoundError",
    "GitHubRateLimitError",
    "GitHubValidationError",
    "ValidationErrorDetail",
]
