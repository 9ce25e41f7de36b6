"""Test fixtures for multi-repo-sync."""

from .github_responses import (
    GITHUB_BRANCH_RESPONSE,
    GITHUB_MERGE_CONFLICT_RESPONSE,
    GITHUB_MERGE_RESPONSE,
    GITHUB_PR_ALREADY_EXISTS_RESPONSE,
    GITHUB_PR_CREATED_RESPONSE,
    GITHUB_PR_MULTIPLE_ERRORS_RESPONSE,
    GITHUB_RELEASE_RESPONSE,
    GITHUB_USER_RESPONSE,
)

__all__ = [
    # Successful responses
    "GITHUB_BRANCH_RESPONSE",
    "GITHUB_MERGE_RESPONSE",
    "GITHUB_PR_CREATED_RESPONSE",
    "GITHUB_RELEASE_RESPONSE",
    "GITHUB_USER_RESPONSE",
    # Error bodies
    "GITHUB_MERGE_CONFLICT_RESPONSE",
    "GITHUB_PR_ALREADY_EXISTS_RESPONSE",
    "GITHUB_PR_MULTIPLE_ERRORS_RESPONSE",
]
