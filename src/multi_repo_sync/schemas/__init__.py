"""Pydantic schemas for multi-repo-sync.

This module provides GitHub API response models and the run configuration.
"""

from .base import GitHubModel
from .github_api import (
    GitHubBranch,
    GitHubCommitRef,
    GitHubMergeResult,
    GitHubPRRef,
    GitHubPullRequest,
    GitHubRelease,
    GitHubUser,
)
from .sync_config import (
    ConfigFileError,
    PRPattern,
    RepositoryTarget,
    SyncConfig,
    load_sync_config,
)

__all__ = [
    # Base
    "GitHubModel",
    # GitHub API
    "GitHubBranch",
    "GitHubCommitRef",
    "GitHubMergeResult",
    "GitHubPRRef",
    "GitHubPullRequest",
    "GitHubRelease",
    "GitHubUser",
    # Run configuration
    "ConfigFileError",
    "PRPattern",
    "RepositoryTarget",
    "SyncConfig",
    "load_sync_config",
]
