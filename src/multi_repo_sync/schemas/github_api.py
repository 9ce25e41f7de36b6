"""Pydantic schemas for parsing GitHub API responses.

These schemas map onto the GitHub REST API response structure, keeping only
what the release pipeline reads: branch names, PR number/title/URL, merge
message/SHA and release URL.
See: https://docs.github.com/en/rest
"""

from pydantic import Field

from .base import GitHubModel


class GitHubUser(GitHubModel):
    """GitHub user object from API responses."""

    login: str = Field(description="GitHub username")
    id: int = Field(description="GitHub user ID")


class GitHubCommitRef(GitHubModel):
    """Latest commit reference attached to a branch."""

    sha: str = Field(description="Commit SHA")
    url: str = Field(default="", description="API URL of the commit")


class GitHubBranch(GitHubModel):
    """GitHub branch object from the list branches endpoint.

    Maps to: GET /repos/{owner}/{repo}/branches
    """

    name: str = Field(description="Branch name")
    commit: GitHubCommitRef = Field(description="Latest commit on the branch")
    protected: bool = Field(default=False, description="Whether branch protection is enabled")


class GitHubPRRef(GitHubModel):
    """Head or base reference of a pull request."""

    ref: str = Field(description="Branch name")
    sha: str = Field(description="Commit SHA the ref pointed at")


class GitHubPullRequest(GitHubModel):
    """GitHub Pull Request object as returned on creation.

    Maps to: POST /repos/{owner}/{repo}/pulls
    """

    number: int = Field(description="PR number")
    title: str = Field(description="PR title")
    html_url: str = Field(description="GitHub PR URL")
    state: str = Field(default="open", description="PR state (open, closed)")
    head: GitHubPRRef | None = Field(default=None, description="Branch merged from")
    base: GitHubPRRef | None = Field(default=None, description="Branch merged into")


class GitHubMergeResult(GitHubModel):
    """Result of merging a pull request.

    Maps to: PUT /repos/{owner}/{repo}/pulls/{pull_number}/merge
    """

    sha: str = Field(description="SHA of the merge commit")
    merged: bool = Field(default=True, description="Whether the merge happened")
    message: str = Field(default="", description="Forge message about the merge")


class GitHubRelease(GitHubModel):
    """GitHub release object.

    Maps to: POST /repos/{owner}/{repo}/releases
    """

    id: int = Field(description="Release ID")
    tag_name: str = Field(description="Tag the release points at")
    name: str | None = Field(default=None, description="Release title")
    html_url: str = Field(description="GitHub release URL")
    target_commitish: str = Field(default="", description="Commit or branch the tag was cut from")
