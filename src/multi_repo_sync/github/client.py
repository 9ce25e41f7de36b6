"""Async GitHub API client wrapper using githubkit.

This module provides the typed async interface to the GitHub REST API used by
the release pipeline: branch listing, pull request creation and merge, and
release creation. githubkit errors are translated into the exception
hierarchy in :mod:`multi_repo_sync.github.exceptions`.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from githubkit import GitHub
from githubkit.exception import RequestFailed

from multi_repo_sync.config import get_settings
from multi_repo_sync.logging import get_logger
from multi_repo_sync.schemas.github_api import (
    GitHubBranch,
    GitHubMergeResult,
    GitHubPullRequest,
    GitHubRelease,
    GitHubUser,
)

from .exceptions import (
    GitHubAuthenticationError,
    GitHubClientError,
    GitHubMergeError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    GitHubValidationError,
    ValidationErrorDetail,
)

logger = get_logger(__name__)

MakeLatest = Literal["true", "false", "legacy"]


class GitHubClient:
    """Async GitHub API client for the release pipeline.

    One instance is shared by every repository pipeline of a run; it holds no
    per-call state, so concurrent use from many tasks is safe.

    Usage:
        async with GitHubClient(token) as client:
            branches = await client.list_branches("acme", "api")
            pr = await client.create_pull_request(
                "acme", "api", title="Release", head="develop", base="main", body=""
            )
    """

    def __init__(self, token: str | None = None) -> None:
        """Initialize the GitHub client.

        Args:
            token: GitHub PAT. If not provided, uses GITHUB_TOKEN from settings.

        Raises:
            GitHubAuthenticationError: If no token is available.
        """
        self._token = token or get_settings().github_token
        if not self._token:
            raise GitHubAuthenticationError(
                "GitHub token required. Set 'pat' in the config file or GITHUB_TOKEN."
            )
        self._client: GitHub[Any] | None = None

    @property
    def _github(self) -> GitHub[Any]:
        """Get or create the githubkit client instance."""
        if self._client is None:
            self._client = GitHub(self._token)
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            self._client = None

    async def __aenter__(self) -> GitHubClient:
        """Async context manager entry."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    # -------------------------------------------------------------------------
    # Session
    # -------------------------------------------------------------------------
    async def get_authenticated_user(self) -> GitHubUser:
        """Return the user the token belongs to.

        Used as a session check before any repository is touched.

        Raises:
            GitHubAuthenticationError: If the token is rejected
        """
        try:
            resp = await self._github.rest.users.async_get_authenticated()
            return GitHubUser.from_response(resp.parsed_data)
        except RequestFailed as e:
            raise self._handle_error(e) from e

    # -------------------------------------------------------------------------
    # Branches
    # -------------------------------------------------------------------------
    async def list_branches(
        self,
        owner: str,
        repo: str,
        *,
        page: int = 1,
        per_page: int = 100,
    ) -> list[GitHubBranch]:
        """List a single page of branches for a repository.

        Callers drive pagination themselves so they can stop as soon as the
        branches they are looking for have been seen.

        Args:
            owner: Repository owner (org or user)
            repo: Repository name
            page: 1-based page number
            per_page: Results per page (max 100)

        Returns:
            Branches on the requested page (fewer than per_page on the last page)
        """
        try:
            resp = await self._github.rest.repos.async_list_branches(
                owner=owner,
                repo=repo,
                per_page=per_page,
                page=page,
            )
            logger.debug("Listed branches page {} of {}/{}", page, owner, repo)
            return GitHubBranch.from_response_list(list(resp.parsed_data))
        except RequestFailed as e:
            if e.response.status_code == 404:
                raise GitHubNotFoundError(
                    f"Repository {owner}/{repo} not found", status_code=404
                ) from e
            raise self._handle_error(e) from e

    # -------------------------------------------------------------------------
    # Pull Requests
    # -------------------------------------------------------------------------
    async def create_pull_request(
        self,
        owner: str,
        repo: str,
        *,
        title: str,
        head: str,
        base: str,
        body: str = "",
    ) -> GitHubPullRequest:
        """Open a pull request from ``head`` into ``base``.

        Args:
            owner: Repository owner
            repo: Repository name
            title: PR title
            head: Branch containing the changes
            base: Branch the changes are merged into
            body: PR description

        Returns:
            The created pull request

        Raises:
            GitHubValidationError: If GitHub rejects the PR (already exists,
                no commits between branches, ...)
        """
        try:
            resp = await self._github.rest.pulls.async_create(
                owner=owner,
                repo=repo,
                title=title,
                head=head,
                base=base,
                body=body,
            )
            return GitHubPullRequest.from_response(resp.parsed_data)
        except RequestFailed as e:
            raise self._handle_error(e) from e

    async def merge_pull_request(
        self,
        owner: str,
        repo: str,
        number: int,
    ) -> GitHubMergeResult:
        """Merge a pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            number: PR number

        Returns:
            Merge result carrying the merge commit SHA

        Raises:
            GitHubMergeError: If the PR is not mergeable (conflict, branch
                protection) or its head moved
        """
        try:
            resp = await self._github.rest.pulls.async_merge(
                owner=owner,
                repo=repo,
                pull_number=number,
            )
            return GitHubMergeResult.from_response(resp.parsed_data)
        except RequestFailed as e:
            raise self._handle_error(e) from e

    # -------------------------------------------------------------------------
    # Releases
    # -------------------------------------------------------------------------
    async def create_release(
        self,
        owner: str,
        repo: str,
        *,
        tag_name: str,
        target_commitish: str,
        generate_release_notes: bool = True,
        make_latest: MakeLatest = "true",
    ) -> GitHubRelease:
        """Create a release (and its tag) at the given commit.

        Args:
            owner: Repository owner
            repo: Repository name
            tag_name: Tag to create for the release
            target_commitish: Commit SHA or branch the tag points at
            generate_release_notes: Let GitHub write the release notes
            make_latest: Whether the release becomes the repository's latest

        Returns:
            The created release
        """
        try:
            resp = await self._github.rest.repos.async_create_release(
                owner=owner,
                repo=repo,
                tag_name=tag_name,
                target_commitish=target_commitish,
                generate_release_notes=generate_release_notes,
                make_latest=make_latest,
            )
            return GitHubRelease.from_response(resp.parsed_data)
        except RequestFailed as e:
            raise self._handle_error(e) from e

    # -------------------------------------------------------------------------
    # Error Handling
    # -------------------------------------------------------------------------
    def _handle_error(self, error: RequestFailed) -> GitHubClientError:
        """Convert githubkit exceptions to our custom exceptions."""
        status = error.response.status_code

        if status == 401:
            return GitHubAuthenticationError("Invalid GitHub token", status_code=401)
        elif status == 403:
            headers = error.response.headers
            if "x-ratelimit-remaining" in headers:
                remaining = int(headers.get("x-ratelimit-remaining", "0"))
                if remaining == 0:
                    reset_ts = int(headers.get("x-ratelimit-reset", "0"))
                    reset_at = datetime.fromtimestamp(reset_ts, tz=UTC) if reset_ts else None
                    return GitHubRateLimitError(
                        "GitHub rate limit exceeded",
                        reset_at=reset_at,
                    )
            return GitHubClientError(f"Access forbidden: {error}", status_code=403)
        elif status == 404:
            return GitHubNotFoundError(str(error), status_code=404)
        elif status in (405, 409):
            payload = self._error_payload(error)
            message = payload.get("message") or str(error)
            return GitHubMergeError(f"Merge refused ({status}): {message}", status_code=status)
        elif status == 422:
            payload = self._error_payload(error)
            details = [
                ValidationErrorDetail(
                    resource=item.get("resource"),
                    field=item.get("field"),
                    code=item.get("code"),
                    message=item.get("message"),
                )
                for item in payload.get("errors") or []
                if isinstance(item, dict)
            ]
            return GitHubValidationError(payload.get("message") or "Validation Failed", details)
        else:
            return GitHubClientError(f"GitHub API error ({status}): {error}", status_code=status)

    @staticmethod
    def _error_payload(error: RequestFailed) -> dict[str, Any]:
        """Decode the JSON body of a failed response (empty dict if there is none)."""
        try:
            payload = error.response.json()
        except ValueError:
            return {}
        return payload if isinstance(payload, dict) else {}
