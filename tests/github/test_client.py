"""Tests for GitHubClient.

Tests cover:
- Token resolution
- Branch page listing
- PR creation and merge
- Release creation
- Translation of githubkit errors (401, 403, 404, 409, 422)
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from githubkit.exception import RequestFailed

from multi_repo_sync.github.client import GitHubClient
from multi_repo_sync.github.exceptions import (
    GitHubAuthenticationError,
    GitHubClientError,
    GitHubMergeError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    GitHubValidationError,
)
from tests.factories import (
    make_github_branch,
    make_github_merge,
    make_github_pr,
    make_github_release,
)
from tests.fixtures import (
    GITHUB_MERGE_CONFLICT_RESPONSE,
    GITHUB_PR_ALREADY_EXISTS_RESPONSE,
    GITHUB_PR_MULTIPLE_ERRORS_RESPONSE,
    GITHUB_USER_RESPONSE,
)


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def make_response(data):
    """Create a MagicMock that behaves like a githubkit Response."""
    resp = MagicMock()
    resp.parsed_data = data
    return resp


def make_request_failed(status_code: int, body=None, headers=None) -> RequestFailed:
    """Create a githubkit RequestFailed with the given status and JSON body."""
    mock_response = MagicMock()
    mock_response.status_code = status_code
    mock_response.headers = headers or {}
    if body is None:
        mock_response.json.side_effect = ValueError("no body")
    else:
        mock_response.json.return_value = body
    return RequestFailed(mock_response)


# -----------------------------------------------------------------------------
# Test Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def mock_github():
    """Create a mock githubkit GitHub client."""
    with patch("multi_repo_sync.github.client.GitHub") as mock_class:
        mock_instance = MagicMock()
        mock_class.return_value = mock_instance
        yield mock_instance


@pytest.fixture
def client(mock_github):
    return GitHubClient(token="test-token")


# -----------------------------------------------------------------------------
# Test: Initialization
# -----------------------------------------------------------------------------
class TestGitHubClientInit:
    """Tests for GitHubClient initialization."""

    def test_init_with_token(self):
        """Client initializes with provided token."""
        with patch("multi_repo_sync.github.client.get_settings") as mock_settings:
            mock_settings.return_value.github_token = ""
            client = GitHubClient(token="test-token")
            assert client._token == "test-token"

    def test_init_falls_back_to_settings(self):
        """Without an explicit token, GITHUB_TOKEN from settings is used."""
        with patch("multi_repo_sync.github.client.get_settings") as mock_settings:
            mock_settings.return_value.github_token = "env-token"
            client = GitHubClient()
            assert client._token == "env-token"

    def test_init_without_token_raises(self):
        """Client raises error when no token available."""
        with patch("multi_repo_sync.github.client.get_settings") as mock_settings:
            mock_settings.return_value.github_token = ""
            with pytest.raises(GitHubAuthenticationError):
                GitHubClient(token=None)

    async def test_context_manager_closes_on_exit(self, mock_github):
        """Async context manager drops the githubkit client on exit."""
        client = GitHubClient(token="test-token")
        _ = client._github

        async with client:
            assert client._client is not None

        assert client._client is None


# -----------------------------------------------------------------------------
# Test: Session
# -----------------------------------------------------------------------------
class TestGetAuthenticatedUser:
    async def test_returns_user(self, client, mock_github):
        mock_github.rest.users.async_get_authenticated = AsyncMock(
            return_value=make_response(GITHUB_USER_RESPONSE)
        )

        user = await client.get_authenticated_user()

        assert user.login == "release-bot"

    async def test_bad_token(self, client, mock_github):
        mock_github.rest.users.async_get_authenticated = AsyncMock(
            side_effect=make_request_failed(401)
        )

        with pytest.raises(GitHubAuthenticationError):
            await client.get_authenticated_user()


# -----------------------------------------------------------------------------
# Test: list_branches
# -----------------------------------------------------------------------------
class TestListBranches:
    async def test_returns_one_page(self, client, mock_github):
        mock_github.rest.repos.async_list_branches = AsyncMock(
            return_value=make_response([make_github_branch("main"), make_github_branch("dev")])
        )

        branches = await client.list_branches("acme", "api", page=3, per_page=100)

        assert [b.name for b in branches] == ["main", "dev"]
        mock_github.rest.repos.async_list_branches.assert_awaited_once_with(
            owner="acme", repo="api", per_page=100, page=3
        )

    async def test_parses_githubkit_models(self, client, mock_github):
        """githubkit returns models; they are dumped before validation."""
        item = MagicMock()
        item.model_dump.return_value = make_github_branch("main")
        mock_github.rest.repos.async_list_branches = AsyncMock(return_value=make_response([item]))

        branches = await client.list_branches("acme", "api")

        assert branches[0].name == "main"

    async def test_repository_not_found(self, client, mock_github):
        mock_github.rest.repos.async_list_branches = AsyncMock(
            side_effect=make_request_failed(404)
        )

        with pytest.raises(GitHubNotFoundError) as exc_info:
            await client.list_branches("acme", "missing")

        assert "acme/missing" in str(exc_info.value)


# -----------------------------------------------------------------------------
# Test: Pull Requests
# -----------------------------------------------------------------------------
class TestCreatePullRequest:
    async def test_passes_parameters(self, client, mock_github):
        mock_github.rest.pulls.async_create = AsyncMock(
            return_value=make_response(make_github_pr(7, owner="acme", repo="api"))
        )

        pr = await client.create_pull_request(
            "acme", "api", title="Release", head="develop", base="main", body="Body"
        )

        assert pr.number == 7
        mock_github.rest.pulls.async_create.assert_awaited_once_with(
            owner="acme",
            repo="api",
            title="Release",
            head="develop",
            base="main",
            body="Body",
        )

    async def test_validation_error_carries_details(self, client, mock_github):
        mock_github.rest.pulls.async_create = AsyncMock(
            side_effect=make_request_failed(422, GITHUB_PR_MULTIPLE_ERRORS_RESPONSE)
        )

        with pytest.raises(GitHubValidationError) as exc_info:
            await client.create_pull_request(
                "acme", "api", title="Release", head="develop", base="main"
            )

        error = exc_info.value
        assert error.status_code == 422
        assert str(error) == "Validation Failed"
        assert len(error.errors) == 3
        assert error.errors[0].message == "No commits between main and develop"
        # No message: described from resource/field/code
        assert error.errors[2].describe() == "PullRequest base invalid"

    async def test_validation_error_single_reason(self, client, mock_github):
        mock_github.rest.pulls.async_create = AsyncMock(
            side_effect=make_request_failed(422, GITHUB_PR_ALREADY_EXISTS_RESPONSE)
        )

        with pytest.raises(GitHubValidationError) as exc_info:
            await client.create_pull_request("acme", "api", title="t", head="develop", base="main")

        assert [e.describe() for e in exc_info.value.errors] == [
            "A pull request already exists for acme:develop."
        ]

    async def test_validation_error_without_body(self, client, mock_github):
        mock_github.rest.pulls.async_create = AsyncMock(side_effect=make_request_failed(422))

        with pytest.raises(GitHubValidationError) as exc_info:
            await client.create_pull_request("acme", "api", title="t", head="develop", base="main")

        assert exc_info.value.errors == []


class TestMergePullRequest:
    async def test_merge(self, client, mock_github):
        mock_github.rest.pulls.async_merge = AsyncMock(
            return_value=make_response(make_github_merge("abc123"))
        )

        merge = await client.merge_pull_request("acme", "api", 42)

        assert merge.sha == "abc123"
        mock_github.rest.pulls.async_merge.assert_awaited_once_with(
            owner="acme", repo="api", pull_number=42
        )

    @pytest.mark.parametrize("status", [405, 409])
    async def test_merge_refused(self, client, mock_github, status):
        mock_github.rest.pulls.async_merge = AsyncMock(
            side_effect=make_request_failed(status, GITHUB_MERGE_CONFLICT_RESPONSE)
        )

        with pytest.raises(GitHubMergeError) as exc_info:
            await client.merge_pull_request("acme", "api", 42)

        assert "Pull Request is not mergeable" in str(exc_info.value)
        assert exc_info.value.status_code == status


# -----------------------------------------------------------------------------
# Test: Releases
# -----------------------------------------------------------------------------
class TestCreateRelease:
    async def test_create_release(self, client, mock_github):
        mock_github.rest.repos.async_create_release = AsyncMock(
            return_value=make_response(make_github_release("v2.0.0", owner="acme", repo="api"))
        )

        release = await client.create_release(
            "acme", "api", tag_name="v2.0.0", target_commitish="abc123"
        )

        assert release.tag_name == "v2.0.0"
        mock_github.rest.repos.async_create_release.assert_awaited_once_with(
            owner="acme",
            repo="api",
            tag_name="v2.0.0",
            target_commitish="abc123",
            generate_release_notes=True,
            make_latest="true",
        )


# -----------------------------------------------------------------------------
# Test: Error Handling
# -----------------------------------------------------------------------------
class TestHandleError:
    """Tests for githubkit error translation."""

    def test_rate_limit_exhausted(self, client):
        reset = int(datetime(2024, 1, 15, 12, 0, tzinfo=UTC).timestamp())
        error = make_request_failed(
            403,
            headers={"x-ratelimit-remaining": "0", "x-ratelimit-reset": str(reset)},
        )

        result = client._handle_error(error)

        assert isinstance(result, GitHubRateLimitError)
        assert result.reset_at == datetime(2024, 1, 15, 12, 0, tzinfo=UTC)
        assert str(result) == "GitHub rate limit exceeded (resets at 2024-01-15 12:00:00 UTC)"

    def test_forbidden_without_rate_limit(self, client):
        error = make_request_failed(403, headers={"x-ratelimit-remaining": "10"})

        result = client._handle_error(error)

        assert type(result) is GitHubClientError
        assert result.status_code == 403

    def test_server_error(self, client):
        result = client._handle_error(make_request_failed(502))

        assert type(result) is GitHubClientError
        assert "502" in str(result)
