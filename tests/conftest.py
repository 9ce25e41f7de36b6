"""Pytest configuration and shared fixtures.

Usage Guide:
- For schema tests: use the dict factories in tests.factories
- For stage/orchestrator tests: use the mock_client fixture, a MagicMock
  standing in for GitHubClient with AsyncMock methods whose call counts can
  be asserted
"""

from collections.abc import Generator
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from multi_repo_sync.config import get_settings
from multi_repo_sync.logging import reset_logging
from multi_repo_sync.schemas import GitHubUser
from tests.factories import (
    make_branches,
    make_merge_result,
    make_pull_request,
    make_release,
)


@pytest.fixture(autouse=True)
def _isolate_global_state() -> Generator[None, None, None]:
    """Drop loguru sinks and cached settings between tests."""
    get_settings.cache_clear()
    yield
    reset_logging()
    get_settings.cache_clear()


# -----------------------------------------------------------------------------
# GitHub Client Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def mock_client() -> MagicMock:
    """Mock GitHubClient where every call succeeds.

    Defaults: branches ``dev`` and ``main`` on a single page, PR #42,
    merge sha ``abc123`` and release ``v1.0.0``.
    """
    client = MagicMock()
    client.get_authenticated_user = AsyncMock(
        return_value=GitHubUser(login="release-bot", id=1)
    )
    client.list_branches = AsyncMock(return_value=make_branches("dev", "main"))
    client.create_pull_request = AsyncMock(return_value=make_pull_request(42))
    client.merge_pull_request = AsyncMock(return_value=make_merge_result("abc123"))
    client.create_release = AsyncMock(return_value=make_release("v1.0.0"))
    return client


@pytest.fixture
def config_data() -> dict[str, Any]:
    """Raw JSON run configuration with one repository."""
    return {
        "pat": "ghp_test",
        "repositories": [
            {"owner": "o", "repo": "r", "origin": "dev", "target": "main"},
        ],
        "pattern": {"title": "Release sync", "body": "Promote dev to main"},
    }
