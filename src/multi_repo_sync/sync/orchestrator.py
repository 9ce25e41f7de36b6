"""Release Sync Orchestrator - promote a branch across many repositories.

Runs the per-repository stages as three fleet-wide phases:

1. pull requests: pre-flight wait, branch guard, PR creation
2. merges
3. releases (only when a release name is given)

Within a phase all repositories run concurrently. A phase only starts once
every repository has settled the previous one, so no merge is attempted
before all PR creations have finished, and no release before all merges.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from multi_repo_sync.logging import bind_repo, get_logger
from multi_repo_sync.schemas.github_api import (
    GitHubMergeResult,
    GitHubPullRequest,
    GitHubRelease,
)

from .enums import StageStatus, SyncPhase
from .results import StageResult, SyncRunResult
from .stages import create_pull_request, create_release, guard_branches, merge_pull_request

if TYPE_CHECKING:
    from multi_repo_sync.github.client import GitHubClient
    from multi_repo_sync.schemas.sync_config import RepositoryTarget, SyncConfig

logger = get_logger(__name__)

PhaseCallback = Callable[[SyncPhase, Sequence[StageResult[Any]] | None], None]


class ReleaseSyncOrchestrator:
    """Drives the release pipeline across every configured repository.

    Usage:
        config = load_sync_config(Path("config.json"))
        async with GitHubClient(config.credential) as client:
            orchestrator = ReleaseSyncOrchestrator(client, config)
            result = await orchestrator.run(release_name="v1.4.0")
    """

    def __init__(
        self,
        client: GitHubClient,
        config: SyncConfig,
        on_phase_complete: PhaseCallback | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            client: GitHub API client shared by every repository pipeline
            config: Run configuration (read-only)
            on_phase_complete: Optional callback invoked with each phase's
                               results as soon as the phase has settled.
                               Receives None for a skipped release phase.
        """
        self._client = client
        self._config = config
        self._on_phase_complete = on_phase_complete

    # -------------------------------------------------------------------------
    # Phases
    # -------------------------------------------------------------------------
    async def open_pull_requests(
        self,
        targets: Sequence[RepositoryTarget],
    ) -> list[StageResult[GitHubPullRequest]]:
        """Wait, guard branches and open a PR for every repository."""
        return list(await asyncio.gather(*(self._open_pull_request(t) for t in targets)))

    async def merge_pull_requests(
        self,
        pull_requests: Sequence[StageResult[GitHubPullRequest]],
    ) -> list[StageResult[GitHubMergeResult]]:
        """Merge every PR opened by the previous phase."""
        return list(
            await asyncio.gather(*(merge_pull_request(self._client, pr) for pr in pull_requests))
        )

    async def create_releases(
        self,
        merges: Sequence[StageResult[GitHubMergeResult]],
        release_name: str | None,
    ) -> list[StageResult[GitHubRelease]] | None:
        """Cut a release for every merged repository.

        Returns None (no results at all) when no release name was given.
        """
        if not release_name:
            return None
        return list(
            await asyncio.gather(
                *(create_release(self._client, merge, release_name) for merge in merges)
            )
        )

    async def _open_pull_request(
        self,
        target: RepositoryTarget,
    ) -> StageResult[GitHubPullRequest]:
        if target.wait_seconds > 0:
            bind_repo(target.owner, target.repo).debug(
                "Waiting {}s before starting", target.wait_seconds
            )
            await asyncio.sleep(target.wait_seconds)
        guarded = await guard_branches(self._client, target)
        return await create_pull_request(self._client, target, guarded, self._config.pattern)

    # -------------------------------------------------------------------------
    # Full run
    # -------------------------------------------------------------------------
    async def run(self, release_name: str | None = None) -> SyncRunResult:
        """Run every phase over every configured repository.

        Args:
            release_name: Tag for the release phase. When None or empty the
                          release phase is skipped for the whole run.

        Returns:
            SyncRunResult with one result list per phase.
        """
        start_time = time.monotonic()
        targets = self._config.repositories
        result = SyncRunResult(release_name=release_name or None)

        logger.info("Starting release sync for {} repositories", len(targets))

        result.pull_requests = await self.open_pull_requests(targets)
        self._phase_complete(SyncPhase.PULL_REQUESTS, result.pull_requests)

        result.merges = await self.merge_pull_requests(result.pull_requests)
        self._phase_complete(SyncPhase.MERGES, result.merges)

        result.releases = await self.create_releases(result.merges, release_name)
        self._phase_complete(SyncPhase.RELEASES, result.releases)

        result.duration_seconds = time.monotonic() - start_time

        logger.info(
            "Release sync complete: repos={}, succeeded={}, failed={} ({:.1f}s)",
            len(targets),
            result.repos_succeeded,
            result.repos_failed,
            result.duration_seconds,
        )
        return result

    def _phase_complete(
        self,
        phase: SyncPhase,
        results: Sequence[StageResult[Any]] | None,
    ) -> None:
        if results is None:
            logger.info("Phase {} skipped (no release name)", phase.value)
        else:
            failed = sum(1 for r in results if r.status is StageStatus.FAILED)
            logger.info(
                "Phase {} settled: ok={}, failed={}", phase.value, len(results) - failed, failed
            )
        if self._on_phase_complete is not None:
            self._on_phase_complete(phase, results)
