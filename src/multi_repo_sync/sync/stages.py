"""The four per-repository stages of the release pipeline.

branch guard -> create PR -> merge -> release

Every stage takes the previous stage's ``StageResult`` (the guard takes the
configured target) and returns its own. A failed input is propagated without
any call to GitHub. Exceptions raised by the client are caught here and
recorded in a ``StageFailure``; nothing escapes a repository's pipeline.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from multi_repo_sync.github.exceptions import GitHubValidationError
from multi_repo_sync.logging import bind_repo
from multi_repo_sync.schemas.github_api import (
    GitHubBranch,
    GitHubMergeResult,
    GitHubPullRequest,
    GitHubRelease,
)

from .enums import BranchRole
from .errors import BranchNotFoundError, PullRequestValidationError
from .results import BranchPair, StageFailure, StageResult, StageSuccess

if TYPE_CHECKING:
    from multi_repo_sync.github.client import GitHubClient
    from multi_repo_sync.schemas.sync_config import PRPattern, RepositoryTarget

BRANCHES_PER_PAGE = 100


async def guard_branches(
    client: GitHubClient,
    target: RepositoryTarget,
) -> StageResult[BranchPair]:
    """Check that the origin and target branches exist on GitHub.

    Pages through the branch list until both names have been seen or a short
    page signals the end of the list. One BranchNotFoundError is recorded for
    each name still missing.
    """
    log = bind_repo(target.owner, target.repo, stage="guard")
    base: GitHubBranch | None = None
    head: GitHubBranch | None = None
    page = 1

    try:
        while True:
            branches = await client.list_branches(
                target.owner, target.repo, page=page, per_page=BRANCHES_PER_PAGE
            )
            if base is None:
                base = next((b for b in branches if b.name == target.origin), None)
            if head is None:
                head = next((b for b in branches if b.name == target.target), None)

            if base is not None and head is not None:
                break
            if len(branches) < BRANCHES_PER_PAGE:
                break
            page += 1
    except Exception as e:
        log.warning("Branch listing failed: {}", e)
        return StageFailure.from_error(target.owner, target.repo, e)

    errors: list[Exception] = []
    if base is None:
        errors.append(
            BranchNotFoundError(target.owner, target.repo, target.origin, BranchRole.ORIGIN)
        )
    if head is None:
        errors.append(
            BranchNotFoundError(target.owner, target.repo, target.target, BranchRole.TARGET)
        )

    if base is None or head is None:
        log.warning("Missing branches after {} page(s): {}", page, [str(e) for e in errors])
        return StageFailure(owner=target.owner, repo=target.repo, errors=errors)

    log.debug("Found {} and {} after {} page(s)", target.origin, target.target, page)
    return StageSuccess(owner=target.owner, repo=target.repo, value=BranchPair(base=base, head=head))


async def create_pull_request(
    client: GitHubClient,
    target: RepositoryTarget,
    guarded: StageResult[BranchPair],
    pattern: PRPattern,
) -> StageResult[GitHubPullRequest]:
    """Open a PR from ``target.origin`` into ``target.target``.

    A 422 from GitHub is unpacked into one error per reason so that every
    problem is reported, not just the first.
    """
    match guarded:
        case StageFailure():
            return guarded.propagate()

    log = bind_repo(target.owner, target.repo, stage="pull_request")
    try:
        pr = await client.create_pull_request(
            target.owner,
            target.repo,
            title=pattern.title,
            head=target.origin,
            base=target.target,
            body=pattern.body,
        )
    except GitHubValidationError as e:
        reasons = [detail.describe() for detail in e.errors] or [str(e)]
        log.warning("Pull request rejected: {}", "; ".join(reasons))
        return StageFailure(
            owner=target.owner,
            repo=target.repo,
            errors=[PullRequestValidationError(target.owner, target.repo, r) for r in reasons],
        )
    except Exception as e:
        log.warning("Pull request creation failed: {}", e)
        return StageFailure.from_error(target.owner, target.repo, e)

    log.info(
        "Created PR #{} on repo {}: {} -> {}", pr.number, target.repo, target.origin, target.target
    )
    return StageSuccess(owner=target.owner, repo=target.repo, value=pr)


async def merge_pull_request(
    client: GitHubClient,
    pr_result: StageResult[GitHubPullRequest],
) -> StageResult[GitHubMergeResult]:
    """Merge the PR opened by the previous stage."""
    match pr_result:
        case StageFailure():
            return pr_result.propagate()
        case StageSuccess(owner=owner, repo=repo, value=pr):
            return await _merge(client, owner, repo, pr)


async def _merge(
    client: GitHubClient, owner: str, repo: str, pr: GitHubPullRequest
) -> StageResult[GitHubMergeResult]:
    log = bind_repo(owner, repo, stage="merge")
    try:
        merge = await client.merge_pull_request(owner, repo, pr.number)
    except Exception as e:
        log.warning("Merge of PR #{} failed: {}", pr.number, e)
        return StageFailure.from_error(owner, repo, e)

    log.info("Merged PR #{} on repo {}", pr.number, repo)
    return StageSuccess(owner=owner, repo=repo, value=merge)


async def create_release(
    client: GitHubClient,
    merge_result: StageResult[GitHubMergeResult],
    release_name: str,
) -> StageResult[GitHubRelease]:
    """Cut release ``release_name`` at the merge commit.

    The same tag name is used for every repository of a run.
    """
    match merge_result:
        case StageFailure():
            return merge_result.propagate()
        case StageSuccess(owner=owner, repo=repo, value=merge):
            return await _release(client, owner, repo, merge, release_name)


async def _release(
    client: GitHubClient, owner: str, repo: str, merge: GitHubMergeResult, release_name: str
) -> StageResult[GitHubRelease]:
    log = bind_repo(owner, repo, stage="release")
    try:
        release = await client.create_release(
            owner,
            repo,
            tag_name=release_name,
            target_commitish=merge.sha,
            generate_release_notes=True,
            make_latest="true",
        )
    except Exception as e:
        log.warning("Release {} failed: {}", release_name, e)
        return StageFailure.from_error(owner, repo, e)

    log.info("Released {} on repo {}: {}", release_name, repo, release.html_url)
    return StageSuccess(owner=owner, repo=repo, value=release)
