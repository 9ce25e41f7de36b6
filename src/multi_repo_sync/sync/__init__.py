"""Release pipeline - branch guard, PR creation, merge and release.

Services:
- ReleaseSyncOrchestrator: runs the stages as fleet-wide phases
- guard_branches / create_pull_request / merge_pull_request / create_release:
  the per-repository stages
"""

from .enums import BranchRole, OutputFormat, StageStatus, SyncPhase
from .errors import BranchNotFoundError, PullRequestValidationError, SyncError
from .orchestrator import ReleaseSyncOrchestrator
from .results import BranchPair, StageFailure, StageResult, StageSuccess, SyncRunResult
from .stages import (
    BRANCHES_PER_PAGE,
    create_pull_request,
    create_release,
    guard_branches,
    merge_pull_request,
)

__all__ = [
    # Orchestration
    "ReleaseSyncOrchestrator",
    "SyncRunResult",
    # Stages
    "BRANCHES_PER_PAGE",
    "create_pull_request",
    "create_release",
    "guard_branches",
    "merge_pull_request",
    # Results
    "BranchPair",
    "StageFailure",
    "StageResult",
    "StageSuccess",
    # Errors
    "BranchNotFoundError",
    "PullRequestValidationError",
    "SyncError",
    # Enums
    "BranchRole",
    "OutputFormat",
    "StageStatus",
    "SyncPhase",
]
