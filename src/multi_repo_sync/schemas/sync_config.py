"""Pydantic schemas for the JSON run configuration.

Example file::

    {
        "pat": "ghp_...",
        "repositories": [
            {"owner": "acme", "repo": "api", "origin": "develop", "target": "main", "wait": 2}
        ],
        "pattern": {"title": "Release", "body": "Promote develop to main"}
    }
"""

import json
from pathlib import Path
from typing import Annotated

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    ValidationError,
)

# Names are trimmed; PR text is sent exactly as written
Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ConfigFileError(ValueError):
    """Raised when the run configuration file cannot be read or validated."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Invalid config file {path}: {reason}")
        self.path = path
        self.reason = reason


class _ConfigModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
    )


class RepositoryTarget(_ConfigModel):
    """One repository to promote from ``origin`` into ``target``.

    ``origin != target`` is not checked here; GitHub rejects such a PR
    and the failure is reported like any other.
    """

    owner: Name = Field(description="GitHub org or user")
    repo: Name = Field(description="Repository name")
    origin: Name = Field(description="Branch to merge from")
    target: Name = Field(description="Branch to merge into")
    wait_seconds: float = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("wait", "wait_seconds"),
        description="Delay before this repository's pipeline starts",
    )

    @property
    def full_name(self) -> str:
        """Repository path in owner/repo form."""
        return f"{self.owner}/{self.repo}"


class PRPattern(_ConfigModel):
    """Title and body applied verbatim to every pull request of a run."""

    title: str = Field(min_length=1, description="Pull request title")
    body: str = Field(default="", description="Pull request body")


class SyncConfig(_ConfigModel):
    """Process-wide run configuration, loaded once at start-up."""

    credential: Annotated[str, StringConstraints(strip_whitespace=True)] = Field(
        default="",
        validation_alias=AliasChoices("pat", "credential"),
        description="GitHub token used for every API call",
    )
    repositories: list[RepositoryTarget] = Field(
        default_factory=list,
        description="Repositories processed by the run, in report order",
    )
    pattern: PRPattern = Field(description="Shared pull request title/body")


def load_sync_config(path: Path) -> SyncConfig:
    """Read and validate a JSON run configuration.

    Args:
        path: Location of the config file

    Returns:
        Validated SyncConfig

    Raises:
        ConfigFileError: If the file is missing, not JSON, or invalid
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigFileError(path, e.strerror or str(e)) from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigFileError(path, f"not valid JSON ({e})") from e

    try:
        return SyncConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigFileError(path, str(e)) from e
