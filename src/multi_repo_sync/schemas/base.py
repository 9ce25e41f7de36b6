"""Base schema class for models parsed from githubkit responses."""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict


class GitHubModel(BaseModel):
    """Base class for the subset of GitHub API objects this tool reads.

    githubkit returns its own generated models; only the identifying fields
    are copied out so the rest of the code does not depend on their shape.
    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
    )

    @classmethod
    def from_response(cls, data: Any) -> Self:
        """
        Factory method to create a schema instance from githubkit parsed data.

        Args:
            data: githubkit model instance (anything exposing ``model_dump``)
                  or a plain dict

        Returns:
            Pydantic schema instance
        """
        if isinstance(data, dict):
            return cls.model_validate(data)
        return cls.model_validate(data.model_dump())

    @classmethod
    def from_response_list(cls, items: list[Any]) -> list[Self]:
        """
        Factory method to create schema instances from a list of githubkit models.

        Args:
            items: githubkit model instances or plain dicts

        Returns:
            List of Pydantic schema instances
        """
        return [cls.from_response(item) for item in items]
