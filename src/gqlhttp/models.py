"""Response envelope and GraphQL error models."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field, field_validator

DataT = TypeVar("DataT")


class Location(BaseModel):
    """Position of an error in the GraphQL document."""

    line: int
    column: int

    model_config = {"frozen": True}


class GraphError(BaseModel):
    """A single error entry from the ``errors`` list of a response.

    ``message`` is usually a string, but some servers send structured values,
    so any JSON value is accepted.
    """

    message: Any = None
    extensions: dict[str, Any] | None = None
    locations: list[Location] = Field(default_factory=list)
    path: list[str | int] = Field(default_factory=list)

    model_config = {"frozen": True}

    @field_validator("locations", "path", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def __str__(self) -> str:
        return f"graphql: {self.message}"


class GraphResponse(BaseModel, Generic[DataT]):
    """Decoded ``{data, errors}`` envelope."""

    data: DataT | None = None
    errors: list[GraphError] = Field(default_factory=list)

    model_config = {"frozen": True}

    @field_validator("errors", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)
