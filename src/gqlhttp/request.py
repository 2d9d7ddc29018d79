"""GraphQL request value object."""

from __future__ import annotations

from dataclasses import dataclass
from typing import IO, Any


@dataclass(frozen=True)
class GraphFile:
    """A file attached to a multipart request.

    ``content`` is read once, from its current position to the end, when the
    body is encoded. Closing it stays the caller's responsibility.
    """

    field: str
    name: str
    content: IO[bytes] | bytes


class GraphRequest:
    """A GraphQL query or mutation with its variables, files and headers.

    Files are only supported by a client created with
    ``use_multipart_form=True``; the check happens when the request is run.
    """

    def __init__(self, query: str) -> None:
        self._query = query
        self._variables: dict[str, Any] | None = None
        self._files: list[GraphFile] = []
        self.headers: dict[str, list[str]] = {}

    @property
    def query(self) -> str:
        return self._query

    @property
    def variables(self) -> dict[str, Any] | None:
        return self._variables

    @property
    def files(self) -> list[GraphFile]:
        return self._files

    def var(self, name: str, value: Any) -> None:
        """Set a variable, replacing any previous value under *name*."""
        if self._variables is None:
            self._variables = {}
        self._variables[name] = value

    set_variable = var

    def file(self, field: str, name: str, content: IO[bytes] | bytes) -> None:
        """Attach a file to upload under form field *field*."""
        self._files.append(GraphFile(field=field, name=name, content=content))

    attach_file = file

    def add_header(self, name: str, value: str) -> None:
        """Append a header value; existing values under *name* are kept.

        Names and values must be ASCII; anything else fails with
        :class:`gqlhttp.EncodingError` when the request is run.
        """
        self.headers.setdefault(name, []).append(value)

    def __repr__(self) -> str:
        return f"GraphRequest(query={self._query!r}, variables={self._variables!r}, files={len(self._files)})"
