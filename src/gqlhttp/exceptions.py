"""Custom exception hierarchy for gqlhttp.

All gqlhttp exceptions inherit from :class:`GqlHttpError`, making it easy
to catch any library error with a single ``except`` clause while still allowing
callers to branch on the specific failure mode of a request.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from gqlhttp.models import GraphError, GraphResponse


class GqlHttpError(Exception):
    """Base exception for all gqlhttp errors."""


class ConfigError(GqlHttpError):
    """Raised when client configuration cannot be read or validated."""


class CancellationError(GqlHttpError):
    """Raised when the caller's context was cancelled or its deadline passed."""


class ConfigurationMismatchError(GqlHttpError):
    """Raised when a request carries files but the client is not in multipart mode."""


class EncodingError(GqlHttpError):
    """Raised when the request body cannot be built."""


class TransportError(GqlHttpError):
    """Raised when the transport failed to send the request.

    The exception raised by the transport is kept as ``__cause__``.
    """


class BodyReadError(GqlHttpError):
    """Raised when the response body cannot be buffered."""


class DecodeError(GqlHttpError):
    """Raised when a 200 response body is not a valid GraphQL envelope."""


class HTTPStatusError(GqlHttpError):
    """Raised when the server answers with a non-200 status code.

    Attributes:
        status_code: HTTP status returned by the server.
        body: Raw response body.
        response: Decoded envelope when the body happened to parse, else None.
    """

    def __init__(
        self,
        status_code: int,
        *,
        body: bytes = b"",
        response: GraphResponse[Any] | None = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        self.response = response
        super().__init__(f"graphql: server returned a non-200 status code: {status_code}")


class GraphQLError(GqlHttpError):
    """Raised when the server executed the request but reported errors.

    The first error is surfaced as the exception message; every error stays
    available, in server order, on ``response.errors``.
    """

    def __init__(self, error: GraphError, response: GraphResponse[Any]) -> None:
        self.error = error
        self.response = response
        super().__init__(str(error))

    @property
    def message(self) -> Any:
        return self.error.message

    @property
    def extensions(self) -> dict[str, Any] | None:
        return self.error.extensions

    @property
    def errors(self) -> list[GraphError]:
        return list(self.response.errors)
