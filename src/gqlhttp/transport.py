"""Transport capability used by :class:`gqlhttp.GraphClient`.

Any object with an async ``send(request) -> response`` method can carry
requests for the client: :class:`httpx.AsyncClient` satisfies the protocol
directly, and so do test doubles that never touch the network.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import httpx


@runtime_checkable
class Transport(Protocol):
    """Structural-typing protocol for HTTP transports.

    Implementations are shared across concurrent calls and must be safe for
    concurrent use.
    """

    async def send(self, request: httpx.Request) -> httpx.Response:
        """Send *request* and return the server response.

        Args:
            request: Fully built HTTP request.

        Returns:
            The response; its body may still be unread.
        """
        ...


def default_transport() -> httpx.AsyncClient:
    """Create the pooling HTTP client used when no transport is injected."""
    return httpx.AsyncClient(
        limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
        timeout=httpx.Timeout(None),
    )
