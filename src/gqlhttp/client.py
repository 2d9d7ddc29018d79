"""Async GraphQL-over-HTTP client."""

from __future__ import annotations

import logging
from collections.abc import Callable
from types import TracebackType
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from gqlhttp.config import ClientConfig
from gqlhttp.context import Context
from gqlhttp.encoding import EncodedBody, encode_json, encode_multipart
from gqlhttp.exceptions import (
    BodyReadError,
    CancellationError,
    ConfigError,
    ConfigurationMismatchError,
    DecodeError,
    EncodingError,
    GraphQLError,
    HTTPStatusError,
    TransportError,
)
from gqlhttp.models import GraphResponse
from gqlhttp.request import GraphRequest
from gqlhttp.transport import Transport, default_transport

_LOG = logging.getLogger(__name__)

ACCEPT = "application/json; charset=utf-8"

# Header names set by the client that caller headers never override.
_CLIENT_OWNED_HEADERS = frozenset({"content-type", "accept"})

LogSink = Callable[[str], None]


def _discard(line: str) -> None:
    return None


class GraphClient:
    """Client for a single GraphQL endpoint.

    Configuration is fixed at construction, so one client can serve any
    number of concurrent :meth:`run` calls as long as its transport is safe
    for concurrent use.

    Args:
        url: GraphQL endpoint.
        transport: Object with an async ``send(httpx.Request)``. Defaults to
            a pooling :class:`httpx.AsyncClient` owned and closed by this client.
        use_multipart_form: Send ``multipart/form-data`` bodies, which is
            required for file uploads.
        close_request: Ask the server to close the connection after each
            request instead of keeping it for reuse.
        log: Sink receiving pre-formatted debug lines.

    Raises:
        ConfigError: *url* is not an absolute http(s) URL.
    """

    def __init__(
        self,
        url: str,
        *,
        transport: Transport | None = None,
        use_multipart_form: bool = False,
        close_request: bool = False,
        log: LogSink | None = None,
    ) -> None:
        try:
            self._config = ClientConfig(url=url, use_multipart_form=use_multipart_form, close_request=close_request)
        except ValidationError as exc:
            raise ConfigError(f"invalid client config: {exc}") from exc
        self._owns_transport = transport is None
        self._transport: Transport = transport if transport is not None else default_transport()
        self._log: LogSink = log or _discard

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        *,
        transport: Transport | None = None,
        log: LogSink | None = None,
    ) -> GraphClient:
        return cls(
            config.url,
            transport=transport,
            use_multipart_form=config.use_multipart_form,
            close_request=config.close_request,
            log=log,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def __aenter__(self) -> GraphClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the default transport; injected transports are left open."""
        if self._owns_transport and isinstance(self._transport, httpx.AsyncClient):
            await self._transport.aclose()

    async def run(
        self,
        request: GraphRequest,
        target: Any = Any,
        *,
        ctx: Context | None = None,
    ) -> GraphResponse[Any]:
        """Execute *request* and decode its ``data`` as *target*.

        Args:
            request: The query, variables, files and headers to send.
            target: Type the ``data`` member is validated into.
            ctx: Cancellation context; the call never times out without one.

        Returns:
            The decoded envelope, with an empty ``errors`` list.

        Raises:
            CancellationError: *ctx* was done before or during the call.
            ConfigurationMismatchError: Files attached without multipart mode.
            EncodingError: The body could not be built.
            TransportError: The transport failed to send.
            BodyReadError: The response body could not be read.
            HTTPStatusError: The server answered with a non-200 status.
            DecodeError: A 200 body did not decode as an envelope of *target*.
            GraphQLError: The server reported errors; the first is surfaced.
        """
        status_code, body = await self._execute(request, ctx)
        return self._decode(status_code, body, target)

    async def run_split(
        self,
        request: GraphRequest,
        target: Any,
        error_target: Any,
        *,
        ctx: Context | None = None,
    ) -> tuple[Any, Any]:
        """Execute *request* and decode into separate data and error shapes.

        A 200 response behaves like :meth:`run` and returns ``(data, None)``.
        A non-200 response whose body decodes as *error_target* returns
        ``(None, error_payload)``; any other non-200 body raises
        :class:`HTTPStatusError`.
        """
        status_code, body = await self._execute(request, ctx)
        if status_code != httpx.codes.OK:
            try:
                error_payload = TypeAdapter(error_target).validate_json(body)
            except ValidationError as exc:
                raise HTTPStatusError(status_code, body=body) from exc
            return None, error_payload
        return self._decode(status_code, body, target).data, None

    async def _execute(self, request: GraphRequest, ctx: Context | None) -> tuple[int, bytes]:
        ctx = ctx if ctx is not None else Context()
        ctx.check()
        if request.files and not self._config.use_multipart_form:
            raise ConfigurationMismatchError("cannot send files without multipart form mode")

        body = self._encode(request)
        http_request = self._build_request(request, body)
        self._logf(">> headers: %s", http_request.headers.multi_items())

        try:
            response = await ctx.run(self._transport.send(http_request))
        except CancellationError:
            raise
        except Exception as exc:
            raise TransportError(f"send request: {exc}") from exc

        try:
            try:
                content = await ctx.run(response.aread())
            except CancellationError:
                raise
            except Exception as exc:
                raise BodyReadError(f"reading body: {exc}") from exc
        finally:
            await response.aclose()

        self._logf("<< %s", content.decode("utf-8", errors="replace"))
        return response.status_code, content

    def _encode(self, request: GraphRequest) -> EncodedBody:
        body = encode_multipart(request) if self._config.use_multipart_form else encode_json(request)
        self._logf(">> variables: %s", request.variables)
        if self._config.use_multipart_form:
            self._logf(">> files: %d", len(request.files))
        self._logf(">> query: %s", request.query)
        return body

    def _build_request(self, request: GraphRequest, body: EncodedBody) -> httpx.Request:
        headers = [("Content-Type", body.content_type), ("Accept", ACCEPT)]
        if self._config.close_request:
            headers.append(("Connection", "close"))
        for name, values in request.headers.items():
            if name.lower() in _CLIENT_OWNED_HEADERS:
                _LOG.debug("Ignoring caller header owned by the client: %s", name)
                continue
            headers.extend((name, value) for value in values)
        try:
            return httpx.Request("POST", self._config.url, content=body.content, headers=headers)
        except UnicodeEncodeError as exc:
            raise EncodingError(f"encode headers {[name for name, _ in headers]}: {exc}") from exc

    def _decode(self, status_code: int, body: bytes, target: Any) -> GraphResponse[Any]:
        if status_code != httpx.codes.OK:
            raise HTTPStatusError(status_code, body=body, response=_parse_envelope(body))

        try:
            response = GraphResponse[target].model_validate_json(body)
        except ValidationError as exc:
            raise DecodeError(f"decoding response: {exc}") from exc

        if response.errors:
            raise GraphQLError(response.errors[0], response)
        return response

    def _logf(self, fmt: str, *args: Any) -> None:
        line = fmt % args
        _LOG.debug("%s", line)
        self._log(line)


def _parse_envelope(body: bytes) -> GraphResponse[Any] | None:
    try:
        return GraphResponse[Any].model_validate_json(body)
    except ValidationError:
        return None
