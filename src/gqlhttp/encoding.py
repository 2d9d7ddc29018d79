"""Request body encoders.

Both encoders are pure: they read the request and return the finished body
together with the ``Content-Type`` it must be sent with. Multipart bodies are
rendered eagerly so that attachment read failures surface before any network
I/O happens.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import httpx

from gqlhttp.exceptions import EncodingError
from gqlhttp.request import GraphFile, GraphRequest

JSON_CONTENT_TYPE = "application/json; charset=utf-8"

# httpx needs a URL to assemble a request; only its rendered body and headers are used.
_FORM_URL = "http://localhost/"


@dataclass(frozen=True)
class EncodedBody:
    """Rendered request body."""

    content: bytes
    content_type: str


def encode_json(request: GraphRequest) -> EncodedBody:
    """Encode *request* as ``{"query": ..., "variables": ...}``.

    The ``variables`` key is always present and is ``null`` when no variable
    was set.
    """
    payload = {"query": request.query, "variables": request.variables}
    try:
        content = json.dumps(payload).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"encode body: {exc}") from exc
    return EncodedBody(content=content, content_type=JSON_CONTENT_TYPE)


def encode_variables(variables: dict[str, Any]) -> str:
    try:
        return json.dumps(variables)
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"encode variables: {exc}") from exc


def encode_multipart(request: GraphRequest) -> EncodedBody:
    """Encode *request* as ``multipart/form-data``.

    Parts, in order: ``query``, ``variables`` (only when variables are set),
    then one part per attached file.
    """
    # A None filename makes httpx render a plain form field. Keeping every
    # part in ``files`` forces multipart even when nothing is attached.
    parts: list[tuple[str, Any]] = [("query", (None, request.query.encode("utf-8")))]
    if request.variables:
        parts.append(("variables", (None, encode_variables(request.variables).encode("utf-8"))))
    for attachment in request.files:
        parts.append((attachment.field, (attachment.name, _read_attachment(attachment), "application/octet-stream")))

    form = httpx.Request("POST", _FORM_URL, files=parts)
    content = form.read()
    return EncodedBody(content=content, content_type=form.headers["Content-Type"])


def _read_attachment(attachment: GraphFile) -> bytes:
    # Read from the current position; httpx would rewind seekable streams.
    content = attachment.content
    if isinstance(content, bytes):
        return content
    try:
        data = content.read()
    except (OSError, ValueError) as exc:
        raise EncodingError(f"preparing file {attachment.name!r}: {exc}") from exc
    if not isinstance(data, bytes):
        raise EncodingError(f"create form file {attachment.name!r}: stream must yield bytes, got {type(data).__name__}")
    return data
