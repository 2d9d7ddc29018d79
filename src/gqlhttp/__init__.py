"""Public API surface for gqlhttp."""

from gqlhttp.client import GraphClient, LogSink
from gqlhttp.config import ClientConfig, load_config
from gqlhttp.context import Context
from gqlhttp.encoding import EncodedBody, encode_json, encode_multipart
from gqlhttp.exceptions import (
    BodyReadError,
    CancellationError,
    ConfigError,
    ConfigurationMismatchError,
    DecodeError,
    EncodingError,
    GqlHttpError,
    GraphQLError,
    HTTPStatusError,
    TransportError,
)
from gqlhttp.models import GraphError, GraphResponse, Location
from gqlhttp.request import GraphFile, GraphRequest
from gqlhttp.transport import Transport, default_transport

__all__ = [
    "BodyReadError",
    "CancellationError",
    "ClientConfig",
    "ConfigError",
    "ConfigurationMismatchError",
    "Context",
    "DecodeError",
    "EncodedBody",
    "EncodingError",
    "GqlHttpError",
    "GraphClient",
    "GraphError",
    "GraphFile",
    "GraphQLError",
    "GraphRequest",
    "GraphResponse",
    "HTTPStatusError",
    "Location",
    "LogSink",
    "Transport",
    "TransportError",
    "default_transport",
    "encode_json",
    "encode_multipart",
    "load_config",
]
