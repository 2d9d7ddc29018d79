"""Command-line interface for gqlhttp."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from contextlib import ExitStack
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from rich.console import Console

from gqlhttp import (
    BodyReadError,
    ClientConfig,
    ConfigError,
    ConfigurationMismatchError,
    DecodeError,
    EncodingError,
    GraphClient,
    GraphQLError,
    GraphRequest,
    GraphResponse,
    HTTPStatusError,
    TransportError,
    load_config,
)


def _package_version() -> str:
    try:
        return version("gqlhttp")
    except PackageNotFoundError:
        return "0.0.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gqlhttp")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")

    subparsers = parser.add_subparsers(dest="command", required=True)
    run_parser = subparsers.add_parser("run", help="Send a GraphQL query or mutation")
    target = run_parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--url", help="GraphQL endpoint URL")
    target.add_argument("--config", help="Path to a gqlhttp.json client config")
    query = run_parser.add_mutually_exclusive_group(required=True)
    query.add_argument("--query", help="GraphQL document text")
    query.add_argument("--query-file", help="Path to a file holding the GraphQL document")
    run_parser.add_argument(
        "--var", action="append", default=[], metavar="NAME=VALUE", help="Variable; VALUE is parsed as JSON if possible"
    )
    run_parser.add_argument("--header", action="append", default=[], metavar="NAME: VALUE", help="Extra header")
    run_parser.add_argument("--file", action="append", default=[], metavar="FIELD=PATH", help="File to upload")
    run_parser.add_argument("--multipart", action="store_true", help="Send multipart/form-data (needed for --file)")
    run_parser.add_argument("--close", action="store_true", help="Close the connection after the request")
    run_parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser


def _split_pair(raw: str, sep: str, option: str) -> tuple[str, str]:
    name, found, value = raw.partition(sep)
    if not found or not name.strip():
        raise argparse.ArgumentTypeError(f"{option} expects NAME{sep}VALUE, got {raw!r}")
    return name.strip(), value.strip() if sep == ":" else value


def _parse_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def _resolve_config(args: argparse.Namespace) -> ClientConfig:
    if args.config:
        config = load_config(args.config)
    else:
        try:
            config = ClientConfig(url=args.url)
        except ValidationError as exc:
            raise ConfigError(f"invalid url: {args.url}") from exc
    updates: dict[str, Any] = {}
    if args.multipart or args.file:
        updates["use_multipart_form"] = args.multipart or config.use_multipart_form
    if args.close:
        updates["close_request"] = True
    return config.model_copy(update=updates) if updates else config


def _build_request(args: argparse.Namespace, files: ExitStack) -> GraphRequest:
    query = Path(args.query_file).read_text(encoding="utf-8") if args.query_file else args.query
    request = GraphRequest(query)
    for raw in args.var:
        name, value = _split_pair(raw, "=", "--var")
        request.var(name, _parse_value(value))
    for raw in args.header:
        name, value = _split_pair(raw, ":", "--header")
        request.add_header(name, value)
    for raw in args.file:
        field, path = _split_pair(raw, "=", "--file")
        request.file(field, Path(path).name, files.enter_context(open(path, "rb")))
    return request


async def _run(args: argparse.Namespace) -> GraphResponse[Any]:
    config = _resolve_config(args)
    with ExitStack() as files:
        request = _build_request(args, files)
        async with GraphClient.from_config(config) as client:
            return await client.run(request)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)

    console = Console()
    try:
        response = asyncio.run(_run(args))
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except (ConfigError, ConfigurationMismatchError, EncodingError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    except (TransportError, BodyReadError, HTTPStatusError, DecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 4
    except GraphQLError as exc:
        for error in exc.errors:
            print(f"error: {error}", file=sys.stderr)
        return 5
    except Exception as exc:  # pragma: no cover
        print(f"error: {exc}", file=sys.stderr)
        return 1

    console.print_json(data=response.model_dump(mode="json"))
    return 0
