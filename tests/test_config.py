"""Tests for client configuration loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from gqlhttp.config import ClientConfig, load_config
from gqlhttp.exceptions import ConfigError


def _write(tmp_path: Path, payload: object) -> Path:
    path = tmp_path / "gqlhttp.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_defaults() -> None:
    config = ClientConfig(url="https://api.example.com/graphql")
    assert config.use_multipart_form is False
    assert config.close_request is False


def test_config_is_frozen() -> None:
    config = ClientConfig(url="https://api.example.com/graphql")
    with pytest.raises(ValidationError):
        config.url = "https://other.example.com"  # type: ignore[misc]


@pytest.mark.parametrize("url", ["", "api.example.com/graphql", "ftp://example.com/graphql"])
def test_rejects_non_http_urls(url: str) -> None:
    with pytest.raises(ValidationError):
        ClientConfig(url=url)


def test_load_config_reads_json(tmp_path: Path) -> None:
    path = _write(tmp_path, {"url": " http://localhost:4000/graphql ", "use_multipart_form": True})

    config = load_config(path)

    assert config == ClientConfig(url="http://localhost:4000/graphql", use_multipart_form=True)


def test_load_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="failed reading config file"):
        load_config(tmp_path / "missing.json")


def test_load_config_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "gqlhttp.json"
    path.write_text("{", encoding="utf-8")

    with pytest.raises(ConfigError, match="invalid JSON"):
        load_config(path)


def test_load_config_invalid_values(tmp_path: Path) -> None:
    path = _write(tmp_path, {"use_multipart_form": True})

    with pytest.raises(ConfigError, match="invalid config") as exc_info:
        load_config(path)

    assert isinstance(exc_info.value.__cause__, ValidationError)
