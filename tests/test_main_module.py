"""Tests for the gqlhttp module entrypoint."""

from __future__ import annotations

import importlib
import runpy
import sys
import tomllib
import types
from pathlib import Path

import pytest


def test_module_entrypoint_guarded_on_import_and_exits_when_run_as_main(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """`gqlhttp.__main__` should only exit when executed as __main__."""
    cli_module = types.ModuleType("gqlhttp.cli")
    call_count = {"value": 0}

    def fake_main() -> int:
        call_count["value"] += 1
        return 7

    cli_module.main = fake_main
    monkeypatch.setitem(sys.modules, "gqlhttp.cli", cli_module)
    monkeypatch.delitem(sys.modules, "gqlhttp.__main__", raising=False)

    importlib.import_module("gqlhttp.__main__")
    assert call_count["value"] == 0

    monkeypatch.delitem(sys.modules, "gqlhttp.__main__", raising=False)
    with pytest.raises(SystemExit) as exc_info:
        runpy.run_module("gqlhttp.__main__", run_name="__main__")

    assert call_count["value"] == 1
    assert exc_info.value.code == 7


def test_pyproject_packages_cli_and_runtime_stack() -> None:
    """The console script and the src layout should both point at gqlhttp."""
    pyproject_path = Path(__file__).resolve().parents[1] / "pyproject.toml"
    pyproject_data = tomllib.loads(pyproject_path.read_text(encoding="utf-8"))

    project = pyproject_data["project"]
    assert project["name"] == "gqlhttp"
    assert project["scripts"] == {"gqlhttp": "gqlhttp.cli:main"}
    assert pyproject_data["tool"]["poetry"]["packages"] == [{"include": "gqlhttp", "from": "src"}]

    declared = {requirement.split(">")[0].split("<")[0].split("=")[0] for requirement in project["dependencies"]}
    assert {"httpx", "pydantic", "rich"} <= declared
    assert pyproject_data["build-system"]["build-backend"] == "poetry.core.masonry.api"
    assert any(requirement.startswith("pytest-asyncio") for requirement in project["optional-dependencies"]["test"])

    module_name, _, attribute = project["scripts"]["gqlhttp"].partition(":")
    from gqlhttp import cli

    assert getattr(importlib.import_module(module_name), attribute) is cli.main
