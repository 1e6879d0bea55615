"""Tests for packaging metadata and optional dependencies."""

from __future__ import annotations

import importlib
import tomllib
from pathlib import Path
from typing import Any, cast


def _load_pyproject() -> dict[str, Any]:
    path = Path(__file__).resolve().parents[1] / "pyproject.toml"
    with path.open("rb") as fh:
        return tomllib.load(fh)


def _extras(pyproject: dict[str, Any]) -> dict[str, list[str]]:
    return cast(dict[str, list[str]], pyproject.get("project", {}).get("optional-dependencies", {}))


def test_optional_dependency_groups() -> None:
    pyproject = _load_pyproject()
    extras = _extras(pyproject)
    assert {"dev", "hypothesis", "all"}.issubset(extras)
    assert set(extras["all"]).issuperset(extras["hypothesis"])


def test_runtime_dependencies_declared() -> None:
    deps = " ".join(_load_pyproject()["project"]["dependencies"])
    for name in ("pydantic", "PyYAML", "typer"):
        assert name in deps


def test_console_script_entrypoint() -> None:
    pyproject = _load_pyproject()
    scripts = pyproject.get("project", {}).get("scripts", {})
    assert scripts.get("recfuzz") == "recfuzz.cli:app"


def test_defaults_shipped_as_package_data() -> None:
    package_data = _load_pyproject()["tool"]["setuptools"]["package-data"]
    assert "defaults.yml" in package_data["recfuzz.config"]


def test_import_smoke() -> None:
    importlib.import_module("recfuzz")
    importlib.import_module("recfuzz.cli")
