"""Typed configuration schema and loader for the recfuzz package."""

from __future__ import annotations

import os
from collections.abc import Mapping
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, conint

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class SessionSettings(BaseModel):
    """Initial state of newly created fuzz sessions."""

    zero_value_fallthrough: bool

    model_config = ConfigDict(extra="forbid")


class ValueSettings(BaseModel):
    """Sizing of randomly produced values."""

    complex_size: conint(ge=1) = 50
    size_hint: conint(ge=0) = 50

    model_config = ConfigDict(extra="forbid")


class CheckSettings(BaseModel):
    """Settings for :func:`recfuzz.adapters.quick.check`."""

    max_count: conint(ge=1) = 100

    model_config = ConfigDict(extra="forbid")


class SeedSettings(BaseModel):
    """Seed used for reproducible random streams."""

    env: str
    value: int | None = None

    model_config = ConfigDict(extra="forbid")


class LoggingSettings(BaseModel):
    """Package logging verbosity."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"]

    model_config = ConfigDict(extra="forbid")


class ConfigModel(BaseModel):
    """Top-level configuration model."""

    schema_version: conint(ge=1)
    session: SessionSettings
    values: ValueSettings
    check: CheckSettings
    seed: SeedSettings
    logging: LoggingSettings

    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Loader utilities
# ---------------------------------------------------------------------------


def deep_merge_dicts(a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge mapping ``b`` onto ``a`` returning a new dict."""

    result: dict[str, Any] = dict(a)
    for key, b_val in b.items():
        if key in result and isinstance(result[key], dict) and isinstance(b_val, dict):
            result[key] = deep_merge_dicts(result[key], b_val)
        else:
            result[key] = b_val
    return result


def _parse_seed(name: str, raw: str) -> int:
    """Parse a seed as decimal (leading zeros allowed) or as 0x/0o/0b literal."""

    text = raw.strip()
    try:
        return int(text, 10)
    except ValueError:
        pass
    try:
        return int(text, 0)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer seed, got {text!r}") from exc


def load_config(
    path: str | os.PathLike[str] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ConfigModel:
    """Load configuration from defaults and optional user overrides.

    Precedence of sources: package ``defaults.yml`` < user-provided YAML < environment
    variable named by ``seed.env`` for the seed value.
    """

    with (
        importlib_resources.files("recfuzz.config")
        .joinpath("defaults.yml")
        .open("r", encoding="utf-8") as f
    ):
        defaults = yaml.safe_load(f) or {}

    if path is not None:
        with Path(path).open("r", encoding="utf-8") as f:
            overrides = yaml.safe_load(f) or {}
        merged = deep_merge_dicts(defaults, overrides)
    else:
        merged = defaults

    cfg = ConfigModel.model_validate(merged)

    environ = env if env is not None else os.environ
    seed_env = cfg.seed.env
    if seed_env in environ:
        cfg.seed.value = _parse_seed(seed_env, environ[seed_env])

    return cfg


__all__ = [
    "ConfigModel",
    "SessionSettings",
    "ValueSettings",
    "CheckSettings",
    "SeedSettings",
    "LoggingSettings",
    "deep_merge_dicts",
    "load_config",
]
