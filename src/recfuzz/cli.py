"""Typer-based command line interface.

``recfuzz fields`` lists the fields of a record type and ``recfuzz sample``
prints generated records as JSON lines.  Targets are given as
``module:Attr``; the module must be importable from the current environment.

Exit codes
----------
0 success
3 target error (import failure, missing attribute, not a record type)
4 configuration error (bad config file, bad seed, rejected binding)
5 generation error (a generator or default value failed)
"""

from __future__ import annotations

import dataclasses
import enum
import importlib
import json
import os
import sys
from pathlib import Path
from typing import Any, NoReturn, Optional

import typer
from pydantic import BaseModel

from .config import ConfigModel, load_config
from .record import introspect
from .session import BindField, Option, Session, SetZeroValueFallthrough
from .utils.errors import NotARecordTypeError
from .utils.logging import configure_logging, get_logger
from .values.generator import Generator, GeneratorFunc
from .values.seed import derive_rng, resolve_seed

if not sys.stdout.isatty():  # pragma: no cover - CLI test context
    os.environ.setdefault("NO_COLOR", "1")

app = typer.Typer(
    name="recfuzz",
    help="Random record generation. Use 'recfuzz sample' to generate values.",
)

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _safe_exit(code: int, msg: str | None = None) -> NoReturn:
    """Exit the CLI with ``code`` emitting ``msg`` to stderr if provided."""

    if msg:
        typer.echo(msg, err=True)
    raise typer.Exit(code)


def load_target(spec: str) -> Any:
    """Import ``module:Attr`` (``Attr`` may be dotted) and return the object."""

    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"target must look like 'module:Attr', got {spec!r}")
    obj: Any = importlib.import_module(module_name)
    for part in attr.split("."):
        obj = getattr(obj, part)
    return obj


def _load_generator(spec: str) -> Generator:
    obj = load_target(spec)
    if isinstance(obj, Generator):
        return obj
    if callable(obj):
        return GeneratorFunc(obj)
    raise ValueError(f"{spec} is neither a generator nor a callable")


def _binding_options(raw: list[str]) -> list[Option]:
    opts: list[Option] = []
    for item in raw:
        name, sep, spec = item.partition("=")
        if not sep or not name:
            raise ValueError(f"binding must look like FIELD=module:Attr, got {item!r}")
        opts.append(BindField(name.strip(), _load_generator(spec.strip())))
    return opts


def to_jsonable(value: Any) -> Any:
    """Convert a generated value into JSON-serialisable data."""

    if isinstance(value, BaseModel):
        return {name: to_jsonable(getattr(value, name)) for name in type(value).model_fields}
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, tuple) and hasattr(value, "_asdict"):
        return {k: to_jsonable(v) for k, v in value._asdict().items()}
    if isinstance(value, enum.Enum):
        return to_jsonable(value.value)
    if isinstance(value, (bytes, bytearray)):
        return value.hex()
    if isinstance(value, complex):
        return [value.real, value.imag]
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_jsonable(v) for v in value]
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    return repr(value)


def _load_cfg(config_path: Path | None) -> ConfigModel:
    try:
        return load_config(config_path)
    except Exception as exc:  # noqa: BLE001 - yaml, pydantic and OS errors alike
        _safe_exit(4, str(exc).splitlines()[0])


def _record_target(target: str) -> type:
    try:
        tp = load_target(target)
        introspect(tp)
    except (ImportError, AttributeError, ValueError, NotARecordTypeError) as exc:
        _safe_exit(3, str(exc))
    return tp


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.callback()
def main() -> None:
    """Entry point for the recfuzz command group."""
    pass


@app.command()
def fields(
    target: str = typer.Argument(..., help="Record type as module:Attr"),  # noqa: B008
) -> None:
    """List the fields of a record type."""

    record = introspect(_record_target(target))
    for name, field in record.fields.items():
        typer.echo(f"{name}: {field.annotation!r}")


@app.command()
def sample(  # noqa: PLR0913
    target: str = typer.Argument(..., help="Record type as module:Attr"),  # noqa: B008
    count: int = typer.Option(1, "--count", "-n", min=0, help="Records to generate"),  # noqa: B008
    seed: Optional[int] = typer.Option(  # noqa: B008
        None, "--seed", help="Seed; defaults to config or a random seed"
    ),
    size: Optional[int] = typer.Option(  # noqa: B008
        None, "--size", min=0, help="Size hint passed to bound generators"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    zero_fallthrough: bool | None = typer.Option(  # noqa: B008
        None,
        "--zero-fallthrough/--random-fallthrough",
        help="Leave unbound fields at zero values instead of randomizing them",
    ),
    bind: Optional[list[str]] = typer.Option(  # noqa: B008
        None, "--bind", help="Bind FIELD=module:Attr generator (repeatable)"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit debug logging to stderr"
    ),
) -> None:
    """Generate ``count`` records of ``target`` as JSON lines."""

    cfg = _load_cfg(config_path)
    configure_logging("DEBUG" if verbose else cfg.logging.level)

    session = Session(_record_target(target), cfg=cfg)

    opts: list[Option] = []
    if zero_fallthrough is not None:
        opts.append(SetZeroValueFallthrough(zero_fallthrough))
    try:
        opts.extend(_binding_options(bind or []))
    except (ImportError, AttributeError, ValueError) as exc:
        _safe_exit(3, str(exc))
    applied = session.option(*opts)
    if applied.error is not None:
        _safe_exit(4, str(applied.error))

    run_seed = seed if seed is not None else resolve_seed(cfg)
    hint = size if size is not None else cfg.values.size_hint
    logger.info("sampling %d x %s with seed %d", count, target, run_seed)
    if verbose:
        typer.echo(f"seed={run_seed}", err=True)

    for i in range(count):
        produced = session.value(derive_rng(run_seed, target, i), hint)
        if produced.error is not None:
            _safe_exit(5, str(produced.error))
        typer.echo(json.dumps(to_jsonable(produced.value)))
