# ruff: noqa: I001
"""CLI for the ``captable_ordering`` package.

A thin Typer console over the ordering and manifest helpers. Inputs are JSON
files holding either an array of decoded transactions or a manifest object
(camelCase collections, as exported from the ledger). Environment variables
(``CAPTABLE_ORDERING_LOG_LEVEL``) are loaded from a local ``.env`` using
``python-dotenv`` before any command runs.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Annotated, Any

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from typer.models import OptionInfo

from .errors import CapTableError
from .logging_setup import configure_logging, get_logger
from .manifest import count_manifest_objects, describe_manifest
from .models import OcfManifest
from .sorting import is_ordered, sort_transactions, transaction_sort_keys

logger = get_logger(__name__)


class InputError(Exception):
    """The input file could not be read or has the wrong shape."""


def _fail(message: str) -> typer.Exit:
    print(f"Error: {message}", file=sys.stderr)
    return typer.Exit(code=1)


def _load_json(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise InputError(f"File not found: {path}") from e
    except PermissionError as e:
        raise InputError(f"Permission denied: {path}") from e
    except json.JSONDecodeError as e:
        raise InputError(f"Failed to parse JSON in '{path}': {e}") from e
    except UnicodeDecodeError as e:
        raise InputError(f"File is not valid UTF-8: {path} ({e.reason})") from e
    except OSError as e:
        raise InputError(f"Unexpected failure reading '{path}': {e}") from e


def _load_transactions(path: Path) -> list[Any]:
    """Return the transactions from an array file or a manifest file."""

    data = _load_json(path)
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        return list(OcfManifest.model_validate(data).transactions or [])
    raise InputError(
        f"Expected a JSON array of transactions or a manifest object in '{path}'"
    )


def _load_manifest(path: Path) -> OcfManifest:
    data = _load_json(path)
    if not isinstance(data, dict):
        raise InputError(f"Expected a manifest JSON object in '{path}'")
    return OcfManifest.model_validate(data)


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Order cap-table transactions deterministically and check manifest "
        "completeness. Loads settings from a local .env before running."
    ),
)

# Module-level option object to satisfy ruff B008 (no calls in parameter
# defaults).
INPUT_PATH_OPTION: OptionInfo = typer.Option(
    ...,  # required
    "--input",
    "-i",
    help="Path to a JSON file (transaction array or manifest object)",
    dir_okay=False,
    file_okay=True,
    exists=False,  # the handler reports missing files itself
)


@app.command("sort")
def sort_cmd(
    input_path: Annotated[Path, INPUT_PATH_OPTION],
    *,
    ids_only: bool = typer.Option(False, "--ids-only", help="Print one id per line."),
) -> None:
    """Print transactions in deterministic replay order."""

    try:
        ordered = sort_transactions(_load_transactions(input_path))
    except (InputError, ValidationError, CapTableError) as e:
        raise _fail(str(e)) from e

    if ids_only:
        for tx in ordered:
            typer.echo(str(tx.get("id", "")) if isinstance(tx, dict) else "")
    else:
        typer.echo(json.dumps(ordered, indent=2))


@app.command("keys")
def keys_cmd(input_path: Annotated[Path, INPUT_PATH_OPTION]) -> None:
    """Print the composite sort key of each transaction, in replay order."""

    try:
        keyed = transaction_sort_keys(_load_transactions(input_path))
    except (InputError, ValidationError, CapTableError) as e:
        raise _fail(str(e)) from e

    for key, _tx in keyed:
        typer.echo(key)


@app.command("check")
def check_cmd(input_path: Annotated[Path, INPUT_PATH_OPTION]) -> None:
    """Exit 0 when the transactions are already in replay order, else 1."""

    try:
        transactions = _load_transactions(input_path)
        ordered = is_ordered(transactions)
    except (InputError, ValidationError, CapTableError) as e:
        raise _fail(str(e)) from e

    if not ordered:
        typer.echo(f"{len(transactions)} transactions are NOT in replay order")
        raise typer.Exit(code=1)
    typer.echo(f"{len(transactions)} transactions are in replay order")


@app.command("count")
def count_cmd(
    input_path: Annotated[Path, INPUT_PATH_OPTION],
    *,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show per-field counts."),
) -> None:
    """Print the number of objects in a manifest."""

    try:
        manifest = _load_manifest(input_path)
    except (InputError, ValidationError) as e:
        raise _fail(str(e)) from e

    total = count_manifest_objects(manifest)
    logger.debug("Counted %d objects in %s", total, input_path)
    typer.echo(str(total))
    if verbose:
        for line in describe_manifest(manifest):
            typer.echo(f"  {line}")


@app.callback()
def _root(
    *,
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Log level for stderr diagnostics (overrides CAPTABLE_ORDERING_LOG_LEVEL).",
    ),
    debug: bool = typer.Option(False, "--debug", help="Shortcut for --log-level DEBUG."),
) -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables) and configures package logging, so a
    level set in ``.env`` applies when no option is given.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    try:
        configure_logging(log_level, verbose=debug)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--log-level") from e


if __name__ == "__main__":  # pragma: no cover
    app()
