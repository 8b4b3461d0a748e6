# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""envscan CLI -- inspect and export parsed .env files.

The CLI is split into per-command modules under this package.  The ``cli``
click group and shared helpers (``console``, ``_load_values``, ``_mask``)
live here so every command module can import them.
"""

from __future__ import annotations

import os

import click
from rich.console import Console

from envscan import __version__
from envscan.config import load_config
from envscan.env_file import read_env_file
from envscan.errors import FileAccessError, ParseError
from envscan.lexer import QuoteType
from envscan.logging_config import setup_logging
from envscan.parser import Parser

console = Console(stderr=True, soft_wrap=True)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _mask(value: str) -> str:
    if len(value) <= 6:
        return "****"
    return value[:3] + "****" + value[-3:]


def _explicit_files(ctx: click.Context) -> bool:
    return bool(ctx.obj["files"])


def _files(ctx: click.Context) -> list[str]:
    """Explicit ``--file`` paths, or the configured defaults."""
    if ctx.obj["files"]:
        return list(ctx.obj["files"])
    return [str(p) for p in ctx.obj["config"].resolve_env_files()]


def _read_all(ctx: click.Context) -> list[tuple[str, str]]:
    """Return ``(path, text)`` for every file; missing default files are skipped."""
    out: list[tuple[str, str]] = []
    for path in _files(ctx):
        try:
            out.append((path, read_env_file(path)))
        except FileAccessError as e:
            if _explicit_files(ctx):
                raise click.ClickException(str(e))
    return out


def _load_parser(ctx: click.Context) -> Parser:
    """Parse the selected files into one parser, expanding unless --no-expand."""
    parser = Parser()
    for path, text in _read_all(ctx):
        try:
            parser.parse(text)
        except ParseError as e:
            raise click.ClickException(f"{path}: {e}")
    if ctx.obj["expand"]:
        parser.expand_variables(ctx.obj["max_depth"], dict(os.environ))
    return parser


def _load_values(ctx: click.Context) -> dict[str, str]:
    return _load_parser(ctx).values()


QUOTE_LABELS = {
    QuoteType.NONE: "none",
    QuoteType.SINGLE: "single",
    QuoteType.DOUBLE: "double",
}


# ---------------------------------------------------------------------------
# Top-level click group
# ---------------------------------------------------------------------------

@click.group()
@click.option(
    "--file", "-f", "files", multiple=True, type=click.Path(dir_okay=False),
    help="Env file to read (repeatable; later files win). Default: from .envscan.toml, else .env.",
)
@click.option("--max-depth", type=click.IntRange(min=1), default=None, help="Maximum variable expansion passes (default: 20).")
@click.option("--no-expand", is_flag=True, help="Do not resolve ${VAR} references.")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
@click.version_option(__version__)
@click.pass_context
def cli(
    ctx: click.Context,
    files: tuple[str, ...],
    max_depth: int | None,
    no_expand: bool,
    verbose: bool,
) -> None:
    """Parse .env files with quoting, comments and ${VAR} expansion."""
    try:
        if verbose or os.environ.get("ENVSCAN_LOG_LEVEL"):
            setup_logging(verbose=verbose)
        cfg = load_config()
    except ValueError as e:
        raise click.UsageError(str(e))
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg
    ctx.obj["files"] = files
    ctx.obj["max_depth"] = max_depth if max_depth is not None else cfg.max_depth
    ctx.obj["expand"] = not no_expand


# ---------------------------------------------------------------------------
# Register all command modules (import triggers @cli.command registration)
# ---------------------------------------------------------------------------

from envscan.cli import (  # noqa: E402, F401
    check_cmd,
    get_cmd,
    list_cmd,
    export_cmd,
)
