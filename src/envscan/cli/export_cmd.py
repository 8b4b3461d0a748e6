# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""``envscan export`` command."""

from __future__ import annotations

import json
from pathlib import Path

import click

from envscan.cli import _load_values, cli, console
from envscan.env_file import format_env_lines

try:
    import yaml
except ImportError:
    yaml = None

FORMATS = ("dotenv", "unix", "win", "json", "yaml")

# Characters that force single-quoting in POSIX shell output.
_SHELL_SPECIAL = frozenset(" \t\n'\"\\$`!#&|;(){}<>*?~")


@cli.command("export")
@click.option(
    "--format", "fmt",
    type=click.Choice(FORMATS),
    default="dotenv",
    show_default=True,
    help="dotenv (re-parsable KEY=value), unix (export KEY=value), win (PowerShell), json or yaml.",
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write to this file instead of stdout.",
)
@click.pass_context
def export(ctx: click.Context, fmt: str, output: str | None) -> None:
    """Export the parsed variables in file order.

    The dotenv format quotes values so the output parses back to the same
    values. For a shell: eval "$(envscan export --format unix)". For
    PowerShell: envscan export --format win | iex
    """
    if fmt == "yaml" and yaml is None:
        raise click.ClickException("PyYAML is not installed. Install with: pip install envscan[yaml]")

    pairs = _load_values(ctx)
    try:
        text = render_export(pairs, fmt)
    except ValueError as e:
        raise click.ClickException(f"{e}; try --format json")

    if output is None:
        click.echo(text, nl=False)
        return
    Path(output).write_text(text, encoding="utf-8")
    console.print(f"[green]Exported {len(pairs)} variable(s) to {output}[/green]", highlight=False)


def render_export(pairs: dict[str, str], fmt: str) -> str:
    """Render *pairs* as *fmt*, newline-terminated."""
    if fmt == "json":
        return json.dumps(pairs, indent=2) + "\n"
    if fmt == "yaml":
        return yaml.safe_dump(pairs, default_flow_style=False, sort_keys=False, allow_unicode=True)
    if fmt == "unix":
        lines = [f"export {key}={_sh_quote(value)}" for key, value in pairs.items()]
    elif fmt == "win":
        lines = [f"$env:{key} = {_ps_quote(value)}" for key, value in pairs.items()]
    else:
        lines = format_env_lines(pairs.items())
    return "".join(line + "\n" for line in lines)


def _sh_quote(value: str) -> str:
    if value and not _SHELL_SPECIAL.intersection(value):
        return value
    return "'" + value.replace("'", "'\\''") + "'"


def _ps_quote(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"
