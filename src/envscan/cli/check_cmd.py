# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""``envscan check`` command."""

from __future__ import annotations

import click
from rich.markup import escape

from envscan.cli import _read_all, cli, console
from envscan.errors import ParseError
from envscan.parser import Parser


@cli.command("check")
@click.pass_context
def check(ctx: click.Context) -> None:
    """Validate env files without expanding or printing values."""
    sources = _read_all(ctx)
    if not sources:
        console.print("[yellow]No env files found.[/yellow]")
        return

    failed = 0
    for path, text in sources:
        parser = Parser()
        try:
            parser.parse(text)
        except ParseError as e:
            console.print(f"[red]{escape(path)}: {escape(str(e))}[/red]", highlight=False)
            failed += 1
            continue
        console.print(f"[green]{escape(path)}: {len(parser.values())} variable(s) OK[/green]", highlight=False)

    if failed:
        raise click.ClickException(f"{failed} file(s) failed to parse.")
