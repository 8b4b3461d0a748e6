# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""``envscan list`` command."""

from __future__ import annotations

import click
from rich.table import Table

from envscan.cli import QUOTE_LABELS, _load_parser, _mask, cli, console


@cli.command("list")
@click.option("--show-values", is_flag=True, help="Show values unmasked.")
@click.pass_context
def list_keys(ctx: click.Context, show_values: bool) -> None:
    """List parsed variable names with masked values."""
    parser = _load_parser(ctx)
    values = parser.values()
    quote_types = parser.quote_types()

    table = Table(title="Variables")
    table.add_column("Key", style="white")
    table.add_column("Value" if show_values else "Value (masked)", style="dim")
    table.add_column("Quotes", style="cyan")
    if not values:
        table.add_row("(empty)", "(empty)", "")
    else:
        for key, val in sorted(values.items()):
            shown = val if show_values else (_mask(val) if val else "(empty)")
            table.add_row(key, shown, QUOTE_LABELS[quote_types[key]])
    console.print(table)
