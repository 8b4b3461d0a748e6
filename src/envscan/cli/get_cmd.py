# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""``envscan get`` command."""

from __future__ import annotations

import click

from envscan.cli import _load_values, cli


@cli.command("get")
@click.argument("key")
@click.pass_context
def get(ctx: click.Context, key: str) -> None:
    """Print the value of a single variable."""
    values = _load_values(ctx)
    if key not in values:
        raise click.ClickException(f"Key '{key}' not found.")
    click.echo(values[key])
