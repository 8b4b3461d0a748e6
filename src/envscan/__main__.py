# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""``python -m envscan`` support; also the ``envscan`` console script."""

from __future__ import annotations


def main() -> None:
    from envscan.cli import cli

    cli(prog_name="envscan")


if __name__ == "__main__":
    main()
