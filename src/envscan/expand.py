# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Resolve ``${VAR}`` and ``$VAR`` references in parsed values.

``${VAR}`` may appear anywhere in a value. ``$VAR`` is only replaced when it
is the entire value (``FOO=$BAR``). Values that were single-quoted (including
``'''`` blocks) are never expanded. ``\\$VAR`` and ``\\${VAR}`` are left alone
and lose their backslash once expansion is finished.

References are looked up in the parsed variables first, then in the
caller-supplied variables, and otherwise become an empty string.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, MutableMapping

from envscan.lexer import QuoteType

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 20

REFERENCE_RE = re.compile(
    r"""
    (?P<escape>\\)?
    \$
    (?P<paren>\()?
    (?P<open>\{)?
    (?P<name>[A-Za-z_][A-Za-z0-9_]*)?
    (?P<close>\})?
    """,
    re.VERBOSE,
)


def _substitute(
    value: str,
    values: Mapping[str, str],
    include_vars: Mapping[str, str],
) -> str:
    def replace(m: re.Match[str]) -> str:
        text = m.group(0)
        name = m.group("name")
        if m.group("escape") or m.group("paren") or not name:
            return text
        # $VAR only counts when it is the whole value, as checked against the
        # value before this substitution.
        if not (m.group("open") or m.group("close")) and text != value:
            return text
        if name in values:
            return values[name]
        return include_vars.get(name, "")

    return REFERENCE_RE.sub(replace, value)


def _unescape(value: str) -> str:
    return REFERENCE_RE.sub(
        lambda m: m.group(0)[1:] if m.group("escape") else m.group(0),
        value,
    )


def expand_variables(
    values: MutableMapping[str, str],
    quote_types: Mapping[str, QuoteType],
    max_depth: int = DEFAULT_MAX_DEPTH,
    include_vars: Mapping[str, str] | None = None,
) -> int:
    """Expand references in *values* in place and return the number of passes.

    Passes over all expandable values repeat until nothing changes or
    *max_depth* passes have run (at least one always runs), which also stops
    self-referencing and cyclic definitions.
    """
    max_depth = max(1, max_depth)
    if include_vars is None:
        include_vars = {}

    passes = 0
    while passes < max_depth:
        passes += 1
        changed = False
        for key in list(values):
            if quote_types.get(key) == QuoteType.SINGLE:
                continue
            current = values[key]
            expanded = _substitute(current, values, include_vars)
            if expanded != current:
                values[key] = expanded
                changed = True
        if not changed:
            break
    else:
        logger.debug("Stopped expanding after %d passes (max depth reached)", passes)

    for key in list(values):
        if quote_types.get(key) == QuoteType.SINGLE:
            continue
        values[key] = _unescape(values[key])

    logger.debug("Expanded %d variable(s) in %d pass(es)", len(values), passes)
    return passes
