"""Parse .env files and strings into key-value dicts.

Handles:
  - blank lines, ``#`` comments and inline comments after values
  - ``export KEY=VALUE`` prefix
  - whitespace around ``=``
  - single-, double- and triple-quoted values (``'''`` / ``\"\"\"`` blocks)
  - ``${VAR}`` / ``$VAR`` expansion against the file and the environment

Unlike a line-by-line reader, malformed content is an error rather than
skipped: see :class:`~envscan.errors.ParseError`.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from pathlib import Path

from envscan.errors import FileAccessError, ParseError
from envscan.expand import DEFAULT_MAX_DEPTH
from envscan.parser import Parser

logger = logging.getLogger(__name__)

_NEEDS_QUOTES = " \t\v\f\n#\"'$\\"


def read_env_file(path: str | Path) -> str:
    """Return the text of *path*, raising :class:`FileAccessError` if unreadable."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(str(path), e) from e


def _finish(
    parser: Parser,
    environ: Mapping[str, str] | None,
    max_depth: int,
    expand: bool,
) -> dict[str, str]:
    if expand:
        include_vars = dict(os.environ if environ is None else environ)
        parser.expand_variables(max_depth, include_vars)
    return parser.values()


def parse_files(
    *paths: str | Path,
    environ: Mapping[str, str] | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
    expand: bool = True,
    missing_ok: bool = False,
) -> dict[str, str]:
    """Parse each file in order and return the merged, expanded variables.

    Later files override earlier ones. References that are not defined in the
    files are looked up in *environ* (default: a copy of ``os.environ``).
    With *missing_ok*, files that cannot be read are skipped.

    Raises:
        FileAccessError: A file could not be read and *missing_ok* is false.
        ParseError: A file is malformed; the error's ``path`` names it.
    """
    parser = Parser()
    for path in paths:
        try:
            text = read_env_file(path)
        except FileAccessError as e:
            if not missing_ok:
                raise
            logger.debug("Skipping optional env file: %s", e)
            continue
        logger.debug("Parsing %s", path)
        try:
            parser.parse(text)
        except ParseError as e:
            raise e.with_path(str(path)) from e
    return _finish(parser, environ, max_depth, expand)


def parse_strings(
    *values: str,
    environ: Mapping[str, str] | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
    expand: bool = True,
) -> dict[str, str]:
    """Same as :func:`parse_files`, for content already in memory."""
    parser = Parser()
    for value in values:
        parser.parse(value)
    return _finish(parser, environ, max_depth, expand)


def parse_env_file(path: str | Path, environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Read a single .env file and return its expanded key-value pairs."""
    return parse_files(path, environ=environ)


def format_env_value(value: str) -> str:
    """Format *value* for a .env file so it parses back unchanged.

    Single quotes are preferred since they turn off expansion. Multi-line
    values use a ``'''`` block padded with newlines, which the parser trims.
    Values containing a triple quote fall back to double quotes.

    Raises:
        ValueError: No quoting reproduces *value*. Inside double quotes a
            backslash always escapes the next character, so a value that
            must be double-quoted cannot contain ``\\"`` or end with ``\\``.
    """
    if not value:
        return '""'
    if not any(c in value for c in _NEEDS_QUOTES):
        return value
    if "'" not in value and "\n" not in value and not value.endswith("\\"):
        return f"'{value}'"
    if "'''" not in value and "\\'\\'\\'" not in value:
        return f"'''\n{value}\n'''"
    if '\\"' in value or value.endswith("\\"):
        raise ValueError(f"value cannot be written to a .env file: {value!r}")
    return '"' + value.replace('"', '\\"').replace("$", "\\$") + '"'


def format_env_lines(pairs: Iterable[tuple[str, str]]) -> list[str]:
    """Return ``KEY=value`` lines; raises :class:`ValueError` like :func:`format_env_value`."""
    return [f"{k}={format_env_value(v)}" for k, v in pairs]
