# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Exceptions raised while reading and parsing .env files.

Two kinds matter to callers:

- :class:`ParseError` for lexical and grammar violations (with line/column).
- :class:`FileAccessError` when a file cannot be read, so a caller loading an
  optional default file can ignore it without matching on error messages.
"""

from __future__ import annotations

from typing import Any


class EnvscanError(Exception):
    """Base exception for all envscan errors.

    Attributes:
        message: Human-readable error description.
        context: Additional context for debugging.
        cause: Underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


class ParseError(EnvscanError):
    """Raised when .env content is malformed.

    Covers unterminated quotes and quote blocks, characters that cannot start
    a token, and tokens out of ``KEY = VALUE`` order. ``path`` is set when the
    content came from a file.
    """

    def __init__(
        self,
        cause: str,
        *,
        line: int,
        column: int,
        content: str = "",
        path: str | None = None,
    ) -> None:
        self.line = line
        self.column = column
        self.content = content
        self.path = path
        super().__init__(cause, context={"line": line, "column": column})

    def __str__(self) -> str:
        where = f"line {self.line}, column {self.column}: {self.message}"
        return f"{self.path}: {where}" if self.path else where

    def with_path(self, path: str) -> ParseError:
        """Return a copy of this error that names *path*."""
        return ParseError(self.message, line=self.line, column=self.column, content=self.content, path=path)


class FileAccessError(EnvscanError):
    """Raised when a .env file cannot be opened, read or decoded as UTF-8."""

    def __init__(self, path: str, cause: OSError | UnicodeDecodeError) -> None:
        self.path = path
        super().__init__(f"error accessing file {path!r}", context={"error": cause}, cause=cause)

    def __str__(self) -> str:
        return f"{self.message}: {self.cause}"


def _find(err: BaseException | None, cls: type[EnvscanError]) -> EnvscanError | None:
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        if isinstance(err, cls):
            return err
        seen.add(id(err))
        err = err.__cause__ or err.__context__
    return None


def is_parse_error(err: BaseException | None) -> ParseError | None:
    """Return the :class:`ParseError` in *err*'s cause chain, if any."""
    found = _find(err, ParseError)
    return found if isinstance(found, ParseError) else None


def is_file_access_error(err: BaseException | None) -> FileAccessError | None:
    """Return the :class:`FileAccessError` in *err*'s cause chain, if any."""
    found = _find(err, FileAccessError)
    return found if isinstance(found, FileAccessError) else None
