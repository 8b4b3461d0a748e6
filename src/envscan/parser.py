# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Parse .env content into key-value pairs.

A :class:`Parser` can be fed several inputs in turn (for example a base
``.env`` and a ``.env.local``); later keys override earlier ones. Each input
must consist of ``[export] KEY = VALUE`` statements separated by whitespace,
newlines and comments, otherwise :class:`~envscan.errors.ParseError` is raised
and nothing from that input is kept past the offending statement.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from envscan.errors import ParseError
from envscan.expand import DEFAULT_MAX_DEPTH, expand_variables
from envscan.lexer import Lexer, QuoteType, Token, TokenKind

logger = logging.getLogger(__name__)

_BETWEEN_STATEMENTS = (TokenKind.WHITESPACE, TokenKind.NEWLINE, TokenKind.COMMENT, TokenKind.EXPORT)


class Parser:
    """Accumulates variables from one or more .env inputs."""

    def __init__(self) -> None:
        self._tokens: list[Token] = []
        self._pos = 0
        self._vars: dict[str, str] = {}
        self._quote_types: dict[str, QuoteType] = {}

    def parse(self, text: str) -> None:
        """Parse *text* and store its variables.

        Raises:
            ParseError: On the first lexical or grammar error.
        """
        self._tokens = list(Lexer(text))
        self._pos = 0
        logger.debug("Lexed %d token(s)", len(self._tokens))

        if not self._tokens:
            return

        count = 0
        while True:
            self._skip(*_BETWEEN_STATEMENTS)
            tok = self._next()
            if tok.kind is TokenKind.EOF:
                break
            if tok.kind is not TokenKind.KEY:
                raise self._unexpected("KEY", tok, text)
            key = tok.value

            self._skip(TokenKind.WHITESPACE)
            tok = self._next()
            if tok.kind is not TokenKind.EQUALS:
                raise self._unexpected("'='", tok, text)

            self._skip(TokenKind.WHITESPACE)
            tok = self._next()
            if tok.kind in (TokenKind.NEWLINE, TokenKind.EOF):
                self._vars[key] = ""
                self._quote_types[key] = QuoteType.NONE
            elif tok.kind is TokenKind.VALUE:
                self._vars[key] = tok.value
                self._quote_types[key] = tok.quote_type
            else:
                raise self._unexpected("VALUE", tok, text)
            count += 1

        logger.debug("Parsed %d variable(s)", count)

    def values(self) -> dict[str, str]:
        """Return a copy of the variables parsed so far."""
        return dict(self._vars)

    def quote_types(self) -> dict[str, QuoteType]:
        """Return a copy of the quote type recorded for each variable."""
        return dict(self._quote_types)

    def expand_variables(
        self,
        max_depth: int = DEFAULT_MAX_DEPTH,
        include_vars: Mapping[str, str] | None = None,
    ) -> None:
        """Resolve ``${VAR}``/``$VAR`` references in the stored values.

        *include_vars* (usually the process environment) is consulted for
        names that were not parsed.
        """
        expand_variables(self._vars, self._quote_types, max_depth, include_vars)

    def _next(self) -> Token:
        if self._pos >= len(self._tokens):
            last = self._tokens[-1]
            return Token(TokenKind.EOF, "", position=last.position, line=last.line, column=last.column)
        tok = self._tokens[self._pos]
        self._pos += 1
        return tok

    def _skip(self, *kinds: TokenKind) -> None:
        while self._pos < len(self._tokens) and self._tokens[self._pos].kind in kinds:
            self._pos += 1

    @staticmethod
    def _unexpected(expected: str, tok: Token, text: str) -> ParseError:
        return ParseError(
            f"expected {expected}, got {tok.kind} ({tok.value!r})",
            line=tok.line,
            column=tok.column,
            content=text,
        )
