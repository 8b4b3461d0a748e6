# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Stateful lexer for .env content.

.env files are loose, so the lexer only applies a rule when it makes sense
after the last significant token: ``=`` is only an ``EQUALS`` right after a
``KEY``, quotes only open a value right after ``EQUALS``, and so on.

Tokens are produced lazily from :meth:`Lexer.__iter__`. Lexical errors are
raised as :class:`~envscan.errors.ParseError` from the generator, which ends
the sequence. Windows line endings are converted to ``\\n`` up front.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterator
from dataclasses import dataclass, replace

from envscan.errors import ParseError

_EOF = ""
_NEWLINE = "\n"
_COMMENT_START = "#"
_SEPARATOR = "="
_EXPORT = "export "
_WHITESPACE = " \t\v\f"


class TokenKind(str, enum.Enum):
    """Classification of a lexed token."""

    EOF = "EOF"
    WHITESPACE = "WHITESPACE"
    NEWLINE = "NEWLINE"
    COMMENT = "COMMENT"
    EXPORT = "EXPORT"
    KEY = "KEY"
    EQUALS = "EQUALS"
    VALUE = "VALUE"

    def __str__(self) -> str:
        return self.value


class QuoteType(enum.IntEnum):
    """Quote style of a ``VALUE`` token."""

    NONE = 0
    SINGLE = 1
    DOUBLE = 2


# Tokens that don't change which rules apply next.
_TRANSPARENT = frozenset({TokenKind.WHITESPACE, TokenKind.NEWLINE, TokenKind.COMMENT})


@dataclass(frozen=True)
class Token:
    """A token found in the input, with its position.

    ``line`` is 1-based. ``column`` is the number of characters already read on
    that line when the token started. ``position`` is the offset into the
    normalized input.
    """

    kind: TokenKind
    value: str
    position: int = 0
    line: int = 1
    column: int = 0
    quote_type: QuoteType = QuoteType.NONE


@dataclass(frozen=True)
class _Snapshot:
    start: int
    pos: int
    width: int
    line: int
    prev_line_cols: int
    col: int


def is_whitespace(ch: str) -> bool:
    return ch != _EOF and ch in _WHITESPACE


def is_key_start(ch: str) -> bool:
    return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def is_key_char(ch: str) -> bool:
    return is_key_start(ch) or ("0" <= ch <= "9")


class Lexer:
    """Turn .env text into :class:`Token` objects, one at a time."""

    def __init__(self, text: str) -> None:
        self._input = text.replace("\r\n", "\n")
        self._line = 1
        self._prev_line_cols = 0
        self._col = 0
        self._start = 0
        self._pos = 0
        self._width = 0
        self._last = TokenKind.EOF

    @property
    def text(self) -> str:
        return self._input

    # ------------------------------------------------------------------
    # Position primitives
    # ------------------------------------------------------------------

    def _snapshot(self) -> _Snapshot:
        return _Snapshot(
            start=self._start,
            pos=self._pos,
            width=self._width,
            line=self._line,
            prev_line_cols=self._prev_line_cols,
            col=self._col,
        )

    def _restore(self, snap: _Snapshot) -> None:
        self._start = snap.start
        self._pos = snap.pos
        self._width = snap.width
        self._line = snap.line
        self._prev_line_cols = snap.prev_line_cols
        self._col = snap.col

    def _next(self) -> str:
        """Read one character, or return ``_EOF`` at the end of input."""
        if self._pos >= len(self._input):
            self._width = 0
            return _EOF
        ch = self._input[self._pos]
        self._width = 1
        self._pos += 1
        if ch == _NEWLINE:
            self._line += 1
            self._prev_line_cols = self._col
            self._col = 0
        else:
            self._col += 1
        return ch

    def _backup(self) -> None:
        """Step back over the character returned by the last :meth:`_next`."""
        if self._width == 0:
            return
        self._pos -= self._width
        if self._col == 0:
            self._col = self._prev_line_cols
            self._line -= 1
        else:
            self._col -= 1

    def _peek(self) -> str:
        ch = self._next()
        self._backup()
        return ch

    def _mark(self) -> None:
        self._start = self._pos

    def _value(self) -> str:
        return self._input[self._start:self._pos]

    def _scan(self, pred: Callable[[str], bool]) -> None:
        """Read forward while *pred* accepts the next character."""
        while True:
            ch = self._peek()
            if ch == _EOF or not pred(ch):
                return
            self._next()

    def _scan_until(self, pred: Callable[[str], bool]) -> None:
        """Read forward until *pred* accepts the next character (left unread)."""
        while True:
            ch = self._peek()
            if ch == _EOF or pred(ch):
                return
            self._next()

    def _scan_exact(self, literal: str) -> bool:
        """Consume *literal* if it comes next; otherwise leave the position as is."""
        snap = self._snapshot()
        for expected in literal:
            if self._peek() != expected:
                self._restore(snap)
                return False
            self._next()
        return True

    def _error(self, cause: str) -> ParseError:
        return ParseError(cause, line=self._line, column=self._col, content=self._input)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _rules(self) -> tuple[tuple[Callable[[str], bool], Callable[[str], Token]], ...]:
        """Ordered ``(guard, handler)`` pairs; the first guard that matches wins.

        Guards that match a literal (``export ``, the triple quote fences)
        consume it when they succeed.
        """
        last = self._last
        after_equals = last is TokenKind.EQUALS
        return (
            (is_whitespace, self._lex_whitespace),
            (lambda ch: ch == _NEWLINE, self._lex_newline),
            (lambda ch: ch == _COMMENT_START, self._lex_comment),
            (
                lambda ch: last in (TokenKind.EOF, TokenKind.VALUE) and self._scan_exact(_EXPORT),
                self._lex_export,
            ),
            (
                lambda ch: last in (TokenKind.EOF, TokenKind.EXPORT, TokenKind.VALUE) and is_key_start(ch),
                self._lex_key,
            ),
            (lambda ch: after_equals and self._scan_exact('"""'), self._lex_triple_double),
            (lambda ch: after_equals and self._scan_exact("'''"), self._lex_triple_single),
            (lambda ch: after_equals and ch == '"', self._lex_double),
            (lambda ch: after_equals and ch == "'", self._lex_single),
            (lambda ch: last is TokenKind.KEY and ch == _SEPARATOR, self._lex_equals),
            (lambda ch: after_equals, self._lex_bare_value),
        )

    def __iter__(self) -> Iterator[Token]:
        while True:
            self._mark()
            ch = self._peek()
            if ch == _EOF:
                return
            snap = self._snapshot()

            for guard, handler in self._rules():
                if guard(ch):
                    token = handler(ch)
                    break
            else:
                raise self._error(f"invalid start of token: {ch!r}")

            if token.kind not in _TRANSPARENT:
                self._last = token.kind
            yield replace(token, position=self._start, line=snap.line, column=snap.col)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _lex_whitespace(self, ch: str) -> Token:
        self._scan(is_whitespace)
        return Token(TokenKind.WHITESPACE, self._value())

    def _lex_newline(self, ch: str) -> Token:
        self._next()
        if self._last is TokenKind.EQUALS:
            # "KEY=" at the end of a line.
            return Token(TokenKind.VALUE, "")
        return Token(TokenKind.NEWLINE, self._value())

    def _lex_comment(self, ch: str) -> Token:
        self._scan_until(lambda c: c == _NEWLINE)
        return Token(TokenKind.COMMENT, self._value().rstrip(_WHITESPACE))

    def _lex_export(self, ch: str) -> Token:
        return Token(TokenKind.EXPORT, self._value().strip())

    def _lex_key(self, ch: str) -> Token:
        self._next()
        self._scan(is_key_char)
        return Token(TokenKind.KEY, self._value())

    def _lex_equals(self, ch: str) -> Token:
        self._next()
        return Token(TokenKind.EQUALS, self._value())

    def _lex_double(self, ch: str) -> Token:
        self._next()
        return Token(TokenKind.VALUE, self._scan_quoted('"'), quote_type=QuoteType.DOUBLE)

    def _lex_single(self, ch: str) -> Token:
        self._next()
        return Token(TokenKind.VALUE, self._scan_quoted("'"), quote_type=QuoteType.SINGLE)

    def _lex_triple_double(self, ch: str) -> Token:
        return Token(TokenKind.VALUE, self._scan_triple_quoted('"'), quote_type=QuoteType.DOUBLE)

    def _lex_triple_single(self, ch: str) -> Token:
        return Token(TokenKind.VALUE, self._scan_triple_quoted("'"), quote_type=QuoteType.SINGLE)

    def _lex_bare_value(self, ch: str) -> Token:
        self._next()
        self._scan_until(lambda c: c == _NEWLINE or is_whitespace(c))
        return Token(TokenKind.VALUE, self._value().strip())

    def _scan_quoted(self, quote: str) -> str:
        """Read up to the closing *quote*; the opening one is already consumed.

        A backslash keeps the next character from closing the string. Only the
        escaped quote itself is unescaped.
        """
        while True:
            ch = self._next()
            if ch == _EOF:
                raise self._error("unterminated quotes")
            if ch == quote:
                return self._input[self._start + 1:self._pos - 1].replace("\\" + quote, quote)
            if ch == "\\":
                self._next()

    def _scan_triple_quoted(self, quote: str) -> str:
        """Read up to the closing fence; the opening fence is already consumed."""
        count = 0

        def closes(c: str) -> bool:
            nonlocal count
            count = count + 1 if c == quote else 0
            return count == 3

        self._scan_until(closes)
        if count != 3:
            raise self._error("unterminated quote block")
        # _scan_until only peeked at the last quote of the fence.
        self._next()

        block = self._input[self._start + 3:self._pos - 3]
        if block.startswith(_NEWLINE):
            block = block[1:]
        if block.endswith(_NEWLINE):
            block = block[:-1]
        return block.replace(("\\" + quote) * 3, quote * 3)


def tokenize(text: str) -> Iterator[Token]:
    """Return a lazy token stream for *text*."""
    return iter(Lexer(text))
