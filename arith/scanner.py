"""Lookahead-1 scanner for integer arithmetic expressions."""

import re
from typing import Optional

from .types import (
    Diagnostics, Token, TokenKind,
    LEXICAL, MALFORMED_LITERAL,
)

_WHITESPACE = re.compile(r"\s*")
_DIGITS = re.compile(r"[0-9]+")
# Identifier characters or '.' glued to the end of an integer
_TRAILING = re.compile(r"[A-Za-z0-9_.]+")

_SINGLE = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}


class Scanner:
    """Turns a source string into tokens on demand.

    Reading is two-phase: ``peek`` works out the next token and where the
    cursor would land after it, without moving the cursor; ``advance``
    commits that landing point. Peeking twice in a row returns the same
    token and reports its diagnostics only once.
    """

    def __init__(self, diagnostics: Optional[Diagnostics] = None):
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.set_source("")

    def set_source(self, text: str) -> None:
        self._buffer = text
        self._position = 0
        self._lookahead: Optional[tuple[Token, int]] = None

    @property
    def position(self) -> int:
        return self._position

    def peek(self) -> Token:
        if self._lookahead is None:
            self._lookahead = self._scan(self._position)
        return self._lookahead[0]

    def advance(self) -> None:
        if self._lookahead is None:
            raise RuntimeError("advance() called without a pending peek()")
        self._position = self._lookahead[1]
        self._lookahead = None

    def _scan(self, pos: int) -> tuple[Token, int]:
        buf = self._buffer

        if pos < len(buf):
            c = buf[pos]
            if not c.isprintable() and not c.isspace():
                self.diagnostics.report(
                    LEXICAL,
                    f"bad lexical analysis stream (no such printable character {c!r})",
                    pos,
                )
                return Token(TokenKind.INVALID, c, pos), pos + 1

        pos = _WHITESPACE.match(buf, pos).end()
        if pos >= len(buf):
            return Token(TokenKind.END, "", pos), pos

        m = _DIGITS.match(buf, pos)
        if m:
            end = m.end()
            trailing = _TRAILING.match(buf, end)
            if trailing:
                self.diagnostics.report(
                    MALFORMED_LITERAL,
                    f"skipping trailing characters for integer: {trailing[0]!r}",
                    end,
                )
                end = trailing.end()
            return Token(TokenKind.INTEGER, m[0], pos), end

        c = buf[pos]
        kind = _SINGLE.get(c)
        if kind is None:
            self.diagnostics.report(LEXICAL, f"unexpected lexical analysis character {c!r}", pos)
            return Token(TokenKind.INVALID, c, pos), pos + 1
        return Token(kind, c, pos), pos + 1


def tokenize(text: str, diagnostics: Optional[Diagnostics] = None) -> list[Token]:
    """Scan ``text`` to completion. The trailing END token is included."""
    scanner = Scanner(diagnostics)
    scanner.set_source(text)
    tokens: list[Token] = []
    while True:
        tok = scanner.peek()
        tokens.append(tok)
        if tok.kind is TokenKind.END:
            return tokens
        scanner.advance()
