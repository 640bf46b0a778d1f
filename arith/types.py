"""Shared value types: tokens, AST variants, options and diagnostics."""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Union

log = logging.getLogger("arith")

DEFAULT_BITS = 64
# Parenthesis levels; each costs about six interpreter frames
DEFAULT_MAX_DEPTH = 120


class TokenKind(Enum):
    END = auto()
    INTEGER = auto()
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    LPAREN = auto()
    RPAREN = auto()
    INVALID = auto()


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str = ""
    position: int = 0

    def __str__(self) -> str:
        return f"{self.kind.name}({self.text!r})"


# AST variants. A child is None where a sub-parse failed.

@dataclass(frozen=True)
class Literal:
    token: Token


@dataclass(frozen=True)
class Unary:
    operator: TokenKind
    child: Optional["Tree"]


@dataclass(frozen=True)
class Binary:
    operator: TokenKind
    left: Optional["Tree"]
    right: Optional["Tree"]


Tree = Union[Literal, Unary, Binary]

_SYMBOLS = {
    TokenKind.PLUS: "+",
    TokenKind.MINUS: "-",
    TokenKind.STAR: "*",
}


def dump(tree: Optional[Tree]) -> str:
    """Render a tree one node per line, children indented under parents."""
    lines = []
    stack = [(tree, 0)]
    while stack:
        node, level = stack.pop()
        pad = "  " * level
        if node is None:
            lines.append(f"{pad}<error>")
        elif isinstance(node, Literal):
            lines.append(f"{pad}{node.token.text}")
        elif isinstance(node, Unary):
            lines.append(f"{pad}unary {_SYMBOLS.get(node.operator, node.operator.name)}")
            stack.append((node.child, level + 1))
        elif isinstance(node, Binary):
            lines.append(f"{pad}{_SYMBOLS.get(node.operator, node.operator.name)}")
            stack.append((node.right, level + 1))
            stack.append((node.left, level + 1))
        else:
            lines.append(f"{pad}<{type(node).__name__}>")
    return "".join(line + "\n" for line in lines)


@dataclass
class Options:
    bits: int = DEFAULT_BITS
    max_depth: int = DEFAULT_MAX_DEPTH
    strict: bool = False

    def __post_init__(self):
        if self.bits < 1:
            raise ValueError(f"bits must be at least 1, got {self.bits}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {self.max_depth}")


class ArithError(RuntimeError):
    pass


class LexicalError(ArithError):
    pass


class ParseError(ArithError):
    pass


class StructuralError(ArithError):
    pass


LEXICAL = "lexical"
MALFORMED_LITERAL = "malformed-literal"
SYNTAX = "syntax"
STRUCTURAL = "structural"

_ERRORS = {
    LEXICAL: LexicalError,
    MALFORMED_LITERAL: LexicalError,
    SYNTAX: ParseError,
    STRUCTURAL: StructuralError,
}


@dataclass(frozen=True)
class Diagnostic:
    kind: str
    message: str
    position: Optional[int] = None

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at {self.position})"


@dataclass
class Diagnostics:
    """Collects advisory diagnostics for one scan/parse/evaluate run.

    Every report is logged on the ``arith`` logger. With ``strict`` set the
    report is raised as the matching ArithError subclass instead of letting
    the caller continue with a sentinel value. ``echo=False`` only records.
    """
    strict: bool = False
    echo: bool = True
    entries: list[Diagnostic] = field(default_factory=list)

    def report(self, kind: str, message: str, position: Optional[int] = None) -> None:
        diag = Diagnostic(kind, message, position)
        self.entries.append(diag)
        if self.echo:
            log.warning("%s", diag)
        if self.strict:
            raise _ERRORS.get(kind, ArithError)(str(diag))

    def kinds(self) -> list[str]:
        return [d.kind for d in self.entries]

    def messages(self) -> list[str]:
        return [str(d) for d in self.entries]

    def __len__(self) -> int:
        return len(self.entries)
