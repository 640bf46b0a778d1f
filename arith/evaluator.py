"""Tree-walk evaluator over a fixed-width wraparound integer domain."""

from typing import Optional

from .types import (
    Binary, Diagnostics, Literal, Options, TokenKind, Tree, Unary,
    STRUCTURAL,
)


def evaluate(
    tree: Optional[Tree],
    options: Optional[Options] = None,
    diagnostics: Optional[Diagnostics] = None,
) -> int:
    """Evaluate an expression tree to an integer.

    All arithmetic wraps modulo ``2 ** options.bits``; the result is the
    two's-complement signed reading of those bits. A missing subtree (None)
    counts as 0.
    """
    options = options or Options()
    if diagnostics is None:
        diagnostics = Diagnostics(strict=options.strict)
    mask = (1 << options.bits) - 1
    return to_signed(_eval(tree, mask, diagnostics), options.bits)


def _eval(tree: Optional[Tree], mask: int, diagnostics: Diagnostics) -> int:
    # Explicit stack; a long operator chain is a tree deeper than the
    # interpreter recursion limit.
    values: list[int] = []
    stack = [(tree, False)]
    while stack:
        node, children_done = stack.pop()
        if node is None:
            values.append(0)
        elif isinstance(node, Literal):
            values.append(_to_int(node.token.text) & mask)
        elif isinstance(node, Binary):
            if children_done:
                b = values.pop()
                a = values.pop()
                values.append(_binary(node.operator, a, b) & mask)
            else:
                stack.append((node, True))
                stack.append((node.right, False))
                stack.append((node.left, False))
        elif isinstance(node, Unary):
            if children_done:
                values.append(_unary(node.operator, values.pop()) & mask)
            else:
                stack.append((node, True))
                stack.append((node.child, False))
        else:
            diagnostics.report(STRUCTURAL, f"what tree is this? {type(node).__name__}")
            values.append(0)
    return values.pop()


def _binary(operator: TokenKind, a: int, b: int) -> int:
    if operator is TokenKind.PLUS:
        return a + b
    if operator is TokenKind.MINUS:
        return a - b
    if operator is TokenKind.STAR:
        return a * b
    return 0


def _unary(operator: TokenKind, value: int) -> int:
    if operator is TokenKind.MINUS:
        return -value
    return value


def to_signed(value: int, bits: int) -> int:
    """Read the low ``bits`` bits of value as a two's-complement integer."""
    value &= (1 << bits) - 1
    if value >> (bits - 1):
        return value - (1 << bits)
    return value


def _to_int(text: str) -> int:
    try:
        return int(text, 10)
    except (TypeError, ValueError):
        return 0
