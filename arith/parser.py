"""Recursive-descent parser for integer arithmetic expressions.

Grammar, lowest precedence first:

    expression     = additive
    additive       = multiplicative [ add_op multiplicative [ add_op additive ] ]
    multiplicative = primary [ "*" primary [ "*" multiplicative ] ]
    primary        = integer | "(" expression ")"
    add_op         = "+" | "-"

The first two operands of a same-precedence chain are grouped to the left;
the rest of the chain, parsed the same way, becomes the right operand, so
"10 - 2 - 3 - 4" is (10 - 2) - (3 - 4). Only parenthesis nesting counts
against Options.max_depth.
"""

from typing import Optional

from .scanner import Scanner
from .types import (
    Binary, Diagnostics, Literal, Options, Token, TokenKind, Tree,
    SYNTAX,
)

ADD_OPS = (TokenKind.PLUS, TokenKind.MINUS)
MUL_OPS = (TokenKind.STAR,)


class Parser:
    def __init__(
        self,
        scanner: Scanner,
        options: Optional[Options] = None,
        diagnostics: Optional[Diagnostics] = None,
    ):
        self.scanner = scanner
        self.options = options or Options()
        self.diagnostics = diagnostics if diagnostics is not None else scanner.diagnostics
        self._depth = 0

    def parse_expression(self) -> Optional[Tree]:
        return self.parse_additive_expression()

    def parse_primary(self) -> Optional[Tree]:
        tok = self.scanner.peek()

        if tok.kind is TokenKind.INTEGER:
            self.scanner.advance()
            return Literal(tok)

        if tok.kind is TokenKind.LPAREN:
            if self._depth >= self.options.max_depth:
                self.diagnostics.report(SYNTAX, "maximum nesting depth exceeded", tok.position)
                return None
            self.scanner.advance()
            self._depth += 1
            try:
                tree = self.parse_expression()
            finally:
                self._depth -= 1
            close = self.scanner.peek()
            if close.kind is not TokenKind.RPAREN:
                self.diagnostics.report(
                    SYNTAX, f"expected right parenthesis, got {close}", close.position
                )
                return None
            self.scanner.advance()
            return tree

        self.diagnostics.report(SYNTAX, f"syntax error at {tok}", tok.position)
        return None

    def parse_multiplicative_expression(self) -> Optional[Tree]:
        return self._chain(self.parse_primary, MUL_OPS)

    def parse_additive_expression(self) -> Optional[Tree]:
        return self._chain(self.parse_multiplicative_expression, ADD_OPS)

    def _chain(self, operand, ops: tuple[TokenKind, ...]) -> Optional[Tree]:
        """Parse one precedence level without recursing on its own tail.

        Operands are taken in pairs, each pair grouped left; the pairs are
        then folded right, which is the same tree the recursive grammar
        rule builds: a - b - c - d - e is (a - b) - ((c - d) - e).
        """
        groups: list[Optional[Tree]] = []
        joins: list[Token] = []
        while True:
            tree = operand()
            op = self._accept(ops)
            if op is not None:
                tree = Binary(op.kind, tree, operand())
            groups.append(tree)
            if op is None:
                break
            join = self._accept(ops)
            if join is None:
                break
            joins.append(join)

        tree = groups.pop()
        while groups:
            tree = Binary(joins.pop().kind, groups.pop(), tree)
        return tree

    def _accept(self, kinds: tuple[TokenKind, ...]) -> Optional[Token]:
        tok = self.scanner.peek()
        if tok.kind in kinds:
            self.scanner.advance()
            return tok
        return None


def parse(
    src: str,
    options: Optional[Options] = None,
    diagnostics: Optional[Diagnostics] = None,
) -> Optional[Tree]:
    """Parse one expression from ``src``.

    Tokens left over after the expression are reported; the tree parsed so
    far is still returned.
    """
    options = options or Options()
    if diagnostics is None:
        diagnostics = Diagnostics(strict=options.strict)
    scanner = Scanner(diagnostics)
    scanner.set_source(src)
    tree = Parser(scanner, options, diagnostics).parse_expression()
    tok = scanner.peek()
    if tok.kind is not TokenKind.END:
        diagnostics.report(SYNTAX, f"unexpected trailing input at {tok}", tok.position)
    return tree
