from .types import (
    TokenKind, Token, Literal, Unary, Binary, Tree, Options,
    Diagnostic, Diagnostics, ArithError, LexicalError, ParseError, StructuralError, dump,
)
from .scanner import Scanner, tokenize
from .parser import Parser, parse
from .evaluator import evaluate
from .calculator import calculate, self_test

__all__ = [
    "TokenKind", "Token", "Literal", "Unary", "Binary", "Tree", "Options",
    "Diagnostic", "Diagnostics", "ArithError", "LexicalError", "ParseError", "StructuralError",
    "dump", "Scanner", "tokenize", "Parser", "parse", "evaluate", "calculate", "self_test",
]
