import pytest
from arith.calculator import calculate
from arith.evaluator import evaluate, to_signed
from arith.parser import parse
from arith.types import (
    Binary, Diagnostics, Literal, Options, StructuralError, Token, TokenKind, Unary,
)


def lit(text):
    return Literal(Token(TokenKind.INTEGER, text))


def value(src, **kw):
    return calculate(src, Options(**kw))["value"]


# --- Scenarios ---

def test_precedence():
    assert value("4 + 3 * 8") == 28


def test_parenthesized():
    assert value("(4 + 3) * 8") == 56


def test_mixed():
    assert value("(4 + 3 * 8) + 8 * 8 + (4 * 4)") == 108


def test_three_operand_subtraction():
    assert value("10 - 2 - 3") == 5


def test_four_operand_subtraction_regroups():
    # (10 - 2) - (3 - 4)
    assert value("10 - 2 - 3 - 4") == 9


def test_five_operand_subtraction_regroups():
    # (10 - 2) - ((3 - 4) - 5)
    assert value("10 - 2 - 3 - 4 - 5") == 14


def test_multiplication_chain():
    assert value("2 * 3 * 4 * 5") == 120


def test_empty_is_zero():
    result = calculate("")
    assert result["value"] == 0
    assert len(result["errors"]) == 1


# --- Null subtrees ---

def test_none_tree():
    assert evaluate(None) == 0


def test_missing_operand_counts_as_zero():
    result = calculate("4 +")
    assert result["value"] == 4
    assert len(result["errors"]) == 1


def test_unmatched_paren_discards_subtree():
    assert value("(4 + 3") == 0


def test_malformed_literal_uses_digit_prefix():
    result = calculate("123abc + 1")
    assert result["value"] == 124
    assert "skipping trailing characters" in result["errors"][0]


# --- Wraparound ---

def test_negative_result():
    assert value("1 - 2") == -1


def test_overflow_wraps():
    assert value("9223372036854775807 + 1") == -9223372036854775808


def test_multiplication_wraps():
    assert value("4294967296 * 4294967296") == 0


def test_oversized_literal_wraps():
    assert value("18446744073709551617") == 1


def test_narrow_width():
    assert value("100 + 100", bits=8) == -56
    assert value("200 + 100", bits=8) == 44


def test_to_signed():
    assert to_signed(255, 8) == -1
    assert to_signed(127, 8) == 127
    assert to_signed(256, 8) == 0


# --- Node variants ---

def test_unary_negation():
    assert evaluate(Unary(TokenKind.MINUS, lit("5"))) == -5


def test_unary_negation_of_minimum_wraps():
    assert evaluate(Unary(TokenKind.MINUS, lit("9223372036854775808"))) == -9223372036854775808


def test_unary_other_operator_is_identity():
    assert evaluate(Unary(TokenKind.PLUS, lit("5"))) == 5


def test_binary_unknown_operator():
    assert evaluate(Binary(TokenKind.LPAREN, lit("1"), lit("2"))) == 0


def test_literal_unparsable_text():
    assert evaluate(lit("abc")) == 0


def test_unknown_node():
    d = Diagnostics()
    assert evaluate("bogus", diagnostics=d) == 0
    assert d.kinds() == ["structural"]


def test_unknown_node_strict():
    with pytest.raises(StructuralError, match="what tree is this"):
        evaluate(["bogus"], Options(strict=True))


def test_evaluate_parsed_tree():
    tree = parse("(1 + 2) * (3 + 4)")
    assert evaluate(tree) == 21


def test_diagnostics_are_logged(caplog):
    with caplog.at_level("WARNING", logger="arith"):
        calculate("5 $")
    assert "unexpected lexical analysis character" in caplog.text


# --- Long and deeply nested input ---

def test_two_hundred_term_sum():
    result = calculate(" + ".join(["1"] * 200))
    assert result == {"value": 200, "errors": []}


def test_sixty_nested_parentheses():
    result = calculate("(" * 60 + "1" + ")" * 60)
    assert result == {"value": 1, "errors": []}


def test_very_long_chain_evaluates_without_recursion():
    tree = parse(" + ".join(["1"] * 5000))
    assert evaluate(tree) == 5000


def test_long_product_wraps():
    assert value(" * ".join(["2"] * 64)) == 0
    assert value(" * ".join(["2"] * 63)) == -9223372036854775808


# --- Options ---

def test_bits_must_be_positive():
    with pytest.raises(ValueError, match="bits must be at least 1"):
        Options(bits=0)
    with pytest.raises(ValueError):
        Options(bits=-8)


def test_single_bit_width():
    assert value("1", bits=1) == -1
    assert value("2", bits=1) == 0


def test_max_depth_must_not_be_negative():
    with pytest.raises(ValueError, match="max_depth"):
        Options(max_depth=-1)
