"""
Unit tests for the expression parser.

Variables are 1-indexed unless stated otherwise, so x1 is bit 0 of the input.
"""

import pytest

from StreamCombiners import (
    ArityError, ExpressionParseError, TermTable, VariableIndexError
)
from StreamCombiners.BooleanLogic import parse_expression, tokenize
from StreamCombiners.Config import MAX_NESTING


def table(arity, expression, **kwargs):
    return list(parse_expression(arity, expression, **kwargs).build_truth_table())


class TestConcreteExpressions:
    """Truth tables of small expressions over three variables."""

    def test_constant_one(self):
        assert table(3, "1") == [1] * 8

    def test_constant_zero(self):
        assert table(3, "0") == [0] * 8

    def test_single_variable(self):
        assert table(3, "x1") == [v & 1 for v in range(8)]

    def test_and(self):
        assert table(3, "x1 x2") == [int(v & 0b11 == 0b11) for v in range(8)]

    def test_xor(self):
        assert table(3, "x1 + x2") == [(v & 1) ^ ((v >> 1) & 1) for v in range(8)]

    def test_documented_example(self):
        # 1 + x1 x2 + (x1 + 1) x3, evaluated by hand for x3 x2 x1 = 000 .. 111
        assert table(3, "1 + x1 x2 + (x1 + 1) x3") == [1, 1, 1, 0, 0, 1, 0, 0]

    def test_documented_example_terms(self):
        t = parse_expression(3, "1 + x1 x2 + (x1 + 1) x3")
        assert t == TermTable(3, [True, [0, 1], [0, 2], [2]])

    def test_repeated_variable_is_idempotent(self):
        assert parse_expression(3, "x1 x1") == parse_expression(3, "x1")

    def test_whitespace_is_optional(self):
        assert parse_expression(3, "x1x2+x3") == parse_expression(3, " x1 x2 +\tx3 ")

    def test_even_repeats_cancel(self):
        assert len(parse_expression(3, "x1 + x2 x3 + x1 + x3 x2")) == 0

    def test_zero_annihilates_term(self):
        assert parse_expression(3, "x1 0 x2 + x3") == TermTable(3, [[2]])

    def test_one_is_identity(self):
        assert parse_expression(3, "1 x2 1") == parse_expression(3, "x2")

    def test_nested_groups(self):
        # (x1 + x2)(x2 + x3) = x1 x2 + x1 x3 + x2 + x2 x3
        t = parse_expression(3, "((x1 + x2)(x2 + x3))")
        assert t.masks == frozenset({0b011, 0b101, 0b010, 0b110})

    def test_multi_digit_indices(self):
        t = parse_expression(12, "x10 x12 + x1")
        assert t == TermTable(12, [[9, 11], [0]])

    def test_index_from_zero(self):
        assert parse_expression(3, "x0 + x2", index_from_zero = True) == TermTable(3, [[0], [2]])

    def test_classmethod_entry_point(self):
        assert TermTable.parse(2, "x1 + x2") == TermTable(2, [[0], [1]])


class TestErrors:
    """Malformed expressions fail with a position."""

    @pytest.mark.parametrize("expression,position,token", [
        ("x1 +", 4, ''),
        ("(x1", 0, '('),
        ("", 0, ''),
        ("   ", 0, ''),
        ("x1 )", 3, ')'),
        ("x1 * x2", 3, '*'),
        ("x", 0, 'x'),
        ("x 1", 0, 'x'),
        ("()", 1, ')'),
        ("x1 ++ x2", 4, '+'),
        ("2", 0, '2'),
        ("X1", 0, 'X'),
        ("+ x1", 0, '+'),
        ("(x1 + (x2)", 0, '('),
    ])
    def test_malformed(self, expression, position, token):
        with pytest.raises(ExpressionParseError) as info:
            parse_expression(3, expression)
        assert info.value.position == position
        assert info.value.token == token

    def test_deep_nesting_is_a_parse_error(self):
        expression = "(" * 5000 + "x1" + ")" * 5000
        with pytest.raises(ExpressionParseError) as info:
            parse_expression(3, expression)
        assert info.value.position == MAX_NESTING
        assert info.value.token == '('

    def test_nesting_up_to_the_limit_parses(self):
        expression = "(" * MAX_NESTING + "x1 + x2" + ")" * MAX_NESTING
        assert parse_expression(3, expression) == TermTable(3, [[0], [1]])

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_expression(3, "x1 +")

    @pytest.mark.parametrize("expression,index_from_zero", [
        ("x5", False),
        ("x4", False),
        ("x0", False),
        ("x3", True),
        ("x1 + (x2 x9)", False),
    ])
    def test_variable_out_of_range(self, expression, index_from_zero):
        with pytest.raises(VariableIndexError):
            parse_expression(3, expression, index_from_zero = index_from_zero)

    def test_variable_error_reports_token(self):
        with pytest.raises(VariableIndexError) as info:
            parse_expression(3, "x1 + x5")
        assert info.value.position == 5
        assert info.value.token == "x5"
        assert info.value.index == 5
        assert isinstance(info.value, IndexError)
        assert isinstance(info.value, ExpressionParseError)

    def test_arity_checked_before_parsing(self):
        with pytest.raises(ArityError):
            parse_expression(64, "((((")
        with pytest.raises(ArityError):
            parse_expression(0, "x1")

    def test_expression_must_be_a_string(self):
        with pytest.raises(TypeError):
            parse_expression(3, 101)


class TestTokenize:
    """The token stream used by the parser."""

    def test_tokens(self):
        tokens = tokenize("(x12 +1)0")
        assert [(t.kind, t.text, t.position) for t in tokens] == [
            ("LPAREN", "(", 0),
            ("VAR", "x12", 1),
            ("PLUS", "+", 5),
            ("CONST", "1", 6),
            ("RPAREN", ")", 7),
            ("CONST", "0", 8),
        ]
