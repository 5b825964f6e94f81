"""
Unit tests for the BooleanFunction facade.
"""

import pytest

from StreamCombiners import (
    BitVector, BooleanFunction, TermTable, TruthTable, VectorLengthError
)


EXPRESSIONS = [
    (1, "x1"),
    (2, "1 + x1 + x2"),
    (3, "1 + x1 x2 + (x1 + 1) x3"),
    (3, "x1 x2 + x2 x3 + x3"),
    (4, "x1 x2 x3 x4 + x2 x4 + x3 + 1"),
    (5, "(x1 + x2)(x3 + x4 x5) + x5"),
]


class TestConstruction:
    """Entry points and the two views."""

    def test_from_string(self):
        f = BooleanFunction.from_string(3, "x1 x2")
        assert f.get_arity() == 3
        assert f.get_term_table() == TermTable(3, [[0, 1]])

    def test_from_string_index_from_zero(self):
        f = BooleanFunction.from_string(3, "x0 x1", index_from_zero = True)
        assert f == BooleanFunction.from_string(3, "x1 x2")

    def test_from_truth_table(self):
        f = BooleanFunction.from_truth_table(TruthTable(2, [0, 1, 1, 0]))
        assert f.get_term_table() == TermTable(2, [[0], [1]])

    def test_from_term_table(self):
        f = BooleanFunction.from_term_table(TermTable(2, [[0], [1]]))
        assert list(f.get_truth_table()) == [0, 1, 1, 0]

    def test_rejects_other_types(self):
        with pytest.raises(TypeError):
            BooleanFunction("x1")

    @pytest.mark.parametrize("arity,expression", EXPRESSIONS)
    def test_views_agree(self, arity, expression):
        f = BooleanFunction.from_string(arity, expression)
        rebuilt = f.get_term_table().build_truth_table()
        truth_table = f.get_truth_table()
        for v in range(1 << arity):
            assert rebuilt.at(v) == truth_table.at(v)

    @pytest.mark.parametrize("arity,expression", EXPRESSIONS)
    def test_views_agree_from_truth_table(self, arity, expression):
        original = BooleanFunction.from_string(arity, expression)
        f = BooleanFunction.from_truth_table(original.get_truth_table())
        assert f.get_term_table() == original.get_term_table()


class TestEvaluation:
    """Evaluating with bit vectors and integers."""

    def test_evaluate_matches_term_table(self):
        f = BooleanFunction.from_string(4, "x1 x2 x3 x4 + x2 x4 + x3 + 1")
        t = f.get_term_table()
        for v in range(16):
            bits = BitVector.from_value(4, v)
            assert f.evaluate(bits) == t.evaluate(bits)
            assert f.at(bits) == f.at(v)

    def test_at_int_truncates(self):
        f = BooleanFunction.from_string(3, "x1")
        assert f.at(0b1000) == 0
        assert f.at(0b1001) == 1
        assert f.at(-1) == 1

    def test_evaluate_wrong_length(self):
        f = BooleanFunction.from_string(3, "x1")
        with pytest.raises(VectorLengthError):
            f.evaluate(BitVector(4))
        with pytest.raises(VectorLengthError):
            f.at(BitVector(2))

    def test_evaluate_requires_vector(self):
        with pytest.raises(TypeError):
            BooleanFunction.from_string(3, "x1").evaluate(1)
        with pytest.raises(TypeError):
            BooleanFunction.from_string(3, "x1").at("1")

    def test_width_adapters(self):
        f = BooleanFunction.from_string(3, "x1 x2 x3")
        assert f.at_byte(-1) == 1
        assert f.at_short(7) == 1
        assert f.at_int(6) == 0
        assert f.at_long(-9) == 1

    def test_width_adapters_agree_with_at_on_wide_functions(self):
        """Narrow values are zero extended to the arity, like at()."""
        f = BooleanFunction.from_string(16, "x8 + x16")
        for value in (-1, 0x80, 200, 0x7F):
            assert f.at_byte(value) == f.at(value & 0xFF)
        assert f.at_byte(-1) == 1
        assert f.at_short(-1) == 0
        assert f.at_int(0x18000) == f.at(0x8000) == 1
        assert f.at_long(1 << 64) == 0

    def test_large_arity_evaluates_without_a_truth_table(self):
        f = BooleanFunction.from_string(40, "x1 x40")
        assert f.at((1 << 39) | 1) == 1
        assert f.at(1 << 39) == 0
        assert f.at_long(-1) == 1
        assert f.evaluate(BitVector.from_value(40, 1)) == 0

    def test_evaluation_after_truth_table_is_built(self):
        f = BooleanFunction.from_string(3, "x1 x2 + x3")
        before = [f.at(v) for v in range(8)]
        f.get_truth_table()
        assert [f.at(v) for v in range(8)] == before

    def test_call_with_bits(self):
        f = BooleanFunction.from_string(3, "x1 x2")
        assert f(1, 1, 0) == 1
        assert f(1, 0, 1) == 0
        with pytest.raises(VectorLengthError):
            f(1, 1)


class TestProperties:
    """Derived information about a function."""

    def test_degree_and_weight(self):
        geffe = BooleanFunction.from_string(3, "x1 x2 + x2 x3 + x3")
        assert geffe.degree() == 2
        assert geffe.weight() == 4

    def test_str(self):
        assert str(BooleanFunction.from_string(3, "(x1 + 1) x3")) == "x3 + x1 x3"

    def test_repr_round_trip(self):
        f = BooleanFunction.from_string(3, "1 + x1 x2 + (x1 + 1) x3")
        assert repr(f) == "BooleanFunction.from_string(3, '1 + x3 + x1 x2 + x1 x3')"

    def test_equality_across_representations(self):
        a = BooleanFunction.from_string(2, "x1 + x2")
        b = BooleanFunction.from_truth_table(TruthTable(2, [0, 1, 1, 0]))
        assert a == b
        assert hash(a) == hash(b)
        assert a != BooleanFunction.from_string(2, "x1 x2")
