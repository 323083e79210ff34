"""Tests for Go constant arithmetic helpers."""

from fractions import Fraction

import pytest

from enumer.codegen.languages.go.constexpr import (
    UnsupportedExpression,
    apply_binary,
    apply_unary,
    normalize,
    parse_float_literal,
    parse_int_literal,
    parse_rune_literal,
)


class TestLiterals:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("0", 0),
            ("42", 42),
            ("1_000_000", 1000000),
            ("0x1F", 31),
            ("0X_ff", 255),
            ("0b1010", 10),
            ("0o17", 15),
            ("017", 15),
        ],
    )
    def test_int_literal(self, text, expected):
        assert parse_int_literal(text) == expected

    @pytest.mark.parametrize(
        "text, expected",
        [("'A'", 65), ("'\\n'", 10), ("'\\x41'", 65), ("'\\u00e9'", 0xE9), ("'\\101'", 65), ("'\\''", 39)],
    )
    def test_rune_literal(self, text, expected):
        assert parse_rune_literal(text) == expected

    def test_float_literal_is_exact(self):
        assert parse_float_literal("0.1") == Fraction(1, 10)
        assert normalize(parse_float_literal("1e3")) == 1000


class TestBinary:
    def test_shift_beyond_machine_width(self):
        assert apply_binary("<<", 1, 70) == 2**70

    def test_bitwise_operators(self):
        assert apply_binary("|", 1, 6) == 7
        assert apply_binary("&", 7, 5) == 5
        assert apply_binary("^", 7, 5) == 2
        assert apply_binary("&^", 7, 5) == 2

    def test_integer_division_truncates_toward_zero(self):
        assert apply_binary("/", 7, 2) == 3
        assert apply_binary("/", -7, 2) == -3
        assert apply_binary("%", -7, 2) == -1

    def test_float_division_is_exact(self):
        assert apply_binary("/", Fraction(1), 4) == Fraction(1, 4)

    def test_division_by_zero(self):
        with pytest.raises(UnsupportedExpression):
            apply_binary("/", 1, 0)

    def test_negative_shift(self):
        with pytest.raises(UnsupportedExpression):
            apply_binary("<<", 1, -1)

    def test_strings_are_not_numbers(self):
        with pytest.raises(UnsupportedExpression):
            apply_binary("+", '"a"', 1)


class TestUnary:
    def test_negation(self):
        assert apply_unary("-", 5, None) == -5

    def test_complement_untyped(self):
        assert apply_unary("^", 0, None) == -1

    def test_complement_unsigned(self):
        assert apply_unary("^", 0, 8) == 255
        assert apply_unary("^", 1, 16) == 0xFFFE
