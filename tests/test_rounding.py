"""Tests for rounding and normalization primitives."""

import math
import sys

import pytest

from invoice_engine.rounding import line_net, normalize_rate, round2, to_number


class TestToNumber:
    """Test to_number coercion."""

    @pytest.mark.parametrize("value", [None, "", "   ", "abc", float("nan"), float("inf"), [], {}])
    def test_garbage_becomes_zero(self, value):
        assert to_number(value) == 0.0

    def test_numeric_strings_are_parsed(self):
        assert to_number("12.5") == 12.5
        assert to_number(" 7 ") == 7.0

    def test_numbers_pass_through(self):
        assert to_number(3) == 3.0
        assert to_number(-0.25) == -0.25


class TestRound2:
    """Test round2 currency rounding."""

    def test_representation_error_is_compensated(self):
        """1.005 is stored as 1.00499999... but must round up."""
        assert round2(1.005) == 1.01

    def test_half_rounds_away_from_zero(self):
        assert round2(0.125) == 0.13
        assert round2(-0.125) == -0.13

    def test_plain_values(self):
        assert round2(13.5) == 13.5
        assert round2(2.344) == 2.34
        assert round2(2.346) == 2.35

    def test_never_negative_zero(self):
        result = round2(-0.001)
        assert result == 0.0
        assert math.copysign(1.0, result) == 1.0

    def test_invalid_input_is_zero(self):
        assert round2(None) == 0.0
        assert round2("x") == 0.0

    @pytest.mark.parametrize("value", [1e307, -1e307, sys.float_info.max])
    def test_huge_magnitudes_pass_through(self, value):
        assert round2(value) == value


class TestNormalizeRate:
    """Test normalize_rate."""

    def test_fraction_unchanged(self):
        assert normalize_rate(0.18) == 0.18

    def test_percentage_divided(self):
        assert normalize_rate(18) == 0.18

    def test_one_is_treated_as_fraction(self):
        assert normalize_rate(1) == 1

    @pytest.mark.parametrize("rate", [0, -5, -0.18, None, "n/a"])
    def test_non_positive_is_zero(self, rate):
        assert normalize_rate(rate) == 0.0

    def test_string_rates(self):
        assert normalize_rate("5") == 0.05


class TestLineNet:
    """Test line_net."""

    def test_multiplies(self):
        assert line_net(10, 75) == 750

    def test_missing_values_are_zero(self):
        assert line_net(None, 75) == 0
        assert line_net(3, "") == 0

    def test_negative_price_flows_through(self):
        assert line_net(2, -10) == -20
