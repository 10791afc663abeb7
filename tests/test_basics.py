"""
Unit tests for the basics module.
"""

import math

import pytest
from hypothesis import given, strategies as st

from langtour import basics
from langtour.basics import (
    CircleMetrics,
    circle_area,
    circle_circumference,
    describe_circle,
    f,
    fibonacci,
    format_circle,
    g,
    polar_to_cartesian,
    sum_function,
)


class TestUnicodeConstants:
    """Greek-letter module constants."""

    def test_pi_and_tau(self):
        assert basics.π == math.pi
        assert basics.τ == pytest.approx(2 * math.pi)


class TestCircle:
    """Test cases for the circle formulas."""

    def test_unit_circle(self):
        assert circle_area(1) == pytest.approx(math.pi)
        assert circle_circumference(1) == pytest.approx(2 * math.pi)

    def test_describe_circle(self):
        metrics = describe_circle(2.0)
        assert isinstance(metrics, CircleMetrics)
        assert metrics.radius == 2.0
        assert metrics.area == pytest.approx(4 * math.pi)
        assert metrics.circumference == pytest.approx(4 * math.pi)

    def test_zero_radius(self):
        assert describe_circle(0).area == 0

    def test_negative_radius_rejected(self):
        with pytest.raises(ValueError):
            circle_area(-1)
        with pytest.raises(ValueError):
            circle_circumference(-0.5)

    def test_format_circle(self):
        text = format_circle(describe_circle(1))
        assert text.startswith("r = 1:")
        assert "3.1416" in text
        assert "6.2832" in text

    def test_polar_to_cartesian(self):
        x, y = polar_to_cartesian(2, math.pi / 2)
        assert x == pytest.approx(0, abs=1e-12)
        assert y == pytest.approx(2)


class TestSumFunction:
    """Test cases for the summation helper."""

    def test_linear_function(self):
        assert sum_function(f, 1, 10) == 150

    def test_quadratic_function(self):
        assert sum_function(g, 1, 10) == 425

    def test_single_point_range(self):
        assert sum_function(f, 3, 3) == f(3)

    def test_lambda_argument(self):
        assert sum_function(lambda x: x ** 3, 1, 10) == 3025

    def test_malformed_range(self):
        with pytest.raises(ValueError):
            sum_function(f, 10, 1)

    @given(st.integers(-1000, 1000), st.integers(0, 1000))
    def test_identity_matches_closed_form(self, start, length):
        stop = start + length
        expected = (start + stop) * (stop - start + 1) // 2
        assert sum_function(lambda x: x, start, stop) == expected


class TestFibonacci:
    """Test cases for the sequence generator."""

    def test_default_length(self):
        seq = fibonacci()
        assert len(seq) == 25
        assert seq[:2] == [0, 1]
        assert seq[-1] == 46368

    def test_minimum_length(self):
        assert fibonacci(2) == [0, 1]

    @pytest.mark.parametrize("n", [1, 0, -5])
    def test_too_short_rejected(self, n):
        with pytest.raises(ValueError):
            fibonacci(n)

    @pytest.mark.parametrize("n", [2.5, "25", True])
    def test_non_integer_rejected(self, n):
        with pytest.raises(TypeError):
            fibonacci(n)

    @given(st.integers(2, 200))
    def test_recurrence(self, n):
        seq = fibonacci(n)
        assert len(seq) == n
        assert seq[0] == 0 and seq[1] == 1
        for i in range(2, n):
            assert seq[i] == seq[i - 1] + seq[i - 2]
