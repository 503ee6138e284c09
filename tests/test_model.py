"""
Tests for the closed-form SFM formulas.

Reference values computed by hand from
    d = 0.5 * w * c / (2 * sqrt(2) * pi^2 * nuA * sigma)
    f = 2 * pi * nuA * fM * OPD / c
"""

import math

import pytest

from sfm.constants import C_LIGHT
from sfm.errors import DegenerateInput
from sfm.model import (
    beat_frequency_bandwidth,
    optical_path_difference,
    recommended_axis_separation,
    recommended_max_stroke,
)


class TestRecommendedSeparation:

    def test_one_ghz(self):
        assert abs(recommended_axis_separation(1.0e9) - 0.59663) < 1e-4

    def test_formula(self):
        nu_a = 3.7e9
        expected = 0.5 * 2.5 * C_LIGHT / (
            2 * math.sqrt(2) * math.pi ** 2 * nu_a * 0.0225)
        assert abs(recommended_axis_separation(nu_a) - expected) < 1e-12

    def test_inverse_in_nu_a(self):
        assert abs(recommended_axis_separation(2e9) * 2
                   - recommended_axis_separation(1e9)) < 1e-12

    def test_monotonically_decreasing(self):
        values = [recommended_axis_separation(v) for v in (0.5e9, 1e9, 5e9, 50e9)]
        assert values == sorted(values, reverse=True)

    @pytest.mark.parametrize("nu_a", [0, -1e9, float("nan"), float("inf"), "abc", None])
    def test_rejects_degenerate(self, nu_a):
        with pytest.raises(DegenerateInput):
            recommended_axis_separation(nu_a)


class TestBeatFrequency:

    def test_opd_is_round_trip(self):
        assert optical_path_difference(1.5) == 3.0

    def test_known_value(self):
        """1 GHz, 10 kHz, OPD 2 m -> 2*pi*1e9*1e4*2/c."""
        f = beat_frequency_bandwidth(1e9, 10e3, 2.0)
        assert abs(f - 2 * math.pi * 1e9 * 1e4 * 2.0 / C_LIGHT) < 1e-9
        assert abs(f - 419169.0) < 0.1

    def test_zero_opd(self):
        assert beat_frequency_bandwidth(1e9, 10e3, 0.0) == 0.0

    def test_linear_in_opd(self):
        f1 = beat_frequency_bandwidth(1e9, 10e3, 1.0)
        f3 = beat_frequency_bandwidth(1e9, 10e3, 3.0)
        assert abs(f3 - 3 * f1) < 1e-9

    def test_negative_opd(self):
        with pytest.raises(DegenerateInput):
            beat_frequency_bandwidth(1e9, 10e3, -1.0)

    def test_zero_modulation_frequency(self):
        with pytest.raises(DegenerateInput):
            beat_frequency_bandwidth(1e9, 0, 1.0)


class TestMaxStroke:

    def test_uses_smaller_separation(self):
        assert recommended_max_stroke(0.4, 0.6) == pytest.approx(0.1)
        assert recommended_max_stroke(2.0, 0.6) == pytest.approx(0.15)

    def test_rejects_zero(self):
        with pytest.raises(DegenerateInput):
            recommended_max_stroke(0.0, 0.6)
