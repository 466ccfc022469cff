"""
Tests for API 579-1 Level 1 screening.
"""

import math

import pytest

from calculations.calcs_ffs import (FfsInput, FfsOutcome, LocalThinArea, assess_general_metal_loss,
                                    assess_local_thin_area, calculate_circumferential_extent)


def ffs_input(**overrides):
    fields = dict(remaining_thickness=0.600, minimum_required_thickness=0.500,
                  future_corrosion_allowance=0.050, corrosion_rate=5.0)
    fields.update(overrides)
    return FfsInput(**fields)


class TestGeneralMetalLoss:

    def test_acceptable(self):
        result = assess_general_metal_loss(ffs_input())
        assert result.outcome is FfsOutcome.ACCEPTABLE
        assert result.acceptable
        assert result.tmm == pytest.approx(0.550)
        assert result.remaining_life == pytest.approx(10.0)
        assert result.next_inspection_interval == pytest.approx(5.0)
        assert result.warnings == ()

    def test_below_minimum_short_circuits(self):
        result = assess_general_metal_loss(ffs_input(remaining_thickness=0.450))
        assert result.outcome is FfsOutcome.NOT_FIT_FOR_SERVICE
        assert result.remaining_life == 0.0
        assert result.next_inspection_interval == 0.0
        assert "Vessel is NOT fit for service" in result.recommendations

    def test_below_minimum_ignores_zero_rate(self):
        result = assess_general_metal_loss(ffs_input(remaining_thickness=0.450, corrosion_rate=0.0))
        assert result.outcome is FfsOutcome.NOT_FIT_FOR_SERVICE
        assert result.remaining_life == 0.0

    def test_between_minimum_and_tmm(self):
        result = assess_general_metal_loss(ffs_input(remaining_thickness=0.520))
        assert result.outcome is FfsOutcome.NOT_ACCEPTABLE
        assert result.remaining_life == 0.0

    def test_monitor_flag(self):
        result = assess_general_metal_loss(ffs_input(corrosion_rate=20.0))
        assert result.remaining_life == pytest.approx(2.5)
        assert result.next_inspection_interval == pytest.approx(1.25)
        assert "Less than 5 years remaining life" in result.warnings

    def test_urgent_flag(self):
        result = assess_general_metal_loss(ffs_input(corrosion_rate=40.0))
        assert result.remaining_life == pytest.approx(1.25)
        assert "Less than 2 years remaining life" in result.warnings
        assert "Next inspection due within 1 year" in result.warnings

    def test_interval_capped(self):
        result = assess_general_metal_loss(ffs_input(corrosion_rate=1.0))
        assert result.remaining_life == pytest.approx(50.0)
        assert result.next_inspection_interval == pytest.approx(10.0)

    def test_zero_rate_unlimited(self):
        result = assess_general_metal_loss(ffs_input(corrosion_rate=0.0))
        assert result.remaining_life_unlimited
        assert math.isinf(result.remaining_life)
        assert result.next_inspection_interval == pytest.approx(10.0)
        assert result.acceptable

    def test_pressure_margin_flag(self):
        result = assess_general_metal_loss(ffs_input(operating_pressure=280.0, mawp=300.0))
        assert "Operating pressure approaching MAWP" in result.warnings
        quiet = assess_general_metal_loss(ffs_input(operating_pressure=260.0, mawp=300.0))
        assert "Operating pressure approaching MAWP" not in quiet.warnings


class TestLocalThinArea:

    def test_circumferential_extent(self):
        assert calculate_circumferential_extent(math.pi * 48.0 / 4, 48.0) == pytest.approx(90.0)

    def test_wide_lta_requires_level_2(self):
        result = assess_local_thin_area(ffs_input(), LocalThinArea(length=10.0, width=80.0, shell_diameter=48.0))
        assert result.outcome is FfsOutcome.LEVEL_2_REQUIRED
        assert result.circumferential_extent > 180
        assert result.tmm is None
        assert "Level 2 or Level 3 assessment required" in result.recommendations
        assert isinstance(result.warnings, tuple)

    def test_small_lta_uses_general_assessment(self):
        result = assess_local_thin_area(ffs_input(), LocalThinArea(length=10.0, width=10.0, shell_diameter=48.0))
        assert result.outcome is FfsOutcome.ACCEPTABLE
        assert result.remaining_life == pytest.approx(10.0)
        assert result.circumferential_extent == pytest.approx(10.0 / (math.pi * 48.0) * 360)

    def test_long_lta_recommends_level_2(self):
        result = assess_local_thin_area(ffs_input(), LocalThinArea(length=60.0, width=10.0, shell_diameter=48.0))
        assert "LTA length exceeds shell diameter" in result.warnings
        assert "Detailed Level 2 assessment recommended" in result.recommendations
