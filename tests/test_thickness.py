"""
Tests for UG-27 / UG-32 thickness and MAWP, UG-28 external pressure and UG-99 hydrotest.
"""

import pytest

from calculations.calcs_geometry import resolve_head_geometry
from calculations.calcs_thickness import (calculate_external_mawp, calculate_head_mawp,
                                          calculate_head_min_thickness, calculate_hydrotest_pressure,
                                          calculate_shell_mawp, calculate_shell_min_thickness,
                                          calculate_static_head, resolve_design_pressure)
from calculations.exceptions import CalculationError, InvalidGeometryError
from calculations.models import LiquidService
from reference_data.external_pressure_charts import ChartPoint


class TestShell:

    def test_min_thickness(self):
        # 100 * 30 / (20000 - 60)
        assert calculate_shell_min_thickness(100, 30, 20000, 1.0) == pytest.approx(0.150451, abs=1e-6)

    def test_corrosion_allowance_added(self):
        bare = calculate_shell_min_thickness(100, 30, 20000, 1.0)
        assert calculate_shell_min_thickness(100, 30, 20000, 1.0, 0.125) == pytest.approx(bare + 0.125)

    def test_inadmissible_pressure_raises(self):
        with pytest.raises(InvalidGeometryError) as excinfo:
            calculate_shell_min_thickness(100, 30, 50, 1.0)
        assert excinfo.value.formula == 'shell thickness'
        assert isinstance(excinfo.value, CalculationError)

    def test_denominator_exactly_zero_raises(self):
        with pytest.raises(InvalidGeometryError):
            calculate_shell_min_thickness(1000, 30, 600, 1.0)

    def test_increasing_in_pressure(self):
        values = [calculate_shell_min_thickness(p, 36, 17500, 0.85) for p in (50, 100, 250, 500, 1000)]
        assert values == sorted(values)
        assert len(set(values)) == len(values)

    def test_decreasing_in_stress_times_efficiency(self):
        values = [calculate_shell_min_thickness(250, 36, s, e)
                  for s, e in ((13800, 0.7), (17500, 0.85), (20000, 1.0))]
        assert values[0] > values[1] > values[2]

    @pytest.mark.parametrize("pressure, radius, stress, efficiency", [
        (250, 35.375, 20000, 0.88),
        (50, 12.0, 13800, 0.7),
        (1500, 48.0, 17500, 1.0),
    ])
    def test_mawp_round_trip(self, pressure, radius, stress, efficiency):
        t_min = calculate_shell_min_thickness(pressure, radius, stress, efficiency)
        assert calculate_shell_mawp(t_min, radius, stress, efficiency) == pytest.approx(pressure, abs=1e-6)

    def test_mawp_without_remaining_wall_raises(self):
        with pytest.raises(InvalidGeometryError):
            calculate_shell_mawp(0.125, 30, 20000, 1.0, corrosion_allowance=0.125)


class TestHead:

    def test_east_head_minimum_thickness(self):
        # Vessel 54-11-067 East Head, 2:1 ellipsoidal
        t_min = calculate_head_min_thickness(250, 70.75, 1.0, 20000, 0.88)
        assert t_min == pytest.approx(0.500, abs=0.005)

    def test_east_head_mawp(self):
        mawp = calculate_head_mawp(0.536, 70.75, 1.0, 20000, 0.88)
        static_head = calculate_static_head(0.92, 6.0)
        assert mawp == pytest.approx(266.27, abs=0.05)
        assert mawp - static_head == pytest.approx(263.9, abs=0.5)

    @pytest.mark.parametrize("head_type", ["hemispherical", "ellipsoidal", "torispherical"])
    def test_mawp_round_trip(self, head_type):
        geometry = resolve_head_geometry(head_type, 70.75)
        t_min = calculate_head_min_thickness(250, geometry.length, geometry.factor, 20000, 0.88)
        mawp = calculate_head_mawp(t_min, geometry.length, geometry.factor, 20000, 0.88)
        assert mawp == pytest.approx(250, abs=1e-6)

    def test_inadmissible_pressure_raises(self):
        with pytest.raises(InvalidGeometryError):
            calculate_head_min_thickness(300000, 70.75, 1.0, 20000, 1.0)

    def test_torispherical_thicker_than_ellipsoidal(self):
        elliptical = resolve_head_geometry("ellipsoidal", 70.75)
        torispherical = resolve_head_geometry("torispherical", 70.75)
        t_e = calculate_head_min_thickness(250, elliptical.length, elliptical.factor, 20000, 1.0)
        t_t = calculate_head_min_thickness(250, torispherical.length, torispherical.factor, 20000, 1.0)
        assert t_t > t_e


class TestStaticHead:

    def test_static_head(self):
        assert calculate_static_head(0.92, 6.0) == pytest.approx(2.39016)

    def test_no_liquid_service(self):
        pressures = resolve_design_pressure(250)
        assert pressures['effective_pressure'] == 250
        assert pressures['static_head_pressure'] is None
        assert pressures['total_design_pressure'] is None

    def test_liquid_service_adds_static_head(self):
        pressures = resolve_design_pressure(250, LiquidService(1.0, 10.0))
        assert pressures['static_head_pressure'] == pytest.approx(4.33)
        assert pressures['total_design_pressure'] == pytest.approx(254.33)
        assert pressures['effective_pressure'] == pressures['total_design_pressure']

    def test_liquid_service_validation(self):
        with pytest.raises(ValueError):
            LiquidService(0.0, 5.0)
        with pytest.raises(ValueError):
            LiquidService(1.0, -1.0)


class TestExternalPressure:

    def test_external_mawp(self):
        # Do/t = 100 -> B = 550; L/Do = 2 -> A = 0.004
        result = calculate_external_mawp(40.0, 0.4, 80.0)
        assert result['od_to_thickness'] == pytest.approx(100)
        assert result['length_to_od'] == pytest.approx(2.0)
        assert result['factor_b'] == pytest.approx(550)
        assert result['factor_a'] == pytest.approx(0.004)
        assert result['pa1'] == pytest.approx(4 * 550 / 300)
        assert result['pa2'] == pytest.approx(2 * 0.004 * 29e6 / (3 * 99))
        assert result['mawp_external'] == pytest.approx(min(result['pa1'], result['pa2']))

    def test_custom_modulus_changes_elastic_limit(self):
        base = calculate_external_mawp(40.0, 0.4, 80.0)
        soft = calculate_external_mawp(40.0, 0.4, 80.0, elastic_modulus=1.0e6)
        assert soft['pa2'] < base['pa2']
        assert soft['pa1'] == pytest.approx(base['pa1'])

    def test_non_positive_thickness_raises(self):
        with pytest.raises(InvalidGeometryError):
            calculate_external_mawp(40.0, 0.0, 80.0)

    def test_synthetic_charts(self):
        factor_a_chart = (ChartPoint(1.0, 0.001), ChartPoint(3.0, 0.003))
        factor_b_chart = (ChartPoint(50.0, 2000.0), ChartPoint(150.0, 1000.0))
        result = calculate_external_mawp(40.0, 0.4, 80.0, factor_a_chart=factor_a_chart,
                                         factor_b_chart=factor_b_chart)
        assert result['factor_a'] == pytest.approx(0.002)
        assert result['factor_b'] == pytest.approx(1500.0)
        assert result['pa1'] == pytest.approx(4 * 1500.0 / 300)


class TestHydrotest:

    def test_hydrotest_pressure(self):
        assert calculate_hydrotest_pressure(200) == pytest.approx(260)
        assert calculate_hydrotest_pressure(200, stress_ratio=1.1) == pytest.approx(286)
