"""
Tests for the ASME II-D allowable stress table.
"""

import pytest

from reference_data.material_stress import (MaterialStressEntry, MaterialStressTable,
                                            normalize_material_spec)


def synthetic_table():
    return MaterialStressTable([
        MaterialStressEntry("TEST-1", 100, 20000),
        MaterialStressEntry("TEST-1", 300, 18000),
        MaterialStressEntry("TEST-1", 500, 14000),
    ], {"TEST-1": "Synthetic"})


class TestStressAt:
    """Exact, interpolated and clamped lookups."""

    def test_exact_temperature_not_interpolated(self, stress_table):
        result = stress_table.stress_at("SA-516 Grade 70", 300)
        assert result.allowable_stress == 17000
        assert result.interpolated is False
        assert result.note is None

    def test_between_points_interpolates(self, stress_table):
        result = stress_table.stress_at("SA-516 Grade 70", 250)
        assert result.interpolated is True
        assert result.allowable_stress == pytest.approx(17250)
        assert 17000 < result.allowable_stress < 17500
        assert result.lower_bound.temperature_f == 200
        assert result.upper_bound.temperature_f == 300

    def test_above_range_clamps_with_note(self, stress_table):
        result = stress_table.stress_at("SA-516 Grade 70", 700)
        assert result.allowable_stress == 13500
        assert result.clamped
        assert "nearest" in result.note
        assert "above" in result.note

    def test_below_range_clamps_with_note(self, stress_table):
        result = stress_table.stress_at("SA-516 Grade 70", -60)
        assert result.allowable_stress == 17500
        assert "below" in result.note

    def test_unknown_material_returns_none(self, stress_table):
        assert stress_table.stress_at("SA-999 Unobtainium", 200) is None

    def test_material_name_spelling_is_normalized(self, stress_table):
        result = stress_table.stress_at("sa-515  grade 70", 200)
        assert result is not None
        assert result.allowable_stress == 20000
        assert result.material_spec == "SA-515 Gr 70"

    def test_synthetic_table_interpolation(self):
        table = synthetic_table()
        result = table.stress_at("TEST-1", 400)
        assert result.allowable_stress == pytest.approx(16000)
        assert result.lower_bound == MaterialStressEntry("TEST-1", 300, 18000)
        assert result.upper_bound == MaterialStressEntry("TEST-1", 500, 14000)

    def test_last_tabulated_point_is_exact(self):
        result = synthetic_table().stress_at("TEST-1", 500)
        assert result.allowable_stress == 14000
        assert result.interpolated is False
        assert result.note is None


class TestTableConstruction:
    """Table loading and validation."""

    def test_rejects_non_ascending_temperatures(self):
        with pytest.raises(ValueError):
            MaterialStressTable([
                MaterialStressEntry("BAD", 300, 18000),
                MaterialStressEntry("BAD", 200, 19000),
            ])

    def test_rejects_duplicate_temperature(self):
        with pytest.raises(ValueError):
            MaterialStressTable([
                MaterialStressEntry("BAD", 200, 18000),
                MaterialStressEntry("BAD", 200, 19000),
            ])

    def test_bundled_table(self, stress_table):
        assert len(stress_table) == 12
        assert "SA-105" in stress_table
        assert stress_table.category_of("SA-105") == "Forgings"
        assert stress_table.materials() == sorted(stress_table.materials())

    def test_table_for_returns_frame(self, stress_table):
        frame = stress_table.table_for("SA-516 Grade 70")
        assert len(frame) == 8
        assert list(frame.columns) == ['Temperature (°F)', 'Allowable Stress (psi)']
        assert stress_table.table_for("nope") is None

    def test_normalize_material_spec(self):
        assert normalize_material_spec("SA-516 Grade 70") == "SA-516 GR 70"
        assert normalize_material_spec("sa-516 gr. 70") == "SA-516 GR 70"
