"""
Tests for API 510 6.4 in-lieu-of internal inspection qualification.
"""

from datetime import date

import pytest

from calculations.calcs_in_lieu_of import (InLieuOfCriteria, assess_in_lieu_of,
                                           generate_monitoring_plan)


def criteria(**overrides):
    fields = dict(clean_service=True, no_corrosion_history=True, effective_external_inspection=True,
                  thickness_monitoring=True, process_monitoring=True, design_margin=15.0,
                  service_years=12, last_internal_inspection=date(2015, 6, 1))
    fields.update(overrides)
    return InLieuOfCriteria(**fields)


class TestQualification:

    def test_unmet_criterion_disqualifies(self):
        result = assess_in_lieu_of(criteria(no_corrosion_history=False, process_monitoring=False))
        assert result.qualified is False
        assert result.max_interval == 0
        assert result.next_internal_due is None
        assert result.requirements == ("REQUIRED: No history of internal corrosion",
                                       "REQUIRED: Process parameter monitoring")
        assert result.warnings

    @pytest.mark.parametrize("margin, interval", [
        (60.0, 15),
        (50.0, 15),
        (30.0, 12),
        (15.0, 10),
        (5.0, 8),
    ])
    def test_interval_by_design_margin(self, margin, interval):
        result = assess_in_lieu_of(criteria(design_margin=margin))
        assert result.qualified
        assert result.max_interval == interval

    def test_low_margin_warning(self):
        result = assess_in_lieu_of(criteria(design_margin=5.0))
        assert any("Low design margin" in w for w in result.warnings)

    def test_short_service_caps_interval(self):
        result = assess_in_lieu_of(criteria(design_margin=60.0, service_years=3))
        assert result.max_interval == 10
        assert any("Limited service history" in w for w in result.warnings)

    def test_long_service_justification(self):
        result = assess_in_lieu_of(criteria(service_years=25))
        assert any("25 years" in j for j in result.justification)

    def test_next_internal_due(self):
        result = assess_in_lieu_of(criteria(design_margin=60.0))
        assert result.next_internal_due == date(2030, 6, 1)

    def test_leap_day_last_inspection(self):
        result = assess_in_lieu_of(criteria(last_internal_inspection=date(2016, 2, 29)))
        assert result.next_internal_due == date(2026, 2, 28)

    def test_no_last_inspection_uses_evaluation_date(self):
        result = assess_in_lieu_of(criteria(last_internal_inspection=None), as_of=date(2025, 3, 14))
        assert result.next_internal_due == date(2035, 3, 14)

    def test_ongoing_requirements_listed(self):
        result = assess_in_lieu_of(criteria())
        assert "Review qualification annually" in result.requirements


class TestMonitoringPlan:

    def test_plan_sections(self):
        plan = generate_monitoring_plan()
        assert plan.startswith("IN-LIEU-OF INTERNAL INSPECTION MONITORING PLAN")
        for heading in ("1. EXTERNAL INSPECTION REQUIREMENTS:", "2. THICKNESS MONITORING:",
                        "3. PROCESS MONITORING:", "4. DOCUMENTATION:", "5. DISQUALIFICATION TRIGGERS:"):
            assert heading in plan
