"""
API 510 Section 6.4 - In-Lieu-Of Internal Inspection
Qualification of on-stream inspection in place of an internal inspection
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple

from .config import (IN_LIEU_OF_DEFAULT_INTERVAL_YEARS, IN_LIEU_OF_LONG_SERVICE_YEARS,
                     IN_LIEU_OF_LOW_MARGIN, IN_LIEU_OF_LOW_MARGIN_INTERVAL_YEARS,
                     IN_LIEU_OF_MARGIN_INTERVALS, IN_LIEU_OF_SHORT_SERVICE_YEARS)

logger = logging.getLogger(__name__)

ONGOING_REQUIREMENTS = (
    "Maintain effective external inspection program",
    "Continue thickness monitoring at critical locations",
    "Monitor process parameters continuously",
    "Document any process upsets or excursions",
    "Review qualification annually",
)


@dataclass(frozen=True)
class InLieuOfCriteria:
    clean_service: bool                     # non-corrosive, non-fouling
    no_corrosion_history: bool
    effective_external_inspection: bool
    thickness_monitoring: bool
    process_monitoring: bool
    design_margin: float                    # % over minimum required thickness
    service_years: float
    last_internal_inspection: Optional[date] = None

    def mandatory_criteria(self):
        return (
            (self.clean_service, "Clean, non-corrosive service"),
            (self.no_corrosion_history, "No history of internal corrosion"),
            (self.effective_external_inspection, "Effective external inspection program"),
            (self.thickness_monitoring, "Ongoing thickness monitoring"),
            (self.process_monitoring, "Process parameter monitoring"),
        )


@dataclass(frozen=True)
class InLieuOfResult:
    qualified: bool
    max_interval: int                       # years
    next_internal_due: Optional[date]
    justification: Tuple[str, ...] = ()
    requirements: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()


def _add_calendar_years(start, years):
    try:
        return start.replace(year=start.year + years)
    except ValueError:
        # Feb 29 -> Feb 28 in a non-leap target year
        return start.replace(year=start.year + years, day=28)


def assess_in_lieu_of(criteria: InLieuOfCriteria, as_of=None) -> InLieuOfResult:
    """
    Assess qualification for in-lieu-of internal inspection.

    All five mandatory criteria must hold. The maximum interval then follows
    the design margin: >= 50% -> 15 yr, >= 25% -> 12 yr, < 10% -> 8 yr,
    otherwise 10 yr. Less than 5 years of service caps the interval at 10 yr.

    Parameters:
    -----------
    criteria : InLieuOfCriteria
    as_of : date, optional
        Used as the last internal inspection date when none is recorded (default today)

    Returns:
    --------
    InLieuOfResult
    """
    unmet = [name for met, name in criteria.mandatory_criteria() if not met]
    if unmet:
        logger.info(f"In-lieu-of not qualified: {len(unmet)} mandatory criteria unmet")
        return InLieuOfResult(
            qualified=False,
            max_interval=0,
            next_internal_due=None,
            requirements=tuple(f"REQUIRED: {name}" for name in unmet),
            warnings=("Vessel does not qualify for In-Lieu-Of internal inspection",),
        )

    justification = [
        "Vessel operates in clean, non-corrosive service",
        "No history of internal corrosion documented",
        "Effective external inspection program in place",
        "Ongoing thickness monitoring program active",
        "Process parameters monitored and controlled",
    ]
    warnings: List[str] = []

    max_interval = IN_LIEU_OF_DEFAULT_INTERVAL_YEARS
    for minimum_margin, interval in IN_LIEU_OF_MARGIN_INTERVALS:
        if criteria.design_margin >= minimum_margin:
            max_interval = interval
            justification.append(f"Design margin of {minimum_margin:g}% or more supports {interval}-year interval")
            break
    else:
        if criteria.design_margin < IN_LIEU_OF_LOW_MARGIN:
            max_interval = IN_LIEU_OF_LOW_MARGIN_INTERVAL_YEARS
            warnings.append(f"Low design margin (<{IN_LIEU_OF_LOW_MARGIN:g}%) limits interval to "
                            f"{IN_LIEU_OF_LOW_MARGIN_INTERVAL_YEARS} years")

    if criteria.service_years > IN_LIEU_OF_LONG_SERVICE_YEARS:
        justification.append(f"Vessel has {criteria.service_years:g} years of successful service history")
    elif criteria.service_years < IN_LIEU_OF_SHORT_SERVICE_YEARS:
        warnings.append("Limited service history - recommend conservative interval")
        max_interval = min(max_interval, IN_LIEU_OF_DEFAULT_INTERVAL_YEARS)

    last_internal = criteria.last_internal_inspection or as_of or date.today()
    return InLieuOfResult(
        qualified=True,
        max_interval=max_interval,
        next_internal_due=_add_calendar_years(last_internal, max_interval),
        justification=tuple(justification),
        requirements=ONGOING_REQUIREMENTS,
        warnings=tuple(warnings),
    )


def generate_monitoring_plan() -> str:
    """Text of the in-lieu-of monitoring plan for the inspection report."""
    sections = (
        ("EXTERNAL INSPECTION REQUIREMENTS", (
            "Conduct thorough external visual inspection annually",
            "Document condition of insulation, coatings, and supports",
            "Inspect for signs of leakage, corrosion, or damage",
            "Photograph areas of concern",
        )),
        ("THICKNESS MONITORING", (
            "Establish baseline thickness measurements at critical locations",
            "Re-measure thickness at established grid points every 2-3 years",
            "Monitor corrosion rates and trending",
            "Alert if thickness approaches minimum required",
        )),
        ("PROCESS MONITORING", (
            "Monitor and record process temperature, pressure, and composition",
            "Document any process upsets or excursions",
            "Maintain process within design limits",
            "Review process data quarterly",
        )),
        ("DOCUMENTATION", (
            "Maintain inspection records and thickness data",
            "Document qualification review annually",
            "Update risk assessment if conditions change",
            "Notify inspector of any concerns",
        )),
        ("DISQUALIFICATION TRIGGERS", (
            "Change in service (introduction of corrosive materials)",
            "Evidence of internal corrosion from thickness monitoring",
            "Process upset causing temperature/pressure excursion",
            "Thickness approaching minimum required",
        )),
    )

    lines = ["IN-LIEU-OF INTERNAL INSPECTION MONITORING PLAN", "Per API 510 Section 6.4", ""]
    for number, (title, items) in enumerate(sections, start=1):
        lines.append(f"{number}. {title}:")
        lines.extend(f"   - {item}" for item in items)
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"
