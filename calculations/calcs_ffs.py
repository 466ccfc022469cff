"""
API 579-1/ASME FFS-1 - Level 1 Fitness-for-Service Screening
Part 4 (general metal loss) and Part 5 (local thin area)
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .config import (DEFAULT_POLICY, FFS_MONITOR_LIFE_YEARS, FFS_PRESSURE_MARGIN,
                     FFS_SHORT_INTERVAL_YEARS, FFS_URGENT_LIFE_YEARS,
                     LTA_MAX_CIRCUMFERENTIAL_DEGREES)

logger = logging.getLogger(__name__)


class FfsOutcome(str, Enum):
    ACCEPTABLE = 'acceptable'
    NOT_ACCEPTABLE = 'not_acceptable'
    NOT_FIT_FOR_SERVICE = 'not_fit_for_service'
    LEVEL_2_REQUIRED = 'level_2_required'


@dataclass(frozen=True)
class FfsInput:
    """Level 1 screening input for one component."""
    remaining_thickness: float          # in
    minimum_required_thickness: float   # in
    future_corrosion_allowance: float   # in
    corrosion_rate: float               # mpy
    operating_pressure: float = 0.0     # psi
    mawp: Optional[float] = None        # psi, at the remaining thickness


@dataclass(frozen=True)
class LocalThinArea:
    """Local thin area dimensions (inches)."""
    length: float           # longitudinal extent
    width: float            # circumferential extent
    shell_diameter: float


@dataclass(frozen=True)
class FfsResult:
    outcome: FfsOutcome
    remaining_life: float
    remaining_life_unlimited: bool
    next_inspection_interval: float
    tmm: Optional[float] = None
    circumferential_extent: Optional[float] = None
    warnings: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()

    @property
    def acceptable(self) -> bool:
        return self.outcome is FfsOutcome.ACCEPTABLE


def assess_general_metal_loss(ffs_input: FfsInput, policy=DEFAULT_POLICY) -> FfsResult:
    """
    Level 1 assessment for general metal loss (API 579-1 Part 4).

    Steps:
    1. tmm = t_min + FCA
    2. Remaining thickness below t_min -> not fit for service, no life computed
    3. RL = (t_rem - tmm) / (rate / 1000)
    4. Interval = min(RL / 2, policy cap)
    5. Flags: RL < 2 yr, RL < 5 yr, interval < 1 yr, operating > 0.9 * MAWP

    Returns:
    --------
    FfsResult
    """
    t_rem = ffs_input.remaining_thickness
    t_min = ffs_input.minimum_required_thickness
    tmm = t_min + ffs_input.future_corrosion_allowance

    if t_rem < t_min:
        logger.warning(f"FFS: remaining thickness {t_rem:.4f} below minimum required {t_min:.4f}")
        return FfsResult(
            outcome=FfsOutcome.NOT_FIT_FOR_SERVICE,
            remaining_life=0.0,
            remaining_life_unlimited=False,
            next_inspection_interval=0.0,
            tmm=tmm,
            warnings=("CRITICAL SAFETY ISSUE",),
            recommendations=(
                "IMMEDIATE ACTION REQUIRED: Current thickness below minimum required thickness",
                "Vessel is NOT fit for service",
                "Recommend immediate shutdown and repair/replacement",
            ),
        )

    warnings: List[str] = []
    recommendations: List[str] = []

    unlimited = ffs_input.corrosion_rate <= 0
    if unlimited:
        remaining_life = float('inf')
        interval = policy.max_interval_years
    else:
        remaining_life = (t_rem - tmm) / (ffs_input.corrosion_rate / 1000)
        interval = min(remaining_life / 2, policy.max_interval_years)

    if remaining_life < FFS_URGENT_LIFE_YEARS:
        warnings.append(f"Less than {FFS_URGENT_LIFE_YEARS:g} years remaining life")
        recommendations.append("Plan for vessel replacement or repair within next inspection interval")
    elif remaining_life < FFS_MONITOR_LIFE_YEARS:
        warnings.append(f"Less than {FFS_MONITOR_LIFE_YEARS:g} years remaining life")
        recommendations.append("Monitor closely and plan for future replacement")

    if interval < FFS_SHORT_INTERVAL_YEARS:
        warnings.append("Next inspection due within 1 year")
        recommendations.append("Schedule inspection immediately")

    if ffs_input.mawp is not None and ffs_input.operating_pressure > FFS_PRESSURE_MARGIN * ffs_input.mawp:
        warnings.append("Operating pressure approaching MAWP")
        recommendations.append("Consider reducing operating pressure or repairing vessel")

    acceptable = t_rem >= tmm and remaining_life > 0
    return FfsResult(
        outcome=FfsOutcome.ACCEPTABLE if acceptable else FfsOutcome.NOT_ACCEPTABLE,
        remaining_life=max(remaining_life, 0.0),
        remaining_life_unlimited=unlimited,
        next_inspection_interval=max(interval, 0.0),
        tmm=tmm,
        warnings=tuple(warnings),
        recommendations=tuple(recommendations),
    )


def calculate_circumferential_extent(width, shell_diameter):
    """Angular extent (degrees) of a flaw: width / (pi * D) * 360."""
    return width / (math.pi * shell_diameter) * 360


def assess_local_thin_area(ffs_input: FfsInput, lta: LocalThinArea, policy=DEFAULT_POLICY) -> FfsResult:
    """
    Level 1 screening for a local thin area (API 579-1 Part 5).

    An LTA spanning more than 180° of the circumference is outside Level 1
    and is escalated without a Level 1 result. Otherwise the general metal
    loss assessment applies, with a Level 2 recommendation when the LTA is
    longer than the shell diameter.
    """
    extent = calculate_circumferential_extent(lta.width, lta.shell_diameter)

    if extent > LTA_MAX_CIRCUMFERENTIAL_DEGREES:
        logger.info(f"LTA circumferential extent {extent:.1f}° exceeds Level 1 limit")
        return FfsResult(
            outcome=FfsOutcome.LEVEL_2_REQUIRED,
            remaining_life=0.0,
            remaining_life_unlimited=False,
            next_inspection_interval=0.0,
            circumferential_extent=extent,
            warnings=(f"LTA circumferential extent exceeds {LTA_MAX_CIRCUMFERENTIAL_DEGREES:g}°",),
            recommendations=("Level 2 or Level 3 assessment required",),
        )

    base = assess_general_metal_loss(ffs_input, policy)
    warnings = list(base.warnings)
    recommendations = list(base.recommendations)
    if lta.length > lta.shell_diameter:
        warnings.append("LTA length exceeds shell diameter")
        recommendations.append("Detailed Level 2 assessment recommended")

    return FfsResult(
        outcome=base.outcome,
        remaining_life=base.remaining_life,
        remaining_life_unlimited=base.remaining_life_unlimited,
        next_inspection_interval=base.next_inspection_interval,
        tmm=base.tmm,
        circumferential_extent=extent,
        warnings=tuple(warnings),
        recommendations=tuple(recommendations),
    )
