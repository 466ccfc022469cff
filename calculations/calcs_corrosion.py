"""
API 510 - Corrosion Rate, Remaining Life and Inspection Interval
"""

import logging
from datetime import timedelta

from .config import DAYS_PER_YEAR, DEFAULT_POLICY, MONITORING_CA_FRACTION
from .models import Status

logger = logging.getLogger(__name__)


def years_between(start, end):
    """Elapsed years between two dates using 365.25-day years."""
    return (end - start).days / DAYS_PER_YEAR


def add_years(start, years):
    """Date a (possibly fractional) number of 365.25-day years after start."""
    return start + timedelta(days=years * DAYS_PER_YEAR)


def calculate_corrosion_rate(previous_thickness, current_thickness, years):
    """
    Corrosion rate from two thickness readings.

    Formula: rate = (t_prev - t_current) / years * 1000

    Parameters:
    -----------
    previous_thickness : float
        Earlier reading (inches)
    current_thickness : float
        Later reading (inches)
    years : float
        Time between readings (years)

    Returns:
    --------
    float : Corrosion rate (mils per year). Returns 0.0 for a non-positive time span.
    """
    if years <= 0:
        logger.warning(f"Non-positive time between readings ({years:.3f} yr); corrosion rate taken as 0")
        return 0.0
    return (previous_thickness - current_thickness) / years * 1000


def resolve_corrosion_rate(corrosion, current_thickness):
    """
    Corrosion rate (mpy) for a component.

    An explicit rate in the corrosion record is used as given. Otherwise the
    rate is derived from the previous reading and the two inspection dates.
    Missing data, or a measured thickness gain, gives 0.
    """
    if corrosion is None:
        return 0.0
    if corrosion.corrosion_rate_mpy is not None:
        return corrosion.corrosion_rate_mpy

    if (corrosion.previous_thickness is None or corrosion.previous_inspection_date is None
            or corrosion.current_inspection_date is None):
        logger.debug("Incomplete corrosion history; corrosion rate taken as 0")
        return 0.0

    years = years_between(corrosion.previous_inspection_date, corrosion.current_inspection_date)
    rate = calculate_corrosion_rate(corrosion.previous_thickness, current_thickness, years)
    if rate < 0:
        # Thickness gain between readings is measurement scatter
        logger.info(f"Thickness increased between readings ({rate:.2f} mpy); no measurable loss")
        return 0.0
    return rate


def calculate_remaining_life(actual_thickness, minimum_thickness, corrosion_rate_mpy):
    """
    Remaining corrosion life.

    Formula: RL = (t_actual - t_min) / (rate / 1000)

    Returns:
    --------
    dict : Dictionary containing:
        - remaining_life: Years (float('inf') when no metal loss is measured, never negative)
        - unlimited: True when the corrosion rate is zero or negative and the
          wall is not already below t_min
    """
    if actual_thickness < minimum_thickness:
        return {'remaining_life': 0.0, 'unlimited': False}
    if corrosion_rate_mpy <= 0:
        return {'remaining_life': float('inf'), 'unlimited': True}

    remaining_life = (actual_thickness - minimum_thickness) / (corrosion_rate_mpy / 1000)
    return {'remaining_life': max(remaining_life, 0.0), 'unlimited': False}


def calculate_inspection_interval(remaining_life, unlimited, policy=DEFAULT_POLICY):
    """
    Inspection interval in years by the half-life rule.

    Interval = min(RL / 2, policy maximum); unlimited life gives the policy horizon.
    """
    if unlimited:
        return policy.unlimited_life_horizon_years
    return max(min(remaining_life / 2, policy.max_interval_years), 0.0)


def calculate_next_inspection_date(remaining_life, unlimited, base_date, policy=DEFAULT_POLICY):
    """Next inspection date counted from base_date."""
    return add_years(base_date, calculate_inspection_interval(remaining_life, unlimited, policy))


def classify_status(actual_thickness, minimum_thickness, corrosion_allowance):
    """
    Component status from measured and required thickness.

    First match wins:
    1. t_actual < t_min                 -> critical
    2. t_actual < t_min + 0.5 * CA      -> monitoring
    3. otherwise                        -> acceptable

    Returns:
    --------
    tuple : (Status, reason string)
    """
    if actual_thickness < minimum_thickness:
        return Status.CRITICAL, (
            f'Actual thickness ({actual_thickness:.4f}") is below minimum required '
            f'({minimum_thickness:.4f}")')

    monitoring_limit = minimum_thickness + MONITORING_CA_FRACTION * corrosion_allowance
    if actual_thickness < monitoring_limit:
        return Status.MONITORING, (
            f'Actual thickness ({actual_thickness:.4f}") is below the monitoring limit '
            f'({monitoring_limit:.4f}" = t_min {minimum_thickness:.4f}" + 0.5 x CA)')

    return Status.ACCEPTABLE, (
        f'Actual thickness ({actual_thickness:.4f}") meets minimum required ({minimum_thickness:.4f}")')
