"""
ASME VIII-1 UG-32 / UG-28 - Geometry Factors
Head shape factors and external pressure chart interpolation
"""

import logging
import math
from collections import namedtuple

import numpy as np

from reference_data.external_pressure_charts import CS1_FACTOR_A_CHART, FACTOR_B_CHART

from .config import DEFAULT_KNUCKLE_RATIO
from .models import HeadType

logger = logging.getLogger(__name__)

HeadGeometry = namedtuple('HeadGeometry', ['head_type', 'length', 'factor', 'knuckle_radius'])


def default_knuckle_radius(inside_diameter):
    """Standard flanged-and-dished knuckle radius: 6% of inside diameter."""
    return DEFAULT_KNUCKLE_RATIO * inside_diameter


def torispherical_m_factor(crown_radius, knuckle_radius):
    """
    Torispherical head stress intensification factor (UG-32 / Appendix 1-4).

    Formula: M = 0.25 * (3 + sqrt(L / r))

    Parameters:
    -----------
    crown_radius : float
        Inside crown radius L (inches)
    knuckle_radius : float
        Inside knuckle radius r (inches)

    Returns:
    --------
    float : Factor M (1.77 for L = D, r = 0.06D)
    """
    if knuckle_radius <= 0:
        raise ValueError(f"knuckle_radius must be > 0, got {knuckle_radius}")
    return 0.25 * (3 + math.sqrt(crown_radius / knuckle_radius))


def resolve_head_geometry(head_type, inside_diameter, knuckle_radius=None, crown_radius=None):
    """
    Resolve the characteristic length L and multiplier used by the head formulas.

    | head type     | L                         | factor            |
    |---------------|---------------------------|-------------------|
    | hemispherical | inside radius             | 1.0               |
    | ellipsoidal   | inside diameter (2:1)     | 1.0               |
    | torispherical | crown radius (default D)  | M = 0.25(3+√(L/r))|

    A caller-supplied knuckle_radius or crown_radius always wins over the
    flanged-and-dished defaults.

    Returns:
    --------
    HeadGeometry : (head_type, length, factor, knuckle_radius)
    """
    head_type = HeadType(head_type)

    if head_type is HeadType.HEMISPHERICAL:
        geometry = HeadGeometry(head_type, inside_diameter / 2, 1.0, None)
    elif head_type is HeadType.ELLIPSOIDAL:
        geometry = HeadGeometry(head_type, inside_diameter, 1.0, None)
    elif head_type is HeadType.TORISPHERICAL:
        crown = crown_radius if crown_radius is not None else inside_diameter
        knuckle = knuckle_radius if knuckle_radius is not None else default_knuckle_radius(inside_diameter)
        geometry = HeadGeometry(head_type, crown, torispherical_m_factor(crown, knuckle), knuckle)
    else:
        raise ValueError(f"Unsupported head type: {head_type}")

    logger.debug(f"Head geometry {head_type.value}: L={geometry.length:.4f} factor={geometry.factor:.4f}")
    return geometry


def interpolate_chart(chart, ratio):
    """
    Linear interpolation over an ordered chart of (ratio, factor) points.

    Ratios outside the chart are clamped to the nearest endpoint; charts are
    never extrapolated.

    Returns:
    --------
    tuple : (factor, clamped)
    """
    ratios = np.array([p.ratio for p in chart], dtype=float)
    factors = np.array([p.factor for p in chart], dtype=float)
    if np.any(np.diff(ratios) <= 0):
        raise ValueError("Chart ratios must be strictly ascending")

    factor = float(np.interp(ratio, ratios, factors, left=factors[0], right=factors[-1]))
    clamped = ratio < ratios[0] or ratio > ratios[-1]
    return factor, bool(clamped)


def get_factor_a(length_to_od, chart=CS1_FACTOR_A_CHART):
    """Factor A from L/Do."""
    factor, clamped = interpolate_chart(chart, length_to_od)
    if clamped:
        logger.warning(f"L/Do={length_to_od:.4g} outside Factor A chart; clamped to A={factor:g}")
    return factor


def get_factor_b(od_to_thickness, chart=FACTOR_B_CHART):
    """Factor B (psi) from Do/t."""
    factor, clamped = interpolate_chart(chart, od_to_thickness)
    if clamped:
        logger.warning(f"Do/t={od_to_thickness:.4g} outside Factor B chart; clamped to B={factor:g}")
    return factor
