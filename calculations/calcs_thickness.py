"""
ASME VIII-1 UG-27 / UG-32 / UG-28 - Thickness and MAWP Calculations
Minimum required thickness and maximum allowable working pressure for
cylindrical shells and formed heads, plus external pressure and hydrotest
"""

import logging

from reference_data.external_pressure_charts import CS1_FACTOR_A_CHART, FACTOR_B_CHART

from .calcs_geometry import get_factor_a, get_factor_b
from .config import DEFAULT_E_PSI, HYDROTEST_FACTOR, WATER_PSI_PER_FT
from .exceptions import InvalidGeometryError

logger = logging.getLogger(__name__)


def calculate_static_head(specific_gravity, liquid_height_ft):
    """
    Static head pressure of a liquid column.

    Formula: P_s = SG * h * 0.433

    Parameters:
    -----------
    specific_gravity : float
        Liquid specific gravity (water = 1.0)
    liquid_height_ft : float
        Height of liquid above the component (feet)

    Returns:
    --------
    float : Static head pressure (psi)
    """
    return specific_gravity * liquid_height_ft * WATER_PSI_PER_FT


def resolve_design_pressure(design_pressure, liquid_service=None):
    """
    Effective pressure for the thickness/MAWP formulas.

    Returns:
    --------
    dict : Dictionary containing:
        - effective_pressure: Pressure used in the formulas (psi)
        - static_head_pressure: Static head (psi), None without liquid service
        - total_design_pressure: Design + static head (psi), None without liquid service
    """
    if liquid_service is None:
        return {
            'effective_pressure': design_pressure,
            'static_head_pressure': None,
            'total_design_pressure': None,
        }

    static_head = calculate_static_head(liquid_service.specific_gravity, liquid_service.liquid_height_ft)
    total = design_pressure + static_head
    logger.debug(f"Static head {static_head:.3f} psi -> total design pressure {total:.3f} psi")
    return {
        'effective_pressure': total,
        'static_head_pressure': static_head,
        'total_design_pressure': total,
    }


def calculate_shell_min_thickness(pressure, inside_radius, allowable_stress, joint_efficiency,
                                  corrosion_allowance=0.0):
    """
    Minimum required thickness of a cylindrical shell (UG-27(c)(1), circumferential stress).

    Formula: t = P * R / (S * E - 0.6 * P) + CA

    Parameters:
    -----------
    pressure : float
        Internal design pressure P (psi)
    inside_radius : float
        Inside radius R (inches)
    allowable_stress : float
        Maximum allowable stress S (psi)
    joint_efficiency : float
        Weld joint efficiency E
    corrosion_allowance : float
        Corrosion allowance CA (inches)

    Returns:
    --------
    float : Minimum required thickness (inches)

    Raises:
    -------
    InvalidGeometryError : if S * E <= 0.6 * P
    """
    denominator = allowable_stress * joint_efficiency - 0.6 * pressure
    if denominator <= 0:
        raise InvalidGeometryError(
            'shell thickness', denominator,
            f"S*E ({allowable_stress * joint_efficiency:.1f}) must exceed 0.6*P ({0.6 * pressure:.1f})")
    return pressure * inside_radius / denominator + corrosion_allowance


def calculate_head_min_thickness(pressure, length, factor, allowable_stress, joint_efficiency,
                                 corrosion_allowance=0.0):
    """
    Minimum required thickness of a formed head (UG-32).

    Formula: t = P * L * factor / (2 * S * E - 0.2 * P) + CA

    L and factor come from resolve_head_geometry().

    Raises:
    -------
    InvalidGeometryError : if 2 * S * E <= 0.2 * P
    """
    denominator = 2 * allowable_stress * joint_efficiency - 0.2 * pressure
    if denominator <= 0:
        raise InvalidGeometryError(
            'head thickness', denominator,
            f"2*S*E ({2 * allowable_stress * joint_efficiency:.1f}) must exceed 0.2*P ({0.2 * pressure:.1f})")
    return pressure * length * factor / denominator + corrosion_allowance


def calculate_shell_mawp(thickness, inside_radius, allowable_stress, joint_efficiency,
                         corrosion_allowance=0.0):
    """
    MAWP of a cylindrical shell at a given (measured) thickness.

    Formula: MAWP = S * E * (t - CA) / (R + 0.6 * (t - CA))

    Raises:
    -------
    InvalidGeometryError : if the wall left after corrosion allowance is not positive
    """
    effective = thickness - corrosion_allowance
    if effective <= 0:
        raise InvalidGeometryError('shell MAWP', effective,
                                   f"Thickness {thickness:.4f} leaves no wall after CA {corrosion_allowance:.4f}")
    return allowable_stress * joint_efficiency * effective / (inside_radius + 0.6 * effective)


def calculate_head_mawp(thickness, length, factor, allowable_stress, joint_efficiency,
                        corrosion_allowance=0.0):
    """
    MAWP of a formed head at a given (measured) thickness.

    Formula: MAWP = 2 * S * E * (t - CA) / (L * factor + 0.2 * (t - CA))
    """
    effective = thickness - corrosion_allowance
    if effective <= 0:
        raise InvalidGeometryError('head MAWP', effective,
                                   f"Thickness {thickness:.4f} leaves no wall after CA {corrosion_allowance:.4f}")
    return 2 * allowable_stress * joint_efficiency * effective / (length * factor + 0.2 * effective)


def calculate_external_mawp(outside_diameter, thickness, design_length, elastic_modulus=DEFAULT_E_PSI,
                            factor_a_chart=CS1_FACTOR_A_CHART, factor_b_chart=FACTOR_B_CHART):
    """
    Allowable external pressure of a cylindrical shell (UG-28(c)).

    Steps:
    1. L/Do and Do/t ratios
    2. Factor A from L/Do, Factor B from Do/t (charts clamp at their ends)
    3. Pa1 = 4B / (3 * Do/t)
    4. Pa2 = 2AE / (3 * (Do/t - 1))
    5. Pa = min(Pa1, Pa2)

    Parameters:
    -----------
    outside_diameter : float
        Shell outside diameter Do (inches)
    thickness : float
        Shell thickness t (inches)
    design_length : float
        Unsupported design length L (inches)
    elastic_modulus : float
        Modulus of elasticity E (psi), default 29e6 for carbon steel
    factor_a_chart, factor_b_chart : sequence of ChartPoint
        Factor A and Factor B charts, default CS-1

    Returns:
    --------
    dict : Dictionary containing:
        - length_to_od: L/Do
        - od_to_thickness: Do/t
        - factor_a: Factor A
        - factor_b: Factor B (psi)
        - pa1: Inelastic allowable (psi)
        - pa2: Elastic allowable (psi)
        - mawp_external: Allowable external pressure (psi)
    """
    if thickness <= 0:
        raise InvalidGeometryError('external pressure', thickness)
    length_to_od = design_length / outside_diameter
    od_to_thickness = outside_diameter / thickness
    if od_to_thickness <= 1:
        raise InvalidGeometryError('external pressure', od_to_thickness - 1,
                                   f"Do/t ({od_to_thickness:.3f}) must exceed 1")

    factor_a = get_factor_a(length_to_od, factor_a_chart)
    factor_b = get_factor_b(od_to_thickness, factor_b_chart)

    pa1 = 4 * factor_b / (3 * od_to_thickness)
    pa2 = 2 * factor_a * elastic_modulus / (3 * (od_to_thickness - 1))

    logger.debug(f"UG-28: L/Do={length_to_od:.3f} Do/t={od_to_thickness:.2f} "
                 f"A={factor_a:.5f} B={factor_b:.1f} Pa1={pa1:.2f} Pa2={pa2:.2f}")

    return {
        'length_to_od': length_to_od,
        'od_to_thickness': od_to_thickness,
        'factor_a': factor_a,
        'factor_b': factor_b,
        'pa1': pa1,
        'pa2': pa2,
        'mawp_external': min(pa1, pa2),
    }


def calculate_hydrotest_pressure(mawp, stress_ratio=1.0):
    """
    Minimum hydrostatic test pressure (UG-99(b)).

    Formula: P_test = 1.3 * MAWP * (S_test / S_design)
    """
    return HYDROTEST_FACTOR * mawp * stress_ratio


if __name__ == "__main__":
    # East Head, vessel 54-11-067: 2:1 ellipsoidal, D = 70.75", S = 20000, E = 0.88
    p, d, s, e = 250.0, 70.75, 20000.0, 0.88
    t_min = calculate_head_min_thickness(p, d, 1.0, s, e)
    mawp = calculate_head_mawp(0.536, d, 1.0, s, e)
    print(f"Head t_min = {t_min:.4f} in, MAWP @ 0.536 in = {mawp:.1f} psi")

    shell_t = calculate_shell_min_thickness(p, d / 2, s, e)
    print(f"Shell t_min = {shell_t:.4f} in")

    ext = calculate_external_mawp(d + 2 * 0.625, 0.625, 240.0)
    print(f"External MAWP = {ext['mawp_external']:.2f} psi (A={ext['factor_a']:.5f}, B={ext['factor_b']:.0f})")
