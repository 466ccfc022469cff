"""
Component evaluation

Composes the stress lookup, geometry factors, thickness/MAWP formulas and
corrosion life calculation into one result per shell or head.
"""

import logging
import math
from datetime import date
from typing import Any, Dict, Iterable, List, Union

import pandas as pd

from .calcs_corrosion import (calculate_next_inspection_date, calculate_remaining_life,
                              classify_status, resolve_corrosion_rate)
from .calcs_geometry import resolve_head_geometry
from .calcs_thickness import (calculate_external_mawp, calculate_head_mawp, calculate_head_min_thickness,
                              calculate_hydrotest_pressure, calculate_shell_mawp,
                              calculate_shell_min_thickness, resolve_design_pressure)
from .config import DEFAULT_POLICY
from .exceptions import InvalidGeometryError
from .models import (CalculationFailure, ComponentInput, ComponentResult, ComponentType, FailureKind)

logger = logging.getLogger(__name__)


def _internal_pressure(component, pressure, stress, efficiency):
    """Minimum thickness, MAWP and the substituted formulas for a shell or head."""
    ca = component.corrosion_allowance
    t = component.actual_thickness

    if component.component_type is ComponentType.SHELL:
        r = component.inside_radius
        t_min = calculate_shell_min_thickness(pressure, r, stress, efficiency, ca)
        mawp = calculate_shell_mawp(t, r, stress, efficiency, ca)
        thickness_formula = (f"t = P*R/(S*E - 0.6*P) + CA = {pressure:.2f}*{r:.4f}/"
                             f"({stress:.0f}*{efficiency:.2f} - 0.6*{pressure:.2f}) + {ca:.4f} = {t_min:.4f} in")
        mawp_formula = (f"MAWP = S*E*(t-CA)/(R + 0.6*(t-CA)) = {stress:.0f}*{efficiency:.2f}*{t - ca:.4f}/"
                        f"({r:.4f} + 0.6*{t - ca:.4f}) = {mawp:.2f} psi")
        return t_min, mawp, thickness_formula, mawp_formula

    geometry = resolve_head_geometry(component.head_type, component.inside_diameter,
                                     component.knuckle_radius, component.crown_radius)
    length, factor = geometry.length, geometry.factor
    t_min = calculate_head_min_thickness(pressure, length, factor, stress, efficiency, ca)
    mawp = calculate_head_mawp(t, length, factor, stress, efficiency, ca)
    thickness_formula = (f"t = P*L*K/(2*S*E - 0.2*P) + CA = {pressure:.2f}*{length:.4f}*{factor:.4f}/"
                         f"(2*{stress:.0f}*{efficiency:.2f} - 0.2*{pressure:.2f}) + {ca:.4f} = {t_min:.4f} in")
    mawp_formula = (f"MAWP = 2*S*E*(t-CA)/(L*K + 0.2*(t-CA)) = 2*{stress:.0f}*{efficiency:.2f}*{t - ca:.4f}/"
                    f"({length:.4f}*{factor:.4f} + 0.2*{t - ca:.4f}) = {mawp:.2f} psi")
    return t_min, mawp, thickness_formula, mawp_formula


def evaluate_component(component: ComponentInput, stress_table, policy=DEFAULT_POLICY,
                       as_of=None) -> Union[ComponentResult, CalculationFailure]:
    """
    Evaluate one vessel component.

    Parameters:
    -----------
    component : ComponentInput
        Shell or head record
    stress_table : MaterialStressTable
        Allowable stress data, loaded once by the caller
    policy : InspectionPolicy
        Inspection interval policy
    as_of : date, optional
        Base date for the next inspection when the record has no current
        inspection date (default today)

    Returns:
    --------
    ComponentResult, or CalculationFailure when the material is unknown or the
    geometry/pressure combination has no valid solution
    """
    stress = stress_table.stress_at(component.material_spec, component.design_temperature)
    if stress is None:
        return CalculationFailure(component.name, FailureKind.UNKNOWN_MATERIAL,
                                  f"Material '{component.material_spec}' not in allowable stress table")

    pressures = resolve_design_pressure(component.design_pressure, component.liquid_service)
    pressure = pressures['effective_pressure']
    s = stress.allowable_stress
    e = component.joint_efficiency

    try:
        t_min, mawp, thickness_formula, mawp_formula = _internal_pressure(component, pressure, s, e)

        external_mawp = None
        if component.external_pressure is not None:
            outside_diameter = component.inside_diameter + 2 * component.actual_thickness
            external = calculate_external_mawp(outside_diameter,
                                               component.actual_thickness - component.corrosion_allowance,
                                               component.external_pressure.design_length,
                                               component.external_pressure.elastic_modulus)
            external_mawp = external['mawp_external']
    except InvalidGeometryError as err:
        logger.warning(f"{component.name}: {err}")
        return CalculationFailure(component.name, FailureKind.INVALID_GEOMETRY, str(err))

    mawp_at_top = None
    if pressures['static_head_pressure'] is not None:
        mawp_at_top = mawp - pressures['static_head_pressure']

    rate = resolve_corrosion_rate(component.corrosion, component.actual_thickness)
    life = calculate_remaining_life(component.actual_thickness, t_min, rate)

    base_date = None
    if component.corrosion is not None:
        base_date = component.corrosion.current_inspection_date
    base_date = base_date or as_of or date.today()
    next_inspection = calculate_next_inspection_date(life['remaining_life'], life['unlimited'],
                                                     base_date, policy)

    status, reason = classify_status(component.actual_thickness, t_min, component.corrosion_allowance)
    logger.info(f"{component.name}: t_min={t_min:.4f} t_act={component.actual_thickness:.4f} "
                f"MAWP={mawp:.1f} psi -> {status.value}")

    return ComponentResult(
        name=component.name,
        component_type=component.component_type,
        head_type=component.head_type,
        material_spec=stress.material_spec,
        design_pressure=component.design_pressure,
        design_temperature=component.design_temperature,
        inside_diameter=component.inside_diameter,
        nominal_thickness=component.nominal_thickness,
        actual_thickness=component.actual_thickness,
        corrosion_allowance=component.corrosion_allowance,
        joint_efficiency=e,
        allowable_stress=s,
        stress_interpolated=stress.interpolated,
        stress_note=stress.note,
        static_head_pressure=pressures['static_head_pressure'],
        total_design_pressure=pressures['total_design_pressure'],
        minimum_required_thickness=t_min,
        mawp=mawp,
        mawp_at_top=mawp_at_top,
        external_mawp=external_mawp,
        hydrotest_pressure=calculate_hydrotest_pressure(mawp),
        corrosion_rate=rate,
        remaining_life=life['remaining_life'],
        remaining_life_unlimited=life['unlimited'],
        next_inspection_date=next_inspection,
        status=status,
        status_reason=reason,
        thickness_formula=thickness_formula,
        mawp_formula=mawp_formula,
    )


def evaluate_components(components: Iterable[ComponentInput], stress_table, policy=DEFAULT_POLICY,
                        as_of=None) -> List[Union[ComponentResult, CalculationFailure]]:
    return [evaluate_component(c, stress_table, policy, as_of) for c in components]


def format_remaining_life(result: ComponentResult) -> str:
    if result.remaining_life_unlimited or math.isinf(result.remaining_life):
        return "Unlimited"
    return f"{result.remaining_life:.1f}"


def results_to_frame(results: Iterable[Union[ComponentResult, CalculationFailure]]) -> pd.DataFrame:
    """Summary table, one row per component; failures keep their name and message."""
    records: List[Dict[str, Any]] = []
    for result in results:
        if isinstance(result, CalculationFailure):
            records.append({
                "Component": result.name,
                "Status": "ERROR",
                "Reason": f"{result.kind.value}: {result.message}",
            })
            continue
        records.append({
            "Component": result.name,
            "Type": result.head_type.value if result.head_type else result.component_type.value,
            "Material": result.material_spec,
            "S (psi)": round(result.allowable_stress, 0),
            "t nom (in)": result.nominal_thickness,
            "t act (in)": result.actual_thickness,
            "t min (in)": round(result.minimum_required_thickness, 4),
            "MAWP (psi)": round(result.mawp, 1),
            "Rate (mpy)": round(result.corrosion_rate, 2),
            "RL (yr)": format_remaining_life(result),
            "Next Inspection": result.next_inspection_date.isoformat(),
            "Status": result.status.value.upper(),
            "Reason": result.status_reason,
        })
    return pd.DataFrame(records)
