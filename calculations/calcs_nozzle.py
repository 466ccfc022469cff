"""
ASME VIII-1 UG-27 / UG-45 - Nozzle Neck Thickness
Pipe-schedule-based minimum thickness checks for nozzles
"""

import logging
from typing import Any, Dict, List, Union

import pandas as pd

from reference_data.asme_b36_10 import parse_nominal_size

from .calcs_thickness import calculate_shell_min_thickness
from .config import MILL_TOLERANCE, NOZZLE_JOINT_EFFICIENCY
from .exceptions import InvalidGeometryError
from .models import (CalculationFailure, FailureKind, GoverningCriterion, NozzleEvaluation,
                     NozzleInput)

logger = logging.getLogger(__name__)

# UG-45 minimum nozzle neck thickness: (nominal size in, t_min in)
# Standard wall pipe minus 12.5%
UG45_MIN_THICKNESS_TABLE = (
    (0.75, 0.100),
    (1.0, 0.116),
    (1.5, 0.127),
    (2.0, 0.135),
    (3.0, 0.189),
    (4.0, 0.207),
    (6.0, 0.245),
    (8.0, 0.282),
    (10.0, 0.319),
    (12.0, 0.328),
)


def get_nozzle_min_thickness(size_inches):
    """
    UG-45 minimum neck thickness for a nozzle size.

    Sizes between table entries use the next larger entry; sizes above
    12" use the 12" value.
    """
    for size, t_min in UG45_MIN_THICKNESS_TABLE:
        if size_inches <= size:
            return t_min
    return UG45_MIN_THICKNESS_TABLE[-1][1]


def calculate_pipe_minus_tolerance(wall_thickness):
    """Nominal pipe wall less 12.5% mill under-tolerance."""
    return wall_thickness * (1 - MILL_TOLERANCE)


def calculate_nozzle_required_thickness(outside_diameter, wall_thickness, design_pressure,
                                        allowable_stress, corrosion_allowance=0.0):
    """
    Nozzle minimum thickness: greater of UG-27 pressure design and pipe minus tolerance.

    Parameters:
    -----------
    outside_diameter : float
        Pipe outside diameter (inches)
    wall_thickness : float
        Nominal schedule wall thickness (inches)
    design_pressure : float
        Vessel design pressure (psi)
    allowable_stress : float
        Nozzle material allowable stress (psi)
    corrosion_allowance : float
        Corrosion allowance added to the pressure design thickness (inches)

    Returns:
    --------
    dict : Dictionary containing:
        - inside_diameter, inside_radius: Pipe bore (inches)
        - required_thickness: UG-27 thickness with E = 1.0 (inches)
        - pipe_minus_tolerance: Schedule wall x 0.875 (inches)
        - minimum_required: Governing minimum (inches)
        - governing_criterion: GoverningCriterion

    Raises:
    -------
    InvalidGeometryError : if the pressure exceeds what the pipe material supports
    """
    inside_diameter = outside_diameter - 2 * wall_thickness
    inside_radius = inside_diameter / 2

    required = calculate_shell_min_thickness(design_pressure, inside_radius, allowable_stress,
                                             NOZZLE_JOINT_EFFICIENCY, corrosion_allowance)
    pipe_minus_tolerance = calculate_pipe_minus_tolerance(wall_thickness)

    if pipe_minus_tolerance > required:
        governing = GoverningCriterion.PIPE_SCHEDULE
        minimum = pipe_minus_tolerance
    else:
        governing = GoverningCriterion.PRESSURE_DESIGN
        minimum = required

    return {
        'inside_diameter': inside_diameter,
        'inside_radius': inside_radius,
        'required_thickness': required,
        'pipe_minus_tolerance': pipe_minus_tolerance,
        'minimum_required': minimum,
        'governing_criterion': governing,
    }


def calculate_nozzle_remaining_life(previous_thickness, actual_thickness, minimum_thickness, years):
    """
    Nozzle remaining life from two readings.

    Ca = t_act - t_min
    Cr = (t_prev - t_act) / years      (in/yr)
    RL = Ca / Cr

    Returns:
    --------
    dict : Dictionary containing:
        - corrosion_allowance_remaining: Ca (inches)
        - corrosion_rate: Cr (inches/year)
        - remaining_life: Years (float('inf') when Cr <= 0)
        - unlimited: True when no loss is measured on a wall at or above t_min
    """
    remaining_allowance = actual_thickness - minimum_thickness
    if years <= 0:
        logger.warning(f"Non-positive nozzle reading interval ({years} yr); remaining life taken as unlimited")
        rate = 0.0
    else:
        rate = (previous_thickness - actual_thickness) / years

    if remaining_allowance < 0:
        return {'corrosion_allowance_remaining': remaining_allowance, 'corrosion_rate': max(rate, 0.0),
                'remaining_life': 0.0, 'unlimited': False}
    if rate <= 0:
        return {'corrosion_allowance_remaining': remaining_allowance, 'corrosion_rate': rate,
                'remaining_life': float('inf'), 'unlimited': True}

    return {
        'corrosion_allowance_remaining': remaining_allowance,
        'corrosion_rate': rate,
        'remaining_life': max(remaining_allowance / rate, 0.0),
        'unlimited': False,
    }


def evaluate_nozzle(nozzle: NozzleInput, stress_table, pipe_table) -> Union[NozzleEvaluation, CalculationFailure]:
    """
    Evaluate one nozzle neck against UG-27 and the pipe schedule minimum.

    Parameters:
    -----------
    nozzle : NozzleInput
        Nozzle record with NPS, schedule and measured thickness
    stress_table : MaterialStressTable
        Allowable stress data
    pipe_table : PipeScheduleTable
        B36.10M pipe schedule data

    Returns:
    --------
    NozzleEvaluation, or CalculationFailure for an unknown pipe size/schedule,
    unknown material, or a pressure the pipe cannot carry
    """
    pipe = pipe_table.lookup(nozzle.nominal_size, nozzle.schedule)
    if pipe is None:
        message = f"NPS {nozzle.nominal_size} schedule {nozzle.schedule} not in B36.10M table"
        logger.warning(f"{nozzle.name}: {message}")
        return CalculationFailure(nozzle.name, FailureKind.UNKNOWN_PIPE_SIZE, message)

    stress = stress_table.stress_at(nozzle.material_spec, nozzle.design_temperature)
    if stress is None:
        return CalculationFailure(nozzle.name, FailureKind.UNKNOWN_MATERIAL,
                                  f"Material '{nozzle.material_spec}' not in allowable stress table")

    try:
        sizing = calculate_nozzle_required_thickness(pipe.outside_diameter, pipe.wall_thickness,
                                                     nozzle.design_pressure, stress.allowable_stress,
                                                     nozzle.corrosion_allowance)
    except InvalidGeometryError as e:
        logger.warning(f"{nozzle.name}: {e}")
        return CalculationFailure(nozzle.name, FailureKind.INVALID_GEOMETRY, str(e))

    notes: List[str] = []
    if stress.note:
        notes.append(stress.note)

    remaining_life = None
    unlimited = False
    if nozzle.previous_thickness is not None and nozzle.years_between_readings is not None:
        life = calculate_nozzle_remaining_life(nozzle.previous_thickness, nozzle.actual_thickness,
                                               sizing['minimum_required'], nozzle.years_between_readings)
        remaining_life = life['remaining_life']
        unlimited = life['unlimited']

    acceptable = nozzle.actual_thickness >= sizing['minimum_required']
    logger.info(f"{nozzle.name}: NPS {pipe.nominal_size} Sch {pipe.schedule} "
                f"t_act={nozzle.actual_thickness:.4f} t_min={sizing['minimum_required']:.4f} "
                f"({sizing['governing_criterion'].value}) {'OK' if acceptable else 'BELOW MINIMUM'}")

    return NozzleEvaluation(
        name=nozzle.name,
        nominal_size=pipe.nominal_size,
        schedule=pipe.schedule,
        outside_diameter=pipe.outside_diameter,
        wall_thickness=pipe.wall_thickness,
        inside_diameter=sizing['inside_diameter'],
        inside_radius=sizing['inside_radius'],
        allowable_stress=stress.allowable_stress,
        joint_efficiency=NOZZLE_JOINT_EFFICIENCY,
        required_thickness=sizing['required_thickness'],
        pipe_minus_tolerance=sizing['pipe_minus_tolerance'],
        minimum_required=sizing['minimum_required'],
        governing_criterion=sizing['governing_criterion'],
        actual_thickness=nozzle.actual_thickness,
        acceptable=acceptable,
        ug45_minimum=get_nozzle_min_thickness(parse_nominal_size(pipe.nominal_size)),
        remaining_life=remaining_life,
        remaining_life_unlimited=unlimited,
        notes=tuple(notes),
    )


def evaluate_standard_schedules(nominal_size, design_pressure, design_temperature, material_spec,
                                stress_table, pipe_table, corrosion_allowance=0.0) -> pd.DataFrame:
    """
    Evaluate every B36.10M schedule of one nominal size at the vessel conditions.

    Returns an empty DataFrame when the size or material is unknown.
    """
    schedules = pipe_table.schedules_for(nominal_size)
    stress = stress_table.stress_at(material_spec, design_temperature)
    if not schedules or stress is None:
        return pd.DataFrame()

    od = pipe_table.outside_diameter(nominal_size)
    records: List[Dict[str, Any]] = []
    for schedule, wall in sorted(schedules.items(), key=lambda item: (item[1], item[0])):
        try:
            sizing = calculate_nozzle_required_thickness(od, wall, design_pressure,
                                                         stress.allowable_stress, corrosion_allowance)
        except InvalidGeometryError:
            continue
        records.append({
            "Schedule": schedule,
            "WT (in)": wall,
            "ID (in)": round(sizing['inside_diameter'], 4),
            "Required t (in)": round(sizing['required_thickness'], 4),
            "Pipe -12.5% (in)": round(sizing['pipe_minus_tolerance'], 4),
            "Minimum (in)": round(sizing['minimum_required'], 4),
            "Governing": sizing['governing_criterion'].value,
            "Status": "PASS" if sizing['pipe_minus_tolerance'] >= sizing['required_thickness'] else "FAIL",
        })

    return pd.DataFrame(records)
