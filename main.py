"""
Pressure Vessel Inspection Calculator
ASME Section VIII Division 1 / API 510 / API 579-1 batch runner

For one vessel record this tool reports:
- Minimum required thickness and MAWP per component (UG-27 / UG-32)
- Static head, external pressure (UG-28) and hydrotest pressure (UG-99)
- Corrosion rate, remaining life and next inspection date (API 510)
- Nozzle neck thickness against UG-27 and pipe schedule (UG-45)
- Level 1 fitness-for-service screening (API 579-1 Parts 4 and 5)
- In-lieu-of internal inspection qualification (API 510 6.4)
"""

import argparse
import json
import logging
import sys
from datetime import date

from reference_data.asme_b36_10 import load_pipe_schedules
from reference_data.material_stress import load_material_stress_table
from calculations.calcs_ffs import FfsInput, LocalThinArea, assess_general_metal_loss, assess_local_thin_area
from calculations.calcs_in_lieu_of import InLieuOfCriteria, assess_in_lieu_of, generate_monitoring_plan
from calculations.calcs_nozzle import evaluate_nozzle
from calculations.component import evaluate_component, format_remaining_life, results_to_frame
from calculations.models import CalculationFailure, ComponentInput, NozzleInput

logger = logging.getLogger(__name__)

VESSEL_DEFAULTS = ('design_pressure', 'design_temperature', 'inside_diameter', 'material_spec')


def load_input_data(filename='reference_data/input_data.json'):
    """Load the vessel record from a JSON file."""
    try:
        with open(filename, 'r') as f:
            data = json.load(f)
        return data
    except FileNotFoundError:
        print(f"Error: Input file '{filename}' not found.")
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in '{filename}': {e}")
        sys.exit(1)


def build_components(data):
    """ComponentInput records with vessel-level defaults filled in."""
    vessel = data['vessel']
    defaults = {key: vessel[key] for key in VESSEL_DEFAULTS if key in vessel}
    return [ComponentInput.from_dict({**defaults, **record}) for record in data.get('components', [])]


def build_nozzles(data):
    vessel = data['vessel']
    defaults = {
        'design_pressure': vessel['design_pressure'],
        'design_temperature': vessel['design_temperature'],
        'material_spec': vessel.get('nozzle_material_spec', 'SA-106 Gr B'),
    }
    return [NozzleInput.from_dict(record, **defaults) for record in data.get('nozzles', [])]


def print_component_result(result):
    """Print the detailed block for one component."""
    print(f"\n{'─'*90}")
    print(f"  COMPONENT: {result.name.upper()}")
    print(f"{'─'*90}")
    if isinstance(result, CalculationFailure):
        print(f"  ERROR ({result.kind.value}): {result.message}")
        return

    kind = result.component_type.value.title()
    if result.head_type is not None:
        kind = f"{result.head_type.value.title()} Head"
    print(f"  Type:                        {kind}")
    print(f"  Material:                    {result.material_spec} @ {result.design_temperature:.0f}°F")
    print(f"  Allowable Stress (S):        {result.allowable_stress:.0f} psi"
          f"{'  (interpolated)' if result.stress_interpolated else ''}")
    if result.stress_note:
        print(f"    Note: {result.stress_note}")
    print(f"  Joint Efficiency (E):        {result.joint_efficiency:.2f}")
    print(f"  Design Pressure:             {result.design_pressure:.1f} psi")
    if result.static_head_pressure is not None:
        print(f"  Static Head:                 {result.static_head_pressure:.2f} psi")
        print(f"  Total Design Pressure:       {result.total_design_pressure:.2f} psi")
    print()
    print(f"  Thickness:")
    print(f"    Nominal:                   {result.nominal_thickness:.4f} inches")
    print(f"    Actual (min reading):      {result.actual_thickness:.4f} inches")
    print(f"    Corrosion Allowance:       {result.corrosion_allowance:.4f} inches")
    print(f"    Minimum Required:          {result.minimum_required_thickness:.4f} inches")
    print(f"      {result.thickness_formula}")
    print()
    print(f"  Pressure:")
    print(f"    MAWP:                      {result.mawp:.1f} psi")
    print(f"      {result.mawp_formula}")
    if result.mawp_at_top is not None:
        print(f"    MAWP at Top (less SH):     {result.mawp_at_top:.1f} psi")
    if result.external_mawp is not None:
        print(f"    External MAWP (UG-28):     {result.external_mawp:.2f} psi")
    print(f"    Hydrotest (UG-99):         {result.hydrotest_pressure:.1f} psi")
    print()
    print(f"  Life:")
    print(f"    Corrosion Rate:            {result.corrosion_rate:.2f} mpy")
    print(f"    Remaining Life:            {format_remaining_life(result)} years")
    print(f"    Next Inspection:           {result.next_inspection_date.isoformat()}")
    print()
    print(f"  STATUS: {result.status.value.upper()}")
    print(f"    {result.status_reason}")


def print_nozzle_results(evaluations):
    print(f"\n{'─'*90}")
    print(f"  NOZZLES (UG-27 / UG-45)")
    print(f"{'─'*90}")
    print(f"  {'Nozzle':<14} {'NPS':<6} {'Sch':<5} {'t req':>7} {'t -12.5%':>9} {'t min':>7} "
          f"{'t act':>7} {'UG-45':>7} {'Governing':<16} {'Status':<8}")
    print(f"  {'-'*88}")
    for ev in evaluations:
        if isinstance(ev, CalculationFailure):
            print(f"  {ev.name:<14} ERROR ({ev.kind.value}): {ev.message}")
            continue
        print(f"  {ev.name:<14} {ev.nominal_size:<6} {ev.schedule:<5} {ev.required_thickness:>7.4f} "
              f"{ev.pipe_minus_tolerance:>9.4f} {ev.minimum_required:>7.4f} {ev.actual_thickness:>7.4f} "
              f"{ev.ug45_minimum:>7.3f} {ev.governing_criterion.value:<16} "
              f"{'PASS' if ev.acceptable else 'FAIL':<8}")


def run_ffs(data, results):
    """Level 1 FFS screening for the components listed under 'ffs'."""
    by_name = {r.name: r for r in results if not isinstance(r, CalculationFailure)}
    for record in data.get('ffs', []):
        result = by_name.get(record['component'])
        if result is None:
            logger.warning(f"FFS: no evaluated component named '{record['component']}'")
            continue

        ffs_input = FfsInput(
            remaining_thickness=result.actual_thickness,
            minimum_required_thickness=result.minimum_required_thickness,
            future_corrosion_allowance=record.get('future_corrosion_allowance', result.corrosion_allowance),
            corrosion_rate=result.corrosion_rate,
            operating_pressure=record.get('operating_pressure', 0.0),
            mawp=result.mawp,
        )
        if 'lta' in record:
            lta = LocalThinArea(shell_diameter=result.inside_diameter, **record['lta'])
            assessment = assess_local_thin_area(ffs_input, lta)
            title = "LOCAL THIN AREA (API 579-1 PART 5)"
        else:
            assessment = assess_general_metal_loss(ffs_input)
            title = "GENERAL METAL LOSS (API 579-1 PART 4)"

        print(f"\n{'─'*90}")
        print(f"  FFS LEVEL 1 - {result.name.upper()} - {title}")
        print(f"{'─'*90}")
        print(f"  Outcome:                     {assessment.outcome.value.upper()}")
        if assessment.circumferential_extent is not None:
            print(f"  Circumferential Extent:      {assessment.circumferential_extent:.1f}°")
        life = "Unlimited" if assessment.remaining_life_unlimited else f"{assessment.remaining_life:.1f}"
        print(f"  Remaining Life:              {life} years")
        print(f"  Next Inspection Interval:    {assessment.next_inspection_interval:.1f} years")
        for warning in assessment.warnings:
            print(f"  WARNING: {warning}")
        for recommendation in assessment.recommendations:
            print(f"  - {recommendation}")


def run_in_lieu_of(data, as_of):
    record = data.get('in_lieu_of')
    if record is None:
        return
    record = dict(record)
    if record.get('last_internal_inspection'):
        record['last_internal_inspection'] = date.fromisoformat(record['last_internal_inspection'])
    assessment = assess_in_lieu_of(InLieuOfCriteria(**record), as_of=as_of)

    print(f"\n{'─'*90}")
    print(f"  IN-LIEU-OF INTERNAL INSPECTION (API 510 6.4)")
    print(f"{'─'*90}")
    print(f"  Qualified:                   {'YES' if assessment.qualified else 'NO'}")
    if assessment.qualified:
        print(f"  Maximum Interval:            {assessment.max_interval} years")
        print(f"  Next Internal Due:           {assessment.next_internal_due.isoformat()}")
    for line in assessment.justification:
        print(f"  + {line}")
    for line in assessment.requirements:
        print(f"  - {line}")
    for line in assessment.warnings:
        print(f"  WARNING: {line}")
    if assessment.qualified:
        print()
        print(generate_monitoring_plan())


def main(argv=None):
    """Main execution function."""
    parser = argparse.ArgumentParser(description="Pressure vessel inspection calculations")
    parser.add_argument('input', nargs='?', default='reference_data/input_data.json',
                        help="Vessel record (JSON)")
    parser.add_argument('-v', '--verbose', action='store_true', help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(levelname)s %(name)s: %(message)s')

    print("\n" + "="*90)
    print("PRESSURE VESSEL INSPECTION CALCULATOR")
    print("ASME VIII-1 / API 510 / API 579-1")
    print("="*90)

    print(f"\nLoading vessel record from '{args.input}'...")
    data = load_input_data(args.input)
    vessel = data['vessel']
    as_of = date.fromisoformat(vessel['inspection_date']) if vessel.get('inspection_date') else date.today()

    stress_table = load_material_stress_table()
    pipe_table = load_pipe_schedules()

    try:
        components = build_components(data)
        nozzles = build_nozzles(data)
    except (KeyError, TypeError, ValueError) as e:
        print(f"Error: Invalid vessel record: {e}")
        sys.exit(1)

    print(f"Vessel {vessel.get('tag', '')}: {vessel.get('description', '')}")
    print(f"Evaluating {len(components)} component(s) and {len(nozzles)} nozzle(s) as of {as_of.isoformat()}.")

    results = [evaluate_component(c, stress_table, as_of=as_of) for c in components]
    for result in results:
        print_component_result(result)

    print_nozzle_results([evaluate_nozzle(n, stress_table, pipe_table) for n in nozzles])
    run_ffs(data, results)
    run_in_lieu_of(data, as_of)

    print("\n" + "="*90)
    print("SUMMARY")
    print("="*90)
    print(results_to_frame(results).drop(columns=['Reason'], errors='ignore').to_string(index=False))
    print("\n" + "="*90)
    print("EVALUATION COMPLETE")
    print("="*90 + "\n")


if __name__ == "__main__":
    main()
