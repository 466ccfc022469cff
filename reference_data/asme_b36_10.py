"""
ASME B36.10M - Welded and Seamless Wrought Steel Pipe
Nominal pipe size and schedule lookup for nozzle evaluation

Structure: NPS label -> (outside diameter, {schedule_name: wall_thickness_inches})
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)


# NPS label -> outside diameter (inches)
NOMINAL_OUTSIDE_DIAMETERS = {
    "1/2": 0.840,
    "3/4": 1.050,
    "1": 1.315,
    "1-1/4": 1.660,
    "1-1/2": 1.900,
    "2": 2.375,
    "2-1/2": 2.875,
    "3": 3.500,
    "4": 4.500,
    "6": 6.625,
    "8": 8.625,
    "10": 10.750,
    "12": 12.750,
    "14": 14.000,
    "16": 16.000,
    "18": 18.000,
    "20": 20.000,
    "24": 24.000,
}

# NPS label -> {schedule_name: wall_thickness_inches}
# STD/XS/XXS are weight classes; they share a wall with the numbered schedule where B36.10M says so
PIPE_SCHEDULE_DATA = {
    "1/2": {"10": 0.083, "STD": 0.109, "40": 0.109, "XS": 0.147, "80": 0.147, "160": 0.187, "XXS": 0.294},
    "3/4": {"10": 0.083, "STD": 0.113, "40": 0.113, "XS": 0.154, "80": 0.154, "160": 0.218, "XXS": 0.308},
    "1": {"10": 0.109, "STD": 0.133, "40": 0.133, "XS": 0.179, "80": 0.179, "160": 0.250, "XXS": 0.358},
    "1-1/4": {"10": 0.109, "STD": 0.140, "40": 0.140, "XS": 0.191, "80": 0.191, "160": 0.250, "XXS": 0.382},
    "1-1/2": {"10": 0.109, "STD": 0.145, "40": 0.145, "XS": 0.200, "80": 0.200, "160": 0.281, "XXS": 0.400},
    "2": {"10": 0.109, "STD": 0.154, "40": 0.154, "XS": 0.218, "80": 0.218, "160": 0.343, "XXS": 0.436},
    "2-1/2": {"10": 0.120, "STD": 0.203, "40": 0.203, "XS": 0.276, "80": 0.276, "160": 0.375, "XXS": 0.552},
    "3": {"10": 0.120, "STD": 0.216, "40": 0.216, "XS": 0.300, "80": 0.300, "160": 0.437, "XXS": 0.600},
    "4": {"10": 0.120, "STD": 0.237, "40": 0.237, "XS": 0.337, "80": 0.337, "120": 0.437, "160": 0.531, "XXS": 0.674},
    "6": {"10": 0.134, "STD": 0.280, "40": 0.280, "XS": 0.432, "80": 0.432, "120": 0.562, "160": 0.718, "XXS": 0.864},
    "8": {"10": 0.148, "20": 0.250, "30": 0.277, "STD": 0.322, "40": 0.322, "60": 0.406, "XS": 0.500, "80": 0.500,
          "100": 0.593, "120": 0.718, "140": 0.812, "XXS": 0.875, "160": 0.906},
    "10": {"10": 0.165, "20": 0.250, "30": 0.307, "STD": 0.365, "40": 0.365, "XS": 0.500, "60": 0.500, "80": 0.593,
           "100": 0.718, "120": 0.843, "XXS": 1.000, "140": 1.000, "160": 1.125},
    "12": {"10": 0.180, "20": 0.250, "30": 0.330, "STD": 0.375, "40": 0.406, "XS": 0.500, "60": 0.562, "80": 0.687,
           "100": 0.843, "120": 1.000, "XXS": 1.000, "140": 1.125, "160": 1.312},
    "14": {"10": 0.188, "20": 0.250, "30": 0.312, "STD": 0.375, "40": 0.437, "XS": 0.500, "60": 0.593, "80": 0.750,
           "100": 0.937, "120": 1.093, "140": 1.250, "160": 1.406},
    "16": {"10": 0.188, "20": 0.250, "30": 0.312, "STD": 0.375, "40": 0.500, "XS": 0.500, "60": 0.656, "80": 0.843,
           "100": 1.031, "120": 1.218, "140": 1.437, "160": 1.593},
    "18": {"10": 0.188, "20": 0.250, "STD": 0.375, "30": 0.437, "XS": 0.500, "40": 0.562, "60": 0.750, "80": 0.937,
           "100": 1.156, "120": 1.375, "140": 1.562, "160": 1.781},
    "20": {"10": 0.218, "20": 0.375, "STD": 0.375, "30": 0.500, "XS": 0.500, "40": 0.593, "60": 0.812, "80": 1.031,
           "100": 1.281, "120": 1.500, "140": 1.750, "160": 1.968},
    "24": {"10": 0.250, "20": 0.375, "STD": 0.375, "XS": 0.500, "30": 0.562, "40": 0.687, "60": 0.968, "80": 1.218,
           "100": 1.531, "120": 1.812, "140": 2.062, "160": 2.343},
}

SCHEDULE_ALIASES = {
    "STANDARD": "STD",
    "EXTRA STRONG": "XS",
    "XH": "XS",
    "DOUBLE EXTRA STRONG": "XXS",
    "XXH": "XXS",
}


def parse_nominal_size(nominal_size: Union[str, float, int]) -> float:
    """
    Convert a nominal pipe size label to its numeric size in inches.

    Accepts '2', '2"', '1-1/2', '1 1/2', '3/4', '1.5', 2 and 2.0.

    Raises:
    -------
    ValueError : if the label cannot be read as a pipe size
    """
    if isinstance(nominal_size, (int, float)):
        return float(nominal_size)

    text = str(nominal_size).strip().upper().replace('"', '').replace('NPS', '').strip()
    if not text:
        raise ValueError(f"Empty nominal pipe size: {nominal_size!r}")

    whole, _, fraction = text.replace(' ', '-').partition('-')
    if '/' in whole and not fraction:
        whole, fraction = '0', whole

    try:
        size = float(whole)
        if fraction:
            numerator, denominator = fraction.split('/')
            size += float(numerator) / float(denominator)
    except (ValueError, ZeroDivisionError):
        raise ValueError(f"Unrecognized nominal pipe size: {nominal_size!r}") from None

    return size


def normalize_schedule(schedule: Union[str, int]) -> str:
    """Normalize 'Sch 40', 'SCH. 80', 'Schedule 160', 'Standard' to table keys."""
    text = str(schedule).strip().upper()
    for prefix in ('SCHEDULE', 'SCH.', 'SCH'):
        if text.startswith(prefix):
            text = text[len(prefix):].strip()
            break
    return SCHEDULE_ALIASES.get(text, text)


@dataclass(frozen=True)
class PipeScheduleEntry:
    """One (NPS, schedule) row of the B36.10M table."""
    nominal_size: str
    schedule: str
    outside_diameter: float
    wall_thickness: float

    @property
    def inside_diameter(self) -> float:
        return self.outside_diameter - 2 * self.wall_thickness


class PipeScheduleTable:
    """
    Read-only pipe schedule table keyed by nominal pipe size.

    Built once from a mapping of NPS label -> {schedule: wall} and a mapping
    of NPS label -> outside diameter, then passed to the nozzle evaluation.
    """

    def __init__(self, schedules: Mapping[str, Mapping[str, float]],
                 outside_diameters: Mapping[str, float]):
        self._rows: Dict[float, Tuple[str, float, Dict[str, float]]] = {}
        for label, walls in schedules.items():
            if label not in outside_diameters:
                raise ValueError(f"No outside diameter given for NPS {label}")
            size = parse_nominal_size(label)
            self._rows[size] = (label, float(outside_diameters[label]),
                                {normalize_schedule(k): float(v) for k, v in walls.items()})

    def __contains__(self, nominal_size) -> bool:
        try:
            return parse_nominal_size(nominal_size) in self._rows
        except ValueError:
            return False

    def nominal_sizes(self) -> List[str]:
        """NPS labels sorted by size."""
        return [self._rows[size][0] for size in sorted(self._rows)]

    def outside_diameter(self, nominal_size) -> Optional[float]:
        row = self._row(nominal_size)
        return row[1] if row else None

    def schedules_for(self, nominal_size) -> Optional[Dict[str, float]]:
        """Schedule -> wall thickness for one NPS, or None if the size is not tabulated."""
        row = self._row(nominal_size)
        return dict(row[2]) if row else None

    def lookup(self, nominal_size, schedule) -> Optional[PipeScheduleEntry]:
        """
        Resolve (outside diameter, wall thickness) for an NPS and schedule.

        Parameters:
        -----------
        nominal_size : str or float
            Nominal pipe size, e.g. '2', '1-1/2', 6
        schedule : str
            Schedule or weight class, e.g. '40', 'Sch 80', 'XS'

        Returns:
        --------
        PipeScheduleEntry, or None when the size or schedule is not in the table
        """
        row = self._row(nominal_size)
        if row is None:
            return None
        label, od, walls = row
        key = normalize_schedule(schedule)
        if key not in walls:
            logger.debug(f"Schedule {schedule!r} not listed for NPS {label}")
            return None
        return PipeScheduleEntry(nominal_size=label, schedule=key,
                                 outside_diameter=od, wall_thickness=walls[key])

    def schedule_for_thickness(self, nominal_size, thickness, tolerance=0.001) -> List[str]:
        """
        Find schedule names matching a wall thickness for one NPS.

        Returns an empty list when nothing is within tolerance.
        """
        walls = self.schedules_for(nominal_size) or {}
        return [name for name, wall in walls.items() if abs(wall - thickness) <= tolerance]

    def _row(self, nominal_size):
        try:
            size = parse_nominal_size(nominal_size)
        except ValueError:
            return None
        return self._rows.get(size)


def load_pipe_schedules() -> PipeScheduleTable:
    """Build the standard B36.10M table."""
    return PipeScheduleTable(PIPE_SCHEDULE_DATA, NOMINAL_OUTSIDE_DIAMETERS)


if __name__ == "__main__":
    table = load_pipe_schedules()
    print("ASME B36.10M Pipe Schedules")
    print("=" * 60)
    for label in table.nominal_sizes():
        schedules = table.schedules_for(label)
        print(f'NPS {label:>6}  OD {table.outside_diameter(label):7.3f}"  '
              f"{len(schedules)} schedules")
    entry = table.lookup("2", "40")
    print(f"\nNPS 2 Sch 40: OD={entry.outside_diameter}\" WT={entry.wall_thickness}\" "
          f"ID={entry.inside_diameter:.3f}\"")
