"""
ASME Section II Part D - Maximum Allowable Stress Values
Allowable stress lookup by material specification and design temperature

Temperatures between tabulated points are linearly interpolated. Temperatures
outside the tabulated range are clamped to the nearest endpoint and the result
carries a note saying so.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

DEFAULT_STRESS_FILE = Path(__file__).parent / 'material_stress.json'


@dataclass(frozen=True)
class MaterialStressEntry:
    """One tabulated (material, temperature) -> allowable stress point."""
    material_spec: str
    temperature_f: float
    allowable_stress: float


@dataclass(frozen=True)
class StressLookup:
    """
    Result of an allowable stress lookup.

    lower_bound/upper_bound are the two bracketing table points when the
    value was interpolated; note is set when the temperature was outside the
    tabulated range and the nearest endpoint was used.
    """
    material_spec: str
    temperature_f: float
    allowable_stress: float
    interpolated: bool
    lower_bound: Optional[MaterialStressEntry] = None
    upper_bound: Optional[MaterialStressEntry] = None
    note: Optional[str] = None

    @property
    def clamped(self) -> bool:
        return self.note is not None


def normalize_material_spec(material_spec: str) -> str:
    """Case/spacing-insensitive key; 'Grade' and 'Gr.' are treated as 'Gr'."""
    words = str(material_spec).upper().replace('GR.', 'GR').split()
    return ' '.join('GR' if w == 'GRADE' else w for w in words)


class MaterialStressTable:
    """
    Read-only allowable stress table.

    Parameters:
    -----------
    entries : iterable of MaterialStressEntry
        Points for every material, grouped per material in ascending temperature
    categories : dict, optional
        material_spec -> category label (e.g. 'Carbon Steel')
    """

    def __init__(self, entries: Iterable[MaterialStressEntry],
                 categories: Optional[Dict[str, str]] = None):
        self._points: Dict[str, List[MaterialStressEntry]] = {}
        self._names: Dict[str, str] = {}
        for entry in entries:
            key = normalize_material_spec(entry.material_spec)
            points = self._points.setdefault(key, [])
            if points and entry.temperature_f <= points[-1].temperature_f:
                raise ValueError(
                    f"Temperatures for {entry.material_spec} must be strictly ascending: "
                    f"{entry.temperature_f}°F follows {points[-1].temperature_f}°F")
            points.append(entry)
            self._names.setdefault(key, entry.material_spec)

        self._categories = {normalize_material_spec(k): v for k, v in (categories or {}).items()}
        self._temperatures: Dict[str, np.ndarray] = {
            key: np.array([p.temperature_f for p in points], dtype=float) for key, points in self._points.items()
        }
        self._stresses: Dict[str, np.ndarray] = {
            key: np.array([p.allowable_stress for p in points], dtype=float) for key, points in self._points.items()
        }

    def __contains__(self, material_spec) -> bool:
        return normalize_material_spec(material_spec) in self._points

    def __len__(self) -> int:
        return len(self._points)

    def materials(self) -> List[str]:
        """Material specifications in the table, sorted."""
        return sorted(self._names.values())

    def category_of(self, material_spec: str) -> Optional[str]:
        return self._categories.get(normalize_material_spec(material_spec))

    def stress_at(self, material_spec: str, temperature_f: float) -> Optional[StressLookup]:
        """
        Allowable stress for a material at a design temperature.

        Parameters:
        -----------
        material_spec : str
            Material specification, e.g. 'SA-516 Gr 70'
        temperature_f : float
            Design temperature (°F)

        Returns:
        --------
        StressLookup, or None when the material is not in the table.
        An unknown material never falls back to another material.
        """
        key = normalize_material_spec(material_spec)
        points = self._points.get(key)
        if not points:
            logger.warning(f"Material '{material_spec}' not found in allowable stress table")
            return None

        name = self._names[key]
        first, last = points[0], points[-1]

        if temperature_f < first.temperature_f or temperature_f > last.temperature_f:
            nearest = first if temperature_f < first.temperature_f else last
            side = 'below' if nearest is first else 'above'
            note = (f"{temperature_f:g}°F is {side} the tabulated range for {name} "
                    f"({first.temperature_f:g}°F to {last.temperature_f:g}°F); "
                    f"nearest tabulated stress {nearest.allowable_stress:g} psi used")
            logger.warning(note)
            return StressLookup(material_spec=name, temperature_f=temperature_f,
                                allowable_stress=nearest.allowable_stress,
                                interpolated=False, note=note)

        temperatures = self._temperatures[key]
        index = int(np.searchsorted(temperatures, temperature_f))
        if temperatures[index] == temperature_f:
            return StressLookup(material_spec=name, temperature_f=temperature_f,
                                allowable_stress=points[index].allowable_stress, interpolated=False)

        stress = float(np.interp(temperature_f, temperatures, self._stresses[key]))
        return StressLookup(material_spec=name, temperature_f=temperature_f,
                            allowable_stress=stress, interpolated=True,
                            lower_bound=points[index - 1], upper_bound=points[index])

    def table_for(self, material_spec: str) -> Optional[pd.DataFrame]:
        """Tabulated points for one material as a DataFrame, or None if unknown."""
        points = self._points.get(normalize_material_spec(material_spec))
        if not points:
            return None
        return pd.DataFrame({
            'Temperature (°F)': [p.temperature_f for p in points],
            'Allowable Stress (psi)': [p.allowable_stress for p in points],
        })

    @classmethod
    def from_json(cls, filename) -> 'MaterialStressTable':
        """
        Load a table from JSON of the form
        {"materials": {"SA-516 Gr 70": {"category": "...", "points": [[T, S], ...]}}}
        """
        with open(filename, 'r') as f:
            data = json.load(f)

        entries = []
        categories = {}
        for spec, record in data['materials'].items():
            categories[spec] = record.get('category', '')
            for temperature, stress in record['points']:
                entries.append(MaterialStressEntry(spec, float(temperature), float(stress)))
        return cls(entries, categories)


def load_material_stress_table(filename=DEFAULT_STRESS_FILE) -> MaterialStressTable:
    """Load the bundled ASME II-D Table 1A subset."""
    table = MaterialStressTable.from_json(filename)
    logger.debug(f"Loaded allowable stress data for {len(table)} materials from {filename}")
    return table


if __name__ == "__main__":
    table = load_material_stress_table()
    for spec in table.materials():
        print(f"{spec:<20} {table.category_of(spec)}")
    print()
    for temperature in (200, 250, 700):
        result = table.stress_at('SA-516 Grade 70', temperature)
        print(f"SA-516 Grade 70 @ {temperature}°F: {result.allowable_stress:.0f} psi "
              f"(interpolated={result.interpolated}) {result.note or ''}")
