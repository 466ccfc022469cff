"""
Input and result records for vessel component and nozzle evaluation

Inputs validate themselves on construction; results are produced by the
calculation modules and never modified afterwards.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .config import DEFAULT_E_PSI


class ComponentType(str, Enum):
    SHELL = 'shell'
    HEAD = 'head'


class HeadType(str, Enum):
    HEMISPHERICAL = 'hemispherical'
    ELLIPSOIDAL = 'ellipsoidal'
    TORISPHERICAL = 'torispherical'


class Status(str, Enum):
    ACCEPTABLE = 'acceptable'
    MONITORING = 'monitoring'
    CRITICAL = 'critical'


class GoverningCriterion(str, Enum):
    PRESSURE_DESIGN = 'pressure_design'
    PIPE_SCHEDULE = 'pipe_schedule'


class FailureKind(str, Enum):
    INVALID_GEOMETRY = 'invalid_geometry'
    UNKNOWN_MATERIAL = 'unknown_material'
    UNKNOWN_PIPE_SIZE = 'unknown_pipe_size'


def _parse_date(value) -> Optional[date]:
    if value is None or isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


@dataclass(frozen=True)
class LiquidService:
    """Liquid column above the component (static head)."""
    specific_gravity: float
    liquid_height_ft: float

    def __post_init__(self):
        if self.specific_gravity <= 0:
            raise ValueError(f"specific_gravity must be > 0, got {self.specific_gravity}")
        if self.liquid_height_ft < 0:
            raise ValueError(f"liquid_height_ft must be >= 0, got {self.liquid_height_ft}")


@dataclass(frozen=True)
class CorrosionHistory:
    """
    Corrosion data for one component.

    An explicit corrosion_rate_mpy is used as given; otherwise the rate is
    derived from previous_thickness and the two inspection dates.
    """
    corrosion_rate_mpy: Optional[float] = None
    previous_thickness: Optional[float] = None
    previous_inspection_date: Optional[date] = None
    current_inspection_date: Optional[date] = None

    def __post_init__(self):
        if self.corrosion_rate_mpy is not None and self.corrosion_rate_mpy < 0:
            raise ValueError(f"corrosion_rate_mpy must be >= 0, got {self.corrosion_rate_mpy}")
        object.__setattr__(self, 'previous_inspection_date', _parse_date(self.previous_inspection_date))
        object.__setattr__(self, 'current_inspection_date', _parse_date(self.current_inspection_date))


@dataclass(frozen=True)
class ExternalPressureSpec:
    """Shell external pressure check (UG-28). design_length is the unsupported length L."""
    design_length: float
    elastic_modulus: float = DEFAULT_E_PSI

    def __post_init__(self):
        if self.design_length <= 0:
            raise ValueError(f"design_length must be > 0, got {self.design_length}")


@dataclass(frozen=True)
class ComponentInput:
    """One vessel component (shell or head) to evaluate."""
    name: str
    component_type: ComponentType
    design_pressure: float          # psi
    design_temperature: float       # °F
    inside_diameter: float          # in
    material_spec: str
    nominal_thickness: float        # in
    actual_thickness: float         # in, minimum measured reading
    corrosion_allowance: float = 0.0
    joint_efficiency: float = 1.0
    head_type: Optional[HeadType] = None
    knuckle_radius: Optional[float] = None
    crown_radius: Optional[float] = None
    liquid_service: Optional[LiquidService] = None
    corrosion: Optional[CorrosionHistory] = None
    external_pressure: Optional[ExternalPressureSpec] = None

    def __post_init__(self):
        object.__setattr__(self, 'component_type', ComponentType(self.component_type))
        if self.head_type is not None:
            object.__setattr__(self, 'head_type', HeadType(self.head_type))

        if self.design_pressure <= 0:
            raise ValueError(f"{self.name}: design_pressure must be > 0")
        if self.inside_diameter <= 0:
            raise ValueError(f"{self.name}: inside_diameter must be > 0")
        if self.nominal_thickness <= 0 or self.actual_thickness <= 0:
            raise ValueError(f"{self.name}: thicknesses must be > 0")
        if self.corrosion_allowance < 0:
            raise ValueError(f"{self.name}: corrosion_allowance must be >= 0")
        if not 0 < self.joint_efficiency <= 1.0:
            raise ValueError(f"{self.name}: joint_efficiency must be in (0, 1], got {self.joint_efficiency}")

        if self.component_type is ComponentType.HEAD:
            if self.head_type is None:
                raise ValueError(f"{self.name}: head components need a head_type")
            if self.external_pressure is not None:
                raise ValueError(f"{self.name}: external pressure check applies to shells only")
        elif self.head_type is not None:
            raise ValueError(f"{self.name}: head_type given for a shell")

        for attr in ('knuckle_radius', 'crown_radius'):
            value = getattr(self, attr)
            if value is not None:
                if self.head_type is not HeadType.TORISPHERICAL:
                    raise ValueError(f"{self.name}: {attr} applies to torispherical heads only")
                if value <= 0:
                    raise ValueError(f"{self.name}: {attr} must be > 0")

    @property
    def inside_radius(self) -> float:
        return self.inside_diameter / 2

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ComponentInput':
        """Build from a plain dict (JSON record); nested blocks may be dicts."""
        data = dict(data)
        if data.get('liquid_service') is not None:
            data['liquid_service'] = LiquidService(**data['liquid_service'])
        if data.get('corrosion') is not None:
            data['corrosion'] = CorrosionHistory(**data['corrosion'])
        if data.get('external_pressure') is not None:
            data['external_pressure'] = ExternalPressureSpec(**data['external_pressure'])
        return cls(**data)


@dataclass(frozen=True)
class ComponentResult:
    """Evaluation of one component. Echoes the key inputs."""
    name: str
    component_type: ComponentType
    head_type: Optional[HeadType]
    material_spec: str
    design_pressure: float
    design_temperature: float
    inside_diameter: float
    nominal_thickness: float
    actual_thickness: float
    corrosion_allowance: float
    joint_efficiency: float
    allowable_stress: float
    stress_interpolated: bool
    stress_note: Optional[str]
    static_head_pressure: Optional[float]
    total_design_pressure: Optional[float]
    minimum_required_thickness: float
    mawp: float
    mawp_at_top: Optional[float]
    external_mawp: Optional[float]
    hydrotest_pressure: float
    corrosion_rate: float               # mpy
    remaining_life: float               # years, inf when unlimited
    remaining_life_unlimited: bool
    next_inspection_date: date
    status: Status
    status_reason: str
    thickness_formula: str = ''
    mawp_formula: str = ''


@dataclass(frozen=True)
class CalculationFailure:
    """A typed, non-exceptional failure returned by an evaluation entry point."""
    name: str
    kind: FailureKind
    message: str


@dataclass(frozen=True)
class NozzleInput:
    """A nozzle on a vessel, evaluated at the vessel design conditions."""
    name: str
    nominal_size: str
    schedule: str
    actual_thickness: float
    design_pressure: float
    design_temperature: float
    material_spec: str
    corrosion_allowance: float = 0.0
    previous_thickness: Optional[float] = None
    years_between_readings: Optional[float] = None

    def __post_init__(self):
        object.__setattr__(self, 'nominal_size', str(self.nominal_size))
        object.__setattr__(self, 'schedule', str(self.schedule))
        if self.actual_thickness <= 0:
            raise ValueError(f"{self.name}: actual_thickness must be > 0")
        if self.design_pressure <= 0:
            raise ValueError(f"{self.name}: design_pressure must be > 0")
        if self.corrosion_allowance < 0:
            raise ValueError(f"{self.name}: corrosion_allowance must be >= 0")

    @classmethod
    def from_dict(cls, data: Dict[str, Any], **defaults) -> 'NozzleInput':
        """Build from a JSON record; defaults supply vessel-level fields the record omits."""
        merged = dict(defaults)
        merged.update(data)
        return cls(**merged)


@dataclass(frozen=True)
class NozzleEvaluation:
    """Nozzle wall check against UG-27 pressure design and pipe schedule."""
    name: str
    nominal_size: str
    schedule: str
    outside_diameter: float
    wall_thickness: float
    inside_diameter: float
    inside_radius: float
    allowable_stress: float
    joint_efficiency: float
    required_thickness: float
    pipe_minus_tolerance: float
    minimum_required: float
    governing_criterion: GoverningCriterion
    actual_thickness: float
    acceptable: bool
    ug45_minimum: float
    remaining_life: Optional[float] = None
    remaining_life_unlimited: bool = False
    notes: Tuple[str, ...] = ()
