"""
Engineering constants and inspection policy

Values that the code paragraphs fix (ASME VIII-1, API 510, API 579-1) live here
so formulas receive them as named constants or through InspectionPolicy.
"""

from dataclasses import dataclass

# ── Pressure ─────────────────────────────────────────────────────────────
# Hydrostatic gradient of water, psi per foot of liquid height
WATER_PSI_PER_FT = 0.433

# UG-99(b) hydrostatic test factor
HYDROTEST_FACTOR = 1.3

# ── Geometry ─────────────────────────────────────────────────────────────
# Flanged-and-dished head: knuckle radius as a fraction of inside diameter
DEFAULT_KNUCKLE_RATIO = 0.06

# Modulus of elasticity for carbon steel (psi), external pressure Pa2
DEFAULT_E_PSI = 29.0e6

# ── Nozzles ──────────────────────────────────────────────────────────────
# Seamless pipe, UG-27 with E = 1.0
NOZZLE_JOINT_EFFICIENCY = 1.0

# Pipe mill under-tolerance (12.5%)
MILL_TOLERANCE = 0.125

# ── Time ─────────────────────────────────────────────────────────────────
DAYS_PER_YEAR = 365.25

# ── Status ───────────────────────────────────────────────────────────────
# Monitoring band above tmin, as a fraction of corrosion allowance
MONITORING_CA_FRACTION = 0.5

# ── API 579-1 Level 1 ────────────────────────────────────────────────────
FFS_URGENT_LIFE_YEARS = 2.0
FFS_MONITOR_LIFE_YEARS = 5.0
FFS_SHORT_INTERVAL_YEARS = 1.0
FFS_PRESSURE_MARGIN = 0.9
LTA_MAX_CIRCUMFERENTIAL_DEGREES = 180.0

# ── API 510 6.4 in-lieu-of internal inspection ───────────────────────────
IN_LIEU_OF_DEFAULT_INTERVAL_YEARS = 10
IN_LIEU_OF_MARGIN_INTERVALS = (
    # (minimum design margin %, interval years), checked in order
    (50.0, 15),
    (25.0, 12),
)
IN_LIEU_OF_LOW_MARGIN = 10.0
IN_LIEU_OF_LOW_MARGIN_INTERVAL_YEARS = 8
IN_LIEU_OF_SHORT_SERVICE_YEARS = 5
IN_LIEU_OF_LONG_SERVICE_YEARS = 20


@dataclass(frozen=True)
class InspectionPolicy:
    """
    Inspection interval policy (API 510 half-life rule).

    max_interval_years caps the half-life interval; unlimited_life_horizon_years
    is the interval used when no metal loss is measured.
    """
    max_interval_years: float = 10.0
    unlimited_life_horizon_years: float = 10.0


DEFAULT_POLICY = InspectionPolicy()
