"""
ASME Section II Part D, Subpart 3 - External Pressure Charts
Factor A (geometric chart, indexed by L/Do) and Factor B (CS-1, indexed by Do/t)

Digitized points for carbon steel shells. Lookups interpolate linearly between
points and clamp to the first/last point outside the chart.
"""

from collections import namedtuple

ChartPoint = namedtuple('ChartPoint', ['ratio', 'factor'])

# L/Do -> Factor A
CS1_FACTOR_A_CHART = tuple(ChartPoint(ratio, factor) for ratio, factor in (
    (0.05, 0.0001), (0.10, 0.0002), (0.20, 0.0004), (0.30, 0.0006), (0.40, 0.0008),
    (0.50, 0.0010), (0.60, 0.0012), (0.70, 0.0014), (0.80, 0.0016), (0.90, 0.0018),
    (1.00, 0.0020), (1.20, 0.0024), (1.40, 0.0028), (1.60, 0.0032), (1.80, 0.0036),
    (2.00, 0.0040), (2.50, 0.0050), (3.00, 0.0060), (4.00, 0.0080), (5.00, 0.0100),
    (6.00, 0.0120), (8.00, 0.0160), (10.0, 0.0200), (15.0, 0.0300), (20.0, 0.0400),
    (30.0, 0.0600), (40.0, 0.0800), (50.0, 0.1000),
))

# Do/t -> Factor B (psi)
FACTOR_B_CHART = tuple(ChartPoint(ratio, factor) for ratio, factor in (
    (10, 5500), (20, 2750), (30, 1833), (40, 1375), (50, 1100),
    (60, 917), (70, 786), (80, 688), (90, 611), (100, 550),
    (120, 458), (140, 393), (160, 344), (180, 306), (200, 275),
    (250, 220), (300, 183), (400, 138), (500, 110), (600, 92),
    (800, 69), (1000, 55),
))
