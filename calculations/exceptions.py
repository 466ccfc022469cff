"""
Exceptions raised by the calculation formulas.

Formula functions raise these; the public evaluation entry points catch them
and return a CalculationFailure instead.
"""


class CalculationError(Exception):
    """Base exception for calculation errors."""


class InvalidGeometryError(CalculationError):
    """A thickness or MAWP formula has a non-positive denominator or wall."""

    def __init__(self, formula, value, message=None):
        self.formula = formula
        self.value = value
        super().__init__(message or f"{formula}: non-positive term ({value:.6g})")
