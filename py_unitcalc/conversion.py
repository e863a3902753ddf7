"""Measurement parsing and conversion.

The module-level functions use the process-wide default tables; a :class:`Converter`
binds the same operations to explicitly supplied tables.

Examples:
    >>> new("mm", parse(3.0, "m"))
    <Measure: 3000.0 mm (10^-3 L^1)>
    >>> new("mg/L", parse(3.0, "g"), reciprocal(parse(3.0, "ml"))).quantity()
    1000000.0
    >>> new("", parse(1.0, "g"), reciprocal(parse(2.0, "g"))).quantity()
    0.5
"""
from __future__ import annotations

import math
from typing import Optional

from deprecated import deprecated

from py_unitcalc.exceptions import (DivideByZeroError, UnitOverflowError, UnitUnderflowError,
                                    WrongDimensionError)
from py_unitcalc.logger import logger
from py_unitcalc.measurement import Measure, Measurement
from py_unitcalc.parser import UnitParser
from py_unitcalc.tables import UnitTables, default_tables

__all__ = ('Converter', 'parse', 'resolve', 'reciprocal', 'inverse', 'new')

# Largest power of ten representable as a float
_MAX_POW10 = 308


def _rescale(value: float, scale_diff: int) -> float:
    """Multiply `value` by 10^scale_diff without overflowing the power of ten itself."""
    if value == 0.0 or math.isinf(value) or math.isnan(value):
        return value
    if scale_diff >= 0:
        while scale_diff > _MAX_POW10:
            value *= 10.0 ** _MAX_POW10
            scale_diff -= _MAX_POW10
        return value * 10.0 ** scale_diff
    scale_diff = -scale_diff
    while scale_diff > _MAX_POW10:
        value /= 10.0 ** _MAX_POW10
        scale_diff -= _MAX_POW10
    return value / 10.0 ** scale_diff


class Converter:
    """Parsing and conversion of measurements over a fixed set of tables.

    Args:
        tables: Lookup tables; defaults to the process-wide tables at construction time.
    """

    def __init__(self, tables: Optional[UnitTables] = None):
        self.parser: UnitParser = UnitParser(tables if tables is not None else default_tables())

    @property
    def tables(self) -> UnitTables:
        return self.parser.tables

    def parse(self, quantity: float, unit_text: str) -> Measure:
        """Parse a quantity and unit into a measurement.

        Args:
            quantity: Measurement value.
            unit_text: Unit expression; empty text is dimensionless.

        Returns:
            Measure keeping `unit_text` verbatim.

        Raises:
            UnitParseError: If `unit_text` is not a valid unit expression.
        """
        return Measure(float(quantity), unit_text, self.parser.parse(unit_text))

    def resolve(self, m: Measurement) -> Measure:
        """Return `m` itself if already resolved, otherwise parse its quantity and unit."""
        if isinstance(m, Measure):
            return m
        return self.parse(m.quantity(), m.measurement_unit())

    def reciprocal(self, m: Measurement) -> Measure:
        """Return the reciprocal of a measurement, e.g. reciprocal(2 m/s) = 0.5 (m/s)^-1.

        The unit text of the result is the original text wrapped as ``(text)^-1``; use
        :meth:`new` to express it in a specific unit.

        Raises:
            DivideByZeroError: If the quantity is zero.
            UnitParseError: If `m` is unresolved and its unit does not parse.
        """
        m = self.resolve(m)
        if m.value == 0.0:
            raise DivideByZeroError(m.unit_text)
        unit_text = m.unit_text
        if unit_text:
            unit_text = f"({unit_text})^-1"
        return Measure(1.0 / m.value, unit_text, m.unit.reciprocal())

    @deprecated(reason="Use .reciprocal() instead of .inverse()", version="1.0.0")
    def inverse(self, m: Measurement) -> Measure:
        return self.reciprocal(m)

    def new(self, unit_text: str, first: Measurement, *rest: Measurement) -> Measure:
        """Multiply measurements together and express the product in `unit_text`.

        The unit of intermediate products is unspecified. Quantities are multiplied left
        to right, then rescaled by the difference between the accumulated and target scales.

        Args:
            unit_text: Target unit expression, returned verbatim in the result.
            first: First factor.
            *rest: Further factors.

        Returns:
            Measure in the target unit.

        Raises:
            UnitParseError: If the target or an unresolved factor does not parse.
            WrongDimensionError: If the product does not have the dimension of the target.
            UnitUnderflowError: If non-zero factors produce exactly zero.
            UnitOverflowError: If the result is not finite.
        """
        m = self.resolve(first)
        value = m.value
        unit = m.unit
        has_zero = value == 0.0
        for each in rest:
            m = self.resolve(each)
            value = value * m.value
            unit = unit.multiply(m.unit)
            has_zero = has_zero or m.value == 0.0

        target = self.parser.parse(unit_text)

        if not unit.is_compatible(target):
            logger.debug(f"Cannot convert [{unit}] to {unit_text!r} [{target}]")
            raise WrongDimensionError(unit.product(), target.product(), unit_text)

        scale_diff = unit.scale - target.scale
        value = _rescale(value, scale_diff)
        if value == 0.0 and not has_zero:
            raise UnitUnderflowError(unit_text, scale_diff)
        if math.isinf(value):
            raise UnitOverflowError(unit_text, scale_diff)

        return Measure(value, unit_text, target)


def parse(quantity: float, unit_text: str) -> Measure:
    """Parse a quantity and unit into a measurement using the default tables.

    See :meth:`Converter.parse`.
    """
    return Converter().parse(quantity, unit_text)


def resolve(m: Measurement) -> Measure:
    return Converter().resolve(m)


def reciprocal(m: Measurement) -> Measure:
    """Reciprocal of a measurement using the default tables.

    See :meth:`Converter.reciprocal`.
    """
    return Converter().reciprocal(m)


@deprecated(reason="Use reciprocal() instead of inverse()", version="1.0.0")
def inverse(m: Measurement) -> Measure:
    return reciprocal(m)


def new(unit_text: str, first: Measurement, *rest: Measurement) -> Measure:
    """Convert the product of measurements to `unit_text` using the default tables.

    See :meth:`Converter.new`.
    """
    return Converter().new(unit_text, first, *rest)
