"""Parsed unit descriptors and their algebra.

A ParsedUnit is the resolved meaning of one unit expression: a dimension vector, the
dimensionless factors that were kept unfolded (``rad`` is length over length), and a
power-of-ten scale relative to the table reference unit. Mass is referenced to the
gram, so ``kg`` and ``N`` both carry scale 3.

Multiplication, reciprocal and exponentiation fold the dimensionless factors eagerly,
so only table templates ever carry them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from deprecated import deprecated

from py_unitcalc.dimension import DimensionVector

__all__ = ('ParsedUnit', 'DIMENSIONLESS')


@dataclass(frozen=True)
class ParsedUnit:
    """Dimension vector, pending dimensionless factors and scale exponent of a unit.

    Attributes:
        dims: Dimension vector of the unit.
        dimless: Unnormalized factors whose product should be one, e.g. L^1 and L^-1 for ``rad``.
        scale: Power of ten relating the unit to its table reference.
    """

    dims: DimensionVector = field(default_factory=DimensionVector)
    dimless: Tuple[DimensionVector, ...] = ()
    scale: int = 0

    def product(self) -> DimensionVector:
        """Fold all dimensionless factors into the dimension vector."""
        result = self.dims
        for factor in self.dimless:
            result = result + factor
        return result

    def multiply(self, other: ParsedUnit) -> ParsedUnit:
        return ParsedUnit(self.product() + other.product(), scale=self.scale + other.scale)

    def reciprocal(self) -> ParsedUnit:
        return ParsedUnit(-self.product(), scale=-self.scale)

    def exp(self, e: int) -> ParsedUnit:
        return ParsedUnit(self.product() * e, scale=e * self.scale)

    @deprecated(reason="Use .reciprocal() instead of .inverse()", version="1.0.0")
    def inverse(self) -> ParsedUnit:
        return self.reciprocal()

    def is_compatible(self, other: ParsedUnit) -> bool:
        """Units are compatible when their folded dimension vectors are equal; scale is ignored."""
        return self.product() == other.product()

    def __mul__(self, other: ParsedUnit) -> ParsedUnit:
        if not isinstance(other, ParsedUnit):
            return NotImplemented
        return self.multiply(other)

    def __truediv__(self, other: ParsedUnit) -> ParsedUnit:
        if not isinstance(other, ParsedUnit):
            return NotImplemented
        return self.multiply(other.reciprocal())

    def __pow__(self, e: int) -> ParsedUnit:
        return self.exp(e)

    def __str__(self) -> str:
        dims = str(self.product()) or "1"
        if self.scale:
            return f"10^{self.scale} {dims}"
        return dims


DIMENSIONLESS = ParsedUnit()
