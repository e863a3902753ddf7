"""Points in the 8-dimensional unit space.

Every unit expression resolves to a vector of integer exponents over the base
dimensions below. The vector is implemented as an immutable NamedTuple so it can be
shared freely between parsed units, tables and measurements.

Typical Usage:
    ```python
    from py_unitcalc.dimension import DimensionVector, BaseDimension

    newton = DimensionVector.from_mapping({'M': 1, 'L': 1, 'T': -2})
    hertz = DimensionVector.from_mapping({BaseDimension.TIME: -1})
    str(newton * 2 + hertz)  # 'L^2 M^2 T^-5'
    ```
"""
from __future__ import annotations

from enum import IntEnum
from typing import Mapping, NamedTuple, Union

from typing_extensions import Final, TypeAlias

__all__ = ('BaseDimension', 'DimensionVector', 'DIMENSION_LABELS', 'ZERO_CELSIUS_IN_KELVIN')

#: 0 °C in K
ZERO_CELSIUS_IN_KELVIN: Final[float] = 273.15


class BaseDimension(IntEnum):
    """Index of each base dimension inside a DimensionVector."""

    CURRENT = 0  # I: Electric current
    INTENSITY = 1  # J: Luminous intensity
    LENGTH = 2  # L
    MASS = 3  # M
    AMOUNT = 4  # N
    TIME = 5  # T
    TEMPERATURE = 6  # Θ: Absolute temperature
    TEMPERATURE_C = 7  # ΘC: Celsius temperature

    @property
    def label(self) -> str:
        return DIMENSION_LABELS[self]


DIMENSION_LABELS: Final = ("I", "J", "L", "M", "N", "T", "Θ", "ΘC")

DimensionKey: TypeAlias = Union[BaseDimension, int, str]


def _resolve_key(key: DimensionKey) -> BaseDimension:
    """Accept a BaseDimension, its index, its label ('L', 'ΘC') or its name ('length')."""
    if isinstance(key, str):
        if key in DIMENSION_LABELS:
            return BaseDimension(DIMENSION_LABELS.index(key))
        try:
            return BaseDimension[key.strip().upper()]
        except KeyError:
            raise KeyError(f"Unknown base dimension {key!r}") from None
    return BaseDimension(key)


class DimensionVector(NamedTuple):
    """Immutable exponent vector over the base dimensions.

    Attributes:
        current: Electric current exponent (I).
        intensity: Luminous intensity exponent (J).
        length: Length exponent (L).
        mass: Mass exponent (M).
        amount: Amount of substance exponent (N).
        time: Time exponent (T).
        temperature: Absolute temperature exponent (Θ).
        temperature_c: Celsius temperature exponent (ΘC).
    """

    current: int = 0
    intensity: int = 0
    length: int = 0
    mass: int = 0
    amount: int = 0
    time: int = 0
    temperature: int = 0
    temperature_c: int = 0

    @classmethod
    def from_mapping(cls, exponents: Mapping[DimensionKey, int]) -> DimensionVector:
        """Build a vector from a sparse mapping of dimension to exponent.

        Args:
            exponents: Keys are BaseDimension members, their indices, labels or names.

        Raises:
            KeyError: If a key does not name a base dimension.
        """
        components = [0] * len(BaseDimension)
        for key, exponent in exponents.items():
            components[_resolve_key(key)] = int(exponent)
        return cls(*components)

    def add(self, b: DimensionVector) -> DimensionVector:
        return DimensionVector(*(x + y for x, y in zip(self, b)))

    def subtract(self, b: DimensionVector) -> DimensionVector:
        return DimensionVector(*(x - y for x, y in zip(self, b)))

    def negate(self) -> DimensionVector:
        return DimensionVector(*(-x for x in self))

    def mul_by_const(self, a: int) -> DimensionVector:
        return DimensionVector(*(a * x for x in self))

    def is_dimensionless(self) -> bool:
        return not any(self)

    def __str__(self) -> str:
        """Diagnostic form listing the non-zero exponents, e.g. ``L^1 M^1 T^-2``."""
        return " ".join(f"{DIMENSION_LABELS[idx]}^{v}" for idx, v in enumerate(self) if v != 0)

    # Operator overloads
    def __add__(self, other: DimensionVector) -> DimensionVector:  # type: ignore[override]
        if not isinstance(other, DimensionVector):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: DimensionVector) -> DimensionVector:
        if not isinstance(other, DimensionVector):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other: int) -> DimensionVector:  # type: ignore[override]
        if isinstance(other, bool) or not isinstance(other, int):
            raise TypeError(other)
        return self.mul_by_const(other)

    def __rmul__(self, other: int) -> DimensionVector:  # type: ignore[override]
        return self.__mul__(other)

    def __neg__(self) -> DimensionVector:
        return self.negate()
