"""Measurement values.

Anything that exposes ``quantity()`` and ``measurement_unit()`` satisfies the
:class:`Measurement` protocol and is accepted by the conversion functions. Two concrete
variants are provided:

* :class:`Measure` - a resolved measurement produced by ``parse``, ``reciprocal`` and
  ``new``; it carries the ParsedUnit of its unit text.
* :class:`RawMeasurement` - a plain value/unit pair, e.g. decoded from JSON or supplied by
  an embedding host. It is parsed once when passed to a conversion function.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple, Protocol, runtime_checkable

from py_unitcalc.parsed_unit import ParsedUnit

__all__ = ('Measurement', 'Measure', 'RawMeasurement')


@runtime_checkable
class Measurement(Protocol):
    def quantity(self) -> float: ...

    def measurement_unit(self) -> str: ...


@dataclass(frozen=True)
class Measure:
    """Resolved measurement: quantity, unit text as given, and its parsed unit.

    Attributes:
        value: Quantity value.
        unit_text: Unit text exactly as supplied to ``parse`` or ``new``.
        unit: Parsed unit of `unit_text`, as produced by the parser. Build measures with
            ``parse`` rather than directly so the two cannot disagree.
    """

    value: float
    unit_text: str
    unit: ParsedUnit = field(compare=False)

    def quantity(self) -> float:
        return self.value

    def measurement_unit(self) -> str:
        return self.unit_text

    def __float__(self) -> float:
        return float(self.value)

    def __str__(self) -> str:
        if self.unit_text:
            return f"{self.value} {self.unit_text}"
        return f"{self.value}"

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {self} ({self.unit})>"


class RawMeasurement(NamedTuple):
    """Unresolved value/unit pair."""

    value: float
    unit: str = ""

    def quantity(self) -> float:
        return self.value

    def measurement_unit(self) -> str:
        return self.unit
