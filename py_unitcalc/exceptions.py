"""py_unitcalc exception types.

Exception Hierarchy
-------------------

Exception (built-in Python)
├── ValueError
│   ├── TableConfigError
│   └── UnitParseError
│       ├── SymbolNotFoundError
│       ├── PrefixNotFoundError
│       ├── RuneNotFoundError
│       ├── ExponentError
│       ├── UnparsedTextError
│       └── NestingDepthError
└── ArithmeticError
    └── ConversionError
        ├── DivideByZeroError
        ├── WrongDimensionError
        ├── UnitUnderflowError
        └── UnitOverflowError

Exception Types
---------------

Table-Related Exceptions:

- TableConfigError: Raised while building the symbol or prefix tables when the same key is
  registered twice, or when an extra table entry is malformed. It is a configuration error
  surfaced at startup, never during a parse.

Parse-Related Exceptions:

- UnitParseError: Base class for all grammar failures. Contains:
  - text: The complete unit text being parsed
  - position: Cursor offset (in characters) at which parsing stopped
  - consumed / remainder: The text before and after that position
  - reason: Short description of the failing rule

- NestingDepthError: Raised when an expression nests or chains more terms than the
  interpreter recursion limit allows.

Conversion-Related Exceptions:

- DivideByZeroError: Raised when the reciprocal of a zero-valued measurement is requested.
- WrongDimensionError: Raised when the combined measurements do not have the dimension of
  the target unit. Contains the `source` and `target` dimension vectors.
- UnitUnderflowError: Raised when rescaling turned non-zero inputs into exactly zero.
- UnitOverflowError: Raised when the rescaled value is no longer finite.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from py_unitcalc.dimension import DimensionVector

__all__ = (
    'TableConfigError',
    'UnitParseError',
    'SymbolNotFoundError',
    'PrefixNotFoundError',
    'RuneNotFoundError',
    'ExponentError',
    'UnparsedTextError',
    'NestingDepthError',
    'ConversionError',
    'DivideByZeroError',
    'WrongDimensionError',
    'UnitUnderflowError',
    'UnitOverflowError',
)


class TableConfigError(ValueError):
    """Symbol or prefix table configuration error."""


class UnitParseError(ValueError):
    """Unit expression could not be parsed.

    The message reports the consumed part of the text and the remainder, e.g.
    ``parse failed at: 'kg' . ' )': unparsed text``.
    """

    reason: str = "parse error"

    def __init__(self, text: str, position: int, reason: str = ""):
        self.text: str = text
        self.position: int = position
        if reason:
            self.reason = reason
        super().__init__(f"parse failed at: {self.consumed!r} . {self.remainder!r}: {self.reason}")

    @property
    def consumed(self) -> str:
        return self.text[:self.position]

    @property
    def remainder(self) -> str:
        return self.text[self.position:]


class SymbolNotFoundError(UnitParseError):
    """No unit symbol matches at the cursor."""

    reason = "symbol not found"


class PrefixNotFoundError(UnitParseError):
    """No metric prefix matches at the cursor."""

    reason = "prefix not found"


class RuneNotFoundError(UnitParseError):
    """An expected structural character is missing."""

    def __init__(self, text: str, position: int, rune: str):
        self.rune: str = rune
        super().__init__(text, position, f"{rune!r} not found")


class ExponentError(UnitParseError):
    """'^' is not followed by an integer in the signed 8-bit range."""

    reason = "invalid exponent"


class UnparsedTextError(UnitParseError):
    """Text remains after the complete unit expression."""

    reason = "unparsed text"


class NestingDepthError(UnitParseError):
    """Expression exceeds the recursion depth of the parser."""

    reason = "expression nested too deeply"


class ConversionError(ArithmeticError):
    """Measurement arithmetic error."""


class DivideByZeroError(ConversionError, ZeroDivisionError):
    """Reciprocal of a zero quantity."""

    def __init__(self, unit_text: str = ""):
        self.unit_text: str = unit_text
        super().__init__(f"divide by zero: reciprocal of 0 {unit_text}".rstrip())


class WrongDimensionError(ConversionError):
    """Exception for measurements that cannot be expressed in the target unit.

    Contains:
    - The dimension vector of the combined measurements
    - The dimension vector of the target unit
    """

    def __init__(self, source: DimensionVector, target: DimensionVector, unit_text: str = ""):
        self.source: DimensionVector = source
        self.target: DimensionVector = target
        self.unit_text: str = unit_text
        msg = f"wrong dimension: [{source}] is not [{target}]"
        if unit_text:
            msg += f" of {unit_text!r}"
        super().__init__(msg)


class UnitUnderflowError(ConversionError):
    """Non-zero measurements became zero after rescaling."""

    def __init__(self, unit_text: str, scale_diff: int):
        self.unit_text: str = unit_text
        self.scale_diff: int = scale_diff
        super().__init__(f"underflow: value lost converting to {unit_text!r} (scale 10^{scale_diff})")


class UnitOverflowError(ConversionError, OverflowError):
    """Rescaled value is too large to represent."""

    def __init__(self, unit_text: str, scale_diff: int):
        self.unit_text: str = unit_text
        self.scale_diff: int = scale_diff
        super().__init__(f"overflow: value too large converting to {unit_text!r} (scale 10^{scale_diff})")
