"""Recursive-descent parser for unit expressions.

Unit Grammar:
    ```
    ValidUnit := Unit
               | ""               # Dimensionless measurement
    Unit      := Term
               | ( Unit )         # Grouping
               | Unit ^ Integer   # Unit exponentiation
               | Unit / Unit      # Unit division
               | Unit · Unit      # Unit multiplication (· is center dot)
               | Unit " " Unit    # Unit multiplication (" " is whitespace)
    Term      := Prefix? Symbol
    Integer   := -128, ..., -1, 0, 1, ..., 127
    ```

Examples:
    * A newton: `N`, `kg m s^-2`, `kg·m/s^2`
    * A pascal: `Pa`, `N/m^2`, `kg·m^-1·s^-2`
    * A litre: `l`, `L`, `dm^3`

Notes:
    * The right-hand side of `/` is a complete Unit, so `a/b/c` reads as `a/(b/c)`.
      The SI leaves the associativity of division unspecified; parenthesize or use
      negative exponents for portable unit strings.
    * Each grouping, combinator and whitespace-separated term adds a level of recursion,
      so expressions deeper than the interpreter recursion limit (roughly a thousand
      terms by default) raise NestingDepthError.
    * A Term first tries a prefix followed by a symbol and falls back to a bare symbol
      from the same position, so `m` is the metre, `mm` the millimetre and `mol` the mole.

Every rule takes the text and a cursor position and returns the parsed value with the
new position. Failures raise a UnitParseError subclass carrying the position where the
failing rule stopped.
"""
from __future__ import annotations

import re
from typing import Optional, Tuple

from py_unitcalc.exceptions import (ExponentError, NestingDepthError, PrefixNotFoundError, RuneNotFoundError,
                                    SymbolNotFoundError, UnitParseError, UnparsedTextError)
from py_unitcalc.parsed_unit import DIMENSIONLESS, ParsedUnit
from py_unitcalc.tables import UnitTables, default_tables

__all__ = ('UnitParser', 'parse_unit', 'CENTER_DOT', 'EXPONENT_MIN', 'EXPONENT_MAX')

CENTER_DOT = '·'
EXPONENT_MIN = -128
EXPONENT_MAX = 127

_INTEGER_RE = re.compile(r'-?[0-9]+')


class UnitParser:
    """Parser bound to a set of lookup tables.

    The parser holds no per-call state, so one instance may be shared between threads.

    Examples:
        >>> parser = UnitParser(default_tables())
        >>> str(parser.parse('kg·m/s^2'))
        '10^3 L^1 M^1 T^-2'
    """

    def __init__(self, tables: UnitTables):
        self.tables: UnitTables = tables

    def parse(self, text: str) -> ParsedUnit:
        """Parse a complete unit expression.

        Empty text is dimensionless; whitespace-only text is not a unit.

        Raises:
            UnitParseError: If a rule fails or text remains after the expression.
        """
        if not text:
            return DIMENSIONLESS
        try:
            unit, pos = self.parse_unit(text, 0)
        except RecursionError as exc:
            raise NestingDepthError(text, 0) from exc
        pos, _ = self._skip_space(text, pos)
        if pos != len(text):
            raise UnparsedTextError(text, pos)
        return unit

    def parse_unit(self, text: str, pos: int) -> Tuple[ParsedUnit, int]:
        """Unit := ( Unit ) | Term, optionally followed by ^ Integer and one combinator."""
        pos, _ = self._skip_space(text, pos)

        if (after := self._accept(text, pos, '(')) is not None:
            unit, pos = self.parse_unit(text, after)
            pos = self._expect(text, pos, ')')
        else:
            unit, pos = self.parse_term(text, pos)

        pos, had_space = self._skip_space(text, pos)

        if text.startswith('^', pos):
            exponent, pos = self.parse_exponent(text, pos)
            unit = unit.exp(exponent)
            pos, had_space = self._skip_space(text, pos)

        if (after := self._accept(text, pos, '/')) is not None:
            right, pos = self.parse_unit(text, after)
            unit = unit.multiply(right.reciprocal())
        elif (after := self._accept(text, pos, CENTER_DOT)) is not None:
            right, pos = self.parse_unit(text, after)
            unit = unit.multiply(right)
        elif had_space:
            try:
                right, end = self.parse_unit(text, pos)
            except UnitParseError:
                # No unit after the whitespace; the caller decides whether the rest is an error
                pass
            else:
                unit = unit.multiply(right)
                pos = end

        return unit, pos

    def parse_term(self, text: str, start: int) -> Tuple[ParsedUnit, int]:
        """Term := Prefix? Symbol, retried as a bare Symbol when the prefixed form fails."""
        try:
            scale, pos = self.parse_prefix(text, start)
            template, pos = self.parse_symbol(text, pos)
        except UnitParseError:
            # Some symbols start with a prefix (m(illi) and m(eter)), so try Term := Symbol
            scale = 0
            template, pos = self.parse_symbol(text, start)
        return ParsedUnit(template.dims, template.dimless, template.scale + scale), pos

    def parse_prefix(self, text: str, pos: int) -> Tuple[int, int]:
        """Longest prefix at `pos`; returns its scale and the position after it."""
        entry = self.tables.match_prefix(text, pos)
        if entry is None:
            raise PrefixNotFoundError(text, pos)
        return entry.scale, pos + len(entry.key)

    def parse_symbol(self, text: str, pos: int) -> Tuple[ParsedUnit, int]:
        """Longest symbol at `pos`; returns its template and the position after it."""
        entry = self.tables.match_symbol(text, pos)
        if entry is None:
            raise SymbolNotFoundError(text, pos)
        return entry.unit, pos + len(entry.key)

    def parse_exponent(self, text: str, pos: int) -> Tuple[int, int]:
        """'^' Integer, where the integer fits in a signed byte."""
        pos = self._expect(text, pos, '^')
        match = _INTEGER_RE.match(text, pos)
        if match is None:
            raise ExponentError(text, pos)
        exponent = int(match.group())
        if not EXPONENT_MIN <= exponent <= EXPONENT_MAX:
            raise ExponentError(text, pos, f"exponent {exponent} out of range [{EXPONENT_MIN}, {EXPONENT_MAX}]")
        return exponent, match.end()

    @staticmethod
    def _accept(text: str, pos: int, rune: str) -> Optional[int]:
        if text.startswith(rune, pos):
            return pos + len(rune)
        return None

    def _expect(self, text: str, pos: int, rune: str) -> int:
        if (after := self._accept(text, pos, rune)) is None:
            raise RuneNotFoundError(text, pos, rune)
        return after

    @staticmethod
    def _skip_space(text: str, pos: int) -> Tuple[int, bool]:
        """Return the first non-space position at or after `pos` and whether any space was skipped."""
        end = pos
        while end < len(text) and text[end].isspace():
            end += 1
        return end, end != pos


def parse_unit(text: str, tables: Optional[UnitTables] = None) -> ParsedUnit:
    """Parse `text` with `tables`, or with the process-wide default tables.

    Raises:
        UnitParseError: If the text is not a valid unit expression.
    """
    return UnitParser(tables if tables is not None else default_tables()).parse(text)
