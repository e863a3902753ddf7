"""Symbol and prefix lookup tables.

Both tables are immutable once built and sorted by descending key length, then by key,
so a scan in table order always meets the longest matching key first. Registering the
same key twice is a configuration error raised by :func:`build_tables`.

Built-in symbols:
    * Base dimensions: `m`, `g`, `s`, `A`, `K`, `mol`, `cd`
    * Derived units: `rad`, `sr`, `Hz`, `N`, `Pa`, `J`, `W`, `C`, `V`, `F`, `Ω`, `S`,
      `Wb`, `T`, `H`, `°C`, `℃`, `lm`, `lx`, `Bq`, `Gy`, `Sv`, `kat`
    * Non-SI units: `l`, `L`, `Da`

Built-in prefixes:
    * `da` `h` `k` `M` `G` `T` `P` `E` `Z` `Y` for 10^1 ... 10^24
    * `d` `c` `m` `μ` `u` `n` `p` `f` `a` `z` `y` for 10^-1 ... 10^-24

Note:
    `C` is the coulomb; `°C` and `℃` are degrees Celsius.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, NamedTuple, Optional, Tuple, Union

from typing_extensions import TypeAlias

from py_unitcalc.dimension import DimensionVector
from py_unitcalc.exceptions import TableConfigError
from py_unitcalc.logger import logger
from py_unitcalc.parsed_unit import ParsedUnit

__all__ = (
    'KeyedUnit',
    'KeyedScale',
    'UnitTables',
    'DEFAULT_SYMBOLS',
    'DEFAULT_PREFIXES',
    'build_tables',
    'symbol_from_config',
    'default_tables',
    'set_default_tables',
)


class KeyedUnit(NamedTuple):
    """Symbol table entry: unit symbol and its parsed unit template."""

    key: str
    unit: ParsedUnit


class KeyedScale(NamedTuple):
    """Prefix table entry: prefix text and its power of ten."""

    key: str
    scale: int


SymbolsType: TypeAlias = Union[Mapping[str, ParsedUnit], Iterable[Tuple[str, ParsedUnit]]]
PrefixesType: TypeAlias = Union[Mapping[str, int], Iterable[Tuple[str, int]]]


def _unit(dims: Optional[Mapping[str, int]] = None, scale: int = 0, *dimless: Mapping[str, int]) -> ParsedUnit:
    return ParsedUnit(DimensionVector.from_mapping(dims or {}),
                      tuple(DimensionVector.from_mapping(d) for d in dimless),
                      scale)


# --8<-- [start:DEFAULT_SYMBOLS]
DEFAULT_SYMBOLS: Tuple[KeyedUnit, ...] = (
    KeyedUnit("m", _unit({'L': 1})),
    KeyedUnit("g", _unit({'M': 1})),
    KeyedUnit("s", _unit({'T': 1})),
    KeyedUnit("A", _unit({'I': 1})),
    KeyedUnit("K", _unit({'Θ': 1})),
    KeyedUnit("mol", _unit({'N': 1})),
    KeyedUnit("cd", _unit({'J': 1})),

    KeyedUnit("rad", _unit(None, 0, {'L': 1}, {'L': -1})),
    KeyedUnit("sr", _unit(None, 0, {'L': 2}, {'L': -2})),
    KeyedUnit("Hz", _unit({'T': -1})),
    KeyedUnit("N", _unit({'M': 1, 'L': 1, 'T': -2}, 3)),
    KeyedUnit("Pa", _unit({'M': 1, 'L': -1, 'T': -2}, 3)),
    KeyedUnit("J", _unit({'M': 1, 'L': 2, 'T': -2}, 3)),
    KeyedUnit("W", _unit({'M': 1, 'L': 2, 'T': -3}, 3)),
    KeyedUnit("C", _unit({'T': 1, 'I': 1})),
    KeyedUnit("V", _unit({'M': 1, 'L': 2, 'T': -3, 'I': -1}, 3)),
    KeyedUnit("F", _unit({'M': -1, 'L': -2, 'T': 4, 'I': 2}, -3)),
    KeyedUnit("Ω", _unit({'M': 1, 'L': 2, 'T': -3, 'I': -2}, 3)),
    KeyedUnit("S", _unit({'M': -1, 'L': -2, 'T': 3, 'I': 2}, -3)),
    KeyedUnit("Wb", _unit({'M': 1, 'L': 2, 'T': -2, 'I': -1}, 3)),
    KeyedUnit("T", _unit({'M': 1, 'T': -2, 'I': -1}, 3)),
    KeyedUnit("H", _unit({'M': 1, 'L': 2, 'T': -2, 'I': -2}, 3)),
    KeyedUnit("°C", _unit({'ΘC': 1})),
    KeyedUnit("℃", _unit({'ΘC': 1})),
    KeyedUnit("lm", _unit({'J': 1}, 0, {'L': 2}, {'L': -2})),
    KeyedUnit("lx", _unit({'L': -2, 'J': 1})),
    KeyedUnit("Bq", _unit({'T': -1})),
    KeyedUnit("Gy", _unit({'L': 2, 'T': -2})),
    KeyedUnit("Sv", _unit({'L': 2, 'T': -2})),
    KeyedUnit("kat", _unit({'N': 1, 'T': -1})),

    KeyedUnit("l", _unit({'L': 3}, -3)),
    KeyedUnit("L", _unit({'L': 3}, -3)),
    KeyedUnit("Da", _unit({'M': 1, 'N': -1})),
)
# --8<-- [end:DEFAULT_SYMBOLS]

# --8<-- [start:DEFAULT_PREFIXES]
DEFAULT_PREFIXES: Tuple[KeyedScale, ...] = (
    KeyedScale("da", 1),
    KeyedScale("h", 2),
    KeyedScale("k", 3),
    KeyedScale("M", 6),
    KeyedScale("G", 9),
    KeyedScale("T", 12),
    KeyedScale("P", 15),
    KeyedScale("E", 18),
    KeyedScale("Z", 21),
    KeyedScale("Y", 24),

    KeyedScale("d", -1),
    KeyedScale("c", -2),
    KeyedScale("m", -3),
    KeyedScale("μ", -6),
    KeyedScale("u", -6),
    KeyedScale("n", -9),
    KeyedScale("p", -12),
    KeyedScale("f", -15),
    KeyedScale("a", -18),
    KeyedScale("z", -21),
    KeyedScale("y", -24),
)
# --8<-- [end:DEFAULT_PREFIXES]


def _long_first(key: str) -> Tuple[int, str]:
    """Sort longer keys before shorter ones so the longest match is found first."""
    return -len(key), key


def _check_unique(kind: str, keys: Iterable[str]) -> None:
    seen = set()
    for key in keys:
        if not key:
            raise TableConfigError(f"empty {kind} key")
        if key in seen:
            raise TableConfigError(f"duplicate {kind} key {key!r}")
        seen.add(key)


def _as_pairs(entries: Union[Mapping[str, Any], Iterable[Tuple[str, Any]], None]) -> Tuple[Tuple[str, Any], ...]:
    if entries is None:
        return ()
    if isinstance(entries, Mapping):
        return tuple(entries.items())
    return tuple((key, value) for key, value in entries)


@dataclass(frozen=True)
class UnitTables:
    """Immutable symbol and prefix tables in longest-key-first order.

    Instances are normally obtained from :func:`build_tables`, which validates the keys.
    """

    symbols: Tuple[KeyedUnit, ...]
    prefixes: Tuple[KeyedScale, ...]

    def match_prefix(self, text: str, pos: int) -> Optional[KeyedScale]:
        """Return the longest prefix starting at ``pos`` or None."""
        for entry in self.prefixes:
            if text.startswith(entry.key, pos):
                return entry
        return None

    def match_symbol(self, text: str, pos: int) -> Optional[KeyedUnit]:
        """Return the longest symbol starting at ``pos`` or None."""
        for entry in self.symbols:
            if text.startswith(entry.key, pos):
                return entry
        return None

    def symbol(self, key: str) -> ParsedUnit:
        """Exact lookup of a symbol template.

        Raises:
            KeyError: If no symbol has this key.
        """
        for entry in self.symbols:
            if entry.key == key:
                return entry.unit
        raise KeyError(key)

    def prefix(self, key: str) -> int:
        """Exact lookup of a prefix scale.

        Raises:
            KeyError: If no prefix has this key.
        """
        for entry in self.prefixes:
            if entry.key == key:
                return entry.scale
        raise KeyError(key)


def build_tables(extra_symbols: Optional[SymbolsType] = None,
                 extra_prefixes: Optional[PrefixesType] = None, *,
                 symbols: SymbolsType = DEFAULT_SYMBOLS,
                 prefixes: PrefixesType = DEFAULT_PREFIXES) -> UnitTables:
    """Build validated, sorted lookup tables.

    Args:
        extra_symbols: Symbols registered in addition to `symbols`.
        extra_prefixes: Prefixes registered in addition to `prefixes`.
        symbols: Base symbol entries. Defaults to the built-in SI symbols.
        prefixes: Base prefix entries. Defaults to the built-in metric prefixes.

    Returns:
        UnitTables ready to be shared between parsers.

    Raises:
        TableConfigError: If a key is empty or registered twice.
    """
    symbol_pairs = _as_pairs(symbols) + _as_pairs(extra_symbols)
    prefix_pairs = _as_pairs(prefixes) + _as_pairs(extra_prefixes)

    _check_unique("symbol", (key for key, _ in symbol_pairs))
    _check_unique("prefix", (key for key, _ in prefix_pairs))

    for key, unit in symbol_pairs:
        if not isinstance(unit, ParsedUnit):
            raise TableConfigError(f"symbol {key!r} must map to a ParsedUnit, got {type(unit).__name__}")
    for key, scale in prefix_pairs:
        if isinstance(scale, bool) or not isinstance(scale, int):
            raise TableConfigError(f"prefix {key!r} must map to an integer scale, got {scale!r}")

    tables = UnitTables(
        symbols=tuple(sorted((KeyedUnit(k, u) for k, u in symbol_pairs), key=lambda e: _long_first(e.key))),
        prefixes=tuple(sorted((KeyedScale(k, s) for k, s in prefix_pairs), key=lambda e: _long_first(e.key))),
    )
    logger.debug(f"Built unit tables: {len(tables.symbols)} symbols, {len(tables.prefixes)} prefixes")
    return tables


def symbol_from_config(key: str, value: Mapping[str, Any]) -> ParsedUnit:
    """Create a symbol template from a configuration table.

    The table has the form ``{dims = {L = 1, T = -1}, scale = 0, dimless = [{L = 1}, {L = -1}]}``;
    every field is optional.

    Raises:
        TableConfigError: If the entry is malformed.
    """
    if not isinstance(value, Mapping):
        raise TableConfigError(f"symbol {key!r} must be a table, got {value!r}")
    unknown = set(value) - {'dims', 'scale', 'dimless'}
    if unknown:
        raise TableConfigError(f"symbol {key!r} has unknown fields {sorted(unknown)}")
    scale = value.get('scale', 0)
    if isinstance(scale, bool) or not isinstance(scale, int):
        raise TableConfigError(f"symbol {key!r} scale must be an integer, got {scale!r}")
    try:
        return ParsedUnit(DimensionVector.from_mapping(value.get('dims', {})),
                          tuple(DimensionVector.from_mapping(d) for d in value.get('dimless', ())),
                          scale)
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise TableConfigError(f"symbol {key!r} is malformed: {exc}") from exc


_default_tables: Optional[UnitTables] = None


def default_tables() -> UnitTables:
    """Return the process-wide tables, building the built-in ones on first use."""
    global _default_tables
    if _default_tables is None:
        _default_tables = build_tables()
    return _default_tables


def set_default_tables(tables: UnitTables) -> None:
    """Install `tables` as the process-wide default (used by ``basicConfig``)."""
    global _default_tables
    _default_tables = tables
