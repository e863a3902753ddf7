"""Dimensional analysis and conversion of SI measurements."""

import importlib.metadata

__version__ = importlib.metadata.version("py_unitcalc")

# Standard library imports
import logging
import os
import sys
from typing import Any, Mapping

# Third-party imports
from typing_extensions import Dict, Optional

# Local imports
from .logger import logger as log
from .tables import build_tables, set_default_tables, symbol_from_config
from .exceptions import TableConfigError

if sys.version_info[:2] < (3, 11):
    import tomli as tomllib
else:
    import tomllib


def _find_pyuc_toml(start_dir: Optional[str] = None) -> Optional[str]:
    """Search for .pyuc.toml or pyuc.toml from `start_dir` (default: cwd) up to the filesystem root.

    Returns:
        The absolute path to the configuration file if found, otherwise None.
    """
    current_dir = os.path.abspath(start_dir or os.getcwd())
    while True:
        for name in ('.pyuc.toml', 'pyuc.toml'):
            path = os.path.join(current_dir, name)
            if os.path.exists(path):
                return path

        parent_dir = os.path.dirname(current_dir)
        if parent_dir == current_dir:
            return None
        current_dir = parent_dir


def _apply_config(pyuc: Mapping[str, Any]) -> None:
    """Apply a `[pyuc]` configuration section.

    Raises:
        TableConfigError: If the extra symbols or prefixes are malformed or duplicate built-ins.
    """
    if log_level := pyuc.get('log_level'):
        level = logging.getLevelName(str(log_level).upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level {log_level!r}")
        log.setLevel(level)

    symbols = pyuc.get('symbols', {})
    prefixes = pyuc.get('prefixes', {})
    if not isinstance(symbols, Mapping) or not isinstance(prefixes, Mapping):
        raise TableConfigError("`pyuc.symbols` and `pyuc.prefixes` must be tables")
    extra_symbols = {key: symbol_from_config(key, value) for key, value in symbols.items()}
    set_default_tables(build_tables(extra_symbols, prefixes))


def _load_config(filepath: Optional[str] = None, suppress_warnings: bool = False) -> None:
    """Load configuration from a .pyuc.toml file.

    Args:
        filepath: Path to configuration file. If None, searches for .pyuc.toml or pyuc.toml
        suppress_warnings: If True, suppress warning messages
    """
    if filepath is None:
        filepath = _find_pyuc_toml()

    if filepath is None:
        set_default_tables(build_tables())
    else:
        log.debug(f"Found {os.path.basename(filepath)} at {os.path.dirname(filepath)}")

        with open(filepath, "rb") as fp:
            _config = tomllib.load(fp)

        if (_pyuc := _config.get('pyuc')) is not None:
            _apply_config(_pyuc)
        else:
            if not suppress_warnings:
                log.warning("Config has no `pyuc` section")
            set_default_tables(build_tables())

    log.debug("Unit tables load success")


def _basic_config(filename: Optional[str] = None,
                  extra_symbols: Optional[Dict[str, Any]] = None,
                  extra_prefixes: Optional[Dict[str, int]] = None,
                  suppress_warnings: bool = False) -> None:
    """Build the default unit tables from a config file or from explicit extras.

    Args:
        filename: Configuration file path
        extra_symbols: Symbols added to the built-in table, as ParsedUnit or config tables
        extra_prefixes: Prefixes added to the built-in table
        suppress_warnings: If True, suppress warning messages

    Raises:
        ValueError: If both filename and extras are provided
        TableConfigError: If a symbol or prefix key is registered twice
    """
    if filename and (extra_symbols or extra_prefixes):
        raise ValueError("Can't use extra symbols/prefixes and config file at same time")
    if extra_symbols or extra_prefixes:
        symbols = {key: value if isinstance(value, ParsedUnit) else symbol_from_config(key, value)
                   for key, value in (extra_symbols or {}).items()}
        set_default_tables(build_tables(symbols, extra_prefixes))
    else:
        _load_config(filename, suppress_warnings)


basicConfig = _basic_config


from .dimension import BaseDimension, DimensionVector, DIMENSION_LABELS, ZERO_CELSIUS_IN_KELVIN
from .parsed_unit import ParsedUnit, DIMENSIONLESS
from .tables import KeyedUnit, KeyedScale, UnitTables, DEFAULT_SYMBOLS, DEFAULT_PREFIXES, default_tables
from .parser import UnitParser, parse_unit
from .measurement import Measurement, Measure, RawMeasurement
from .conversion import Converter, parse, resolve, reciprocal, inverse, new
from .exceptions import (UnitParseError, SymbolNotFoundError, PrefixNotFoundError, RuneNotFoundError,
                         ExponentError, UnparsedTextError, NestingDepthError, ConversionError, DivideByZeroError,
                         WrongDimensionError, UnitUnderflowError, UnitOverflowError)
from .logger import logger, enable_file_logging, disable_file_logging

basicConfig()

# DRY: build __all__ from global symbols
_SKIP_GLOBALS = {
    # Skip Python builtins
    "__name__", "__doc__", "__package__", "__loader__", "__spec__",
    "__file__", "__cached__", "__builtins__",
    # Skip imported modules and typing helpers
    "tomllib", "sys", "os", "importlib", "logging",
    "Any", "Dict", "Mapping", "Optional",
    # Skip private/internal symbols
    "log", "set_default_tables", "symbol_from_config",
}
# Build __all__ from the module's global namespace
__all__ = [
    name for name in globals()
    if not name.startswith("_") and name not in _SKIP_GLOBALS
]
