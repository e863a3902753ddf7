import argparse
import logging
import re
import sys
from importlib import metadata
from typing import List, Optional, Sequence

from py_unitcalc import basicConfig, logger
from py_unitcalc.conversion import Converter
from py_unitcalc.exceptions import ConversionError, TableConfigError, UnitParseError
from py_unitcalc.measurement import Measure

version = metadata.metadata("py_unitcalc")['Version']

_MEASUREMENT_RE = re.compile(r'^\s*([-+]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][-+]?\d+)?)(.*)$')


def measurement_arg(text: str) -> tuple:
    """argparse type: '<number> <unit>' -> (value, unit text)."""
    match = _MEASUREMENT_RE.match(text)
    if match is None:
        raise argparse.ArgumentTypeError(f"expected '<number> <unit>', got {text!r}")
    value, unit_text = match.groups()
    return float(value), unit_text.strip()


def get_arg_parser():
    parser = argparse.ArgumentParser(
        prog=f'pyuc v{version}',
        description="Convert the product of measurements to a target unit, e.g. pyuc mg/L '3 g' -r '3 ml'"
    )
    parser.add_argument('unit', help="Target unit expression, e.g. 'kg m s^-2'", type=str)
    parser.add_argument('measurements', help="Measurements to multiply, as '<number> <unit>'",
                        nargs='*', type=measurement_arg)
    parser.add_argument("-r", "--reciprocal", help="Measurement to divide by (may be repeated)",
                        action="append", default=[], type=measurement_arg)
    parser.add_argument("-c", "--config", help="Path to a pyuc.toml configuration file", type=str)
    parser.add_argument("-v", "--version", action='version',
                        version=f'pyuc v{version}', help="Show version")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug messages")
    return parser


def convert(converter: Converter, unit: str, measurements: Sequence[tuple],
            reciprocals: Sequence[tuple]) -> Measure:
    factors: List[Measure] = [converter.parse(value, unit_text) for value, unit_text in measurements]
    factors += [converter.reciprocal(converter.parse(value, unit_text)) for value, unit_text in reciprocals]
    if not factors:
        raise ValueError("nothing to convert")
    return converter.new(unit, *factors)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = get_arg_parser()
    args = parser.parse_args(argv)

    if args.debug:
        logger.setLevel(logging.DEBUG)
        logger.info("Debug messages enabled")

    try:
        if args.config:
            basicConfig(args.config)
        result = convert(Converter(), args.unit, args.measurements, args.reciprocal)
    except (UnitParseError, ConversionError, TableConfigError, ValueError, OSError) as exc:
        logger.error(exc)
        return 1

    print(result)
    return 0


if __name__ == '__main__':
    sys.exit(main())
