import pytest

from py_unitcalc.dimension import DimensionVector
from py_unitcalc.exceptions import (ExponentError, PrefixNotFoundError, RuneNotFoundError, SymbolNotFoundError,
                                    NestingDepthError, UnitParseError, UnparsedTextError)
from py_unitcalc.parsed_unit import DIMENSIONLESS
from py_unitcalc.parser import UnitParser, parse_unit
from py_unitcalc.tables import build_tables


@pytest.fixture(scope="module")
def parser(tables):
    return UnitParser(tables)


def _sym(tables, key):
    return tables.symbol(key)


class TestParseDimensions:

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("m", lambda u: u("m")),
            ("   m   ", lambda u: u("m")),
            ("k°C", lambda u: u("°C")),
            ("k℃", lambda u: u("°C")),
            ("°C^2 °C", lambda u: u("°C").exp(3)),
            ("(m)", lambda u: u("m")),
            ("kg", lambda u: u("g")),
            ("kmol", lambda u: u("mol")),
            ("mm", lambda u: u("m")),
            ("kmol / s", lambda u: u("mol").multiply(u("s").reciprocal())),
            ("g/L", lambda u: u("g").multiply(u("L").reciprocal())),
            ("ug/uL", lambda u: u("g").multiply(u("L").reciprocal())),
            ("μg/μL", lambda u: u("g").multiply(u("L").reciprocal())),
            ("s^-1", lambda u: u("s").reciprocal()),
            ("kg·m/s^2", lambda u: u("N")),
            ("kg m s^-2", lambda u: u("N")),
            ("kg·m/(s^2 s)", lambda u: u("N").multiply(u("Hz"))),
            ("(kg·m/(s^2 s))^-1", lambda u: u("N").multiply(u("Hz")).reciprocal()),
            ("N/m^2", lambda u: u("Pa")),
            ("dm^3", lambda u: u("L")),
            ("kΩ", lambda u: u("V").multiply(u("A").reciprocal())),
            ("rad/s", lambda u: u("Hz")),
        ],
    )
    def test_dimensions(self, parser, tables, text, expected):
        unit = parser.parse(text)
        assert unit.product() == expected(lambda key: _sym(tables, key)).product()

    @pytest.mark.parametrize(
        "text",
        ["°C°C", "(°C)°C", "°C^2°C", "(m", "molk", "m/", "m^", "m^x", "m^128", "furlong", "m )", "m·", "·m"],
    )
    def test_invalid(self, parser, text):
        with pytest.raises(UnitParseError) as excinfo:
            parser.parse(text)
        assert str(excinfo.value)

    def test_empty_is_dimensionless(self, parser):
        assert parser.parse("") == DIMENSIONLESS

    @pytest.mark.parametrize("text", [" ", "\t\n"], ids=["space", "whitespace"])
    def test_whitespace_only_is_not_a_unit(self, parser, text):
        with pytest.raises(SymbolNotFoundError) as excinfo:
            parser.parse(text)
        assert excinfo.value.position == len(text)

    def test_long_chain_raises_parse_error(self, parser):
        with pytest.raises(NestingDepthError) as excinfo:
            parser.parse("m " * 5000)
        assert isinstance(excinfo.value, UnitParseError)
        assert isinstance(excinfo.value.__cause__, RecursionError)

    def test_moderate_chain_parses(self, parser):
        assert parser.parse("m " * 50).product() == DimensionVector(length=50)


class TestParseScale:

    @pytest.mark.parametrize(
        "text, scale",
        [
            ("g", 0),
            ("kg", 3),
            ("mg", -3),
            ("dag", 1),
            ("N", 3),
            ("kN", 6),
            ("L", -3),
            ("ml", -6),
            ("(cm)^3", -6),
            ("cm^3", -6),
            ("mg/L", 0),
            ("kg m s^-2", 3),
            ("m^-128", 0),
            ("km^-2", -6),
            ("mF", -6),
        ],
    )
    def test_scale(self, parser, text, scale):
        assert parser.parse(text).scale == scale

    def test_newton_is_kg_m_per_s2(self, parser):
        assert parser.parse("N") == parser.parse("kg·m/s^2")


class TestTermResolution:

    @pytest.mark.parametrize(
        "text, dims, scale",
        [
            ("m", DimensionVector(length=1), 0),
            ("mm", DimensionVector(length=1), -3),
            ("mol", DimensionVector(amount=1), 0),
            ("mmol", DimensionVector(amount=1), -3),
            ("cd", DimensionVector(intensity=1), 0),
            ("Pa", DimensionVector(length=-1, mass=1, time=-2), 3),
            ("T", DimensionVector(mass=1, time=-2, current=-1), 3),
            ("Gy", DimensionVector(length=2, time=-2), 0),
            ("dam", DimensionVector(length=1), 1),
            ("Da", DimensionVector(mass=1, amount=-1), 0),
            ("min", None, None),
        ],
    )
    def test_prefix_or_bare_symbol(self, parser, text, dims, scale):
        if dims is None:
            with pytest.raises(UnparsedTextError):
                parser.parse(text)
            return
        unit = parser.parse(text)
        assert unit.product() == dims
        assert unit.scale == scale

    def test_longest_prefix_wins(self, parser):
        # 'da' (10^1) is preferred over 'd' (10^-1) followed by a symbol 'a'
        tables = build_tables(extra_symbols={"ag": parser.parse("g")})
        assert UnitParser(tables).parse("dag").scale == 1

    def test_longest_symbol_wins(self):
        tables = build_tables(extra_symbols={"mi": parse_unit("m").exp(2)})
        assert UnitParser(tables).parse("mi").product() == DimensionVector(length=2)

    def test_term_keeps_dimensionless_factors(self, parser):
        unit, pos = parser.parse_term("rad", 0)
        assert pos == 3
        assert len(unit.dimless) == 2

    def test_prefix_rule(self, parser):
        assert parser.parse_prefix("kg", 0) == (3, 1)
        assert parser.parse_prefix("dag", 0) == (1, 2)
        with pytest.raises(PrefixNotFoundError) as excinfo:
            parser.parse_prefix("g", 0)
        assert excinfo.value.position == 0

    def test_symbol_rule(self, parser, tables):
        assert parser.parse_symbol("xmol", 1) == (tables.symbol("mol"), 4)
        with pytest.raises(SymbolNotFoundError):
            parser.parse_symbol("xmol", 0)


class TestAssociativity:

    def test_chained_division_associates_right(self, parser):
        # m/s/s == m/(s/s) is a length; (m/s)/s would be an acceleration
        assert parser.parse("m/s/s").product() == DimensionVector(length=1)
        assert parser.parse("(m/s)/s").product() == DimensionVector(length=1, time=-2)

    def test_chained_division_with_different_units(self, parser):
        assert parser.parse("g/m/s") == parser.parse("g/(m/s)")
        assert parser.parse("g/m/s").product() == DimensionVector(mass=1, length=-1, time=1)

    def test_division_binds_whole_right_hand_side(self, parser):
        assert parser.parse("J/mol K") == parser.parse("J/(mol K)")

    def test_center_dot_and_space_are_equivalent(self, parser):
        assert parser.parse("kg·m·s^-2") == parser.parse("kg m s^-2")


class TestParseErrors:

    def test_unparsed_text_reports_position(self, parser):
        with pytest.raises(UnparsedTextError) as excinfo:
            parser.parse("molk")
        err = excinfo.value
        assert err.position == 3
        assert err.consumed == "mol"
        assert err.remainder == "k"
        assert str(err) == "parse failed at: 'mol' . 'k': unparsed text"

    def test_missing_closing_paren(self, parser):
        with pytest.raises(RuneNotFoundError) as excinfo:
            parser.parse("(m")
        assert excinfo.value.rune == ")"
        assert excinfo.value.position == 2
        assert "')' not found" in str(excinfo.value)

    def test_unknown_symbol(self, parser):
        with pytest.raises(SymbolNotFoundError) as excinfo:
            parser.parse("kg/furlong")
        assert excinfo.value.consumed == "kg/"
        assert excinfo.value.remainder == "furlong"

    def test_symbol_missing_at_end(self, parser):
        with pytest.raises(SymbolNotFoundError) as excinfo:
            parser.parse("m/")
        assert excinfo.value.position == 2
        assert excinfo.value.remainder == ""

    @pytest.mark.parametrize("text", ["m^x", "m^", "m^-", "m^128", "m^-129"])
    def test_bad_exponent(self, parser, text):
        with pytest.raises(ExponentError) as excinfo:
            parser.parse(text)
        assert excinfo.value.position == 2

    def test_failed_right_hand_side_after_space_is_trailing_text(self, parser):
        with pytest.raises(UnparsedTextError) as excinfo:
            parser.parse("kg m (s")
        assert excinfo.value.remainder == "(s"

    def test_whitespace_before_trailing_text(self, parser):
        with pytest.raises(UnparsedTextError) as excinfo:
            parser.parse("m )")
        assert excinfo.value.position == 2


class TestParseUnitFunction:

    def test_default_tables(self):
        assert parse_unit("kg").scale == 3

    def test_explicit_tables(self):
        tables = build_tables(extra_symbols={"t": parse_unit("Mg")})
        assert parse_unit("kt", tables).scale == 9
        with pytest.raises(SymbolNotFoundError):
            parse_unit("kt")
