import dataclasses

import pytest

from py_unitcalc import new, parse, parse_unit
from py_unitcalc.measurement import Measure, Measurement, RawMeasurement


class TestMeasurement:

    def test_protocol(self):
        assert isinstance(parse(1.0, "m"), Measurement)
        assert isinstance(RawMeasurement(1.0, "m"), Measurement)
        assert not isinstance(object(), Measurement)
        assert not isinstance(1.0, Measurement)

    def test_accessors(self):
        m = parse(2.5, " kg ")
        assert m.quantity() == 2.5
        assert m.measurement_unit() == " kg "
        assert float(m) == 2.5

    def test_frozen(self):
        m = parse(1.0, "m")
        with pytest.raises(dataclasses.FrozenInstanceError):
            m.value = 2.0  # type: ignore[misc]

    def test_str_and_repr(self):
        assert str(parse(3.0, "mm")) == "3.0 mm"
        assert str(parse(3.0, "")) == "3.0"
        assert repr(parse(3.0, "mm")) == "<Measure: 3.0 mm (10^-3 L^1)>"

    def test_equality(self):
        assert parse(1.0, "m") == parse(1.0, "m")
        assert parse(1.0, "m") != parse(1.0, "mm")
        assert parse(1.0, "m") != parse(2.0, "m")

    def test_parsed_unit_is_required(self):
        with pytest.raises(TypeError):
            Measure(3.0, "m")  # type: ignore[call-arg]
        with pytest.raises(TypeError):
            Measure(1.0)  # type: ignore[call-arg]

    def test_explicit_parsed_unit(self):
        m = Measure(3.0, "m", parse_unit("m"))
        assert new("mm", m).quantity() == 3000.0
        assert m == parse(3.0, "m")

    def test_raw_measurement(self):
        raw = RawMeasurement(4.0, "s")
        assert raw.quantity() == 4.0
        assert raw.measurement_unit() == "s"
        assert RawMeasurement(1.0).measurement_unit() == ""
