import math

import pytest

from uomregistry.core.unit import Unit


def test_defaults_are_identity():
    u = Unit("meter", "m")
    assert (u.a, u.b, u.c, u.d) == (1.0, 0.0, 0.0, 1.0)
    assert u.to_base(3.5) == 3.5
    assert u.from_base(3.5) == 3.5
    assert u.is_linear


def test_linear_factory():
    ft = Unit.linear("foot", "ft", 0.3048)
    assert (ft.a, ft.b, ft.c, ft.d) == (0.3048, 0.0, 0.0, 1.0)
    assert ft.to_base(1.0) == pytest.approx(0.3048)
    assert ft.from_base(0.3048) == pytest.approx(1.0)


def test_coefficients_coerced_to_float():
    u = Unit("x", "x", 2, 1, 0, 1)
    assert isinstance(u.a, float) and isinstance(u.b, float)


def test_affine_temperature_shift():
    degc = Unit("degree Celsius", "degC", 1, 273.15, 0, 1)
    assert degc.to_base(0.0) == pytest.approx(273.15)
    assert degc.from_base(273.15) == pytest.approx(0.0, abs=1e-12)
    assert not degc.is_linear


def test_fractional_formula():
    # degF as loaded from the dictionary: (5x + 2298.35) / 9
    degf = Unit("degree Fahrenheit", "degF", 5, 2298.35, 0, 9)
    assert degf.to_base(32.0) == pytest.approx(273.15)
    assert degf.from_base(373.15) == pytest.approx(212.0)


@pytest.mark.parametrize("coeffs", [
    (1.0, 0.0, 0.0, 1.0),
    (0.3048, 0.0, 0.0, 1.0),
    (1.0, 273.15, 0.0, 1.0),
    (5.0, 2298.35, 0.0, 9.0),
    (2.0, 1.0, 0.5, 3.0),
])
@pytest.mark.parametrize("x", [-40.0, -1.5, 0.0, 0.25, 1.0, 1234.5])
def test_from_base_inverts_to_base(coeffs, x):
    u = Unit("u", "u", *coeffs)
    assert u.from_base(u.to_base(x)) == pytest.approx(x, rel=1e-9, abs=1e-9)


def test_from_base_division_by_zero_is_not_trapped():
    # c*base == a  ->  division by zero flows through as IEEE values
    u = Unit("odd", "odd", 0.0, 1.0, 0.0, 1.0)
    assert u.from_base(0.0) == math.inf
    assert math.isnan(u.from_base(1.0))


def test_to_base_zero_denominator_gives_signed_infinity():
    u = Unit("r", "r", 1.0, 0.0, 1.0, -2.0)   # (x) / (x - 2)
    assert u.to_base(2.0) == math.inf
    assert Unit("r", "r", -1.0, 0.0, 1.0, -2.0).to_base(2.0) == -math.inf
    assert math.isnan(Unit("z", "z", 0.0, 0.0, 0.0, 0.0).to_base(1.0))


def test_nan_and_inf_propagate():
    ft = Unit.linear("foot", "ft", 0.3048)
    assert math.isnan(ft.to_base(math.nan))
    # c*value is 0.0*inf = nan, so the quotient is nan even for a pure scale unit
    assert math.isnan(ft.to_base(math.inf))


@pytest.mark.parametrize("name, symbol", [("", "m"), ("meter", ""), (None, "m"), ("meter", None)])
def test_name_and_symbol_required(name, symbol):
    with pytest.raises(ValueError):
        Unit(name, symbol)


def test_equality_and_hash_use_all_fields():
    a = Unit("foot", "ft", 0.3048)
    b = Unit("foot", "ft", 0.3048)
    c = Unit("foot", "ft", 0.3047)
    d = Unit("feet", "ft", 0.3048)
    assert a == b and hash(a) == hash(b)
    assert a != c
    assert a != d
    assert len({a, b, c, d}) == 3


def test_immutable():
    u = Unit("meter", "m")
    with pytest.raises(AttributeError):
        u.a = 2.0  # type: ignore[misc]


def test_str():
    assert str(Unit("meter", "m")) == "meter [m]"
