# tests/conftest.py
import pytest

from uomregistry.config import RegistrySettings
from uomregistry.core.quantity import Quantity
from uomregistry.core.unit import Unit
from uomregistry.units.registry import UnitsRegistry, _bootstrap_default_registry


@pytest.fixture()
def reg():
    """Fresh, fully-bootstrapped UnitsRegistry for isolation per test."""
    return _bootstrap_default_registry(RegistrySettings())


@pytest.fixture()
def empty_reg():
    return UnitsRegistry()


@pytest.fixture()
def small_reg():
    """Hand-built registry: length, time, electric conductance, dimensionless."""
    r = UnitsRegistry()

    length = Quantity("length", "length")
    length.add_unit(Unit("meter", "m"), True)
    length.add_unit(Unit.linear("foot", "ft", 0.3048))
    length.add_unit(Unit.linear("megameter", "Mm", 1e6))
    length.add_unit(Unit.linear("millimeter", "mm", 1e-3))

    time = Quantity("time")
    time.add_unit(Unit("second", "s"), True)
    time.add_unit(Unit.linear("millisecond", "ms", 1e-3))

    conductance = Quantity("electric conductance")
    conductance.add_unit(Unit("siemens", "S"), True)
    conductance.add_unit(Unit.linear("millisiemens", "mS", 1e-3))

    r.add_quantity(length)
    r.add_quantity(time)
    r.add_quantity(conductance)
    return r
