from typing import TYPE_CHECKING, Any

from uomregistry.core.quantity import Quantity
from uomregistry.core.unit import Unit
from uomregistry.units.loader import UnitDatabaseError

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from uomregistry.units.registry import UnitsRegistry
# Lazy access helpers -------------------------------------------------------

def _get_default_registry() -> "UnitsRegistry":
    # Import here to avoid loading the unit database at import time.
    from uomregistry.units.registry import DEFAULT_REGISTRY  # local import
    return DEFAULT_REGISTRY

def __getattr__(name: str) -> Any:
    """
    Lazy attribute access. Accessing 'manager' returns the package's default
    registry, loading it on first use.
    """
    if name == "manager":
        return _get_default_registry()
    if name == "UnitsRegistry":
        from uomregistry.units.registry import UnitsRegistry
        return UnitsRegistry
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

def __dir__() -> list[str]:
    # Improve discoverability in REPL / autocomplete.
    return sorted(list(globals().keys()) + ["manager", "UnitsRegistry"])
