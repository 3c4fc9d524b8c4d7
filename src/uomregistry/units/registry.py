"""
uomregistry.units.registry
==========================

The units registry: catalog of quantities and their units plus the alias and
display-symbol overrides, and every lookup, conversion and disambiguation
operation built on top of them.

Design
------
- All state lives in a `UnitsRegistry` instance; tests and embedding code
  construct their own. The process-wide registry is built on first use by
  `get_default_registry()` (also reachable as ``DEFAULT_REGISTRY``).
- Collections are copy-on-write: writers rebuild and republish under a lock,
  readers never lock and always see a complete snapshot.
- Lookups that miss return ``None`` or an empty collection. Only missing or
  empty required arguments raise (`ValueError`).
- Which quantity wins when a unit belongs to several is a data table
  (`QUANTITY_PREFERENCES`), not control flow.
"""
from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Set, Tuple, Union

from uomregistry.config import RegistrySettings, get_settings
from uomregistry.core.display import to_display_symbol
from uomregistry.core.quantity import Quantity
from uomregistry.core.unit import Unit
from uomregistry.units.loader import load_unit_database
from uomregistry.units.overrides import read_bundled_overrides, read_overrides

logger = logging.getLogger(__name__)

UnitLike = Union[Unit, str, None]

# Symbol used when a lookup is made without a symbol.
UNITLESS_SYMBOL = "unitless"

# Euclidean (count) unit; quantities holding it are also dimensionless.
EUCLIDEAN_SYMBOL = "Euc"
DIMENSIONLESS_QUANTITY = "dimensionless"

# Ordered tie-break when a unit belongs to several quantities.
# "time" resolves the siemens (S) / second (s) clash.
QUANTITY_PREFERENCES: Tuple[str, ...] = ("time",)

ALIASES_FILE = "unit_aliases.txt"
DISPLAY_SYMBOLS_FILE = "display_symbols.txt"


def _require_text(value: object, what: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{what} must be a non-empty string")
    return value


# ---------------------------------------------------------------------------
# Units registry
# ---------------------------------------------------------------------------
class UnitsRegistry:
    """Thread-safe catalog of `Quantity` objects and their `Unit` members.

    Units are identified by symbol for lookup purposes. Exact-case matches
    are preferred (``M`` mega vs ``m`` milli); a case-insensitive match is
    the fallback for sloppy input.
    """

    def __init__(self, preferences: Sequence[str] = QUANTITY_PREFERENCES) -> None:
        self._lock = threading.RLock()
        self._quantities: Tuple[Quantity, ...] = ()
        self._aliases: Dict[str, str] = {}
        self._display_symbols: Dict[str, str] = {}
        self._preferences: Tuple[str, ...] = tuple(preferences)

    # -------------------------- collections --------------------------------
    @property
    def quantities(self) -> Tuple[Quantity, ...]:
        """All quantities in load order."""
        return self._quantities

    @property
    def unit_aliases(self) -> Mapping[str, str]:
        """Read-only view of alias (lower-case) → unit symbol."""
        return MappingProxyType(self._aliases)

    @property
    def display_symbols(self) -> Mapping[str, str]:
        """Read-only view of unit symbol → display symbol overrides."""
        return MappingProxyType(self._display_symbols)

    @property
    def preferences(self) -> Tuple[str, ...]:
        return self._preferences

    def __len__(self) -> int:
        return len(self._quantities)

    def __iter__(self) -> Iterator[Quantity]:
        return iter(self._quantities)

    def __contains__(self, quantity_name: object) -> bool:
        return isinstance(quantity_name, str) and self._find_quantity_by_name(quantity_name) is not None

    # -------------------------- extension ----------------------------------
    def add_quantity(self, quantity: Quantity) -> None:
        """Add `quantity`; its name must not already be present."""
        if not isinstance(quantity, Quantity):
            raise ValueError(f"quantity must be a Quantity, got {type(quantity).__name__}")

        with self._lock:
            if self._find_quantity_by_name(quantity.name) is not None:
                raise ValueError(f"Quantity is already present: {quantity.name}")
            self._quantities = self._quantities + (quantity,)

    def add_unit_alias(self, alias: str, unit_symbol: str) -> None:
        """Make `alias` (matched case-insensitively) resolve to `unit_symbol`.

        Affects every method taking a unit symbol. Last write wins.
        """
        _require_text(alias, "alias")
        _require_text(unit_symbol, "unit_symbol")

        with self._lock:
            aliases = dict(self._aliases)
            aliases[alias.lower().strip()] = unit_symbol
            self._aliases = aliases

    def set_display_symbol(self, unit: Union[Unit, str], display_symbol: str) -> None:
        """Override the display symbol of a unit (or unit symbol). Last write wins."""
        symbol = unit.symbol if isinstance(unit, Unit) else _require_text(unit, "unit")
        _require_text(display_symbol, "display_symbol")

        with self._lock:
            display = dict(self._display_symbols)
            display[symbol] = display_symbol
            self._display_symbols = display

    # -------------------------- lookup -------------------------------------
    def _find_quantity_by_name(self, name: str) -> Optional[Quantity]:
        for quantity in self._quantities:
            if quantity.name == name:
                return quantity
        return None

    def find_unit(self, symbol: Optional[str]) -> Optional[Unit]:
        """Return the unit of `symbol`, or ``None``.

        ``None``/blank means ``unitless``. Aliases are consulted first, then
        an exact-case scan, then a case-insensitive one.
        """
        if symbol is None or not symbol.strip():
            symbol = UNITLESS_SYMBOL

        symbol = symbol.strip()
        target = self._aliases.get(symbol.lower())
        if target is not None:
            symbol = target
        folded = symbol.lower()

        quantities = self._quantities
        for quantity in quantities:
            for unit in quantity.units:
                if unit.symbol == symbol:
                    return unit

        for quantity in quantities:
            for unit in quantity.units:
                if unit.symbol.lower() == folded:
                    return unit

        return None

    def _as_unit(self, unit: UnitLike) -> Optional[Unit]:
        if isinstance(unit, Unit):
            return unit
        if unit is None or isinstance(unit, str):
            return self.find_unit(unit)
        raise ValueError(f"Expected a Unit or a unit symbol, got {type(unit).__name__}")

    def find_quantities(self, unit: UnitLike) -> List[Quantity]:
        """Return every quantity containing `unit` (a `Unit` or a symbol).

        When one of them also holds the Euclidean unit, the dimensionless
        quantity is included too.
        """
        resolved = self._as_unit(unit)
        if resolved is None:
            return []

        quantities = [q for q in self._quantities if resolved in q]

        euclid = self.find_unit(EUCLIDEAN_SYMBOL)
        if euclid is not None and any(euclid in q for q in quantities):
            dimensionless = self._find_quantity_by_name(DIMENSIONLESS_QUANTITY)
            if dimensionless is not None and dimensionless not in quantities:
                quantities.append(dimensionless)

        return quantities

    def find_quantity(self, key: Union[str, Unit]) -> Optional[Quantity]:
        """Find a quantity by name (``str``) or the quantity of a `Unit`.

        A unit may belong to several quantities; the first of
        `preferences` found among them wins, otherwise the first in
        registry order.
        """
        if key is None:
            raise ValueError("quantity name or unit cannot be None")
        if isinstance(key, str):
            return self._find_quantity_by_name(key)
        if not isinstance(key, Unit):
            raise ValueError(f"Expected a quantity name or a Unit, got {type(key).__name__}")

        candidates = self.find_quantities(key)
        if not candidates:
            return None
        if len(candidates) == 1:
            return candidates[0]

        for preferred in self._preferences:
            for quantity in candidates:
                if quantity.name == preferred:
                    return quantity

        return candidates[0]

    def find_convertible_units(self, unit: UnitLike) -> Set[Unit]:
        """All units sharing a quantity with `unit`, `unit` itself excluded."""
        resolved = self._as_unit(unit)
        if resolved is None:
            return set()

        units: Set[Unit] = set()
        for quantity in self._quantities:
            members = quantity.units
            if resolved in members:
                units.update(members)

        units.discard(resolved)
        return units

    # -------------------------- conversion ---------------------------------
    def can_convert(self, unit1: UnitLike, unit2: UnitLike) -> bool:
        """True if the two units share at least one quantity.

        Unknown symbols (and ``None``) cannot be converted.
        """
        if unit1 is None or unit2 is None:
            return False

        u1 = self._as_unit(unit1)
        u2 = self._as_unit(unit2)
        if u1 is None or u2 is None:
            return False

        quantities2 = {id(q) for q in self.find_quantities(u2)}
        return any(id(q) in quantities2 for q in self.find_quantities(u1))

    def convert(self, from_unit: Union[Unit, str], to_unit: Union[Unit, str], value: float) -> float:
        """Convert `value` from `from_unit` to `to_unit` through the base unit.

        Compatibility is not checked; see `can_convert`. When a symbol is
        given and cannot be resolved, `value` is returned unchanged.
        """
        if from_unit is None:
            raise ValueError("from_unit cannot be None")
        if to_unit is None:
            raise ValueError("to_unit cannot be None")

        if isinstance(from_unit, str) or isinstance(to_unit, str):
            source = self._as_unit(from_unit)
            target = self._as_unit(to_unit)
            if source is None or target is None:
                return value
            return target.from_base(source.to_base(value))

        return to_unit.from_base(from_unit.to_base(value))

    # -------------------------- display ------------------------------------
    def get_display_symbol(self, unit: UnitLike) -> str:
        """Return the display symbol of `unit`; ``""`` if unitless or ``None``.

        A symbol that does not resolve to a unit is returned as given.
        """
        if unit is None:
            return ""

        if isinstance(unit, str):
            resolved = self.find_unit(unit)
            if resolved is None:
                return unit if unit.strip() else ""
            unit = resolved

        symbol = unit.symbol
        override = self._display_symbols.get(symbol)
        if override is not None:
            return override

        if symbol.lower() == UNITLESS_SYMBOL:
            return ""

        return to_display_symbol(symbol)

    def __str__(self) -> str:
        quantities = self._quantities
        n_units = sum(len(q) for q in quantities)
        return (
            f"Quantities....: {len(quantities)}\n"
            f"Units.........: {n_units}\n"
            f"Unit aliases..: {len(self._aliases)}"
        )

    def __repr__(self) -> str:
        return f"UnitsRegistry(quantities={len(self._quantities)}, aliases={len(self._aliases)})"


# ---------------------------------------------------------------------------
# Bootstrap the default registry from the bundled database
# ---------------------------------------------------------------------------
def _read_override_file(path, bundled_name: str) -> Dict[str, str]:
    return read_overrides(path) if path is not None else read_bundled_overrides(bundled_name)


def _bootstrap_default_registry(settings: Optional[RegistrySettings] = None) -> UnitsRegistry:
    """Build a fully loaded registry: units, then aliases, then display symbols."""
    settings = settings or get_settings()
    reg = UnitsRegistry()

    load_unit_database(reg, settings.UNITS_FILE)

    for alias, symbol in _read_override_file(settings.ALIASES_FILE, ALIASES_FILE).items():
        if not symbol:
            logger.debug("Ignoring alias %r without a target symbol", alias)
            continue
        reg.add_unit_alias(alias, symbol)

    for symbol, display in _read_override_file(settings.DISPLAY_SYMBOLS_FILE, DISPLAY_SYMBOLS_FILE).items():
        if not display:
            logger.debug("Ignoring empty display symbol for %r", symbol)
            continue
        reg.set_display_symbol(symbol, display)

    logger.debug("Default registry ready:\n%s", reg)
    return reg


_default_lock = threading.Lock()
_default_registry: Optional[UnitsRegistry] = None


def get_default_registry() -> UnitsRegistry:
    """Return the process-wide registry, loading it on first call."""
    global _default_registry
    reg = _default_registry
    if reg is None:
        with _default_lock:
            if _default_registry is None:
                _default_registry = _bootstrap_default_registry()
            reg = _default_registry
    return reg


def __getattr__(name: str) -> UnitsRegistry:
    # DEFAULT_REGISTRY is built lazily so importing the module does no I/O.
    if name == "DEFAULT_REGISTRY":
        return get_default_registry()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "UnitsRegistry",
    "QUANTITY_PREFERENCES",
    "UNITLESS_SYMBOL",
    "EUCLIDEAN_SYMBOL",
    "DIMENSIONLESS_QUANTITY",
    "get_default_registry",
    "DEFAULT_REGISTRY",
]
