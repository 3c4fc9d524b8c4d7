"""
uomregistry.core.quantity
=========================

Defines the `Quantity` class: a named physical dimension (``length``,
``pressure``, ``thermodynamic temperature`` ...) holding the units that
measure it.

The first unit of a non-empty quantity is always its base unit; every
conversion within the quantity routes through it. Units may be shared by
reference between quantities.

Thread-safety
-------------
The unit list is copy-on-write: writers build a new tuple under a lock and
publish it with a single assignment, readers just pick up whatever tuple is
currently published. A reader therefore sees either the state before or the
state after an `add_unit` call, never something in between.
"""

from __future__ import annotations

import threading
from typing import Iterator, Optional, Tuple

from uomregistry.core.unit import Unit


class Quantity:
    """A named group of interconvertible units."""

    __slots__ = ("_name", "_description", "_units", "_lock")

    def __init__(self, name: str, description: Optional[str] = None) -> None:
        if not isinstance(name, str) or not name:
            raise ValueError("name must be a non-empty string")
        self._name = name
        self._description = description
        self._units: Tuple[Unit, ...] = ()
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> Optional[str]:
        return self._description

    @property
    def units(self) -> Tuple[Unit, ...]:
        """Snapshot of the member units; element 0 is the base unit."""
        return self._units

    @property
    def base_unit(self) -> Optional[Unit]:
        units = self._units
        return units[0] if units else None

    def add_unit(self, unit: Unit, is_base_unit: bool = False) -> None:
        """Associate `unit` with this quantity.

        If more than one unit is added as base unit the last one added takes
        the role. If none is, the first unit added keeps it.
        """
        if not isinstance(unit, Unit):
            raise ValueError(f"unit must be a Unit, got {type(unit).__name__}")

        with self._lock:
            if is_base_unit:
                self._units = (unit,) + self._units
            else:
                self._units = self._units + (unit,)

    def __contains__(self, unit: object) -> bool:
        return unit in self._units

    def __iter__(self) -> Iterator[Unit]:
        return iter(self._units)

    def __len__(self) -> int:
        return len(self._units)

    def __repr__(self) -> str:
        return f"Quantity({self._name!r}, units={len(self._units)})"

    def __str__(self) -> str:
        lines = [f"Name: {self._name}"]
        if self._description is not None:
            lines.append(f"Description: {self._description}")
        lines.extend(f"  {unit}" for unit in self._units)
        return "\n".join(lines)


__all__ = ["Quantity"]
