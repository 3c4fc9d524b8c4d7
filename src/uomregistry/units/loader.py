"""
uomregistry.units.loader
========================

Adapter for the Energistics unit dictionary (the WITSML ``uomDictionary``
XML format). It turns every ``UnitOfMeasure`` element into a `UnitRecord`
and feeds the records to a `UnitsRegistry`.

Expected shape (namespaces are ignored)::

    <uomDictionary>
      <UnitsDefinition>
        <UnitOfMeasure annotation="ft">
          <Name>foot</Name>
          <CatalogSymbol>ft</CatalogSymbol>
          <QuantityType>length</QuantityType>
          <ConversionToBaseUnit baseUnit="m">
            <Factor>0.3048</Factor>
          </ConversionToBaseUnit>
        </UnitOfMeasure>
        ...

A ``ConversionToBaseUnit`` holds one of ``Factor``, ``Fraction``
(``Numerator``/``Denominator``) or ``Formula`` (``A``, ``B``, ``C``, ``D``).
Energistics names the formula coefficients the other way around, so the
source ``(A, B, C, D)`` land in ``(b, a, d, c)``.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import IO, TYPE_CHECKING, Iterable, Iterator, List, Optional, Tuple, Union

from uomregistry.core.quantity import Quantity
from uomregistry.core.unit import Unit

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from uomregistry.units.registry import UnitsRegistry

logger = logging.getLogger(__name__)

Source = Union[str, Path, IO[bytes]]

BUNDLED_UNITS_FILE = "witsml_units.xml"


class UnitDatabaseError(ValueError):
    """The unit database is missing or malformed."""


@dataclass(frozen=True, slots=True)
class UnitRecord:
    """One parsed ``UnitOfMeasure`` entry, already in ``(a, b, c, d)`` form."""

    name: str
    symbol: str
    quantity_types: Tuple[str, ...] = ()
    description: Optional[str] = None
    is_base_unit: bool = False
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0

    def to_unit(self) -> Unit:
        return Unit(self.name, self.symbol, self.a, self.b, self.c, self.d)


# ---------------------------------------------------------------------------
# XML helpers
# ---------------------------------------------------------------------------
def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child(element: ET.Element, name: str) -> Optional[ET.Element]:
    for child in element:
        if _local(child.tag) == name:
            return child
    return None


def _children(element: ET.Element, name: str) -> List[ET.Element]:
    return [child for child in element if _local(child.tag) == name]


def _child_text(element: ET.Element, name: str) -> Optional[str]:
    child = _child(element, name)
    if child is None:
        return None
    return "".join(child.itertext()).strip()


def _number(text: Optional[str], what: str, symbol: Optional[str]) -> float:
    try:
        return float(text)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise UnitDatabaseError(f"Invalid {what} {text!r} for unit {symbol!r}") from e


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------
def _parse_conversion(element: Optional[ET.Element], symbol: str) -> Tuple[float, float, float, float]:
    a, b, c, d = 1.0, 0.0, 0.0, 1.0
    if element is None:
        return a, b, c, d

    factor = _child_text(element, "Factor")
    fraction = _child(element, "Fraction")
    formula = _child(element, "Formula")

    if factor is not None:
        a = _number(factor, "factor", symbol)
    elif fraction is not None:
        numerator = _number(_child_text(fraction, "Numerator"), "numerator", symbol)
        denominator = _number(_child_text(fraction, "Denominator"), "denominator", symbol)
        if denominator == 0.0:
            raise UnitDatabaseError(f"Zero denominator for unit {symbol!r}")
        a = numerator / denominator
    elif formula is not None:
        # Energistics: base = (A + B*x) / (C + D*x)
        b = _number(_child_text(formula, "A"), "formula coefficient A", symbol)
        a = _number(_child_text(formula, "B"), "formula coefficient B", symbol)
        d = _number(_child_text(formula, "C"), "formula coefficient C", symbol)
        c = _number(_child_text(formula, "D"), "formula coefficient D", symbol)

    return a, b, c, d


def _parse_unit_of_measure(element: ET.Element) -> UnitRecord:
    name = _child_text(element, "Name")
    symbol = _child_text(element, "CatalogSymbol")
    if not name or not symbol:
        annotation = element.get("annotation")
        raise UnitDatabaseError(f"UnitOfMeasure {annotation!r} lacks Name or CatalogSymbol")

    is_base_unit = _child(element, "BaseUnit") is not None and _child(element, "Deprecated") is None
    description = _child_text(element, "Description") if _child(element, "BaseUnit") is not None else None
    quantity_types = tuple(
        "".join(q.itertext()).strip() for q in _children(element, "QuantityType")
    )

    a, b, c, d = _parse_conversion(_child(element, "ConversionToBaseUnit"), symbol)
    return UnitRecord(name, symbol, quantity_types, description, is_base_unit, a, b, c, d)


def _parse_root(source: Source) -> ET.Element:
    try:
        return ET.parse(source).getroot()
    except ET.ParseError as e:
        raise UnitDatabaseError(f"Malformed unit database: {e}") from e
    except OSError as e:
        raise UnitDatabaseError(f"Cannot read unit database {source!r}: {e}") from e


def parse_unit_records(source: Source) -> Iterator[UnitRecord]:
    """Yield a `UnitRecord` for every ``UnitOfMeasure`` in `source`.

    `source` is a path or a binary file object. Raises `UnitDatabaseError`
    for unreadable or malformed input.
    """
    root = _parse_root(source)
    definitions = _child(root, "UnitsDefinition")
    if definitions is None:
        raise UnitDatabaseError("Unit database has no UnitsDefinition element")

    for element in definitions.iter():
        if _local(element.tag) == "UnitOfMeasure":
            yield _parse_unit_of_measure(element)


# ---------------------------------------------------------------------------
# Feeding a registry
# ---------------------------------------------------------------------------
def _find_or_create_quantity(
    registry: "UnitsRegistry", name: str, description: Optional[str]
) -> Quantity:
    quantity = registry.find_quantity(name)
    if quantity is None:
        quantity = Quantity(name, description)
        registry.add_quantity(quantity)
    return quantity


def load_records(registry: "UnitsRegistry", records: Iterable[UnitRecord]) -> int:
    """Add `records` to `registry`; returns the number of units added.

    One `Unit` instance is created per record and shared by every quantity
    the record belongs to. Quantities are created on first mention. A record
    with no ``QuantityType`` is unreachable from the registry, so it is
    skipped and not counted.
    """
    count = 0
    for record in records:
        if not record.quantity_types:
            logger.debug("Skipping unit %r: no QuantityType", record.symbol)
            continue
        unit = record.to_unit()
        for quantity_name in record.quantity_types:
            quantity = _find_or_create_quantity(registry, quantity_name, record.description)
            quantity.add_unit(unit, record.is_base_unit)
        count += 1
    return count


def load_unit_database(registry: "UnitsRegistry", source: Optional[Source] = None) -> int:
    """Populate `registry` from an Energistics unit dictionary.

    With no `source` the dictionary bundled with the package is used.
    """
    if source is None:
        ref = resources.files("uomregistry.units.data").joinpath(BUNDLED_UNITS_FILE)
        try:
            stream = ref.open("rb")
        except OSError as e:
            raise UnitDatabaseError(f"Bundled unit database not available: {e}") from e
        with stream:
            count = load_records(registry, parse_unit_records(stream))
        origin = BUNDLED_UNITS_FILE
    else:
        count = load_records(registry, parse_unit_records(source))
        origin = str(source)

    logger.info("Loaded %d units in %d quantities from %s", count, len(registry), origin)
    return count


__all__ = [
    "UnitDatabaseError",
    "UnitRecord",
    "parse_unit_records",
    "load_records",
    "load_unit_database",
]
