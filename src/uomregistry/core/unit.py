"""
uomregistry.core.unit
=====================

Defines the immutable `Unit` value object.

A unit knows how values expressed in it relate to the base unit of the
quantity it belongs to through four coefficients::

    base  = (a * value + b) / (c * value + d)
    value = (b - d * base) / (c * base - a)

For most units only ``a`` is needed (``b=0, c=0, d=1``). Shifted scales such
as temperature use ``b`` as well; ``c`` and ``d`` are in practice only used by
the few fractional conversions of the unit dictionary.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


def _ieee_div(numerator: float, denominator: float) -> float:
    """Float division following IEEE-754 instead of raising on a zero divisor."""
    if denominator == 0.0:
        if numerator == 0.0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


@dataclass(frozen=True, slots=True)
class Unit:
    """A named, symbol-identified conversion rule to a base unit.

    Equality and hashing use all six fields, so two units sharing a symbol but
    with different coefficients are distinct.
    """

    name: str
    symbol: str
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("name must be a non-empty string")
        if not isinstance(self.symbol, str) or not self.symbol:
            raise ValueError("symbol must be a non-empty string")
        # normalise ints (and numeric strings from loaders) to float
        for field in ("a", "b", "c", "d"):
            object.__setattr__(self, field, float(getattr(self, field)))

    @classmethod
    def linear(cls, name: str, symbol: str, scale: float) -> Unit:
        """Factory for pure scale units (``base = scale * value``)."""
        return cls(name, symbol, scale, 0.0, 0.0, 1.0)

    @property
    def is_linear(self) -> bool:
        return self.b == 0.0 and self.c == 0.0

    def to_base(self, value: float) -> float:
        """Convert `value` in this unit to the base unit of its quantity."""
        value = float(value)
        return _ieee_div(self.a * value + self.b, self.c * value + self.d)

    def from_base(self, base_value: float) -> float:
        """Convert `base_value` given in the base unit to this unit."""
        base_value = float(base_value)
        return _ieee_div(self.b - self.d * base_value, self.c * base_value - self.a)

    def __str__(self) -> str:
        return f"{self.name} [{self.symbol}]"


__all__ = ["Unit"]
