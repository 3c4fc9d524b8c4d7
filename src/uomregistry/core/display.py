"""
uomregistry.core.display
========================

Turn ASCII catalog symbols (``degC``, ``cm3``, ``us/ft``, ``ohm.m``) into
their typographic display form (``°C``, ``cm³``, ``µs/ft``, ``Ω·m``).

The transform is deterministic and stateless; explicit per-unit overrides and
the unitless rule live in the registry.
"""

from __future__ import annotations

import re
from typing import Pattern, Sequence, Tuple

# Applied in order, all case-insensitive.
_SUBSTITUTIONS: Sequence[Tuple[Pattern[str], str]] = (
    (re.compile(r"(?i)degc"), "°C"),
    (re.compile(r"(?i)degf"), "°F"),
    (re.compile(r"(?i)degr"), "°R"),
    (re.compile(r"(?i)dega"), "°"),
    (re.compile(r"(?i)ohm"), "\u2126"),
)

_SUPERSCRIPTS = {"2": "²", "3": "³"}
_MICRO = "\u00b5"
_MIDDLE_DOT = "\u00b7"
_DIGITS = frozenset("0123456789")


def _substitute(symbol: str) -> str:
    for pattern, replacement in _SUBSTITUTIONS:
        symbol = pattern.sub(replacement, symbol)
    return symbol


def to_display_symbol(symbol: str) -> str:
    """Return the display form of a catalog unit symbol.

    Rules of the character pass (one character look-behind/look-ahead):

    - ``2``/``3`` not next to another digit become ``²``/``³``;
    - ``u`` first or right after ``/`` becomes the micro sign;
    - ``.`` between two digits is a decimal point, otherwise a middle dot.

    >>> to_display_symbol("cm3")
    'cm³'
    >>> to_display_symbol("us/ft")
    'µs/ft'
    """
    text = _substitute(symbol)

    out = []
    prev = " "
    n = len(text)
    for i, ch in enumerate(text):
        nxt = text[i + 1] if i + 1 < n else " "

        if ch in _SUPERSCRIPTS:
            out.append(ch if nxt in _DIGITS or prev in _DIGITS else _SUPERSCRIPTS[ch])
        elif ch == "u":
            out.append(_MICRO if i == 0 or prev == "/" else ch)
        elif ch == ".":
            out.append(ch if prev in _DIGITS and nxt in _DIGITS else _MIDDLE_DOT)
        else:
            out.append(ch)

        prev = ch

    return "".join(out)


__all__ = ["to_display_symbol"]
