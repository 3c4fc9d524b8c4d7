"""
uomregistry.units.overrides
===========================

Reader for the ``key=value`` override files that ship aliases
(``ft.=ft``) and display symbols (``deg=°``).

Override files are optional. A missing or unreadable file yields an empty
mapping so the registry can always be constructed.
"""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path
from typing import Dict, Optional, Union

logger = logging.getLogger(__name__)

Source = Union[str, Path]

_COMMENT_PREFIXES = ("#", "!")


def parse_overrides(text: str) -> Dict[str, str]:
    """Parse ``key=value`` lines into a dict (last occurrence of a key wins)."""
    mapping: Dict[str, str] = {}
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith(_COMMENT_PREFIXES):
            continue

        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            logger.debug("Skipping malformed override line %d: %r", lineno, raw)
            continue

        mapping[key] = value.strip()
    return mapping


def read_overrides(source: Optional[Source]) -> Dict[str, str]:
    """Read an override file; never raises for missing or unreadable files."""
    if source is None:
        return {}
    try:
        text = Path(source).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Override file %s not available (%s); using no overrides", source, e)
        return {}
    return parse_overrides(text)


def read_bundled_overrides(filename: str) -> Dict[str, str]:
    """Read one of the override files shipped in ``uomregistry.units.data``."""
    try:
        text = resources.files("uomregistry.units.data").joinpath(filename).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Bundled override file %s not available (%s)", filename, e)
        return {}
    return parse_overrides(text)


__all__ = ["parse_overrides", "read_overrides", "read_bundled_overrides"]
