"""
uomregistry: units-of-measurement registry.

Resolves unit symbols to unit definitions, converts values between compatible
units through the base unit of their quantity, and renders display symbols.
The unit catalog is the Energistics unit dictionary bundled with the package.

The shared registry is created lazily on first access to ``manager`` so that
importing the package has no side effects.
"""

from importlib import metadata as _metadata
from pathlib import Path as _Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from uomregistry.units.registry import UnitsRegistry

__license__ = "MIT"

# src/uomregistry/__init__.py -> checkout root
_PYPROJECT = _Path(__file__).resolve().parents[2] / "pyproject.toml"
_UNKNOWN_VERSION = "0.0.0"


def _source_version() -> str:
    """Version of an uninstalled checkout, read from its pyproject.toml."""
    import tomllib

    try:
        with open(_PYPROJECT, "rb") as f:
            return tomllib.load(f)["project"]["version"]
    except (OSError, KeyError, tomllib.TOMLDecodeError):
        return _UNKNOWN_VERSION


try:
    __version__ = _metadata.version("uomregistry")
except _metadata.PackageNotFoundError:
    __version__ = _source_version()

__all__ = ["__version__", "__license__"]


def __getattr__(name: str) -> Any:
    """Resolve ``manager`` to the shared registry, loading it on first use."""
    if name == "manager":
        from uomregistry.units.registry import get_default_registry
        return get_default_registry()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + ["manager"])
