import builtins
import importlib
import importlib.metadata as metadata
import io

import pytest


def _not_installed(monkeypatch):
    def version(_name):
        raise metadata.PackageNotFoundError

    monkeypatch.setattr(metadata, "version", version)


@pytest.fixture()
def pkg(monkeypatch):
    import uomregistry
    yield uomregistry
    # restore the real version for the rest of the session
    monkeypatch.undo()
    importlib.reload(uomregistry)


def test_version_read_from_checkout_pyproject(monkeypatch, pkg):
    _not_installed(monkeypatch)
    opened = []

    def fake_open(path, *args, **kwargs):
        opened.append(path)
        return io.BytesIO(b"[project]\nversion = '1.2.3'\n")

    monkeypatch.setattr(builtins, "open", fake_open)
    importlib.reload(pkg)

    assert pkg.__version__ == "1.2.3"
    # located next to the package, not in the working directory
    assert opened == [pkg._PYPROJECT]
    assert pkg._PYPROJECT.is_absolute()
    assert pkg._PYPROJECT.name == "pyproject.toml"


def test_version_unknown_without_pyproject(monkeypatch, pkg):
    _not_installed(monkeypatch)

    def missing(*_args, **_kwargs):
        raise FileNotFoundError("pyproject.toml")

    monkeypatch.setattr(builtins, "open", missing)
    importlib.reload(pkg)

    assert pkg.__version__ == "0.0.0"


def test_version_independent_of_working_directory(monkeypatch, tmp_path, pkg):
    _not_installed(monkeypatch)
    monkeypatch.chdir(tmp_path)
    importlib.reload(pkg)

    assert isinstance(pkg.__version__, str) and pkg.__version__


def test_unknown_package_attribute_raises_attributeerror(pkg):
    with pytest.raises(AttributeError):
        _ = getattr(pkg, "definitely_not_a_public_attr")
