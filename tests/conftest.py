# tests/conftest.py
import sys
from pathlib import Path
import pytest

# Make "src" importable
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from formats import FormatRegistry, reset_default_registry
from keywords import TypeKeyword, CollectingSink


@pytest.fixture(scope="session")
def registry():
    # Built-in formats only; never mutated by tests
    return FormatRegistry()


@pytest.fixture
def sink():
    return CollectingSink()


@pytest.fixture
def keyword(registry, sink):
    return TypeKeyword(registry, sink=sink)


@pytest.fixture
def default_registry_reset():
    reset_default_registry()
    yield
    reset_default_registry()


@pytest.fixture
def plugin_module(tmp_path, monkeypatch):
    """Write an importable module into tmp_path; returns a factory(name, source)."""
    made = []

    def _make(name: str, source: str) -> str:
        (tmp_path / f"{name}.py").write_text(source, encoding="utf-8")
        monkeypatch.syspath_prepend(str(tmp_path))
        made.append(name)
        return name
    yield _make
    for name in made:
        sys.modules.pop(name, None)
