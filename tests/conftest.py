"""
Shared pytest fixtures for fuzzytodo tests.
"""

import pytest

from fuzzytodo.store import TodoStore
from fuzzytodo.types import Description, Tag


@pytest.fixture(autouse=True)
def config_dir(tmp_path, monkeypatch):
    """Point config and error logs at a temporary directory."""
    path = tmp_path / "config"
    monkeypatch.setenv("FUZZYTODO_CONFIG_DIR", str(path))
    monkeypatch.delenv("FUZZYTODO_WORKERS", raising=False)
    monkeypatch.delenv("FUZZYTODO_VERBOSE", raising=False)
    return path


@pytest.fixture
def store():
    """Single-threaded store."""
    with TodoStore(workers=1) as s:
        yield s


@pytest.fixture
def parallel_store():
    """Store that fans out every search across four workers."""
    with TodoStore(workers=4, parallel_threshold=0) as s:
        yield s


@pytest.fixture
def errands(store):
    """Store seeded with the groceries/milk scenario."""
    store.push(Description("buy groceries"), [Tag("errand")])
    store.push(Description("buy milk"), [Tag("errand")])
    return store
