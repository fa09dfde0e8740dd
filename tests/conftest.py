from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from ugraph import config, metrics
from ugraph.graph import Graph

if TYPE_CHECKING:
    from collections.abc import Generator

_UGRAPH_ENV_VARS = (
    "UGRAPH_SEARCH_EARLY_EXIT",
    "UGRAPH_DISCONNECTED_POLICY",
    "UGRAPH_METRICS",
)


@pytest.fixture(autouse=True)
def reset_ugraph_state(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Isolate tests from the caller's UGRAPH_* environment and cached config."""
    for name in _UGRAPH_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    config.clear_config_cache()
    metrics.clear()
    original_enabled = metrics.is_enabled()
    yield
    config.clear_config_cache()
    metrics.clear()
    if original_enabled:
        metrics.enable()
    else:
        metrics.disable()


@pytest.fixture
def path_graph() -> Graph[str]:
    """A - B - C - D with unit costs."""
    return Graph.from_edges([("A", "B", 1), ("B", "C", 1), ("C", "D", 1)])


@pytest.fixture
def triangle_graph() -> Graph[str]:
    """A - B (1), B - C (2), A - C (3)."""
    return Graph.from_edges([("A", "B", 1), ("B", "C", 2), ("A", "C", 3)])


@pytest.fixture
def disjoint_graph() -> Graph[str]:
    """Two components: {A, B} and {C, D}."""
    return Graph.from_edges([("A", "B", 1), ("C", "D", 2)])
