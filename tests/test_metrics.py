from __future__ import annotations

import time

import pytest

from ugraph import metrics
from ugraph.graph import Graph


def test_enable_and_disable() -> None:
    metrics.disable()
    assert metrics.is_enabled() is False
    metrics.enable()
    assert metrics.is_enabled() is True


def test_disabled_collects_nothing(triangle_graph: Graph[str]) -> None:
    metrics.disable()
    triangle_graph.breadth_first_search("A", "C")
    triangle_graph.minimum_spanning_tree()
    assert metrics.timings() == {}
    assert metrics.counters() == {}


def test_timed_records_duration() -> None:
    metrics.enable()
    with metrics.timed("test"):
        time.sleep(0.01)
    result = metrics.timings()["test"]
    assert result["calls"] == 1
    assert result["total_ms"] >= 10.0
    assert result["max_ms"] == result["total_ms"]


def test_timed_records_on_exception() -> None:
    metrics.enable()
    with pytest.raises(ValueError, match="boom"), metrics.timed("test"):
        raise ValueError("boom")
    assert metrics.timings()["test"]["calls"] == 1


def test_clear_resets_timings_and_counters() -> None:
    metrics.enable()
    metrics.count("x")
    with metrics.timed("y"):
        pass
    metrics.clear()
    assert metrics.timings() == {}
    assert metrics.counters() == {}


def test_search_timings_per_order(triangle_graph: Graph[str]) -> None:
    metrics.enable()
    triangle_graph.breadth_first_search("A", "C")
    triangle_graph.breadth_first_search("C", "A")
    triangle_graph.depth_first_search("A", "C")
    result = metrics.timings()
    assert list(result) == ["graph.search.bfs", "graph.search.dfs"]
    assert result["graph.search.bfs"]["calls"] == 2


def test_search_counts_visited_nodes(path_graph: Graph[str]) -> None:
    """A full search from A visits the whole path graph; a trivial one visits nothing."""
    metrics.enable()
    path_graph.breadth_first_search("A", "B")
    path_graph.breadth_first_search("A", "A")
    assert metrics.counters() == {"traversal.nodes_visited": 4}


def test_early_exit_visits_fewer_nodes(
    path_graph: Graph[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("UGRAPH_SEARCH_EARLY_EXIT", "1")
    metrics.enable()
    path_graph.breadth_first_search("A", "B")
    assert metrics.counters() == {"traversal.nodes_visited": 2}


def test_spanning_tree_counts_accepted_and_rejected_edges(triangle_graph: Graph[str]) -> None:
    triangle_graph.add("D")
    triangle_graph.connect("C", "D", 5)
    metrics.enable()
    triangle_graph.minimum_spanning_tree()
    # A-B and B-C accepted, A-C closes a cycle, C-D accepted
    assert metrics.counters() == {"mst.edges_accepted": 3, "mst.edges_rejected": 1}
    assert metrics.timings()["graph.minimum_spanning_tree"]["calls"] == 1
