"""Kruskal-style minimum spanning tree construction."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ugraph import exceptions, metrics, traversal
from ugraph.types import DisconnectedPolicy

if TYPE_CHECKING:
    from collections.abc import Hashable

    from ugraph.graph import Graph
    from ugraph.types import Edge

logger = logging.getLogger(__name__)


def candidate_edges[K: Hashable](edges: list[Edge[K]]) -> list[Edge[K]]:
    """Drop self-loops and sort by cost, keeping insertion order among equal costs."""
    return sorted((edge for edge in edges if not edge.is_loop), key=lambda edge: edge.cost)


def minimum_spanning_tree[K: Hashable](graph: Graph[K]) -> Graph[K]:
    """Build a minimum spanning tree (or forest) of ``graph`` as a new graph.

    Edges are tried cheapest first. Each one is connected in the result, then
    a depth-first cycle check runs from its first endpoint; if the edge closed
    a cycle it is removed again. Construction stops once N-1 edges are
    accepted or the candidates run out.

    Raises:
        GraphNotConnectedError: If ``graph`` has several components and its
            config asks for RAISE
    """
    policy = graph.config.disconnected_policy
    if policy == DisconnectedPolicy.RAISE:
        component_count = len(graph.connected_components())
        if component_count > 1:
            raise exceptions.GraphNotConnectedError(component_count)

    result = type(graph)(config=graph._config)  # pyright: ignore[reportPrivateUsage]
    for key in graph.nodes():
        result.add(key)

    target = graph.number_of_nodes() - 1
    accepted = 0
    for edge in candidate_edges(graph.edges()):
        if accepted >= target:
            break
        result.connect(edge.first, edge.second, edge.cost)
        if traversal.closes_cycle(result._nodes, edge.first):  # pyright: ignore[reportPrivateUsage]
            logger.debug(f"Rejecting {edge.first!r} - {edge.second!r} ({edge.cost}): cycle")
            result._disconnect(edge.first, edge.second)  # pyright: ignore[reportPrivateUsage]
            metrics.count("mst.edges_rejected")
            continue
        accepted += 1
        metrics.count("mst.edges_accepted")

    if target > 0 and accepted < target:
        logger.warning(
            f"Graph is not connected: spanning forest has {accepted} of {target} tree edges"
        )

    return result
