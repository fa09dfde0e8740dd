"""Undirected weighted graph with path search and minimum spanning trees."""

from __future__ import annotations

import dataclasses
import logging
import operator
from collections.abc import Hashable
from typing import TYPE_CHECKING, Generic, TypeVar

import networkx as nx

from ugraph import config as config_mod
from ugraph import exceptions, metrics, mst, traversal
from ugraph.types import Edge, Node, SearchOrder

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from ugraph.config import GraphConfig

__all__ = ["Graph"]

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)


class Graph(Generic[K]):  # noqa: UP046 - basedpyright doesn't support PEP 695 syntax yet
    """In-memory undirected graph with positive integer edge costs.

    Nodes are any hashable keys. At most one edge joins a pair of nodes;
    connecting an already-connected pair replaces its cost. Self-loops may be
    connected but never take part in spanning trees.

    Expected negative outcomes never raise: ``add``/``connect`` return False,
    ``get_cost`` and the searches return None.

    Not safe for concurrent mutation. Searches keep no state on the graph, so
    concurrent read-only use of an unchanging graph is fine.

    Example:
        >>> g = Graph[str]()
        >>> for key in "abc":
        ...     g.add(key)
        >>> g.connect("a", "b", 1)
        True
        >>> g.breadth_first_search("a", "b")
        ['a', 'b']
    """

    def __init__(self, config: GraphConfig | None = None) -> None:
        self._config = config
        self._nodes: dict[K, Node[K]] = {}
        self._edges: list[Edge[K]] = []
        self._edge_index: dict[frozenset[K], Edge[K]] = {}

    @classmethod
    def from_edges(
        cls, edges: Iterable[tuple[K, K, int]], config: GraphConfig | None = None
    ) -> Graph[K]:
        """Build a graph from (a, b, cost) triples, adding endpoints as needed.

        Raises:
            InvalidEdgeError: If a triple is malformed or its cost is not an int >= 1
        """
        graph = cls(config=config)
        for item in edges:
            try:
                a, b, cost = item
            except (TypeError, ValueError) as e:
                raise exceptions.InvalidEdgeError(
                    f"Expected (node, node, cost) triple, got {item!r}"
                ) from e
            graph.add(a)
            graph.add(b)
            if not graph.connect(a, b, cost):
                raise exceptions.InvalidEdgeError(f"Edge {a!r} - {b!r} has cost {cost!r} < 1")
        return graph

    @property
    def config(self) -> GraphConfig:
        """Explicit config if one was given, else settings from the environment."""
        if self._config is not None:
            return self._config
        return config_mod.load_config()

    # --- Node/edge registry ---

    def add(self, key: K) -> bool:
        """Insert a node. Returns False (and changes nothing) if ``key`` exists."""
        if key in self._nodes:
            return False
        self._nodes[key] = Node(key)
        return True

    def connect(self, a: K, b: K, cost: int) -> bool:
        """Join ``a`` and ``b`` with an edge of ``cost``, or update the existing edge's cost.

        Returns:
            False without mutating if either key is unknown or cost < 1, else True

        Raises:
            InvalidEdgeError: If cost is a bool or not integer-like (``operator.index`` fails)
        """
        if isinstance(cost, bool):
            raise exceptions.InvalidEdgeError("Edge cost must be an int, got bool")
        try:
            cost = operator.index(cost)
        except TypeError as e:
            raise exceptions.InvalidEdgeError(
                f"Edge cost must be an int, got {type(cost).__name__}"
            ) from e
        if a not in self._nodes or b not in self._nodes or cost < 1:
            return False

        pair = frozenset((a, b))
        existing = self._edge_index.get(pair)
        if existing is not None:
            if existing.cost != cost:
                logger.debug(f"Updating cost of {a!r} - {b!r}: {existing.cost} -> {cost}")
            existing.cost = cost
            return True

        edge = Edge(a, b, cost)
        self._edges.append(edge)
        self._edge_index[pair] = edge
        self._nodes[a].neighbors.append(b)
        if a != b:
            self._nodes[b].neighbors.append(a)
        return True

    def _disconnect(self, a: K, b: K) -> None:
        """Remove the edge between ``a`` and ``b`` and both adjacency entries.

        Only used to roll back a rejected spanning tree edge, so the edge is
        expected to exist.
        """
        edge = self._edge_index.pop(frozenset((a, b)))
        # Identity match: remove exactly the stored record
        position = next(i for i, e in enumerate(self._edges) if e is edge)
        del self._edges[position]
        self._nodes[a].neighbors.remove(b)
        if a != b:
            self._nodes[b].neighbors.remove(a)

    def number_of_nodes(self) -> int:
        return len(self._nodes)

    def number_of_edges(self) -> int:
        return len(self._edges)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, key: object) -> bool:
        return key in self._nodes

    def __iter__(self) -> Iterator[K]:
        return iter(self._nodes)

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self._nodes)}, edges={len(self._edges)})"

    def nodes(self) -> list[K]:
        """Node keys in insertion order."""
        return list(self._nodes)

    def neighbors(self, key: K) -> list[K]:
        """Keys adjacent to ``key`` in connection order (empty for unknown keys)."""
        node = self._nodes.get(key)
        if node is None:
            return []
        return list(node.neighbors)

    def edges(self) -> list[Edge[K]]:
        """Copies of all edges in insertion order; mutating them does not touch the graph."""
        return [dataclasses.replace(edge) for edge in self._edges]

    # --- Connectivity and cost ---

    def is_connected(self, a: K, b: K) -> bool:
        """True iff an edge joins ``a`` and ``b``. False if either key is unknown."""
        if a not in self._nodes or b not in self._nodes:
            return False
        return b in self._nodes[a].neighbors

    def get_cost(self, a: K, b: K) -> int | None:
        """Cost of the edge between ``a`` and ``b``, or None if there is no such edge."""
        if a not in self._nodes or b not in self._nodes:
            return None
        edge = self._edge_index.get(frozenset((a, b)))
        return edge.cost if edge is not None else None

    def total_cost(self) -> int:
        """Sum of all edge costs."""
        return sum(edge.cost for edge in self._edges)

    # --- Traversal ---

    def search(self, start: K, end: K, order: SearchOrder = SearchOrder.DFS) -> list[K] | None:
        """Path from ``start`` to ``end`` found with the given frontier discipline.

        Returns None if either key is unknown or ``end`` is unreachable.
        """
        with metrics.timed(f"graph.search.{order}"):
            return traversal.search(
                self._nodes,
                start,
                end,
                order=order,
                early_exit=self.config.search_early_exit,
            )

    def depth_first_search(self, start: K, end: K) -> list[K] | None:
        return self.search(start, end, SearchOrder.DFS)

    def breadth_first_search(self, start: K, end: K) -> list[K] | None:
        """Path with the fewest edges from ``start`` to ``end``, or None."""
        return self.search(start, end, SearchOrder.BFS)

    def reachable(self, start: K) -> set[K]:
        """Keys in the component containing ``start`` (empty set for unknown keys)."""
        return traversal.reachable(self._nodes, start)

    def connected_components(self) -> list[set[K]]:
        return traversal.connected_components(self._nodes)

    def is_fully_connected(self) -> bool:
        """True if every node can reach every other (vacuously True when empty)."""
        return len(self.connected_components()) <= 1

    # --- Spanning tree ---

    def minimum_spanning_tree(self) -> Graph[K]:
        """Build a new graph holding a minimum-cost spanning tree of this one.

        The result contains every node of this graph. For a graph with several
        components the result is a minimum spanning forest, or
        GraphNotConnectedError is raised, depending on
        ``config.disconnected_policy``. This graph is left untouched.

        Raises:
            GraphNotConnectedError: If disconnected and the policy is RAISE
        """
        with metrics.timed("graph.minimum_spanning_tree"):
            return mst.minimum_spanning_tree(self)

    # --- Interop ---

    def to_networkx(self) -> nx.Graph[K]:
        """Copy into a networkx Graph; costs are stored on the ``weight`` attribute."""
        result: nx.Graph[K] = nx.Graph()
        result.add_nodes_from(self._nodes)
        result.add_weighted_edges_from(edge.as_tuple() for edge in self._edges)
        return result
