from __future__ import annotations

import dataclasses
import enum
from collections.abc import Hashable
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)


class SearchOrder(enum.StrEnum):
    """Frontier discipline for path search."""

    DFS = "dfs"
    BFS = "bfs"


class DisconnectedPolicy(enum.StrEnum):
    """What minimum_spanning_tree does when the graph has several components."""

    FOREST = "forest"
    RAISE = "raise"


@dataclasses.dataclass
class Node(Generic[K]):  # noqa: UP046 - basedpyright doesn't support PEP 695 syntax yet
    """One vertex: its key and the keys of its neighbors, in connection order.

    Neighbors are stored as keys, never as Node references; the owning graph's
    registry is the only place keys resolve to nodes.
    """

    key: K
    neighbors: list[K] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class Edge(Generic[K]):  # noqa: UP046 - basedpyright doesn't support PEP 695 syntax yet
    """Undirected weighted connection. ``first``/``second`` order carries no meaning."""

    first: K
    second: K
    cost: int

    @property
    def endpoints(self) -> frozenset[K]:
        """Unordered pair identifying the edge (a single key for self-loops)."""
        return frozenset((self.first, self.second))

    @property
    def is_loop(self) -> bool:
        return self.first == self.second

    def as_tuple(self) -> tuple[K, K, int]:
        return (self.first, self.second, self.cost)
