"""Frontier-driven graph traversal over a key -> Node registry.

All per-traversal state (visited set, predecessors) lives in locals created
fresh for each call, so repeated searches on the same graph never see each
other's leftovers.
"""

from __future__ import annotations

import collections
import logging
from typing import TYPE_CHECKING, Final

from ugraph import metrics
from ugraph.types import SearchOrder

if TYPE_CHECKING:
    from collections.abc import Hashable, Mapping

    from ugraph.types import Node

logger = logging.getLogger(__name__)

# Predecessor of the traversal root; keys may be None so None can't mark it
_ROOT: Final = object()


def search[K: Hashable](
    registry: Mapping[K, Node[K]],
    start: K,
    end: K,
    order: SearchOrder = SearchOrder.DFS,
    early_exit: bool = False,
) -> list[K] | None:
    """Find a path from ``start`` to ``end``.

    Args:
        registry: Mapping of key -> Node for the graph being searched
        start: Key the path begins at
        end: Key the path ends at
        order: DFS pops the newest frontier entry, BFS the oldest
        early_exit: Stop as soon as ``end`` is discovered instead of exploring
            the whole component. The path is the same either way because a
            predecessor is only ever recorded on first discovery.

    Returns:
        Keys from start to end inclusive, or None if either key is unknown or
        no path exists. ``[start]`` when start == end.

    Example:
        >>> # a - b - c
        >>> search(registry, "a", "c", SearchOrder.BFS)
        ['a', 'b', 'c']
    """
    if start not in registry or end not in registry:
        return None
    if start == end:
        return [start]

    predecessors = _explore(registry, start, order, stop_at=end if early_exit else _ROOT)
    metrics.count("traversal.nodes_visited", len(predecessors))
    path = _reconstruct_path(predecessors, start, end)
    if path is None:
        logger.debug(f"No path from {start!r} to {end!r} ({order} visited {len(predecessors)})")
    return path


def reachable[K: Hashable](registry: Mapping[K, Node[K]], start: K) -> set[K]:
    """Return every key in the component containing ``start`` (empty if unknown)."""
    if start not in registry:
        return set()
    return set(_explore(registry, start, SearchOrder.BFS))


def connected_components[K: Hashable](registry: Mapping[K, Node[K]]) -> list[set[K]]:
    """Split the graph into components, ordered by their first key in registry order."""
    components = list[set[K]]()
    seen = set[K]()
    for key in registry:
        if key in seen:
            continue
        component = reachable(registry, key)
        seen.update(component)
        components.append(component)
    return components


def _explore[K: Hashable](
    registry: Mapping[K, Node[K]],
    start: K,
    order: SearchOrder,
    stop_at: object = _ROOT,
) -> dict[K, object]:
    """Run one traversal from ``start`` and return key -> predecessor for each visited key.

    A key is marked when it is first pushed onto the frontier, and that is
    the only time its predecessor is written. The start key maps to _ROOT.
    """
    predecessors: dict[K, object] = {start: _ROOT}
    frontier = collections.deque([start])
    pop = frontier.pop if order == SearchOrder.DFS else frontier.popleft

    while frontier:
        current = pop()
        for neighbor in registry[current].neighbors:
            if neighbor in predecessors:
                continue
            predecessors[neighbor] = current
            if neighbor == stop_at:
                return predecessors
            frontier.append(neighbor)

    return predecessors


def _reconstruct_path[K: Hashable](
    predecessors: Mapping[K, object], start: K, end: K
) -> list[K] | None:
    """Walk predecessor links back from ``end`` to ``start``.

    Returns None when ``end`` was never reached, or when the chain runs out
    before arriving at ``start``.
    """
    if end not in predecessors:
        return None

    path = [end]
    current: K = end
    while current != start:
        previous = predecessors.get(current, _ROOT)
        if previous is _ROOT:
            return None
        current = previous  # pyright: ignore[reportAssignmentType]
        path.append(current)

    path.reverse()
    return path


def closes_cycle[K: Hashable](registry: Mapping[K, Node[K]], start: K) -> bool:
    """Check whether the component containing ``start`` contains a cycle.

    Depth-first from ``start``: reaching an already-visited neighbor that is
    not the node we arrived from means there are two routes to it. Used by
    spanning tree construction right after tentatively adding an edge at
    ``start``; since the tree was acyclic before, any cycle found runs
    through that edge.
    """
    predecessors: dict[K, object] = {start: _ROOT}
    stack = [start]

    while stack:
        current = stack.pop()
        for neighbor in registry[current].neighbors:
            if neighbor in predecessors:
                if neighbor != predecessors[current]:
                    return True
                continue
            predecessors[neighbor] = current
            stack.append(neighbor)

    return False
