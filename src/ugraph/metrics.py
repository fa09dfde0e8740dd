"""Opt-in instrumentation for searches and spanning tree construction.

Two kinds of metric are collected while enabled (``UGRAPH_METRICS=1`` or
``enable()``):

- timings of whole operations, e.g. ``graph.search.bfs``
- work counters, e.g. ``traversal.nodes_visited`` or ``mst.edges_rejected``
"""

from __future__ import annotations

import collections
import contextlib
import os
import time
from typing import TYPE_CHECKING, TypedDict

if TYPE_CHECKING:
    from collections.abc import Generator

# Module-level state; graphs are single-threaded.

_enabled = os.environ.get("UGRAPH_METRICS", "").lower() in ("1", "true", "yes")
_durations: dict[str, list[float]] = {}
_counters: collections.Counter[str] = collections.Counter()


class TimingSummary(TypedDict):
    """Timings for one operation name."""

    calls: int
    total_ms: float
    max_ms: float


def enable() -> None:
    global _enabled
    _enabled = True


def disable() -> None:
    """Stop collecting; what was already collected is kept."""
    global _enabled
    _enabled = False


def is_enabled() -> bool:
    return _enabled


def clear() -> None:
    _durations.clear()
    _counters.clear()


def count(name: str, amount: int = 1) -> None:
    """Add ``amount`` to the work counter ``name``."""
    if _enabled:
        _counters[name] += amount


def counters() -> dict[str, int]:
    """Work counters, sorted by name."""
    return dict(sorted(_counters.items()))


def timings() -> dict[str, TimingSummary]:
    """Per-operation call count, total and slowest duration, sorted by name."""
    return {
        name: TimingSummary(calls=len(durations), total_ms=sum(durations), max_ms=max(durations))
        for name, durations in sorted(_durations.items())
    }


@contextlib.contextmanager
def timed(name: str) -> Generator[None]:
    """Record how long the block takes under ``name`` (no-op while disabled).

    Usage:
        with metrics.timed("graph.minimum_spanning_tree"):
            ...
    """
    if not _enabled:
        yield
        return

    start = time.perf_counter()
    try:
        yield
    finally:
        _durations.setdefault(name, []).append((time.perf_counter() - start) * 1000)
