from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0-dev"

# Public API; helpers such as ugraph.traversal and ugraph.mst are reachable
# through their full module paths

if TYPE_CHECKING:
    from ugraph.config import GraphConfig as GraphConfig
    from ugraph.exceptions import GraphError as GraphError
    from ugraph.exceptions import GraphNotConnectedError as GraphNotConnectedError
    from ugraph.exceptions import InvalidEdgeError as InvalidEdgeError
    from ugraph.graph import Graph as Graph
    from ugraph.types import DisconnectedPolicy as DisconnectedPolicy
    from ugraph.types import Edge as Edge
    from ugraph.types import SearchOrder as SearchOrder

# Lazy import mapping for runtime
_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "DisconnectedPolicy": ("ugraph.types", "DisconnectedPolicy"),
    "Edge": ("ugraph.types", "Edge"),
    "Graph": ("ugraph.graph", "Graph"),
    "GraphConfig": ("ugraph.config", "GraphConfig"),
    "GraphError": ("ugraph.exceptions", "GraphError"),
    "GraphNotConnectedError": ("ugraph.exceptions", "GraphNotConnectedError"),
    "InvalidEdgeError": ("ugraph.exceptions", "InvalidEdgeError"),
    "SearchOrder": ("ugraph.types", "SearchOrder"),
}


def __getattr__(name: str) -> object:
    """Lazily import public API members on first access."""
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        import importlib

        module = importlib.import_module(module_path)
        value = getattr(module, attr_name)
        # Cache in module globals for subsequent access
        globals()[name] = value
        return value
    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)


def __dir__() -> list[str]:
    """List available attributes including lazy imports."""
    return list(globals().keys()) + list(_LAZY_IMPORTS.keys())
