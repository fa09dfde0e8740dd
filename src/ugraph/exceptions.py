from typing import override


class GraphError(Exception):
    """Base exception for ugraph errors."""

    def format_user_message(self) -> str:
        """Format a user-friendly error message."""
        return str(self)

    def get_suggestion(self) -> str | None:
        """Return actionable suggestion for resolving the error."""
        return None


class InvalidEdgeError(GraphError):
    """Raised when an edge definition is malformed (wrong shape or non-integer cost).

    A well-typed cost below 1 is not an error: ``Graph.connect`` rejects it by
    returning False.
    """

    @override
    def get_suggestion(self) -> str:
        return "Edges are (node, node, cost) triples with an integer cost >= 1"


class GraphNotConnectedError(GraphError):
    """Raised when a spanning tree is requested for a graph with several components."""

    def __init__(self, component_count: int) -> None:
        self.component_count = component_count
        super().__init__(
            f"Graph is not connected ({component_count} components); no spanning tree exists"
        )

    @override
    def get_suggestion(self) -> str:
        return "Set UGRAPH_DISCONNECTED_POLICY=forest to build a minimum spanning forest instead"


class ConfigError(GraphError):
    """Raised when configuration values are invalid."""

    pass
