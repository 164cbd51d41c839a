"""Error kinds raised across the graph API.

All errors derive from ArcwalkError so callers can catch library failures
in one place. Errors are raised synchronously to the direct caller and are
never logged, retried or swallowed inside the library.
"""

from collections.abc import Hashable, Iterable


class ArcwalkError(Exception):
    """Base class for all graph library errors."""


class NonexistentVertexError(ArcwalkError, KeyError):
    """Exception raised when a query names a vertex that is not in the graph.

    Add operations never raise this error, they register unknown vertices.
    """

    def __init__(self, vertex: Hashable):
        """Initialize the exception with the offending vertex.

        Args:
            vertex: The vertex that was not found in the graph
        """
        super().__init__(vertex)
        self.vertex = vertex
        self.message = f"Vertex not present in graph: {vertex!r}"

    def __str__(self) -> str:
        return self.message


class CycleDetectedError(ArcwalkError):
    """Exception raised when an ordering is requested for a cyclic graph.

    A cycle means some vertices depend on themselves through a chain of arcs,
    making it impossible to produce a topological order.

    Attributes:
        unresolved: Vertices that could not be placed in the ordering
        message: Human-readable description of the failure
    """

    def __init__(self, unresolved: Iterable[Hashable], message: str | None = None):
        """Initialize the exception.

        Args:
            unresolved: Vertices left without a position in the ordering
            message: Optional override for the default description
        """
        self.unresolved = tuple(unresolved)
        if message is None:
            listed = ", ".join(repr(v) for v in self.unresolved)
            message = f"Cycle detected - graph is not acyclic, unresolved vertices: {listed}"
        super().__init__(message)
        self.message = message
