"""Visitor protocol for depth-first traversal.

A visitor receives callbacks while the traversal engine walks a graph.
Every hook is optional: DepthFirstVisitor implements all of them as no-ops,
so subclasses override only what they need.

Hooks that receive ``visit`` may call it with a vertex to steer the walk:
an unvisited vertex is started immediately, a vertex on the current path is
reported as a back edge and a finished vertex is ignored.
"""

from collections import deque
from collections.abc import Callable, Hashable

from arcwalk.graph.errors import CycleDetectedError

Visit = Callable[[Hashable], None]


class DepthFirstVisitor:
    """Base visitor with no-op hooks.

    Hooks are called in this order for every vertex reached:
    on_start_vertex, then on_examine_edge for each outgoing arc (with
    on_back_edge for arcs into a vertex on the current path), then
    on_finish_vertex. on_initialize_vertex is called for every vertex of
    the graph before the walk begins.
    """

    def on_initialize_vertex(self, vertex: Hashable, source: bool, frontier: deque) -> None:
        """Called once per vertex before traversal begins.

        Args:
            vertex: The vertex being initialized
            source: True when the vertex has no incoming arcs
            frontier: FIFO queue of roots; append to schedule extra roots
        """

    def on_start_vertex(self, vertex: Hashable, visit: Visit) -> None:
        """Called when a vertex is entered and put on the current path."""

    def on_examine_edge(self, tail: Hashable, head: Hashable, visit: Visit) -> None:
        """Called for each outgoing arc before the engine visits its head."""

    def on_back_edge(self, vertex: Hashable, visit: Visit) -> None:
        """Called when an arc leads to a vertex already on the current path."""

    def on_finish_vertex(self, vertex: Hashable, visit: Visit) -> None:
        """Called when all arcs of a vertex have been examined."""


class DepthFirstNoOpVisitor(DepthFirstVisitor):
    """A visitor that does nothing, used to walk a graph for its own sake."""


class DepthFirstToposortVisitor(DepthFirstVisitor):
    """Collects vertices in reverse finishing order.

    Reverse finishing order of a full depth-first walk is a topological order
    when the graph is acyclic. The first back edge aborts the walk with
    CycleDetectedError.
    """

    def __init__(self):
        self._finished: list[Hashable] = []
        self._path: list[Hashable] = []

    def on_start_vertex(self, vertex: Hashable, visit: Visit) -> None:
        self._path.append(vertex)

    def on_back_edge(self, vertex: Hashable, visit: Visit) -> None:
        cycle = self._path[self._path.index(vertex):]
        msg = "Cycle detected - graph is not acyclic, topological sort is not possible: " + (
            " -> ".join(repr(v) for v in [*cycle, vertex])
        )
        raise CycleDetectedError(cycle, msg)

    def on_finish_vertex(self, vertex: Hashable, visit: Visit) -> None:
        self._path.pop()
        self._finished.append(vertex)

    def get_tsl(self) -> list[Hashable]:
        """Return the topologically sorted list of finished vertices."""
        return self._finished[::-1]
