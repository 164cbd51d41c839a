"""Visitor-driven depth-first traversal.

The engine walks a Digraph and reports progress to a DepthFirstVisitor.
Each vertex moves through three states, UNVISITED -> VISITING -> FINISHED,
and never goes back. An arc into a VISITING vertex is a back edge and is
routed to the visitor's on_back_edge hook instead of being followed.

Exceptions raised by visitor hooks propagate out of the traversal call
unchanged; the engine performs no recovery.
"""

import sys
from collections import deque
from collections.abc import Hashable, Iterable, Iterator
from contextlib import contextmanager
from enum import Enum

from arcwalk.graph.digraph import Digraph
from arcwalk.graph.errors import NonexistentVertexError
from arcwalk.log_config import get_logger
from arcwalk.traversal.visitor import (
    DepthFirstNoOpVisitor,
    DepthFirstToposortVisitor,
    DepthFirstVisitor,
)

logger = get_logger(__name__)

_EXHAUSTED = object()


class VertexState(Enum):
    """Traversal color of a vertex."""

    UNVISITED = "unvisited"
    VISITING = "visiting"
    FINISHED = "finished"


class TraversalState:
    """Per-traversal vertex coloring and the current path.

    Attributes:
        path: Vertices currently VISITING, from the root of the active
            subtree to the vertex being explored
    """

    def __init__(self):
        """Initialize with every vertex UNVISITED."""
        self._states: dict[Hashable, VertexState] = {}
        self._finish_order: list[Hashable] = []
        self.path: list[Hashable] = []

    def state_of(self, vertex: Hashable) -> VertexState:
        return self._states.get(vertex, VertexState.UNVISITED)

    def start(self, vertex: Hashable) -> None:
        """Move a vertex from UNVISITED to VISITING and push it on the path.

        Raises:
            ValueError: If the vertex is not UNVISITED
        """
        current = self.state_of(vertex)
        if current is not VertexState.UNVISITED:
            msg = f"Cannot start vertex {vertex!r} in state {current.value}"
            raise ValueError(msg)
        self._states[vertex] = VertexState.VISITING
        self.path.append(vertex)

    def finish(self, vertex: Hashable) -> None:
        """Move a vertex from VISITING to FINISHED and pop it off the path.

        Raises:
            ValueError: If the vertex is not the VISITING top of the path
        """
        if not self.path or self.path[-1] != vertex:
            msg = f"Cannot finish vertex {vertex!r}: not at the top of the path"
            raise ValueError(msg)
        self.path.pop()
        self._states[vertex] = VertexState.FINISHED
        self._finish_order.append(vertex)

    def finished(self) -> list[Hashable]:
        """Vertices that reached FINISHED, in finishing order."""
        return list(self._finish_order)


@contextmanager
def _recursion_limit(limit: int) -> Iterator[None]:
    """Raise the interpreter recursion limit to ``limit`` for the block."""
    current = sys.getrecursionlimit()
    if limit <= current:
        yield
        return

    sys.setrecursionlimit(limit)
    try:
        yield
    finally:
        sys.setrecursionlimit(current)


class DepthFirstTraversal:
    """Depth-first walk of a graph reporting to a visitor.

    The engine descends with an explicit stack of successor iterators, so
    path length is not bounded by the interpreter recursion limit. Only
    visitors that call ``visit`` from inside a hook add interpreter frames.

    Do not mutate the graph while the traversal runs.

    Example:
        >>> graph = Digraph(arcs=[("a", "b"), ("b", "c")])
        >>> state = DepthFirstTraversal(graph).run(roots=["a"])
        >>> state.finished()
        ['c', 'b', 'a']
    """

    def __init__(self, graph: Digraph, visitor: DepthFirstVisitor | None = None):
        """Initialize the traversal.

        Args:
            graph: The graph to walk
            visitor: Receiver of traversal hooks (no-op visitor if None)
        """
        self.graph = graph
        self.visitor = visitor if visitor is not None else DepthFirstNoOpVisitor()
        self.state = TraversalState()

    def _enter(self, vertex: Hashable) -> Iterator[Hashable]:
        self.state.start(vertex)
        self.visitor.on_start_vertex(vertex, self.visit)
        return self.graph.successors_of(vertex)

    def visit(self, vertex: Hashable) -> None:
        """Continuation handed to visitor hooks; walks into ``vertex``.

        Raises:
            NonexistentVertexError: If the vertex is not in the graph
        """
        status = self.state.state_of(vertex)

        if status is VertexState.VISITING:
            self.visitor.on_back_edge(vertex, self.visit)
            return
        if status is VertexState.FINISHED:
            return

        if vertex not in self.graph:
            raise NonexistentVertexError(vertex)

        stack = [(vertex, self._enter(vertex))]
        while stack:
            tail, successors = stack[-1]
            head = next(successors, _EXHAUSTED)

            if head is _EXHAUSTED:
                stack.pop()
                self.visitor.on_finish_vertex(tail, self.visit)
                self.state.finish(tail)
                continue

            self.visitor.on_examine_edge(tail, head, self.visit)
            status = self.state.state_of(head)
            if status is VertexState.VISITING:
                self.visitor.on_back_edge(head, self.visit)
            elif status is VertexState.UNVISITED:
                stack.append((head, self._enter(head)))

    def run(
        self,
        roots: Iterable[Hashable] | None = None,
        recursion_limit: int | None = None,
    ) -> TraversalState:
        """Walk the graph.

        Every call starts from a fresh TraversalState, so a traversal can be
        run again on the same instance.

        Args:
            roots: Vertices to start from, in order. If None, the walk starts
                from every source vertex and then from every vertex still
                unvisited, covering the whole graph.
            recursion_limit: Minimum interpreter recursion limit during the
                walk, for visitors that nest deeply through ``visit``. The
                current limit is kept if None.

        Returns:
            The final TraversalState

        Raises:
            NonexistentVertexError: If a root is not in the graph
        """
        frontier: deque = deque()
        if roots is not None:
            frontier.extend(roots)
            for root in frontier:
                if root not in self.graph:
                    raise NonexistentVertexError(root)

        self.state = TraversalState()

        for vertex in self.graph.vertices():
            source = self.graph.in_degree_of(vertex) == 0
            self.visitor.on_initialize_vertex(vertex, source, frontier)
            if roots is None and source:
                frontier.append(vertex)

        logger.debug(
            "depth_first_traversal_started",
            visitor=type(self.visitor).__name__,
            root_count=len(frontier),
            full_coverage=roots is None,
        )

        with _recursion_limit(recursion_limit or sys.getrecursionlimit()):
            while frontier:
                self.visit(frontier.popleft())

            if roots is None:
                for vertex in self.graph.vertices():
                    if self.state.state_of(vertex) is VertexState.UNVISITED:
                        self.visit(vertex)

        logger.debug(
            "depth_first_traversal_complete",
            visitor=type(self.visitor).__name__,
            finished_count=len(self.state.finished()),
        )

        return self.state


def depth_first_traverse(
    graph: Digraph,
    visitor: DepthFirstVisitor | None = None,
    roots: Iterable[Hashable] | None = None,
    recursion_limit: int | None = None,
) -> TraversalState:
    """Run a depth-first traversal of ``graph`` reporting to ``visitor``.

    See DepthFirstTraversal.run for the meaning of the arguments.
    """
    return DepthFirstTraversal(graph, visitor).run(roots=roots, recursion_limit=recursion_limit)


def depth_first_topological_sort(graph: Digraph) -> list[Hashable]:
    """Order vertices so every arc points forward, using reverse finishing order.

    Raises:
        CycleDetectedError: If the walk meets a back edge
    """
    visitor = DepthFirstToposortVisitor()
    depth_first_traverse(graph, visitor)
    return visitor.get_tsl()
