"""Breadth-first topological sorting (Kahn's algorithm).

The sort counts, for every vertex, the arcs entering it. It then repeatedly
removes a vertex with no remaining incoming arcs and consumes the arcs
leaving it. If some vertices never reach a zero count, the graph has a cycle
and the sort fails with CycleDetectedError instead of returning a partial
order.
"""

from collections import deque
from collections.abc import Hashable

from arcwalk.graph.digraph import Digraph
from arcwalk.graph.errors import CycleDetectedError
from arcwalk.log_config import get_logger

logger = get_logger(__name__)


class IncomingCount:
    """Mutable count of unconsumed incoming arcs per vertex."""

    def __init__(self, counts: dict[Hashable, int]):
        self._counts = counts

    @classmethod
    def from_transpose(cls, transposed: Digraph) -> "IncomingCount":
        """Build counts from a transposed graph.

        A vertex's successors in the transpose are its predecessors in the
        original graph, so the out-degree in the transpose is the original
        in-degree.
        """
        return cls({v: transposed.out_degree_of(v) for v in transposed.vertices()})

    def __getitem__(self, vertex: Hashable) -> int:
        return self._counts[vertex]

    def ready(self) -> list[Hashable]:
        """Vertices with no remaining incoming arcs, in vertex order."""
        return [v for v, count in self._counts.items() if count == 0]

    def consume(self, vertex: Hashable) -> int:
        """Consume one incoming arc of ``vertex`` and return the remaining count."""
        self._counts[vertex] -= 1
        return self._counts[vertex]

    def unresolved(self) -> list[Hashable]:
        """Vertices that still have unconsumed incoming arcs."""
        return [v for v, count in self._counts.items() if count > 0]


class BreadthFirstTopologicalSort:
    """Kahn's algorithm over a Digraph.

    Vertices that become ready at the same time are emitted in the order
    they became ready. Subclasses may override _next_vertex to change how
    the ready queue is drained.

    Example:
        >>> graph = Digraph(arcs=[("a", "b"), ("a", "c"), ("b", "d"), ("c", "d")])
        >>> BreadthFirstTopologicalSort(graph).sort()
        ['a', 'b', 'c', 'd']
    """

    def __init__(self, graph: Digraph):
        self.graph = graph

    def sort(self) -> list[Hashable]:
        """Return every vertex so that each arc's tail precedes its head.

        Raises:
            CycleDetectedError: If the graph contains a cycle. The error's
                ``unresolved`` attribute lists the vertices left unordered.
        """
        incomings = IncomingCount.from_transpose(self.graph.transpose())

        # Prime the queue with vertices that have no incoming arcs.
        queue: deque = deque(incomings.ready())
        tsl: list[Hashable] = []

        while queue:
            vertex = self._next_vertex(queue)
            tsl.append(vertex)

            for head in self.graph.successors_of(vertex):
                if incomings.consume(head) == 0:
                    queue.append(head)

        if len(tsl) != self.graph.order():
            raise CycleDetectedError(incomings.unresolved())

        logger.debug("topological_sort_complete", vertex_count=len(tsl))

        return tsl

    def _next_vertex(self, queue: deque) -> Hashable:
        return queue.popleft()


def topological_sort(graph: Digraph) -> list[Hashable]:
    """Sort ``graph`` topologically with Kahn's algorithm.

    Raises:
        CycleDetectedError: If the graph contains a cycle
    """
    return BreadthFirstTopologicalSort(graph).sort()
