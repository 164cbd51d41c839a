"""Cycle detection with path reporting.

This module finds directed cycles by running a full depth-first traversal
and recording a cycle for every back edge the walk meets. A back edge into
vertex V closes the loop formed by the current path from V to the vertex
being explored.
"""

from collections.abc import Hashable
from dataclasses import dataclass, field

from arcwalk.graph.digraph import Digraph
from arcwalk.log_config import get_logger
from arcwalk.traversal.depth_first import depth_first_traverse
from arcwalk.traversal.visitor import DepthFirstVisitor, Visit

logger = get_logger(__name__)


class CycleRecordingVisitor(DepthFirstVisitor):
    """Visitor that records one cycle per back edge.

    Each cycle starts and ends with the vertex the back edge points at.
    Hooks do not see the engine state, so the visitor tracks the path itself.
    """

    def __init__(self):
        self.cycles: list[list[Hashable]] = []
        self._path: list[Hashable] = []

    def on_start_vertex(self, vertex: Hashable, visit: Visit) -> None:
        self._path.append(vertex)

    def on_back_edge(self, vertex: Hashable, visit: Visit) -> None:
        self.cycles.append([*self._path[self._path.index(vertex):], vertex])

    def on_finish_vertex(self, vertex: Hashable, visit: Visit) -> None:
        self._path.pop()


@dataclass
class CycleReport:
    """Outcome of cycle detection over a graph.

    Attributes:
        is_acyclic: Whether the graph has no directed cycle
        cycles: Detected cycles, each closed by repeating its first vertex
        sources: Vertices with no incoming arcs
        sinks: Vertices with no outgoing arcs
    """

    is_acyclic: bool = True
    cycles: list[list[Hashable]] = field(default_factory=list)
    sources: list[Hashable] = field(default_factory=list)
    sinks: list[Hashable] = field(default_factory=list)

    def summary(self) -> str:
        """Generate a human-readable summary of the report."""
        lines = []
        lines.append(f"Acyclic: {'YES' if self.is_acyclic else 'NO'}")
        lines.append(f"Cycles: {len(self.cycles)}")
        lines.append(f"Sources: {len(self.sources)}")
        lines.append(f"Sinks: {len(self.sinks)}")

        if self.cycles:
            lines.append("\nCycles Detected:")
            for i, cycle in enumerate(self.cycles, 1):
                cycle_path = " -> ".join(str(v) for v in cycle)
                lines.append(f"  {i}. {cycle_path}")

        return "\n".join(lines)


class CycleDetector:
    """Detect the cycles of a graph with one full depth-first traversal.

    The traversal runs lazily on first query and its result is kept, so the
    graph must not be mutated between queries on the same detector.

    Cycles depend on traversal roots: the walk starts from source vertices
    in vertex order, then from any vertex still unvisited. For the graph
    X -> Y -> X with X added first, the reported cycle is [X, Y, X].

    Example:
        >>> detector = CycleDetector(Digraph(arcs=[("x", "y"), ("y", "x")]))
        >>> detector.is_acyclic()
        False
        >>> detector.get_cycles()
        [['x', 'y', 'x']]
    """

    def __init__(self, graph: Digraph):
        self.graph = graph
        self._cycles: list[list[Hashable]] | None = None

    def _detect(self) -> list[list[Hashable]]:
        if self._cycles is None:
            visitor = CycleRecordingVisitor()
            depth_first_traverse(self.graph, visitor)
            self._cycles = visitor.cycles

            logger.debug(
                "cycle_detection_complete",
                vertex_count=self.graph.order(),
                cycle_count=len(self._cycles),
            )

        return self._cycles

    def is_acyclic(self) -> bool:
        return not self._detect()

    def get_cycles(self) -> list[list[Hashable]]:
        """Return the detected cycles, empty when the graph is acyclic."""
        return [list(cycle) for cycle in self._detect()]

    def report(self) -> CycleReport:
        """Build a CycleReport for the graph."""
        cycles = self.get_cycles()
        return CycleReport(
            is_acyclic=not cycles,
            cycles=cycles,
            sources=self.graph.sources(),
            sinks=self.graph.sinks(),
        )


def is_acyclic(graph: Digraph) -> bool:
    """Check whether ``graph`` has no directed cycle."""
    return CycleDetector(graph).is_acyclic()


def get_cycles(graph: Digraph) -> list[list[Hashable]]:
    """Return the cycles of ``graph`` found by a full depth-first walk."""
    return CycleDetector(graph).get_cycles()
