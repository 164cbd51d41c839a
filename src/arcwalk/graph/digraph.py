"""Adjacency-based directed graph.

This module provides the Digraph class, a mutable directed graph whose
vertices are arbitrary hashable values and whose arcs are ordered
(tail, head) pairs with optional opaque data.
"""

from collections.abc import Hashable, Iterable, Iterator
from itertools import chain
from typing import Any, NamedTuple

from arcwalk.graph.degree_index import VertexDegreeIndex
from arcwalk.log_config import get_logger

logger = get_logger(__name__)


class Arc(NamedTuple):
    """A directed edge from tail to head.

    Attributes:
        tail: Origin vertex of the arc
        head: Destination vertex of the arc
        data: Opaque data passed through unchanged (None when absent)
    """

    tail: Hashable
    head: Hashable
    data: Any = None


class Digraph:
    """Directed graph backed by a vertex degree index.

    Vertices and arcs are enumerated in insertion order. Successors of a
    vertex follow the order in which its outgoing arcs were added, and
    predecessors follow the order in which its incoming arcs were added.

    Adding an arc registers both endpoints. There is no removal operation.
    Re-adding an existing (tail, head) pair replaces its data and leaves
    degrees unchanged.

    Thread-safety:
        This class is NOT thread-safe. Do not mutate a Digraph while a
        traversal or an enumeration over it is in progress; the behaviour
        of the in-flight operation is undefined in that case.

    Example:
        >>> graph = Digraph()
        >>> graph.add_arc("a", "b")
        >>> graph.add_arc("a", "c")
        >>> list(graph.successors_of("a"))
        ['b', 'c']
        >>> graph.in_degree_of("b")
        1
    """

    def __init__(
        self,
        vertices: Iterable[Hashable] | None = None,
        arcs: Iterable[tuple] | None = None,
    ):
        """Initialize a graph, optionally seeded with vertices and arcs.

        Args:
            vertices: Vertices to register, in order
            arcs: (tail, head) or (tail, head, data) tuples to add, in order
        """
        self._index = VertexDegreeIndex()

        for vertex in vertices or ():
            self.add_vertex(vertex)
        for arc in arcs or ():
            self.add_arc(*arc)

    def __contains__(self, vertex: Hashable) -> bool:
        return vertex in self._index

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        return f"Digraph(order={self.order()}, size={self.size()})"

    def add_vertex(self, vertex: Hashable) -> None:
        """Add a vertex to the graph. Adding a known vertex is a no-op.

        Args:
            vertex: Any hashable value
        """
        self._index.register(vertex)

    def add_arc(self, tail: Hashable, head: Hashable, data: Any = None) -> None:
        """Add the arc tail -> head, registering unknown endpoints.

        Args:
            tail: Origin vertex
            head: Destination vertex
            data: Optional opaque data carried by the arc
        """
        self._index.connect(tail, head, data)

    def has_vertex(self, vertex: Hashable) -> bool:
        return vertex in self._index

    def has_arc(self, tail: Hashable, head: Hashable) -> bool:
        return self._index.has_adjacency(tail, head)

    def order(self) -> int:
        """Number of vertices in the graph."""
        return len(self._index)

    def size(self) -> int:
        """Number of arcs in the graph."""
        return self._index.arc_count

    def vertices(self) -> Iterator[Hashable]:
        """Enumerate every vertex in insertion order."""
        return iter(self._index)

    def arcs(self) -> Iterator[Arc]:
        """Enumerate every arc, grouped by tail in vertex order."""
        return (
            Arc(tail, head, data)
            for tail in self._index
            for head, data in self._index.entry(tail).successors.items()
        )

    def successors_of(self, vertex: Hashable) -> Iterator[Hashable]:
        """Enumerate the heads of arcs leaving a vertex.

        A vertex B is a successor of A if an arc points from A to B.

        Args:
            vertex: The vertex whose successors should be enumerated

        Returns:
            An iterator over successor vertices in arc insertion order

        Raises:
            NonexistentVertexError: If the vertex is not in the graph
        """
        return iter(self._index.entry(vertex).successors)

    def predecessors_of(self, vertex: Hashable) -> Iterator[Hashable]:
        """Enumerate the tails of arcs entering a vertex.

        Raises:
            NonexistentVertexError: If the vertex is not in the graph
        """
        return iter(self._index.entry(vertex).predecessors)

    def arcs_from(self, vertex: Hashable) -> Iterator[Arc]:
        """Enumerate the out-arcs of a vertex as Arc tuples.

        Raises:
            NonexistentVertexError: If the vertex is not in the graph
        """
        successors = self._index.entry(vertex).successors
        return (Arc(vertex, head, data) for head, data in successors.items())

    def arcs_to(self, vertex: Hashable) -> Iterator[Arc]:
        """Enumerate the in-arcs of a vertex as Arc tuples.

        Raises:
            NonexistentVertexError: If the vertex is not in the graph
        """
        predecessors = self._index.entry(vertex).predecessors
        return (Arc(tail, vertex, data) for tail, data in predecessors.items())

    def adjacent_to(self, vertex: Hashable) -> Iterator[Hashable]:
        """Enumerate successors then predecessors, each vertex once.

        Raises:
            NonexistentVertexError: If the vertex is not in the graph
        """
        entry = self._index.entry(vertex)
        return iter(dict.fromkeys([*entry.successors, *entry.predecessors]))

    def incident_to(self, vertex: Hashable) -> Iterator[Arc]:
        """Enumerate out-arcs then in-arcs of a vertex.

        A self loop is both an out-arc and an in-arc and is yielded once.

        Raises:
            NonexistentVertexError: If the vertex is not in the graph
        """
        entry = self._index.entry(vertex)
        return chain(
            (Arc(vertex, head, data) for head, data in entry.successors.items()),
            (Arc(tail, vertex, data) for tail, data in entry.predecessors.items() if tail != vertex),
        )

    def in_degree_of(self, vertex: Hashable) -> int:
        """Number of arcs entering a vertex.

        Raises:
            NonexistentVertexError: If the vertex is not in the graph
        """
        return self._index.in_degree(vertex)

    def out_degree_of(self, vertex: Hashable) -> int:
        """Number of arcs leaving a vertex.

        Raises:
            NonexistentVertexError: If the vertex is not in the graph
        """
        return self._index.out_degree(vertex)

    def degree_of(self, vertex: Hashable) -> int:
        return self._index.in_degree(vertex) + self._index.out_degree(vertex)

    def sources(self) -> list[Hashable]:
        """Vertices with no incoming arcs, in vertex order."""
        return [v for v in self._index if self._index.in_degree(v) == 0]

    def sinks(self) -> list[Hashable]:
        """Vertices with no outgoing arcs, in vertex order."""
        return [v for v in self._index if self._index.out_degree(v) == 0]

    def transpose(self) -> "Digraph":
        """Return a new graph with every arc reversed.

        The transpose has the same vertex set, in the same order, and carries
        the same arc data. It shares no mutable state with this graph.

        Returns:
            A new Digraph instance
        """
        transposed = Digraph(vertices=self.vertices())
        for tail, head, data in self.arcs():
            transposed.add_arc(head, tail, data)

        logger.debug("graph_transposed", order=self.order(), size=self.size())

        return transposed

    def copy(self) -> "Digraph":
        """Return an independent copy of this graph."""
        return Digraph(vertices=self.vertices(), arcs=self.arcs())

    def is_acyclic(self) -> bool:
        """Check whether the graph has no directed cycle."""
        from arcwalk.graph.cycles import CycleDetector  # noqa: PLC0415

        return CycleDetector(self).is_acyclic()

    def get_cycles(self) -> list[list[Hashable]]:
        """Return the cycles found by a full depth-first walk.

        Returns:
            A list of cycles, each a list of vertices whose first and last
            elements are the same vertex. Empty if the graph is acyclic.
        """
        from arcwalk.graph.cycles import CycleDetector  # noqa: PLC0415

        return CycleDetector(self).get_cycles()
