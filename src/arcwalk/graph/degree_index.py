"""Vertex bookkeeping for adjacency-based directed graphs.

The index maps every vertex to two insertion-ordered adjacency maps: the
successors it points at (with the data of the connecting arc) and the
predecessors pointing at it. Degrees are the sizes of those maps, so they
are available in constant time.
"""

from collections.abc import Hashable, Iterator
from dataclasses import dataclass, field
from typing import Any

from arcwalk.graph.errors import NonexistentVertexError


@dataclass
class AdjacencyEntry:
    """Adjacency lists of a single vertex.

    Attributes:
        successors: Heads of arcs leaving the vertex, mapped to arc data
        predecessors: Tails of arcs entering the vertex, mapped to arc data
    """

    successors: dict[Hashable, Any] = field(default_factory=dict)
    predecessors: dict[Hashable, Any] = field(default_factory=dict)


class VertexDegreeIndex:
    """Map from vertex identity to adjacency lists and degree counts.

    A vertex is a member of the index if and only if it is a key of the
    index, whether or not it has arcs. Parallel arcs between the same pair
    collapse into one adjacency; recording one again only replaces its data.
    """

    def __init__(self):
        """Initialize an empty index."""
        self._entries: dict[Hashable, AdjacencyEntry] = {}
        self._arc_count = 0

    def __contains__(self, vertex: Hashable) -> bool:
        return vertex in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._entries)

    @property
    def arc_count(self) -> int:
        """Number of distinct (tail, head) adjacencies recorded."""
        return self._arc_count

    def register(self, vertex: Hashable) -> bool:
        """Register a vertex if it is absent.

        Returns:
            True if the vertex was added, False if it was already present
        """
        if vertex in self._entries:
            return False
        self._entries[vertex] = AdjacencyEntry()
        return True

    def connect(self, tail: Hashable, head: Hashable, data: Any = None) -> bool:
        """Record the adjacency tail -> head, registering both endpoints.

        Returns:
            True if the adjacency is new, False if it replaced existing data
        """
        self.register(tail)
        self.register(head)

        successors = self._entries[tail].successors
        is_new = head not in successors
        successors[head] = data
        self._entries[head].predecessors[tail] = data
        if is_new:
            self._arc_count += 1
        return is_new

    def entry(self, vertex: Hashable) -> AdjacencyEntry:
        """Get the adjacency entry of a vertex.

        Raises:
            NonexistentVertexError: If the vertex is not registered
        """
        try:
            return self._entries[vertex]
        except KeyError:
            raise NonexistentVertexError(vertex) from None

    def require(self, vertex: Hashable) -> None:
        """Raise NonexistentVertexError unless the vertex is registered."""
        if vertex not in self._entries:
            raise NonexistentVertexError(vertex)

    def has_adjacency(self, tail: Hashable, head: Hashable) -> bool:
        entry = self._entries.get(tail)
        return entry is not None and head in entry.successors

    def in_degree(self, vertex: Hashable) -> int:
        return len(self.entry(vertex).predecessors)

    def out_degree(self, vertex: Hashable) -> int:
        return len(self.entry(vertex).successors)
