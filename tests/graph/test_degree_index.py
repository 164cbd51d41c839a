"""Unit tests for VertexDegreeIndex."""

import pytest

from arcwalk.graph.degree_index import AdjacencyEntry, VertexDegreeIndex
from arcwalk.graph.errors import NonexistentVertexError


class TestVertexDegreeIndex:
    """Test vertex registration and adjacency bookkeeping."""

    def test_register_reports_new_vertices(self):
        """Test register returns True only the first time."""
        index = VertexDegreeIndex()

        assert index.register("a") is True
        assert index.register("a") is False
        assert len(index) == 1
        assert "a" in index

    def test_connect_registers_endpoints(self):
        """Test connecting unknown vertices registers both of them."""
        index = VertexDegreeIndex()
        index.connect("a", "b", data="payload")

        assert list(index) == ["a", "b"]
        assert index.entry("a").successors == {"b": "payload"}
        assert index.entry("b").predecessors == {"a": "payload"}

    def test_connect_counts_distinct_adjacencies(self):
        """Test arc_count ignores repeated adjacencies."""
        index = VertexDegreeIndex()

        assert index.connect("a", "b") is True
        assert index.connect("a", "b", data=1) is False
        assert index.connect("b", "a") is True
        assert index.arc_count == 2

    def test_degrees(self):
        """Test in and out degree follow adjacency sizes."""
        index = VertexDegreeIndex()
        index.connect("a", "b")
        index.connect("a", "c")
        index.connect("c", "b")

        assert index.out_degree("a") == 2
        assert index.in_degree("b") == 2
        assert index.in_degree("a") == 0
        assert index.has_adjacency("c", "b")
        assert not index.has_adjacency("b", "c")

    def test_entry_for_isolated_vertex(self):
        """Test an isolated vertex has an empty entry."""
        index = VertexDegreeIndex()
        index.register("solo")

        assert index.entry("solo") == AdjacencyEntry()

    def test_unknown_vertex(self):
        """Test lookups of unknown vertices raise NonexistentVertexError."""
        index = VertexDegreeIndex()

        with pytest.raises(NonexistentVertexError):
            index.entry("missing")
        with pytest.raises(NonexistentVertexError):
            index.require("missing")
        with pytest.raises(NonexistentVertexError):
            index.out_degree("missing")
