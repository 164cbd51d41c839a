"""Unit tests for CycleDetector and CycleReport.

Tests cover:
- Acyclic and cyclic graphs
- Cycle path reporting
- Self loops and disconnected components
- Report generation
"""

import pytest

from arcwalk.graph.cycles import CycleDetector, CycleReport, get_cycles, is_acyclic
from arcwalk.graph.digraph import Digraph


class TestCycleReport:
    """Test CycleReport functionality."""

    def test_initialization(self):
        """Test that CycleReport initializes as acyclic."""
        report = CycleReport()

        assert report.is_acyclic is True
        assert report.cycles == []
        assert report.sources == []
        assert report.sinks == []

    def test_summary_acyclic(self):
        """Test summary generation for an acyclic report."""
        summary = CycleReport(sources=["a"], sinks=["b"]).summary()

        assert "Acyclic: YES" in summary
        assert "Cycles: 0" in summary
        assert "Sources: 1" in summary

    def test_summary_with_cycles(self):
        """Test summary generation with cycle information."""
        report = CycleReport(is_acyclic=False, cycles=[["x", "y", "x"]])
        summary = report.summary()

        assert "Acyclic: NO" in summary
        assert "Cycles: 1" in summary
        assert "x -> y -> x" in summary


class TestCycleDetector:
    """Test cycle detection over graphs."""

    def test_empty_graph_is_acyclic(self):
        """Test the empty graph has no cycles."""
        graph = Digraph()

        assert is_acyclic(graph)
        assert get_cycles(graph) == []

    def test_dag_is_acyclic(self):
        """Test a diamond DAG has no cycles."""
        graph = Digraph(arcs=[("a", "b"), ("a", "c"), ("b", "d"), ("c", "d")])

        assert graph.is_acyclic()
        assert graph.get_cycles() == []

    def test_two_cycle(self):
        """Test X -> Y -> X reports one cycle starting at the first vertex."""
        graph = Digraph(arcs=[("x", "y"), ("y", "x")])

        assert not graph.is_acyclic()
        assert graph.get_cycles() == [["x", "y", "x"]]

    def test_two_cycle_root_dependence(self):
        """Test the reported cycle starts at whichever vertex is walked first."""
        graph = Digraph(vertices=["y"], arcs=[("x", "y"), ("y", "x")])

        assert graph.get_cycles() == [["y", "x", "y"]]

    def test_three_cycle(self):
        """Test a 3-cycle is reported as a closed path."""
        graph = Digraph(arcs=[("a", "b"), ("b", "c"), ("c", "a")])

        assert get_cycles(graph) == [["a", "b", "c", "a"]]

    def test_cycle_reached_from_source(self):
        """Test a cycle below a source vertex reports only the cycle part."""
        graph = Digraph(arcs=[("start", "a"), ("a", "b"), ("b", "a"), ("b", "end")])

        assert get_cycles(graph) == [["a", "b", "a"]]

    def test_self_loop(self):
        """Test a self loop is a cycle of one vertex."""
        graph = Digraph(arcs=[("a", "b"), ("b", "b")])

        assert not is_acyclic(graph)
        assert get_cycles(graph) == [["b", "b"]]

    def test_multiple_cycles(self):
        """Test every back edge contributes a cycle."""
        graph = Digraph(arcs=[("a", "b"), ("b", "a"), ("b", "c"), ("c", "b"), ("d", "d")])

        assert get_cycles(graph) == [["a", "b", "a"], ["b", "c", "b"], ["d", "d"]]

    def test_cross_edge_is_not_a_cycle(self):
        """Test an arc into a finished vertex is not reported as a cycle."""
        graph = Digraph(arcs=[("a", "b"), ("a", "c"), ("c", "b")])

        assert is_acyclic(graph)

    def test_forward_edge_is_not_a_cycle(self):
        """Test an arc to a finished descendant is not reported as a cycle."""
        graph = Digraph(arcs=[("a", "b"), ("b", "c"), ("a", "c")])

        assert is_acyclic(graph)

    def test_is_acyclic_agrees_with_get_cycles(self):
        """Test is_acyclic is true exactly when no cycle is reported."""
        graphs = [
            Digraph(),
            Digraph(vertices=["a"]),
            Digraph(arcs=[("a", "b")]),
            Digraph(arcs=[("a", "a")]),
            Digraph(arcs=[("a", "b"), ("b", "c"), ("c", "a"), ("c", "d")]),
        ]

        for graph in graphs:
            detector = CycleDetector(graph)
            assert detector.is_acyclic() == (detector.get_cycles() == [])

    def test_get_cycles_returns_copies(self):
        """Test callers cannot corrupt cached results."""
        detector = CycleDetector(Digraph(arcs=[("x", "y"), ("y", "x")]))
        detector.get_cycles()[0].append("z")

        assert detector.get_cycles() == [["x", "y", "x"]]

    def test_report(self):
        """Test report includes cycles, sources and sinks."""
        graph = Digraph(arcs=[("s", "a"), ("a", "b"), ("b", "a"), ("b", "t")])
        report = CycleDetector(graph).report()

        assert report.is_acyclic is False
        assert report.cycles == [["a", "b", "a"]]
        assert report.sources == ["s"]
        assert report.sinks == ["t"]

    @pytest.mark.parametrize("length", [2, 5, 50])
    def test_ring_of_any_length(self, length):
        """Test rings of various lengths are reported as a single cycle."""
        graph = Digraph()
        for i in range(length):
            graph.add_arc(i, (i + 1) % length)

        assert get_cycles(graph) == [[*range(length), 0]]

    def test_back_edges_into_same_vertex(self):
        """Test each back edge into a shared vertex yields its own cycle."""
        graph = Digraph(arcs=[("a", "b"), ("b", "a"), ("b", "c"), ("c", "a")])

        assert get_cycles(graph) == [["a", "b", "a"], ["a", "b", "c", "a"]]


class TestDeepGraphs:
    """Test cycle detection on graphs deeper than the interpreter recursion limit."""

    def test_long_chain_is_acyclic(self):
        """Test a 12,000 vertex chain is checked with default settings."""
        graph = Digraph(arcs=[(i, i + 1) for i in range(12_000)])

        assert is_acyclic(graph) is True
        assert graph.is_acyclic() is True

    def test_long_ring_has_one_cycle(self):
        """Test a 12,000 vertex ring is reported as one closed cycle."""
        length = 12_000
        graph = Digraph(arcs=[(i, (i + 1) % length) for i in range(length)])

        cycles = get_cycles(graph)

        assert len(cycles) == 1
        assert cycles[0][0] == cycles[0][-1] == 0
        assert len(cycles[0]) == length + 1
