"""Directed graph data structures and cycle analysis.

This module contains:
- Digraph: an adjacency-based directed graph with insertion-ordered enumeration
- VertexDegreeIndex: the vertex bookkeeping behind Digraph
- CycleDetector: depth-first cycle detection with path reporting
"""

from arcwalk.graph.degree_index import VertexDegreeIndex
from arcwalk.graph.digraph import Arc, Digraph
from arcwalk.graph.errors import ArcwalkError, CycleDetectedError, NonexistentVertexError
from arcwalk.graph.cycles import CycleDetector, CycleReport, get_cycles, is_acyclic

__all__ = [
    "Arc",
    "ArcwalkError",
    "CycleDetectedError",
    "CycleDetector",
    "CycleReport",
    "Digraph",
    "NonexistentVertexError",
    "VertexDegreeIndex",
    "get_cycles",
    "is_acyclic",
]
