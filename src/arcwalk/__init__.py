"""Directed graphs with depth-first and breadth-first traversal algorithms.

Build a Digraph, then walk it with a visitor, sort it topologically or
check it for cycles:

    >>> from arcwalk import Digraph, topological_sort
    >>> graph = Digraph(arcs=[("fetch", "build"), ("build", "test")])
    >>> topological_sort(graph)
    ['fetch', 'build', 'test']
"""

from arcwalk.graph import (
    Arc,
    ArcwalkError,
    CycleDetectedError,
    CycleDetector,
    CycleReport,
    Digraph,
    NonexistentVertexError,
    VertexDegreeIndex,
    get_cycles,
    is_acyclic,
)
from arcwalk.traversal import (
    BreadthFirstTopologicalSort,
    DepthFirstNoOpVisitor,
    DepthFirstToposortVisitor,
    DepthFirstTraversal,
    DepthFirstVisitor,
    IncomingCount,
    TraversalState,
    VertexState,
    depth_first_topological_sort,
    depth_first_traverse,
    topological_sort,
)

__version__ = "0.1.0"

__all__ = [
    "Arc",
    "ArcwalkError",
    "BreadthFirstTopologicalSort",
    "CycleDetectedError",
    "CycleDetector",
    "CycleReport",
    "DepthFirstNoOpVisitor",
    "DepthFirstToposortVisitor",
    "DepthFirstTraversal",
    "DepthFirstVisitor",
    "Digraph",
    "IncomingCount",
    "NonexistentVertexError",
    "TraversalState",
    "VertexDegreeIndex",
    "VertexState",
    "depth_first_topological_sort",
    "depth_first_traverse",
    "get_cycles",
    "is_acyclic",
    "topological_sort",
]
