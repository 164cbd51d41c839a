"""Traversal algorithms over directed graphs.

This module contains:
- depth_first_traverse: visitor-driven depth-first traversal
- topological_sort: breadth-first topological sorting (Kahn's algorithm)
"""

from arcwalk.traversal.depth_first import (
    DepthFirstTraversal,
    TraversalState,
    VertexState,
    depth_first_topological_sort,
    depth_first_traverse,
)
from arcwalk.traversal.topological import (
    BreadthFirstTopologicalSort,
    IncomingCount,
    topological_sort,
)
from arcwalk.traversal.visitor import (
    DepthFirstNoOpVisitor,
    DepthFirstToposortVisitor,
    DepthFirstVisitor,
)

__all__ = [
    "BreadthFirstTopologicalSort",
    "DepthFirstNoOpVisitor",
    "DepthFirstToposortVisitor",
    "DepthFirstTraversal",
    "DepthFirstVisitor",
    "IncomingCount",
    "TraversalState",
    "VertexState",
    "depth_first_topological_sort",
    "depth_first_traverse",
    "topological_sort",
]
