"""Demonstration of scheduling build steps with arcwalk.

This example builds a small dependency graph, checks it for cycles,
prints a breadth-first build order and uses a custom visitor to report
the depth at which each step is first reached.
"""

from collections.abc import Hashable

from arcwalk import (
    CycleDetectedError,
    CycleDetector,
    DepthFirstVisitor,
    Digraph,
    depth_first_traverse,
    topological_sort,
)
from arcwalk.log_config import configure_logging, get_logger, log_context


class DepthReportingVisitor(DepthFirstVisitor):
    """Records how deep in the walk each vertex was started."""

    def __init__(self) -> None:
        self.depths: dict[Hashable, int] = {}
        self._depth = 0

    def on_start_vertex(self, vertex, visit) -> None:
        self.depths[vertex] = self._depth
        self._depth += 1

    def on_finish_vertex(self, vertex, visit) -> None:
        self._depth -= 1


def build_graph() -> Digraph:
    """Build the example dependency graph; an arc points at what depends on its tail."""
    graph = Digraph()
    graph.add_arc("fetch-sources", "configure")
    graph.add_arc("fetch-sources", "generate-headers")
    graph.add_arc("configure", "compile")
    graph.add_arc("generate-headers", "compile", {"reason": "headers"})
    graph.add_arc("compile", "link")
    graph.add_arc("link", "test")
    graph.add_arc("link", "package")
    return graph


def main() -> None:
    """Run the demonstration."""
    configure_logging(level="DEBUG", json_logs=False)
    logger = get_logger(__name__)

    with log_context(example="build_order"):
        graph = build_graph()
        report = CycleDetector(graph).report()
        print(report.summary())

        order = topological_sort(graph)
        logger.info("build_order_computed", steps=order)

        visitor = DepthReportingVisitor()
        depth_first_traverse(graph, visitor)
        for step in order:
            print("  " * visitor.depths[step] + step)

        graph.add_arc("test", "compile")
        try:
            topological_sort(graph)
        except CycleDetectedError as e:
            logger.warning("build_graph_cyclic", unresolved=list(e.unresolved))
            print(CycleDetector(graph).report().summary())


if __name__ == "__main__":
    main()
