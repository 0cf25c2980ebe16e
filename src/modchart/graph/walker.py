"""Depth-first import graph walker."""

import logging
from collections.abc import Callable, Iterable, Iterator

from .models import Edge, ModuleNode
from .source import GraphSource

logger = logging.getLogger(__name__)

EdgePredicate = Callable[[str, str], bool]

_EXHAUSTED = object()


def always_record(source: str, target: str) -> bool:
    """Default edge predicate: every edge is recorded."""
    return True


def hide_edges_from(root_name: str) -> EdgePredicate:
    """Edge predicate that drops edges leaving ``root_name``."""

    def record(source: str, target: str) -> bool:
        return source != root_name

    return record


class Traversal:
    """State of a single walk: visited module names and collected edges."""

    def __init__(self):
        self.visited: set[str] = set()
        self.edges: list[Edge] = []


class GraphWalker:
    """Collects import edges reachable from a root module.

    Each module is expanded at most once, so cycles and diamonds terminate.
    Edges come out in depth-first pre-order following the child order of the
    graph source. Modules named in ``ignore`` are pruned together with
    everything only reachable through them.
    """

    def __init__(
        self,
        source: GraphSource,
        ignore: Iterable[str] = (),
        record_edge: EdgePredicate = always_record,
    ):
        self.source = source
        self.ignore = frozenset(ignore)
        self.record_edge = record_edge

    def traverse(self, root: ModuleNode) -> list[Edge]:
        """Walk the graph from ``root`` and return the collected edges.

        An ignored root yields no edges.
        """
        traversal = Traversal()
        if root.name in self.ignore:
            logger.debug(f"Root {root.name} is ignored, nothing to traverse")
            return traversal.edges

        self._walk(root, traversal)
        logger.debug(
            f"Traversed {len(traversal.visited)} modules from {root.name}, "
            f"collected {len(traversal.edges)} edges"
        )
        return traversal.edges

    def _walk(self, root: ModuleNode, traversal: Traversal) -> None:
        # Stack of (module, pending children); yields recursive pre-order.
        stack: list[tuple[ModuleNode, Iterator[ModuleNode]]] = []
        self._expand(root, traversal, stack)

        while stack:
            node, children = stack[-1]
            child = next(children, _EXHAUSTED)
            if child is _EXHAUSTED:
                stack.pop()
                continue

            if child.name in self.ignore:
                continue

            if self.record_edge(node.name, child.name):
                traversal.edges.append(Edge(node.name, child.name))

            self._expand(child, traversal, stack)

    def _expand(
        self,
        node: ModuleNode,
        traversal: Traversal,
        stack: list[tuple[ModuleNode, Iterator[ModuleNode]]],
    ) -> None:
        if node.name in traversal.visited:
            return
        traversal.visited.add(node.name)
        stack.append((node, iter(self.source.children_of(node))))
