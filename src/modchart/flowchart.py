"""Flowchart generation service: root lookup, traversal, rendering, output."""

import logging
from collections.abc import Mapping

from modchart.config import FlowchartConfig, apply_defaults
from modchart.errors import RootNotFoundError
from modchart.graph import (
    Edge,
    FlowchartRenderer,
    GraphSource,
    GraphWalker,
    MermaidRenderer,
    always_record,
    hide_edges_from,
)
from modchart.output import FileSink, OutputSink

logger = logging.getLogger(__name__)


class FlowchartService:
    """Generates a module flowchart from a graph source.

    The service holds configuration only. Every call to :meth:`generate`
    starts a fresh traversal, so one instance can be reused.
    """

    def __init__(
        self,
        source: GraphSource,
        config: Mapping | FlowchartConfig | None = None,
        sink: OutputSink | None = None,
        renderer: FlowchartRenderer | None = None,
    ):
        self.source = source
        self.config = apply_defaults(config)
        self.sink = sink or FileSink()
        self.renderer = renderer or MermaidRenderer(fenced=self.config.fenced)
        self.walker = self._create_walker()

    def _create_walker(self) -> GraphWalker:
        if self.config.display_app_module:
            record_edge = always_record
        else:
            record_edge = hide_edges_from(self.config.root_module)
        return GraphWalker(
            self.source,
            ignore=self.config.ignore_set,
            record_edge=record_edge,
        )

    def on_startup(self) -> str:
        """Host hook, called once application startup has completed."""
        return self.generate()

    def collect_edges(self) -> list[Edge]:
        """Traverse from the configured root and return the import edges.

        Raises:
            RootNotFoundError: If the source has no module named like the root
        """
        logger.info(f"Generating flowchart from {self.config.root_module}")
        root = self.source.find_root(self.config.root_module)
        if root is None:
            raise RootNotFoundError(self.config.root_module)
        return self.walker.traverse(root)

    def generate(self, persist: bool = True) -> str:
        """Generate the flowchart, persist it and return the diagram text.

        Write failures are logged and do not abort generation.

        Raises:
            RootNotFoundError: If the source has no module named like the root
        """
        return self.render(self.collect_edges(), persist=persist)

    def render(self, edges: list[Edge], persist: bool = True) -> str:
        """Render collected edges and, when ``persist`` is set, save the text."""
        flowchart = self.renderer.render(edges)

        if persist and self.config.output_path:
            self._save(flowchart)

        return flowchart

    def _save(self, flowchart: str) -> None:
        output_path = self.config.output_path
        try:
            self.sink.write(output_path, flowchart)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to save flowchart to {output_path}: {e}")
            return
        logger.info(f"Flowchart saved to {output_path}")


def generate_flowchart(
    source: GraphSource,
    config: Mapping | FlowchartConfig | None = None,
    sink: OutputSink | None = None,
) -> str:
    """Generate a flowchart in one call. See :class:`FlowchartService`."""
    return FlowchartService(source, config, sink=sink).generate()
