"""Graph traversal and rendering for modchart.

A ``GraphSource`` supplies modules, ``GraphWalker`` collects import edges from
a root module and ``MermaidRenderer`` turns the edges into flowchart text.
"""

from .mermaid import FlowchartRenderer, MermaidRenderer
from .models import Edge, ModuleNode
from .source import GraphSource, MappingGraphSource, PackageGraphSource
from .walker import GraphWalker, Traversal, always_record, hide_edges_from

__all__ = [
    "Edge",
    "FlowchartRenderer",
    "GraphSource",
    "GraphWalker",
    "MappingGraphSource",
    "MermaidRenderer",
    "ModuleNode",
    "PackageGraphSource",
    "Traversal",
    "always_record",
    "hide_edges_from",
]
