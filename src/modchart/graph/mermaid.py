"""Mermaid flowchart renderer for module import edges."""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from .models import Edge

MERMAID_FENCE_OPEN = "```mermaid"
MERMAID_FENCE_CLOSE = "```"


class FlowchartRenderer(ABC):
    """Abstract base class for flowchart renderers."""

    @abstractmethod
    def render(self, edges: Iterable[Edge]) -> str:
        """Render edges to diagram text."""
        pass


class MermaidRenderer(FlowchartRenderer):
    """Renders edges as a top-down Mermaid flowchart.

    With ``fenced`` the diagram is wrapped in a ```` ```mermaid ```` code
    block so it renders inline in Markdown documents.
    """

    def __init__(self, fenced: bool = True, direction: str = "TD"):
        self.fenced = fenced
        self.direction = direction

    def render(self, edges: Iterable[Edge]) -> str:
        """Render edges in the given order, one ``A --> B;`` line each."""
        lines = []
        if self.fenced:
            lines.append(MERMAID_FENCE_OPEN)

        lines.append(f"flowchart {self.direction}")
        for edge in edges:
            lines.append(self._render_edge(edge))

        if self.fenced:
            lines.append(MERMAID_FENCE_CLOSE)

        return "\n".join(lines)

    def _render_edge(self, edge: Edge) -> str:
        return f"{edge.source} --> {edge.target};"
