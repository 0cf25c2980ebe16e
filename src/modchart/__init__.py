"""modchart - Render module import graphs as Mermaid flowcharts.

modchart walks a root module's transitive imports exactly once per module and
emits a deterministic flowchart for documentation and architecture reviews.
"""

__version__ = "0.1.0"
__author__ = "modchart contributors"
__description__ = "Render module import graphs as Mermaid flowcharts"

from modchart.config import FlowchartConfig, apply_defaults
from modchart.errors import GraphSourceError, ModchartError, RootNotFoundError
from modchart.flowchart import FlowchartService, generate_flowchart

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "FlowchartConfig",
    "FlowchartService",
    "GraphSourceError",
    "ModchartError",
    "RootNotFoundError",
    "apply_defaults",
    "generate_flowchart",
]
