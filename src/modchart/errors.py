"""Exceptions raised by modchart."""


class ModchartError(Exception):
    """Base class for modchart errors."""
    pass


class RootNotFoundError(ModchartError):
    """Raised when the graph source has no module with the root name."""

    def __init__(self, root_name: str):
        self.root_name = root_name
        super().__init__(f"{root_name} not found")


class GraphSourceError(ModchartError):
    """Raised when a graph source cannot be built from its input."""
    pass
