"""Graph data models for module flowcharts."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ModuleNode:
    """A named module and the names of the modules it imports.

    Equality and hashing use the name only, so two nodes built separately for
    the same module are the same node to the walker.
    """
    name: str
    imports: tuple[str, ...] = field(default=(), compare=False)


@dataclass(frozen=True)
class Edge:
    """Directed edge meaning ``source`` imports ``target``."""
    source: str
    target: str

    def as_tuple(self) -> tuple[str, str]:
        return (self.source, self.target)
