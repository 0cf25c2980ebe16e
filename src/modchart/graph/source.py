"""Graph sources that supply modules and their imports to the walker."""

import ast
import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from ..errors import GraphSourceError
from .models import ModuleNode

logger = logging.getLogger(__name__)


class GraphSource(ABC):
    """Read-only provider of modules for graph traversal."""

    @abstractmethod
    def find_root(self, name: str) -> ModuleNode | None:
        """Look up the module with the given name, or None if there is none."""
        pass

    @abstractmethod
    def children_of(self, node: ModuleNode) -> Sequence[ModuleNode]:
        """Modules imported by ``node``, in declaration order."""
        pass


class GraphDocument(BaseModel):
    """On-disk JSON layout for a module graph."""
    modules: dict[str, list[str]] = Field(default_factory=dict)


class MappingGraphSource(GraphSource):
    """Graph source backed by a ``{module: [imports...]}`` mapping.

    Imported names that have no entry of their own are treated as modules
    without imports.
    """

    def __init__(self, mapping: Mapping[str, Iterable[str]]):
        self._mapping = mapping
        self._nodes: dict[str, ModuleNode] = {}

    @classmethod
    def from_json(cls, path: str | Path) -> "MappingGraphSource":
        """Load a graph from a JSON file.

        Accepts either ``{"modules": {...}}`` or the bare mapping.

        Raises:
            GraphSourceError: If the file is missing, unreadable or malformed
        """
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise GraphSourceError(f"Invalid JSON in graph file {path}: {e}") from e
        except OSError as e:
            raise GraphSourceError(f"Cannot read graph file {path}: {e}") from e

        if isinstance(data, dict) and "modules" not in data:
            data = {"modules": data}

        try:
            document = GraphDocument.model_validate(data)
        except ValidationError as e:
            raise GraphSourceError(f"Malformed graph file {path}: {e}") from e

        logger.debug(f"Loaded {len(document.modules)} modules from {path}")
        return cls(document.modules)

    def find_root(self, name: str) -> ModuleNode | None:
        if name not in self._mapping:
            return None
        return self._node(name)

    def children_of(self, node: ModuleNode) -> Sequence[ModuleNode]:
        return [self._node(name) for name in node.imports]

    def _node(self, name: str) -> ModuleNode:
        node = self._nodes.get(name)
        if node is None:
            # Repeated imports of one module collapse to a single edge.
            imports = tuple(dict.fromkeys(self._mapping.get(name, ())))
            node = ModuleNode(name=name, imports=imports)
            self._nodes[name] = node
        return node


class PackageGraphSource(GraphSource):
    """Graph source reading intra-package imports from a Python package.

    Every ``.py`` file below ``package_dir`` is a module named by its dotted
    path (``__init__.py`` names its package). A module's children are the
    modules of the same package it imports, in source order. Imports of
    anything outside the package are left out.
    """

    def __init__(self, package_dir: str | Path):
        self.package_dir = Path(package_dir).resolve()
        if not self.package_dir.is_dir():
            raise GraphSourceError(f"Package directory not found: {self.package_dir}")
        if not (self.package_dir / "__init__.py").exists():
            raise GraphSourceError(f"Not a Python package (no __init__.py): {self.package_dir}")

        self.package_name = self.package_dir.name
        self._files = self._discover_modules()
        self._nodes: dict[str, ModuleNode] = {}

    @property
    def module_names(self) -> list[str]:
        return list(self._files)

    def find_root(self, name: str) -> ModuleNode | None:
        if name not in self._files:
            return None
        return self._node(name)

    def children_of(self, node: ModuleNode) -> Sequence[ModuleNode]:
        return [self._node(name) for name in node.imports]

    def _discover_modules(self) -> dict[str, Path]:
        files = {}
        for py_file in sorted(self.package_dir.rglob("*.py")):
            relative = py_file.relative_to(self.package_dir).with_suffix("")
            parts = [self.package_name, *relative.parts]
            if parts[-1] == "__init__":
                parts = parts[:-1]
            files[".".join(parts)] = py_file
        logger.debug(f"Discovered {len(files)} modules in {self.package_dir}")
        return files

    def _node(self, name: str) -> ModuleNode:
        node = self._nodes.get(name)
        if node is None:
            node = ModuleNode(name=name, imports=tuple(self._imports_of(name)))
            self._nodes[name] = node
        return node

    def _imports_of(self, module_name: str) -> list[str]:
        path = self._files.get(module_name)
        if path is None:
            return []

        try:
            tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
        except (SyntaxError, UnicodeDecodeError) as e:
            logger.warning(f"Skipping imports of {path}: {e}")
            return []

        import_nodes = [
            n for n in ast.walk(tree) if isinstance(n, (ast.Import, ast.ImportFrom))
        ]
        import_nodes.sort(key=lambda n: (n.lineno, n.col_offset))

        is_package = path.name == "__init__.py"
        imports: list[str] = []
        for import_node in import_nodes:
            for target in self._resolve(import_node, module_name, is_package):
                if target != module_name and target not in imports:
                    imports.append(target)
        return imports

    def _resolve(self, node: ast.Import | ast.ImportFrom, module_name: str, is_package: bool) -> list[str]:
        if isinstance(node, ast.Import):
            resolved = [self._closest_module(alias.name) for alias in node.names]
            return [name for name in resolved if name]

        if node.level:
            package_parts = module_name.split(".")
            if not is_package:
                package_parts = package_parts[:-1]
            if node.level - 1 >= len(package_parts):
                return []
            base_parts = package_parts[:len(package_parts) - (node.level - 1)]
            base = ".".join(base_parts)
            if node.module:
                base = f"{base}.{node.module}"
        else:
            base = node.module or ""

        resolved = []
        for alias in node.names:
            candidate = f"{base}.{alias.name}"
            if candidate in self._files:
                resolved.append(candidate)
            else:
                closest = self._closest_module(base)
                if closest:
                    resolved.append(closest)
        return resolved

    def _closest_module(self, dotted: str) -> str | None:
        """Longest prefix of ``dotted`` that is a module of this package."""
        while dotted:
            if dotted in self._files:
                return dotted
            if "." not in dotted:
                break
            dotted = dotted.rsplit(".", 1)[0]
        return None
