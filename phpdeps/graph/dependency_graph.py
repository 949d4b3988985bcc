"""File/symbol dependency graph backed by networkx.DiGraph."""

from __future__ import annotations

import networkx as nx

from phpdeps.graph.dependency_index import DependencyIndex
from phpdeps.graph.symbol_table import SymbolTable


class DependencyGraph:
    """Wrapper around networkx.DiGraph with typed node/edge methods.

    Nodes are ``file:<path>`` and ``symbol:<name>``. Edges are ``DEFINES``
    (file -> symbol it declares) and ``DEPENDS_ON`` (file -> symbol it
    references). Only direct edges are stored.
    """

    def __init__(self) -> None:
        self.graph = nx.DiGraph()

    @classmethod
    def from_indices(cls, symbols: SymbolTable, dependencies: DependencyIndex) -> DependencyGraph:
        graph = cls()
        for file_path in dependencies.file_to_deps:
            graph.add_file(file_path)
        for name, declaration in symbols.declarations.items():
            graph.add_definition(declaration.file, name, declaration.kind.value)
        for file_path, names in dependencies.file_to_deps.items():
            for name in names:
                graph.add_dependency(file_path, name)
        return graph

    # --- Node / edge addition ---

    def add_file(self, path: str) -> None:
        self.graph.add_node(f"file:{path}", node_type="file", path=path)

    def _ensure_symbol(self, name: str) -> str:
        node_id = f"symbol:{name}"
        if not self.graph.has_node(node_id):
            self.graph.add_node(node_id, node_type="symbol", name=name, kind=None)
        return node_id

    def add_definition(self, path: str, name: str, kind: str) -> None:
        self.add_file(path)
        node_id = self._ensure_symbol(name)
        self.graph.nodes[node_id]["kind"] = kind
        self.graph.add_edge(f"file:{path}", node_id, edge_type="DEFINES")

    def add_dependency(self, path: str, name: str) -> None:
        self.add_file(path)
        node_id = self._ensure_symbol(name)
        self.graph.add_edge(f"file:{path}", node_id, edge_type="DEPENDS_ON")

    # --- Queries ---

    def _in_edges(self, name: str, edge_type: str) -> list[str]:
        node_id = f"symbol:{name}"
        if not self.graph.has_node(node_id):
            return []
        return [
            self.graph.nodes[src]["path"]
            for src, _, data in self.graph.in_edges(node_id, data=True)
            if data.get("edge_type") == edge_type
        ]

    def dependents_of(self, name: str) -> list[str]:
        """Files that directly reference ``name``."""
        return sorted(self._in_edges(name, "DEPENDS_ON"))

    def unresolved_names(self) -> list[str]:
        """Referenced names that no indexed file declares."""
        return sorted(
            data["name"]
            for _, data in self.graph.nodes(data=True)
            if data.get("node_type") == "symbol" and not self._in_edges(data["name"], "DEFINES")
        )

    # --- Counts ---

    def file_count(self) -> int:
        return sum(1 for _, d in self.graph.nodes(data=True) if d.get("node_type") == "file")

    def symbol_count(self) -> int:
        return sum(1 for _, d in self.graph.nodes(data=True) if d.get("node_type") == "symbol")

    def dependency_edge_count(self) -> int:
        return sum(1 for _, _, d in self.graph.edges(data=True) if d.get("edge_type") == "DEPENDS_ON")
