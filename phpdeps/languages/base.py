"""Abstract base for language analysers."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import tree_sitter

from phpdeps.config import FileReferences


@runtime_checkable
class LanguageAnalyser(Protocol):
    """Protocol that all language analysers must implement."""

    extensions: list[str]
    language_name: str

    def get_language(self) -> tree_sitter.Language:
        """Return the tree-sitter Language object for this analyser."""
        ...

    def extract_references(
        self, tree: tree_sitter.Tree, source: bytes, file_path: str
    ) -> FileReferences:
        """Extract declared symbols and type references from a parsed AST."""
        ...
