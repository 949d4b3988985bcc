"""Phase 2: Tree-sitter AST to declarations and references."""

from __future__ import annotations

import logging

import tree_sitter

from phpdeps.config import FileReferences
from phpdeps.errors import ParseError
from phpdeps.languages.base import LanguageAnalyser

logger = logging.getLogger(__name__)

# Cache parsers per language to avoid re-creating
_parsers: dict[str, tree_sitter.Parser] = {}


def _get_parser(analyser: LanguageAnalyser) -> tree_sitter.Parser:
    """Get or create a parser for the given analyser."""
    key = analyser.language_name
    if key not in _parsers:
        _parsers[key] = tree_sitter.Parser(analyser.get_language())
    return _parsers[key]


def _first_error(root: tree_sitter.Node) -> tree_sitter.Node | None:
    """Find the first ERROR or MISSING node, descending only into broken subtrees."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        stack.extend(reversed([c for c in node.children if c.has_error or c.is_missing]))
    return None


def parse_source(analyser: LanguageAnalyser, source: bytes, file_path: str) -> tree_sitter.Tree:
    """Parse source bytes, raising ParseError if the tree is not clean.

    tree-sitter always produces a tree; a file with syntax errors gets
    ERROR / MISSING nodes instead of an exception, so those are treated as a
    failed parse.
    """
    tree = _get_parser(analyser).parse(source)
    if tree.root_node.has_error:
        error = _first_error(tree.root_node)
        where = f"line {error.start_point[0] + 1}" if error is not None else "unknown position"
        raise ParseError(file_path, f"syntax error at {where}")
    return tree


def extract_file(analyser: LanguageAnalyser, file_path: str) -> FileReferences:
    """Read, parse and collect one file.

    Raises OSError if the file cannot be read and ParseError if it does not
    parse; callers decide whether to skip.
    """
    with open(file_path, "rb") as f:
        source = f.read()
    tree = parse_source(analyser, source, file_path)
    return analyser.extract_references(tree, source, file_path)
