"""PHP language analyser."""

from __future__ import annotations

import tree_sitter
import tree_sitter_php as ts_php

from phpdeps.config import (
    FileReferences,
    Reference,
    ReferenceContext,
    SymbolDeclaration,
    SymbolKind,
)
from phpdeps.languages.php_names import NameResolver, is_reserved

_DECLARATION_KINDS = {
    "class_declaration": SymbolKind.CLASS,
    "interface_declaration": SymbolKind.INTERFACE,
    "trait_declaration": SymbolKind.TRAIT,
}

# Statically written class names. Anything else in a class position
# (variables, member access, parenthesised expressions) is dynamic.
_NAME_NODES = ("name", "qualified_name", "relative_name")

# Leaf type nodes; these only ever hold builtins and are dropped on resolve.
_BUILTIN_TYPE_NODES = ("primitive_type", "bottom_type")

_TYPED_NODES = {
    "simple_parameter",
    "variadic_parameter",
    "property_promotion_parameter",
    "property_declaration",
}

_CALLABLE_NODES = {
    "method_declaration",
    "function_definition",
    "anonymous_function",
    "anonymous_function_creation_expression",
    "arrow_function",
}

_USE_CLAUSE_NODES = ("namespace_use_clause", "namespace_use_group_clause")

_IMPORTED_NAME_NODES = ("name", "qualified_name", "namespace_name")


def _text(node: tree_sitter.Node) -> str:
    return node.text.decode("utf-8", errors="replace")


def _line(node: tree_sitter.Node) -> int:
    return node.start_point[0] + 1


def _first_child(node: tree_sitter.Node, *types: str) -> tree_sitter.Node | None:
    for child in node.children:
        if child.type in types:
            return child
    return None


def _use_kind(node: tree_sitter.Node) -> str | None:
    """Return 'function' / 'const' for non-class imports, None for class imports."""
    kind = node.child_by_field_name("type")
    if kind is not None:
        return _text(kind).lower()
    for child in node.children:
        if child.is_named:
            break
        if child.type.lower() in ("function", "const"):
            return child.type.lower()
    return None


class ReferenceCollector:
    """Walks one PHP syntax tree, recording declarations and type references.

    A collector holds per-file state (namespace, imports, what has been seen)
    and is meant to be used for exactly one file.
    """

    def __init__(self, file_path: str) -> None:
        self.file_path = file_path
        self.names = NameResolver()
        self.result = FileReferences(file=file_path)
        self._seen: set[tuple[str, ReferenceContext]] = set()

    def collect(self, root: tree_sitter.Node) -> FileReferences:
        # Explicit stack: generated PHP can nest expressions deeper than
        # Python's recursion limit. Children are pushed reversed so nodes are
        # visited in document order, which namespace tracking relies on.
        stack = [root]
        while stack:
            node = stack.pop()
            self._visit(node)
            stack.extend(reversed(node.children))
        return self.result

    def _visit(self, node: tree_sitter.Node) -> None:
        kind = node.type

        if kind == "namespace_definition":
            name_node = node.child_by_field_name("name")
            self.names.enter_namespace(_text(name_node) if name_node is not None else None)

        elif kind == "namespace_use_declaration":
            self._add_imports(node)

        elif kind in _DECLARATION_KINDS:
            self._declare(node, _DECLARATION_KINDS[kind])
            if kind == "class_declaration":
                self._add_class_relations(node)
            elif kind == "interface_declaration":
                self._add_supertypes(node, "base_clause", ReferenceContext.INHERITANCE)

        elif kind == "anonymous_class":
            self._add_class_relations(node)

        elif kind == "object_creation_expression":
            self._add_instantiation(node)

        elif kind == "scoped_call_expression":
            scope = node.child_by_field_name("scope")
            if scope is not None and scope.type in _NAME_NODES:
                self._record(scope, ReferenceContext.STATIC_ACCESS)

        elif kind == "assignment_expression":
            # `$x = new Foo()` is its own tree shape; the nested creation is
            # visited again below and collapses in _record.
            right = node.child_by_field_name("right")
            if right is not None and right.type == "object_creation_expression":
                self._add_instantiation(right)

        elif kind in ("binary_expression", "instanceof_expression"):
            self._add_instanceof(node)

        elif kind == "catch_clause":
            type_node = node.child_by_field_name("type")
            if type_node is None:
                type_node = _first_child(node, "type_list")
            self._add_type(type_node, ReferenceContext.CATCH)

        elif kind in _TYPED_NODES:
            self._add_type(node.child_by_field_name("type"))

        elif kind in _CALLABLE_NODES:
            self._add_type(node.child_by_field_name("return_type"))

    # --- Imports ---

    def _add_imports(self, node: tree_sitter.Node) -> None:
        if _use_kind(node) is not None:
            return

        group = node.child_by_field_name("body")
        if group is None:
            group = _first_child(node, "namespace_use_group")

        if group is None:
            for clause in node.named_children:
                if clause.type in _USE_CLAUSE_NODES and _use_kind(clause) is None:
                    self._add_import_clause(clause, prefix=None)
            return

        prefix_node = _first_child(node, "namespace_name", "qualified_name", "name")
        prefix = _text(prefix_node) if prefix_node is not None else None
        for clause in group.named_children:
            if clause.type in _USE_CLAUSE_NODES and _use_kind(clause) is None:
                self._add_import_clause(clause, prefix=prefix)

    def _add_import_clause(self, clause: tree_sitter.Node, prefix: str | None) -> None:
        alias_node = clause.child_by_field_name("alias")
        if alias_node is None:
            aliasing = _first_child(clause, "namespace_aliasing_clause")
            if aliasing is not None:
                alias_node = _first_child(aliasing, "name")

        name_node = None
        for child in clause.named_children:
            if child.type not in _IMPORTED_NAME_NODES:
                continue
            if alias_node is not None and child.start_byte == alias_node.start_byte:
                continue
            name_node = child
            break

        if name_node is None:
            return
        self.names.add_import(
            _text(name_node),
            alias=_text(alias_node) if alias_node is not None else None,
            prefix=prefix,
        )

    # --- Declarations ---

    def _declare(self, node: tree_sitter.Node, kind: SymbolKind) -> None:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return
        bare = _text(name_node)
        if is_reserved(bare):
            return
        self.result.declarations.append(SymbolDeclaration(
            name=self.names.declare(bare),
            kind=kind,
            file=self.file_path,
            line=_line(node),
        ))

    def _add_class_relations(self, node: tree_sitter.Node) -> None:
        """extends / implements / trait uses of a named or anonymous class."""
        self._add_supertypes(node, "base_clause", ReferenceContext.INHERITANCE)
        self._add_supertypes(node, "class_interface_clause", ReferenceContext.IMPLEMENTS)

        body = node.child_by_field_name("body")
        if body is None:
            body = _first_child(node, "declaration_list")
        if body is None:
            return
        for member in body.named_children:
            if member.type != "use_declaration":
                continue
            for trait in member.named_children:
                if trait.type in _NAME_NODES:
                    self._record(trait, ReferenceContext.TRAIT_USE)

    def _add_supertypes(
        self, node: tree_sitter.Node, clause_type: str, context: ReferenceContext
    ) -> None:
        for clause in node.children:
            if clause.type != clause_type:
                continue
            for child in clause.named_children:
                if child.type in _NAME_NODES:
                    self._record(child, context)

    # --- Expressions ---

    def _add_instantiation(self, node: tree_sitter.Node) -> None:
        # Older grammars inline anonymous classes into the creation node.
        if _first_child(node, "declaration_list") is not None:
            self._add_class_relations(node)
            return
        if node.named_child_count == 0:
            return
        target = node.named_children[0]
        if target.type in _NAME_NODES:
            self._record(target, ReferenceContext.INSTANTIATION)

    def _add_instanceof(self, node: tree_sitter.Node) -> None:
        after_operator = False
        for child in node.children:
            if after_operator:
                if child.type in _NAME_NODES:
                    self._record(child, ReferenceContext.INSTANCEOF)
                return
            if not child.is_named and child.type.lower() == "instanceof":
                after_operator = True

    # --- Types ---

    def _add_type(
        self,
        node: tree_sitter.Node | None,
        context: ReferenceContext = ReferenceContext.TYPE_HINT,
    ) -> None:
        """Record every named member of a (nullable / union / intersection) type."""
        if node is None:
            return
        stack = [node]
        while stack:
            current = stack.pop()
            if current.type in _NAME_NODES or current.type in _BUILTIN_TYPE_NODES:
                self._record(current, context)
            else:
                stack.extend(reversed(current.named_children))

    def _record(self, node: tree_sitter.Node, context: ReferenceContext) -> None:
        name = self.names.resolve(_text(node))
        if not name or is_reserved(name):
            return
        key = (name, context)
        if key in self._seen:
            return
        self._seen.add(key)
        self.result.references.append(Reference(name=name, context=context, line=_line(node)))


class PhpAnalyser:
    extensions = [".php"]
    language_name = "php"

    def get_language(self) -> tree_sitter.Language:
        return tree_sitter.Language(ts_php.language_php())

    def extract_references(
        self, tree: tree_sitter.Tree, source: bytes, file_path: str
    ) -> FileReferences:
        return ReferenceCollector(file_path).collect(tree.root_node)
