"""Core data types and configuration for phpdeps."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from phpdeps.errors import ConfigurationError

# Language built-ins and pseudo types, compared lower-cased.
RESERVED_NAMES = frozenset({
    "self", "static", "parent", "callable", "iterable", "void", "bool",
    "int", "float", "string", "array", "object", "mixed", "resource",
    "null", "false", "true", "never",
})

NAMESPACE_SEPARATOR = "\\"

_VERSION_RE = re.compile(r"^\d+\.\d+$")


class SymbolKind(str, Enum):
    CLASS = "Class"
    INTERFACE = "Interface"
    TRAIT = "Trait"


class ReferenceContext(str, Enum):
    INSTANTIATION = "instantiation"
    STATIC_ACCESS = "static-access"
    TYPE_HINT = "type-hint"
    INHERITANCE = "inheritance"
    IMPLEMENTS = "implements"
    TRAIT_USE = "trait-use"
    CATCH = "catch"
    INSTANCEOF = "instanceof"


@dataclass
class SymbolDeclaration:
    name: str
    kind: SymbolKind
    file: str
    line: int = 0


@dataclass
class Reference:
    """A resolved type reference found in a file."""
    name: str
    context: ReferenceContext
    line: int = 0


@dataclass
class FileReferences:
    """Everything the collector found in one file."""
    file: str
    declarations: list[SymbolDeclaration] = field(default_factory=list)
    references: list[Reference] = field(default_factory=list)

    def declared_names(self) -> list[str]:
        return list(dict.fromkeys(d.name for d in self.declarations))

    def dependencies(self) -> list[str]:
        """Referenced names minus names declared in this same file.

        Deduplicated, first-seen order.
        """
        declared = set(self.declared_names())
        deps: dict[str, None] = {}
        for ref in self.references:
            if ref.name in declared or ref.name.lower() in RESERVED_NAMES:
                continue
            deps.setdefault(ref.name, None)
        return list(deps)


@dataclass
class ResolverConfig:
    roots: list[str] = field(default_factory=list)
    exclude_paths: list[str] = field(default_factory=list)
    php_version: str | None = None

    def validate(self) -> None:
        if not self.roots:
            raise ConfigurationError("At least one directory must be provided.")
        if self.php_version is not None and not _VERSION_RE.match(self.php_version):
            raise ConfigurationError(
                f"Invalid PHP version hint {self.php_version!r}, expected MAJOR.MINOR"
            )


@dataclass
class IndexResult:
    version: str = "1.0"
    metadata: dict[str, Any] = field(default_factory=dict)
    stats: dict[str, Any] = field(default_factory=dict)
    symbols: list[dict] = field(default_factory=list)
    dependencies: dict[str, list[str]] = field(default_factory=dict)
    unresolved: list[str] = field(default_factory=list)
    skipped: dict[str, str] = field(default_factory=dict)
