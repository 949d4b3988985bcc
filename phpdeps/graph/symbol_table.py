"""Global symbol index: canonical name -> declaring file."""

from __future__ import annotations

import logging

from phpdeps.config import SymbolDeclaration

logger = logging.getLogger(__name__)


class SymbolTable:
    """Name-to-file index over every declared class, interface and trait.

    A name declared in more than one file maps to the file added last.
    """

    def __init__(self) -> None:
        self.declarations: dict[str, SymbolDeclaration] = {}

    def add(self, declaration: SymbolDeclaration) -> None:
        previous = self.declarations.get(declaration.name)
        if previous is not None and previous.file != declaration.file:
            logger.debug(
                f"{declaration.name} declared in {previous.file} and {declaration.file}; "
                f"keeping {declaration.file}"
            )
        self.declarations[declaration.name] = declaration

    def lookup(self, name: str) -> str | None:
        """Return the file declaring ``name``, or None."""
        declaration = self.declarations.get(name)
        return declaration.file if declaration is not None else None

    def name_for_file(self, file_path: str) -> str | None:
        """Return the first name mapped to ``file_path``, or None."""
        for name, declaration in self.declarations.items():
            if declaration.file == file_path:
                return name
        return None

    def as_dict(self) -> dict[str, str]:
        return {name: d.file for name, d in self.declarations.items()}

    def __contains__(self, name: str) -> bool:
        return name in self.declarations

    def __len__(self) -> int:
        return len(self.declarations)
