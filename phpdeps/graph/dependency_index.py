"""Per-file direct dependency index."""

from __future__ import annotations


class DependencyIndex:
    """Maps files to the canonical names they depend on."""

    def __init__(self) -> None:
        self.file_to_deps: dict[str, list[str]] = {}

    def register(self, file_path: str, dependencies: list[str]) -> None:
        """Record a file's dependencies, replacing anything stored before."""
        self.file_to_deps[file_path] = list(dict.fromkeys(dependencies))

    def get_dependencies(self, file_path: str) -> list[str]:
        """Get the dependencies of a file; empty for unknown files."""
        return list(self.file_to_deps.get(file_path, []))

    def as_dict(self) -> dict[str, list[str]]:
        return {path: list(deps) for path, deps in self.file_to_deps.items()}

    def __contains__(self, file_path: str) -> bool:
        return file_path in self.file_to_deps

    def __len__(self) -> int:
        return len(self.file_to_deps)
