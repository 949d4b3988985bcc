"""Lazy, cached name/file/dependency lookups over a PHP code base."""

from __future__ import annotations

import logging
import threading
from typing import Callable

from phpdeps.config import ResolverConfig, SymbolDeclaration
from phpdeps.graph.dependency_graph import DependencyGraph
from phpdeps.languages.base import LanguageAnalyser
from phpdeps.paths import normalize_path
from phpdeps.phases.scanning import FileScanner
from phpdeps.pipeline import BuildState, SourceScanner, run_pipeline

logger = logging.getLogger(__name__)


class Resolver:
    """Maps class / interface / trait names to files and files to their dependencies.

    Nothing is scanned or parsed until the first query (or an explicit
    :meth:`build`). The indices are then built exactly once and never
    refreshed for the lifetime of the instance; concurrent first queries
    share a single build.

    Files that cannot be read or parsed are skipped silently: they are absent
    from every query result. :meth:`skipped_files` reports them.
    """

    def __init__(
        self,
        roots: list[str],
        php_version: str | None = None,
        exclude_paths: list[str] | None = None,
        scanner: SourceScanner | None = None,
        analyser: LanguageAnalyser | None = None,
    ) -> None:
        self.config = ResolverConfig(
            roots=list(roots),
            exclude_paths=list(exclude_paths or []),
            php_version=php_version,
        )
        self.config.validate()
        self._scanner = scanner
        self._analyser = analyser
        self._lock = threading.Lock()
        self._state: BuildState | None = None
        self._graph: DependencyGraph | None = None

    @property
    def scanner(self) -> SourceScanner:
        if self._scanner is None:
            self._scanner = FileScanner(self.config.roots, self.config.exclude_paths)
        return self._scanner

    @property
    def is_built(self) -> bool:
        return self._state is not None

    def build(self, progress_callback: Callable[[str, str], None] | None = None) -> BuildState:
        """Build both indices if that has not happened yet, and return them."""
        state = self._state
        if state is not None:
            return state
        with self._lock:
            if self._state is not None:
                return self._state
            logger.debug(f"Building indices for {', '.join(self.config.roots)}")
            state = run_pipeline(self.scanner, self._analyser, progress_callback)
            self._graph = DependencyGraph.from_indices(state.symbols, state.dependencies)
            self._state = state
            return state

    # --- Queries ---

    def file_path_by_name(self, name: str) -> str | None:
        """Return the file declaring ``name`` (canonical, no leading ``\\``)."""
        return self.build().symbols.lookup(name)

    def name_by_file_path(self, file_path: str) -> str | None:
        """Return the first name declared in ``file_path``, or None."""
        key = normalize_path(file_path)
        return self.build().symbols.name_for_file(key)

    def dependencies_by_file(self, file_path: str) -> list[str]:
        """Return the direct dependencies of ``file_path``; empty if unknown."""
        key = normalize_path(file_path)
        return self.build().dependencies.get_dependencies(key)

    def dependencies_by_name(self, name: str) -> list[str]:
        """Return the direct dependencies of the file declaring ``name``."""
        file_path = self.file_path_by_name(name)
        if file_path is None:
            return []
        return self.dependencies_by_file(file_path)

    def dependents_by_name(self, name: str) -> list[str]:
        """Return the files that directly depend on ``name``."""
        return self.graph.dependents_of(name)

    def all_mapped_names(self) -> dict[str, str]:
        return self.build().symbols.as_dict()

    def all_file_dependencies(self) -> dict[str, list[str]]:
        return self.build().dependencies.as_dict()

    def declarations(self) -> list[SymbolDeclaration]:
        return list(self.build().symbols.declarations.values())

    def unresolved_names(self) -> list[str]:
        """Referenced names that no indexed file declares (vendor or missing code)."""
        return self.graph.unresolved_names()

    def skipped_files(self) -> dict[str, str]:
        """Files left out of the indices, with the reason."""
        return dict(self.build().skipped)

    @property
    def graph(self) -> DependencyGraph:
        self.build()
        graph = self._graph
        if graph is None:
            raise RuntimeError("Dependency graph missing after build")
        return graph

    @property
    def timings(self) -> dict[str, float]:
        return dict(self.build().timings)

    @property
    def total_ms(self) -> float:
        return self.build().total_ms
