"""Sequential build pass with timing."""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field
from typing import Callable, Protocol

from phpdeps.errors import ParseError
from phpdeps.graph.dependency_index import DependencyIndex
from phpdeps.graph.symbol_table import SymbolTable
from phpdeps.languages import get_analyser
from phpdeps.languages.base import LanguageAnalyser
from phpdeps.paths import normalize_path
from phpdeps.phases.extraction import extract_file

logger = logging.getLogger(__name__)


_PHASE_LABELS = {
    "scanning": "Scanning for source files",
    "extraction": "Extracting declarations and references",
}


class SourceScanner(Protocol):
    def php_files(self) -> list[str]:
        ...


@dataclass
class BuildState:
    """Output of one build: both indices plus what was skipped and how long it took."""
    symbols: SymbolTable = field(default_factory=SymbolTable)
    dependencies: DependencyIndex = field(default_factory=DependencyIndex)
    files: list[str] = field(default_factory=list)
    skipped: dict[str, str] = field(default_factory=dict)
    timings: dict[str, float] = field(default_factory=dict)
    total_ms: float = 0.0


def run_pipeline(
    scanner: SourceScanner,
    analyser: LanguageAnalyser | None = None,
    progress_callback: Callable[[str, str], None] | None = None,
) -> BuildState:
    """Scan once, then parse and collect every file in scan order.

    Files that cannot be read or parsed are left out of both indices and
    recorded in ``BuildState.skipped``; the build itself never fails on them.

    Args:
        scanner: Supplies the file list.
        analyser: Analyser to use for every file. When omitted, the analyser
            registered for each file's extension is used.
        progress_callback: Optional callable(phase_name, label) invoked
            when each phase starts. Used by the CLI for Rich progress.
    """
    state = BuildState()
    total_start = time.monotonic()

    phases = [
        ("scanning", lambda: state.files.extend(scanner.php_files())),
        ("extraction", lambda: _extract_all(state, analyser)),
    ]

    for name, phase_fn in phases:
        if progress_callback:
            progress_callback(name, _PHASE_LABELS.get(name, name))
        start = time.monotonic()
        phase_fn()
        state.timings[name] = time.monotonic() - start

    state.total_ms = (time.monotonic() - total_start) * 1000
    logger.info(
        f"Indexed {len(state.dependencies)} file(s), {len(state.symbols)} symbol(s), "
        f"skipped {len(state.skipped)} in {state.total_ms:.1f}ms"
    )
    return state


def _extract_all(state: BuildState, analyser: LanguageAnalyser | None) -> None:
    for file_path in state.files:
        file_analyser = analyser or get_analyser(os.path.splitext(file_path)[1])
        if file_analyser is None:
            continue

        # Index keys use the canonical path so differing spellings coalesce.
        key = normalize_path(file_path)

        try:
            refs = extract_file(file_analyser, key)
        except OSError as e:
            logger.warning(f"Failed to read {file_path}: {e}")
            state.skipped[key] = f"unreadable: {e.strerror or e}"
            continue
        except ParseError as e:
            logger.warning(f"Failed to parse {file_path}: {e.message}")
            state.skipped[key] = e.message
            continue

        for declaration in refs.declarations:
            state.symbols.add(declaration)
        state.dependencies.register(key, refs.dependencies())
        logger.debug(
            f"{key}: {len(refs.declarations)} declaration(s), "
            f"{len(refs.references)} reference(s)"
        )
