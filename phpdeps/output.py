"""JSON serialisation of a built index."""

from __future__ import annotations

import json
import subprocess
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path

from phpdeps import __version__
from phpdeps.config import IndexResult
from phpdeps.resolver import Resolver


def _get_commit_hash(repo_path: str) -> str | None:
    """Try to get the current git commit hash."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            cwd=repo_path,
            capture_output=True,
            text=True,
            timeout=5,
        )
        if result.returncode == 0:
            return result.stdout.strip()[:12]
    except (subprocess.TimeoutExpired, FileNotFoundError, NotADirectoryError):
        pass
    return None


def build_result(resolver: Resolver) -> IndexResult:
    """Build the IndexResult from a resolver, building it first if needed."""
    graph = resolver.graph
    roots = [str(Path(root).resolve()) for root in resolver.config.roots]
    unresolved = resolver.unresolved_names()
    skipped = resolver.skipped_files()

    return IndexResult(
        version="1.0",
        metadata={
            "roots": roots,
            "php_version": resolver.config.php_version,
            "analysed_at": datetime.now(timezone.utc).isoformat(),
            "phpdeps_version": __version__,
            "commit_hash": _get_commit_hash(roots[0]),
            "analysis_duration_ms": round(resolver.total_ms, 1),
            "phase_timings": resolver.timings,
        },
        stats={
            "files": graph.file_count(),
            "symbols": len(resolver.all_mapped_names()),
            "dependency_edges": graph.dependency_edge_count(),
            "unresolved": len(unresolved),
            "skipped": len(skipped),
        },
        symbols=[
            {
                "name": d.name,
                "kind": d.kind.value,
                "file": d.file,
                "line": d.line,
            }
            for d in resolver.declarations()
        ],
        dependencies=resolver.all_file_dependencies(),
        unresolved=unresolved,
        skipped=skipped,
    )


def write_output(result: IndexResult, output_path: str) -> None:
    """Write the index result to a JSON file."""
    data = asdict(result)
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(data, f, indent=2, default=str)
