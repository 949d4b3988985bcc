"""Path normalisation for index keys and scanning."""

from __future__ import annotations

import os

from phpdeps.errors import PathError


def normalize_path(path: str) -> str:
    """Return an absolute, canonical path.

    Existing paths are resolved through symlinks so that different
    spellings of the same file produce the same index key. Paths that do
    not exist are normalised lexically.
    """
    _validate(path)
    if os.path.exists(path):
        return os.path.realpath(path)
    return _normalize(path)


def normalize_path_without_resolving_symlinks(path: str) -> str:
    """Return an absolute, lexically normalised path, keeping symlinks as written."""
    _validate(path)
    return _normalize(path)


def _validate(path: str) -> None:
    if not path:
        raise PathError("The provided path is empty.")


def _normalize(path: str) -> str:
    if path.startswith("~"):
        path = os.path.expanduser("~") + path[1:]

    path = path.replace("\\", os.sep)

    if not path.startswith(os.sep):
        path = os.getcwd() + os.sep + path

    resolved: list[str] = []
    for part in path.split(os.sep):
        if part in ("", "."):
            continue
        if part == "..":
            if resolved:
                resolved.pop()
        else:
            resolved.append(part)

    return os.sep + os.sep.join(resolved)
