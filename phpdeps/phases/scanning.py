"""Phase 1: Source file discovery."""

from __future__ import annotations

import logging
import os

from phpdeps.errors import ConfigurationError
from phpdeps.languages import supported_extensions
from phpdeps.paths import normalize_path, normalize_path_without_resolving_symlinks

logger = logging.getLogger(__name__)


class FileScanner:
    """Collects source files below a set of root directories.

    Paths keep the spelling they were found under (symlinks are not
    resolved), excluded prefixes are skipped, and the result is cached after
    the first call.
    """

    def __init__(
        self,
        directories: list[str],
        exclude_paths: list[str] | None = None,
        extensions: set[str] | None = None,
    ) -> None:
        self.directories = list(directories)
        self.exclude_paths = list(exclude_paths or [])
        self.extensions = {e.lower() for e in (extensions or supported_extensions())}
        self._files: list[str] | None = None
        self._scanned_real_paths: set[str] = set()

    def php_files(self) -> list[str]:
        """Return every matching file, deduplicated, in scan order."""
        if self._files is not None:
            return self._files

        found: list[str] = []
        for directory in self.directories:
            normalised = normalize_path_without_resolving_symlinks(directory)
            found.extend(self._collect_from_directory(normalised))

        self._files = list(dict.fromkeys(found))
        logger.debug(f"Scanned {len(self.directories)} root(s): {len(self._files)} file(s)")
        return self._files

    def is_excluded(self, path: str) -> bool:
        for exclude_path in self.exclude_paths:
            if path.startswith(normalize_path_without_resolving_symlinks(exclude_path)):
                return True
        return False

    def is_source_file(self, path: str) -> bool:
        ext = os.path.splitext(path)[1].lower()
        return ext in self.extensions and os.path.isfile(path)

    def _collect_from_directory(self, directory: str) -> list[str]:
        if not os.path.isdir(directory):
            raise ConfigurationError(f"Directory does not exist: {directory}")

        real_path = normalize_path(directory)
        if real_path in self._scanned_real_paths:
            logger.debug(f"Skipping {directory}: already scanned as {real_path}")
            return []
        self._scanned_real_paths.add(real_path)

        files: list[str] = []
        # Symlinked directories are listed but not descended into.
        for dirpath, dirnames, filenames in os.walk(directory, followlinks=False):
            dirnames.sort()
            for filename in sorted(filenames):
                full_path = os.path.join(dirpath, filename)
                if self.is_excluded(full_path):
                    continue
                if self.is_source_file(full_path):
                    files.append(full_path)
        return files
