"""Exception types raised by phpdeps."""

from __future__ import annotations


class PhpDepsError(Exception):
    """Base class for all phpdeps errors."""


class ConfigurationError(PhpDepsError, ValueError):
    """Invalid resolver configuration (no roots, bad version hint, missing directory)."""


class PathError(PhpDepsError, ValueError):
    """A path could not be normalised (empty input)."""


class ParseError(PhpDepsError):
    """A source file could not be parsed into a clean syntax tree.

    Raised by the analyser and absorbed by the build: the file is skipped.
    """

    def __init__(self, file_path: str, message: str = "syntax error") -> None:
        super().__init__(f"{file_path}: {message}")
        self.file_path = file_path
        self.message = message
