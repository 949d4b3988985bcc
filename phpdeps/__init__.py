"""phpdeps - Map PHP classes, interfaces and traits to files and dependencies."""

from phpdeps.errors import ConfigurationError, ParseError, PathError, PhpDepsError
from phpdeps.resolver import Resolver

__version__ = "0.1.0"
__all__ = [
    "Resolver",
    "PhpDepsError",
    "ConfigurationError",
    "ParseError",
    "PathError",
]
