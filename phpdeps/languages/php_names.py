"""PHP name resolution: lexical class references to canonical names.

A :class:`NameResolver` carries the per-file state the resolution rules need
(the current namespace and the ``use`` import table). One instance is created
per visited file and discarded afterwards, so nothing leaks between files.

Resolution order, first match wins:

1. reserved / builtin names (``self``, ``int``, ...) are returned unchanged
2. fully qualified names (``\\A\\B``) lose the leading separator
3. namespace-relative names (``namespace\\B``) are prefixed with the namespace
4. names whose first segment is an import alias get the alias target
5. everything else is prefixed with the current namespace, if any

Rule 4 must run before rule 5: an imported single-segment name resolves via
its alias, not as a namespace-relative name.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from phpdeps.config import NAMESPACE_SEPARATOR, RESERVED_NAMES

_RELATIVE_PREFIX = "namespace" + NAMESPACE_SEPARATOR


class NameForm(str, Enum):
    BARE = "bare"
    QUALIFIED = "qualified"
    FULLY_QUALIFIED = "fully-qualified"
    RELATIVE = "relative"


@dataclass(frozen=True)
class PhpName:
    """A raw name split into its syntactic form and segments."""
    form: NameForm
    parts: tuple[str, ...]

    @property
    def first(self) -> str:
        return self.parts[0]

    def __str__(self) -> str:
        return NAMESPACE_SEPARATOR.join(self.parts)


def is_reserved(name: str) -> bool:
    return name.lower() in RESERVED_NAMES


def join_name(*parts: str | None) -> str:
    """Join name fragments with the namespace separator, skipping empties."""
    return NAMESPACE_SEPARATOR.join(p for p in parts if p)


def parse_name(text: str) -> PhpName:
    """Classify a name exactly as written in source."""
    raw = "".join(text.split())
    if raw.startswith(NAMESPACE_SEPARATOR):
        form = NameForm.FULLY_QUALIFIED
        raw = raw.lstrip(NAMESPACE_SEPARATOR)
    elif raw.lower().startswith(_RELATIVE_PREFIX):
        form = NameForm.RELATIVE
        raw = raw[len(_RELATIVE_PREFIX):]
    elif NAMESPACE_SEPARATOR in raw:
        form = NameForm.QUALIFIED
    else:
        form = NameForm.BARE
    parts = tuple(p for p in raw.split(NAMESPACE_SEPARATOR) if p)
    return PhpName(form=form, parts=parts or ("",))


class NameResolver:
    """Namespace + import state for one file, and the rules that use it."""

    def __init__(self) -> None:
        self.namespace: str | None = None
        self.imports: dict[str, str] = {}

    def enter_namespace(self, name: str | None) -> None:
        """Switch to a namespace section; ``None`` for the global namespace."""
        self.namespace = name.strip(NAMESPACE_SEPARATOR) if name else None

    def add_import(self, name: str, alias: str | None = None, prefix: str | None = None) -> str:
        """Register ``use [prefix\\]name [as alias]`` and return the canonical target."""
        target = join_name(
            prefix.strip(NAMESPACE_SEPARATOR) if prefix else None,
            name.strip(NAMESPACE_SEPARATOR),
        )
        if not alias:
            alias = target.rsplit(NAMESPACE_SEPARATOR, 1)[-1]
        self.imports[alias] = target
        return target

    def declare(self, bare_name: str) -> str:
        """Canonical name of a declaration in the current namespace."""
        return join_name(self.namespace, bare_name)

    def resolve(self, text: str) -> str:
        """Resolve a class reference as written in source to its canonical name."""
        name = parse_name(text)
        written = str(name)

        if is_reserved(written):
            return written

        if name.form == NameForm.FULLY_QUALIFIED:
            return written

        if name.form == NameForm.RELATIVE:
            return join_name(self.namespace, written)

        target = self.imports.get(name.first)
        if target is not None:
            return join_name(target, *name.parts[1:])

        return join_name(self.namespace, written)
