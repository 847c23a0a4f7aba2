"""Data model for Go package declarations.

This module defines the small set of classes the generator passes
between its stages.  A parsed directory becomes a *source tree*: a
mapping from Go package name to a :class:`Package`, whose files hold
the top level declarations found in them.  Declarations come in four
kinds that mirror Go's top level constructs:

* :class:`ConstGroup` – a ``const`` declaration, possibly parenthesised
  and introducing several names per spec (``const A, B = 1, 2``).
* :class:`VarGroup` – the same for ``var``.
* :class:`TypeDef` – a ``type`` declaration (definitions and aliases).
* :class:`FuncDef` – a function or, when it has a receiver, a method.

Each declaration keeps the text of its doc comment so that later stages
can honour ``Deprecated:`` annotations, and group declarations keep the
doc comment of each individual spec as well.

The classifier reduces a package to a :class:`SymbolSet`, four sets of
exported names that collapse duplicates and hand out their members in
a stable, sorted order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Set

CATEGORIES = ("constants", "variables", "types", "functions")


def is_exported(name: str) -> bool:
    """Return ``True`` if ``name`` starts with an upper-case letter.

    This is Go's visibility rule; the blank identifier ``_`` and
    lower-case names are package private.
    """
    return bool(name) and name[0].isupper()


def sort_symbols(names: Iterable[str]) -> List[str]:
    """Return the unique members of ``names`` in lexicographic order.

    Python orders strings by code point, which for Go identifiers is the
    same as ordering their UTF-8 bytes.
    """
    return sorted(set(names))


@dataclass
class DeclSpec:
    """One spec inside a ``const``, ``var`` or ``type`` declaration."""

    names: List[str]
    doc: Optional[str] = None
    line: int = 0

    @property
    def exported_names(self) -> List[str]:
        return [name for name in self.names if is_exported(name)]


@dataclass
class Declaration:
    """Common base for the four declaration kinds."""

    doc: Optional[str] = None
    path: str = ""
    line: int = 0

    def names(self) -> List[str]:  # pragma: no cover
        raise NotImplementedError


@dataclass
class _GroupDeclaration(Declaration):
    specs: List[DeclSpec] = field(default_factory=list)

    def names(self) -> List[str]:
        return [name for spec in self.specs for name in spec.names]


@dataclass
class ConstGroup(_GroupDeclaration):
    """A ``const`` declaration."""


@dataclass
class VarGroup(_GroupDeclaration):
    """A ``var`` declaration."""


@dataclass
class TypeDef(_GroupDeclaration):
    """A ``type`` declaration; each spec introduces exactly one name."""


@dataclass
class FuncDef(Declaration):
    """A function declaration.  ``is_method`` is set when it has a receiver."""

    name: str = ""
    is_method: bool = False

    @property
    def exported(self) -> bool:
        return is_exported(self.name)

    def names(self) -> List[str]:
        return [self.name]


@dataclass
class SourceFile:
    """Declarations parsed from a single ``.go`` file."""

    path: str
    package: str
    declarations: List[Declaration] = field(default_factory=list)


@dataclass
class Package:
    """All files in a directory that share one package clause."""

    name: str
    files: Dict[str, SourceFile] = field(default_factory=dict)

    def add_file(self, source: SourceFile) -> None:
        self.files[source.path] = source

    def declarations(self) -> Iterator[Declaration]:
        """Iterate over every top level declaration, file by file."""
        for path in sorted(self.files):
            yield from self.files[path].declarations


SourceTree = Dict[str, Package]


@dataclass
class SymbolSet:
    """Exported symbol names of one package, grouped by category.

    The sets deduplicate names declared more than once (for instance a
    constant repeated under build tags in two files).  Consumers should
    read them through :meth:`sorted`, which is what makes generated
    output independent of declaration order.
    """

    constants: Set[str] = field(default_factory=set)
    variables: Set[str] = field(default_factory=set)
    types: Set[str] = field(default_factory=set)
    functions: Set[str] = field(default_factory=set)

    def category(self, name: str) -> Set[str]:
        if name not in CATEGORIES:
            raise KeyError(f"unknown symbol category '{name}'")
        return getattr(self, name)

    def sorted(self, name: str) -> List[str]:
        return sort_symbols(self.category(name))

    def is_empty(self) -> bool:
        return not any(self.category(name) for name in CATEGORIES)

    def __len__(self) -> int:
        return sum(len(self.category(name)) for name in CATEGORIES)
