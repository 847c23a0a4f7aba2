"""Routing of declarations into exported symbol categories.

The classifier walks the top level declarations of one package and
files every exported name under constants, variables, types or
functions.  Three things keep a name out of the result:

* it is not exported (lower-case initial, or the blank identifier);
* its declaration or spec is documented as deprecated;
* it is a method, i.e. a function with a receiver.

Constants and variables can additionally be excluded by name.  Some
packages export symbols that are deliberately unstable, and callers
pass those names in rather than having them baked in here.

All of this is silent policy: dropped names are logged at debug level
and never reported as errors.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Set

from .model import ConstGroup, Declaration, FuncDef, Package, SymbolSet, TypeDef, VarGroup

logger = logging.getLogger(__name__)

DEPRECATION_MARKERS = ("Deprecated:", "Deprecated.")


def is_deprecated(text: Optional[str]) -> bool:
    """Return ``True`` if a doc comment carries a deprecation marker."""
    if not text:
        return False
    return any(marker in text for marker in DEPRECATION_MARKERS)


class DeclarationClassifier:
    """Collect the exported, non-deprecated symbols of a package."""

    def __init__(self, excluded_symbols: Optional[Iterable[str]] = None) -> None:
        self.excluded_symbols: Set[str] = set(excluded_symbols or ())

    def classify(self, package: Package) -> SymbolSet:
        symbols = SymbolSet()
        for declaration in package.declarations():
            self.add(declaration, symbols)
        logger.debug(
            "Package %s: %d constant(s), %d variable(s), %d type(s), %d function(s)",
            package.name,
            len(symbols.constants),
            len(symbols.variables),
            len(symbols.types),
            len(symbols.functions),
        )
        return symbols

    def add(self, declaration: Declaration, symbols: SymbolSet) -> None:
        """Route the names introduced by ``declaration`` into ``symbols``."""
        if isinstance(declaration, ConstGroup):
            self._add_values(declaration, symbols.constants)
        elif isinstance(declaration, VarGroup):
            self._add_values(declaration, symbols.variables)
        elif isinstance(declaration, TypeDef):
            self._add_types(declaration, symbols.types)
        elif isinstance(declaration, FuncDef):
            self._add_function(declaration, symbols.functions)

    def _add_values(self, declaration: "ConstGroup | VarGroup", target: Set[str]) -> None:
        if is_deprecated(declaration.doc):
            logger.debug("Skipping deprecated group %s at %s:%d", declaration.names(), declaration.path, declaration.line)
            return
        for spec in declaration.specs:
            if is_deprecated(spec.doc):
                logger.debug("Skipping deprecated %s at %s:%d", spec.names, declaration.path, spec.line)
                continue
            for name in spec.exported_names:
                if name in self.excluded_symbols:
                    logger.debug("Skipping excluded symbol %s", name)
                    continue
                target.add(name)

    def _add_types(self, declaration: TypeDef, target: Set[str]) -> None:
        if is_deprecated(declaration.doc):
            logger.debug("Skipping deprecated types %s at %s:%d", declaration.names(), declaration.path, declaration.line)
            return
        for spec in declaration.specs:
            if is_deprecated(spec.doc):
                continue
            target.update(spec.exported_names)

    def _add_function(self, declaration: FuncDef, target: Set[str]) -> None:
        if is_deprecated(declaration.doc) or declaration.is_method:
            return
        if declaration.exported:
            target.add(declaration.name)
