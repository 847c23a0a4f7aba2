"""Package selection strategies.

A Go directory may hold more than one package: external tests live in
``foo_test`` and tools sometimes keep a ``main`` package beside the
library.  Only one of them describes the directory's public API.  The
strategies in this module decide which one, given the source tree
produced by :class:`gosym.treesitter_backend.TreeSitterBackend`.

:class:`StrictPackageStrategy` (``strict``, the default) requires at
most one candidate and refuses to guess otherwise.
:class:`FirstPackageStrategy` (``first``) keeps the older lenient
behaviour of taking a single candidate out of several, but picks the
lexicographically first so repeated runs agree.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .errors import AmbiguousPackageError
from .model import Package, SourceTree
from .registry import Registry

logger = logging.getLogger(__name__)

MAIN_PACKAGE = "main"
TEST_PACKAGE_SUFFIX = "_test"

strategy_registry = Registry("strategy")


def candidate_packages(tree: SourceTree) -> List[str]:
    """Return the sorted package names that are neither ``main`` nor tests."""
    return sorted(
        name
        for name in tree
        if name != MAIN_PACKAGE and not name.endswith(TEST_PACKAGE_SUFFIX)
    )


class PackageStrategy:
    """Abstract base class for package selection strategies.

    Subclasses implement :meth:`choose`, returning one of the candidate
    names or ``None`` when the directory has nothing to export.
    """

    def select(self, tree: SourceTree, directory: str = "") -> Optional[Package]:
        """Return the chosen :class:`Package`, or ``None`` to skip ``directory``."""
        name = self.choose(candidate_packages(tree), directory)
        if name is None:
            logger.debug("No exportable package in %s (found %s)", directory or "<tree>", sorted(tree))
            return None
        logger.debug("Selected package %s in %s", name, directory or "<tree>")
        return tree[name]

    def choose(self, candidates: List[str], directory: str) -> Optional[str]:  # pragma: no cover
        raise NotImplementedError


@strategy_registry.register("strict")
class StrictPackageStrategy(PackageStrategy):
    """Accept zero or one candidate; several candidates are a configuration error."""

    def choose(self, candidates: List[str], directory: str) -> Optional[str]:
        if len(candidates) > 1:
            raise AmbiguousPackageError(directory or "<tree>", candidates)
        return candidates[0] if candidates else None


@strategy_registry.register("first")
class FirstPackageStrategy(PackageStrategy):
    """Take the lexicographically first candidate."""

    def choose(self, candidates: List[str], directory: str) -> Optional[str]:
        if len(candidates) > 1:
            logger.debug("Several packages in %s, using %s: %s", directory, candidates[0], candidates)
        return candidates[0] if candidates else None
