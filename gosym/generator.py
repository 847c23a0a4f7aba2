"""Pipeline entry point: one Go package directory in, generated text out.

:class:`Generator` chains the stages together::

    parse directory -> select package -> classify declarations
        -> build registration document -> render

It holds configuration only (exclusions, strategy, dialect, output
format); every call builds its own source tree and symbol sets, so one
generator can be shared by any number of directories.
"""

from __future__ import annotations

import logging
import os
from typing import Iterable, Optional

from .classifier import DeclarationClassifier
from .config import BindgenConfig
from .document import Dialect, RegistrationDocument, build_document
from .renderers import DocumentRenderer, renderer_registry
from .strategy import PackageStrategy, strategy_registry
from .treesitter_backend import TreeSitterBackend

logger = logging.getLogger(__name__)


class Generator:
    """Generate registration code for Go package directories."""

    def __init__(
        self,
        excluded_symbols: Optional[Iterable[str]] = None,
        strategy: str = "strict",
        dialect: Optional[Dialect] = None,
        renderer: str = "go",
    ) -> None:
        self.backend = TreeSitterBackend()
        self.classifier = DeclarationClassifier(excluded_symbols)
        self.strategy: PackageStrategy = strategy_registry.create(strategy)
        self.renderer: DocumentRenderer = renderer_registry.create(renderer)
        self.dialect = dialect or Dialect()

    @classmethod
    def from_config(cls, config: BindgenConfig, **overrides) -> "Generator":  # type: ignore[no-untyped-def]
        """Build a generator from a loaded config; ``overrides`` win."""
        options = {
            "excluded_symbols": config.exclude_symbols,
            "strategy": config.strategy,
            "dialect": config.dialect,
            "renderer": config.format,
        }
        options.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**options)

    def build(self, root: str, path: str, directory: str, init_suffix: str) -> Optional[RegistrationDocument]:
        """Parse ``root/directory`` and return its registration document.

        Returns ``None`` when the directory has no exportable package or
        the package exports nothing.

        Raises:
            ParseError: If any eligible file fails to parse.
            AmbiguousPackageError: If the strategy refuses to choose.
        """
        full_dir = os.path.join(root, directory)
        tree = self.backend.parse_dir(full_dir)
        package = self.strategy.select(tree, full_dir)
        if package is None:
            return None
        symbols = self.classifier.classify(package)
        if symbols.is_empty():
            logger.debug("Package %s in %s exports nothing; skipping", package.name, full_dir)
            return None
        return build_document(path, package.name, init_suffix, symbols, self.dialect)

    def generate(self, root: str, path: str, directory: str, init_suffix: str) -> str:
        """Return the rendered registration code, or ``""`` to skip."""
        document = self.build(root, path, directory, init_suffix)
        if document is None:
            return ""
        return self.renderer.render(document)


def export_declarations(
    root: str,
    path: str,
    directory: str,
    init_suffix: str,
    *,
    config: Optional[BindgenConfig] = None,
) -> str:
    """Generate registration code for the package in ``root/directory``.

    Args:
        root: Directory the package directory is relative to.
        path: Import path of the package, used as the registry key.
        directory: Package directory relative to ``root``.
        init_suffix: Appended to ``init`` to name the generated function.
        config: Optional loaded configuration (exclusions, dialect, ...).

    Returns:
        The generated text, or ``""`` when there is nothing to export.
    """
    generator = Generator.from_config(config) if config is not None else Generator()
    return generator.generate(root, path, directory, init_suffix)
