"""Top level package for the Go binding generator.

This package reads the Go source files of a package directory and
generates the Go code that registers the package's exported constants,
variables, functions and types with an interpreter environment.

Key concepts:

* **Model classes** represent Go declarations and the symbols they
  export.  See :mod:`gosym.model`.
* **Backend** uses tree-sitter for parsing.  See
  :mod:`gosym.treesitter_backend`.
* **Strategy** decides which package of a directory is exported.  See
  :mod:`gosym.strategy`.
* **Classifier** applies the export, deprecation and exclusion rules.
  See :mod:`gosym.classifier`.
* **Document and renderers** describe and print the generated code.
  See :mod:`gosym.document` and :mod:`gosym.renderers`.
* **Registry** enables decorator-based plugin registration.
  See :mod:`gosym.registry`.
"""

from .model import (
    ConstGroup,
    VarGroup,
    TypeDef,
    FuncDef,
    DeclSpec,
    Package,
    SourceFile,
    SymbolSet,
)

from .errors import GenerationError, ParseError, AmbiguousPackageError, ConfigError
from .filters import is_go_file
from .treesitter_backend import TreeSitterBackend  # noqa: F401
from .registry import Registry
from .strategy import PackageStrategy, StrictPackageStrategy, FirstPackageStrategy, strategy_registry  # noqa: F401
from .classifier import DeclarationClassifier, is_deprecated
from .document import Dialect, Binding, Section, RegistrationDocument, build_document
from .renderers import DocumentRenderer, GoRegistrationRenderer, JsonRenderer, renderer_registry
from .config import BindgenConfig, load_config
from .generator import Generator, export_declarations

__all__ = [
    "TreeSitterBackend",
    "Registry",
    "PackageStrategy",
    "StrictPackageStrategy",
    "FirstPackageStrategy",
    "strategy_registry",
    "DeclarationClassifier",
    "is_deprecated",
    "is_go_file",
    "Dialect",
    "Binding",
    "Section",
    "RegistrationDocument",
    "build_document",
    "DocumentRenderer",
    "GoRegistrationRenderer",
    "JsonRenderer",
    "renderer_registry",
    "BindgenConfig",
    "load_config",
    "Generator",
    "export_declarations",
    "GenerationError",
    "ParseError",
    "AmbiguousPackageError",
    "ConfigError",
    "ConstGroup",
    "VarGroup",
    "TypeDef",
    "FuncDef",
    "DeclSpec",
    "Package",
    "SourceFile",
    "SymbolSet",
]
