"""Renderer implementations for registration documents.

This package contains the available output formats:
- go: Go ``init`` function filling the interpreter registries
- json: the same bindings as JSON

All renderers are automatically registered via decorators.
"""

from .base import DocumentRenderer, renderer_registry
from .go import GoRegistrationRenderer
from .json import JsonRenderer

__all__ = [
    "DocumentRenderer",
    "renderer_registry",
    "GoRegistrationRenderer",
    "JsonRenderer",
]
