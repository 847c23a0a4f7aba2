"""JSON renderer.

Dumps the bindings of a :class:`RegistrationDocument` as JSON, for
tooling that wants to inspect a package's exported surface without
parsing generated Go.
"""

from __future__ import annotations

import json

from ..document import RegistrationDocument
from .base import DocumentRenderer, renderer_registry


@renderer_registry.register("json")
class JsonRenderer(DocumentRenderer):
    """Render the document model as indented JSON."""

    extension = ".json"

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def render(self, document: RegistrationDocument) -> str:
        return json.dumps(document.to_dict(), indent=self.indent) + "\n"
