"""Go source renderer.

Prints a :class:`RegistrationDocument` as an ``init`` function that
fills the interpreter's value and type registries.  The layout lives in
Jinja2 templates under ``templates/``.  The three section comments
(``// constants``, ``// variables``, ``// functions``) are emitted even
for empty sections so that regenerated files diff cleanly.
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from ..document import RegistrationDocument
from .base import DocumentRenderer, renderer_registry

# Template directory
TEMPLATES_DIR = Path(__file__).parent / "templates"


@renderer_registry.register("go")
class GoRegistrationRenderer(DocumentRenderer):
    """Render registration functions as Go source."""

    extension = ".go"

    def __init__(self) -> None:
        """Initialize renderer with Jinja2 environment."""
        self._env = Environment(
            loader=FileSystemLoader(TEMPLATES_DIR),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def render(self, document: RegistrationDocument) -> str:
        template = self._env.get_template("registration.go.jinja2")
        return template.render(doc=document)

    def render_file(self, document: RegistrationDocument, go_package: str) -> str:
        """Wrap the registration function in a compilable Go file.

        The imports are the dialect's own (``reflect`` by default)
        followed by the package being registered.
        """
        imports = list(document.dialect.imports)
        if document.package_path not in imports:
            imports.append(document.package_path)
        template = self._env.get_template("file.go.jinja2")
        return template.render(go_package=go_package, imports=imports, body=self.render(document))
