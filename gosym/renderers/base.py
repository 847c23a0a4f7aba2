"""Base renderer class and registry.

This module defines the abstract :class:`DocumentRenderer` interface
and the ``renderer_registry`` that concrete output formats register
themselves with.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..document import RegistrationDocument
from ..registry import Registry

# Registry for renderer implementations
renderer_registry = Registry("renderer")


class DocumentRenderer(ABC):
    """Abstract base class for printing a :class:`RegistrationDocument`."""

    #: File extension used when the rendered text is written to disk.
    extension = ".txt"

    @abstractmethod
    def render(self, document: RegistrationDocument) -> str:
        """Render ``document`` as text.

        Rendering is a pure function of the document: no I/O and no
        state carried between calls.
        """
        raise NotImplementedError

    def render_file(self, document: RegistrationDocument, go_package: str) -> str:
        """Render ``document`` as the complete contents of an output file.

        ``go_package`` is the package clause for formats that need one;
        by default the file holds exactly what :meth:`render` returns.
        """
        return self.render(document)
