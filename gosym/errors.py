"""Exceptions raised by the binding generator."""

from __future__ import annotations

from typing import Iterable, List, Optional


class GenerationError(RuntimeError):
    """Base class for failures that abort generation of one directory."""


class ParseError(GenerationError):
    """A Go source file (or its directory) could not be parsed.

    ``line`` and ``column`` are 1-based and ``None`` when the failure is not
    tied to a position, e.g. an unreadable directory.
    """

    def __init__(self, path: str, message: str, line: Optional[int] = None, column: Optional[int] = None) -> None:
        self.path = path
        self.line = line
        self.column = column
        self.message = message
        location = path
        if line is not None:
            location = f"{path}:{line}:{column or 1}"
        super().__init__(f"{location}: {message}")


class AmbiguousPackageError(GenerationError):
    """A directory declares more than one exportable package."""

    def __init__(self, directory: str, candidates: Iterable[str]) -> None:
        self.directory = directory
        self.candidates: List[str] = sorted(candidates)
        super().__init__(
            f"{directory}: expected exactly one non-main, non-test package, "
            f"found {', '.join(self.candidates)}"
        )


class ConfigError(GenerationError):
    """Raised when the configuration file cannot be parsed."""
