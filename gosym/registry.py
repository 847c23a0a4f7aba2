"""Keyed registry for pluggable package-selection strategies and renderers.

Implementations register themselves with a decorator and are later
instantiated by key, which keeps the command line free of if-else chains
when choosing between, for example, the ``go`` and ``json`` renderers.

Example usage::

    renderer_registry = Registry("renderer")

    @renderer_registry.register("go")
    class GoRegistrationRenderer(DocumentRenderer):
        ...

    renderer = renderer_registry.create("go")
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Type, TypeVar

T = TypeVar("T")


class Registry:
    """Map string keys to classes and build instances on demand."""

    def __init__(self, name: str = "registry") -> None:
        """Initialize an empty registry.

        Args:
            name: Label used in error messages (``"renderer"``, ``"strategy"``).
        """
        self._name = name
        self._items: Dict[str, Type[Any]] = {}

    def register(self, key: str) -> Callable[[Type[T]], Type[T]]:
        """Class decorator registering the decorated class under ``key``.

        Raises:
            ValueError: If ``key`` is already taken.
        """
        def decorator(cls: Type[T]) -> Type[T]:
            if key in self._items:
                raise ValueError(
                    f"{self._name}: key '{key}' already registered "
                    f"to {self._items[key].__name__}"
                )
            self._items[key] = cls
            return cls
        return decorator

    def get(self, key: str) -> Type[Any]:
        """Return the class registered under ``key``.

        Raises:
            KeyError: If ``key`` is unknown; the message lists valid keys.
        """
        if key not in self._items:
            available = ", ".join(sorted(self._items))
            raise KeyError(f"{self._name}: unknown key '{key}'. Available: {available}")
        return self._items[key]

    def create(self, key: str, **kwargs: Any) -> Any:
        """Instantiate the class registered under ``key`` with ``kwargs``."""
        return self.get(key)(**kwargs)

    def keys(self) -> List[str]:
        """Registered keys in registration order (used for argparse choices)."""
        return list(self._items)

    def __contains__(self, key: str) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)
