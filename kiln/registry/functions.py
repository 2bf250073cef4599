"""Name to callable table shared by the binder and the renderer."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from typing import Any

from .helpers import HELPERS
from .lazy import LazyValue, unwrapping

logger = logging.getLogger(__name__)


class Binding:
    """Base class for registry entries bound from context layers.

    A binding is a zero-argument callable producing the variable's value.
    """

    key: str

    def resolve(self) -> Any:
        raise NotImplementedError

    def __call__(self) -> Any:
        return self.resolve()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.key!r})"


class FunctionRegistry:
    """Mapping from identifier to callable.

    Helpers are exposed to templates as callables; bound variables
    (``Binding`` entries) are resolved when a template uses them.
    Later registrations replace earlier ones. Once frozen the registry rejects
    further registrations.
    """

    def __init__(self, functions: Mapping[str, Callable[..., Any]] | None = None) -> None:
        self._functions: dict[str, Callable[..., Any]] = dict(functions or {})
        self._frozen = False

    @classmethod
    def with_helpers(cls) -> FunctionRegistry:
        """Create a registry seeded with a fresh copy of the built-in helpers."""
        return cls(HELPERS)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def register(self, name: str, fn: Callable[..., Any]) -> None:
        if self._frozen:
            raise RuntimeError(f"Cannot register {name!r}: registry is read-only")
        if name in self._functions:
            logger.debug(f"Overriding registry entry {name!r}")
        self._functions[name] = fn

    def resolve(self, name: str) -> Callable[..., Any]:
        try:
            return self._functions[name]
        except KeyError:
            raise KeyError(f"invalid key: {name!r} is not defined") from None

    def view(self) -> RegistryView:
        """Return a lazy, read-only mapping suitable as a template context."""
        return RegistryView(self)

    def __contains__(self, name: object) -> bool:
        return name in self._functions

    def __iter__(self) -> Iterator[str]:
        return iter(self._functions)

    def __len__(self) -> int:
        return len(self._functions)


class RegistryView(Mapping[str, Any]):
    """Template-facing view of the registry.

    Bindings come back as ``LazyValue`` so that a lookup alone never resolves
    them; helpers come back wrapped so they receive resolved arguments.
    """

    def __init__(self, registry: FunctionRegistry) -> None:
        self._registry = registry

    def __getitem__(self, name: str) -> Any:
        fn = self._registry.resolve(name)
        if isinstance(fn, Binding):
            return LazyValue(fn)
        return unwrapping(fn)

    def __contains__(self, name: object) -> bool:
        return name in self._registry

    def __iter__(self) -> Iterator[str]:
        return iter(self._registry)

    def __len__(self) -> int:
        return len(self._registry)
