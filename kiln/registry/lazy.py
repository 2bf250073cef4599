"""Deferred values for bound variables.

Jinja2 looks up every name a template mentions before rendering starts. A
bound variable is handed over as a ``LazyValue`` so that it is only resolved
(and possibly prompted for) when the template actually uses it.
"""

from __future__ import annotations

import functools
import operator
from collections.abc import Callable
from typing import Any


def unwrap(value: Any) -> Any:
    """Return the resolved value behind a ``LazyValue``; other values pass through."""
    if isinstance(value, LazyValue):
        return value._resolve()
    return value


def unwrapping(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Wrap ``fn`` so that lazy arguments are resolved before the call."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return fn(
            *(unwrap(arg) for arg in args),
            **{key: unwrap(value) for key, value in kwargs.items()},
        )

    return wrapper


def _forward(op: Callable[..., Any]) -> Callable[..., Any]:
    def method(self: LazyValue, *args: Any) -> Any:
        return op(self._resolve(), *(unwrap(arg) for arg in args))

    return method


def _reflected(op: Callable[[Any, Any], Any]) -> Callable[[LazyValue, Any], Any]:
    def method(self: LazyValue, other: Any) -> Any:
        return op(unwrap(other), self._resolve())

    return method


class LazyValue:
    """Stand-in for a zero-argument binding, resolved on first real use."""

    __slots__ = ("_binding",)

    def __init__(self, binding: Callable[[], Any]) -> None:
        self._binding = binding

    def _resolve(self) -> Any:
        return self._binding()

    def __getattr__(self, name: str) -> Any:
        return getattr(self._resolve(), name)

    def __repr__(self) -> str:
        return f"LazyValue({self._binding!r})"

    def __str__(self) -> str:
        return str(self._resolve())

    def __format__(self, format_spec: str) -> str:
        return format(self._resolve(), format_spec)

    def __bool__(self) -> bool:
        return bool(self._resolve())

    def __hash__(self) -> int:
        return hash(self._resolve())

    def __int__(self) -> int:
        return int(self._resolve())

    def __float__(self) -> float:
        return float(self._resolve())

    def __index__(self) -> int:
        return operator.index(self._resolve())

    def __len__(self) -> int:
        return len(self._resolve())

    def __iter__(self) -> Any:
        return iter(self._resolve())

    def __contains__(self, item: Any) -> bool:
        return unwrap(item) in self._resolve()

    __eq__ = _forward(operator.eq)
    __ne__ = _forward(operator.ne)
    __lt__ = _forward(operator.lt)
    __le__ = _forward(operator.le)
    __gt__ = _forward(operator.gt)
    __ge__ = _forward(operator.ge)
    __getitem__ = _forward(operator.getitem)
    __neg__ = _forward(operator.neg)
    __pos__ = _forward(operator.pos)
    __add__ = _forward(operator.add)
    __sub__ = _forward(operator.sub)
    __mul__ = _forward(operator.mul)
    __truediv__ = _forward(operator.truediv)
    __floordiv__ = _forward(operator.floordiv)
    __mod__ = _forward(operator.mod)
    __pow__ = _forward(operator.pow)
    __radd__ = _reflected(operator.add)
    __rsub__ = _reflected(operator.sub)
    __rmul__ = _reflected(operator.mul)
    __rtruediv__ = _reflected(operator.truediv)
    __rfloordiv__ = _reflected(operator.floordiv)
    __rmod__ = _reflected(operator.mod)
    __rpow__ = _reflected(operator.pow)
