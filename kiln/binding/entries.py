"""Registry entry variants produced by the binder.

Every entry is a zero-argument callable. Keeping the variants as explicit
classes makes resolution order and memoization observable in tests without a
terminal attached.
"""

from __future__ import annotations

import logging
from typing import Any

from ..core.models import RunState
from ..registry.functions import Binding
from .prompter import Prompter

logger = logging.getLogger(__name__)

_UNSET = object()


def default_choice(value: Any) -> Any:
    """Return the default for a context value (first element of a list)."""
    if isinstance(value, list):
        return value[0] if value else ""
    return value


class StaticValue(Binding):
    """A constant that touches no run state."""

    def __init__(self, key: str, value: Any) -> None:
        self.key = key
        self.value = value

    def resolve(self) -> Any:
        return self.value


class CachedValue(Binding):
    """A value taken from defaults or stored answers without prompting.

    Each resolution records the key as used so the answer file can be
    validated once execution completes.
    """

    def __init__(self, key: str, value: Any, state: RunState) -> None:
        self.key = key
        self.value = default_choice(value)
        self._state = state

    def resolve(self) -> Any:
        self._state.used_keys.add(self.key)
        return self.value


class InteractivePrompt(Binding):
    """Ask the operator once for a value, then reuse the answer.

    When ``toggle`` is given the toggle is evaluated first; a false toggle
    returns the static default and the prompter is never called.
    """

    def __init__(
        self,
        key: str,
        default: Any,
        prompter: Prompter,
        state: RunState,
        toggle: GroupToggle | None = None,
    ) -> None:
        self.key = key
        self.default = default
        self.toggle = toggle
        self._prompter = prompter
        self._state = state
        self._answer: Any = _UNSET

    def resolve(self) -> Any:
        if self.toggle is not None and not self.toggle():
            return default_choice(self.default)

        if self._answer is _UNSET:
            logger.debug(f"Prompting for {self.key!r}")
            self._answer = self._prompter.ask(self.key, self.default)
            self._state.user_input[self.key] = self._answer

        return self._answer


class GroupToggle(InteractivePrompt):
    """Yes/no question that gates the members of a variable group."""

    def __init__(self, key: str, prompter: Prompter, state: RunState) -> None:
        super().__init__(key, False, prompter, state)

    def resolve(self) -> bool:
        return bool(super().resolve())
