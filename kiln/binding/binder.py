"""Bind layered context values into the function registry."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from ..core.models import ContextLayer, RunState
from ..registry.functions import FunctionRegistry
from .entries import Binding, CachedValue, GroupToggle, InteractivePrompt, StaticValue
from .prompter import Prompter

logger = logging.getLogger(__name__)


def _bind_value(
    key: str,
    value: Any,
    *,
    use_defaults_only: bool,
    prompter: Prompter,
    state: RunState,
    toggle: GroupToggle | None = None,
) -> Binding:
    if use_defaults_only:
        return CachedValue(key, value, state)
    return InteractivePrompt(key, value, prompter, state, toggle=toggle)


def bind_layer(
    layer: ContextLayer,
    registry: FunctionRegistry,
    *,
    use_defaults_only: bool,
    prompter: Prompter,
    state: RunState,
) -> None:
    """Register one context layer, overwriting earlier entries by key."""
    logger.debug(f"Binding {len(layer.values)} value(s) from layer {layer.name!r}")

    for key, value in layer.values.items():
        if isinstance(value, dict):
            toggle: Binding
            if use_defaults_only:
                toggle = StaticValue(key, False)
            else:
                toggle = GroupToggle(key, prompter, state)
            registry.register(key, toggle)

            for member, member_value in value.items():
                registry.register(
                    member,
                    _bind_value(
                        member,
                        member_value,
                        use_defaults_only=use_defaults_only,
                        prompter=prompter,
                        state=state,
                        toggle=toggle if isinstance(toggle, GroupToggle) else None,
                    ),
                )
            continue

        registry.register(
            key,
            _bind_value(
                key,
                value,
                use_defaults_only=use_defaults_only,
                prompter=prompter,
                state=state,
            ),
        )


def bind(
    layers: Sequence[ContextLayer],
    registry: FunctionRegistry,
    *,
    use_defaults_only: bool,
    prompter: Prompter,
    state: RunState,
) -> FunctionRegistry:
    """Bind context layers into ``registry`` in order.

    Layers are applied first to last, so a key present in a later layer
    (stored answers) replaces the entry created by an earlier one (inline
    defaults). Nested mappings are gated groups: the group key becomes a
    yes/no toggle and each member prompts only when the toggle is true.

    Args:
        layers: Context layers, inline defaults first
        registry: Registry to populate
        use_defaults_only: Resolve every value from context without prompting
        prompter: Input collaborator used for interactive entries
        state: Per-run accumulators for used keys and user input

    Returns:
        The populated registry
    """
    for layer in layers:
        bind_layer(
            layer,
            registry,
            use_defaults_only=use_defaults_only,
            prompter=prompter,
            state=state,
        )
    return registry
