"""Variable binding: context layers to registry entries."""

from .binder import bind
from .entries import Binding, CachedValue, GroupToggle, InteractivePrompt, StaticValue
from .prompter import Prompter, TyperPrompter

__all__ = [
    "Binding",
    "CachedValue",
    "GroupToggle",
    "InteractivePrompt",
    "Prompter",
    "StaticValue",
    "TyperPrompter",
    "bind",
]
