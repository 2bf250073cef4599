"""Function registry consumed by the renderer."""

from .functions import Binding, FunctionRegistry, RegistryView
from .helpers import HELPERS
from .lazy import LazyValue, unwrap, unwrapping

__all__ = [
    "Binding",
    "FunctionRegistry",
    "HELPERS",
    "LazyValue",
    "RegistryView",
    "unwrap",
    "unwrapping",
]
