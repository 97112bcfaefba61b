"""Shared type aliases used across drips modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler — a plain callable taking the positional route params,
# or a Controller subclass
Handler: TypeAlias = Callable[..., Any]

# Route params — captured values in template order
Params: TypeAlias = tuple[str, ...]
