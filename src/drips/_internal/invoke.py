"""Invoke helpers — validate and call route handlers uniformly.

A handler is either a plain callable receiving the route params
positionally, or a ``Controller`` subclass that is constructed with the
params and then asked to ``handle()`` the request. The check lives in
exactly one place.

Usage::

    from drips._internal.invoke import invoke

    result = invoke(handler, ("alice",))
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from drips.errors import InvalidHandler


class Controller(ABC):
    """Base class for class-based route handlers.

    Subclasses receive the route params on construction and produce
    output from ``handle()``. A subclass without ``handle()`` cannot be
    constructed::

        class UserController(Controller):
            def handle(self) -> str:
                (name,) = self.params
                return f"Hello {name}"
    """

    def __init__(self, *params: str) -> None:
        self.params = params

    @abstractmethod
    def handle(self) -> Any:
        """Produce the route's output."""


def is_controller(handler: object) -> bool:
    return isinstance(handler, type) and issubclass(handler, Controller)


def validate_handler(name: str, handler: object) -> None:
    """Raise ``InvalidHandler`` unless *handler* can be invoked."""
    if not callable(handler):
        raise InvalidHandler(name, handler)


def invoke(handler: Any, params: Sequence[str] = ()) -> Any:
    """Call a handler with the route params and return its result."""
    if is_controller(handler):
        return handler(*params).handle()
    return handler(*params)
