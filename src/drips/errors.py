"""Drips exception hierarchy.

Shared across RouteTable, App, context helpers and the CLI so every
module raises and catches the same types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from drips.http.response import Redirect


class DripsError(Exception):
    """Base for all drips-specific errors."""


class ConfigurationError(DripsError):
    """Raised when the route table is configured incorrectly.

    Raised at registration time, never while matching a request.
    """


class InvalidHandler(ConfigurationError):
    """A route handler is neither callable nor a ``Controller`` subclass."""

    def __init__(self, name: str, handler: object) -> None:
        self.name = name
        self.handler = handler
        super().__init__(
            f"Invalid handler for route {name!r}: {handler!r} is not callable"
        )


class MalformedTemplate(ConfigurationError):
    """A route template or token pattern does not compile to a regex."""

    def __init__(self, template: str, reason: str) -> None:
        self.template = template
        self.reason = reason
        super().__init__(f"Malformed route template {template!r}: {reason}")


class NoRoutesError(ConfigurationError):
    """``App.handle()`` was called on an app with no routes declared."""

    def __init__(self) -> None:
        super().__init__("No routes registered. Declare at least one route before handling requests.")


@dataclass(frozen=True, slots=True)
class HTTPError(DripsError):
    """An error that maps directly to an HTTP status code.

    Raised by the route table at dispatch time. The surrounding
    environment decides how to render it.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no registered route was selected for the request.

    The detail never says which constraint rejected a route: a wrong
    verb, a wrong host and a pattern miss all look the same.
    """

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class RedirectRequested(DripsError):  # noqa: N818 — control flow, not a failure
    """Raised by ``RouteTable.redirect()`` after a Location redirect was emitted.

    Stops further processing of the current request. ``App.handle()``
    catches it and returns the carried ``Redirect``.
    """

    def __init__(self, redirect: Redirect) -> None:
        self.redirect = redirect
        super().__init__(f"Redirect to {redirect.url}")
