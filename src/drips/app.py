"""Drips application class.

Holds route declarations made at import time and builds a fresh
``RouteTable`` for every request, so no routing state outlives the
request it was built for.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from drips._internal.invoke import validate_handler
from drips._internal.types import Handler
from drips.config import RouterConfig
from drips.context import bind
from drips.errors import NoRoutesError, RedirectRequested
from drips.http.request import RequestSnapshot
from drips.http.response import BufferedTransport, Transport
from drips.routing.codec import compile_template
from drips.routing.route import Constraints
from drips.routing.router import RouteTable

logger = logging.getLogger("drips.routing")


@dataclass(frozen=True, slots=True)
class _PendingRoute:
    """A route waiting to be registered on a per-request table."""

    name: str
    template: str
    handler: Handler
    constraints: Constraints


class App:
    """The drips application.

    Routes are declared once; each request gets its own table, filled
    in declaration order, so the first matching declaration wins::

        app = App()

        @app.route("user", "/users/{name}", verbs="GET")
        def show_user(name):
            return f"Hello {name}"

        app.handle(RequestSnapshot("/users/alice"))   # "Hello alice"
    """

    __slots__ = ("_pending", "config")

    def __init__(self, config: RouterConfig | None = None) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self._pending: dict[str, _PendingRoute] = {}

    # -- Route declaration --

    def add(
        self,
        name: str,
        template: str,
        handler: Handler,
        constraints: Constraints | Mapping[str, Any] | None = None,
    ) -> bool:
        """Declare a route.

        Returns ``False`` if *name* is already declared. Handler and
        template are validated here so a broken declaration fails at
        import time, not on the first request.
        """
        validate_handler(name, handler)
        if name in self._pending:
            logger.debug("route %r already declared, ignoring %r", name, template)
            return False
        rules = Constraints.coerce(constraints)
        compile_template(
            template,
            rules.patterns,
            default=self.config.token_pattern,
            auto_marker=self.config.auto_marker,
        )
        self._pending[name] = _PendingRoute(name, template, handler, rules)
        return True

    def route(
        self,
        name: str,
        template: str,
        *,
        https: bool = False,
        verbs: str | Iterable[str] | None = None,
        hosts: str | Iterable[str] | None = None,
        patterns: Mapping[str, str] | None = None,
    ) -> Callable[[Handler], Handler]:
        """Declare a route handler via decorator.

        Args:
            name: Unique route name, used for link generation.
            template: Path template. Use ``{token}`` for parameters and
                the auto marker (``[auto]``) for prefix routes.
            https: Only match requests made over HTTPS.
            verbs: Allowed HTTP method or methods. Defaults to all.
            hosts: Allowed host or hosts. Defaults to all.
            patterns: Custom regex per token, e.g. ``{"id": r"\\d+"}``.
        """

        def decorator(handler: Handler) -> Handler:
            self.add(
                name,
                template,
                handler,
                Constraints(https=https, verbs=verbs, hosts=hosts, patterns=patterns or {}),
            )
            return handler

        return decorator

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def has_routes(self) -> bool:
        return bool(self._pending)

    # -- Per-request --

    def table(self, request: RequestSnapshot) -> RouteTable:
        """Build a route table for *request* with every declared route."""
        table = RouteTable(request, config=self.config)
        for pending in self._pending.values():
            table.register(pending.name, pending.template, pending.handler, pending.constraints)
        return table

    def handle(self, request: RequestSnapshot, transport: Transport | None = None) -> Any:
        """Route *request* and return the handler's result.

        The table and *transport* are bound while the handler runs, so
        ``drips.context.link()`` and ``drips.context.redirect()`` work
        inside handlers. Without a *transport* a ``BufferedTransport`` is
        bound. A redirect that stops the request is returned as its
        ``Redirect``.

        Raises ``NoRoutesError`` if nothing was declared and ``NotFound``
        if no route matches.
        """
        if not self.has_routes():
            raise NoRoutesError()
        table = self.table(request)
        if transport is None:
            transport = BufferedTransport()
        with bind(table, transport):
            try:
                return table.dispatch()
            except RedirectRequested as exc:
                return exc.redirect
