"""Route table with first-wins matching.

A table serves exactly one request snapshot. Each registration is
checked against that snapshot immediately; the first eligible route
becomes the selected route and is never replaced.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from drips._internal.invoke import invoke, validate_handler
from drips._internal.types import Handler, Params
from drips.config import RouterConfig
from drips.errors import NotFound, RedirectRequested
from drips.http.request import RequestSnapshot
from drips.http.response import Redirect, Transport
from drips.routing.codec import (
    compile_template,
    is_absolute_url,
    join_root,
    match_path,
    render_template,
)
from drips.routing.route import Constraints, RouteDefinition, RouteMatch

logger = logging.getLogger("drips.routing")


class RouteTable:
    """Named routes for a single request.

    Usage::

        table = RouteTable(RequestSnapshot("/users/alice"))
        table.register("home", "/", home)
        table.register("user", "/users/{name}", show_user, {"verbs": "GET"})
        table.dispatch()                        # show_user("alice")
        table.link("user", {"name": "bob"})     # "/users/bob"

    Not thread-safe. Build one table per request.
    """

    __slots__ = ("_config", "_match", "_params", "_request", "_routes")

    def __init__(self, request: RequestSnapshot, *, config: RouterConfig | None = None) -> None:
        self._request = request
        self._config = config or RouterConfig()
        self._routes: dict[str, RouteDefinition] = {}
        self._match: RouteMatch | None = None
        self._params: Params = ()

    # -- Registration --

    def register(
        self,
        name: str,
        template: str,
        handler: Handler,
        constraints: Constraints | Mapping[str, Any] | None = None,
    ) -> bool:
        """Register a named route.

        Returns ``False`` if *name* is already taken; the existing route
        is left untouched. Raises ``InvalidHandler`` for a handler that
        cannot be called and ``MalformedTemplate`` for a template that
        does not compile — in both cases nothing is registered.
        """
        validate_handler(name, handler)

        if name in self._routes:
            logger.debug("route %r already registered, ignoring %r", name, template)
            return False

        rules = Constraints.coerce(constraints)
        compiled = compile_template(
            template,
            rules.patterns,
            default=self._config.token_pattern,
            auto_marker=self._config.auto_marker,
        )
        self._routes[name] = RouteDefinition(
            name=name,
            template=template,
            handler=handler,
            compiled=compiled,
            constraints=rules,
        )
        logger.debug("registered route %r (%s) %s", name, compiled.kind.value, template)

        if self._match is None and self.is_eligible(name):
            self._match = RouteMatch(route=self._routes[name], params=self._params)
            logger.debug("selected route %r with params %r", name, self._params)

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
        """Register a route handler via decorator."""

        def decorator(handler: Handler) -> Handler:
            self.register(
                name,
                template,
                handler,
                Constraints(https=https, verbs=verbs, hosts=hosts, patterns=patterns or {}),
            )
            return handler

        return decorator

    # -- Matching --

    def is_eligible(self, name: str) -> bool:
        """Check every constraint of route *name* against the request.

        HTTPS, verb, host and path pattern must all hold. A pattern
        check replaces ``params`` on success and clears it on failure.
        """
        route = self._routes.get(name)
        if route is None:
            return False

        rules = route.constraints
        request = self._request
        if rules.https and not request.is_https:
            return False
        if rules.verbs is not None and request.method.upper() not in rules.verbs:
            return False
        if rules.hosts is not None and request.host not in rules.hosts:
            return False

        params = match_path(route.compiled, request.path)
        if params is None:
            self._params = ()
            return False
        self._params = params
        return True

    # -- Dispatch --

    def dispatch(self) -> Any:
        """Run the selected route and return the handler's result.

        Raises ``NotFound`` if no registered route matched the request.
        """
        if self._match is None:
            logger.debug("no route matches %s %r", self._request.method, self._request.path)
            raise NotFound(f"No route matches {self._request.method} {self._request.path!r}")
        return self.execute(self._match.route.name, self._match.params)

    def execute(self, name: str, params: Iterable[str] | None = None) -> Any:
        """Run route *name* directly, bypassing selection.

        Without *params* the selected route's params are used. Raises
        ``NotFound`` for an unknown name.
        """
        route = self._routes.get(name)
        if route is None:
            raise NotFound(f"No route named {name!r}")
        if params is None:
            params = self._match.params if self._match is not None else ()
        args = tuple(params)
        logger.debug("dispatching %r with %r", name, args)
        return invoke(route.handler, args)

    # -- Link generation --

    def asset(self, path: str) -> str:
        """Root *path* under the document root: ``"css/site.css"`` -> ``"/app/css/site.css"``."""
        return join_root(self._config.root, path)

    def link(self, name: str, params: Mapping[str, Any] | None = None) -> str:
        """Build the path for route *name* from *params*.

        An unregistered *name* is treated as a literal path or URL and
        rooted like an asset. Unfilled tokens are dropped from the result.
        """
        route = self._routes.get(name)
        if route is None:
            return self.asset(name)
        return self.asset(
            render_template(route.template, params, auto_marker=self._config.auto_marker)
        )

    def build_redirect(self, name: str, params: Mapping[str, Any] | None = None) -> Redirect:
        """Resolve the redirect target for *name* without emitting anything."""
        if name not in self._routes and is_absolute_url(name):
            url = name
        else:
            url = self.link(name, params)
        return Redirect(url=url, status=self._config.redirect_status)

    def redirect(
        self,
        name: str,
        params: Mapping[str, Any] | None = None,
        *,
        transport: Transport,
    ) -> Redirect:
        """Redirect the client to route *name* (or a literal URL).

        Before any output, emits a Location redirect and raises
        ``RedirectRequested`` to stop the request. After output has
        started, writes a refresh fallback and returns the ``Redirect``.
        """
        target = self.build_redirect(name, params)
        if transport.headers_sent():
            transport.emit_meta_refresh(target.url)
            return target
        transport.emit_redirect(target.url, target.status)
        raise RedirectRequested(target)

    # -- Introspection --

    def has(self, name: str) -> bool:
        return name in self._routes

    def has_routes(self) -> bool:
        return bool(self._routes)

    def get(self, name: str) -> RouteDefinition | None:
        return self._routes.get(name)

    @property
    def routes(self) -> tuple[RouteDefinition, ...]:
        """All registered routes in registration order."""
        return tuple(self._routes.values())

    @property
    def current(self) -> str | None:
        """Name of the selected route, or ``None``."""
        return self._match.route.name if self._match is not None else None

    @property
    def match(self) -> RouteMatch | None:
        return self._match

    @property
    def params(self) -> Params:
        """Params captured by the most recent match attempt."""
        return self._params

    @property
    def request(self) -> RequestSnapshot:
        return self._request

    @property
    def root(self) -> str:
        return self._config.root

    def __len__(self) -> int:
        return len(self._routes)

    def __contains__(self, name: object) -> bool:
        return name in self._routes
