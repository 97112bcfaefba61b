"""Drips — named URL routing with first-wins matching and link generation.

Basic usage::

    from drips import App, RequestSnapshot

    app = App()

    @app.route("home", "/")
    def index():
        return "Hello, World!"

    @app.route("user", "/users/{name}", verbs="GET")
    def show_user(name):
        return f"Hello {name}"

    app.handle(RequestSnapshot("/users/alice"))

Per-request tables, without an App::

    from drips import RouteTable

    table = RouteTable(RequestSnapshot.from_uri("/users/alice?tab=posts"))
    table.register("user", "/users/{name}", show_user)
    table.dispatch()
    table.link("user", {"name": "bob"})   # "/users/bob"
"""

__version__ = "0.1.0-dev"
__all__ = [
    "App",
    "BufferedTransport",
    "ConfigurationError",
    "Constraints",
    "Controller",
    "DripsError",
    "HTTPError",
    "InvalidHandler",
    "MalformedTemplate",
    "NoRoutesError",
    "NotFound",
    "Redirect",
    "RedirectRequested",
    "RequestSnapshot",
    "Response",
    "RouteTable",
    "RouterConfig",
    "asset",
    "bind",
    "link",
    "redirect",
]

_ERRORS = (
    "ConfigurationError",
    "DripsError",
    "HTTPError",
    "InvalidHandler",
    "MalformedTemplate",
    "NoRoutesError",
    "NotFound",
    "RedirectRequested",
)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import drips`` fast while providing a clean top-level API.
    """
    if name == "App":
        from drips.app import App

        return App

    if name == "RouterConfig":
        from drips.config import RouterConfig

        return RouterConfig

    if name == "RouteTable":
        from drips.routing.router import RouteTable

        return RouteTable

    if name == "Constraints":
        from drips.routing.route import Constraints

        return Constraints

    if name == "Controller":
        from drips._internal.invoke import Controller

        return Controller

    if name == "RequestSnapshot":
        from drips.http.request import RequestSnapshot

        return RequestSnapshot

    if name in ("BufferedTransport", "Redirect", "Response"):
        from drips.http import response as _resp

        return getattr(_resp, name)

    if name in ("asset", "bind", "link", "redirect"):
        from drips import context as _ctx

        return getattr(_ctx, name)

    if name in _ERRORS:
        from drips import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
