"""Request-scoped route table via ContextVar.

Provides:
- ``bind()``: make a ``RouteTable`` (and optionally a ``Transport``)
  current for the duration of a request.
- ``link()``, ``redirect()``, ``asset()``: helpers that use the current table.

Nothing is bound implicitly — calling a helper outside ``bind()``
raises ``LookupError``.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local across
    threads. No locks needed.
"""

from collections.abc import Mapping
from contextvars import ContextVar, Token
from types import TracebackType
from typing import Any

from drips.http.response import Redirect, Transport
from drips.routing.router import RouteTable

table_var: ContextVar[RouteTable] = ContextVar("drips_table")
"""The route table of the request being handled."""

transport_var: ContextVar[Transport] = ContextVar("drips_transport")
"""Where ``redirect()`` emits when no transport is passed."""


def get_table() -> RouteTable:
    """Return the current route table.

    Raises ``LookupError`` if called outside a ``bind()`` block.
    """
    return table_var.get()


def get_transport() -> Transport:
    """Return the current transport.

    Raises ``LookupError`` if none was bound.
    """
    return transport_var.get()


class bind:  # noqa: N801 — used like a function
    """Make *table* current until the block exits::

        with bind(table, transport):
            link("user", {"name": "alice"})

    Exceptions leaving the block propagate untouched.
    """

    __slots__ = ("_table", "_table_token", "_transport", "_transport_token")

    def __init__(self, table: RouteTable, transport: Transport | None = None) -> None:
        self._table = table
        self._transport = transport
        self._table_token: Token[RouteTable] | None = None
        self._transport_token: Token[Transport] | None = None

    def __enter__(self) -> RouteTable:
        self._table_token = table_var.set(self._table)
        if self._transport is not None:
            self._transport_token = transport_var.set(self._transport)
        return self._table

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._transport_token is not None:
            transport_var.reset(self._transport_token)
            self._transport_token = None
        if self._table_token is not None:
            table_var.reset(self._table_token)
            self._table_token = None


def link(name: str, params: Mapping[str, Any] | None = None) -> str:
    """``RouteTable.link()`` on the current table."""
    return get_table().link(name, params)


def redirect(
    name: str,
    params: Mapping[str, Any] | None = None,
    *,
    transport: Transport | None = None,
) -> Redirect:
    """``RouteTable.redirect()`` on the current table.

    Emits into the bound transport unless *transport* is given.
    """
    if transport is None:
        transport = get_transport()
    return get_table().redirect(name, params, transport=transport)


def asset(path: str) -> str:
    """``RouteTable.asset()`` on the current table."""
    return get_table().asset(path)
