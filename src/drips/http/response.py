"""Responses, redirects and the transport the route table emits into.

The route table never writes to a socket. ``redirect()`` asks a
``Transport`` whether output has started and then emits either a
Location redirect or an in-body refresh fallback.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from functools import cache
from typing import Protocol, runtime_checkable

from kida import Environment

logger = logging.getLogger("drips.http")

_META_REFRESH = '<meta http-equiv="refresh" content="0; URL={{ url }}">'


@cache
def _refresh_template():
    return Environment(autoescape=True).from_string(_META_REFRESH)


def meta_refresh(url: str) -> str:
    """Render the client-side refresh tag used once headers are sent.

    The URL is HTML-escaped.
    """
    return _refresh_template().render({"url": url})


@dataclass(frozen=True, slots=True)
class Response:
    """A response built through immutable transformations.

    Each ``.with_*()`` call returns a new ``Response``.
    """

    body: str = ""
    status: int = 200
    content_type: str = "text/html; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_body(self, body: str) -> Response:
        """Return a new Response with a different body."""
        return replace(self, body=body)

    def header(self, name: str) -> str | None:
        """First value of header *name* (case-insensitive), or ``None``."""
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return None


@dataclass(frozen=True, slots=True)
class Redirect:
    """A redirect resolved by ``RouteTable.redirect()``."""

    url: str
    status: int = 302
    headers: tuple[tuple[str, str], ...] = ()


@runtime_checkable
class Transport(Protocol):
    """Where redirects are emitted.

    ``headers_sent()`` is only read, never changed, by the route table.
    """

    def headers_sent(self) -> bool: ...

    def emit_redirect(self, url: str, status: int) -> None: ...

    def emit_meta_refresh(self, url: str) -> None: ...


class BufferedTransport:
    """In-memory transport that collects one response.

    Headers count as sent once any body text has been written, the
    same way an unbuffered server commits its status line on first
    output. ``to_response()`` returns what was collected.

    Usage::

        transport = BufferedTransport()
        table.redirect("home", transport=transport)
        response = transport.to_response()
    """

    __slots__ = ("_chunks", "_headers", "_status")

    def __init__(self) -> None:
        self._chunks: list[str] = []
        self._headers: list[tuple[str, str]] = []
        self._status = 200

    def write(self, text: str) -> None:
        """Append body output. Commits the headers."""
        self._chunks.append(text)

    def headers_sent(self) -> bool:
        return bool(self._chunks)

    def emit_redirect(self, url: str, status: int) -> None:
        if self.headers_sent():
            msg = "Cannot emit a Location redirect after output has started."
            raise RuntimeError(msg)
        logger.debug("redirect %d -> %s", status, url)
        self._status = status
        self._headers.append(("Location", url))

    def emit_meta_refresh(self, url: str) -> None:
        logger.debug("headers already sent, meta refresh -> %s", url)
        self.write(meta_refresh(url))

    @property
    def body(self) -> str:
        return "".join(self._chunks)

    def to_response(self) -> Response:
        return Response(body=self.body, status=self._status, headers=tuple(self._headers))
