"""Immutable request snapshot.

The route table never sees a live request — only the four facts it
routes on, captured once before any route is registered.
"""

from __future__ import annotations

import posixpath
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


def document_root(script_filename: str, document_root: str, *, public: bool = False) -> str:
    """Derive the URL prefix an application is served under.

    The prefix is the script's directory relative to the server's
    document root. With *public*, a trailing ``/public`` directory is
    dropped so the app root sits above its public folder::

        document_root("/var/www/shop/index.py", "/var/www")               # "/shop/"
        document_root("/var/www/shop/public/index.py", "/var/www", public=True)  # "/shop/"
    """
    current = posixpath.dirname(script_filename)
    root = current[len(document_root.rstrip("/")) :] + "/"
    if public and root.endswith("/public/"):
        root = root[: -len("public/")]
    if not root.startswith("/"):
        root = "/" + root
    return root


def strip_uri(uri: str, root: str = "/") -> str:
    """Reduce a request URI to the routable path.

    Drops the fragment, the query string and the document-root prefix.
    """
    path = uri.partition("#")[0].partition("?")[0]
    prefix = root.rstrip("/")
    if prefix and (path == prefix or path.startswith(prefix + "/")):
        path = path[len(prefix) :]
    return path or "/"


@dataclass(frozen=True, slots=True)
class RequestSnapshot:
    """The inbound request as the route table sees it. Immutable.

    ``path`` is relative to the application root; query string and
    fragment are already removed.
    """

    path: str = "/"
    method: str = "GET"
    scheme: str = "http"
    host: str = ""

    @property
    def is_https(self) -> bool:
        return self.scheme.lower() == "https"

    @classmethod
    def from_uri(
        cls,
        uri: str,
        *,
        root: str = "/",
        method: str = "GET",
        scheme: str = "http",
        host: str = "",
    ) -> RequestSnapshot:
        """Create a snapshot from a raw request URI such as ``/app/users?page=2``."""
        return cls(path=strip_uri(uri, root), method=method, scheme=scheme, host=host)

    @classmethod
    def from_environ(cls, environ: Mapping[str, Any], *, root: str = "/") -> RequestSnapshot:
        """Create a snapshot from a WSGI/CGI environ mapping.

        ``HTTPS`` counts as secure when set to anything but ``off``;
        otherwise ``wsgi.url_scheme`` decides.
        """
        uri = environ.get("REQUEST_URI") or environ.get("PATH_INFO") or "/"
        https = environ.get("HTTPS")
        if https:
            scheme = "http" if str(https).lower() == "off" else "https"
        else:
            scheme = environ.get("wsgi.url_scheme", "http")
        return cls.from_uri(
            uri,
            root=root,
            method=environ.get("REQUEST_METHOD", "GET"),
            scheme=scheme,
            host=environ.get("HTTP_HOST") or environ.get("SERVER_NAME", ""),
        )

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any], *, root: str = "/") -> RequestSnapshot:
        """Create a snapshot from an ASGI HTTP scope."""
        host = ""
        for name, value in scope.get("headers", ()):
            if name.lower() == b"host":
                host = value.decode("latin-1")
                break
        return cls.from_uri(
            scope.get("path", "/"),
            root=root,
            method=scope.get("method", "GET"),
            scheme=scope.get("scheme", "http"),
            host=host,
        )
