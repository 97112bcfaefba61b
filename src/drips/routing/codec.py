"""Path codec — compile templates into matchers and render them back into paths.

Both directions share the ``{token}`` grammar from ``drips.routing.params``::

    compiled = compile_template("/users/{name}")
    match_path(compiled, "/users/alice")        # ("alice",)
    render_template("/users/{name}", {"name": "alice"})  # "users/alice"
"""

import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlsplit

from drips.errors import MalformedTemplate
from drips.routing.params import (
    AUTO_MARKER,
    DEFAULT_TOKEN_PATTERN,
    TOKEN_RE,
    find_tokens,
    is_literal,
    token_group,
)
from drips.routing.route import CompiledTemplate, TemplateKind

_SLASH_RUN = re.compile(r"/{2,}")


def normalize_path(path: str) -> str:
    """Strip leading and trailing separators: ``"/users/"`` -> ``"users"``."""
    return path.strip("/")


def compile_template(
    template: str,
    patterns: Mapping[str, str] | None = None,
    *,
    default: str = DEFAULT_TOKEN_PATTERN,
    auto_marker: str = AUTO_MARKER,
) -> CompiledTemplate:
    """Translate a route template into an anchored regex.

    Each distinct ``{token}`` is replaced by a capturing group — the
    custom pattern from *patterns* when given, otherwise *default*.
    Token-free templates are compiled as regular expressions too, so a
    template may be a raw pattern such as ``/test/(a|b|c)``.

    Raises ``MalformedTemplate`` if the result is not a valid regex.
    """
    patterns = patterns or {}
    body = normalize_path(template)

    auto = auto_marker in body
    if auto:
        body = normalize_path(body.replace(auto_marker, ""))

    tokens = find_tokens(body)
    groups: dict[str, str] = {}
    try:
        for token in tokens:
            groups[token] = token_group(patterns.get(token, default))
    except re.error as exc:
        raise MalformedTemplate(template, f"pattern for {{{token}}}: {exc}") from exc

    source = TOKEN_RE.sub(lambda m: groups[m.group(1)], body)
    if auto:
        kind = TemplateKind.AUTO_PREFIX
    elif tokens:
        kind = TemplateKind.PLACEHOLDER
    elif is_literal(body):
        kind = TemplateKind.LITERAL
    else:
        kind = TemplateKind.RAW_PATTERN

    if auto:
        # The prefix must end on a segment boundary: "docs" matches
        # "docs" and "docs/a", never "docsearch".
        regex = f"^(?:{source})(?=/|$)" if source else "^"
    else:
        regex = f"^(?:{source})$"
    try:
        pattern = re.compile(regex)
    except re.error as exc:
        raise MalformedTemplate(template, str(exc)) from exc

    return CompiledTemplate(source=template, kind=kind, pattern=pattern, tokens=tokens)


def match_path(compiled: CompiledTemplate, path: str) -> tuple[str, ...] | None:
    """Match a request path against a compiled template.

    Returns the captured parameters in order, or ``None`` on a miss.
    Auto-prefix templates return the prefix captures followed by the
    remaining path segments, unvalidated. The prefix only matches whole
    segments.
    """
    request = normalize_path(path)

    if compiled.kind is TemplateKind.AUTO_PREFIX:
        m = compiled.pattern.match(request)
        if m is None:
            return None
        rest = request[m.end() :].removeprefix("/")
        segments = tuple(rest.split("/")) if rest else ()
        return _groups(m) + segments

    m = compiled.pattern.fullmatch(request)
    if m is None:
        return None
    return _groups(m)


def _groups(m: re.Match[str]) -> tuple[str, ...]:
    return tuple(value or "" for value in m.groups())


def render_template(
    template: str,
    params: Mapping[str, Any] | None = None,
    *,
    auto_marker: str = AUTO_MARKER,
) -> str:
    """Substitute parameter values into a template.

    Values are inserted as ``str(value)`` without escaping. Tokens with
    no value are dropped. The result has no leading separator.
    """
    url = template
    for key, value in (params or {}).items():
        url = url.replace(f"{{{key}}}", str(value))
    url = TOKEN_RE.sub("", url).replace(auto_marker, "")
    return url.lstrip("/")


def is_absolute_url(value: str) -> bool:
    """True for URLs with both a scheme and a host, e.g. ``https://example.com/x``."""
    parts = urlsplit(value)
    return bool(parts.scheme and parts.netloc)


def join_root(root: str, path: str) -> str:
    """Prefix *path* with the document root and collapse repeated separators.

    Absolute URLs are returned unchanged.
    """
    if is_absolute_url(path):
        return path
    return _SLASH_RUN.sub("/", root + path)
