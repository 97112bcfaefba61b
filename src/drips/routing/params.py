"""Template token grammar.

Placeholders are written ``{name}`` where the name is made of word
characters and hyphens. Purely numeric names are left alone so raw
regex quantifiers such as ``\\d{4}`` survive inside templates.
"""

import re

# {identifier} — at least one non-digit, so "{4}" stays a quantifier
TOKEN_RE = re.compile(r"\{((?!\d+\})[\w-]+)\}")

DEFAULT_TOKEN_PATTERN = r"[\w-]+"

AUTO_MARKER = "[auto]"

# Characters that make a token-free template a raw regular expression
_REGEX_META = frozenset("\\.^$*+?()[]{}|")


def find_tokens(template: str) -> tuple[str, ...]:
    """Return the distinct token names in order of first appearance."""
    seen: dict[str, None] = {}
    for name in TOKEN_RE.findall(template):
        seen.setdefault(name, None)
    return tuple(seen)


def is_literal(template: str) -> bool:
    """True if *template* contains no regex metacharacters."""
    return not any(ch in _REGEX_META for ch in template)


def token_group(pattern: str) -> str:
    """Wrap a token pattern in a capturing group unless it already has one.

    ``"[A-Z]+"`` becomes ``"([A-Z]+)"``; ``"([A-Z]+)"`` is kept as given.
    Raises ``re.error`` if the pattern does not compile.
    """
    if re.compile(pattern).groups:
        return pattern
    return f"({pattern})"
