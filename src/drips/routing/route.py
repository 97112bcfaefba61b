"""Route definitions, constraints and match results — frozen dataclasses."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from drips._internal.types import Handler


class TemplateKind(Enum):
    """How a route template is matched.

    Decided once when the template is compiled, never re-inferred
    while matching.
    """

    LITERAL = "literal"
    PLACEHOLDER = "placeholder"
    RAW_PATTERN = "raw"
    AUTO_PREFIX = "auto"


@dataclass(frozen=True, slots=True)
class CompiledTemplate:
    """A template translated into a regex.

    ``AUTO_PREFIX`` patterns are anchored at the start only; every other
    kind is matched against the whole normalized path.
    """

    source: str
    kind: TemplateKind
    pattern: re.Pattern[str]
    tokens: tuple[str, ...] = ()


def _freeze_names(value: str | Iterable[str] | None, *, upper: bool = False) -> frozenset[str] | None:
    if value is None:
        return None
    names = {value} if isinstance(value, str) else set(value)
    if upper:
        names = {name.upper() for name in names}
    return frozenset(names)


@dataclass(frozen=True, slots=True)
class Constraints:
    """Eligibility rules for a route. Absent fields are unconstrained.

    ``verbs`` and ``hosts`` accept a single string or any iterable of
    strings; both are stored as frozensets, so ``"GET"`` and ``{"GET"}``
    behave identically. Verbs are upper-cased.
    """

    https: bool = False
    verbs: frozenset[str] | None = None
    hosts: frozenset[str] | None = None
    patterns: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "verbs", _freeze_names(self.verbs, upper=True))
        object.__setattr__(self, "hosts", _freeze_names(self.hosts))
        object.__setattr__(self, "patterns", MappingProxyType(dict(self.patterns)))

    @classmethod
    def coerce(cls, value: Constraints | Mapping[str, Any] | None) -> Constraints:
        """Build Constraints from ``None``, an instance, or a plain mapping.

        Mappings may use the short option names (``https``, ``verb``,
        ``domain``, ``pattern``) or the field names.
        """
        if value is None:
            return cls()
        if isinstance(value, Constraints):
            return value
        return cls(
            https=bool(value.get("https", False)),
            verbs=value.get("verbs", value.get("verb")),
            hosts=value.get("hosts", value.get("domain")),
            patterns=value.get("patterns", value.get("pattern")) or {},
        )

    def describe(self) -> str:
        """Short human-readable summary, used by ``drips routes``."""
        parts: list[str] = []
        if self.https:
            parts.append("https")
        if self.verbs:
            parts.append(",".join(sorted(self.verbs)))
        if self.hosts:
            parts.append("host=" + ",".join(sorted(self.hosts)))
        parts.extend(f"{{{name}}}={pattern}" for name, pattern in self.patterns.items())
        return " ".join(parts) or "-"


@dataclass(frozen=True, slots=True)
class RouteDefinition:
    """A registered route. Created by ``RouteTable.register()``."""

    name: str
    template: str
    handler: Handler
    compiled: CompiledTemplate
    constraints: Constraints = field(default_factory=Constraints)

    @property
    def kind(self) -> TemplateKind:
        return self.compiled.kind

    @property
    def tokens(self) -> tuple[str, ...]:
        return self.compiled.tokens


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """The selected route and the positional parameters it was matched with."""

    route: RouteDefinition
    params: tuple[str, ...] = ()
