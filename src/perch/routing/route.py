"""Placeholder, Route, and RouteMatch frozen dataclasses."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeAlias

DEFAULT_PLACEHOLDER_PATTERN = r"[^/]+"


@dataclass(frozen=True, slots=True)
class Placeholder:
    """A named variable in a route pattern.

    Default:  ``{id}``        (pattern="[^/]+")
    Custom:   ``{id:\\d+}``    (pattern="\\d+")
    """

    name: str
    pattern: str = DEFAULT_PLACEHOLDER_PATTERN


# A token is either literal text or a placeholder.
Token: TypeAlias = str | Placeholder

# One concrete expansion of a pattern's optional segments.
RouteVariant: TypeAlias = tuple[Token, ...]


@dataclass(frozen=True, slots=True)
class Route:
    """A registered route. Immutable once stored.

    ``regex`` and ``variables`` are only set for dynamic routes.
    """

    tokens: RouteVariant
    handler: Any
    name: str | None = None
    params: Mapping[str, Any] = field(default_factory=dict)
    regex: str | None = None
    variables: tuple[str, ...] = ()

    @property
    def is_static(self) -> bool:
        return self.regex is None

    @property
    def template(self) -> str:
        """The route as written, with placeholders in ``{name:pattern}`` form."""
        parts: list[str] = []
        for token in self.tokens:
            if isinstance(token, Placeholder):
                if token.pattern == DEFAULT_PLACEHOLDER_PATTERN:
                    parts.append(f"{{{token.name}}}")
                else:
                    parts.append(f"{{{token.name}:{token.pattern}}}")
            else:
                parts.append(token)
        return "".join(parts)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful dispatch.

    Unpacks as ``handler, params = match``.
    """

    route: Route
    params: dict[str, Any]

    @property
    def handler(self) -> Any:
        return self.route.handler

    def __iter__(self) -> Iterator[Any]:
        yield self.handler
        yield self.params
