"""Perch exception hierarchy.

Shared across the parser, the regex compiler, and the router so every
module raises and catches the same types.
"""


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when router configuration is invalid.

    Typically raised while routes are being registered, never while
    dispatching.
    """


class RouterFrozen(ConfigurationError):  # noqa: N818 — conventional name
    """A route was registered after ``Router.compile()``."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        super().__init__(f"Cannot add route {pattern!r}: router is compiled.")


class RouteDefinitionError(ConfigurationError):
    """A route pattern cannot be registered.

    Carries the offending *pattern* so callers can report it.
    """

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"{reason} in route {pattern!r}")


class MalformedPattern(RouteDefinitionError):  # noqa: N818 — conventional name
    """Unbalanced or misplaced optional-segment brackets, or an empty optional part."""


class DuplicatePlaceholder(RouteDefinitionError):  # noqa: N818 — conventional name
    """The same placeholder name appears twice in one route."""

    def __init__(self, pattern: str, placeholder: str) -> None:
        self.placeholder = placeholder
        super().__init__(pattern, f"Cannot use the same placeholder {placeholder!r} twice")


class InvalidPlaceholderPattern(RouteDefinitionError):  # noqa: N818 — conventional name
    """A placeholder's custom regex is invalid or contains a capturing group.

    Capturing groups are reserved for variable extraction. Use ``(?:...)``
    for grouping inside a placeholder pattern.
    """

    def __init__(
        self,
        pattern: str,
        placeholder: str,
        fragment: str,
        problem: str = "contains a capturing group",
    ) -> None:
        self.placeholder = placeholder
        self.fragment = fragment
        super().__init__(pattern, f"Regex {fragment!r} for placeholder {placeholder!r} {problem}")


class ShadowedStaticRoute(RouteDefinitionError):  # noqa: N818 — conventional name
    """A static path is already matched by a previously defined dynamic route."""

    def __init__(self, path: str, regex: str) -> None:
        self.path = path
        self.regex = regex
        super().__init__(
            path,
            f"Static route is shadowed by previously defined variable route {regex!r}",
        )
