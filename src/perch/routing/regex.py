"""Regex compilation for dynamic routes.

Each dynamic route becomes one regex with a capturing group per
placeholder. Routes are then merged into chunks: one compiled alternation
per batch of routes, so dispatch tries a handful of patterns instead of
one per route.

Python's ``re`` has no branch-reset groups, so group numbers keep counting
across alternatives. Every alternative ends with an empty marker group;
``match.lastindex`` is the marker of the alternative that matched, which
maps back to the route and the offset of its first variable::

    (?>/user/([^/]+)()\\Z)|(?>/post/([^/]+)/([^/]+)()\\Z)
                     ^2                            ^5
"""

import logging
import math
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from perch.errors import DuplicatePlaceholder, InvalidPlaceholderPattern
from perch.routing.route import Placeholder, Route, RouteMatch, RouteVariant

logger = logging.getLogger("perch.routing")

# Group prefixes after "(?" that still capture: (?P<name>...), (?<name>...), (?'name'...)
_NAMED_GROUP_PREFIXES = ("P<", "'")


def has_capturing_group(fragment: str) -> bool:
    """Return True if *fragment* contains a capturing group.

    Escaped characters, character classes, non-capturing groups,
    lookarounds, atomic groups, inline flags, comments, back-references
    and conditionals are skipped. Plain ``(`` and named groups capture.
    """
    if "(" not in fragment:
        return False

    i = 0
    in_class = False
    length = len(fragment)
    while i < length:
        char = fragment[i]
        if char == "\\":
            i += 2
            continue
        if in_class:
            if char == "]":
                in_class = False
            i += 1
            continue
        if char == "[":
            in_class = True
            i += 1
            # A leading "]" (after an optional "^") is a literal member.
            if i < length and fragment[i] == "^":
                i += 1
            if i < length and fragment[i] == "]":
                i += 1
            continue
        if char == "(":
            if fragment.startswith("(?(", i):
                i += 3
                continue
            if fragment.startswith("(?#", i):
                end = fragment.find(")", i)
                i = length if end == -1 else end + 1
                continue
            if _opens_capturing_group(fragment, i):
                return True
        i += 1
    return False


def _opens_capturing_group(fragment: str, i: int) -> bool:
    rest = fragment[i + 1 :]
    if rest.startswith("*"):
        # PCRE verbs such as (*SKIP)
        return False
    if not rest.startswith("?"):
        return True
    after = rest[1:]
    if after.startswith(_NAMED_GROUP_PREFIXES):
        return True
    return after.startswith("<") and not after.startswith(("<=", "<!"))


def build_route_regex(pattern: str, tokens: RouteVariant) -> tuple[str, tuple[str, ...]]:
    """Build the single-route regex and its ordered variable names.

    *pattern* is only used in error messages.

    Raises ``DuplicatePlaceholder`` if a name repeats and
    ``InvalidPlaceholderPattern`` if a custom pattern has a capturing group
    or does not compile.
    """
    parts: list[str] = []
    variables: list[str] = []
    for token in tokens:
        if not isinstance(token, Placeholder):
            parts.append(re.escape(token))
            continue

        if token.name in variables:
            raise DuplicatePlaceholder(pattern, token.name)
        if has_capturing_group(token.pattern):
            raise InvalidPlaceholderPattern(pattern, token.name, token.pattern)
        group = f"({token.pattern})"
        try:
            # Compiled as a group: inline global flags such as (?i) are only
            # valid at the very start of a whole expression.
            re.compile(group)
            re.compile("".join([*parts, group]))
        except re.error as exc:
            raise InvalidPlaceholderPattern(
                pattern, token.name, token.pattern, f"is not a valid regex: {exc}"
            ) from exc

        variables.append(token.name)
        parts.append(group)
    return "".join(parts), tuple(variables)


def chunk_size(count: int, approx_chunk_size: int) -> int:
    """Spread *count* routes evenly over ``round(count / approx_chunk_size)`` chunks."""
    num_parts = max(1, math.floor(count / approx_chunk_size + 0.5))
    return math.ceil(count / num_parts)


@dataclass(frozen=True, slots=True)
class Chunk:
    """A batch of dynamic routes compiled into one alternation."""

    regex: re.Pattern[str]
    # marker group index -> (route, index of the route's first variable group)
    routes: dict[int, tuple[Route, int]]

    def match(self, path: str) -> RouteMatch | None:
        found = self.regex.fullmatch(path)
        if found is None or found.lastindex is None:
            return None

        route, first = self.routes[found.lastindex]
        values = found.groups()[first - 1 : first - 1 + len(route.variables)]
        params: dict[str, Any] = {**route.params, **dict(zip(route.variables, values, strict=True))}
        return RouteMatch(route=route, params=params)


def compile_chunk(routes: Sequence[Route]) -> Chunk:
    """Merge dynamic routes into one compiled pattern, preserving their order.

    Each alternative is atomic and carries its own end anchor, so once a
    route has matched the whole path no other alternative is tried.
    """
    alternatives: list[str] = []
    route_map: dict[int, tuple[Route, int]] = {}
    num_groups = 0
    for route in routes:
        first = num_groups + 1
        num_groups += len(route.variables) + 1
        alternatives.append(f"(?>{route.regex}()\\Z)")
        route_map[num_groups] = (route, first)

    regex = re.compile("(?:" + "|".join(alternatives) + ")")
    return Chunk(regex=regex, routes=route_map)


def compile_chunks(routes: Sequence[Route], approx_chunk_size: int) -> tuple[Chunk, ...]:
    """Partition dynamic routes into consecutive chunks and compile each."""
    if not routes:
        return ()

    size = chunk_size(len(routes), approx_chunk_size)
    chunks = tuple(compile_chunk(routes[i : i + size]) for i in range(0, len(routes), size))
    logger.debug("Compiled %d dynamic routes into %d chunks", len(routes), len(chunks))
    return chunks
