"""Route pattern parsing.

Turns a route pattern into one token sequence per optional-segment
combination::

    "/user"                 -> [("/user",)]
    "/user/{id:\\d+}"        -> [("/user/", Placeholder("id", "\\d+"))]
    "/user[/{id}]"          -> [("/user",), ("/user/", Placeholder("id"))]

Placeholder patterns may contain balanced braces (``{id:\\d{2,4}}``), so
placeholders are found with a small recursive-descent scanner instead of
a flat regular expression.
"""

from perch.errors import MalformedPattern
from perch.routing.route import DEFAULT_PLACEHOLDER_PATTERN, Placeholder, RouteVariant, Token

_NAME_START = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_")
_NAME_CHARS = _NAME_START | frozenset("0123456789-")


def parse(pattern: str) -> list[RouteVariant]:
    """Parse a route pattern into its variants, shortest first.

    Raises ``MalformedPattern`` for unbalanced or misplaced optional-segment
    brackets and for empty optional parts.
    """
    without_closing = pattern.rstrip("]")
    num_optionals = len(pattern) - len(without_closing)

    segments, has_stray_close = _split_optionals(without_closing)
    if num_optionals != len(segments) - 1:
        if has_stray_close:
            raise MalformedPattern(pattern, "Optional segments can only occur at the end of a route")
        raise MalformedPattern(pattern, "Number of opening '[' and closing ']' does not match")

    variants: list[RouteVariant] = []
    current = ""
    for n, segment in enumerate(segments):
        if segment == "" and n != 0:
            raise MalformedPattern(pattern, "Empty optional part")
        current += segment
        variants.append(tokenize(current))
    return variants


def tokenize(route: str) -> RouteVariant:
    """Split a route without optional segments into literal and placeholder tokens."""
    tokens: list[Token] = []
    literal_start = 0
    i = 0
    while i < len(route):
        if route[i] == "{":
            found = scan_placeholder(route, i)
            if found is not None:
                placeholder, end = found
                if i > literal_start:
                    tokens.append(route[literal_start:i])
                tokens.append(placeholder)
                i = literal_start = end
                continue
        i += 1

    if literal_start < len(route) or not tokens:
        tokens.append(route[literal_start:])
    return tuple(tokens)


def scan_placeholder(text: str, start: int) -> tuple[Placeholder, int] | None:
    """Scan a ``{name}`` or ``{name:pattern}`` placeholder at *start*.

    Returns the placeholder and the index just past its closing brace, or
    ``None`` when the text at *start* is not a well-formed placeholder (it
    is then treated as literal text).
    """
    i = _skip_space(text, start + 1)
    name_start = i
    if i >= len(text) or text[i] not in _NAME_START:
        return None
    i += 1
    while i < len(text) and text[i] in _NAME_CHARS:
        i += 1
    name = text[name_start:i]
    i = _skip_space(text, i)

    pattern = DEFAULT_PLACEHOLDER_PATTERN
    if i < len(text) and text[i] == ":":
        body_end = _scan_balanced(text, i + 1)
        if body_end is None:
            return None
        pattern = text[i + 1 : body_end].strip() or DEFAULT_PLACEHOLDER_PATTERN
        i = body_end

    if i >= len(text) or text[i] != "}":
        return None
    return Placeholder(name=name, pattern=pattern), i + 1


def _scan_balanced(text: str, start: int) -> int | None:
    """Return the index of the ``}`` that closes the placeholder opened before *start*."""
    depth = 0
    for i in range(start, len(text)):
        char = text[i]
        if char == "{":
            depth += 1
        elif char == "}":
            if depth == 0:
                return i
            depth -= 1
    return None


def _skip_space(text: str, i: int) -> int:
    while i < len(text) and text[i].isspace():
        i += 1
    return i


def _split_optionals(route: str) -> tuple[list[str], bool]:
    """Split *route* on ``[`` outside placeholders.

    Also reports whether a ``]`` occurs outside placeholders, which means an
    optional segment was closed before the end of the route.
    """
    segments: list[str] = []
    has_stray_close = False
    segment_start = 0
    i = 0
    while i < len(route):
        char = route[i]
        if char == "{":
            found = scan_placeholder(route, i)
            if found is not None:
                i = found[1]
                continue
        elif char == "[":
            segments.append(route[segment_start:i])
            segment_start = i + 1
        elif char == "]":
            has_stray_close = True
        i += 1
    segments.append(route[segment_start:])
    return segments, has_stray_close
