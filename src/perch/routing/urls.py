"""URL building helpers for reverse routing."""

import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote_plus, urlencode

from perch.routing.route import Placeholder, Route


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return int(value)
    return value


def encode_query(query: Mapping[str, Any]) -> str:
    """Encode *query* as a query string.

    ``None`` values are dropped, booleans become ``1``/``0``, and sequences
    repeat the key::

        >>> encode_query({"page": 2, "tag": ["a", "b"], "q": None})
        'page=2&tag=a&tag=b'
    """
    items = [(key, _query_value(value)) for key, value in query.items() if value is not None]
    return urlencode(items, doseq=True)


def with_query(url: str, query: Mapping[str, Any]) -> str:
    """Append *query* to *url*, or return *url* unchanged when nothing encodes."""
    encoded = encode_query(query)
    if not encoded:
        return url
    return f"{url}?{encoded}"


def params_consistent(route_params: Mapping[str, Any], query: Mapping[str, Any]) -> bool:
    """Check that every static route param also given in *query* has the same value.

    Values compare equal directly or by their string form, so ``{"page": 1}``
    is consistent with ``{"page": "1"}``.
    """
    for key, value in route_params.items():
        if key not in query:
            continue
        given = query[key]
        if given != value and str(given) != str(value):
            return False
    return True


def substitute(route: Route, params: Mapping[str, Any]) -> tuple[str, dict[str, Any]] | None:
    """Fill *route*'s placeholders from *params*.

    Returns the path and the parameters left over, or ``None`` if a
    placeholder is missing or its value does not match the placeholder
    pattern.
    """
    remaining = dict(params)
    parts: list[str] = []
    for token in route.tokens:
        if not isinstance(token, Placeholder):
            parts.append(token)
            continue

        value = remaining.pop(token.name, None)
        if value is None:
            return None
        text = str(_query_value(value))
        if re.fullmatch(token.pattern, text) is None:
            return None
        parts.append(quote_plus(text))
    return "".join(parts), remaining
