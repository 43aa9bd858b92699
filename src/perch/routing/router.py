"""Compiled router with static lookup and chunked regex matching.

Routes are registered during setup. Static paths go into a dict; dynamic
routes are merged into a few compiled alternations (chunks) that are
built lazily and cached until the next registration.
"""

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from perch.config import RouterConfig
from perch.errors import RouterFrozen, ShadowedStaticRoute
from perch.routing.parser import parse
from perch.routing.regex import Chunk, build_route_regex, compile_chunks
from perch.routing.route import Placeholder, Route, RouteMatch, RouteVariant
from perch.routing.urls import params_consistent, substitute, with_query

logger = logging.getLogger("perch.routing")


def _is_static(variant: RouteVariant) -> bool:
    return len(variant) == 1 and not isinstance(variant[0], Placeholder)


@dataclass(frozen=True, slots=True)
class RouteGroup:
    """Registration context for routes sharing a prefix and parameters.

    Passed to the ``Router.add_group()`` callback. Nested groups get a new
    context; the enclosing one is never modified.
    """

    router: "Router"
    prefix: str = ""
    params: Mapping[str, Any] = field(default_factory=dict)

    def add_route(
        self,
        pattern: str,
        handler: Any,
        name: str | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> "RouteGroup":
        """Register *pattern* under this group's prefix.

        Group params take precedence over the route's own params.
        """
        merged = {**(params or {}), **self.params}
        self.router._register(self.prefix + pattern, handler, name, merged)
        return self

    def add_group(
        self,
        prefix: str,
        callback: Callable[["RouteGroup"], Any],
        params: Mapping[str, Any] | None = None,
    ) -> "RouteGroup":
        """Run *callback* with a nested group; inner params override outer ones."""
        nested = RouteGroup(
            router=self.router,
            prefix=self.prefix + prefix,
            params={**self.params, **(params or {})},
        )
        callback(nested)
        return self


class Router:
    """Router with O(1) static lookup and chunked regex matching.

    Usage::

        router = Router()
        router.add_route("/", "home", name="home")
        router.add_route("/users/{id:\\d+}[/{tab}]", "user", name="user")
        router.dispatch("/users/42/posts")   # handler "user", {"id": "42", "tab": "posts"}
        router.build("user", {"id": 42})     # "/users/42"

    Handlers are opaque: the router stores and returns them, never calls them.
    Registration is not thread-safe; ``dispatch`` and ``build`` are safe to
    call concurrently once registration is done.
    """

    __slots__ = ("_base_url", "_chunks", "_compiled", "_config", "_dynamic", "_static")

    def __init__(self, config: RouterConfig | None = None, *, base_url: str | None = None) -> None:
        self._config = config or RouterConfig()
        self._base_url = self._config.base_url if base_url is None else base_url
        self._static: dict[str, Route] = {}
        # single-route regex -> Route, in registration order
        self._dynamic: dict[str, Route] = {}
        self._chunks: tuple[Chunk, ...] | None = None
        self._compiled = False

    @property
    def config(self) -> RouterConfig:
        return self._config

    @property
    def base_url(self) -> str:
        """Prefix for every URL returned by ``build()``."""
        return self._base_url

    def set_base_url(self, base_url: str) -> "Router":
        self._base_url = base_url
        return self

    # -- Registration --

    def add_route(
        self,
        pattern: str,
        handler: Any,
        name: str | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> "Router":
        """Register *pattern* and every variant of its optional segments.

        Raises a ``RouteDefinitionError`` subclass if the pattern is invalid
        or shadowed, and ``RouterFrozen`` after ``compile()``.
        """
        self._register(pattern, handler, name, params or {})
        return self

    def add_group(
        self,
        prefix: str,
        callback: Callable[[RouteGroup], Any],
        params: Mapping[str, Any] | None = None,
    ) -> "Router":
        """Register routes sharing *prefix* and *params*.

        Usage::

            def admin(group: RouteGroup) -> None:
                group.add_route("/users", "admin.users", name="admin.users")

            router.add_group("/admin", admin, {"area": "admin"})
        """
        RouteGroup(router=self).add_group(prefix, callback, params)
        return self

    def _register(
        self,
        pattern: str,
        handler: Any,
        name: str | None,
        params: Mapping[str, Any],
    ) -> None:
        if self._compiled:
            raise RouterFrozen(pattern)

        frozen_params = MappingProxyType(dict(sorted(params.items())))
        routes = [
            self._prepare(pattern, variant, handler, name, frozen_params)
            for variant in parse(pattern)
        ]

        # Every variant is validated before any is stored.
        for route in routes:
            if route.regex is None:
                self._add_static(route)
            else:
                self._add_dynamic(route)

    def _prepare(
        self,
        pattern: str,
        variant: RouteVariant,
        handler: Any,
        name: str | None,
        params: Mapping[str, Any],
    ) -> Route:
        if _is_static(variant):
            path = str(variant[0])
            dynamic = () if path in self._static else self._dynamic.values()
            for route in dynamic:
                if re.fullmatch(str(route.regex), path):
                    raise ShadowedStaticRoute(path, str(route.regex))
            return Route(tokens=variant, handler=handler, name=name, params=params)

        regex, variables = build_route_regex(pattern, variant)
        return Route(
            tokens=variant,
            handler=handler,
            name=name,
            params=params,
            regex=regex,
            variables=variables,
        )

    def _add_static(self, route: Route) -> None:
        path = route.template
        if path in self._static:
            logger.debug("Ignoring duplicate static route %r", path)
            return
        self._static[path] = route

    def _add_dynamic(self, route: Route) -> None:
        regex = str(route.regex)
        if regex in self._dynamic:
            logger.debug("Ignoring duplicate dynamic route %r", regex)
            return
        self._dynamic[regex] = route
        self._chunks = None

    # -- Introspection --

    @property
    def routes(self) -> list[Route]:
        """All registered routes: static first, then dynamic, each in registration order."""
        return [*self._static.values(), *self._dynamic.values()]

    @property
    def chunks(self) -> tuple[Chunk, ...]:
        """The compiled dynamic-route chunks, built on first access."""
        chunks = self._chunks
        if chunks is None:
            # Build fully, then publish with a single assignment.
            chunks = compile_chunks(list(self._dynamic.values()), self._config.approx_chunk_size)
            self._chunks = chunks
        return chunks

    def compile(self) -> None:
        """Build the chunks now and freeze the router. No more routes can be added."""
        _ = self.chunks
        self._compiled = True

    # -- Serving --

    def dispatch(self, path: str) -> RouteMatch | None:
        """Match *path* against the registered routes.

        Static routes win on an exact match. Otherwise the first dynamic
        route in registration order that matches the whole path wins.
        Returns ``None`` if nothing matches.
        """
        route = self._static.get(path)
        if route is not None:
            return RouteMatch(route=route, params=dict(route.params))

        for chunk in self.chunks:
            match = chunk.match(path)
            if match is not None:
                return match
        return None

    def build(self, name: str, query: Mapping[str, Any] | None = None) -> str:
        """Build the URL for the route called *name*.

        Parameters filling placeholders are URL-encoded into the path; the
        rest become the query string. Routes whose static params conflict
        with *query*, or whose placeholders cannot be filled, are skipped.
        If no route qualifies, *name* itself is used as the path.
        """
        query = dict(query or {})

        for route in self._static.values():
            if route.name != name or not params_consistent(route.params, query):
                continue
            leftover = {k: v for k, v in query.items() if k not in route.params}
            return with_query(self._base_url + route.template, leftover)

        for route in self._dynamic.values():
            if route.name != name or not params_consistent(route.params, query):
                continue
            built = substitute(route, {k: v for k, v in query.items() if k not in route.params})
            if built is None:
                continue
            path, leftover = built
            return with_query(self._base_url + path, leftover)

        return with_query(self._base_url + name, query)
