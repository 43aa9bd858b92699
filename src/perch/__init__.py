"""Perch — compiled URL routing with reverse routing.

Matches request paths against declarative route patterns and builds URLs
back from route names.

Basic usage::

    from perch import Router

    router = Router()
    router.add_route("/users/{id:\\d+}[/{tab}]", "user_view", name="user")

    handler, params = router.dispatch("/users/42/posts")
    url = router.build("user", {"id": 42, "page": 2})  # "/users/42?page=2"
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "DuplicatePlaceholder",
    "InvalidPlaceholderPattern",
    "MalformedPattern",
    "PerchError",
    "Placeholder",
    "Route",
    "RouteDefinitionError",
    "RouteGroup",
    "RouteMatch",
    "Router",
    "RouterConfig",
    "RouterFrozen",
    "ShadowedStaticRoute",
    "base_url_from_environ",
    "parse",
]

# public name -> module that defines it
_LAZY_IMPORTS: dict[str, str] = {
    "ConfigurationError": "perch.errors",
    "DuplicatePlaceholder": "perch.errors",
    "InvalidPlaceholderPattern": "perch.errors",
    "MalformedPattern": "perch.errors",
    "PerchError": "perch.errors",
    "Placeholder": "perch.routing.route",
    "Route": "perch.routing.route",
    "RouteDefinitionError": "perch.errors",
    "RouteGroup": "perch.routing.router",
    "RouteMatch": "perch.routing.route",
    "Router": "perch.routing.router",
    "RouterConfig": "perch.config",
    "RouterFrozen": "perch.errors",
    "ShadowedStaticRoute": "perch.errors",
    "base_url_from_environ": "perch.routing.base_url",
    "parse": "perch.routing.parser",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
