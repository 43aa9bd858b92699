"""Tests for perch.__init__ — lazy import registry covers all public names."""

import pytest

import perch


@pytest.mark.parametrize("name", perch.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(perch, name)
    assert obj is not None, f"perch.{name} resolved to None"


def test_all_names_in_lazy_registry() -> None:
    """Every name in __all__ has a corresponding entry in _LAZY_IMPORTS."""
    missing = set(perch.__all__) - set(perch._LAZY_IMPORTS)
    assert not missing, (
        f"Names in __all__ but not in _LAZY_IMPORTS: {sorted(missing)}. "
        f"Add them to _LAZY_IMPORTS in perch/__init__.py."
    )


def test_lazy_registry_no_extras() -> None:
    """Every name in _LAZY_IMPORTS should be in __all__ (public API contract)."""
    extras = set(perch._LAZY_IMPORTS) - set(perch.__all__)
    assert not extras, (
        f"Names in _LAZY_IMPORTS but not in __all__: {sorted(extras)}. "
        f"Either add them to __all__ or remove from _LAZY_IMPORTS."
    )


def test_unknown_name_raises_attribute_error() -> None:
    """Accessing an unregistered name raises AttributeError."""
    with pytest.raises(AttributeError, match="no attribute"):
        perch.__getattr__("ThisDoesNotExist")


@pytest.mark.parametrize(
    ("name", "module_name"),
    [
        ("Router", "perch.routing.router"),
        ("RouteGroup", "perch.routing.router"),
        ("RouterConfig", "perch.config"),
        ("ShadowedStaticRoute", "perch.errors"),
        ("parse", "perch.routing.parser"),
        ("base_url_from_environ", "perch.routing.base_url"),
    ],
)
def test_names_resolve_to_defining_module(name: str, module_name: str) -> None:
    """Top-level names are the same objects as in their defining modules."""
    import importlib

    assert getattr(perch, name) is getattr(importlib.import_module(module_name), name)


def test_router_usable_from_top_level() -> None:
    router = perch.Router(perch.RouterConfig(approx_chunk_size=2))
    router.add_route("/users/{id:\\d+}", "user", name="user")

    assert router.build("user", {"id": 9}) == "/users/9"
    assert tuple(router.dispatch("/users/9")) == ("user", {"id": "9"})
