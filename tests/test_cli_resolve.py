"""Tests for perch.cli._resolve — Router import resolution."""

import sys
import types

import pytest

from perch.cli._resolve import describe_handler, resolve_router
from perch.routing.router import Router


def _make_router() -> Router:
    return Router().add_route("/", "home")


def _broken_factory() -> Router:
    msg = "no config"
    raise RuntimeError(msg)


@pytest.fixture
def _fake_router_module(monkeypatch: pytest.MonkeyPatch) -> None:
    """Register a fake module with perch Routers on sys.modules."""
    mod = types.ModuleType("_fake_perch_app")
    mod.router = Router()  # type: ignore[attr-defined]
    mod.custom = Router()  # type: ignore[attr-defined]
    mod.factory = _make_router  # type: ignore[attr-defined]
    mod.broken = _broken_factory  # type: ignore[attr-defined]
    mod.not_a_router = "just a string"  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_fake_perch_app", mod)


@pytest.mark.usefixtures("_fake_router_module")
class TestResolveRouter:
    def test_explicit_attribute(self) -> None:
        assert isinstance(resolve_router("_fake_perch_app:router"), Router)

    def test_custom_attribute(self) -> None:
        assert isinstance(resolve_router("_fake_perch_app:custom"), Router)

    def test_default_attribute(self) -> None:
        """Omitting :attr defaults to 'router'."""
        assert isinstance(resolve_router("_fake_perch_app"), Router)

    def test_factory(self) -> None:
        router = resolve_router("_fake_perch_app:factory")
        assert router.dispatch("/").handler == "home"

    def test_factory_error(self) -> None:
        with pytest.raises(TypeError, match="raised an error: no config"):
            resolve_router("_fake_perch_app:broken")

    def test_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            resolve_router("nonexistent_module_xyz:router")

    def test_missing_attribute(self) -> None:
        with pytest.raises(AttributeError):
            resolve_router("_fake_perch_app:does_not_exist")

    def test_wrong_type(self) -> None:
        with pytest.raises(TypeError, match=r"not a perch\.Router instance"):
            resolve_router("_fake_perch_app:not_a_router")


class TestDescribeHandler:
    def test_function(self) -> None:
        assert describe_handler(_make_router) == "_make_router"

    def test_string(self) -> None:
        assert describe_handler("users.index") == "users.index"

    def test_int(self) -> None:
        assert describe_handler(7) == "7"
