"""Router import resolution — resolves ``"module:attribute"`` strings to Router instances.

Shared by every ``perch`` subcommand to locate a Router from a
user-supplied import string.
"""

import argparse
import importlib
import sys

from perch.routing.router import Router


def resolve_router(import_string: str) -> Router:
    """Resolve an import string to a perch Router instance.

    Accepts ``"module:attribute"`` format.  When the attribute portion
    is omitted, defaults to ``"router"`` (e.g. ``"myapp"`` resolves to
    ``myapp.router``).

    Supports factory functions: if the resolved object is callable and
    not a Router instance, it is called with no arguments.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a ``Router`` or a factory for one.

    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "router"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, Router):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, Router):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a perch.Router instance"
        raise TypeError(msg)

    return obj


def resolve_or_exit(args: argparse.Namespace) -> Router:
    """Resolve ``args.router``, printing the error and exiting 1 on failure."""
    try:
        return resolve_router(args.router)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def describe_handler(handler: object) -> str:
    """Printable name for an opaque handler."""
    return getattr(handler, "__qualname__", None) or str(handler)
