"""``perch routes`` — list registered routes.

Resolves an import string to a perch Router and prints all registered
routes with kind, pattern, name, and handler.
"""

import argparse

from perch.cli._resolve import describe_handler, resolve_or_exit


def run_routes(args: argparse.Namespace) -> None:
    """List registered routes: static first, then dynamic, in registration order."""
    router = resolve_or_exit(args)

    routes = router.routes
    if not routes:
        print("No routes registered.")
        return

    # Build rows: (kind, template, name, handler)
    rows: list[tuple[str, str, str, str]] = [
        (
            "static" if route.is_static else "dynamic",
            route.template,
            route.name or "-",
            describe_handler(route.handler),
        )
        for route in routes
    ]

    headers = ("KIND", "PATTERN", "NAME", "HANDLER")
    widths = [max(len(headers[col]), *(len(row[col]) for row in rows)) for col in range(3)]

    fmt = f"{{:<{widths[0]}}}  {{:<{widths[1]}}}  {{:<{widths[2]}}}  {{}}"
    print(fmt.format(*headers))
    sep_len = sum(widths) + 6 + max(len(row[3]) for row in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))
