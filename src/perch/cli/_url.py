"""``perch url`` — build a URL from a route name and parameters."""

import argparse
import sys

from perch.cli._resolve import resolve_or_exit


def parse_params(pairs: list[str]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` arguments; a later key overrides an earlier one."""
    params: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            msg = f"Expected KEY=VALUE, got {pair!r}"
            raise ValueError(msg)
        params[key] = value
    return params


def run_url(args: argparse.Namespace) -> None:
    """Print the URL for ``args.name``."""
    try:
        params = parse_params(args.params)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc

    router = resolve_or_exit(args)
    print(router.build(args.name, params))
