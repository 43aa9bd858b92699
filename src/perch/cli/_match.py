"""``perch match`` — dispatch a path against a router."""

import argparse

from perch.cli._resolve import describe_handler, resolve_or_exit


def run_match(args: argparse.Namespace) -> None:
    """Print the handler and params for ``args.path``, or exit 1 if nothing matches."""
    router = resolve_or_exit(args)

    match = router.dispatch(args.path)
    if match is None:
        print(f"No route matches {args.path!r}")
        raise SystemExit(1)

    print(f"handler: {describe_handler(match.handler)}")
    if match.route.name:
        print(f"name:    {match.route.name}")
    print(f"route:   {match.route.template}")
    for key, value in match.params.items():
        print(f"  {key} = {value!r}")
