"""``drips match`` — show which route a request would select."""

import argparse
import sys

from drips.cli._resolve import load_app
from drips.http.request import RequestSnapshot


def run_match(args: argparse.Namespace) -> None:
    """Build a table for the given request and print the selected route.

    Exits with status 1 when no route matches.
    """
    app = load_app(args.app)
    request = RequestSnapshot.from_uri(
        args.path,
        method=args.method.upper(),
        scheme="https" if args.https else "http",
        host=args.host,
    )
    match = app.table(request).match
    if match is None:
        print(f"No route matches {request.method} {request.path!r}", file=sys.stderr)
        raise SystemExit(1)

    print(f"route:    {match.route.name}")
    print(f"template: {match.route.template}")
    print(f"params:   {list(match.params)}")
