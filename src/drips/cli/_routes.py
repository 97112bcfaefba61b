"""``drips routes`` — list declared routes.

Resolves an import string to a drips App and prints every declared
route in declaration order, which is also match priority.
"""

import argparse

from drips.cli._resolve import load_app
from drips.http.request import RequestSnapshot


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of NAME, TEMPLATE, KIND, CONSTRAINTS and HANDLER."""
    app = load_app(args.app)
    routes = app.table(RequestSnapshot()).routes
    if not routes:
        print("No routes registered.")
        return

    rows: list[tuple[str, ...]] = [("NAME", "TEMPLATE", "KIND", "CONSTRAINTS", "HANDLER")]
    for route in routes:
        handler_name = getattr(route.handler, "__qualname__", None) or repr(route.handler)
        rows.append(
            (route.name, route.template, route.kind.value, route.constraints.describe(), handler_name)
        )

    widths = [max(len(row[i]) for row in rows) for i in range(len(rows[0]) - 1)]
    fmt = "  ".join(f"{{:<{w}}}" for w in widths) + "  {}"
    print(fmt.format(*rows[0]))
    print("-" * min(sum(widths) + 2 * len(widths) + len(rows[0][-1]), 80))
    for row in rows[1:]:
        print(fmt.format(*row))
