"""Locate the ``App`` a CLI command works on from ``"module[:attr]"``."""

import importlib
import logging
import sys

from drips.app import App


def resolve_app(target: str) -> App:
    """Import *target* and return its ``App``.

    ``"pkg.web"`` means ``pkg.web:app``. A zero-argument factory in place
    of an instance is called once.
    """
    module_name, _, attr = target.partition(":")
    obj = getattr(importlib.import_module(module_name), attr or "app")

    if not isinstance(obj, App) and callable(obj):
        try:
            obj = obj()
        except Exception as exc:
            raise TypeError(f"App factory {target!r} failed: {exc}") from exc

    if isinstance(obj, App):
        return obj
    raise TypeError(f"{target!r} is a {type(obj).__name__}, not a drips.App instance")


def load_app(target: str) -> App:
    """``resolve_app`` for CLI commands: print the error and exit 1 on failure.

    Also applies the app's configured log level when the root logger
    has not been configured yet.
    """
    try:
        app = resolve_app(target)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not logging.getLogger().handlers:
        logging.basicConfig(level=app.config.log_level.upper())
    return app
