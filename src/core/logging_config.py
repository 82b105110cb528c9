"""Logging bootstrap.

Library modules only call `logging.getLogger(__name__)`; handlers are
installed here, once, by the entry point.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_CONFIGURED = False


def configure_logging(level: str | int = "WARNING", *, console: Console | None = None) -> None:
    """Install a `RichHandler` on the root logger (stderr by default)."""

    global _CONFIGURED

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    root = logging.getLogger()
    if _CONFIGURED:
        for existing in list(root.handlers):
            if isinstance(existing, RichHandler):
                root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)
    # httpx logs every request at INFO; keep it behind our own DEBUG output.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    _CONFIGURED = True
