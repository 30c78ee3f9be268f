"""Diagnostic logging for ``--debug``.

User-facing output goes through the console protocol; logging carries only
diagnostics (tag candidates, git commands, API retries, stage transitions).
"""

from __future__ import annotations

import logging

_FORMAT = "%(name)s: %(message)s"


def setup_logging(*, debug: bool) -> None:
    from rich.logging import RichHandler

    level = logging.DEBUG if debug else logging.WARNING
    handler = RichHandler(show_path=False, markup=False, rich_tracebacks=debug)
    logging.basicConfig(
        level=level,
        format=_FORMAT,
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    if debug:
        logging.getLogger("tagge").debug("debug logging enabled")
