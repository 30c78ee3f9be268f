"""Output abstraction layer."""

from .console import (
    ConsoleProtocol,
    MockConsole,
    RichConsole,
    Style,
)
from .errors import print_release_error, release_error_exit_code
from .logging import setup_logging

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "RichConsole",
    "Style",
    "print_release_error",
    "release_error_exit_code",
    "setup_logging",
]
