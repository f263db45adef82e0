"""Output abstraction layer."""

from .actions import write_outputs
from .console import (
    ActionsConsole,
    ConsoleProtocol,
    MockConsole,
    RichConsole,
    Style,
)

__all__ = [
    "ActionsConsole",
    "ConsoleProtocol",
    "MockConsole",
    "RichConsole",
    "Style",
    "write_outputs",
]
