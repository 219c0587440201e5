"""Leveled, coloured console logging shared by the game subsystems."""

from __future__ import annotations

import sys
import threading
from enum import Enum, IntEnum
from typing import Optional, TextIO


class LogLevel(IntEnum):
    """Severity of a log message; messages below a log's level are dropped."""

    INFO = 0
    WARN = 1
    ERROR = 2
    FATAL = 3
    DEBUG = 4

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    LogLevel.INFO: "INFO",
    LogLevel.WARN: "WARNING",
    LogLevel.ERROR: "ERROR",
    LogLevel.FATAL: "FATAL",
    LogLevel.DEBUG: "DEBUG",
}


class TextColor(Enum):
    """ANSI escape sequences used to colour a log line."""

    BLACK = "\x1b[30m"
    RED = "\x1b[31m"
    GREEN = "\x1b[32m"
    YELLOW = "\x1b[33m"
    BLUE = "\x1b[34m"
    MAGENTA = "\x1b[35m"
    CYAN = "\x1b[36m"
    WHITE = "\x1b[37m"
    BRIGHT_BLACK = "\x1b[90m"
    BRIGHT_RED = "\x1b[91m"
    BRIGHT_GREEN = "\x1b[92m"
    BRIGHT_YELLOW = "\x1b[93m"
    BRIGHT_BLUE = "\x1b[94m"
    BRIGHT_MAGENTA = "\x1b[95m"
    BRIGHT_CYAN = "\x1b[96m"
    BRIGHT_WHITE = "\x1b[97m"


_RESET = "\033[0m"
# Lines are capped to the size of the fixed formatting buffer.
_MAX_LINE = 256 * 3 - 1
_OUTPUT_LOCK = threading.Lock()


class Log:
    """A named logger that writes coloured lines at or above its level."""

    def __init__(
        self,
        level: LogLevel = LogLevel.INFO,
        kind: str = "",
        stream: Optional[TextIO] = None,
    ) -> None:
        self.level = LogLevel(level)
        self.kind = kind
        self.stream = stream

    def print(self, level: LogLevel, color: TextColor, message: str, *args) -> Optional[str]:
        """Write a line if ``level`` passes the threshold; return the line or None."""
        level = LogLevel(level)
        if level < self.level:
            return None
        body = message % args if args else message
        line = f"{color.value}[ {level.label} ] {body} {_RESET}"[:_MAX_LINE]
        stream = self.stream if self.stream is not None else sys.stdout
        with _OUTPUT_LOCK:
            stream.write(line + "\n")
        return line

    def set_level(self, level: LogLevel) -> None:
        self.level = LogLevel(level)


_APP_LOG = Log(LogLevel.INFO, "Application")
_GRAPHICS_LOG = Log(LogLevel.INFO, "OpenGL")


def app_log() -> Log:
    """Return the shared application log."""
    return _APP_LOG


def graphics_log() -> Log:
    """Return the shared graphics log."""
    return _GRAPHICS_LOG