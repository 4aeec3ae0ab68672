"""Coloured, timestamped console logging with a minimum level."""

from __future__ import annotations

import enum
import sys
import threading
from datetime import datetime

RESET = "\x1b[0m"

_WRITE_LOCK = threading.Lock()


class LogLevel(enum.IntEnum):
    """Severity of a log message, ordered from least to most severe."""

    DEBUG = 0
    WARN = 1
    ERROR = 2

    def __str__(self) -> str:
        return self.name

    @property
    def color_code(self) -> str:
        """ANSI escape sequence used to colour the level name."""
        return _COLOR_CODES[self]


_COLOR_CODES = {
    LogLevel.DEBUG: "\x1b[34m",
    LogLevel.WARN: "\x1b[33m",
    LogLevel.ERROR: "\x1b[31m",
}


class Logger:
    """Writes messages at or above ``min_level``; errors go to stderr."""

    def __init__(self, min_level: LogLevel = LogLevel.DEBUG) -> None:
        self.min_level = LogLevel(min_level)

    def log(self, level: LogLevel, msg: str) -> None:
        level = LogLevel(level)
        if level < self.min_level:
            return
        with _WRITE_LOCK:
            stamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            line = f"{stamp} [{level.color_code}{level.name}{RESET}] {msg}"
            stream = sys.stderr if level is LogLevel.ERROR else sys.stdout
            try:
                print(line, file=stream, flush=True)
            except OSError:
                pass

    def debug(self, msg: str) -> None:
        self.log(LogLevel.DEBUG, msg)

    def warn(self, msg: str) -> None:
        self.log(LogLevel.WARN, msg)

    def error(self, msg: str) -> None:
        self.log(LogLevel.ERROR, msg)