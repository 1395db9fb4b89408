"""Leveled diagnostics on stderr, filtered against the configured level."""

from __future__ import annotations

from typing import Iterator, Optional, Set

from rich.console import Console

from cfgdb.core.constants import LEVEL_STYLES, LEVELS
from cfgdb.core.state import RuntimeConfig

LEVEL_WIDTH = max(len(name) for name in LEVELS)


def level_index(level: str) -> Optional[int]:
    """Position of ``level`` in the scale, or None for unknown names."""
    try:
        return LEVELS.index(level)
    except ValueError:
        return None


def normalize_level(value: str) -> Optional[str]:
    """Map user input onto a known level name."""
    candidate = value.strip().upper()
    return candidate if candidate in LEVELS else None


def is_enabled(level: str, minimum: str) -> bool:
    """Unknown levels always pass so a typo never hides a message."""
    index = level_index(level)
    if index is None:
        return True
    floor = level_index(minimum)
    return floor is None or index >= floor


def format_lines(level: str, message: str) -> Iterator[str]:
    lines = str(message).splitlines() or [""]
    for line in lines:
        yield f"{level:>{LEVEL_WIDTH}} {line if line.strip() else ' '}"


def stderr_console() -> Console:
    return Console(
        stderr=True,
        markup=False,
        highlight=False,
        emoji=False,
        soft_wrap=True,
        log_time=False,
        log_path=False,
    )


class Logger:
    """Write leveled lines to the diagnostic stream."""

    def __init__(self, config: RuntimeConfig, console: Optional[Console] = None) -> None:
        self.config = config
        self.console = console or stderr_console()
        self._unknown_seen: Set[str] = set()

    def enabled(self, level: str) -> bool:
        return is_enabled(level, self.config.level)

    def log(self, level: str, message: object) -> None:
        if level_index(level) is None and level not in self._unknown_seen:
            self._unknown_seen.add(level)
            self._emit("WARN", f"unknown log level: {level}")
        if not self.enabled(level):
            return
        self._emit(level, str(message))

    def _emit(self, level: str, message: str) -> None:
        style = LEVEL_STYLES.get(level) or None
        for line in format_lines(level, message):
            self.console.print(line, style=style)

    def trace(self, message: object) -> None:
        self.log("TRACE", message)

    def debug(self, message: object) -> None:
        self.log("DEBUG", message)

    def run(self, message: object) -> None:
        self.log("RUN", message)

    def info(self, message: object) -> None:
        self.log("INFO", message)

    def dry(self, message: object) -> None:
        self.log("DRY", message)

    def warn(self, message: object) -> None:
        self.log("WARN", message)

    def error(self, message: object) -> None:
        self.log("ERROR", message)

    def die(self, message: object) -> None:
        self.log("DIE", message)
