"""Top-level boundary that turns failures into diagnostics and exit statuses."""

from __future__ import annotations

import traceback
from typing import Any, Callable, List

from cfgdb.core.constants import EXIT_FATAL
from cfgdb.core.errors import CLIError, Terminate
from cfgdb.core.log import Logger


def render_trace(exc: BaseException) -> List[str]:
    """Frames of ``exc`` oldest first, one or two lines each."""
    lines: List[str] = []
    for frame in traceback.extract_tb(exc.__traceback__):
        lines.append(f"  at {frame.filename}:{frame.lineno} in {frame.name}")
        if frame.line:
            lines.append(f"      {frame.line.strip()}")
    return lines


class ErrorTrap:
    """Run the program body and map every outcome onto an exit status."""

    def __init__(self, logger: Logger) -> None:
        self.logger = logger

    def call(self, func: Callable[..., int], *args: Any, **kwargs: Any) -> int:
        try:
            return int(func(*args, **kwargs))
        except Terminate as exc:
            if exc.message:
                self.logger.die(exc.message)
            return exc.status
        except CLIError as exc:
            if exc.message:
                self.logger.error(exc.message)
            return exc.status
        except Exception as exc:  # noqa: BLE001
            return self._fatal(exc)

    def _fatal(self, exc: Exception) -> int:
        self.logger.error("uncaught exception, call trace follows")
        trace = render_trace(exc)
        if trace:
            self.logger.error("\n".join(trace))
        frames = traceback.extract_tb(exc.__traceback__)
        where = f"{frames[-1].filename}:{frames[-1].lineno} in {frames[-1].name}" if frames else "<unknown>"
        self.logger.error(f"failed at {where}: {type(exc).__name__}: {exc}")
        return EXIT_FATAL
