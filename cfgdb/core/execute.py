"""Run external commands, or only announce them in dry-run mode."""

from __future__ import annotations

import shlex
import subprocess
import sys
from dataclasses import dataclass
from typing import Sequence

from cfgdb.core.constants import EXIT_NOT_EXECUTABLE, EXIT_NOT_FOUND
from cfgdb.core.state import CLIState


@dataclass(frozen=True)
class ExecutionResult:
    """Status and captured streams of one external command."""

    status: int
    output: str = ""
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status == 0


def execute(state: CLIState, argv: Sequence[str], capture: bool = True) -> ExecutionResult:
    """Run ``argv`` once; with dry-run set, only log it."""
    command = [str(part) for part in argv]
    rendered = shlex.join(command)

    if state.config.dry_run:
        state.logger.dry(rendered)
        return ExecutionResult(status=0)

    state.logger.run(rendered)
    try:
        completed = subprocess.run(
            command,
            capture_output=capture,
            text=True,
            check=False,
        )
    except FileNotFoundError:
        message = f"{command[0]}: command not found"
        state.logger.error(message)
        return ExecutionResult(status=EXIT_NOT_FOUND, message=message)
    except PermissionError:
        message = f"{command[0]}: permission denied"
        state.logger.error(message)
        return ExecutionResult(status=EXIT_NOT_EXECUTABLE, message=message)
    except OSError as exc:
        message = f"{command[0]}: cannot execute: {exc.strerror or exc}"
        state.logger.error(message)
        return ExecutionResult(status=EXIT_NOT_EXECUTABLE, message=message)

    stderr = completed.stderr or ""
    if stderr:
        sys.stderr.write(stderr)
        sys.stderr.flush()
    if completed.returncode != 0:
        state.logger.debug(f"exit status {completed.returncode}: {rendered}")
    return ExecutionResult(
        status=completed.returncode,
        output=completed.stdout or "",
        message=stderr,
    )
