"""Shared command helpers."""

from __future__ import annotations

from typing import List, Optional, Sequence

import typer

from cfgdb.core.constants import PROG_NAME
from cfgdb.core.errors import UsageError
from cfgdb.core.execute import ExecutionResult
from cfgdb.core.help import build_help, render_help
from cfgdb.core.options import parse_options
from cfgdb.core.registry import Scope
from cfgdb.core.state import CLIState


def show_help(state: CLIState, scope: Scope) -> None:
    """Render help for ``scope`` on stdout."""
    render_help(state.console, build_help(state.registry, scope, prog=PROG_NAME))


def usage_line(state: CLIState, scope: Scope) -> str:
    descriptor = state.registry.get(scope)
    shape = descriptor.args if descriptor else ""
    return f"usage: {PROG_NAME} {' '.join(scope)} {shape}".rstrip()


def command_args(
    state: CLIState,
    scope: Scope,
    args: Sequence[str],
    minimum: int = 0,
    maximum: Optional[int] = None,
) -> Optional[List[str]]:
    """Parse the command's own flags and check the positional count.

    Returns None when help was requested and already shown.
    """
    residue = parse_options(state, scope, args)
    if state.config.show_help:
        show_help(state, scope)
        return None
    if len(residue) < minimum or (maximum is not None and len(residue) > maximum):
        raise UsageError(usage_line(state, scope))
    return residue


def echo_output(result: ExecutionResult) -> int:
    """Pass captured backend output through to stdout and return its status."""
    if result.output:
        typer.echo(result.output, nl=False)
    return result.status
