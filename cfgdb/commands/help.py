"""The ``help`` command."""

from __future__ import annotations

from typing import List

from cfgdb.commands.common import command_args, show_help
from cfgdb.core.errors import UnknownCommandError
from cfgdb.core.state import CLIState


def help_command(state: CLIState, args: List[str]) -> int:
    """Show help for the top level or for the named command."""
    rest = command_args(state, ("help",), args)
    if rest is None:
        return 0
    scope = tuple(rest)
    if scope and scope not in state.registry:
        raise UnknownCommandError(f"unknown command: {' '.join(scope)}")
    show_help(state, scope)
    return 0
