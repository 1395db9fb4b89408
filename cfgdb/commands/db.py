"""Raw access to the store backend."""

from __future__ import annotations

import os
import shlex
from typing import List

import typer

from cfgdb.commands.common import command_args, echo_output
from cfgdb.core.backend import ConfigBackend
from cfgdb.core.constants import DEFAULT_EDITOR
from cfgdb.core.dispatch import dispatch
from cfgdb.core.execute import execute
from cfgdb.core.state import CLIState

DB_SCOPE = ("db",)


def db_command(state: CLIState, args: List[str]) -> int:
    """Run a ``db`` subcommand, or forward every token to the backend as-is."""
    if args and state.registry.lookup(DB_SCOPE, args[0]) is not None:
        return dispatch(state, DB_SCOPE, args[0], args[1:])
    return echo_output(ConfigBackend(state).raw(args))


def db_path_command(state: CLIState, args: List[str]) -> int:
    rest = command_args(state, ("db", "path"), args, 0, 0)
    if rest is None:
        return 0
    typer.echo(str(state.config.store_path))
    return 0


def db_edit_command(state: CLIState, args: List[str]) -> int:
    """Open the store file in $VISUAL or $EDITOR."""
    rest = command_args(state, ("db", "edit"), args, 0, 0)
    if rest is None:
        return 0
    editor = os.environ.get("VISUAL") or os.environ.get("EDITOR") or DEFAULT_EDITOR
    argv = shlex.split(editor) + [str(state.config.store_path)]
    return execute(state, argv, capture=False).status
