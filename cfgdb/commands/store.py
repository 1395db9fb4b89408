"""Key-value store commands."""

from __future__ import annotations

from typing import List

import typer

from cfgdb.commands.common import command_args, echo_output
from cfgdb.core.backend import ConfigBackend
from cfgdb.core.config import expand_path
from cfgdb.core.errors import CLIError
from cfgdb.core.execute import execute
from cfgdb.core.state import CLIState


def init_command(state: CLIState, args: List[str]) -> int:
    """Create the store file unless it already exists."""
    rest = command_args(state, ("init",), args, 0, 1)
    if rest is None:
        return 0

    path = expand_path(rest[0]) / state.config.store_file if rest else state.config.store_path
    if path.exists():
        state.logger.info(f"store already exists: {path}")
        return 0

    result = execute(state, ["mkdir", "-p", str(path.parent)])
    if result.ok:
        result = execute(state, ["touch", str(path)])
    if result.ok and not state.config.dry_run:
        state.logger.info(f"initialized store: {path}")
    return result.status


def add_command(state: CLIState, args: List[str]) -> int:
    rest = command_args(state, ("add",), args, 2, 2)
    if rest is None:
        return 0
    key, value = rest
    return echo_output(ConfigBackend(state).add(key, value))


def rm_command(state: CLIState, args: List[str]) -> int:
    """Remove every value of KEY, or only the values equal to VALUE."""
    rest = command_args(state, ("rm",), args, 1, 2)
    if rest is None:
        return 0
    key = rest[0]
    value = rest[1] if len(rest) > 1 else None
    return echo_output(ConfigBackend(state).unset_all(key, value))


def set_command(state: CLIState, args: List[str]) -> int:
    """Replace all values of KEY with VALUE."""
    rest = command_args(state, ("set",), args, 2, 2)
    if rest is None:
        return 0
    key, value = rest
    backend = ConfigBackend(state)

    if not state.config.force:
        current = backend.get_all(key).output.splitlines()
        if len(current) > 1:
            raise CLIError(f"{key} has {len(current)} values; use --force to replace them all")

    return echo_output(backend.replace_all(key, value))


def get_command(state: CLIState, args: List[str]) -> int:
    rest = command_args(state, ("get",), args, 1, 1)
    if rest is None:
        return 0
    return echo_output(ConfigBackend(state).get_all(rest[0]))


def dump_command(state: CLIState, args: List[str]) -> int:
    rest = command_args(state, ("dump",), args, 0, 1)
    if rest is None:
        return 0
    pattern = rest[0] if rest else None
    return echo_output(ConfigBackend(state).list(pattern))


def _matches_section(name: str, section: str) -> bool:
    return name == section or name.startswith(section + ".")


def ls_command(state: CLIState, args: List[str]) -> int:
    """List distinct key names, optionally limited to one section."""
    rest = command_args(state, ("ls",), args, 0, 1)
    if rest is None:
        return 0
    section = rest[0] if rest else None

    result = ConfigBackend(state).list_names()
    if not result.ok:
        return result.status

    seen = set()
    for name in result.output.splitlines():
        if not name or name in seen:
            continue
        if section and not _matches_section(name, section):
            continue
        seen.add(name)
        typer.echo(name)
    return 0
