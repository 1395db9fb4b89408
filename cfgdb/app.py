"""Command table and process lifecycle."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Mapping, Optional, Sequence

from rich.console import Console

from cfgdb.commands.common import show_help
from cfgdb.commands.db import db_command, db_edit_command, db_path_command
from cfgdb.commands.help import help_command
from cfgdb.commands.store import (
    add_command,
    dump_command,
    get_command,
    init_command,
    ls_command,
    rm_command,
    set_command,
)
from cfgdb.core.config import build_runtime_config, load_config
from cfgdb.core.constants import PROG_NAME
from cfgdb.core.dispatch import dispatch
from cfgdb.core.errors import MissingDependencyError, StoreMissingError
from cfgdb.core.log import Logger
from cfgdb.core.options import GLOBAL_OPTIONS, HELP_OPTION, parse_options
from cfgdb.core.registry import CommandRegistry
from cfgdb.core.state import CLIState, RuntimeConfig
from cfgdb.core.trap import ErrorTrap

SUMMARY = "Key-value store kept in a git-config formatted file."


def build_registry() -> CommandRegistry:
    """Declare every command and option once; help is generated from this."""
    registry = CommandRegistry(summary=SUMMARY)
    registry.options((), GLOBAL_OPTIONS)

    command = registry.command
    command("init", "Create the store if it does not exist", "[PATH]",
            requires_store=False, requires_backend=False)(init_command)
    command("add", "Append VALUE to the values of KEY", "KEY VALUE")(add_command)
    command("rm", "Remove KEY, or only its values equal to VALUE", "KEY [VALUE]")(rm_command)
    command("set", "Replace all values of KEY with VALUE", "KEY VALUE")(set_command)
    command("get", "Print every value of KEY", "KEY")(get_command)
    command("dump", "Print key=value pairs, optionally matching PATTERN", "[PATTERN]")(dump_command)
    command("ls", "List key names, optionally within one section", "[SECTION-FILTER]")(ls_command)
    command("db", "Pass arguments straight to the store backend", "[ARGS...]")(db_command)
    command("db path", "Print the resolved store path", "")(db_path_command)
    command("db edit", "Open the store in $VISUAL or $EDITOR", "")(db_edit_command)
    command("help", "Show help for a command", "[COMMAND...]",
            requires_store=False, requires_backend=False)(help_command)

    for name in ("init", "add", "rm", "set", "get", "dump", "ls", "db path", "db edit", "help"):
        registry.options(name, [HELP_OPTION])
    return registry.freeze()


def initialize(state: CLIState) -> None:
    config = state.config
    state.logger.debug(
        f"level={config.level} dry_run={config.dry_run} force={config.force} store={config.store_path}"
    )


def check_preconditions(state: CLIState, verb: str) -> None:
    """Fail closed before dispatch when the backend or the store is missing."""
    descriptor = state.registry.lookup((), verb)
    if descriptor is None:
        return
    backend = state.config.backend
    if descriptor.requires_backend and shutil.which(backend) is None:
        raise MissingDependencyError(f"required command not found: {backend}")
    store = state.config.store_path
    if descriptor.requires_store and not store.exists():
        raise StoreMissingError(f"store not found: {store} (run '{PROG_NAME} init' first)")


def _main(
    state: CLIState,
    argv: Sequence[str],
    environ: Optional[Mapping[str, str]],
    config_file: Optional[Path],
) -> int:
    state.config = build_runtime_config(load_config(config_file), environ)
    state.logger.config = state.config

    rest = parse_options(state, (), argv)
    initialize(state)

    if state.config.show_help or not rest:
        show_help(state, ())
        return 0

    verb, args = rest[0], rest[1:]
    check_preconditions(state, verb)
    return dispatch(state, (), verb, args)


def run(
    argv: Sequence[str],
    registry: Optional[CommandRegistry] = None,
    environ: Optional[Mapping[str, str]] = None,
    config_file: Optional[Path] = None,
) -> int:
    """Run one command line and return the process exit status."""
    config = RuntimeConfig()
    logger = Logger(config)
    state = CLIState(
        config=config,
        logger=logger,
        registry=registry if registry is not None else build_registry(),
        console=Console(highlight=False, emoji=False),
    )
    trap = ErrorTrap(logger)
    return trap.call(_main, state, list(argv), environ, config_file)
