"""Per-scope flag parsing that stops at the first positional token."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import typer

from cfgdb import __version__
from cfgdb.core.config import expand_path
from cfgdb.core.errors import UsageError, die
from cfgdb.core.log import normalize_level
from cfgdb.core.registry import OptionSpec, Scope
from cfgdb.core.state import CLIState


def looks_like_flag(token: str) -> bool:
    return token.startswith("-") and token != "-"


def _split_inline(token: str) -> Tuple[str, Optional[str]]:
    if token.startswith("--") and "=" in token:
        flag, value = token.split("=", 1)
        return flag, value
    return token, None


def parse_options(state: CLIState, scope: Scope, argv: Sequence[str]) -> List[str]:
    """Apply leading flags declared for ``scope`` and return the residue."""
    args = list(argv)
    index = 0
    scope_label = " ".join(scope) or "top level"

    while index < len(args):
        token = args[index]
        if token == "--":
            index += 1
            break
        if not looks_like_flag(token):
            break

        flag, inline = _split_inline(token)
        spec = state.registry.find_option(scope, flag)
        if spec is None:
            raise UsageError(f"unknown option {flag} for {scope_label}")

        value: Optional[str] = None
        if spec.arity:
            if inline is not None:
                value = inline
            elif index + 1 < len(args):
                index += 1
                value = args[index]
            else:
                raise UsageError(f"option {flag} requires a {spec.metavar} value")
        elif inline is not None:
            raise UsageError(f"option {flag} does not take a value")

        state.logger.trace(f"option {flag}" + (f"={value}" if value is not None else ""))
        spec.effect(state, value)
        index += 1

    return args[index:]


def request_help(state: CLIState, _value: Optional[str]) -> None:
    state.config.show_help = True


def set_dry_run(state: CLIState, _value: Optional[str]) -> None:
    state.config.dry_run = True


def set_force(state: CLIState, _value: Optional[str]) -> None:
    state.config.force = True


def set_store_dir(state: CLIState, value: Optional[str]) -> None:
    state.config.store_dir = expand_path(value or ".")
    state.config.store_override = None


def set_level(state: CLIState, value: Optional[str]) -> None:
    level = normalize_level(value or "")
    if level is None:
        raise UsageError(f"unknown log level: {value}")
    state.config.level = level


def show_version(state: CLIState, _value: Optional[str]) -> None:
    typer.echo(__version__)
    die(0)


HELP_OPTION = OptionSpec(flags=("-h", "--help"), help="Show help for this command", effect=request_help)

GLOBAL_OPTIONS = (
    OptionSpec(
        flags=("-s", "--store"),
        metavar="PATH",
        help="Directory holding the store file",
        effect=set_store_dir,
    ),
    HELP_OPTION,
    OptionSpec(flags=("-n", "--dry"), help="Log external commands instead of running them", effect=set_dry_run),
    OptionSpec(flags=("-f", "--force"), help="Allow destructive changes", effect=set_force),
    OptionSpec(flags=("-V", "--version"), help="Show version and exit", effect=show_version),
    OptionSpec(
        flags=("-v", "--verbose"),
        metavar="LEVEL",
        help="Minimum log level (TRACE, DEBUG, RUN, INFO, DRY, WARN, ERROR, DIE)",
        effect=set_level,
    ),
)
