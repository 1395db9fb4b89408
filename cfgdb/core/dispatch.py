"""Resolve a verb within a scope and run its handler."""

from __future__ import annotations

from typing import List, Sequence

from cfgdb.core.errors import UnknownCommandError
from cfgdb.core.registry import Scope
from cfgdb.core.state import CLIState


def dispatch(state: CLIState, scope: Scope, verb: str, args: Sequence[str]) -> int:
    """Invoke ``scope + verb`` with ``args`` and return its status unchanged."""
    descriptor = state.registry.lookup(scope, verb)
    if descriptor is None:
        name = " ".join([*scope, verb])
        raise UnknownCommandError(f"unknown command: {name}")

    residue: List[str] = list(args)
    state.logger.debug(f"dispatch {descriptor.path} {residue}")
    status = descriptor.handler(state, residue)
    return int(status)
