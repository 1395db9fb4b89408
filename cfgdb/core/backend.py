"""Thin client for the ``git config --file`` store backend."""

from __future__ import annotations

import re
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from cfgdb.core.execute import ExecutionResult, execute
from cfgdb.core.state import CLIState

_ERE_SPECIAL = re.compile(r"([.\[\]{}()\\*+?^$|])")


def ere_escape(value: str) -> str:
    """Escape ``value`` for git's extended regular expressions."""
    return _ERE_SPECIAL.sub(r"\\\1", value)


def as_list_lines(output: str) -> str:
    """Rewrite ``--get-regexp`` lines (``key value``) in ``--list`` form (``key=value``).

    Keys never contain spaces; a key with no value stays bare.
    """
    lines = []
    for line in output.splitlines():
        key, sep, value = line.partition(" ")
        lines.append(f"{key}={value}" if sep else key)
    return "".join(f"{line}\n" for line in lines)


class ConfigBackend:
    """Format store operations as ``git config`` calls routed through ``execute``."""

    def __init__(self, state: CLIState, path: Optional[Path] = None) -> None:
        self.state = state
        self.path = path or state.config.store_path

    def _base(self) -> List[str]:
        return [self.state.config.backend, "config", "--file", str(self.path)]

    def raw(self, args: List[str], capture: bool = True) -> ExecutionResult:
        return execute(self.state, self._base() + list(args), capture=capture)

    def get_all(self, key: str) -> ExecutionResult:
        return self.raw(["--get-all", key])

    def replace_all(self, key: str, value: str) -> ExecutionResult:
        return self.raw(["--replace-all", key, value])

    def add(self, key: str, value: str) -> ExecutionResult:
        return self.raw(["--add", key, value])

    def unset_all(self, key: str, value: Optional[str] = None) -> ExecutionResult:
        args = ["--unset-all", key]
        if value is not None:
            args.append(f"^{ere_escape(value)}$")
        return self.raw(args)

    def list(self, pattern: Optional[str] = None) -> ExecutionResult:
        """Entries as ``key=value`` lines, optionally only keys matching ``pattern``."""
        if not pattern:
            return self.raw(["--list"])
        result = self.raw(["--get-regexp", pattern])
        return replace(result, output=as_list_lines(result.output))

    def list_names(self) -> ExecutionResult:
        return self.raw(["--list", "--name-only"])
