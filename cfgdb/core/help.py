"""Help pages assembled from the command table's own metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from rich.console import Console
from rich.table import Table
from rich.text import Text

from cfgdb.core.constants import PROG_NAME
from cfgdb.core.registry import CommandRegistry, Scope

Row = Tuple[str, str, str]


@dataclass(frozen=True)
class HelpPage:
    """Read-only view of one scope: usage line, child commands, options."""

    usage: str
    summary: str
    commands: List[Row] = field(default_factory=list)
    options: List[Row] = field(default_factory=list)


def build_help(registry: CommandRegistry, scope: Scope, prog: str = PROG_NAME) -> HelpPage:
    """Collect help for ``scope`` without running any handler."""
    scope = tuple(scope)
    descriptor = registry.get(scope) if scope else None
    summary = descriptor.summary if descriptor else registry.summary

    commands = [
        (child.name[-1], child.args, child.summary)
        for child in registry.children(scope)
    ]
    options = [
        (", ".join(spec.flags), spec.metavar or "", spec.help)
        for spec in registry.option_specs(scope)
    ]

    parts = [prog, *scope]
    if options:
        parts.append("[OPTIONS]")
    if commands:
        parts.append("COMMAND [ARGS]...")
    elif descriptor is not None and descriptor.args:
        parts.append(descriptor.args)

    return HelpPage(usage=" ".join(parts), summary=summary, commands=commands, options=options)


def _table(title: str, rows: List[Row]) -> Table:
    table = Table(title=title, title_justify="left", box=None, show_header=False, padding=(0, 2, 0, 2))
    table.add_column("name", no_wrap=True)
    table.add_column("args", no_wrap=True)
    table.add_column("description")
    for row in rows:
        table.add_row(*(Text(cell) for cell in row))
    return table


def render_help(console: Console, page: HelpPage) -> None:
    console.print(f"Usage: {page.usage}", markup=False, highlight=False)
    if page.summary:
        console.print()
        console.print(page.summary, markup=False, highlight=False)
    if page.commands:
        console.print()
        console.print(_table("Commands:", page.commands))
    if page.options:
        console.print()
        console.print(_table("Options:", page.options))
