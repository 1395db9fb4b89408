"""Static table of commands and per-scope options."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

if TYPE_CHECKING:
    from cfgdb.core.state import CLIState

Scope = Tuple[str, ...]
Handler = Callable[["CLIState", List[str]], int]
Effect = Callable[["CLIState", Optional[str]], None]


class RegistryError(RuntimeError):
    """Raised when the command table is declared inconsistently."""


@dataclass(frozen=True)
class CommandDescriptor:
    """One command: where it lives, what runs, and how it is documented."""

    name: Scope
    handler: Handler
    summary: str
    args: str = ""
    requires_store: bool = True
    requires_backend: bool = True

    @property
    def path(self) -> str:
        return " ".join(self.name)


@dataclass(frozen=True)
class OptionSpec:
    """A flag with its aliases; ``metavar`` set means it takes one value."""

    flags: Tuple[str, ...]
    help: str
    effect: Effect
    metavar: Optional[str] = None

    @property
    def arity(self) -> int:
        return 0 if self.metavar is None else 1


def as_scope(name: Iterable[str] | str) -> Scope:
    if isinstance(name, str):
        return tuple(name.split())
    return tuple(name)


class CommandRegistry:
    """Commands keyed by hierarchical name, plus the options each scope declares."""

    def __init__(self, summary: str = "") -> None:
        self.summary = summary
        self._commands: Dict[Scope, CommandDescriptor] = {}
        self._options: Dict[Scope, List[OptionSpec]] = {}
        self._frozen = False

    def add(self, descriptor: CommandDescriptor) -> CommandDescriptor:
        self._check_mutable()
        if not descriptor.name:
            raise RegistryError("command name must have at least one segment")
        if descriptor.name in self._commands:
            raise RegistryError(f"duplicate command: {descriptor.path}")
        self._commands[descriptor.name] = descriptor
        return descriptor

    def command(
        self,
        name: Iterable[str] | str,
        summary: str,
        args: str = "",
        requires_store: bool = True,
        requires_backend: bool = True,
    ) -> Callable[[Handler], Handler]:
        """Decorator form of :meth:`add`."""

        def decorator(handler: Handler) -> Handler:
            self.add(
                CommandDescriptor(
                    name=as_scope(name),
                    handler=handler,
                    summary=summary,
                    args=args,
                    requires_store=requires_store,
                    requires_backend=requires_backend,
                )
            )
            return handler

        return decorator

    def options(self, scope: Iterable[str] | str, specs: Sequence[OptionSpec]) -> None:
        self._check_mutable()
        key = as_scope(scope)
        declared = self._options.setdefault(key, [])
        seen = {flag for spec in declared for flag in spec.flags}
        for spec in specs:
            for flag in spec.flags:
                if not flag.startswith("-") or flag in ("-", "--"):
                    raise RegistryError(f"invalid flag {flag!r} in scope {' '.join(key) or '<root>'}")
                if flag in seen:
                    raise RegistryError(f"duplicate flag {flag} in scope {' '.join(key) or '<root>'}")
                seen.add(flag)
            declared.append(spec)

    def freeze(self) -> "CommandRegistry":
        self._frozen = True
        return self

    def _check_mutable(self) -> None:
        if self._frozen:
            raise RegistryError("command registry is frozen")

    def get(self, name: Iterable[str] | str) -> Optional[CommandDescriptor]:
        return self._commands.get(as_scope(name))

    def lookup(self, scope: Scope, verb: str) -> Optional[CommandDescriptor]:
        return self._commands.get(tuple(scope) + (verb,))

    def children(self, scope: Iterable[str] | str) -> List[CommandDescriptor]:
        """Direct children of ``scope`` in registration order."""
        key = as_scope(scope)
        depth = len(key) + 1
        return [
            descriptor
            for name, descriptor in self._commands.items()
            if len(name) == depth and name[: len(key)] == key
        ]

    def option_specs(self, scope: Iterable[str] | str) -> List[OptionSpec]:
        return list(self._options.get(as_scope(scope), ()))

    def find_option(self, scope: Iterable[str] | str, flag: str) -> Optional[OptionSpec]:
        for spec in self._options.get(as_scope(scope), ()):
            if flag in spec.flags:
                return spec
        return None

    def __contains__(self, name: object) -> bool:
        if isinstance(name, (str, tuple, list)):
            return as_scope(name) in self._commands
        return False

    def __len__(self) -> int:
        return len(self._commands)
