from __future__ import annotations

from typing import List, Tuple

import pytest

from cfgdb.core.dispatch import dispatch
from cfgdb.core.errors import UnknownCommandError
from cfgdb.core.registry import CommandDescriptor, CommandRegistry, OptionSpec, RegistryError


def _noop(state, args):
    return 0


def _recording_registry(calls: List[Tuple[str, List[str]]]) -> CommandRegistry:
    registry = CommandRegistry()

    def make(name: str, status: int = 0):
        def handler(state, args):
            calls.append((name, args))
            return status

        return handler

    registry.command("a", "parent")(make("a"))
    registry.command("a b", "first child")(make("a b", status=7))
    registry.command("a c", "second child")(make("a c"))
    return registry


def test_dispatch_invokes_only_the_named_handler(make_state) -> None:
    calls: List[Tuple[str, List[str]]] = []
    state = make_state(registry=_recording_registry(calls))

    status = dispatch(state, ("a",), "b", ["1", "2"])

    assert status == 7
    assert calls == [("a b", ["1", "2"])]


def test_dispatch_unknown_verb_raises_status_3_without_calls(make_state) -> None:
    calls: List[Tuple[str, List[str]]] = []
    state = make_state(registry=_recording_registry(calls))

    with pytest.raises(UnknownCommandError) as excinfo:
        dispatch(state, ("a",), "z", [])

    assert excinfo.value.status == 3
    assert "a z" in excinfo.value.message
    assert calls == []


def test_handler_can_dispatch_into_a_narrower_scope(make_state) -> None:
    registry = CommandRegistry()
    seen: List[List[str]] = []

    def parent(state, args):
        return dispatch(state, ("outer",), args[0], args[1:])

    def inner(state, args):
        seen.append(args)
        return 4

    registry.command("outer", "parent")(parent)
    registry.command("outer inner", "child")(inner)

    assert dispatch(make_state(registry=registry), (), "outer", ["inner", "x"]) == 4
    assert seen == [["x"]]


def test_children_are_direct_and_in_registration_order() -> None:
    registry = CommandRegistry()
    for name in ("db", "zeta", "alpha", "db path", "db path deep"):
        registry.command(name, name)(_noop)

    assert [d.path for d in registry.children(())] == ["db", "zeta", "alpha"]
    assert [d.path for d in registry.children("db")] == ["db path"]
    assert registry.children("alpha") == []


def test_duplicate_command_is_rejected() -> None:
    registry = CommandRegistry()
    registry.add(CommandDescriptor(name=("x",), handler=_noop, summary="x"))
    with pytest.raises(RegistryError):
        registry.command("x", "again")(_noop)


def test_duplicate_flag_in_scope_is_rejected() -> None:
    registry = CommandRegistry()
    registry.options((), [OptionSpec(flags=("-a", "--all"), help="", effect=lambda s, v: None)])
    with pytest.raises(RegistryError):
        registry.options((), [OptionSpec(flags=("--all",), help="", effect=lambda s, v: None)])


def test_same_flag_in_different_scopes_is_allowed() -> None:
    registry = CommandRegistry()
    spec = OptionSpec(flags=("-h",), help="", effect=lambda s, v: None)
    registry.options((), [spec])
    registry.options("get", [spec])
    assert registry.find_option("get", "-h") is spec


def test_frozen_registry_rejects_registration() -> None:
    registry = CommandRegistry().freeze()
    with pytest.raises(RegistryError):
        registry.command("late", "too late")(_noop)


def test_membership_and_lookup() -> None:
    registry = CommandRegistry()
    registry.command("db edit", "edit")(_noop)
    assert "db edit" in registry
    assert ("db", "edit") in registry
    assert "db" not in registry
    assert registry.lookup(("db",), "edit").summary == "edit"
    assert len(registry) == 1
