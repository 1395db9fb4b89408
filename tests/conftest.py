from __future__ import annotations

from pathlib import Path
from typing import Callable, List, NamedTuple, Optional

import pytest
from rich.console import Console
from typer.testing import CliRunner

from cfgdb.app import run
from cfgdb.core.log import Logger
from cfgdb.core.registry import CommandRegistry
from cfgdb.core.state import CLIState, RuntimeConfig


class CLIResult(NamedTuple):
    status: int
    out: str
    err: str


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def make_state() -> Callable[..., CLIState]:
    def _make(
        registry: Optional[CommandRegistry] = None,
        config: Optional[RuntimeConfig] = None,
    ) -> CLIState:
        cfg = config or RuntimeConfig()
        return CLIState(
            config=cfg,
            logger=Logger(cfg),
            registry=registry if registry is not None else CommandRegistry(summary="test program"),
            console=Console(highlight=False),
        )

    return _make


@pytest.fixture()
def cli(capsys: pytest.CaptureFixture[str], tmp_path: Path) -> Callable[..., CLIResult]:
    """Run a command line in-process with an isolated environment."""

    def _run(argv: List[str], **environ: str) -> CLIResult:
        capsys.readouterr()
        status = run(argv, environ=environ, config_file=tmp_path / "no-config.toml")
        captured = capsys.readouterr()
        return CLIResult(status, captured.out, captured.err)

    return _run


@pytest.fixture()
def store_dir(tmp_path: Path) -> Path:
    path = tmp_path / "store"
    path.mkdir()
    (path / "db.ini").write_text("")
    return path
