"""Runtime state containers threaded through every command."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from rich.console import Console

from cfgdb.core.constants import (
    DEFAULT_BACKEND,
    DEFAULT_LEVEL,
    DEFAULT_STORE_DIR,
    DEFAULT_STORE_FILE,
)

if TYPE_CHECKING:
    from cfgdb.core.log import Logger
    from cfgdb.core.registry import CommandRegistry


@dataclass
class RuntimeConfig:
    """Options that steer logging, execution and store resolution."""

    level: str = DEFAULT_LEVEL
    dry_run: bool = False
    force: bool = False
    store_dir: Path = Path(DEFAULT_STORE_DIR)
    store_file: str = DEFAULT_STORE_FILE
    store_override: Optional[Path] = None
    backend: str = DEFAULT_BACKEND
    show_help: bool = False

    @property
    def store_path(self) -> Path:
        if self.store_override is not None:
            return self.store_override
        return self.store_dir / self.store_file


@dataclass
class CLIState:
    """Runtime configuration plus the services handlers need."""

    config: RuntimeConfig
    logger: "Logger"
    registry: "CommandRegistry"
    console: Console
