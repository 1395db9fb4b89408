"""Configuration loading: defaults, config file, then environment."""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from cfgdb.core.constants import (
    DEFAULT_BACKEND,
    DEFAULT_LEVEL,
    DEFAULT_STORE_DIR,
    DEFAULT_STORE_FILE,
    EXIT_USAGE,
    FALSE_WORDS,
    TRUE_WORDS,
)
from cfgdb.core.errors import CLIError
from cfgdb.core.log import normalize_level
from cfgdb.core.state import RuntimeConfig

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # Python 3.9-3.10
    import tomli as tomllib  # type: ignore[no-redef]


class ConfigError(CLIError):
    """Raised when configuration input cannot be used."""

    status = EXIT_USAGE


ENV_KEYS = {
    "level": "CFGDB_LOG_LEVEL",
    "dry_run": "CFGDB_DRY_RUN",
    "force": "CFGDB_FORCE",
    "store_dir": "CFGDB_STORE_DIR",
    "store_file": "CFGDB_STORE_FILE",
    "store": "CFGDB_STORE",
    "backend": "CFGDB_GIT",
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def expand_path(path_str: str) -> Path:
    """Expand user/env vars without resolving, so relative paths stay relative."""
    return Path(os.path.expandvars(path_str)).expanduser()


def default_config_path() -> Path:
    """Get default config file path."""
    raw = os.getenv("CFGDB_CONFIG_FILE", "~/.config/cfgdb/config.toml")
    return expand_path(raw)


def _default_config() -> Dict[str, Any]:
    return {
        "defaults": {
            "level": DEFAULT_LEVEL,
            "dry_run": False,
            "force": False,
            "store_dir": DEFAULT_STORE_DIR,
            "store_file": DEFAULT_STORE_FILE,
            "store": None,
            "backend": DEFAULT_BACKEND,
        },
    }


def _read_config(path: Path) -> Dict[str, Any]:
    suffix = path.suffix.lower()
    text = path.read_text()
    try:
        if suffix in {".toml", ""}:
            loaded = tomllib.loads(text)
        else:
            loaded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {path} must contain an object/table at the root")
    return loaded


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load the config file, merged with defaults."""
    cfg_path = path or default_config_path()
    cfg = _default_config()
    if cfg_path.exists():
        cfg = _deep_merge(cfg, _read_config(cfg_path))
    return cfg


def parse_bool(value: Any, source: str) -> bool:
    if isinstance(value, bool):
        return value
    word = str(value).strip().lower()
    if word in TRUE_WORDS:
        return True
    if word in FALSE_WORDS:
        return False
    raise ConfigError(f"{source}: expected a boolean, got {value!r}")


def parse_level(value: Any, source: str) -> str:
    level = normalize_level(str(value))
    if level is None:
        raise ConfigError(f"{source}: unknown log level {value!r}")
    return level


def _overlay_env(settings: Dict[str, Any], environ: Mapping[str, str]) -> Dict[str, Any]:
    merged = dict(settings)
    for key, env_name in ENV_KEYS.items():
        if env_name in environ:
            merged[key] = environ[env_name]
    return merged


def build_runtime_config(
    config: Optional[Dict[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> RuntimeConfig:
    """Resolve startup defaults; environment wins over the config file."""
    cfg = config if config is not None else load_config()
    env = os.environ if environ is None else environ
    settings = _overlay_env(cfg.get("defaults", {}), env)

    store = settings.get("store")
    return RuntimeConfig(
        level=parse_level(settings.get("level", DEFAULT_LEVEL), "log level"),
        dry_run=parse_bool(settings.get("dry_run", False), "dry_run"),
        force=parse_bool(settings.get("force", False), "force"),
        store_dir=expand_path(str(settings.get("store_dir") or DEFAULT_STORE_DIR)),
        store_file=str(settings.get("store_file") or DEFAULT_STORE_FILE),
        store_override=expand_path(str(store)) if store else None,
        backend=str(settings.get("backend") or DEFAULT_BACKEND),
    )
