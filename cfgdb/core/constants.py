"""Static constants for cfgdb."""

from __future__ import annotations

PROG_NAME = "cfgdb"

# Exit statuses
EXIT_OK = 0
EXIT_USAGE = 1
EXIT_MISSING_DEPENDENCY = 2
EXIT_UNKNOWN_COMMAND = 3
EXIT_STORE_MISSING = 5
EXIT_FATAL = 42

EXIT_NOT_EXECUTABLE = 126
EXIT_NOT_FOUND = 127

# Ordered from most to least verbose.
LEVELS = ("TRACE", "DEBUG", "RUN", "INFO", "DRY", "WARN", "ERROR", "DIE")

RUN_LEVEL = "RUN"
DRY_LEVEL = "DRY"
DEFAULT_LEVEL = "INFO"

LEVEL_STYLES = {
    "TRACE": "dim",
    "DEBUG": "dim",
    "RUN": "cyan",
    "INFO": "",
    "DRY": "magenta",
    "WARN": "yellow",
    "ERROR": "bold red",
    "DIE": "bold red",
}

DEFAULT_STORE_DIR = "."
DEFAULT_STORE_FILE = "db.ini"
DEFAULT_BACKEND = "git"
DEFAULT_EDITOR = "vi"

TRUE_WORDS = {"1", "true", "yes", "on"}
FALSE_WORDS = {"0", "false", "no", "off", ""}
