"""Self-documenting command-line front end for a git-config key-value store."""

__version__ = "0.1.0"
