from typer.testing import CliRunner

from cfgdb import __version__
from cfgdb.__main__ import app


runner = CliRunner()


def test_help_lists_commands() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "--dry" in result.output
    for command in ["init", "add", "rm", "set", "get", "dump", "ls", "db", "help"]:
        assert command in result.output


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version", "--not-parsed"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_unknown_command_exit_code() -> None:
    result = runner.invoke(app, ["frobnicate"])
    assert result.exit_code == 3


def test_unknown_flag_is_usage_error() -> None:
    result = runner.invoke(app, ["--frob"])
    assert result.exit_code == 1
