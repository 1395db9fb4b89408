"""Entry point for cfgdb."""

from __future__ import annotations

import typer

from cfgdb.app import SUMMARY, run

app = typer.Typer(
    add_completion=False,
    help=SUMMARY,
)


@app.command(
    context_settings={
        "ignore_unknown_options": True,
        "allow_extra_args": True,
        "allow_interspersed_args": False,
    },
    add_help_option=False,
)
def main_command(ctx: typer.Context) -> None:
    """Hand the raw command line to the cfgdb dispatcher."""
    raise typer.Exit(code=run(ctx.args))


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
