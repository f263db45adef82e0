from __future__ import annotations

import typer

from prtag import __version__
from prtag.cli.commands.inspect_cmd import guard, increment, latest_tag, next_tag
from prtag.cli.commands.run_cmd import run


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command()(run)
app.command()(guard)
app.command()(increment)
app.command("latest-tag")(latest_tag)
app.command("next-tag")(next_tag)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)


def main() -> None:
    app()
