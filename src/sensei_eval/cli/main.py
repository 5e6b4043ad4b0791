"""sensei-eval CLI entry point."""

import typer

from sensei_eval import __version__
from sensei_eval.cli.baseline_cmd import baseline
from sensei_eval.cli.compare_cmd import compare
from sensei_eval.cli.eval_cmd import eval_

app = typer.Typer(
    name="sensei-eval",
    help="Evaluate generated educational content against weighted criteria",
    no_args_is_help=True,
)

# Register subcommands
app.command(name="eval")(eval_)
app.command()(baseline)
app.command()(compare)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"sensei-eval {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Evaluate generated educational content against weighted criteria."""
