"""quote-estimator command line: estimate, record feedback, recalibrate."""

import logging
from typing import Optional

import typer

from quote_estimator.cli.commands.calibrate import run as run_calibrate
from quote_estimator.cli.commands.estimate import run as run_estimate
from quote_estimator.cli.commands.history import run as run_history
from quote_estimator.cli.commands.rate import run as run_rate
from quote_estimator.cli.commands.rate_quote import run as run_rate_quote
from quote_estimator.version import __version__

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help=(
        "Turn classified work items into an hours and cost quote, rate saved "
        "quotes against actual effort, and propose corrected complexity "
        "multipliers from that feedback."
    ),
)


def _print_version(value: bool) -> None:
    if not value:
        return
    typer.echo(f"quote-estimator {__version__}")
    raise typer.Exit()


@app.callback()
def _configure(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log calculation and calibration details to stderr."
    ),
    version: Optional[bool] = typer.Option(  # noqa: ARG001
        None,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Print the quote-estimator version and exit.",
    ),
) -> None:
    """Configure logging before any subcommand runs."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s", force=True)


app.command("estimate")(run_estimate)
app.command("history")(run_history)
app.command("rate")(run_rate)
app.command("rate-quote")(run_rate_quote)
app.command("calibrate")(run_calibrate)


def main() -> None:
    """Console-script entry point."""
    app()


if __name__ == "__main__":
    main()
