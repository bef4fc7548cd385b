"""The ``trustev`` command line.

``main`` is the console-script entry point. A
:class:`~trustev.exceptions.TrustevError` raised by any command is printed
as a one-line error and turned into that error's exit code.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import typer

from trustev import __version__
from trustev.commands.case import case_app
from trustev.commands.config import config_app
from trustev.commands.decision import decision_command
from trustev.commands.profile import profile_app
from trustev.commands.token import token_command
from trustev.exceptions import TrustevError
from trustev.exit_codes import EXIT_GENERIC_FAILURE
from trustev.output import OutputFormat, OutputManager, error, set_output

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="trustev",
    help="Score sessions and cases with the Trustev fraud-detection API.",
    no_args_is_help=True,
    add_completion=False,
)
app.add_typer(profile_app, name="profile", help="Merchant profiles: credentials sources and region.")
app.add_typer(config_app, name="config", help="Default profile and output format.")
app.add_typer(case_app, name="case", help="Inspect posted cases.")
app.command("token")(token_command)
app.command("decision")(decision_command)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"trustev {__version__}")
        raise typer.Exit()


def _pick_format(json_output: bool, plain_output: bool) -> OutputFormat:
    from trustev.config import load_global_config

    if json_output:
        return OutputFormat.JSON
    if plain_output:
        return OutputFormat.PLAIN
    try:
        return OutputFormat(load_global_config().output.format)
    except ValueError:
        return OutputFormat.AUTO


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit."
    ),
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help="Profile to use."),
    json_output: bool = typer.Option(False, "--json", help="Print entities as JSON."),
    plain_output: bool = typer.Option(False, "--plain", help="Print entities as tab-separated text."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print entities and errors."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Trace requests and token issuance."),
) -> None:
    """Install the output manager and remember the selected profile.

    ``--json``/``--plain`` win over ``output.format`` from the global config.
    ``--verbose`` also turns on the library's ``logging`` output.
    """
    fmt = _pick_format(json_output, plain_output)
    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr
        )
    ctx.ensure_object(dict)
    ctx.obj["profile"] = profile


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except TrustevError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        logger.debug("Unhandled error", exc_info=True)
        error(f"Unexpected {type(exc).__name__}: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
