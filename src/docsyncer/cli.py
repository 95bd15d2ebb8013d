"""docsyncer CLI: keep documentation and end-to-end tests in sync."""

from pathlib import Path

import typer

from docsyncer import __version__

from .commands import extract, generate, init, list_templates, validate
from .constants import CONFIG_FILENAME
from .logging import configure_logging
from .output import OutputContext, set_output_context


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"docsyncer {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="docsyncer",
    help="Generate pytest end-to-end tests from tagged documentation blocks",
    no_args_is_help=True,
)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v, -vv)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress non-error output",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Debug logging with timestamps and source locations",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in JSON format for automation",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    config: Path = typer.Option(
        Path(CONFIG_FILENAME),
        "--config",
        "-c",
        help="Path to the configuration file",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be written without writing anything",
    ),
) -> None:
    """docsyncer - generate end-to-end tests from documentation."""
    console = configure_logging(
        verbosity=verbose,
        quiet=quiet,
        no_color=no_color,
        debug=debug,
    )
    set_output_context(
        OutputContext(
            console=console,
            json_mode=json_output,
            dry_run=dry_run,
            config_path=config,
            level_from_flags=quiet or debug or verbose > 0,
        )
    )


app.command()(generate)
app.command()(validate)
app.command()(init)
app.command("templates")(list_templates)
app.command()(extract)
