"""Helpers shared by command implementations."""

import typer
from rich.markup import escape

from ..config import DocSyncConfig, load_config, validate_config
from ..errors import DocSyncError
from ..logging import apply_config_level
from ..output import OutputContext


def report_error(ctx: OutputContext, error: DocSyncError) -> None:
    """Print a docsyncer error with its suggestion, if any."""
    data = {"phase": error.phase, "file": error.file, "line": error.line}
    if error.suggestion:
        data["suggestion"] = error.suggestion
    ctx.error(str(error), data)
    if error.suggestion and not ctx.json_mode:
        ctx.console.print(f"[yellow]Hint: {escape(error.suggestion)}[/yellow]", highlight=False)


def load_validated_config(ctx: OutputContext) -> DocSyncConfig:
    """Load and validate the config named on the command line.

    Exits with status 1 on any configuration error.
    """
    try:
        config = load_config(ctx.config_path)
        validate_config(config)
    except DocSyncError as e:
        report_error(ctx, e)
        raise typer.Exit(1) from None
    if not ctx.level_from_flags:
        apply_config_level(config.logging.level)
    return config
