"""Init command implementation."""

from ..config import write_config_template
from ..output import get_output_context


def init() -> None:
    """Write a starter docsyncer.toml in the config location."""
    ctx = get_output_context()
    config_path = ctx.config_path

    if config_path.exists():
        ctx.console.print(f"[yellow]Config already exists:[/yellow] {config_path}")
        return

    if ctx.dry_run:
        ctx.console.print(f"[cyan][DRY RUN][/cyan] Would create config: {config_path}")
        return

    config_path.parent.mkdir(parents=True, exist_ok=True)
    write_config_template(config_path)
    ctx.console.print(f"[green]Created config template:[/green] {config_path}")
