"""Templates command implementation."""

from ..output import get_output_context
from ..services import TemplateRenderer
from .common import load_validated_config


def list_templates() -> None:
    """List the templates available to generated tests."""
    ctx = get_output_context()
    config = load_validated_config(ctx)
    names = TemplateRenderer(config.templates).list_templates()

    if ctx.json_mode:
        ctx.print_json({"templates": names, "default": config.templates.default})
        return
    for name in names:
        marker = " [dim](default)[/dim]" if name == config.templates.default else ""
        ctx.print(f"{name}{marker}")
