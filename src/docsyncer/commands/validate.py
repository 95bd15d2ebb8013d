"""Validate command implementation."""

from ..output import get_output_context
from .common import load_validated_config


def validate() -> None:
    """Check the configuration file for errors."""
    ctx = get_output_context()
    config = load_validated_config(ctx)
    ctx.success(
        f"Configuration file {ctx.config_path} is valid",
        {"config": config.model_dump()},
    )
