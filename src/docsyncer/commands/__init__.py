"""CLI command implementations for docsyncer.

This package contains the implementation of each CLI command,
separated from the CLI framework setup in cli.py.
"""

from .extract import extract
from .generate import GenerateResult, generate, run_generate
from .init import init
from .templates import list_templates
from .validate import validate

__all__ = [
    "GenerateResult",
    "extract",
    "generate",
    "init",
    "list_templates",
    "run_generate",
    "validate",
]
