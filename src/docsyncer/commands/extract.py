"""Extract command implementation."""

from pathlib import Path

import typer
from rich.markup import escape
from rich.table import Table

from ..errors import DocSyncError
from ..extractors import build_registry
from ..output import get_output_context
from .common import load_validated_config, report_error


def extract(
    file: Path = typer.Argument(..., help="Document to inspect"),
) -> None:
    """Show the tagged blocks found in one document."""
    ctx = get_output_context()
    config = load_validated_config(ctx)

    if not file.is_file():
        ctx.error(f"Document not found: {file}")
        raise typer.Exit(1)

    extractor = build_registry(config).for_extension(file.suffix)
    if extractor is None:
        ctx.error(f"No extractor for {file.suffix!r}")
        raise typer.Exit(1)
    try:
        doc = extractor.extract(file.read_bytes(), str(file))
    except DocSyncError as e:
        report_error(ctx, e)
        raise typer.Exit(1) from None

    if ctx.json_mode:
        ctx.print_json(doc.model_dump(mode="json"))
        return

    table = Table(title=escape(f"{file} ({doc.format.value})"))
    for column in ("Line", "Tag", "Test", "Step group", "Heading", "Attributes"):
        table.add_column(column)
    for unit in doc.units:
        attrs = " ".join(f"{k}={v}" for k, v in unit.attributes.items())
        cells = (str(unit.line), unit.tag, unit.test_unit, unit.step_group, unit.heading, attrs)
        table.add_row(*(escape(cell) for cell in cells))
    ctx.console.print(table)
    ctx.print(f"{len(doc.units)} block(s), {len(doc.headings)} heading(s)")
