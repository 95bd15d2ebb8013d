"""Generate command implementation."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import typer

from ..config import DocSyncConfig
from ..core import group_by_output, output_filename, process_document
from ..errors import DocSyncError, ExtractionError, ScanError, WriteError
from ..extractors import build_registry
from ..models import TestSpecification
from ..output import get_output_context
from ..services import TemplateRenderer, scan_directory
from .common import load_validated_config, report_error

logger = logging.getLogger(__name__)


@dataclass
class GenerateResult:
    """Summary of one generate run."""

    documents: list[Path] = field(default_factory=list)
    specs: list[TestSpecification] = field(default_factory=list)
    outputs: list[Path] = field(default_factory=list)


def discover_documents(config: DocSyncConfig) -> list[Path]:
    """Scan every input directory; unreadable directories are skipped."""
    documents: list[Path] = []
    for directory in config.input.directories:
        logger.debug(f"Scanning directory {directory}")
        try:
            documents.extend(
                scan_directory(
                    Path(directory),
                    config.input.include,
                    config.input.exclude,
                    recursive=config.input.recursive,
                )
            )
        except ScanError as e:
            logger.warning(f"Skipping {directory}: {e}")
    return documents


def clean_output_dir(config: DocSyncConfig) -> list[Path]:
    """Delete files left by a previous run (matching prefix and suffix)."""
    output_dir = Path(config.output.directory)
    if not output_dir.is_dir():
        return []
    pattern = f"{config.output.file_prefix}*{config.output.file_suffix}"
    removed = []
    for path in sorted(output_dir.glob(pattern)):
        try:
            path.unlink()
        except OSError as e:
            raise WriteError("failed to clean output directory", file=str(path), cause=e) from e
        removed.append(path)
    logger.debug(f"Removed {len(removed)} previously generated file(s)")
    return removed


def run_generate(config: DocSyncConfig, *, dry_run: bool = False) -> GenerateResult:
    """Run the whole pipeline: scan, extract, convert, render, write.

    Args:
        config: Validated configuration
        dry_run: Render everything but write nothing

    Returns:
        What was processed and written

    Raises:
        DocSyncError: On the first extraction, conversion, template or write failure
    """
    result = GenerateResult()
    output_dir = Path(config.output.directory)

    if config.output.clean_before_generate and not dry_run:
        clean_output_dir(config)

    result.documents = discover_documents(config)
    if not result.documents:
        logger.warning("No documentation files found")
        return result
    logger.info(f"Found {len(result.documents)} documentation file(s)")

    registry = build_registry(config)
    for path in result.documents:
        try:
            content = path.read_bytes()
        except OSError as e:
            raise ExtractionError("failed to read file", file=str(path), cause=e) from e
        result.specs.extend(process_document(str(path), content, registry, config))

    if not result.specs:
        logger.warning("No tests generated from documentation")
        return result
    logger.info(f"Generated {len(result.specs)} test specification(s)")

    renderer = TemplateRenderer(config.templates)
    if not dry_run:
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WriteError(
                "failed to create output directory", file=str(output_dir), cause=e
            ) from e

    used: set[str] = set()
    for key, specs in group_by_output(result.specs).items():
        rendered = renderer.render(specs)
        name = _unique_name(output_filename(key, specs, config.output), config, used)
        target = output_dir / name

        if dry_run:
            logger.info(f"[DRY RUN] Would write {target}")
            logger.debug(rendered)
        else:
            logger.info(f"Writing {target}")
            try:
                target.write_text(rendered)
            except OSError as e:
                raise WriteError("failed to write output file", file=str(target), cause=e) from e
        result.outputs.append(target)

    return result


def _unique_name(name: str, config: DocSyncConfig, used: set[str]) -> str:
    """Number colliding file names, keeping the configured suffix."""
    suffix = config.output.file_suffix
    base = name[: -len(suffix)] if suffix else name
    candidate, n = name, 2
    while candidate in used:
        candidate = f"{base}_{n}{suffix}"
        n += 1
    used.add(candidate)
    return candidate


def generate() -> None:
    """Generate test modules from documentation."""
    ctx = get_output_context()
    config = load_validated_config(ctx)

    try:
        result = run_generate(config, dry_run=ctx.dry_run)
    except DocSyncError as e:
        report_error(ctx, e)
        raise typer.Exit(1) from None

    verb = "Would write" if ctx.dry_run else "Wrote"
    ctx.result(
        {
            "documents": [str(p) for p in result.documents],
            "tests": len(result.specs),
            "outputs": [str(p) for p in result.outputs],
            "dry_run": ctx.dry_run,
        },
        message=f"{verb} {len(result.outputs)} file(s) with {len(result.specs)} test(s) "
        f"from {len(result.documents)} document(s)",
    )
