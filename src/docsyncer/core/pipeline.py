"""Per-document pipeline and output grouping.

Each document is handled on its own: extract, then convert. Results from
many documents are then grouped by output file.
"""

import logging
import re
from pathlib import Path

from ..config import DocSyncConfig, OutputConfig
from ..extractors import ExtractorRegistry
from ..models import TestSpecification
from .converter import convert_document

logger = logging.getLogger(__name__)


def process_document(
    path: str, content: bytes, registry: ExtractorRegistry, config: DocSyncConfig
) -> list[TestSpecification]:
    """Extract and convert one document.

    Returns:
        The document's test specifications, empty when the format is not
        supported or the document has no tagged blocks

    Raises:
        ExtractionError: If the document cannot be extracted
        ConversionError: If a command is rejected
    """
    extension = Path(path).suffix
    extractor = registry.for_extension(extension)
    if extractor is None:
        logger.warning(f"No extractor for '{extension}', skipping {path}")
        return []

    doc = extractor.extract(content, path)
    if not doc.units:
        logger.debug(f"No tagged blocks found in {path}")
        return []

    logger.debug(f"Found {len(doc.units)} tagged block(s) in {path}")
    return convert_document(doc, config)


def output_key(spec: TestSpecification) -> str:
    """Specs of one test unit share a file; ungrouped specs share their source's."""
    return spec.test_unit or spec.source_file


def group_by_output(specs: list[TestSpecification]) -> dict[str, list[TestSpecification]]:
    """Group specifications by output key, in first-occurrence order."""
    groups: dict[str, list[TestSpecification]] = {}
    for spec in specs:
        groups.setdefault(output_key(spec), []).append(spec)
    return groups


def sanitize_name(name: str) -> str:
    """Turn a test unit name into a file name component.

    Example:
        >>> sanitize_name("Istiod HA ReplicaCount")
        'istiod_ha_replicacount'
    """
    name = re.sub(r"[^a-z0-9_]", "", name.lower().replace(" ", "_"))
    return re.sub(r"_+", "_", name).strip("_")


def output_filename(key: str, specs: list[TestSpecification], output: OutputConfig) -> str:
    """File name for an output group: sanitized test unit name or source stem."""
    if specs and specs[0].test_unit:
        name = sanitize_name(key) or "unnamed"
    else:
        name = re.sub(r"[^A-Za-z0-9_]", "_", Path(key).stem)
    return f"{output.file_prefix}{name}{output.file_suffix}"
