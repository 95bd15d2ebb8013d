"""Conversion of a parsed document into test specifications."""

import logging

from ..config import DocSyncConfig
from ..models import ContentUnit, ParsedDocument, TestSpecification, TestStep
from .aggregator import (
    build_labels,
    context_label,
    describe_label,
    document_stem,
    group_units,
    resolve_test_name,
    template_override,
)
from .attributes import resolve_step_attributes
from .security import check_command
from .synthesizer import synthesize

logger = logging.getLogger(__name__)


def build_step(unit: ContentUnit, index: int, config: DocSyncConfig) -> TestStep:
    """Resolve a unit's attributes and synthesize its code fragment."""
    attrs = resolve_step_attributes(unit, index, config.tags, config.commands)
    code = synthesize(
        unit.body,
        expected_exit_code=attrs.expected_exit_code,
        retry_count=attrs.retry_count,
        retry_interval=attrs.retry_interval,
        timeout=attrs.timeout,
        shell=config.commands.shell,
        shell_flag=config.commands.shell_flag,
    )
    return TestStep(
        name=attrs.name,
        command=unit.body,
        code=code,
        timeout=attrs.timeout,
        expected_exit_code=attrs.expected_exit_code,
        skip_on_failure=attrs.skip_on_failure,
        retry_count=attrs.retry_count,
        retry_interval=attrs.retry_interval,
        line=unit.line,
    )


def convert_document(doc: ParsedDocument, config: DocSyncConfig) -> list[TestSpecification]:
    """Turn a document's content units into test specifications.

    Every command is checked against the blocklist before anything is
    built, so a document with one rejected command yields no specifications.

    Raises:
        ConversionError: If a command contains a blocked pattern
    """
    if not doc.units:
        return []

    for unit in doc.units:
        check_command(unit.body, config.commands.blocked_patterns, file=doc.path, line=unit.line)

    describe = describe_label(doc)
    context = context_label(doc)
    fallback_name = document_stem(doc.path)
    template_aliases = config.tags.aliases("template")
    labels = build_labels(config.output.default_labels, describe)

    specs: list[TestSpecification] = []
    for test_unit in group_units(doc.units):
        for group in test_unit.groups:
            steps = [build_step(unit, i, config) for i, unit in enumerate(group.units)]
            specs.append(
                TestSpecification(
                    source_file=doc.path,
                    source_format=doc.format.value,
                    describe=describe,
                    context=context,
                    test_name=resolve_test_name(group.key, test_unit.key, fallback_name),
                    steps=steps,
                    template=template_override(group, template_aliases) or None,
                    test_unit=test_unit.key,
                    labels=labels,
                )
            )

    logger.debug(f"{doc.path}: {len(doc.units)} block(s) -> {len(specs)} test(s)")
    return specs
