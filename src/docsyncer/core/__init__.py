"""Core business logic for docsyncer.

This package contains pure logic with no file or console I/O:
- aggregator: grouping of content units into test units and step groups
- attributes: alias-based attribute resolution and step naming
- security: command blocklist
- durations: duration literal parsing
- synthesizer: command classification and code synthesis
- converter: parsed document to test specifications
- pipeline: per-document processing and output grouping
"""

from .aggregator import (
    build_labels,
    context_label,
    describe_label,
    group_units,
    template_override,
)
from .attributes import (
    StepAttributes,
    auto_step_name,
    resolve_attribute,
    resolve_int,
    resolve_step_attributes,
)
from .converter import build_step, convert_document
from .durations import is_zero_duration, parse_duration
from .pipeline import group_by_output, output_filename, process_document, sanitize_name
from .security import check_command
from .synthesizer import build_tree, classify, is_complex, join_lines, split_arguments, synthesize

__all__ = [
    "StepAttributes",
    "auto_step_name",
    "build_labels",
    "build_step",
    "build_tree",
    "check_command",
    "classify",
    "context_label",
    "convert_document",
    "describe_label",
    "group_by_output",
    "group_units",
    "is_complex",
    "is_zero_duration",
    "join_lines",
    "output_filename",
    "parse_duration",
    "process_document",
    "resolve_attribute",
    "resolve_int",
    "resolve_step_attributes",
    "sanitize_name",
    "split_arguments",
    "synthesize",
    "template_override",
]
