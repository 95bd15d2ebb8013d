"""Format-specific extractors.

Each extractor turns raw document bytes into a ParsedDocument holding the
tagged content units and the heading outline:

- markdown: walks the markdown-it block tree
- asciidoc: scans lines for ``[source,...]`` listing blocks
- plaintext: scans lines with configurable block delimiters
"""

from .asciidoc import AsciiDocExtractor
from .base import (
    Extractor,
    Marker,
    MarkerCursor,
    MarkerKind,
    parse_attributes,
    parse_marker,
    split_info_string,
)
from .markdown import MarkdownExtractor
from .plaintext import PlaintextExtractor
from .registry import ExtractorRegistry, build_registry

__all__ = [
    "AsciiDocExtractor",
    "Extractor",
    "ExtractorRegistry",
    "MarkdownExtractor",
    "Marker",
    "MarkerCursor",
    "MarkerKind",
    "PlaintextExtractor",
    "build_registry",
    "parse_attributes",
    "parse_marker",
    "split_info_string",
]
