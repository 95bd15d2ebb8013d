"""AsciiDoc extractor.

Line scanner for AsciiDoc sources. Markers live in ``//`` line comments,
headings are ``=`` through ``======`` titles, and tagged blocks are listing
blocks introduced by a ``[source,<tag>,key=value,...]`` directive.
"""

import logging
import re

from ..models import DocumentFormat, Heading, ParsedDocument
from .base import (
    MarkerCursor,
    MarkerKind,
    decode_document,
    parse_attributes,
    parse_marker,
    split_info_string,
)

logger = logging.getLogger(__name__)

_SOURCE_RE = re.compile(r"^\[source,([^,\]]+)(?:,(.+))?\]\s*$")
_DELIMITER_RE = re.compile(r"^(-{4,}|\.{4,}|/{4,})$")
_HEADING_RE = re.compile(r"^(={1,6})\s+(.+?)\s*$")


class AsciiDocExtractor:
    """Line-scan extractor for AsciiDoc documents."""

    extensions = (".adoc", ".asciidoc")

    def __init__(self, tags: list[str]) -> None:
        self.tags = frozenset(tags)

    def extract(self, content: bytes, path: str = "") -> ParsedDocument:
        lines = decode_document(content, path).splitlines()
        doc = ParsedDocument(path=path, format=DocumentFormat.ASCIIDOC)
        cursor = MarkerCursor(path=path)
        directive: tuple[str, dict[str, str]] | None = None

        i = 0
        while i < len(lines):
            stripped = lines[i].strip()
            pending, directive = directive, None

            # Delimited blocks are opaque; only tagged listing blocks are kept
            if _DELIMITER_RE.match(stripped):
                end = _closing_delimiter(lines, i, stripped, path)
                if pending is not None and stripped.startswith("-"):
                    tag, attributes = pending
                    body = "\n".join(lines[i + 1 : end])
                    doc.units.append(cursor.emit(tag, body, i + 2, attributes))
                i = end + 1
                continue

            if stripped.startswith("//"):
                marker = parse_marker(stripped[2:], line=i + 1, path=path)
                if marker is not None:
                    cursor = cursor.apply(marker)
                    if marker.kind is MarkerKind.TEST_START:
                        doc.metadata["test-start"] = marker.name
            elif match := _HEADING_RE.match(lines[i]):
                text = match.group(2)
                doc.headings.append(Heading(level=len(match.group(1)), text=text, line=i + 1))
                cursor = cursor.with_heading(text)
            elif match := _SOURCE_RE.match(stripped):
                tag = match.group(1).strip()
                if tag in self.tags:
                    tokens = split_info_string(match.group(2) or "", separators=",")
                    directive = (tag, parse_attributes(tokens))
            i += 1

        cursor.finish()
        return doc


def _closing_delimiter(lines: list[str], start: int, delimiter: str, path: str) -> int:
    """Index of the line closing the block opened at ``start``."""
    for j in range(start + 1, len(lines)):
        if lines[j].strip() == delimiter:
            return j
    logger.warning(f"{path}:{start + 1}: block is never closed, reading to end of document")
    return len(lines)
