"""Plain-text extractor.

Fallback for formats without native block syntax. Block boundaries come
from two configurable regular expressions: the start pattern captures the
tag (group 1) and an optional whitespace-separated attribute list
(group 2). Markers live in ``#`` or ``//`` line comments, and headings are
lines underlined with ``===`` (level 1) or ``---`` (level 2).
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

_COMMENT_PREFIXES = ("#", "//")


class PlaintextExtractor:
    """Line-scan extractor driven by block delimiter patterns."""

    extensions = (".txt", ".rst", ".rtf")

    def __init__(self, tags: list[str], block_start: str, block_end: str) -> None:
        self.tags = frozenset(tags)
        self.block_start = re.compile(block_start)
        self.block_end = re.compile(block_end)

    def extract(self, content: bytes, path: str = "") -> ParsedDocument:
        lines = decode_document(content, path).splitlines()
        doc = ParsedDocument(path=path, format=DocumentFormat.PLAINTEXT)
        cursor = MarkerCursor(path=path)

        i = 0
        while i < len(lines):
            line = lines[i]
            stripped = line.strip()

            if match := self.block_start.search(line):
                end = self._block_end_index(lines, i, path)
                tag = match.group(1)
                if tag in self.tags:
                    raw = match.group(2) if self.block_start.groups >= 2 else None
                    attributes = parse_attributes(split_info_string(raw or ""))
                    body = "\n".join(lines[i + 1 : end])
                    doc.units.append(cursor.emit(tag, body, i + 2, attributes))
                i = end + 1
                continue

            comment = _comment_body(stripped)
            if comment is not None:
                marker = parse_marker(comment, line=i + 1, path=path)
                if marker is not None:
                    cursor = cursor.apply(marker)
                    if marker.kind is MarkerKind.TEST_START:
                        doc.metadata["test-start"] = marker.name
                    i += 1
                    continue

            level = _underline_level(lines[i + 1]) if i + 1 < len(lines) else 0
            if stripped and level:
                doc.headings.append(Heading(level=level, text=stripped, line=i + 1))
                cursor = cursor.with_heading(stripped)
                i += 2
                continue
            i += 1

        cursor.finish()
        return doc

    def _block_end_index(self, lines: list[str], start: int, path: str) -> int:
        for j in range(start + 1, len(lines)):
            if self.block_end.search(lines[j]):
                return j
        logger.warning(f"{path}:{start + 1}: block is never closed, reading to end of document")
        return len(lines)


def _comment_body(stripped: str) -> str | None:
    for prefix in _COMMENT_PREFIXES:
        if stripped.startswith(prefix):
            return stripped[len(prefix) :]
    return None


def _underline_level(line: str) -> int:
    """Heading level implied by an underline, 0 if ``line`` is not one."""
    stripped = line.strip()
    if len(stripped) < 3:
        return 0
    if set(stripped) == {"="}:
        return 1
    if set(stripped) == {"-"}:
        return 2
    return 0
