"""Markdown extractor.

Walks the block tree produced by markdown-it. Headings move the heading
cursor, HTML comment blocks carry grouping markers, and fenced code blocks
whose info string starts with a configured tag become content units.
"""

import re

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from ..errors import ExtractionError
from ..models import ContentUnit, DocumentFormat, Heading, ParsedDocument
from .base import (
    MarkerCursor,
    MarkerKind,
    decode_document,
    parse_attributes,
    parse_marker,
    split_info_string,
)

_COMMENT_RE = re.compile(r"<!--(.*?)-->", re.DOTALL)


class MarkdownExtractor:
    """Tree-traversal extractor for CommonMark documents."""

    extensions = (".md", ".markdown")

    def __init__(self, tags: list[str]) -> None:
        self.tags = frozenset(tags)
        self._md = MarkdownIt("commonmark")

    def extract(self, content: bytes, path: str = "") -> ParsedDocument:
        text = decode_document(content, path)
        try:
            root = SyntaxTreeNode(self._md.parse(text))
        except ValueError as e:
            raise ExtractionError("failed to build markdown tree", file=path, cause=e) from e

        doc = ParsedDocument(path=path, format=DocumentFormat.MARKDOWN)
        cursor = self._walk(root, MarkerCursor(path=path), doc)
        cursor.finish()
        return doc

    def _walk(
        self, node: SyntaxTreeNode, cursor: MarkerCursor, doc: ParsedDocument
    ) -> MarkerCursor:
        for child in node.children:
            cursor = self._visit(child, cursor, doc)
        return cursor

    def _visit(
        self, node: SyntaxTreeNode, cursor: MarkerCursor, doc: ParsedDocument
    ) -> MarkerCursor:
        start = node.map[0] + 1 if node.map else 0

        if node.type == "heading":
            text = _inline_text(node).strip()
            doc.headings.append(Heading(level=int(node.tag[1:]), text=text, line=start))
            return cursor.with_heading(text)

        if node.type == "html_block":
            for match in _COMMENT_RE.finditer(node.content):
                line = start + node.content.count("\n", 0, match.start())
                marker = parse_marker(match.group(1), line=line, path=doc.path)
                if marker is None:
                    continue
                cursor = cursor.apply(marker)
                if marker.kind is MarkerKind.TEST_START:
                    doc.metadata["test-start"] = marker.name
            return cursor

        if node.type == "fence":
            unit = self._fence_unit(node, cursor, start)
            if unit is not None:
                doc.units.append(unit)
            return cursor

        if node.type == "inline":
            return cursor
        return self._walk(node, cursor, doc)

    def _fence_unit(
        self, node: SyntaxTreeNode, cursor: MarkerCursor, start: int
    ) -> ContentUnit | None:
        tokens = split_info_string(node.info.strip())
        if not tokens or tokens[0] not in self.tags:
            return None
        return cursor.emit(
            tag=tokens[0],
            body=node.content.rstrip("\n"),
            line=start + 1,
            attributes=parse_attributes(tokens[1:]),
        )


def _inline_text(node: SyntaxTreeNode) -> str:
    """Concatenate the literal text below a heading."""
    parts: list[str] = []
    for child in node.children:
        if child.type in ("text", "code_inline"):
            parts.append(child.content)
        elif child.type == "softbreak":
            parts.append(" ")
        else:
            parts.append(_inline_text(child))
    return "".join(parts)
