"""Pieces shared by every format extractor.

The marker grammar is the same in every format once the comment syntax has
been peeled off:

    test-start: <name>
    test-end
    test-step-start: <name>
    test-step-end

Traversal state lives in an immutable :class:`MarkerCursor` that each
extractor threads through its walk, so a walk never shares state with
another walk.
"""

import logging
import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Protocol

from ..errors import ExtractionError
from ..models import ContentUnit, ParsedDocument

logger = logging.getLogger(__name__)

_START_RE = re.compile(r"^(test-step-start|test-start):(.*)$", re.DOTALL)
_END_RE = re.compile(r"^(test-step-end|test-end)\b")

_QUOTES = "\"'"


class MarkerKind(str, Enum):
    """The four grouping directives."""

    TEST_START = "test-start"
    TEST_END = "test-end"
    STEP_START = "test-step-start"
    STEP_END = "test-step-end"


@dataclass(frozen=True)
class Marker:
    """A grouping directive found in a document comment."""

    kind: MarkerKind
    name: str = ""
    line: int = 0


def parse_marker(comment: str, *, line: int = 0, path: str = "") -> Marker | None:
    """Parse the inside of a comment as a grouping marker.

    Args:
        comment: Comment text with the format's comment delimiters removed
        line: 1-based line of the comment, used in errors and warnings
        path: Document path, used in errors

    Returns:
        The marker, or None when the comment is not a marker

    Raises:
        ExtractionError: If a start marker has no name
    """
    text = comment.strip()
    match = _START_RE.match(text)
    if match:
        kind = MarkerKind(match.group(1))
        name = match.group(2).strip()
        if not name:
            raise ExtractionError(
                f"{kind.value} marker has no name",
                file=path,
                line=line,
                suggestion=f"write the marker as '{kind.value}: <name>'",
            )
        return Marker(kind=kind, name=name, line=line)
    match = _END_RE.match(text)
    if match:
        return Marker(kind=MarkerKind(match.group(1)), line=line)
    return None


@dataclass(frozen=True)
class MarkerCursor:
    """Heading and grouping context at one point of a document walk.

    ``unit_line`` and ``group_line`` remember where the open test unit and
    step group started, so unterminated markers can be reported.
    """

    path: str = ""
    heading: str = ""
    test_unit: str = ""
    step_group: str = ""
    unit_line: int = 0
    group_line: int = 0

    def with_heading(self, text: str) -> "MarkerCursor":
        return replace(self, heading=text)

    def apply(self, marker: Marker) -> "MarkerCursor":
        """Return the cursor after ``marker``.

        A start marker replaces any open group of the same kind, ``test-end``
        also closes an open step group, and an end marker with nothing open
        changes nothing.
        """
        if marker.kind is MarkerKind.TEST_START:
            if self.test_unit:
                logger.warning(
                    f"{self.path}:{marker.line}: test-start '{marker.name}' replaces "
                    f"unterminated test '{self.test_unit}' from line {self.unit_line}"
                )
            return replace(self, test_unit=marker.name, unit_line=marker.line)
        if marker.kind is MarkerKind.STEP_START:
            if self.step_group:
                logger.warning(
                    f"{self.path}:{marker.line}: test-step-start '{marker.name}' replaces "
                    f"unterminated step group '{self.step_group}' from line {self.group_line}"
                )
            return replace(self, step_group=marker.name, group_line=marker.line)
        if marker.kind is MarkerKind.TEST_END:
            if self.step_group:
                logger.warning(
                    f"{self.path}:{marker.line}: test-end closes unterminated step group "
                    f"'{self.step_group}' from line {self.group_line}"
                )
            return replace(self, test_unit="", step_group="", unit_line=0, group_line=0)
        return replace(self, step_group="", group_line=0)

    def finish(self) -> None:
        """Report groups still open at end of document; they close implicitly."""
        if self.step_group:
            logger.warning(
                f"{self.path}:{self.group_line}: step group '{self.step_group}' "
                "is never closed, closing at end of document"
            )
        if self.test_unit:
            logger.warning(
                f"{self.path}:{self.unit_line}: test '{self.test_unit}' "
                "is never closed, closing at end of document"
            )

    def emit(
        self, tag: str, body: str, line: int, attributes: dict[str, str]
    ) -> ContentUnit:
        """Snapshot the cursor into a content unit."""
        return ContentUnit(
            tag=tag,
            body=body,
            line=line,
            attributes=attributes,
            heading=self.heading,
            test_unit=self.test_unit,
            step_group=self.step_group,
        )


def split_info_string(info: str, separators: str = " \t") -> list[str]:
    """Split an info string on unquoted separators.

    Quoted substrings are kept verbatim, quotes included, so that
    ``name="a b"`` survives as one token.
    """
    parts: list[str] = []
    current: list[str] = []
    quote = ""
    for char in info:
        if quote:
            current.append(char)
            if char == quote:
                quote = ""
        elif char in _QUOTES:
            quote = char
            current.append(char)
        elif char in separators:
            if current:
                parts.append("".join(current))
                current = []
        else:
            current.append(char)
    if current:
        parts.append("".join(current))
    return parts


def parse_attributes(tokens: list[str]) -> dict[str, str]:
    """Build the attribute map from ``key=value`` tokens.

    Tokens without ``=`` (or starting with it) are ignored. Surrounding quote
    characters are trimmed from values; later duplicates win.
    """
    attributes: dict[str, str] = {}
    for token in tokens:
        key, sep, value = token.strip().partition("=")
        key = key.strip()
        if not sep or not key:
            continue
        attributes[key] = value.strip().strip(_QUOTES)
    return attributes


def decode_document(content: bytes, path: str) -> str:
    """Decode document bytes as UTF-8, dropping a byte-order mark."""
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ExtractionError("document is not valid UTF-8", file=path, cause=e) from e


class Extractor(Protocol):
    """Capability shared by every format variant."""

    extensions: tuple[str, ...]

    def extract(self, content: bytes, path: str = "") -> ParsedDocument:
        """Extract content units and headings from raw document bytes."""
        ...
