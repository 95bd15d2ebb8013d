"""Document-side models produced by the extractors.

A parsed document is an ordered list of content units (one per tagged
block) plus the heading outline. Content units are frozen: once an
extractor emits one, nothing downstream may change it.
"""

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class DocumentFormat(str, Enum):
    """Input formats understood by the extractors."""

    MARKDOWN = "markdown"
    ASCIIDOC = "asciidoc"
    PLAINTEXT = "plaintext"


class Heading(BaseModel):
    """A section heading in the source document."""

    model_config = ConfigDict(frozen=True)

    level: int = Field(ge=1, description="Heading depth, 1 is the document title")
    text: str
    line: int = Field(description="1-based source line")


class ContentUnit(BaseModel):
    """One tagged block of document content with its grouping context.

    Attributes:
        tag: The matched block tag (e.g. ``docsyncer-step``).
        body: Raw block text, trailing newlines removed.
        line: 1-based line of the first body line.
        attributes: ``key=value`` pairs from the block's info string, in
            source order. Duplicate keys keep the last value. Read-only.
        heading: Text of the nearest heading above the block.
        test_unit: Name of the enclosing ``test-start`` marker, or empty.
        step_group: Name of the enclosing ``test-step-start`` marker, or empty.
    """

    model_config = ConfigDict(frozen=True)

    tag: str
    body: str
    line: int
    attributes: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    heading: str = ""
    test_unit: str = ""
    step_group: str = ""

    @field_validator("attributes", mode="after")
    @classmethod
    def _freeze_attributes(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    @field_serializer("attributes")
    def _serialize_attributes(self, value: Mapping[str, str]) -> dict[str, str]:
        return dict(value)


class ParsedDocument(BaseModel):
    """Everything an extractor learned about one document."""

    path: str
    format: DocumentFormat
    units: list[ContentUnit] = Field(default_factory=list)
    headings: list[Heading] = Field(default_factory=list)
    metadata: dict[str, str] = Field(
        default_factory=dict, description="Free-form document facts, e.g. last test-start name"
    )
