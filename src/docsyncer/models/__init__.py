"""Pydantic data models for docsyncer.

- Document side: DocumentFormat, Heading, ContentUnit, ParsedDocument
- Grouping: TestUnit, StepGroup
- Test side: TestStep, TestSpecification
"""

from .document import ContentUnit, DocumentFormat, Heading, ParsedDocument
from .spec import StepGroup, TestSpecification, TestStep, TestUnit

__all__ = [
    "ContentUnit",
    "DocumentFormat",
    "Heading",
    "ParsedDocument",
    "StepGroup",
    "TestSpecification",
    "TestStep",
    "TestUnit",
]
