"""Test-side models produced by the converter and consumed by the renderer."""

from typing import ClassVar

from pydantic import BaseModel, Field

from .document import ContentUnit


class StepGroup(BaseModel):
    """Content units sharing one ``test-step-start`` name inside a test unit."""

    key: str = Field(description="Marker name, empty when ungrouped")
    units: list[ContentUnit] = Field(default_factory=list)


class TestUnit(BaseModel):
    """Content units sharing one ``test-start`` name, split into step groups."""

    __test__: ClassVar[bool] = False

    key: str = Field(description="Marker name, empty when ungrouped")
    groups: list[StepGroup] = Field(default_factory=list)


class TestStep(BaseModel):
    """A single executable step with its synthesized code fragment."""

    __test__: ClassVar[bool] = False

    name: str
    command: str = Field(description="Raw command text as written in the document")
    code: str = Field(description="Synthesized Python fragment")
    timeout: str = ""
    expected_exit_code: int = 0
    skip_on_failure: bool = False
    retry_count: int = 0
    retry_interval: str = ""
    line: int = 0


class TestSpecification(BaseModel):
    """One test case ready for rendering.

    Specifications from the same document share their describe and context
    labels. ``test_unit`` is the owning test unit key and decides which output
    file the specification lands in.
    """

    __test__: ClassVar[bool] = False

    source_file: str
    source_format: str
    describe: str
    context: str = ""
    test_name: str
    steps: list[TestStep] = Field(default_factory=list)
    template: str | None = None
    test_unit: str = ""
    labels: list[str] = Field(default_factory=list, description="Labels for test selection")
