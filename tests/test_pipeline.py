"""Tests for per-document processing and output grouping."""

import pytest

from docsyncer.config import OutputConfig
from docsyncer.core import group_by_output, output_filename, process_document, sanitize_name
from docsyncer.errors import ExtractionError
from docsyncer.extractors import build_registry
from docsyncer.models import TestSpecification


def spec(source: str, test_unit: str = "", name: str = "t") -> TestSpecification:
    return TestSpecification(
        source_file=source,
        source_format="markdown",
        describe="D",
        test_name=name,
        test_unit=test_unit,
    )


class TestProcessDocument:
    """Tests for process_document."""

    def test_markdown(self, config, sample_markdown) -> None:
        specs = process_document("docs/sample.md", sample_markdown, build_registry(config), config)
        assert len(specs) == 3
        assert all(s.source_file == "docs/sample.md" for s in specs)

    def test_unknown_extension_uses_plaintext(self, config) -> None:
        content = b"@begin(docsyncer-step)\nls\n@end\n"
        specs = process_document("notes.text", content, build_registry(config), config)
        assert specs[0].source_format == "plaintext"

    def test_document_without_blocks(self, config) -> None:
        assert process_document("a.md", b"# Title\n", build_registry(config), config) == []

    def test_extraction_errors_propagate(self, config) -> None:
        with pytest.raises(ExtractionError):
            process_document("a.md", b"<!-- test-start: -->\n", build_registry(config), config)


class TestGroupByOutput:
    """Tests for group_by_output."""

    def test_test_units_from_different_documents_share_a_file(self) -> None:
        specs = [spec("a.md", "Flow"), spec("b.md"), spec("c.md", "Flow"), spec("b.md")]
        groups = group_by_output(specs)
        assert list(groups) == ["Flow", "b.md"]
        assert [s.source_file for s in groups["Flow"]] == ["a.md", "c.md"]
        assert len(groups["b.md"]) == 2


class TestOutputFilename:
    """Tests for output file naming."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Istiod HA ReplicaCount", "istiod_ha_replicacount"),
            ("Deploy  --  flow!", "deploy_flow"),
            ("__x__", "x"),
            ("!!!", ""),
        ],
    )
    def test_sanitize_name(self, name: str, expected: str) -> None:
        assert sanitize_name(name) == expected

    def test_test_unit_file(self) -> None:
        output = OutputConfig()
        name = output_filename("Deploy flow", [spec("a.md", "Deploy flow")], output)
        assert name == "test_deploy_flow_generated.py"

    def test_unnamed_test_unit(self) -> None:
        assert output_filename("!!!", [spec("a.md", "!!!")], OutputConfig()) == (
            "test_unnamed_generated.py"
        )

    def test_source_file(self) -> None:
        output = OutputConfig(file_prefix="e2e_", file_suffix=".py")
        name = output_filename("docs/getting-started.md", [spec("docs/getting-started.md")], output)
        assert name == "e2e_getting_started.py"
