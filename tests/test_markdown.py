"""Tests for the markdown extractor."""

import pytest

from docsyncer.errors import ExtractionError
from docsyncer.extractors import MarkdownExtractor
from docsyncer.models import DocumentFormat


@pytest.fixture
def extractor() -> MarkdownExtractor:
    return MarkdownExtractor(["docsyncer-step"])


def extract(extractor: MarkdownExtractor, text: str):
    return extractor.extract(text.encode(), "doc.md")


class TestSampleDocument:
    """Tests against tests/data/sample.md."""

    def test_units_in_document_order(self, extractor, sample_markdown) -> None:
        doc = extractor.extract(sample_markdown, "sample.md")
        assert doc.format is DocumentFormat.MARKDOWN
        assert [u.body for u in doc.units] == [
            "helm install demo ./chart",
            "kubectl get pods",
            "curl -sf http://localhost:8080/health",
            "grep missing /etc/hosts",
        ]

    def test_grouping_context(self, extractor, sample_markdown) -> None:
        doc = extractor.extract(sample_markdown, "sample.md")
        assert [(u.test_unit, u.step_group) for u in doc.units] == [
            ("Deploy flow", "install"),
            ("Deploy flow", "install"),
            ("Deploy flow", "verify"),
            ("", ""),
        ]
        assert doc.metadata["test-start"] == "Deploy flow"

    def test_line_numbers_point_at_first_body_line(self, extractor, sample_markdown) -> None:
        doc = extractor.extract(sample_markdown, "sample.md")
        assert [u.line for u in doc.units] == [9, 13, 20, 31]

    def test_attributes(self, extractor, sample_markdown) -> None:
        doc = extractor.extract(sample_markdown, "sample.md")
        assert doc.units[0].attributes == {"name": "Install chart", "timeout": "2m"}
        assert doc.units[1].attributes == {}
        assert doc.units[2].attributes == {"retry": "3", "retry-interval": "5s"}

    def test_headings(self, extractor, sample_markdown) -> None:
        doc = extractor.extract(sample_markdown, "sample.md")
        assert [(h.level, h.text, h.line) for h in doc.headings] == [
            (1, "Sample Service", 1),
            (2, "Deployment", 3),
        ]
        assert all(u.heading == "Deployment" for u in doc.units)


class TestBlocks:
    """Tests for which blocks are extracted."""

    def test_untagged_and_indented_code_ignored(self, extractor) -> None:
        doc = extract(
            extractor,
            "```bash\necho no\n```\n\n    indented code\n\n```\nplain\n```\n",
        )
        assert doc.units == []

    def test_tag_must_be_first_info_token(self, extractor) -> None:
        doc = extract(extractor, "```bash docsyncer-step\necho no\n```\n")
        assert doc.units == []

    def test_custom_tags(self) -> None:
        extractor = MarkdownExtractor(["e2e", "smoke"])
        doc = extract(extractor, "```smoke\nls\n```\n\n```e2e\npwd\n```\n")
        assert [(u.tag, u.body) for u in doc.units] == [("smoke", "ls"), ("e2e", "pwd")]

    def test_nested_blocks_are_found(self, extractor) -> None:
        text = "- item\n\n  ```docsyncer-step\n  ls\n  ```\n\n> ~~~docsyncer-step\n> pwd\n> ~~~\n"
        doc = extract(extractor, text)
        assert [u.body for u in doc.units] == ["ls", "pwd"]

    def test_multiline_body_keeps_inner_newlines(self, extractor) -> None:
        doc = extract(extractor, "```docsyncer-step\nmake build\nmake test\n\n```\n")
        assert doc.units[0].body == "make build\nmake test"

    def test_heading_text_flattens_inline_markup(self, extractor) -> None:
        doc = extract(extractor, "## Using *kubectl* with `apply`\n")
        assert doc.headings[0].text == "Using kubectl with apply"

    def test_empty_document(self, extractor) -> None:
        doc = extract(extractor, "")
        assert doc.units == []
        assert doc.headings == []


class TestMarkers:
    """Tests for marker handling in markdown comments."""

    def test_several_markers_in_one_html_block(self, extractor) -> None:
        text = (
            "<!-- test-start: t -->\n<!-- test-step-start: g -->\n\n"
            "```docsyncer-step\nls\n```\n"
        )
        doc = extract(extractor, text)
        assert (doc.units[0].test_unit, doc.units[0].step_group) == ("t", "g")

    def test_unterminated_markers_close_at_end(self, extractor, caplog) -> None:
        doc = extract(extractor, "<!-- test-start: open -->\n\n```docsyncer-step\nls\n```\n")
        assert doc.units[0].test_unit == "open"
        assert "never closed" in caplog.text

    def test_step_group_after_end_is_ungrouped(self, extractor) -> None:
        text = (
            "<!-- test-step-start: g -->\n\n```docsyncer-step\na\n```\n\n"
            "<!-- test-step-end -->\n\n```docsyncer-step\nb\n```\n"
        )
        doc = extract(extractor, text)
        assert [u.step_group for u in doc.units] == ["g", ""]

    def test_unnamed_start_marker_fails(self, extractor) -> None:
        with pytest.raises(ExtractionError) as exc_info:
            extract(extractor, "# T\n\n<!-- test-start: -->\n")
        assert exc_info.value.line == 3

    def test_regular_comments_ignored(self, extractor) -> None:
        doc = extract(extractor, "<!-- TODO: expand -->\n\n```docsyncer-step\nls\n```\n")
        assert doc.units[0].test_unit == ""

    def test_extraction_is_repeatable(self, extractor, sample_markdown) -> None:
        first = extractor.extract(sample_markdown, "sample.md")
        second = extractor.extract(sample_markdown, "sample.md")
        assert first == second
