"""Tests for marker parsing and the shared extractor helpers."""

import logging

import pytest

from docsyncer.errors import ExtractionError
from docsyncer.extractors.base import (
    Marker,
    MarkerCursor,
    MarkerKind,
    decode_document,
    parse_attributes,
    parse_marker,
    split_info_string,
)


class TestParseMarker:
    """Tests for parse_marker."""

    def test_start_markers_carry_trimmed_name(self) -> None:
        marker = parse_marker(" test-start:   Deploy flow  ", line=4)
        assert marker == Marker(kind=MarkerKind.TEST_START, name="Deploy flow", line=4)

        step = parse_marker("test-step-start: install")
        assert step is not None
        assert step.kind is MarkerKind.STEP_START
        assert step.name == "install"

    def test_end_markers(self) -> None:
        assert parse_marker("test-end").kind is MarkerKind.TEST_END
        assert parse_marker(" test-step-end ").kind is MarkerKind.STEP_END

    def test_ordinary_comment_is_not_a_marker(self) -> None:
        assert parse_marker("just a note") is None
        assert parse_marker("test-started yesterday") is None
        assert parse_marker("") is None

    @pytest.mark.parametrize("comment", ["test-start:", "test-start:   ", "test-step-start:"])
    def test_start_without_name_fails(self, comment: str) -> None:
        with pytest.raises(ExtractionError) as exc_info:
            parse_marker(comment, line=7, path="doc.md")
        assert exc_info.value.line == 7
        assert exc_info.value.file == "doc.md"
        assert exc_info.value.suggestion


class TestMarkerCursor:
    """Tests for cursor transitions."""

    def test_start_and_end_of_test_unit(self) -> None:
        cursor = MarkerCursor().apply(Marker(MarkerKind.TEST_START, "a", 1))
        assert cursor.test_unit == "a"
        cursor = cursor.apply(Marker(MarkerKind.TEST_END, line=5))
        assert cursor.test_unit == ""

    def test_step_end_keeps_test_unit(self) -> None:
        cursor = (
            MarkerCursor()
            .apply(Marker(MarkerKind.TEST_START, "a", 1))
            .apply(Marker(MarkerKind.STEP_START, "s", 2))
            .apply(Marker(MarkerKind.STEP_END, line=3))
        )
        assert cursor.test_unit == "a"
        assert cursor.step_group == ""

    def test_apply_does_not_mutate(self) -> None:
        cursor = MarkerCursor()
        cursor.apply(Marker(MarkerKind.TEST_START, "a", 1))
        assert cursor.test_unit == ""

    def test_restart_replaces_open_unit_with_warning(self, caplog) -> None:
        cursor = MarkerCursor(path="doc.md").apply(Marker(MarkerKind.TEST_START, "first", 1))
        with caplog.at_level(logging.WARNING):
            cursor = cursor.apply(Marker(MarkerKind.TEST_START, "second", 9))
        assert cursor.test_unit == "second"
        assert "first" in caplog.text

    def test_test_end_closes_open_step_group(self, caplog) -> None:
        cursor = (
            MarkerCursor()
            .apply(Marker(MarkerKind.TEST_START, "a", 1))
            .apply(Marker(MarkerKind.STEP_START, "s", 2))
        )
        with caplog.at_level(logging.WARNING):
            cursor = cursor.apply(Marker(MarkerKind.TEST_END, line=3))
        assert cursor.step_group == ""
        assert "'s'" in caplog.text

    def test_stray_end_is_ignored(self) -> None:
        cursor = MarkerCursor(heading="h").apply(Marker(MarkerKind.STEP_END, line=1))
        assert cursor == MarkerCursor(heading="h")

    def test_finish_reports_unclosed_groups(self, caplog) -> None:
        cursor = MarkerCursor(path="doc.md").apply(Marker(MarkerKind.TEST_START, "open", 3))
        with caplog.at_level(logging.WARNING):
            cursor.finish()
        assert "never closed" in caplog.text

    def test_emit_snapshots_context(self) -> None:
        cursor = MarkerCursor(heading="Install", test_unit="t", step_group="g")
        unit = cursor.emit("docsyncer-step", "ls", 12, {"timeout": "5s"})
        assert unit.heading == "Install"
        assert unit.test_unit == "t"
        assert unit.step_group == "g"
        assert unit.line == 12


class TestInfoStrings:
    """Tests for info string splitting and attribute parsing."""

    def test_quoted_values_stay_together(self) -> None:
        tokens = split_info_string('docsyncer-step name="Install chart" timeout=2m')
        assert tokens == ["docsyncer-step", 'name="Install chart"', "timeout=2m"]

    def test_custom_separator(self) -> None:
        tokens = split_info_string("name='a, b',retry=3", separators=",")
        assert tokens == ["name='a, b'", "retry=3"]

    def test_attributes_strip_quotes_and_skip_bare_tokens(self) -> None:
        attrs = parse_attributes(['name="Install chart"', "flag", "=x", "timeout=2m"])
        assert attrs == {"name": "Install chart", "timeout": "2m"}

    def test_duplicate_key_keeps_last(self) -> None:
        assert parse_attributes(["retry=1", "retry=3"]) == {"retry": "3"}

    def test_value_may_contain_equals(self) -> None:
        assert parse_attributes(["env=A=B"]) == {"env": "A=B"}


class TestDecodeDocument:
    def test_strips_byte_order_mark(self) -> None:
        assert decode_document("\ufeff# Title".encode(), "x.md") == "# Title"

    def test_invalid_utf8_fails(self) -> None:
        with pytest.raises(ExtractionError):
            decode_document(b"\xff\xfe\xfa", "x.md")
