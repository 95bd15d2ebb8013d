"""Tests for unit grouping and label resolution."""

from docsyncer.core.aggregator import (
    build_labels,
    context_label,
    describe_label,
    group_units,
    resolve_test_name,
    template_override,
)
from docsyncer.models import ContentUnit, DocumentFormat, Heading, ParsedDocument, StepGroup


def unit(body: str, test_unit: str = "", step_group: str = "", **attributes: str) -> ContentUnit:
    return ContentUnit(
        tag="docsyncer-step",
        body=body,
        line=1,
        attributes=attributes,
        test_unit=test_unit,
        step_group=step_group,
    )


def document(*headings: tuple[int, str], path: str = "docs/guide.md") -> ParsedDocument:
    return ParsedDocument(
        path=path,
        format=DocumentFormat.MARKDOWN,
        headings=[
            Heading(level=level, text=text, line=i + 1) for i, (level, text) in enumerate(headings)
        ],
    )


class TestGroupUnits:
    """Tests for group_units."""

    def test_groups_keep_first_occurrence_order(self) -> None:
        units = [
            unit("a", "T2", "g1"),
            unit("b", "T1"),
            unit("c", "T2", "g2"),
            unit("d", "T2", "g1"),
        ]
        result = group_units(units)

        assert [t.key for t in result] == ["T2", "T1"]
        assert [g.key for g in result[0].groups] == ["g1", "g2"]
        assert [u.body for u in result[0].groups[0].units] == ["a", "d"]

    def test_ungrouped_units_share_empty_keys(self) -> None:
        result = group_units([unit("a"), unit("b")])
        assert len(result) == 1
        assert result[0].key == ""
        assert result[0].groups[0].key == ""
        assert len(result[0].groups[0].units) == 2

    def test_every_unit_lands_in_exactly_one_group(self) -> None:
        units = [unit(str(i), f"T{i % 3}", f"g{i % 2}") for i in range(12)]
        grouped = [u for t in group_units(units) for g in t.groups for u in g.units]
        assert sorted(u.body for u in grouped) == sorted(u.body for u in units)

    def test_empty(self) -> None:
        assert group_units([]) == []


class TestLabels:
    """Tests for describe/context labels and test names."""

    def test_describe_prefers_level_one(self) -> None:
        doc = document((2, "Setup"), (1, "Guide"))
        assert describe_label(doc) == "Guide"

    def test_describe_falls_back_to_first_heading(self) -> None:
        assert describe_label(document((3, "Deep"), (2, "Setup"))) == "Deep"

    def test_describe_falls_back_to_file_stem(self) -> None:
        assert describe_label(document()) == "guide"

    def test_context_is_first_level_two(self) -> None:
        assert context_label(document((1, "Guide"), (2, "Install"), (2, "Verify"))) == "Install"
        assert context_label(document((1, "Guide"))) == ""

    def test_test_name_precedence(self) -> None:
        assert resolve_test_name("group", "unit", "file") == "group"
        assert resolve_test_name("", "unit", "file") == "unit"
        assert resolve_test_name("", "", "file") == "file"

    def test_build_labels_dedupes_in_order(self) -> None:
        assert build_labels(["documentation", "e2e"], "Guide") == ["documentation", "e2e", "Guide"]
        assert build_labels(["documentation", "documentation"], "documentation") == [
            "documentation"
        ]
        assert build_labels(["documentation"], "") == ["documentation"]
        assert build_labels([], "Guide") == ["Guide"]


def test_template_override_first_found_wins() -> None:
    group = StepGroup(
        key="g",
        units=[unit("a"), unit("b", template="first"), unit("c", template="second")],
    )
    assert template_override(group, ["template"]) == "first"
    assert template_override(StepGroup(key="", units=[unit("a")]), ["template"]) is None
