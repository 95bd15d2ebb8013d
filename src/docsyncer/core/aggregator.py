"""Grouping of a document's content units into test units and step groups."""

from pathlib import Path

from ..models import ContentUnit, ParsedDocument, StepGroup, TestUnit


def group_units(units: list[ContentUnit]) -> list[TestUnit]:
    """Partition units by test unit key, then by step group key.

    Both levels keep first-occurrence order, and units keep document order
    inside each group. The empty key is an ordinary key meaning "ungrouped".
    """
    by_unit: dict[str, dict[str, list[ContentUnit]]] = {}
    for unit in units:
        groups = by_unit.setdefault(unit.test_unit, {})
        groups.setdefault(unit.step_group, []).append(unit)

    return [
        TestUnit(
            key=unit_key,
            groups=[StepGroup(key=key, units=members) for key, members in groups.items()],
        )
        for unit_key, groups in by_unit.items()
    ]


def document_stem(path: str) -> str:
    """File name without directory or extension."""
    return Path(path).stem


def describe_label(doc: ParsedDocument) -> str:
    """First level-1 heading, else the first heading, else the file name."""
    for heading in doc.headings:
        if heading.level == 1:
            return heading.text
    if doc.headings:
        return doc.headings[0].text
    return document_stem(doc.path)


def context_label(doc: ParsedDocument) -> str:
    """First level-2 heading, or empty."""
    for heading in doc.headings:
        if heading.level == 2:
            return heading.text
    return ""


def resolve_test_name(group_key: str, unit_key: str, fallback: str) -> str:
    return group_key or unit_key or fallback


def build_labels(defaults: list[str], describe: str) -> list[str]:
    """Default labels followed by the describe label, without duplicates."""
    return list(dict.fromkeys([*defaults, describe] if describe else defaults))


def template_override(group: StepGroup, aliases: list[str]) -> str | None:
    """First template attribute found scanning the group's units in order."""
    for unit in group.units:
        for key in aliases:
            if key in unit.attributes:
                return unit.attributes[key]
    return None
