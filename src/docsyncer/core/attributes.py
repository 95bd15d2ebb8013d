"""Attribute resolution for content units.

Logical step properties (name, timeout, exit code, ...) can be spelled with
several keys in a document. Each logical attribute has an ordered alias list
in the config; the first alias present on a unit wins.

Numeric attributes that do not parse are treated as absent and fall back to
their default. A typo in ``retry=three`` therefore disables retries instead
of failing the whole document.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from ..config import CommandsConfig, TagConfig
from ..constants import DEFAULT_RETRY_INTERVAL, KNOWN_COMMAND_VERBS, MAX_STEP_NAME_LENGTH
from ..models import ContentUnit


@dataclass(frozen=True)
class StepAttributes:
    """Resolved step properties for one content unit."""

    name: str
    timeout: str
    expected_exit_code: int
    skip_on_failure: bool
    retry_count: int
    retry_interval: str


def resolve_attribute(attributes: Mapping[str, str], aliases: list[str]) -> str:
    """Return the value of the first alias present, else an empty string."""
    for key in aliases:
        if key in attributes:
            return attributes[key]
    return ""


def resolve_int(attributes: Mapping[str, str], aliases: list[str], default: int) -> int:
    """Resolve an integer attribute, falling back to ``default`` when absent or invalid."""
    raw = resolve_attribute(attributes, aliases).strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def resolve_bool(attributes: Mapping[str, str], aliases: list[str]) -> bool:
    return resolve_attribute(attributes, aliases).strip().lower() in ("true", "yes")


def auto_step_name(command: str, index: int) -> str:
    """Derive a step name from the first line of a command.

    Well-known tools keep their sub-command (``kubectl apply``); anything else
    uses the first line, cut to a fixed length. Empty commands get a
    positional placeholder.
    """
    lines = command.strip().splitlines()
    first = lines[0].strip() if lines else ""
    parts = first.split()
    if not parts:
        return f"Step {index + 1}"
    if parts[0] in KNOWN_COMMAND_VERBS and len(parts) > 1:
        return f"{parts[0]} {parts[1]}"
    return first[:MAX_STEP_NAME_LENGTH]


def resolve_step_attributes(
    unit: ContentUnit, index: int, tags: TagConfig, commands: CommandsConfig
) -> StepAttributes:
    """Resolve every logical step property of ``unit``.

    Args:
        unit: The content unit
        index: Position of the unit within its step group, for placeholder names
        tags: Alias tables
        commands: Configured defaults

    Returns:
        The resolved attributes
    """
    attrs = unit.attributes

    name = resolve_attribute(attrs, tags.aliases("step_name")) or auto_step_name(unit.body, index)
    timeout = resolve_attribute(attrs, tags.aliases("timeout")) or commands.default_timeout
    expected = resolve_int(
        attrs, tags.aliases("expected_exit_code"), commands.default_expected_exit_code
    )
    retry_count = max(resolve_int(attrs, tags.aliases("retry"), 0), 0)

    retry_interval = resolve_attribute(attrs, tags.aliases("retry_interval"))
    if not retry_interval and retry_count > 0:
        retry_interval = DEFAULT_RETRY_INTERVAL

    return StepAttributes(
        name=name,
        timeout=timeout,
        expected_exit_code=expected,
        skip_on_failure=resolve_bool(attrs, tags.aliases("skip_on_failure")),
        retry_count=retry_count,
        retry_interval=retry_interval,
    )
