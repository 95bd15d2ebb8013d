"""Duration literals in the ``1m30s`` / ``500ms`` / ``2h`` style."""

import re

from ..constants import ZERO_TIMEOUTS

_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_NUMBER = r"(?:\d+(?:\.\d*)?|\.\d+)"
_UNIT = r"(?:ns|us|µs|μs|ms|s|m|h)"
_DURATION_RE = re.compile(rf"^[+-]?(?:{_NUMBER}{_UNIT})+$")
_COMPONENT_RE = re.compile(rf"({_NUMBER})({_UNIT})")


def parse_duration(text: str) -> float:
    """Parse a duration literal into seconds.

    Raises:
        ValueError: If ``text`` is not a duration literal
    """
    value = text.strip()
    if value in ("0", "+0", "-0"):
        return 0.0
    if not _DURATION_RE.match(value):
        raise ValueError(f"invalid duration {text!r}")
    seconds = sum(
        float(number) * _UNIT_SECONDS[unit] for number, unit in _COMPONENT_RE.findall(value)
    )
    return -seconds if value.startswith("-") else seconds


def is_zero_duration(text: str) -> bool:
    """True for the "no timeout" sentinels, including literals that parse to zero."""
    if text.strip() in ZERO_TIMEOUTS:
        return True
    try:
        return parse_duration(text) == 0
    except ValueError:
        return False
