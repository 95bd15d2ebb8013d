"""pytest plugin for generated test modules.

Generated tests carry their labels as pytest markers so a run can select
them, e.g. ``pytest -m documentation``. Marker names come from document
headings and are not known in advance, so :func:`labels` registers each one
with the running session before applying it.
"""

from collections.abc import Callable
from typing import TypeVar

import pytest

F = TypeVar("F", bound=Callable[..., object])

_config: pytest.Config | None = None
_previous_config_key = pytest.StashKey["pytest.Config | None"]()


def pytest_configure(config: pytest.Config) -> None:
    global _config
    config.stash[_previous_config_key] = _config
    _config = config
    config.addinivalue_line("markers", "documentation: test generated from documentation")


def pytest_unconfigure(config: pytest.Config) -> None:
    global _config
    _config = config.stash.get(_previous_config_key, None)


def register_marker(name: str) -> None:
    """Declare ``name`` with the active session; a no-op outside pytest."""
    if _config is None:
        return
    registered = {line.split(":")[0].strip() for line in _config.getini("markers")}
    if name not in registered:
        _config.addinivalue_line("markers", f"{name}: docsyncer label")


def labels(*names: str) -> Callable[[F], F]:
    """Decorator applying ``pytest.mark.<name>`` for every label."""
    for name in names:
        register_marker(name)

    def apply(func: F) -> F:
        for name in names:
            func = getattr(pytest.mark, name)(func)
        return func

    return apply
