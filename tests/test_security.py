"""Tests for the command blocklist."""

import pytest

from docsyncer.config import CommandsConfig
from docsyncer.core.security import check_command
from docsyncer.errors import ConversionError

DEFAULT_BLOCKLIST = CommandsConfig().blocked_patterns


@pytest.mark.parametrize(
    "command",
    [
        "sudo rm -rf / --no-preserve-root",
        "mkfs.ext4 /dev/sdb1",
        "dd if=/dev/zero of=/dev/sda",
        "echo hi > /dev/sda",
    ],
)
def test_blocked_commands(command: str) -> None:
    with pytest.raises(ConversionError) as exc_info:
        check_command(command, DEFAULT_BLOCKLIST, file="doc.md", line=12)
    err = exc_info.value
    assert err.phase == "convert"
    assert err.line == 12
    assert "blocked" in err.message


def test_error_names_the_pattern() -> None:
    with pytest.raises(ConversionError, match="mkfs"):
        check_command("mkfs /dev/sdb", DEFAULT_BLOCKLIST)


@pytest.mark.parametrize("command", ["kubectl get pods", "rm -rf ./build", "ls /dev"])
def test_allowed_commands(command: str) -> None:
    check_command(command, DEFAULT_BLOCKLIST)


def test_empty_patterns_are_ignored() -> None:
    check_command("anything", ["", "never-matches"])


def test_custom_blocklist() -> None:
    with pytest.raises(ConversionError):
        check_command("terraform destroy -auto-approve", ["terraform destroy"])
