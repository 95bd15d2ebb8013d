"""Command blocklist check."""

from ..errors import ConversionError


def check_command(
    command: str, blocked_patterns: list[str], *, file: str = "", line: int = 0
) -> None:
    """Reject ``command`` if it contains any blocked substring.

    Raises:
        ConversionError: Naming the first blocked pattern found
    """
    for pattern in blocked_patterns:
        if pattern and pattern in command:
            raise ConversionError(
                f"command blocked by security policy: contains {pattern!r}",
                file=file,
                line=line,
                suggestion=(
                    "if this is intentional, remove it from commands.blocked_patterns "
                    "in docsyncer.toml"
                ),
            )
