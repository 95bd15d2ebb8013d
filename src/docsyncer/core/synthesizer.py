"""Command classification and code synthesis.

A command becomes a short Python fragment built from four stages, always
composed in this order:

1. scaffold: run the command, assert it did not fail
2. exit check: when a non-zero exit code is expected, accept exactly that code
3. retry: re-run a failing command, pausing between attempts
4. deadline: bound everything above by one timeout

Each stage wraps or adjusts a node of a small tree; the tree is rendered to
text once at the end. The generated code relies on ``subprocess``, ``time``
and the helpers in :mod:`docsyncer.runtime`.
"""

from dataclasses import dataclass, replace
from typing import Protocol

from ..constants import DEFAULT_RETRY_INTERVAL
from .durations import is_zero_duration, parse_duration

INDENT = "    "

# Shell metacharacters that make a command need a shell
COMPLEX_TOKENS = ("|", "&&", "||", ";", ">>", ">", "<", "$(", "`", "&")


def join_lines(command: str) -> str:
    """Collapse a multi-line command into one line chained with ``&&``."""
    lines = [line.strip() for line in command.strip().splitlines()]
    return " && ".join(line for line in lines if line)


def is_complex(command: str) -> bool:
    """True if ``command`` needs a shell (pipes, redirects, chaining, ...)."""
    return any(token in command for token in COMPLEX_TOKENS)


def split_arguments(command: str) -> list[str]:
    """Split on unquoted whitespace, removing single and double quotes."""
    args: list[str] = []
    current: list[str] = []
    quote = ""
    in_token = False
    for char in command:
        if quote:
            if char == quote:
                quote = ""
            else:
                current.append(char)
        elif char in "\"'":
            quote = char
            in_token = True
        elif char in " \t":
            if in_token:
                args.append("".join(current))
                current = []
                in_token = False
        else:
            current.append(char)
            in_token = True
    if in_token:
        args.append("".join(current))
    return args


def duration_expression(literal: str) -> str:
    """Python expression for a duration in seconds.

    Literals that do not parse are left for the generated test to parse, so
    a bad duration fails when the test runs rather than during generation.
    """
    try:
        return repr(parse_duration(literal))
    except ValueError:
        return f"parse_duration({literal!r})"


@dataclass(frozen=True)
class Invocation:
    """The argument vector that runs a command."""

    argv: tuple[str, ...]
    shell: bool = False

    def render(self, deadline: str | None) -> str:
        args = ", ".join(repr(arg) for arg in self.argv)
        if deadline:
            return f"run_command([{args}], deadline={deadline})"
        return f"run_command([{args}])"


def classify(command: str, shell: str = "/bin/sh", shell_flag: str = "-c") -> Invocation:
    """Pick shell indirection or direct execution for a one-line command."""
    if is_complex(command):
        return Invocation(argv=(shell, shell_flag, command), shell=True)
    return Invocation(argv=tuple(split_arguments(command)))


class Check(Protocol):
    """Assertion applied to the ``(output, error)`` pair of an invocation."""

    def success(self, err: str) -> str: ...

    def render(self, output: str, err: str) -> list[str]: ...


@dataclass(frozen=True)
class NoErrorCheck:
    def success(self, err: str) -> str:
        return f"{err} is None"

    def render(self, output: str, err: str) -> list[str]:
        return [f"assert {err} is None, {output}"]


@dataclass(frozen=True)
class ExitCodeCheck:
    """Accept a specific process exit code; any other error still fails."""

    expected: int

    def success(self, err: str) -> str:
        return (
            f"{err} is None or (isinstance({err}, subprocess.CalledProcessError) "
            f"and {err}.returncode == {self.expected})"
        )

    def render(self, output: str, err: str) -> list[str]:
        return [
            f"if isinstance({err}, subprocess.CalledProcessError):",
            f"{INDENT}assert {err}.returncode == {self.expected}, {output}",
            "else:",
            f"{INDENT}assert {err} is None, {output}",
        ]


class Node(Protocol):
    def render(self, deadline: str | None) -> list[str]: ...


@dataclass(frozen=True)
class Scaffold:
    invocation: Invocation
    check: Check = NoErrorCheck()

    def render(self, deadline: str | None) -> list[str]:
        return [
            f"output, err = {self.invocation.render(deadline)}",
            *self.check.render("output", "err"),
        ]


@dataclass(frozen=True)
class RetryLoop:
    """Up to ``attempts`` runs; the assertion is made once, after the loop."""

    scaffold: Scaffold
    attempts: int
    interval: str

    def render(self, deadline: str | None) -> list[str]:
        check = self.scaffold.check
        return [
            f"for attempt in range({self.attempts}):",
            f"{INDENT}last_output, last_err = {self.scaffold.invocation.render(deadline)}",
            f"{INDENT}if {check.success('last_err')}:",
            f"{INDENT * 2}break",
            f"{INDENT}if attempt < {self.attempts - 1}:",
            f"{INDENT * 2}time.sleep({self.interval})",
            *check.render("last_output", "last_err"),
        ]


@dataclass(frozen=True)
class DeadlineScope:
    """One deadline shared by every invocation inside ``body``."""

    body: Node
    seconds: str

    def render(self, deadline: str | None) -> list[str]:
        lines = [f"with deadline_scope({self.seconds}) as deadline:"]
        lines.extend(INDENT + line for line in self.body.render("deadline"))
        return lines


def build_tree(
    command: str,
    *,
    expected_exit_code: int = 0,
    retry_count: int = 0,
    retry_interval: str = "",
    timeout: str = "",
    shell: str = "/bin/sh",
    shell_flag: str = "-c",
) -> Node:
    """Compose the scaffold, exit check, retry and deadline stages."""
    scaffold = Scaffold(classify(join_lines(command), shell, shell_flag))

    if expected_exit_code != 0:
        scaffold = replace(scaffold, check=ExitCodeCheck(expected_exit_code))

    node: Node = scaffold
    if retry_count > 0:
        interval = duration_expression(retry_interval or DEFAULT_RETRY_INTERVAL)
        node = RetryLoop(scaffold, attempts=retry_count + 1, interval=interval)

    if not is_zero_duration(timeout):
        node = DeadlineScope(node, seconds=duration_expression(timeout))

    return node


def synthesize(
    command: str,
    *,
    expected_exit_code: int = 0,
    retry_count: int = 0,
    retry_interval: str = "",
    timeout: str = "",
    shell: str = "/bin/sh",
    shell_flag: str = "-c",
) -> str:
    """Generate the Python fragment that runs ``command``.

    Commands with no text produce ``pass``.
    """
    if not join_lines(command):
        return "pass"
    tree = build_tree(
        command,
        expected_exit_code=expected_exit_code,
        retry_count=retry_count,
        retry_interval=retry_interval,
        timeout=timeout,
        shell=shell,
        shell_flag=shell_flag,
    )
    return "\n".join(tree.render(None))
