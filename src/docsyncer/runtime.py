"""Helpers imported by generated test modules.

Generated steps call :func:`run_command` and, when a step has a timeout,
wrap their invocations in :func:`deadline_scope`. Errors are returned
rather than raised so that a step can decide which failures it accepts.
"""

import subprocess
import time
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass

from .core.durations import parse_duration

__all__ = ["Deadline", "deadline_scope", "parse_duration", "run_command"]


@dataclass(frozen=True)
class Deadline:
    """A point in monotonic time shared by several invocations."""

    expires_at: float

    def remaining(self) -> float:
        """Seconds left, never negative."""
        return max(self.expires_at - time.monotonic(), 0.0)


@contextmanager
def deadline_scope(seconds: float) -> Iterator[Deadline]:
    """Establish a deadline ``seconds`` from now for the enclosed invocations."""
    yield Deadline(time.monotonic() + seconds)


def run_command(
    argv: Sequence[str], deadline: Deadline | None = None
) -> tuple[str, Exception | None]:
    """Run ``argv`` and return its combined output and error.

    Args:
        argv: Program and arguments, run without a shell
        deadline: Optional deadline; the process is killed when it expires

    Returns:
        Tuple of (stdout and stderr interleaved, error). The error is None on
        exit code 0, ``CalledProcessError`` on another exit code,
        ``TimeoutExpired`` when the deadline passes and ``OSError`` when the
        program cannot be started.
    """
    timeout = deadline.remaining() if deadline is not None else None
    if timeout is not None and timeout <= 0:
        return "", subprocess.TimeoutExpired(list(argv), 0)
    try:
        result = subprocess.run(
            list(argv),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        output = e.output.decode(errors="replace") if isinstance(e.output, bytes) else e.output
        return output or "", e
    except OSError as e:
        return str(e), e
    if result.returncode != 0:
        error = subprocess.CalledProcessError(result.returncode, list(argv), output=result.stdout)
        return result.stdout, error
    return result.stdout, None
