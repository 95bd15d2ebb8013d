"""Documentation file discovery."""

import os
import re
from functools import lru_cache
from pathlib import Path

from ..errors import ScanError


@lru_cache(maxsize=256)
def _glob_regex(pattern: str) -> re.Pattern[str]:
    """Compile a glob where ``*`` stays within one path segment and ``**`` spans many."""
    parts: list[str] = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**/", i):
            parts.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            parts.append("[^/]")
            i += 1
        elif pattern[i] == "[" and "]" in pattern[i + 1 :]:
            end = pattern.index("]", i + 1)
            body = pattern[i + 1 : end]
            if body.startswith("!"):
                body = "^" + body[1:]
            parts.append(f"[{body}]")
            i = end + 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    return re.compile("^" + "".join(parts) + "$")


def match_glob(rel_path: str, pattern: str) -> bool:
    """Match a relative POSIX path against a glob.

    Patterns without a slash also match the file's base name, so ``*.md``
    finds markdown files at any depth.
    """
    regex = _glob_regex(pattern)
    if regex.match(rel_path):
        return True
    return "/" not in pattern and bool(regex.match(rel_path.rsplit("/", 1)[-1]))


def scan_directory(
    root: Path, include: list[str], exclude: list[str], recursive: bool = True
) -> list[Path]:
    """Find documentation files below ``root``.

    Args:
        root: Directory to walk
        include: Globs a file must match (any of them)
        exclude: Globs that remove files and prune whole directories
        recursive: Descend into subdirectories

    Returns:
        Matching file paths, sorted

    Raises:
        ScanError: If root is not a readable directory
    """
    if not root.is_dir():
        raise ScanError("input directory does not exist", file=str(root))

    def on_error(e: OSError) -> None:
        raise ScanError("failed to scan directory", file=str(root), cause=e) from e

    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        current = Path(dirpath)
        rel_dir = current.relative_to(root).as_posix()
        if not recursive:
            dirnames.clear()
        else:
            dirnames[:] = [d for d in dirnames if not _is_excluded_dir(_join(rel_dir, d), exclude)]
        for name in filenames:
            rel = _join(rel_dir, name)
            if any(match_glob(rel, pattern) for pattern in exclude):
                continue
            if any(match_glob(rel, pattern) for pattern in include):
                files.append(current / name)

    return sorted(files, key=str)


def _join(rel_dir: str, name: str) -> str:
    return name if rel_dir == "." else f"{rel_dir}/{name}"


def _is_excluded_dir(rel_dir: str, exclude: list[str]) -> bool:
    return any(
        match_glob(rel_dir, pattern) or match_glob(rel_dir + "/", pattern) for pattern in exclude
    )
