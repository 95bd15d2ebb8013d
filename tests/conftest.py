"""Shared test fixtures for docsyncer tests."""

import logging
import os
from collections.abc import Generator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from docsyncer.config import DocSyncConfig

pytest_plugins = ["pytester"]

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture(autouse=True)
def _restore_root_log_level() -> Generator[None, None, None]:
    """CLI runs reconfigure the root logger; undo that after each test."""
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def config() -> DocSyncConfig:
    """Default configuration."""
    return DocSyncConfig()


@pytest.fixture
def data_dir() -> Path:
    """Directory holding the sample documents."""
    return DATA_DIR


@pytest.fixture
def sample_markdown() -> bytes:
    return (DATA_DIR / "sample.md").read_bytes()


@pytest.fixture
def project(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a project with a docs directory and a minimal config.

    Changes cwd to the project directory for the duration of the test.
    """
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "sample.md").write_bytes((DATA_DIR / "sample.md").read_bytes())
    (tmp_path / "docsyncer.toml").write_text(
        """[input]
directories = ["docs"]
include = ["*.md", "*.adoc"]

[output]
directory = "generated"
"""
    )

    original_cwd = os.getcwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(original_cwd)
