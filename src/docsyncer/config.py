"""Configuration management for docsyncer."""

import re
import tomllib
from pathlib import Path

import tomli_w
from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigError

LOG_LEVELS = ("debug", "info", "warning", "error")


def _default_attributes() -> dict[str, list[str]]:
    return {
        "step_name": ["step-name", "name"],
        "timeout": ["timeout"],
        "expected_exit_code": ["expected", "exit-code"],
        "skip_on_failure": ["skip-on-failure"],
        "template": ["template"],
        "retry": ["retry", "retries", "retry-count"],
        "retry_interval": ["retry-interval", "retry-delay"],
    }


class InputConfig(BaseModel):
    """Where to look for documentation."""

    directories: list[str] = Field(default_factory=lambda: ["docs"])
    include: list[str] = Field(default_factory=lambda: ["*.md", "*.adoc"])
    exclude: list[str] = Field(default_factory=lambda: ["vendor/**", "node_modules/**"])
    recursive: bool = True


class TagConfig(BaseModel):
    """Which blocks to extract and how their attributes are spelled.

    ``attributes`` maps each logical attribute to the ordered list of keys
    that may carry it; the first key present on a block wins.
    """

    step_tags: list[str] = Field(default_factory=lambda: ["docsyncer-step"])
    attributes: dict[str, list[str]] = Field(default_factory=_default_attributes)

    def aliases(self, name: str) -> list[str]:
        """Alias keys for a logical attribute (empty if unconfigured)."""
        return self.attributes.get(name, [])


class PlaintextConfig(BaseModel):
    """Block delimiters for plain-text documents."""

    block_start: str = r"^\s*@begin\((\S+)(?:\s+(.*))?\)\s*$"
    block_end: str = r"^\s*@end\s*$"


class OutputConfig(BaseModel):
    """Where and how generated test modules are written."""

    directory: str = "tests/e2e/generated"
    file_prefix: str = "test_"
    file_suffix: str = "_generated.py"
    clean_before_generate: bool = True
    default_labels: list[str] = Field(default_factory=lambda: ["documentation"])


class TemplatesConfig(BaseModel):
    """Template lookup. A user ``directory`` shadows the built-in templates."""

    directory: str | None = None
    default: str = "pytest_default"
    allow_override: bool = True


class CommandsConfig(BaseModel):
    """Defaults and policy applied to every extracted command."""

    default_timeout: str = "30s"
    default_expected_exit_code: int = 0
    blocked_patterns: list[str] = Field(
        default_factory=lambda: ["rm -rf /", "mkfs", "dd if=", "format c:", "> /dev/sd"]
    )
    shell: str = "/bin/sh"
    shell_flag: str = "-c"


class LoggingConfig(BaseModel):
    """Log level used when the CLI is not given -v or -q."""

    level: str = "info"


class DocSyncConfig(BaseModel):
    """Root configuration for docsyncer."""

    input: InputConfig = Field(default_factory=InputConfig)
    tags: TagConfig = Field(default_factory=TagConfig)
    plaintext: PlaintextConfig = Field(default_factory=PlaintextConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    templates: TemplatesConfig = Field(default_factory=TemplatesConfig)
    commands: CommandsConfig = Field(default_factory=CommandsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: Path) -> DocSyncConfig:
    """Load config from a TOML file.

    Args:
        config_path: Path to docsyncer.toml

    Returns:
        Loaded configuration, or defaults if the file doesn't exist

    Raises:
        ConfigError: If the file is not valid TOML or has wrongly typed values
    """
    if not config_path.exists():
        return DocSyncConfig()
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(
            "failed to parse config file",
            file=str(config_path),
            cause=e,
            suggestion="check TOML syntax: quoted strings, [section] headers, no tabs in keys",
        ) from e
    try:
        return DocSyncConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError("invalid config values", file=str(config_path), cause=e) from e


def validate_config(config: DocSyncConfig) -> None:
    """Check required fields and values, reporting every problem at once.

    Raises:
        ConfigError: If any check fails
    """
    problems: list[str] = []

    if not config.input.directories:
        problems.append("input.directories must not be empty")
    if not config.input.include:
        problems.append("input.include must not be empty")
    if not config.tags.step_tags:
        problems.append("tags.step_tags must not be empty")
    if not config.output.directory:
        problems.append("output.directory must not be empty")
    if not config.output.file_suffix.endswith(".py"):
        problems.append("output.file_suffix must end with .py")
    if not config.commands.shell:
        problems.append("commands.shell must not be empty")

    for name in ("block_start", "block_end"):
        pattern = getattr(config.plaintext, name)
        try:
            compiled = re.compile(pattern)
        except re.error as e:
            problems.append(f"plaintext.{name} is not a valid regex: {e}")
            continue
        if name == "block_start" and compiled.groups < 1:
            problems.append("plaintext.block_start must capture the tag in group 1")

    if config.logging.level not in LOG_LEVELS:
        problems.append(
            f"logging.level must be one of: {', '.join(LOG_LEVELS)} (got {config.logging.level!r})"
        )

    if problems:
        raise ConfigError(f"validation failed: {'; '.join(problems)}")


def write_config_template(config_path: Path) -> Path:
    """Write the default config as TOML.

    Args:
        config_path: File to write, e.g. docsyncer.toml

    Returns:
        Path to the written config file
    """
    defaults = DocSyncConfig()
    template = defaults.model_dump(exclude_none=True)
    with open(config_path, "wb") as f:
        tomli_w.dump(template, f)
    return config_path
