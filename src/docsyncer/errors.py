"""Errors raised by docsyncer.

Every error carries the processing phase it came from, the file and 1-based
line it points at (0 when not applicable), a human-readable message and an
optional wrapped cause. Subclasses fix the phase so callers can catch one
stage of the pipeline without inspecting strings.
"""


class DocSyncError(Exception):
    """Base exception for all docsyncer failures."""

    phase = "generate"

    def __init__(
        self,
        message: str,
        *,
        file: str = "",
        line: int = 0,
        cause: BaseException | None = None,
        suggestion: str | None = None,
    ) -> None:
        self.message = message
        self.file = file
        self.line = line
        self.cause = cause
        self.suggestion = suggestion
        super().__init__(str(self))

    def __str__(self) -> str:
        text = f"[{self.phase}]"
        if self.file:
            text += f" {self.file}"
            if self.line > 0:
                text += f":{self.line}"
        text += f": {self.message}"
        if self.cause is not None:
            text += f": {self.cause}"
        return text


class ConfigError(DocSyncError):
    """Raised when the configuration cannot be read or is invalid."""

    phase = "config"


class ScanError(DocSyncError):
    """Raised when an input directory cannot be walked."""

    phase = "scan"


class ExtractionError(DocSyncError):
    """Raised when a document cannot be turned into content units."""

    phase = "parse"


class ConversionError(DocSyncError):
    """Raised when content units cannot be turned into test specifications."""

    phase = "convert"


class TemplateError(DocSyncError):
    """Raised when a template is missing or renders invalid source."""

    phase = "template"


class WriteError(DocSyncError):
    """Raised when generated files cannot be written."""

    phase = "write"
