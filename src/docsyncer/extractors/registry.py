"""Extension-to-extractor lookup."""

from ..config import DocSyncConfig
from .asciidoc import AsciiDocExtractor
from .base import Extractor
from .markdown import MarkdownExtractor
from .plaintext import PlaintextExtractor


class ExtractorRegistry:
    """Maps file extensions to extractors, with an optional fallback."""

    def __init__(self, fallback: Extractor | None = None) -> None:
        self._extractors: dict[str, Extractor] = {}
        self.fallback = fallback

    def register(self, extractor: Extractor) -> None:
        for ext in extractor.extensions:
            self._extractors[_normalize(ext)] = extractor

    def for_extension(self, extension: str) -> Extractor | None:
        """Return the extractor for ``extension`` (with or without the dot)."""
        return self._extractors.get(_normalize(extension), self.fallback)

    def extensions(self) -> list[str]:
        return sorted(self._extractors)


def build_registry(config: DocSyncConfig) -> ExtractorRegistry:
    """Registry with every supported format; unknown extensions use plain text."""
    tags = config.tags.step_tags
    plaintext = PlaintextExtractor(
        tags, config.plaintext.block_start, config.plaintext.block_end
    )
    registry = ExtractorRegistry(fallback=plaintext)
    registry.register(MarkdownExtractor(tags))
    registry.register(AsciiDocExtractor(tags))
    registry.register(plaintext)
    return registry


def _normalize(extension: str) -> str:
    return extension.lower().lstrip(".")
