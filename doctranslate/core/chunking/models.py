"""
Data models for line-based chunking.
"""

from dataclasses import dataclass
from enum import Enum


class ChunkStatus(Enum):
    """Status of a text chunk in the translation pipeline."""
    CREATED = "created"
    TRANSLATED = "translated"
    FAILED = "failed"


class ChunkingError(Exception):
    """Base exception for chunking operations."""
    pass


class ChunkingConfigurationError(ChunkingError):
    """Invalid chunking configuration."""
    pass


@dataclass
class TextChunk:
    """A contiguous, line-aligned slice of protected text.

    Attributes:
        content: The slice, line endings included
        chunk_index: Position in the document's chunk sequence
        oversized: True when a single line alone exceeds the length limit
    """

    content: str
    chunk_index: int
    oversized: bool = False
    status: ChunkStatus = ChunkStatus.CREATED

    @property
    def character_count(self) -> int:
        return len(self.content)

    @property
    def is_blank(self) -> bool:
        """Whitespace-only chunks are passed through without a provider call."""
        return not self.content.strip()

    def split_whitespace(self):
        """Return (leading, core, trailing) so the core can be sent alone."""
        core = self.content.strip()
        if not core:
            return self.content, "", ""
        start = self.content.index(core)
        return self.content[:start], core, self.content[start + len(core):]
