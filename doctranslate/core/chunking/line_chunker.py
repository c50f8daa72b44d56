"""
Line-based text chunking.

Placeholders never contain newlines, so cutting only at line boundaries
guarantees no token is ever split between two provider requests.
"""
from typing import List

from .models import TextChunk, ChunkingConfigurationError


def chunk_text(protected_text: str, max_length: int) -> List[TextChunk]:
    """
    Split text into chunks of whole lines no longer than max_length.

    A single line longer than max_length is never cut and becomes its own
    oversized chunk. Line endings are kept, so "".join() of the chunk contents
    gives back protected_text exactly.

    Args:
        protected_text: Text with placeholders already substituted
        max_length: Maximum characters per chunk (provider request limit)

    Returns:
        Ordered list of TextChunk objects
    """
    if max_length <= 0:
        raise ChunkingConfigurationError(f"max_length must be positive, got {max_length}")

    chunks: List[TextChunk] = []
    buffer = ""

    def flush():
        chunks.append(TextChunk(
            content=buffer,
            chunk_index=len(chunks),
            oversized=len(buffer) > max_length
        ))

    for line in protected_text.splitlines(keepends=True):
        if buffer and len(buffer) + len(line) > max_length:
            flush()
            buffer = line
        else:
            buffer += line

    if buffer:
        flush()

    return chunks
