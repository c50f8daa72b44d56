"""
Chunking module for text processing.

Splits protected text into provider-sized chunks on line boundaries.
"""
from doctranslate.core.chunking.line_chunker import chunk_text
from doctranslate.core.chunking.models import TextChunk, ChunkingConfigurationError

__all__ = ['chunk_text', 'TextChunk', 'ChunkingConfigurationError']
