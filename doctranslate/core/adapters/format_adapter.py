"""
Abstract base class for document format adapters.

Each format (plain text/markdown, JSON descriptions) decides which parts of a
document are translatable and feeds them through the shared DocumentPipeline.
"""

from abc import ABC, abstractmethod

from doctranslate.core.pipeline import DocumentPipeline


class FormatAdapter(ABC):
    """
    Abstract interface for adapting a document format to the pipeline.

    Subclasses must implement translate().
    """

    def __init__(self, pipeline: DocumentPipeline):
        """
        Args:
            pipeline: Shared protect/translate/restore pipeline
        """
        self.pipeline = pipeline

    @abstractmethod
    async def translate(self, content: str) -> str:
        """
        Translate a whole document.

        Args:
            content: Document content as read from disk

        Returns:
            Translated document content, ready to be written
        """
        pass

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Human-readable format name (for logs)."""
        pass
