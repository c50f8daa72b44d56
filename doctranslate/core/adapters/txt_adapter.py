"""
Plain text and markdown adapter.

The whole document is one translatable text: protect, chunk, translate each
chunk with the inter-chunk pause, join, restore, apply the glossary.
"""

from .format_adapter import FormatAdapter


class TxtAdapter(FormatAdapter):
    """Adapter for .txt and .md files."""

    @property
    def format_name(self) -> str:
        return "TEXT"

    async def translate(self, content: str) -> str:
        """
        Translate the document.

        Raises:
            TranslationError: If any chunk fails; no partial output is returned
        """
        return await self.pipeline.translate_text(content)
