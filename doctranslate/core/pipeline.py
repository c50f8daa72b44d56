"""
Per-document protect -> chunk -> translate -> restore -> glossary pipeline.

Both document drivers push their text through DocumentPipeline.translate_text.
"""
import asyncio
from typing import Any, Awaitable, Callable, Optional

from doctranslate.common.placeholder_format import PlaceholderKind
from doctranslate.config import TranslationConfig
from doctranslate.core.chunking import chunk_text
from doctranslate.core.exceptions import RestorationDefect
from doctranslate.core.glossary import Glossary, apply_glossary
from doctranslate.core.protector import ContentProtector, ProtectedDocument
from doctranslate.core.providers.base import TranslationProvider
from doctranslate.core.restorer import find_residual_placeholders, restore
from doctranslate.core.translator import TranslatorGateway
from doctranslate.utils.unified_logger import LogType, get_logger


class DocumentPipeline:
    """Translates one text at a time; holds no per-document state."""

    def __init__(self, provider: TranslationProvider, config: TranslationConfig,
                 glossary: Optional[Glossary] = None,
                 sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep):
        self.config = config
        self.glossary = glossary or Glossary()
        self.gateway = TranslatorGateway(provider, config, sleep=sleep)
        self.logger = get_logger()

    def protect(self, text: str) -> ProtectedDocument:
        return ContentProtector(self.glossary).protect(text)

    def _split_glossary_placeholders(self, document: ProtectedDocument):
        """Partition placeholders into substitutable glossary terms and the rest."""
        substitutable, others = [], []
        for placeholder in document.placeholders:
            entry = None
            if placeholder.kind is PlaceholderKind.GLOSSARY:
                entry = self.glossary.entry_for(placeholder.original_content)
            if entry is not None and entry.substitutable:
                substitutable.append(placeholder)
            else:
                others.append(placeholder)
        return substitutable, others

    def finish(self, translated: str, document: ProtectedDocument, source_text: str) -> str:
        """
        Restore placeholders and apply the glossary.

        Substitutable glossary terms are restored and substituted while code,
        URLs, paths and protected-only terms are still placeholders, so the
        glossary never rewrites content that must come back verbatim.
        """
        substitutable, others = self._split_glossary_placeholders(document)

        text = restore(translated, substitutable)
        text = apply_glossary(text, self.glossary, [p.token for p in others])
        text = restore(text, others)

        residual = find_residual_placeholders(text, source_text)
        if residual:
            message = f"{len(residual)} placeholder(s) not restored: {', '.join(residual[:5])}"
            if self.config.strict_restoration:
                raise RestorationDefect(message, residual_tokens=residual)
            self.logger.warning(message, LogType.RESTORATION, {'residual': residual})
        return text

    async def translate_text(self, text: str) -> str:
        """
        Translate one text end to end.

        Raises:
            RetryExhaustedError: If a chunk could not be translated
            RestorationDefect: In strict mode, if tokens survive restoration
        """
        if not text.strip():
            return text

        document = self.protect(text)
        chunks = chunk_text(document.text, self.config.max_chunk_length)
        self.logger.debug(
            f"Protected {len(document.placeholders)} span(s), {len(chunks)} chunk(s)",
            LogType.CHUNK_INFO
        )

        translated_chunks = await self.gateway.translate_chunks(chunks, self.config.target_language)
        return self.finish(''.join(translated_chunks), document, text)
