"""
Translator gateway: sends chunks to the provider with retry and pacing.
"""
import asyncio
from typing import Any, Awaitable, Callable, List, Optional, Sequence

from doctranslate.config import TranslationConfig
from doctranslate.core.chunking import TextChunk
from doctranslate.core.chunking.models import ChunkStatus
from doctranslate.core.providers.base import TranslationProvider
from doctranslate.core.retry_manager import RetryConfig, RetryManager
from doctranslate.utils.unified_logger import LogType, get_logger


class TranslatorGateway:
    """
    Calls the provider one chunk at a time.

    Chunks of one document are translated strictly in order; a fixed pause is
    taken between provider calls to respect rate limits. The first chunk that
    exhausts its retries aborts the rest of the document.
    """

    def __init__(self, provider: TranslationProvider, config: TranslationConfig,
                 sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep):
        self.provider = provider
        self.config = config
        self._sleep = sleep
        self.retry_manager = RetryManager(RetryConfig.from_translation_config(config), sleep=sleep)
        self.logger = get_logger()

    async def translate_chunk(self, text: str, target_language: Optional[str] = None) -> str:
        """
        Translate one chunk, retrying on failure.

        Raises:
            RetryExhaustedError: After max_retries retries all failed
        """
        return await self.retry_manager.execute_with_retry(
            self.provider.translate,
            text,
            target_language or self.config.target_language,
            operation_id="translate_chunk"
        )

    async def pause(self) -> None:
        """Cooperative pause between provider calls or documents."""
        delay = self.config.translation_delay_seconds
        if delay > 0:
            await self._sleep(delay)

    async def translate_chunks(self, chunks: Sequence[TextChunk], target_language: Optional[str] = None) -> List[str]:
        """
        Translate chunks in order.

        Whitespace-only chunks are returned unchanged. For the others only the
        stripped core is sent; the chunk's leading and trailing whitespace is
        put back around the translation so line structure survives.

        Returns:
            Translated strings, same length and order as chunks
        """
        results: List[str] = []
        pending = [c for c in chunks if not c.is_blank]
        total = len(pending)
        calls = 0

        for chunk in chunks:
            if chunk.is_blank:
                results.append(chunk.content)
                continue

            if calls > 0:
                await self.pause()
            calls += 1

            self.logger.debug(
                f"translating {chunk.character_count} characters",
                LogType.CHUNK_INFO,
                {'current': calls, 'total': total}
            )
            leading, core, trailing = chunk.split_whitespace()
            try:
                translated = await self.translate_chunk(core, target_language)
            except Exception:
                chunk.status = ChunkStatus.FAILED
                raise
            chunk.status = ChunkStatus.TRANSLATED
            results.append(f"{leading}{translated}{trailing}")

        return results
