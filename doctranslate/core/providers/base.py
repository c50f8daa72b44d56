"""
Base class for translation providers.

A provider exposes a single capability: translate(text, target_language).
Any failure of a single call surfaces as ProviderError; retrying is the
gateway's job, never the provider's.
"""

from abc import ABC, abstractmethod
from typing import Optional
import httpx

from doctranslate.config import REQUEST_TIMEOUT


class TranslationProvider(ABC):
    """Abstract base class for translation providers"""

    def __init__(self, timeout: int = REQUEST_TIMEOUT, client: Optional[httpx.AsyncClient] = None):
        """
        Initialize the provider.

        Args:
            timeout: Request timeout in seconds
            client: Pre-built HTTP client (tests pass one with a mock transport)
        """
        self.timeout = timeout
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create a persistent HTTP client with connection pooling"""
        if self._client is None:
            self._client = httpx.AsyncClient(
                limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
                timeout=httpx.Timeout(self.timeout)
            )
        return self._client

    async def close(self):
        """Close the HTTP client"""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> 'TranslationProvider':
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    @abstractmethod
    async def translate(self, text: str, target_language: str) -> str:
        """
        Translate text into target_language.

        Raises:
            ProviderError: If the request fails or the response is unusable
        """
        pass
