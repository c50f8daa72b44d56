"""
Google Translate provider.

Uses the public translate_a/single endpoint (the same one browser extensions
use), optionally with an API key.
"""

from typing import Optional
import httpx

from .base import TranslationProvider
from doctranslate.config import API_ENDPOINT, SOURCE_LANGUAGE, TRANSLATE_KEY, REQUEST_TIMEOUT
from doctranslate.core.exceptions import ProviderError


class GoogleTranslateProvider(TranslationProvider):
    """Google Translate over HTTP"""

    def __init__(self, api_endpoint: str = API_ENDPOINT, source_language: str = SOURCE_LANGUAGE,
                 api_key: Optional[str] = TRANSLATE_KEY, timeout: int = REQUEST_TIMEOUT,
                 client: Optional[httpx.AsyncClient] = None):
        super().__init__(timeout=timeout, client=client)
        self.api_endpoint = api_endpoint
        self.source_language = source_language or 'auto'
        self.api_key = api_key

    @classmethod
    def from_config(cls, config, client: Optional[httpx.AsyncClient] = None) -> 'GoogleTranslateProvider':
        return cls(
            api_endpoint=config.api_endpoint,
            source_language=config.source_language,
            api_key=config.api_key,
            timeout=config.timeout,
            client=client
        )

    async def translate(self, text: str, target_language: str) -> str:
        """
        Translate text with a single request.

        Returns:
            Translated text, segments joined in order

        Raises:
            ProviderError: On timeout, HTTP error status or malformed payload
        """
        params = {
            'client': 'gtx',
            'sl': self.source_language,
            'tl': target_language,
            'dt': 't',
        }
        if self.api_key:
            params['key'] = self.api_key

        client = await self._get_client()
        try:
            # Long texts go in the body; the query string has a length limit
            response = await client.post(self.api_endpoint, params=params, data={'q': text})
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException as e:
            raise ProviderError(f"Google Translate timeout: {e}") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            # Rejected credentials will not succeed on retry
            raise ProviderError(
                f"Google Translate HTTP error {status}: {e.response.text[:200]}",
                status_code=status,
                recoverable=status not in (401, 403)
            ) from e
        except httpx.HTTPError as e:
            raise ProviderError(f"Google Translate request failed: {e}") from e
        except ValueError as e:
            raise ProviderError(f"Google Translate returned invalid JSON: {e}") from e

        return self._extract_translation(payload)

    @staticmethod
    def _extract_translation(payload) -> str:
        """
        Join the translated segments of a translate_a/single response.

        The payload looks like [[["Bonjour", "Hello", ...], ...], null, "en", ...].
        """
        try:
            segments = payload[0]
            return ''.join(segment[0] for segment in segments if segment and segment[0])
        except (TypeError, IndexError, KeyError) as e:
            raise ProviderError(f"Unexpected Google Translate response shape: {e}") from e
