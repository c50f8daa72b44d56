"""
Unit tests for the Google Translate provider, using an httpx mock transport.
"""

import httpx
import pytest

from doctranslate.core.exceptions import ProviderError
from doctranslate.core.providers import GoogleTranslateProvider

ENDPOINT = "https://translate.example/translate_a/single"


def _provider(handler, **kwargs):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GoogleTranslateProvider(api_endpoint=ENDPOINT, source_language="en", client=client, **kwargs)


class TestGoogleTranslateProvider:

    @pytest.mark.asyncio
    async def test_joins_segments(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=[[["你好，", "Hello, ", None], ["世界", "world", None]], None, "en"])

        async with _provider(handler) as provider:
            result = await provider.translate("Hello, world", "zh")

        assert result == "你好，世界"
        request = requests[0]
        assert request.method == "POST"
        assert request.url.params["tl"] == "zh"
        assert request.url.params["sl"] == "en"
        assert request.url.params["client"] == "gtx"
        assert "key" not in request.url.params
        assert b"q=Hello%2C+world" in request.content

    @pytest.mark.asyncio
    async def test_api_key_sent(self):
        seen = {}

        def handler(request):
            seen['key'] = request.url.params.get("key")
            return httpx.Response(200, json=[[["ok", "ok"]]])

        async with _provider(handler, api_key="secret") as provider:
            await provider.translate("ok", "fr")

        assert seen['key'] == "secret"

    @pytest.mark.asyncio
    async def test_server_error_is_recoverable(self):
        async with _provider(lambda request: httpx.Response(503, text="busy")) as provider:
            with pytest.raises(ProviderError) as exc_info:
                await provider.translate("hi", "zh")

        assert exc_info.value.status_code == 503
        assert exc_info.value.recoverable

    @pytest.mark.asyncio
    async def test_auth_error_not_recoverable(self):
        async with _provider(lambda request: httpx.Response(403, text="denied")) as provider:
            with pytest.raises(ProviderError) as exc_info:
                await provider.translate("hi", "zh")

        assert not exc_info.value.recoverable

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("too slow", request=request)

        async with _provider(handler) as provider:
            with pytest.raises(ProviderError, match="timeout"):
                await provider.translate("hi", "zh")

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        async with _provider(handler) as provider:
            with pytest.raises(ProviderError):
                await provider.translate("hi", "zh")

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        async with _provider(lambda request: httpx.Response(200, text="<html>")) as provider:
            with pytest.raises(ProviderError, match="invalid JSON"):
                await provider.translate("hi", "zh")

    @pytest.mark.asyncio
    async def test_unexpected_shape(self):
        async with _provider(lambda request: httpx.Response(200, json={"error": "nope"})) as provider:
            with pytest.raises(ProviderError):
                await provider.translate("hi", "zh")


class TestFromConfig:

    def test_reads_connection_settings(self, config):
        provider = GoogleTranslateProvider.from_config(config)
        assert provider.api_endpoint == config.api_endpoint
        assert provider.source_language == "en"
        assert provider.timeout == config.timeout
