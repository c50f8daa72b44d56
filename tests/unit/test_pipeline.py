"""
Unit tests for the per-document pipeline and the text adapter.
"""

from dataclasses import replace

import pytest

from doctranslate.core.adapters import TxtAdapter
from doctranslate.core.exceptions import RestorationDefect, RetryExhaustedError
from doctranslate.core.glossary import Glossary
from doctranslate.core.pipeline import DocumentPipeline


class TestTranslateText:

    @pytest.mark.asyncio
    async def test_protected_content_survives(self, config, sleep, sample_glossary, providers):
        provider = providers.Mapping({"Visit": "访问", "for the": "查看", "docs": "文档"})
        pipeline = DocumentPipeline(provider, config, sample_glossary, sleep=sleep)

        result = await pipeline.translate_text("Visit https://example.com for the React docs.")

        assert result == "访问 https://example.com 查看 React 文档."
        sent, _ = provider.calls[0]
        assert "https://example.com" not in sent
        assert "React" not in sent

    @pytest.mark.asyncio
    async def test_glossary_substitution(self, config, sleep, sample_glossary, echo_provider):
        pipeline = DocumentPipeline(echo_provider, config, sample_glossary, sleep=sleep)
        assert await pipeline.translate_text("Use the API.") == "Use the 接口."

    @pytest.mark.asyncio
    async def test_glossary_never_rewrites_code(self, config, sleep, sample_glossary, echo_provider):
        pipeline = DocumentPipeline(echo_provider, config, sample_glossary, sleep=sleep)
        text = "Call the API:\n```\nclient.API.get()\n```\nor `API` directly."

        result = await pipeline.translate_text(text)

        assert result == "Call the 接口:\n```\nclient.API.get()\n```\nor `API` directly."

    @pytest.mark.asyncio
    async def test_glossary_term_inside_markup(self, config, sleep, echo_provider):
        pipeline = DocumentPipeline(echo_provider, config, Glossary({"API": "接口"}), sleep=sleep)
        assert await pipeline.translate_text("Call the <b>API</b> now.") == "Call the <b>接口</b> now."

    @pytest.mark.asyncio
    async def test_translated_glossary_token_recovered(self, config, sleep, sample_glossary, providers):
        # The provider translates the letters of every glossary token
        provider = providers.Mapping({"__G0__": "__词汇表_0__"})
        pipeline = DocumentPipeline(provider, config, sample_glossary, sleep=sleep)

        assert await pipeline.translate_text("Star us on GitHub") == "Star us on GitHub"

    @pytest.mark.asyncio
    async def test_whitespace_only_text_returned_unchanged(self, config, sleep, echo_provider):
        pipeline = DocumentPipeline(echo_provider, config, sleep=sleep)

        assert await pipeline.translate_text("\n  \n") == "\n  \n"
        assert echo_provider.calls == []

    @pytest.mark.asyncio
    async def test_long_document_chunked(self, config, sleep, echo_provider):
        pipeline = DocumentPipeline(echo_provider, replace(config, max_chunk_length=20), sleep=sleep)
        text = "First paragraph line.\n\nSecond paragraph line.\n"

        assert await pipeline.translate_text(text) == text
        assert len(echo_provider.calls) == 2
        assert sleep.delays == [0.05]

    @pytest.mark.asyncio
    async def test_failure_propagates(self, config, sleep, providers):
        pipeline = DocumentPipeline(providers.Failing(), config, sleep=sleep)
        with pytest.raises(RetryExhaustedError):
            await pipeline.translate_text("hello")


class TestResidualTokens:

    @pytest.mark.asyncio
    async def test_residual_logged_by_default(self, config, sleep, providers, captured_logs):
        # Provider mangles the URL token's digits
        provider = providers.Mapping({"__URL_0__": "__URL_9__"})
        pipeline = DocumentPipeline(provider, config, sleep=sleep)

        result = await pipeline.translate_text("See https://a.io now")

        assert result == "See __URL_9__ now"
        assert any(e['type'] == 'restoration' for e in captured_logs)

    @pytest.mark.asyncio
    async def test_residual_raises_in_strict_mode(self, config, sleep, providers):
        provider = providers.Mapping({"__URL_0__": "__URL_9__"})
        pipeline = DocumentPipeline(provider, replace(config, strict_restoration=True), sleep=sleep)

        with pytest.raises(RestorationDefect) as exc_info:
            await pipeline.translate_text("See https://a.io now")
        assert exc_info.value.residual_tokens == ["__URL_9__"]

    @pytest.mark.asyncio
    async def test_source_tokens_are_not_defects(self, config, sleep, echo_provider):
        pipeline = DocumentPipeline(echo_provider, replace(config, strict_restoration=True), sleep=sleep)
        text = "Tokens look like __G7__ in this guide."

        assert await pipeline.translate_text(text) == text


class TestTxtAdapter:

    @pytest.mark.asyncio
    async def test_delegates_to_pipeline(self, config, sleep, sample_glossary, echo_provider):
        adapter = TxtAdapter(DocumentPipeline(echo_provider, config, sample_glossary, sleep=sleep))

        assert adapter.format_name == "TEXT"
        assert await adapter.translate("Open a pull request.\n") == "Open a 拉取请求.\n"
