"""
Pytest configuration and fixtures for all tests.

This file is automatically loaded by pytest and provides common fixtures
and configuration for all test modules.
"""

import sys
from types import SimpleNamespace
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Import pytest for fixtures
import pytest

from doctranslate.config import TranslationConfig
from doctranslate.core.exceptions import ProviderError
from doctranslate.core.glossary import Glossary
from doctranslate.core.providers.base import TranslationProvider
from doctranslate.utils.unified_logger import get_logger


class EchoProvider(TranslationProvider):
    """Returns its input unchanged and records every call."""

    def __init__(self):
        super().__init__(timeout=1)
        self.calls = []

    async def translate(self, text, target_language):
        self.calls.append((text, target_language))
        return text


class MappingProvider(EchoProvider):
    """Applies str.replace pairs to simulate a translation."""

    def __init__(self, replacements):
        super().__init__()
        self.replacements = replacements

    async def translate(self, text, target_language):
        self.calls.append((text, target_language))
        for old, new in self.replacements.items():
            text = text.replace(old, new)
        return text


class FlakyProvider(EchoProvider):
    """Fails the first `failures` calls, then echoes."""

    def __init__(self, failures, recoverable=True):
        super().__init__()
        self.failures = failures
        self.recoverable = recoverable

    async def translate(self, text, target_language):
        self.calls.append((text, target_language))
        if len(self.calls) <= self.failures:
            raise ProviderError("service unavailable", status_code=503, recoverable=self.recoverable)
        return text


class FailingProvider(FlakyProvider):
    """Fails every call."""

    def __init__(self, recoverable=True):
        super().__init__(failures=float('inf'), recoverable=recoverable)


class RecordingSleep:
    """Stand-in for asyncio.sleep that records requested delays."""

    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


@pytest.fixture
def sleep():
    """Recording sleep; nothing in the tests actually waits."""
    return RecordingSleep()


@pytest.fixture
def config():
    """Config with small, distinguishable delays (ms)."""
    return TranslationConfig(
        target_language='zh',
        source_language='en',
        max_retries=3,
        retry_delay=100,
        translation_delay=50,
        retry_strategy='linear',
        max_chunk_length=5000,
        glossary_path='glossary.json',
        strict_restoration=False,
        enable_colors=False,
    )


@pytest.fixture
def sample_glossary():
    """A glossary with protected-only and substitutable entries."""
    return Glossary({
        "React": "React",
        "GitHub": "GitHub",
        "API": "接口",
        "pull request": "拉取请求",
    })


@pytest.fixture
def echo_provider():
    return EchoProvider()


@pytest.fixture
def captured_logs():
    """Collect structured log entries emitted through the global logger."""
    entries = []
    logger = get_logger(storage_callback=entries.append)
    yield entries
    logger.storage_callback = None


@pytest.fixture
def providers():
    """Fake provider classes, for tests that need a specific failure pattern."""
    return SimpleNamespace(
        Echo=EchoProvider,
        Mapping=MappingProvider,
        Flaky=FlakyProvider,
        Failing=FailingProvider,
    )
