"""
Unit tests for placeholder token creation and detection.
"""

import pytest

from doctranslate.common.placeholder_format import (
    DEFAULT_FORMAT,
    PlaceholderFormat,
    PlaceholderKind,
)


class TestCreate:
    """Tests for PlaceholderFormat.create."""

    @pytest.mark.parametrize("kind,expected", [
        (PlaceholderKind.XML_TAG, "__XML_TAG_0__"),
        (PlaceholderKind.CODE_BLOCK, "__CODE_BLOCK_0__"),
        (PlaceholderKind.INLINE_CODE, "__INLINE_CODE_0__"),
        (PlaceholderKind.URL, "__URL_0__"),
        (PlaceholderKind.FILE_PATH, "__FILE_PATH_0__"),
        (PlaceholderKind.GLOSSARY, "__G0__"),
    ])
    def test_token_shapes(self, kind, expected):
        assert PlaceholderFormat().create(kind, 0) == expected

    def test_multi_digit_index(self):
        assert DEFAULT_FORMAT.create(PlaceholderKind.URL, 123) == "__URL_123__"


class TestParse:
    """Tests for parse / matches."""

    def test_parse_kind_token(self):
        assert DEFAULT_FORMAT.parse("__INLINE_CODE_7__") == 7

    def test_parse_glossary_token(self):
        assert DEFAULT_FORMAT.parse("__G42__") == 42

    def test_parse_rejects_plain_text(self):
        assert DEFAULT_FORMAT.parse("hello") is None
        assert DEFAULT_FORMAT.parse("__URL__") is None

    def test_matches_requires_whole_token(self):
        assert DEFAULT_FORMAT.matches("__URL_1__")
        assert not DEFAULT_FORMAT.matches("see __URL_1__")

    def test_is_glossary_token(self):
        assert DEFAULT_FORMAT.is_glossary_token("__G3__")
        assert not DEFAULT_FORMAT.is_glossary_token("__URL_3__")


class TestRecoveryPattern:
    """A glossary token whose letters were translated is still recognised."""

    def test_translated_prefix_matches(self):
        pattern = DEFAULT_FORMAT.recovery_pattern(5)
        assert pattern.search("使用 __词汇表_5__ 来")

    def test_other_index_does_not_match(self):
        pattern = DEFAULT_FORMAT.recovery_pattern(5)
        assert not pattern.search("__词汇表_15__")

    def test_digits_in_prefix_do_not_match(self):
        assert not DEFAULT_FORMAT.recovery_pattern(5).search("__G1_5__")


class TestFindResidual:
    """Tests for find_all / find_residual."""

    def test_find_all_positions(self):
        text = "a __URL_1__ b __G2__"
        found = DEFAULT_FORMAT.find_all(text)
        assert [(token, index) for _, _, token, index in found] == [("__URL_1__", 1), ("__G2__", 2)]
        start, end, token, _ = found[0]
        assert text[start:end] == token

    def test_finds_translated_tokens(self):
        assert DEFAULT_FORMAT.find_residual("好 __词汇表_9__") == ["__词汇表_9__"]

    def test_same_span_reported_once(self):
        assert DEFAULT_FORMAT.find_residual("x __URL_1__ y") == ["__URL_1__"]

    def test_excluded_tokens_skipped(self):
        assert DEFAULT_FORMAT.find_residual("__URL_1__ __G2__", exclude=["__URL_1__"]) == ["__G2__"]

    def test_clean_text(self):
        assert DEFAULT_FORMAT.find_residual("nothing left here") == []
