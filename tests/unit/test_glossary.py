"""
Unit tests for the glossary store and glossary application.
"""

import json

import pytest

from doctranslate.core.glossary import Glossary, GlossaryEntry, apply_glossary, find_term


class TestGlossaryEntry:

    def test_protected_only_when_rendering_equals_term(self):
        entry = GlossaryEntry("React", "React")
        assert entry.protected_only
        assert not entry.substitutable

    def test_substitutable_when_rendering_differs(self):
        assert GlossaryEntry("API", "接口").substitutable


class TestFindTerm:

    def test_case_insensitive(self):
        assert find_term("the api call", "API") == [(4, 7)]

    def test_whole_word_only(self):
        assert find_term("APIs are fun", "API") == []
        assert find_term("RAPID", "API") == []

    def test_punctuated_terms(self):
        assert find_term("written in C++ today", "C++") == [(11, 14)]
        assert find_term("uses .NET.", ".NET") == [(5, 9)]

    def test_token_edges_are_boundaries(self):
        text = "__XML_TAG_0__API__XML_TAG_1__"
        assert find_term(text, "API") == []
        assert find_term(text, "API", [(0, 13), (16, 29)]) == [(13, 16)]

    def test_never_inside_a_token(self):
        assert find_term("see __URL_0__", "URL", [(4, 13)]) == []


class TestGlossary:

    def test_entries_sorted_longest_first(self):
        glossary = Glossary({"React": "React", "React Native": "RN", "API": "接口"})
        assert [e.term for e in glossary] == ["React Native", "React", "API"]

    def test_entry_for_is_case_insensitive(self, sample_glossary):
        assert sample_glossary.entry_for("api").rendering == "接口"
        assert sample_glossary.entry_for("unknown") is None

    def test_substitutable_entries(self, sample_glossary):
        terms = {e.term for e in sample_glossary.substitutable_entries}
        assert terms == {"API", "pull request"}

    def test_empty_glossary_is_falsy(self):
        assert not Glossary()
        assert len(Glossary()) == 0


class TestGlossaryLoad:

    def test_load_valid_file(self, tmp_path):
        path = tmp_path / "glossary.json"
        path.write_text(json.dumps({"API": "接口", "GitHub": "GitHub"}), encoding="utf-8")

        glossary = Glossary.load(path)

        assert len(glossary) == 2
        assert glossary.entry_for("API").rendering == "接口"

    def test_missing_file_gives_empty_glossary(self, tmp_path):
        assert len(Glossary.load(tmp_path / "nope.json")) == 0

    def test_malformed_file_gives_empty_glossary(self, tmp_path, captured_logs):
        path = tmp_path / "glossary.json"
        path.write_text("{not json", encoding="utf-8")

        assert len(Glossary.load(path)) == 0
        assert any(entry['level'] == 'WARNING' for entry in captured_logs)

    def test_non_object_root_gives_empty_glossary(self, tmp_path):
        path = tmp_path / "glossary.json"
        path.write_text('["API"]', encoding="utf-8")
        assert len(Glossary.load(path)) == 0

    def test_non_string_renderings_skipped(self, tmp_path):
        path = tmp_path / "glossary.json"
        path.write_text(json.dumps({"API": "接口", "Count": 3}), encoding="utf-8")

        glossary = Glossary.load(path)

        assert [e.term for e in glossary] == ["API"]


class TestApplyGlossary:

    def test_substitutes_renderings(self, sample_glossary):
        assert apply_glossary("Use the API.", sample_glossary) == "Use the 接口."

    def test_multi_word_term(self, sample_glossary):
        assert apply_glossary("Open a pull request", sample_glossary) == "Open a 拉取请求"

    def test_protected_only_terms_untouched(self, sample_glossary):
        assert apply_glossary("React on GitHub", sample_glossary) == "React on GitHub"

    def test_rendering_is_literal(self):
        glossary = Glossary({"money": r"\1 $0"})
        assert apply_glossary("money", glossary) == r"\1 $0"

    def test_term_between_placeholder_tokens(self, sample_glossary):
        text = "Call __XML_TAG_0__API__XML_TAG_1__ now"
        result = apply_glossary(text, sample_glossary, ["__XML_TAG_0__", "__XML_TAG_1__"])
        assert result == "Call __XML_TAG_0__接口__XML_TAG_1__ now"

    @pytest.mark.parametrize("text", [
        "Use the API, then open a pull request on GitHub.",
        "api API Api",
        "No glossary terms here.",
    ])
    def test_application_is_idempotent(self, text, sample_glossary):
        once = apply_glossary(text, sample_glossary)
        assert apply_glossary(once, sample_glossary) == once
