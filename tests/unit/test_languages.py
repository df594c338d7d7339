"""Tests for the report language picklist."""

from __future__ import annotations

from app.languages import SUPPORTED_LANGUAGES, match_languages, resolve_language


class TestMatchLanguages:
    def test_blank_query_returns_everything(self):
        assert match_languages("") == SUPPORTED_LANGUAGES
        assert match_languages(None) == SUPPORTED_LANGUAGES

    def test_prefix_case_insensitive(self):
        assert match_languages("ta") == ["Tamil"]
        assert match_languages("TE") == ["Telugu"]

    def test_prefix_matches_before_substring_matches(self):
        assert match_languages("ma", ["Tamil", "Malayalam", "Marathi", "German"]) == [
            "Malayalam",
            "Marathi",
            "German",
        ]

    def test_no_match(self):
        assert match_languages("klingon") == []

    def test_does_not_mutate_source(self):
        result = match_languages("")
        result.append("Esperanto")
        assert "Esperanto" not in SUPPORTED_LANGUAGES


class TestResolveLanguage:
    def test_canonical_name(self):
        assert resolve_language(" hindi ") == "Hindi"

    def test_unknown_falls_back(self):
        assert resolve_language("Klingon") == "English"
        assert resolve_language("Klingon", default="Tamil") == "Tamil"

    def test_missing_falls_back(self):
        assert resolve_language(None) == "English"
