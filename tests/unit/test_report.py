"""Unit tests for report classification (pure functions, no LLM)."""

from __future__ import annotations

import pytest

from app.report import (
    assess_report,
    classify_lines,
    decorate_report,
    extract_score,
    gauge_level,
    is_clean_scan,
    lines_to_text,
    strip_emphasis,
)
from app.report_schemas import AnnotatedLine, GaugeLevel, Severity


class TestExtractScore:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Risk Score: 7", 7),
            ("RISK score:3", 3),
            ("risk score - 5/10", 5),
            ("Risk Score 0", 0),
            ("🔥 Risk Score: 9", 9),
            ("Overall Risk Score = 4", 4),
            ("Risk Score: 10", 10),
            ("Risk Score: 7\nRisk Score: 2", 7),
        ],
    )
    def test_labelled_scores(self, text, expected):
        assert extract_score(text) == expected

    def test_emphasis_stripped_and_clamped(self):
        assert extract_score("**Risk Score:** 11") == 10

    def test_large_value_clamps_to_ten(self):
        assert extract_score("Risk Score: 99999999999999999999") == 10

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "Everything looks standard. No issues found.",
            "Risk Score: not available",
            "Risk Score:\n7",
            "There is a 5 year term and some risk.",
        ],
    )
    def test_missing_score_defaults_to_zero(self, text):
        assert extract_score(text) == 0

    def test_range_in_label_is_read_as_the_score(self):
        # First digit run after the label wins, so a repeated range hides the real score
        assert extract_score("Risk Score (0-10): 7") == 0
        assert extract_score("Risk Score (out of 10): 8") == 0
        assert extract_score("Risk Score: 7") == 7

    def test_later_label_used_when_first_has_no_digits(self):
        assert extract_score("Risk Score: n/a\nFinal Risk Score: 6") == 6

    def test_score_always_in_range(self):
        for text in ["Risk Score: -3", "Risk Score: 42", "risk score:1000", "x" * 50]:
            assert 0 <= extract_score(text) <= 10


class TestClassifyLines:
    def test_scenario_contract_with_red_flag(self, sample_report):
        lines = classify_lines(sample_report)
        assert [line.text for line in lines] == [
            "Document A",
            "Risk Score: 7",
            "Red Flag: unclear termination clause",
        ]
        assert lines[0].severity == Severity.NEUTRAL
        assert lines[2].severity == Severity.FLAGGED

    def test_empty_report_has_no_lines(self):
        assert classify_lines("") == []

    def test_blank_lines_kept_as_neutral(self):
        lines = classify_lines("Document A\n\nRed Flag: x")
        assert lines[1] == AnnotatedLine(text="", severity=Severity.NEUTRAL)

    def test_line_count_matches_breaks(self):
        for text in ["a", "a\nb", "\n", "a\n\n\nb\n", "Risk\nRed flag\n\n"]:
            assert len(classify_lines(text)) == text.count("\n") + 1

    def test_emphasis_markers_removed(self):
        lines = classify_lines("**Red Flag:** auto-renewal")
        assert lines[0].text == "Red Flag: auto-renewal"
        assert lines[0].severity == Severity.FLAGGED

    def test_emphasis_inside_keyword_still_flags(self):
        assert classify_lines("r*is*k of loss")[0].severity == Severity.FLAGGED

    def test_case_insensitive_markers(self):
        lines = classify_lines("RED FLAG: penalty\nHigh RISK\nplain")
        assert [line.severity for line in lines] == [
            Severity.FLAGGED,
            Severity.FLAGGED,
            Severity.NEUTRAL,
        ]

    def test_carriage_returns_trimmed(self):
        lines = classify_lines("Document A\r\nRed Flag: x\r\n")
        assert lines[0].text == "Document A"
        assert lines[1].text == "Red Flag: x"

    def test_reclassifying_rendered_text_keeps_severities(self, sample_report):
        report = "**Doc**\n\n**Red Flag:** late fees\nrisky indemnity\nSigned"
        first = classify_lines(report)
        second = classify_lines(lines_to_text(first))
        assert [line.severity for line in first] == [line.severity for line in second]
        assert first == second


class TestIsCleanScan:
    def test_scenario_flagged_report_not_clean(self, sample_report):
        assert is_clean_scan(sample_report) is False

    def test_empty_report_clean(self):
        assert is_clean_scan("") is True

    def test_standard_report_clean(self):
        assert is_clean_scan("Everything looks standard. No issues found.") is True

    def test_whole_text_match_not_per_line(self):
        assert is_clean_scan("Clause 4 is fine.\nMinor risk in clause 9.") is False

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "Nothing to report",
            "r*isk",
            "Red\nFlag",
            "Document A\nRisk Score: 7\nRed Flag: unclear termination clause",
            "ok\n\nfine",
        ],
    )
    def test_clean_implies_all_neutral(self, text):
        if is_clean_scan(text):
            assert all(line.severity == Severity.NEUTRAL for line in classify_lines(text))


class TestGaugeLevel:
    @pytest.mark.parametrize(
        "score,expected",
        [
            (0, GaugeLevel.LOW),
            (3, GaugeLevel.LOW),
            (4, GaugeLevel.MEDIUM),
            (6, GaugeLevel.MEDIUM),
            (7, GaugeLevel.HIGH),
            (10, GaugeLevel.HIGH),
        ],
    )
    def test_bands(self, score, expected):
        assert gauge_level(score) == expected


class TestDecorateReport:
    def test_labels_get_icons(self):
        decorated = decorate_report("Red Flag: fees\nRisk Score: 4")
        assert decorated == "⚠️ Red Flag: fees\n🔥 Risk Score: 4"

    def test_idempotent(self):
        once = decorate_report("Red Flag: fees\nRisk Score: 4")
        assert decorate_report(once) == once

    def test_decoration_does_not_change_classification(self, sample_report):
        decorated = decorate_report(sample_report)
        assert extract_score(decorated) == extract_score(sample_report)
        assert [line.severity for line in classify_lines(decorated)] == [
            line.severity for line in classify_lines(sample_report)
        ]


class TestAssessReport:
    def test_scenario_contract_with_red_flag(self, sample_report):
        assessment = assess_report(sample_report)
        assert assessment.score == 7
        assert assessment.gauge == GaugeLevel.HIGH
        assert assessment.clean is False
        assert assessment.lines[2].severity == Severity.FLAGGED
        assert assessment.flagged_count == 2

    def test_empty_report(self):
        assessment = assess_report("")
        assert assessment.score == 0
        assert assessment.lines == []
        assert assessment.clean is True
        assert assessment.flagged_count == 0

    def test_failure_text_is_classified_like_any_report(self):
        assessment = assess_report("❌ SYSTEM FAILURE: Analysis model error: API error: boom")
        assert assessment.score == 0
        assert assessment.clean is True
        assert len(assessment.lines) == 1

    def test_strip_emphasis(self):
        assert strip_emphasis("**a** *b*") == "a b"
