"""Tests for the UI HTML helpers."""

from __future__ import annotations

from utils.styling import GAUGE_COLORS, SEVERITY_COLORS, render_error_banner, render_gauge, render_report_line


class TestRenderReportLine:
    def test_flagged_line_colored(self):
        html = render_report_line("Red Flag: penalty", "flagged")
        assert SEVERITY_COLORS["flagged"] in html
        assert "font-weight: bold" in html
        assert "Red Flag: penalty" in html

    def test_neutral_line(self):
        html = render_report_line("Document A", "neutral")
        assert SEVERITY_COLORS["neutral"] in html
        assert "font-weight: normal" in html

    def test_text_escaped(self):
        assert "&lt;script&gt;" in render_report_line("<script>", "neutral")

    def test_blank_line_keeps_space(self):
        assert "&nbsp;" in render_report_line("", "neutral")

    def test_unknown_severity_uses_neutral_color(self):
        assert SEVERITY_COLORS["neutral"] in render_report_line("x", "other")


class TestRenderGauge:
    def test_high_score(self):
        html = render_gauge(8, "high")
        assert "8/10" in html
        assert "width: 80%" in html
        assert GAUGE_COLORS["high"] in html
        assert "HIGH RISK" in html

    def test_zero_score(self):
        html = render_gauge(0, "low")
        assert "width: 0%" in html
        assert "LOW RISK" in html


class TestRenderErrorBanner:
    def test_message_escaped(self):
        html = render_error_banner('<img src=x onerror="alert(1)">')
        assert "<img" not in html
        assert "&lt;img src=x onerror=&quot;alert(1)&quot;&gt;" in html

    def test_plain_message_shown(self):
        html = render_error_banner("Could not verify models. Check API Key permissions.")
        assert "SYSTEM ERROR" in html
        assert "Could not verify models. Check API Key permissions." in html
