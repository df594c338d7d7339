"""
Classification of free-text analysis reports.

Turns the model's raw answer into a structured assessment:
- Risk score: first "Risk Score: <n>" label, clamped to 0-10 (0 when missing)
- Lines: one entry per input line, flagged when it mentions "red flag" or "risk"
- Clean scan: no "red flag"/"risk" mention anywhere in the report
"""
from __future__ import annotations

import re

from app.report_schemas import AnnotatedLine, GaugeLevel, ReportAssessment, Severity


MIN_SCORE = 0
MAX_SCORE = 10

EMPHASIS_MARKER = "*"
RISK_MARKERS = ("red flag", "risk")

# Label, then any punctuation/whitespace on the same line, then the digit run
SCORE_PATTERN = re.compile(r"risk\s*score[^\w\n]*(\d+)", re.IGNORECASE)

RED_FLAG_LABEL = re.compile(r"(?<!⚠️ )Red Flag:")
RISK_SCORE_LABEL = re.compile(r"(?<!🔥 )Risk Score")


def strip_emphasis(text: str) -> str:
    """Remove markdown emphasis markers the model sometimes emits despite the prompt."""
    return text.replace(EMPHASIS_MARKER, "")


def _mentions_risk(text: str) -> bool:
    lowered = text.lower()
    return any(marker in lowered for marker in RISK_MARKERS)


def clamp_score(value: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, value))


def extract_score(text: str) -> int:
    """
    Extract the self-reported risk score.
    Out-of-range values are clamped to 0-10; a missing label or digit run gives 0.
    """
    if not text:
        return MIN_SCORE
    match = SCORE_PATTERN.search(strip_emphasis(text))
    if not match:
        return MIN_SCORE
    return clamp_score(int(match.group(1)))


def classify_lines(text: str) -> list[AnnotatedLine]:
    """Tag every line of the report, keeping order and blank lines."""
    if not text:
        return []

    lines = []
    for raw_line in text.split("\n"):
        cleaned = strip_emphasis(raw_line).rstrip("\r")
        severity = Severity.FLAGGED if _mentions_risk(cleaned) else Severity.NEUTRAL
        lines.append(AnnotatedLine(text=cleaned, severity=severity))
    return lines


def is_clean_scan(text: str) -> bool:
    """True when the whole report never mentions a red flag or risk."""
    return not _mentions_risk(strip_emphasis(text))


def lines_to_text(lines: list[AnnotatedLine]) -> str:
    return "\n".join(line.text for line in lines)


def gauge_level(score: int) -> GaugeLevel:
    """Gauge band: 0-3 low, 4-6 medium, 7-10 high."""
    if score >= 7:
        return GaugeLevel.HIGH
    if score >= 4:
        return GaugeLevel.MEDIUM
    return GaugeLevel.LOW


def decorate_report(text: str) -> str:
    """Prefix the labels with their warning icons. Safe to apply more than once."""
    text = RED_FLAG_LABEL.sub("⚠️ Red Flag:", text)
    return RISK_SCORE_LABEL.sub("🔥 Risk Score", text)


def assess_report(text: str) -> ReportAssessment:
    """Run the full classification over one raw report."""
    score = extract_score(text)
    lines = classify_lines(text)
    return ReportAssessment(
        score=score,
        gauge=gauge_level(score),
        clean=is_clean_scan(text),
        lines=lines,
        flagged_count=sum(1 for line in lines if line.severity == Severity.FLAGGED),
    )
