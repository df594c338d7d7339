from __future__ import annotations

import logging
from typing import Any

from app.llm_client import get_llm_client
from app.report import assess_report, decorate_report
from app.report_schemas import ScanResult
from app.upload import DocumentPart

log = logging.getLogger(__name__)

FAILURE_PREFIX = "❌ SYSTEM FAILURE: "

PROMPT_LEGAL = """You are an expert Lawyer. Analyze these {count} documents.
For each document:
1. List the Document Name.
2. Find 'Red Flags'. Use the exact phrase "Red Flag:" for each one.
3. Explain the risk in 1 simple sentence.
4. End with exactly one line in the form "Risk Score: <number from 0 to 10>".
   Do not put the range or anything else between "Risk Score" and the number.

Format the output cleanly without using markdown bolding (avoid **).
Write the report in {language}. Keep the labels "Red Flag:" and "Risk Score" in English."""

PASTED_TEXT_HEADER = "Pasted document text:"


def count_documents(parts: list[DocumentPart], text: str | None) -> int:
    """Pasted text counts as one extra document."""
    return len(parts) + (1 if text and text.strip() else 0)


def build_messages(parts: list[DocumentPart], text: str | None, language: str) -> list[dict[str, Any]]:
    """Prompt first, then pasted text, then one inline part per uploaded document."""
    prompt = PROMPT_LEGAL.format(count=count_documents(parts, text), language=language)
    content: list[dict[str, Any]] = [{"type": "text", "text": prompt}]
    if text and text.strip():
        content.append({"type": "text", "text": f"{PASTED_TEXT_HEADER}\n{text}"})
    content.extend(part.to_message_part() for part in parts)
    return [{"role": "user", "content": content}]


def run_scan(parts: list[DocumentPart], text: str | None, language: str) -> ScanResult:
    """
    Send the documents to the analysis model and classify its answer.
    Model failures do not raise: the failure text becomes the report and is
    classified like any other answer.
    """
    client = get_llm_client()
    model = client.select_model()
    document_count = count_documents(parts, text)
    log.info("Scanning %d document(s) with %s in %s", document_count, model, language)

    error = None
    try:
        report = decorate_report(client.analysis_completion(build_messages(parts, text, language), model=model))
    except RuntimeError as e:
        log.error("Scan failed: %s", e)
        error = str(e)
        report = FAILURE_PREFIX + error

    assessment = assess_report(report)
    log.info(
        "Scan classified: score=%d gauge=%s clean=%s flagged=%d",
        assessment.score, assessment.gauge.value, assessment.clean, assessment.flagged_count,
    )
    return ScanResult(
        report=report,
        model=model,
        language=language,
        document_count=document_count,
        assessment=assessment,
        error=error,
    )
