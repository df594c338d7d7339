from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    """Per-line tag used by the renderer to pick a color."""
    NEUTRAL = "neutral"
    FLAGGED = "flagged"


class GaugeLevel(str, Enum):
    """Score band shown on the risk gauge."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AnnotatedLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    severity: Severity = Severity.NEUTRAL


class ReportAssessment(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=10, default=0)
    gauge: GaugeLevel = GaugeLevel.LOW
    clean: bool = True
    lines: list[AnnotatedLine] = Field(default_factory=list)
    flagged_count: int = Field(ge=0, default=0)


class ClassifyRequest(BaseModel):
    report: str = ""


class FeedbackRequest(BaseModel):
    suggestion: str = ""


class ScanResult(BaseModel):
    report: str
    model: str
    language: str
    document_count: int = Field(ge=0)
    assessment: ReportAssessment
    error: str | None = None
