"""Shared fixtures for Legal-Lens tests."""

from __future__ import annotations

import io
from typing import Callable, Iterator

import pytest
from PIL import Image

from app import llm_client
from app.settings import reset_settings


@pytest.fixture(autouse=True)
def env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Known configuration for every test; no .env file or real key needed."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("OPENAI_ANALYSIS_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.delenv("MAX_DOCUMENTS", raising=False)
    monkeypatch.delenv("DEFAULT_LANGUAGE", raising=False)
    reset_settings()
    monkeypatch.setattr(llm_client, "_singleton", None)
    yield
    reset_settings()


@pytest.fixture
def sample_report() -> str:
    return (
        "Document A\n"
        "Risk Score: 7\n"
        "Red Flag: unclear termination clause"
    )


def make_png(width: int = 200, height: int = 200, color: str = "white") -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def png_factory() -> Callable[..., bytes]:
    return make_png


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def pdf_bytes() -> bytes:
    return b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\ntrailer\n<< /Root 1 0 R >>\n%%EOF\n"
