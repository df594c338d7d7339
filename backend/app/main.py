import asyncio
import logging

from fastapi import Body, FastAPI, File, Form, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from app.analysis import run_scan
from app.languages import match_languages, resolve_language
from app.llm_client import MODEL_CHECK_ERROR, get_llm_client
from app.report import assess_report
from app.report_schemas import ClassifyRequest, FeedbackRequest
from app.settings import get_settings
from app.upload import (
    enforce_document_limits,
    enforce_total_size,
    read_document_parts,
    validate_content_types,
    validate_documents_for_duplicates,
)
from app.validation import sanitize_text, validate_text_length

REPORT_FILENAME = "legal-lens-report.txt"
NO_INPUT_ERROR = "⚠️ SYSTEM ALERT: Upload at least one file or paste some text!"
EMPTY_FEEDBACK_ERROR = "⚠️ Please type something before sending!"

log = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("app").setLevel(level)


def parse_cors_origins(raw: str | None) -> list[str]:
    """Split the CORS_ORIGINS setting; blank or "*" allows everything."""
    origins = [origin.strip() for origin in (raw or "").split(",") if origin.strip()]
    if not origins or origins == ["*"]:
        return ["*"]
    return origins


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Legal-Lens Pro API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_cors_origins(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/healthz")
    def healthz() -> dict:
        """Liveness probe - is the service running?"""
        _ = get_settings()
        return {"ok": True}

    @app.get("/readyz")
    async def readiness_check() -> dict:
        """Readiness probe - can the service handle requests?"""
        checks = {}
        try:
            _ = get_llm_client()
            checks["openai"] = True
        except Exception:
            log.warning("LLM client unavailable", exc_info=True)
            checks["openai"] = False

        return {
            "status": "ready" if all(checks.values()) else "degraded",
            "checks": checks,
        }

    @app.get("/api/models")
    async def list_models() -> JSONResponse:
        """Models the configured key can use, plus the one scans will run on."""
        client = get_llm_client()
        try:
            models = await asyncio.to_thread(client.list_models)
        except RuntimeError as e:
            log.warning("Model check failed: %s", e)
            return JSONResponse(content={
                "models": [],
                "selected": settings.openai_analysis_model,
                "error": MODEL_CHECK_ERROR,
            })
        return JSONResponse(content={
            "models": models,
            "selected": client.select_model(models),
            "error": None,
        })

    @app.get("/api/languages")
    async def list_languages(q: str | None = None) -> dict:
        """Report languages matching the typed query."""
        return {"languages": match_languages(q), "default": settings.default_language}

    @app.post("/api/scan")
    async def scan_documents(
        files: list[UploadFile] | None = File(default=None),
        text: str | None = Form(default=None),
        language: str | None = Form(default=None),
    ) -> JSONResponse:
        """Analyze uploaded documents and/or pasted text and classify the report."""
        files = [f for f in (files or []) if f.filename]

        is_valid, error_msg = validate_text_length(text, settings.max_text_length)
        if not is_valid:
            return JSONResponse(status_code=400, content={"error": error_msg})
        text = sanitize_text(text, settings.max_text_length)

        if not files and not (text and text.strip()):
            return JSONResponse(status_code=400, content={"error": NO_INPUT_ERROR})

        try:
            enforce_document_limits(files, settings.max_documents)
            validate_content_types(files)
            enforce_total_size(files, settings.max_total_upload_bytes)
            validate_documents_for_duplicates(files)
        except HTTPException as e:
            return JSONResponse(status_code=e.status_code, content={"error": e.detail})

        try:
            parts = await read_document_parts(files)
        except HTTPException as e:
            return JSONResponse(status_code=e.status_code, content={"error": e.detail})

        report_language = resolve_language(language, settings.default_language)
        result = await asyncio.to_thread(run_scan, parts, text, report_language)
        return JSONResponse(content=result.model_dump(mode="json"))

    @app.post("/api/classify")
    async def classify_report(request: ClassifyRequest = Body(...)) -> JSONResponse:
        """Classify an already-received report without calling the model."""
        return JSONResponse(content=assess_report(request.report).model_dump(mode="json"))

    @app.post("/api/reports/download")
    async def download_report(request: ClassifyRequest = Body(...)) -> Response:
        """Return the report as a plain-text attachment."""
        return Response(
            content=request.report,
            media_type="text/plain; charset=utf-8",
            headers={"Content-Disposition": f'attachment; filename="{REPORT_FILENAME}"'},
        )

    @app.post("/api/feedback")
    async def send_feedback(request: FeedbackRequest = Body(...)) -> JSONResponse:
        """Accept a suggestion from the feedback box."""
        suggestion = sanitize_text(request.suggestion, 5000) or ""
        if not suggestion.strip():
            return JSONResponse(status_code=400, content={"error": EMPTY_FEEDBACK_ERROR})

        log.info("Feedback received (%d chars)", len(suggestion))
        return JSONResponse(
            status_code=201,
            content={"status": "received", "message": "🚀 Thanks, your suggestion was received!"},
        )

    return app
