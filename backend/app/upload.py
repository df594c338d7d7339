from __future__ import annotations

import base64
import io
import os
from dataclasses import dataclass
from typing import Any, Iterable

from fastapi import HTTPException, UploadFile
from PIL import Image
from pillow_heif import register_heif_opener

from app.validation import calculate_document_hash, validate_image_content, validate_pdf_content

# Register HEIF opener for HEIC/HEIF support
register_heif_opener()

IMAGE_CONTENT_TYPES = {
    "image/jpeg",
    "image/jpg",  # Support both jpg and jpeg
    "image/png",
    "image/webp",
    "image/heic",
    "image/heif",
}

ALLOWED_CONTENT_TYPES = IMAGE_CONTENT_TYPES | {"application/pdf"}


@dataclass(frozen=True)
class DocumentPart:
    """One uploaded document, normalized and ready to inline into the prompt."""
    filename: str
    content_type: str
    content: bytes

    @property
    def is_image(self) -> bool:
        return self.content_type.startswith("image/")

    def data_url(self) -> str:
        encoded = base64.b64encode(self.content).decode("ascii")
        return f"data:{self.content_type};base64,{encoded}"

    def to_message_part(self) -> dict[str, Any]:
        if self.is_image:
            return {"type": "image_url", "image_url": {"url": self.data_url()}}
        return {
            "type": "file",
            "file": {"filename": self.filename, "file_data": self.data_url()},
        }


def normalize_content_type(content_type: str | None) -> str | None:
    """Normalize content type for consistent handling. Converts image/jpg to image/jpeg."""
    if not content_type:
        return None
    content_type = content_type.lower()
    if content_type == "image/jpg":
        return "image/jpeg"
    return content_type


def enforce_document_limits(files: list[UploadFile], max_documents: int = 8) -> None:
    """Enforce document count limit."""
    if len(files) > max_documents:
        raise HTTPException(status_code=400, detail=f"Max {max_documents} documents allowed.")


def enforce_total_size(files: Iterable[UploadFile], max_total_bytes: int = 50 * 1024 * 1024) -> None:
    """Enforce total upload size limit (default 50MB)."""
    total = 0
    for f in files:
        fileobj = f.file
        pos = fileobj.tell()
        fileobj.seek(0, os.SEEK_END)
        size = fileobj.tell()
        fileobj.seek(pos)
        total += size
        if total > max_total_bytes:
            limit_mb = max_total_bytes // (1024 * 1024)
            raise HTTPException(status_code=400, detail=f"Total upload size exceeds {limit_mb}MB.")


def _read_all(f: UploadFile) -> bytes:
    f.file.seek(0)
    content = f.file.read()
    f.file.seek(0)
    return content


def validate_content_types(files: Iterable[UploadFile]) -> None:
    """Validate content types and actual file content."""
    for f in files:
        normalized_type = normalize_content_type(f.content_type)

        if normalized_type not in ALLOWED_CONTENT_TYPES:
            raise HTTPException(status_code=400, detail=f"Unsupported content_type: {f.content_type}")

        content = _read_all(f)
        if normalized_type == "application/pdf":
            is_valid, error_msg = validate_pdf_content(content)
        else:
            is_valid, error_msg = validate_image_content(content)
        if not is_valid:
            raise HTTPException(status_code=400, detail=f"{f.filename}: {error_msg}")


def validate_documents_for_duplicates(files: list[UploadFile]) -> None:
    """Reject the same page or file uploaded twice."""
    seen_hashes = set()
    for f in files:
        doc_hash = calculate_document_hash(_read_all(f), normalize_content_type(f.content_type))
        if doc_hash in seen_hashes:
            raise HTTPException(status_code=400, detail=f"Duplicate document detected: {f.filename}")
        seen_hashes.add(doc_hash)


def normalize_image_bytes(content: bytes, content_type: str | None) -> tuple[bytes, str]:
    """
    If HEIC/HEIF, convert to JPEG bytes the model accepts.
    Otherwise, return as-is.
    """
    normalized_type = normalize_content_type(content_type)
    if normalized_type not in {"image/heic", "image/heif"}:
        return content, normalized_type or "application/octet-stream"

    try:
        img = Image.open(io.BytesIO(content))
        if img.mode != "RGB":
            img = img.convert("RGB")

        output = io.BytesIO()
        img.save(output, format="JPEG", quality=95)
        return output.getvalue(), "image/jpeg"
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to convert HEIC/HEIF to JPEG: {str(e)}")


async def read_document_parts(files: list[UploadFile]) -> list[DocumentPart]:
    """Read validated uploads into prompt-ready parts, in upload order."""
    parts = []
    for index, f in enumerate(files, 1):
        raw = await f.read()
        content, content_type = normalize_image_bytes(raw, f.content_type)
        parts.append(DocumentPart(
            filename=f.filename or f"document-{index}",
            content_type=content_type,
            content=content,
        ))
    return parts
