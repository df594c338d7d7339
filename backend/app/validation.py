"""
Validation utilities for uploaded documents and pasted text.
"""
from __future__ import annotations

import hashlib
import io

import imagehash
from PIL import Image

PDF_MAGIC = b"%PDF-"


def calculate_document_hash(content: bytes, content_type: str | None) -> str:
    """Hash used for duplicate detection. Perceptual for images, SHA256 for everything else."""
    if content_type == "application/pdf":
        return hashlib.sha256(content).hexdigest()

    try:
        img = Image.open(io.BytesIO(content))
        return str(imagehash.average_hash(img))
    except (OSError, ValueError):
        # Unreadable images are rejected by validate_image_content; hash raw bytes meanwhile
        return hashlib.sha256(content).hexdigest()


def validate_image_content(content: bytes) -> tuple[bool, str | None]:
    """
    Validate that file content is actually a readable image of a photographed page.
    Returns (is_valid, error_message).
    """
    try:
        img = Image.open(io.BytesIO(content))
        img.verify()

        img = Image.open(io.BytesIO(content))  # Reopen after verify
        width, height = img.size
    except Exception as e:
        return False, f"Invalid image file: {str(e)}"

    if width < 100 or height < 100:
        return False, "Image dimensions too small (minimum 100x100)"

    if width > 10000 or height > 10000:
        return False, "Image dimensions too large (maximum 10000x10000)"

    return True, None


def validate_pdf_content(content: bytes) -> tuple[bool, str | None]:
    """Check the PDF header. Returns (is_valid, error_message)."""
    if not content.startswith(PDF_MAGIC):
        return False, "Invalid PDF file: missing %PDF header"
    return True, None


def validate_text_length(text: str | None, max_length: int = 50_000) -> tuple[bool, str | None]:
    """Validate pasted text length. Returns (is_valid, error_message)."""
    if text is None:
        return True, None  # Pasted text is optional

    if len(text) > max_length:
        return False, f"Text exceeds maximum length of {max_length} characters"

    return True, None


def sanitize_text(text: str | None, max_length: int = 50_000) -> str | None:
    """
    Remove null bytes and control characters (except newlines and tabs)
    before the text is forwarded to the model.
    """
    if text is None:
        return None

    sanitized = "".join(char for char in text if ord(char) >= 32 or char in "\n\t")

    if len(sanitized) > max_length:
        sanitized = sanitized[:max_length]

    return sanitized
