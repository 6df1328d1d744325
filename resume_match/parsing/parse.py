from __future__ import annotations

import io
import logging
from pathlib import Path

from docx import Document
from pypdf import PdfReader

from resume_match.errors import ParseError, UnsupportedFormat

from .models import ExtractedText

logger = logging.getLogger(__name__)

_MIME_TYPES = {
    "text/plain": "txt",
    "application/pdf": "pdf",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
}
_EXTENSIONS = {".txt": "txt", ".pdf": "pdf", ".docx": "docx"}


def _source_type(mime_type: str, original_name: str) -> str | None:
    normalized = (mime_type or "").split(";")[0].strip().lower()
    if normalized in _MIME_TYPES:
        return _MIME_TYPES[normalized]
    # Browsers often send octet-stream for uploads; trust the extension then.
    if normalized in {"", "application/octet-stream"}:
        return _EXTENSIONS.get(Path(original_name or "").suffix.lower())
    return None


def _parse_txt(content: bytes) -> tuple[str, int | None, list[str]]:
    return content.decode("utf-8", errors="replace"), None, []


def _parse_pdf(content: bytes) -> tuple[str, int | None, list[str]]:
    warnings: list[str] = []
    try:
        reader = PdfReader(io.BytesIO(content))
        pages = [(page.extract_text() or "").strip() for page in reader.pages]
    except Exception as exc:
        raise ParseError(f"PDF parsing failed: {exc}") from exc

    text_parts = [page for page in pages if page]
    if not text_parts:
        warnings.append("No extractable text found in PDF.")
    return "\n".join(text_parts), len(pages), warnings


def _parse_docx(content: bytes) -> tuple[str, int | None, list[str]]:
    warnings: list[str] = []
    try:
        document = Document(io.BytesIO(content))
    except Exception as exc:
        raise ParseError(f"DOCX parsing failed: {exc}") from exc

    paragraphs = [p.text.strip() for p in document.paragraphs if p.text and p.text.strip()]
    if not paragraphs:
        warnings.append("No extractable text found in DOCX.")
    return "\n".join(paragraphs), None, warnings


_PARSERS = {"txt": _parse_txt, "pdf": _parse_pdf, "docx": _parse_docx}


def extract_text(file_bytes: bytes, mime_type: str, original_name: str = "") -> ExtractedText:
    """Extract plain text from an uploaded resume.

    Raises UnsupportedFormat for anything other than txt, pdf or docx and
    ParseError when the document cannot be read.
    """
    source_type = _source_type(mime_type, original_name)
    if source_type is None:
        raise UnsupportedFormat(mime_type, original_name)
    if not file_bytes:
        raise ParseError("Uploaded document is empty.")

    text, page_count, warnings = _PARSERS[source_type](file_bytes)
    for warning in warnings:
        logger.info("extract_text_warning name=%s: %s", original_name or "upload", warning)

    return ExtractedText(
        text=text,
        source_type=source_type,
        mime_type=mime_type,
        original_name=original_name,
        page_count=page_count,
        parsing_warnings=warnings,
    )
