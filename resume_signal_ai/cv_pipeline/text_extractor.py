"""Extract linear text from uploaded resume files (PDF, DOCX). In-memory only."""

import re
import unicodedata
from io import BytesIO
from typing import List, Optional, Tuple

import pdfplumber
from docx import Document

from resume_signal_ai.config import MAX_UPLOAD_BYTES
from resume_signal_ai.errors import ExtractionError, ExtractionErrorReason
from resume_signal_ai.schemas.extracted_text import ExtractedText
from resume_signal_ai.schemas.raw_document import MediaType, RawDocument
from resume_signal_ai.utils.logger import get_logger

logger = get_logger(__name__)

PAGE_SEPARATOR = "\n"


def _normalize_text(text: str) -> str:
    """NFC-normalize, collapse horizontal whitespace, keep line structure."""
    if not text:
        return ""
    t = unicodedata.normalize("NFC", text)
    t = t.replace("\r\n", "\n").replace("\r", "\n")
    t = re.sub(r"[ \t\f\v\u00a0]+", " ", t)
    t = re.sub(r" +\n", "\n", t)
    t = re.sub(r"\n\s*\n\s*\n", "\n\n", t)
    return t.strip()


def _extract_pdf(document: RawDocument) -> Tuple[str, int, List[int]]:
    """Extract text page by page with pdfplumber; failing pages are skipped."""
    parts: List[str] = []
    skipped: List[int] = []
    try:
        with pdfplumber.open(BytesIO(document.content)) as pdf:
            pages = list(pdf.pages)
            for number, page in enumerate(pages, start=1):
                try:
                    ptext = page.extract_text()
                except Exception as e:
                    logger.warning("Skipping page %s of %s: %s", number, document.filename, e)
                    skipped.append(number)
                    continue
                if ptext:
                    parts.append(ptext)
    except Exception as e:
        logger.warning("PDF could not be parsed (%s): %s", document.filename, e)
        raise ExtractionError(
            ExtractionErrorReason.DECODE_FAILURE,
            f"not a readable PDF document ({e})",
            filename=document.filename,
        ) from e
    return PAGE_SEPARATOR.join(parts), len(pages), skipped


def _extract_docx(document: RawDocument) -> str:
    """Extract paragraph text, then table cells, with python-docx."""
    try:
        doc = Document(BytesIO(document.content))
    except Exception as e:
        logger.warning("DOCX could not be parsed (%s): %s", document.filename, e)
        raise ExtractionError(
            ExtractionErrorReason.DECODE_FAILURE,
            f"not a readable DOCX document ({e})",
            filename=document.filename,
        ) from e
    lines = [p.text for p in doc.paragraphs]
    for table in doc.tables:
        for row in table.rows:
            cells = [c.text.strip() for c in row.cells if c.text and c.text.strip()]
            # merged cells repeat the same text
            cells = list(dict.fromkeys(cells))
            if cells:
                lines.append(" | ".join(cells))
    return "\n".join(lines)


def validate_document(document: RawDocument) -> MediaType:
    """
    Check an upload before extraction: supported type, non-empty, within size limit.
    Returns the resolved media type.
    """
    media_type = document.resolved_media_type
    if media_type is None:
        logger.warning("Unsupported file type: %s (%s)", document.filename, document.media_type)
        raise ExtractionError(
            ExtractionErrorReason.UNSUPPORTED_FORMAT,
            f"unsupported media type '{document.media_type}', expected PDF or DOCX",
            filename=document.filename,
        )
    if document.size == 0:
        raise ExtractionError(
            ExtractionErrorReason.EMPTY_CONTENT,
            "document is empty",
            filename=document.filename,
        )
    if document.size > MAX_UPLOAD_BYTES:
        raise ExtractionError(
            ExtractionErrorReason.FILE_TOO_LARGE,
            f"document is {document.size} bytes, limit is {MAX_UPLOAD_BYTES}",
            filename=document.filename,
        )
    return media_type


def extract_text(document: RawDocument) -> ExtractedText:
    """
    Extract normalized text from a PDF or DOCX document held in memory.
    Raises ExtractionError (UNSUPPORTED_FORMAT, DECODE_FAILURE, EMPTY_CONTENT, FILE_TOO_LARGE).
    """
    media_type = validate_document(document)

    page_count: Optional[int] = None
    skipped: List[int] = []
    if media_type is MediaType.PDF:
        raw, page_count, skipped = _extract_pdf(document)
    else:
        raw = _extract_docx(document)

    text = _normalize_text(raw)
    if not text:
        raise ExtractionError(
            ExtractionErrorReason.EMPTY_CONTENT,
            "no text content could be extracted",
            filename=document.filename,
        )
    logger.info(
        "Extracted %s chars from %s (pages=%s, skipped=%s)",
        len(text), document.filename or media_type.name, page_count, skipped,
    )
    return ExtractedText(text=text, page_count=page_count, skipped_pages=skipped)
