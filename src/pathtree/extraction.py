from __future__ import annotations

import io
import logging
import mimetypes
import zipfile
from pathlib import Path

import docx
import fitz
from docx.opc.exceptions import PackageNotFoundError

from .errors import ExtractionError, UnsupportedMediaTypeError
from .indexer import index
from .models import ExtractedDocument

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

_EXTRA_TYPES = {
    ".docx": DOCX_MEDIA_TYPE,
    ".md": "text/markdown",
}


def guess_media_type(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix in _EXTRA_TYPES:
        return _EXTRA_TYPES[suffix]
    media_type, _ = mimetypes.guess_type(path.name)
    return media_type or "application/octet-stream"


def _pdf_text(buffer: bytes) -> str:
    try:
        doc = fitz.open(stream=buffer, filetype="pdf")
    except (RuntimeError, ValueError) as exc:
        raise ExtractionError(f"Could not open PDF: {exc}") from exc

    with doc:
        return "\n".join(page.get_text("text") for page in doc)


def _docx_text(buffer: bytes) -> str:
    try:
        document = docx.Document(io.BytesIO(buffer))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as exc:
        raise ExtractionError(f"Could not open Word document: {exc}") from exc
    return "\n".join(paragraph.text for paragraph in document.paragraphs)


def extract(buffer: bytes, media_type: str) -> str:
    media_type = (media_type or "").split(";")[0].strip().lower()
    if media_type == PDF_MEDIA_TYPE:
        text = _pdf_text(buffer)
    elif media_type == DOCX_MEDIA_TYPE:
        text = _docx_text(buffer)
    elif media_type.startswith("text/"):
        text = buffer.decode("utf-8", errors="replace")
    else:
        raise UnsupportedMediaTypeError(media_type)

    logger.debug("Extracted %d characters from %s document", len(text), media_type)
    return text


def ingest(buffer: bytes, media_type: str) -> ExtractedDocument:
    raw_text = extract(buffer, media_type)
    topics, sections, concepts = index(raw_text)
    logger.info(
        "Indexed document: %d topics, %d sections, %d concepts",
        len(topics),
        len(sections),
        len(concepts),
    )
    return ExtractedDocument(
        raw_text=raw_text,
        topics=tuple(topics),
        sections=tuple(sections),
        concepts=tuple(concepts),
    )
