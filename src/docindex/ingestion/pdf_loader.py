"""PDF text extraction feeding the indexing engine.

Uses PyMuPDF (fitz) to pull per-page text and the page count; everything
else about the PDF stays out of the engine.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

import fitz  # PyMuPDF

from docindex.models import DocumentInput
from docindex.utils.text import normalize_whitespace

LOGGER = logging.getLogger(__name__)


def iter_text_parts(path: Path) -> Iterator[str]:
    """Yield text content from a PDF file page by page."""
    try:
        doc = fitz.open(path)
    except Exception as exc:
        LOGGER.error("Failed to open PDF %s: %s", path, exc)
        return

    try:
        for index in range(len(doc)):
            try:
                page = doc[index]
                text = page.get_text() or ""
                normalized = normalize_whitespace([text])
                if normalized:
                    yield normalized + "\n"
            except Exception as exc:  # pragma: no cover - defensive path
                LOGGER.warning("Failed to read page %s in %s: %s", index, path, exc)
    finally:
        doc.close()


def get_page_count(path: Path) -> int:
    doc = fitz.open(path)
    try:
        return len(doc)
    finally:
        doc.close()


def load_pdf_document(path: Path) -> DocumentInput:
    """Read a PDF into the record shape the indexer consumes.

    Unreadable files come back with empty text and zero pages so they index
    as empty documents instead of failing the batch.
    """
    try:
        page_count = get_page_count(path)
    except Exception as exc:
        LOGGER.error("Failed to read page count for %s: %s", path, exc)
        page_count = 0

    stat = path.stat()
    return DocumentInput(
        name=path.name,
        text_content="".join(iter_text_parts(path)),
        page_count=page_count,
        size=stat.st_size,
        type="application/pdf",
        uploaded_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc).isoformat(),
    )
