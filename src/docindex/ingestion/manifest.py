"""Loading document batches from JSON manifests, PDFs and directories."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Sequence

from docindex.ingestion.pdf_loader import load_pdf_document
from docindex.models import DocumentInput, SectionNode
from docindex.utils.files import is_manifest, iter_pdf_paths

LOGGER = logging.getLogger(__name__)


def parse_documents(data: Any) -> List[DocumentInput]:
    """Accept either a list of document records or ``{"documents": [...]}``."""
    if isinstance(data, dict):
        data = data.get("documents", [])
    if not isinstance(data, list):
        raise ValueError("Manifest must be a list of documents or an object with 'documents'")
    return [DocumentInput.from_dict(record) for record in data]


def load_manifest(path: Path) -> List[DocumentInput]:
    with path.open("r", encoding="utf-8") as handle:
        documents = parse_documents(json.load(handle))
    LOGGER.debug("Loaded %d documents from %s", len(documents), path)
    return documents


def load_structure(path: Path) -> SectionNode:
    with path.open("r", encoding="utf-8") as handle:
        return SectionNode.from_dict(json.load(handle))


def load_documents(inputs: Sequence[Path]) -> List[DocumentInput]:
    """Collect documents from manifests, PDF files and directories, in order."""
    documents: List[DocumentInput] = []
    for item in inputs:
        if is_manifest(item):
            documents.extend(load_manifest(item))
            continue
        for pdf_path in iter_pdf_paths([item]):
            LOGGER.info("Reading %s", pdf_path)
            documents.append(load_pdf_document(pdf_path))
    return documents
