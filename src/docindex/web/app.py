"""FastAPI application exposing the indexing engine over HTTP.

Every request carries its own document batch; nothing is stored between
requests.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, Response
from pydantic import BaseModel, ConfigDict, Field

from docindex.assembly.formatter import generate_document_index
from docindex.config import AppConfig
from docindex.errors import DocIndexError
from docindex.export.serializers import export_document_index, export_master_index, parse_format
from docindex.index.merger import IndexBuilder
from docindex.index.search import Searcher
from docindex.models import (
    CustomNumbering,
    DocumentInput,
    ExportFormat,
    MasterIndex,
    SectionNode,
)

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="docindex API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

MEDIA_TYPES = {
    ExportFormat.JSON: "application/json",
    ExportFormat.CSV: "text/csv",
    ExportFormat.TEXT: "text/plain",
    ExportFormat.HTML: "text/html",
    ExportFormat.MARKDOWN: "text/markdown",
    ExportFormat.PDF: "application/pdf",
}


class CustomNumberingPayload(BaseModel):
    start: int = 1
    prefix: str = ""


class DocumentPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    text_content: str = Field("", alias="textContent")
    page_count: int = Field(0, alias="pageCount")
    size: int = 0
    type: str = "application/pdf"
    uploaded_at: str = Field("", alias="uploadedAt")
    description: str = ""
    word_count: int = Field(0, alias="wordCount")
    custom_numbering: CustomNumberingPayload | None = Field(None, alias="customNumbering")

    def to_document(self) -> DocumentInput:
        return DocumentInput(
            name=self.name,
            text_content=self.text_content,
            page_count=self.page_count,
            size=self.size,
            type=self.type,
            uploaded_at=self.uploaded_at,
            description=self.description,
            word_count=self.word_count,
            custom_numbering=(
                CustomNumbering(**self.custom_numbering.model_dump())
                if self.custom_numbering
                else None
            ),
        )


class IndexPayload(BaseModel):
    documents: List[DocumentPayload]
    format: str | None = None


class SearchPayload(BaseModel):
    query: str
    documents: List[DocumentPayload] | None = None
    index: Dict[str, Any] | None = None
    top_k: int = 10


class DocumentIndexPayload(BaseModel):
    documents: List[DocumentPayload]
    type: str = "simple"
    numbering_scheme: str = "continuous"
    include_descriptions: bool = True
    structure: Dict[str, Any] | None = None
    format: str | None = None


def _export_response(content: str | bytes, export_format: ExportFormat) -> Response:
    media_type = MEDIA_TYPES[export_format]
    if isinstance(content, bytes):
        return Response(content=content, media_type=media_type)
    return PlainTextResponse(content=content, media_type=media_type)


def _build_master(documents: List[DocumentPayload]) -> MasterIndex:
    return IndexBuilder(AppConfig()).build([doc.to_document() for doc in documents])


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.post("/index")
async def build_index(payload: IndexPayload) -> Any:
    try:
        master = await asyncio.to_thread(_build_master, payload.documents)
        if payload.format is None:
            return master.to_dict()
        export_format = parse_format(payload.format)
        return _export_response(export_master_index(master, export_format), export_format)
    except DocIndexError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.post("/search")
async def search_documents(payload: SearchPayload) -> dict[str, Any]:
    query = payload.query.strip()
    if not query:
        raise HTTPException(status_code=400, detail="Empty query")

    top_k = max(1, min(payload.top_k, 100))

    try:
        if payload.index is not None:
            master = MasterIndex.from_dict(payload.index)
        elif payload.documents:
            master = await asyncio.to_thread(_build_master, payload.documents)
        else:
            raise HTTPException(status_code=400, detail="Either documents or index must be provided")
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=f"Malformed index: {exc}") from exc
    except DocIndexError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    results = Searcher(master).search(query, top_k=top_k)
    return {"results": [result.to_dict() for result in results]}


def _render_document_index(
    payload: DocumentIndexPayload, structure: SectionNode | None
) -> Any:
    doc_index = generate_document_index(
        [doc.to_document() for doc in payload.documents],
        index_type=payload.type,
        numbering_scheme=payload.numbering_scheme,
        include_descriptions=payload.include_descriptions,
        structure=structure,
    )
    if payload.format is None:
        return doc_index.to_dict()
    export_format = parse_format(payload.format)
    return _export_response(export_document_index(doc_index, export_format), export_format)


@app.post("/document-index")
async def build_document_index(payload: DocumentIndexPayload) -> Any:
    try:
        structure = SectionNode.from_dict(payload.structure) if payload.structure else None
    except (AttributeError, TypeError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=f"Malformed structure: {exc}") from exc

    try:
        return await asyncio.to_thread(_render_document_index, payload, structure)
    except DocIndexError as exc:
        LOGGER.warning("Document index request rejected: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
