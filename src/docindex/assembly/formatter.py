"""Table-of-contents style document index formatting."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional, Sequence

from docindex.assembly.numbering import compute_page_numbers
from docindex.config import coerce_index_type, coerce_scheme
from docindex.models import (
    DocumentIndex,
    DocumentIndexEntry,
    DocumentIndexMetadata,
    DocumentInput,
    IndexType,
    NumberingScheme,
    PageNumbering,
    SectionNode,
)

LOGGER = logging.getLogger(__name__)

# Checked in order; the first keyword found in the file name wins.
CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Contracts", ("contract", "agreement")),
    ("Financial", ("invoice", "receipt")),
    ("Reports", ("report",)),
    ("Correspondence", ("letter", "memo")),
    ("Forms", ("form",)),
)
DEFAULT_CATEGORY = "General"


def categorize(name: str) -> str:
    lowered = name.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return DEFAULT_CATEGORY


def build_basic_structure(files: Sequence[DocumentInput]) -> SectionNode:
    """Group files into category sections based on their names.

    With a single category every file goes into one ``Documents`` section;
    otherwise the root is a plain container holding one section per category.
    """
    groups: Dict[str, List[str]] = {}
    for file in files:
        groups.setdefault(categorize(file.name), []).append(file.name)

    if len(groups) > 1:
        return SectionNode(
            title="Documents",
            description="All documents",
            files=None,
            children=[
                SectionNode(title=category, description=f"{category} documents", files=names)
                for category, names in groups.items()
            ],
        )

    return SectionNode(
        title="Documents",
        description="All documents",
        files=[file.name for file in files],
    )


def _file_entry(
    file: DocumentInput,
    descriptions: Mapping[str, str],
    page_numbers: Mapping[str, PageNumbering],
    level: int,
) -> DocumentIndexEntry:
    return DocumentIndexEntry(
        title=file.name,
        pages=page_numbers[file.name].format_range(),
        description=descriptions.get(file.name, ""),
        level=level,
    )


def _format_hierarchical(
    files: Sequence[DocumentInput],
    descriptions: Mapping[str, str],
    page_numbers: Mapping[str, PageNumbering],
    roots: Sequence[SectionNode],
) -> List[DocumentIndexEntry]:
    by_name = {file.name: file for file in files}
    entries: List[DocumentIndexEntry] = []

    def walk(node: SectionNode, level: int) -> None:
        if node.files is not None:
            entries.append(
                DocumentIndexEntry(
                    title=node.title,
                    pages="",
                    description=node.description,
                    level=level,
                    is_section=True,
                )
            )
            for name in node.files:
                file = by_name.get(name)
                if file is None or name not in page_numbers:
                    LOGGER.warning("Structure references unknown file %s, skipping", name)
                    continue
                entries.append(_file_entry(file, descriptions, page_numbers, level + 1))

        for child in node.children:
            walk(child, level + 1)

    for root in roots:
        walk(root, 0)
    return entries


def format_index(
    files: Sequence[DocumentInput],
    descriptions: Mapping[str, str],
    page_numbers: Mapping[str, PageNumbering],
    index_type: IndexType | str,
    structure: Optional[SectionNode] = None,
) -> List[DocumentIndexEntry]:
    """Turn documents and their page ranges into ordered index entries."""
    index_type = coerce_index_type(index_type)

    if index_type is IndexType.SIMPLE:
        return [_file_entry(file, descriptions, page_numbers, 0) for file in files]

    if index_type is IndexType.DETAILED:
        entries = []
        for file in files:
            entry = _file_entry(file, descriptions, page_numbers, 0)
            entry.metadata = {
                "size": file.size,
                "type": file.type,
                "uploadedAt": file.uploaded_at,
                "wordCount": file.word_count,
            }
            entries.append(entry)
        return entries

    if structure is not None:
        return _format_hierarchical(files, descriptions, page_numbers, [structure])

    # The category container itself is not listed; its sections start at level 0.
    basic = build_basic_structure(files)
    roots = basic.children if basic.files is None else [basic]
    return _format_hierarchical(files, descriptions, page_numbers, roots)


def generate_document_index(
    files: Sequence[DocumentInput],
    descriptions: Optional[Mapping[str, str]] = None,
    *,
    index_type: IndexType | str = IndexType.SIMPLE,
    numbering_scheme: NumberingScheme | str = NumberingScheme.CONTINUOUS,
    include_descriptions: bool = True,
    structure: Optional[SectionNode] = None,
) -> DocumentIndex:
    """Number the pages of ``files`` and format them into a document index.

    ``descriptions`` defaults to each document's own description.
    """
    index_type = coerce_index_type(index_type)
    numbering_scheme = coerce_scheme(numbering_scheme)
    if descriptions is None:
        descriptions = {file.name: file.description for file in files if file.description}

    page_numbers = compute_page_numbers(files, numbering_scheme)
    entries = format_index(files, descriptions, page_numbers, index_type, structure)
    LOGGER.debug("Document index with %d entries (%s)", len(entries), index_type.value)

    return DocumentIndex(
        type=index_type,
        numbering_scheme=numbering_scheme,
        index=entries,
        metadata=DocumentIndexMetadata(
            total_files=len(files),
            generated_at=datetime.now(timezone.utc).isoformat(),
            include_descriptions=include_descriptions,
            has_structure=structure is not None,
        ),
    )
