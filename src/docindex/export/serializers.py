"""Export of master and document indexes to text-based formats and PDF."""

from __future__ import annotations

import html
import io
import json
import logging
from typing import Any, List, Union

import fitz  # PyMuPDF

from docindex.errors import UnsupportedFormat
from docindex.models import DocumentIndex, ExportFormat, MasterIndex

LOGGER = logging.getLogger(__name__)

FORMAT_ALIASES = {"txt": ExportFormat.TEXT, "md": ExportFormat.MARKDOWN}

MASTER_FORMATS = frozenset({ExportFormat.JSON, ExportFormat.CSV, ExportFormat.TEXT})

MAX_CSV_POSITIONS = 10
MAX_TEXT_WORDS = 100
PAGE_LEADER = " .............. "

_HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <title>Document Index</title>
  <style>
    body {{ font-family: Arial, sans-serif; margin: 40px; }}
    .index-header {{ margin-bottom: 30px; }}
    .index-entry {{ margin: 5px 0; }}
    .section {{ font-weight: bold; margin-top: 15px; }}
    .pages {{ color: #666; margin-left: 20px; }}
    .description {{ color: #555; font-size: 0.9em; margin-left: 40px; }}
    .level-1 {{ margin-left: 20px; }}
    .level-2 {{ margin-left: 40px; }}
    .level-3 {{ margin-left: 60px; }}
  </style>
</head>
<body>
  <div class="index-header">
    <h1>Document Index</h1>
    <p>Generated: {generated_at}</p>
    <p>Total Files: {total_files}</p>
  </div>
  <div class="index-content">
{entries}  </div>
</body>
</html>
"""


def parse_format(name: Union[str, ExportFormat]) -> ExportFormat:
    if isinstance(name, ExportFormat):
        return name
    key = name.strip().lower()
    if key in FORMAT_ALIASES:
        return FORMAT_ALIASES[key]
    try:
        return ExportFormat(key)
    except ValueError:
        raise UnsupportedFormat(name) from None


def _csv_quote(value: Any) -> str:
    return '"' + str(value).replace('"', '""') + '"'


# -- master index -----------------------------------------------------------


def master_to_csv(master: MasterIndex) -> str:
    lines = ["Term,Type,File,Count,Positions"]
    for word, posting in master.word_index.items():
        for file_name, entry in posting.files.items():
            positions = "; ".join(str(p) for p in entry.positions[:MAX_CSV_POSITIONS])
            if len(entry.positions) > MAX_CSV_POSITIONS:
                positions += "..."
            lines.append(
                ",".join(
                    [
                        _csv_quote(word),
                        "word",
                        _csv_quote(file_name),
                        str(entry.count),
                        _csv_quote(positions),
                    ]
                )
            )
    return "\n".join(lines)


def master_to_text(master: MasterIndex) -> str:
    meta = master.metadata
    lines = [
        "PDF CONTENT INDEX",
        f"Generated: {meta.generated_at}",
        f"Files: {meta.total_files}",
        f"Total Words: {meta.total_words}",
        f"Unique Words: {meta.unique_words}",
        "",
        "WORD INDEX",
        "=" * 50,
    ]
    top_words = sorted(
        master.word_index.items(), key=lambda item: item[1].total_frequency, reverse=True
    )[:MAX_TEXT_WORDS]
    for word, posting in top_words:
        lines.append(f"{word} ({posting.total_frequency} occurrences):")
        for file_name, entry in posting.files.items():
            lines.append(f"  - {file_name}: {entry.count} times")
        lines.append("")
    return "\n".join(lines) + "\n"


def export_master_index(master: MasterIndex, fmt: Union[str, ExportFormat] = "json") -> str:
    """Render the searchable index as ``json``, ``csv`` or ``text``."""
    export_format = parse_format(fmt)
    if export_format not in MASTER_FORMATS:
        raise UnsupportedFormat(export_format.value)

    if export_format is ExportFormat.JSON:
        return json.dumps(master.to_dict(), indent=2)
    if export_format is ExportFormat.CSV:
        return master_to_csv(master)
    return master_to_text(master)


# -- document index ---------------------------------------------------------


def document_to_csv(doc_index: DocumentIndex) -> str:
    lines = ["Title,Pages,Description,Level,Section"]
    for entry in doc_index.index:
        lines.append(
            ",".join(
                [
                    _csv_quote(entry.title),
                    _csv_quote(entry.pages),
                    _csv_quote(entry.description),
                    str(entry.level),
                    "yes" if entry.is_section else "no",
                ]
            )
        )
    return "\n".join(lines)


def document_to_text(doc_index: DocumentIndex) -> str:
    meta = doc_index.metadata
    text = "DOCUMENT INDEX\n"
    text += f"Generated: {meta.generated_at}\n"
    text += f"Total Files: {meta.total_files}\n\n"

    for entry in doc_index.index:
        indent = "  " * entry.level
        text += f"{indent}{entry.title}"
        if entry.pages:
            text += f"{PAGE_LEADER}{entry.pages}"
        text += "\n"
        if entry.description and meta.include_descriptions:
            text += f"{indent}  {entry.description}\n"
        text += "\n"
    return text


def document_to_html(doc_index: DocumentIndex) -> str:
    meta = doc_index.metadata
    rows: List[str] = []
    for entry in doc_index.index:
        classes = ["index-entry"]
        if entry.level > 0:
            classes.append(f"level-{entry.level}")
        if entry.is_section:
            classes.append("section")

        row = f'    <div class="{" ".join(classes)}">{html.escape(entry.title)}'
        if entry.pages:
            row += f' <span class="pages">{html.escape(entry.pages)}</span>'
        rows.append(row + "</div>\n")

        if entry.description and meta.include_descriptions:
            rows.append(f'    <div class="description">{html.escape(entry.description)}</div>\n')

    return _HTML_TEMPLATE.format(
        generated_at=html.escape(meta.generated_at),
        total_files=meta.total_files,
        entries="".join(rows),
    )


def document_to_markdown(doc_index: DocumentIndex) -> str:
    meta = doc_index.metadata
    md = "# Document Index\n\n"
    md += f"*Generated: {meta.generated_at}*\n"
    md += f"*Total Files: {meta.total_files}*\n\n"

    for entry in doc_index.index:
        md += f"{'#' * min(entry.level + 1, 6)} {entry.title}"
        if entry.pages:
            md += f" \\- {entry.pages}"
        md += "\n"
        if entry.description and meta.include_descriptions:
            md += f"*{entry.description}*\n"
        md += "\n"
    return md


def document_to_pdf(doc_index: DocumentIndex) -> bytes:
    """Lay the HTML rendering out onto A4 pages."""
    story = fitz.Story(html=document_to_html(doc_index))
    buffer = io.BytesIO()
    writer = fitz.DocumentWriter(buffer)
    mediabox = fitz.paper_rect("a4")
    where = mediabox + (36, 36, -36, -36)

    more = True
    pages = 0
    while more:
        device = writer.begin_page(mediabox)
        more, _ = story.place(where)
        story.draw(device)
        writer.end_page()
        pages += 1
    writer.close()

    LOGGER.debug("Rendered document index PDF with %d pages", pages)
    return buffer.getvalue()


def export_document_index(
    doc_index: DocumentIndex, fmt: Union[str, ExportFormat] = "text"
) -> Union[str, bytes]:
    """Render a document index; ``pdf`` returns bytes, every other format text."""
    export_format = parse_format(fmt)

    if export_format is ExportFormat.JSON:
        return json.dumps(doc_index.to_dict(), indent=2)
    if export_format is ExportFormat.CSV:
        return document_to_csv(doc_index)
    if export_format is ExportFormat.TEXT:
        return document_to_text(doc_index)
    if export_format is ExportFormat.HTML:
        return document_to_html(doc_index)
    if export_format is ExportFormat.MARKDOWN:
        return document_to_markdown(doc_index)
    return document_to_pdf(doc_index)


def export_index(
    index: Union[MasterIndex, DocumentIndex], fmt: Union[str, ExportFormat] = "json"
) -> Union[str, bytes]:
    if isinstance(index, MasterIndex):
        return export_master_index(index, fmt)
    return export_document_index(index, fmt)
