"""Page numbering for a batch of documents assembled into one volume."""

from __future__ import annotations

from typing import Dict, Sequence

from docindex.config import coerce_scheme
from docindex.models import DocumentInput, NumberingScheme, PageNumbering


def compute_page_numbers(
    files: Sequence[DocumentInput], scheme: NumberingScheme | str = NumberingScheme.CONTINUOUS
) -> Dict[str, PageNumbering]:
    """Compute the page range and prefix of every file, keyed by file name.

    ``continuous`` numbers the whole batch as one run, ``document`` restarts
    at 1 for each file using the file name as prefix, and ``custom`` uses the
    file's own ``custom_numbering`` falling back to ``"<position>-"``.
    Documents without a page count count as one page.
    """
    scheme = coerce_scheme(scheme)
    numbering: Dict[str, PageNumbering] = {}
    current_page = 1

    for position, file in enumerate(files):
        page_count = file.page_count or 1

        if scheme is NumberingScheme.CONTINUOUS:
            start, prefix = current_page, ""
            current_page += page_count
        elif scheme is NumberingScheme.DOCUMENT:
            start, prefix = 1, f"{file.name}-"
        else:
            custom = file.custom_numbering
            start = custom.start if custom and custom.start else 1
            prefix = custom.prefix if custom and custom.prefix else f"{position + 1}-"

        numbering[file.name] = PageNumbering(
            start=start,
            end=start + page_count - 1,
            prefix=prefix,
            total=page_count,
        )

    return numbering
