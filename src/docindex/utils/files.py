"""Utility helpers for working with files."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator


def iter_pdf_paths(inputs: Iterable[Path]) -> Iterator[Path]:
    """Yield PDF paths from input paths, descending into directories."""
    for item in inputs:
        if item.is_dir():
            yield from iter_pdf_paths(sorted(child for child in item.rglob("*.pdf")))
        elif item.is_file() and item.suffix.lower() == ".pdf":
            yield item


def is_manifest(path: Path) -> bool:
    return path.is_file() and path.suffix.lower() == ".json"


def write_output(path: Path, content: str | bytes) -> None:
    """Write an export to ``path``, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
