"""Frequency-based search over a master index."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from docindex.config import AppConfig
from docindex.models import MasterIndex


@dataclass(slots=True)
class SearchResult:
    type: str
    term: str
    file_name: str
    count: int
    positions: List[int]
    score: float
    pages: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type,
            "term": self.term,
            "fileName": self.file_name,
            "count": self.count,
            "positions": list(self.positions),
        }
        if self.pages is not None:
            data["pages"] = self.pages
        data["score"] = self.score
        return data


def search(
    master: MasterIndex,
    query: str,
    *,
    min_term_length: int = 2,
    phrase_boost: float = 1.5,
    top_k: Optional[int] = None,
) -> List[SearchResult]:
    """Rank word and phrase hits for every term of ``query``.

    Word hits score by term frequency within the file; phrases containing the
    term score ``count * phrase_boost``. Hits are not deduplicated across
    terms.
    """
    terms = [term for term in query.lower().split() if len(term) >= min_term_length]
    results: List[SearchResult] = []

    for term in terms:
        posting = master.word_index.get(term)
        if posting is not None:
            for file_name, entry in posting.files.items():
                meta = master.file_index.get(file_name)
                word_count = meta.word_count if meta else 0
                results.append(
                    SearchResult(
                        type="word",
                        term=term,
                        file_name=file_name,
                        count=entry.count,
                        positions=entry.positions,
                        pages=entry.pages,
                        score=entry.count / word_count if word_count else 0.0,
                    )
                )

        for phrase, phrase_posting in master.phrase_index.items():
            if term not in phrase:
                continue
            for file_name, phrase_entry in phrase_posting.files.items():
                results.append(
                    SearchResult(
                        type="phrase",
                        term=phrase,
                        file_name=file_name,
                        count=phrase_entry.count,
                        positions=phrase_entry.positions,
                        score=phrase_entry.count * phrase_boost,
                    )
                )

    results.sort(key=lambda result: result.score, reverse=True)
    if top_k is not None:
        return results[:top_k]
    return results


class Searcher:
    """High-level API to query a built master index."""

    def __init__(self, master: MasterIndex, config: Optional[AppConfig] = None) -> None:
        self.master = master
        self.config = config or AppConfig()

    def search(self, query: str, *, top_k: Optional[int] = 10) -> List[SearchResult]:
        return search(
            self.master,
            query,
            min_term_length=self.config.min_query_term_length,
            phrase_boost=self.config.phrase_boost,
            top_k=top_k,
        )
