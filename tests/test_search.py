"""Tests for master index search."""

from __future__ import annotations

import pytest

from docindex.config import AppConfig
from docindex.index.merger import build_master_index
from docindex.index.search import SearchResult, Searcher, search
from docindex.models import (
    DocumentInput,
    FileMetadata,
    IndexMetadata,
    MasterIndex,
    PhraseEntry,
    PhrasePosting,
    WordEntry,
    WordPosting,
)


def _master() -> MasterIndex:
    return MasterIndex(
        word_index={
            "invoice": WordPosting(
                files={"A.pdf": WordEntry(count=5, positions=[1, 9, 20, 40, 80], pages=1)},
                total_frequency=5,
            )
        },
        phrase_index={
            "invoice total": PhrasePosting(
                files={"A.pdf": PhraseEntry(count=2, positions=[4, 4])},
                total_frequency=2,
            )
        },
        file_index={"A.pdf": FileMetadata(name="A.pdf", word_count=100)},
        metadata=IndexMetadata(total_files=1, total_words=100, unique_words=1),
    )


class TestSearchResult:
    """Test SearchResult dataclass."""

    def test_to_dict(self) -> None:
        result = SearchResult(
            type="word",
            term="invoice",
            file_name="A.pdf",
            count=5,
            positions=[1],
            score=0.05,
            pages=1,
        )

        assert result.to_dict() == {
            "type": "word",
            "term": "invoice",
            "fileName": "A.pdf",
            "count": 5,
            "positions": [1],
            "pages": 1,
            "score": 0.05,
        }

    def test_to_dict_without_pages(self) -> None:
        result = SearchResult(
            type="phrase", term="x y", file_name="A.pdf", count=2, positions=[0], score=3.0
        )

        assert "pages" not in result.to_dict()


class TestSearch:
    """Test search function."""

    def test_word_score_is_term_frequency(self) -> None:
        results = search(_master(), "invoice")

        word_hits = [r for r in results if r.type == "word"]
        assert len(word_hits) == 1
        assert word_hits[0].file_name == "A.pdf"
        assert word_hits[0].score == pytest.approx(0.05)
        assert word_hits[0].pages == 1

    def test_phrase_hits_are_boosted(self) -> None:
        results = search(_master(), "invoice")

        assert results[0].type == "phrase"
        assert results[0].term == "invoice total"
        assert results[0].score == pytest.approx(3.0)
        assert results[0].pages is None

    def test_phrase_substring_match(self) -> None:
        """A term matches any phrase containing it."""
        results = search(_master(), "tot")

        assert [r.term for r in results] == ["invoice total"]

    def test_query_is_case_insensitive(self) -> None:
        assert len(search(_master(), "INVOICE")) == 2

    def test_short_terms_ignored(self) -> None:
        assert search(_master(), "a") == []

    def test_unknown_term(self) -> None:
        assert search(_master(), "contract") == []

    def test_results_not_deduplicated(self) -> None:
        """Repeated terms yield repeated evidence."""
        results = search(_master(), "invoice invoice")

        assert len(results) == 4

    def test_sorted_by_score(self) -> None:
        master = build_master_index(
            [
                DocumentInput(name="a.pdf", text_content="invoice payment payment payment"),
                DocumentInput(name="b.pdf", text_content="invoice invoice payment"),
            ]
        )

        results = search(master, "invoice")

        assert [r.file_name for r in results] == ["b.pdf", "a.pdf"]
        assert results[0].score == pytest.approx(2 / 3)
        assert results[1].score == pytest.approx(1 / 4)

    def test_top_k(self) -> None:
        assert len(search(_master(), "invoice", top_k=1)) == 1


class TestSearcher:
    """Test Searcher class."""

    def test_uses_config(self) -> None:
        searcher = Searcher(_master(), AppConfig(phrase_boost=2.0))

        results = searcher.search("invoice")

        assert results[0].score == pytest.approx(4.0)

    def test_default_top_k(self) -> None:
        results = Searcher(_master()).search("invoice " * 20)

        assert len(results) == 10
