"""Tests for core data models."""

from __future__ import annotations

import pytest

from docindex.models import (
    CustomNumbering,
    DocumentIndexEntry,
    DocumentInput,
    FileIndex,
    PhraseEntry,
    SectionNode,
)


class TestDocumentInput:
    """Test DocumentInput parsing."""

    def test_from_dict(self) -> None:
        """Should read the camelCase upstream record."""
        document = DocumentInput.from_dict(
            {
                "name": "report.pdf",
                "textContent": "Quarterly results",
                "pageCount": 4,
                "size": 1024,
                "type": "application/pdf",
                "uploadedAt": "2024-03-01T10:00:00Z",
                "description": "Q1 report",
                "customNumbering": {"start": 5, "prefix": "R-"},
            }
        )

        assert document.name == "report.pdf"
        assert document.text_content == "Quarterly results"
        assert document.page_count == 4
        assert document.size == 1024
        assert document.uploaded_at == "2024-03-01T10:00:00Z"
        assert document.description == "Q1 report"
        assert document.custom_numbering == CustomNumbering(start=5, prefix="R-")

    def test_from_dict_defaults(self) -> None:
        """Missing fields fall back to empty values."""
        document = DocumentInput.from_dict({"name": "blank.pdf", "textContent": None})

        assert document.text_content == ""
        assert document.page_count == 0
        assert document.description == ""
        assert document.custom_numbering is None

    def test_from_dict_requires_name(self) -> None:
        with pytest.raises(ValueError, match="name"):
            DocumentInput.from_dict({"textContent": "orphan"})


class TestFileIndex:
    """Test FileIndex dataclass."""

    def test_phrases(self) -> None:
        file_index = FileIndex(phrase_index={"data processing": PhraseEntry(2, [0, 0])})

        assert file_index.phrases == ["data processing"]

    def test_defaults(self) -> None:
        file_index = FileIndex()

        assert file_index.word_count == 0
        assert file_index.word_index == {}


class TestDocumentIndexEntry:
    """Test DocumentIndexEntry serialization."""

    def test_to_dict_without_metadata(self) -> None:
        entry = DocumentIndexEntry(title="a.pdf", pages="1-2", level=1)

        assert entry.to_dict() == {
            "title": "a.pdf",
            "pages": "1-2",
            "description": "",
            "level": 1,
            "isSection": False,
        }

    def test_to_dict_with_metadata(self) -> None:
        entry = DocumentIndexEntry(title="a.pdf", metadata={"size": 10})

        assert entry.to_dict()["metadata"] == {"size": 10}


class TestSectionNode:
    """Test SectionNode parsing."""

    def test_from_dict_nested(self) -> None:
        node = SectionNode.from_dict(
            {
                "title": "Root",
                "children": [{"title": "Child", "files": ["a.pdf"]}],
            }
        )

        assert node.files is None
        assert node.children[0].title == "Child"
        assert node.children[0].files == ["a.pdf"]
        assert node.children[0].children == []

    def test_round_trip(self) -> None:
        node = SectionNode(title="Root", files=[], children=[SectionNode(title="Leaf")])

        assert SectionNode.from_dict(node.to_dict()) == node
