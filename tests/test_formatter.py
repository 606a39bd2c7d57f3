"""Tests for document index formatting."""

from __future__ import annotations

import pytest

from docindex.assembly.formatter import (
    build_basic_structure,
    categorize,
    format_index,
    generate_document_index,
)
from docindex.assembly.numbering import compute_page_numbers
from docindex.errors import InvalidIndexType, InvalidScheme
from docindex.models import DocumentInput, IndexType, NumberingScheme, SectionNode


def _files() -> list[DocumentInput]:
    return [
        DocumentInput(
            name="contract_2023.pdf",
            page_count=3,
            size=2048,
            uploaded_at="2024-01-01T00:00:00+00:00",
            description="Signed supply contract",
            word_count=120,
        ),
        DocumentInput(name="invoice_001.pdf", page_count=1, size=512),
    ]


class TestCategorize:
    """Test categorize heuristic."""

    @pytest.mark.parametrize(
        "name,category",
        [
            ("Contract_2023.pdf", "Contracts"),
            ("lease-agreement.pdf", "Contracts"),
            ("invoice_001.pdf", "Financial"),
            ("receipt.pdf", "Financial"),
            ("annual_report.pdf", "Reports"),
            ("cover_letter.pdf", "Correspondence"),
            ("memo.pdf", "Correspondence"),
            ("tax_form.pdf", "Forms"),
            ("notes.pdf", "General"),
        ],
    )
    def test_categories(self, name: str, category: str) -> None:
        assert categorize(name) == category

    def test_first_match_wins(self) -> None:
        assert categorize("contract_invoice.pdf") == "Contracts"


class TestBuildBasicStructure:
    """Test build_basic_structure function."""

    def test_multiple_categories(self) -> None:
        structure = build_basic_structure(_files())

        assert structure.files is None
        assert [child.title for child in structure.children] == ["Contracts", "Financial"]
        assert structure.children[0].files == ["contract_2023.pdf"]
        assert structure.children[1].description == "Financial documents"

    def test_single_category(self) -> None:
        files = [DocumentInput(name="notes.pdf"), DocumentInput(name="misc.pdf")]

        structure = build_basic_structure(files)

        assert structure.title == "Documents"
        assert structure.files == ["notes.pdf", "misc.pdf"]
        assert structure.children == []


class TestFormatIndex:
    """Test format_index function."""

    def test_simple(self) -> None:
        files = _files()
        pages = compute_page_numbers(files, "continuous")

        entries = format_index(files, {"invoice_001.pdf": "March"}, pages, "simple")

        assert [(e.title, e.pages, e.level) for e in entries] == [
            ("contract_2023.pdf", "1-3", 0),
            ("invoice_001.pdf", "4-4", 0),
        ]
        assert entries[1].description == "March"
        assert entries[0].description == ""
        assert entries[0].metadata is None

    def test_detailed(self) -> None:
        files = _files()
        pages = compute_page_numbers(files, "continuous")

        entries = format_index(files, {}, pages, IndexType.DETAILED)

        assert entries[0].metadata == {
            "size": 2048,
            "type": "application/pdf",
            "uploadedAt": "2024-01-01T00:00:00+00:00",
            "wordCount": 120,
        }
        assert entries[1].metadata["wordCount"] == 0

    def test_hierarchical_by_category(self) -> None:
        """Two categories produce two sections with one file each."""
        files = _files()
        pages = compute_page_numbers(files, "continuous")

        entries = format_index(files, {}, pages, "hierarchical")

        assert [(e.title, e.level, e.is_section) for e in entries] == [
            ("Contracts", 0, True),
            ("contract_2023.pdf", 1, False),
            ("Financial", 0, True),
            ("invoice_001.pdf", 1, False),
        ]
        assert entries[0].pages == ""
        assert entries[1].pages == "1-3"

    def test_hierarchical_single_category(self) -> None:
        files = [DocumentInput(name="notes.pdf", page_count=2)]
        pages = compute_page_numbers(files, "continuous")

        entries = format_index(files, {}, pages, "hierarchical")

        assert [(e.title, e.level, e.is_section) for e in entries] == [
            ("Documents", 0, True),
            ("notes.pdf", 1, False),
        ]

    def test_hierarchical_explicit_structure(self) -> None:
        files = _files()
        pages = compute_page_numbers(files, "continuous")
        structure = SectionNode(
            title="Case file",
            files=["contract_2023.pdf", "missing.pdf"],
            children=[
                SectionNode(
                    title="Billing",
                    files=[],
                    children=[SectionNode(title="2024", files=["invoice_001.pdf"])],
                )
            ],
        )

        entries = format_index(files, {}, pages, "hierarchical", structure)

        assert [(e.title, e.level, e.is_section) for e in entries] == [
            ("Case file", 0, True),
            ("contract_2023.pdf", 1, False),
            ("Billing", 1, True),
            ("2024", 2, True),
            ("invoice_001.pdf", 3, False),
        ]

    def test_hierarchical_structure_root_without_files(self) -> None:
        """A root without files is not listed but still nests its children."""
        files = _files()
        pages = compute_page_numbers(files, "continuous")
        structure = SectionNode.from_dict(
            {"title": "Root", "children": [{"title": "Part", "files": ["contract_2023.pdf"]}]}
        )

        entries = format_index(files, {}, pages, "hierarchical", structure)

        assert [(e.title, e.level, e.is_section) for e in entries] == [
            ("Part", 1, True),
            ("contract_2023.pdf", 2, False),
        ]

    def test_invalid_type(self) -> None:
        files = _files()
        pages = compute_page_numbers(files, "continuous")

        with pytest.raises(InvalidIndexType, match="tree"):
            format_index(files, {}, pages, "tree")


class TestGenerateDocumentIndex:
    """Test generate_document_index function."""

    def test_defaults(self) -> None:
        doc_index = generate_document_index(_files())

        assert doc_index.type is IndexType.SIMPLE
        assert doc_index.numbering_scheme is NumberingScheme.CONTINUOUS
        assert doc_index.metadata.total_files == 2
        assert doc_index.metadata.include_descriptions is True
        assert doc_index.metadata.has_structure is False
        assert doc_index.metadata.generated_at

    def test_descriptions_default_to_documents(self) -> None:
        doc_index = generate_document_index(_files())

        assert doc_index.index[0].description == "Signed supply contract"

    def test_explicit_descriptions_override(self) -> None:
        doc_index = generate_document_index(_files(), {"invoice_001.pdf": "Paid"})

        assert doc_index.index[0].description == ""
        assert doc_index.index[1].description == "Paid"

    def test_document_scheme_pages(self) -> None:
        doc_index = generate_document_index(_files(), numbering_scheme="document")

        assert doc_index.index[0].pages == "contract_2023.pdf-1-contract_2023.pdf-3"

    def test_has_structure(self) -> None:
        structure = SectionNode(title="All", files=["invoice_001.pdf"])

        doc_index = generate_document_index(
            _files(), index_type="hierarchical", structure=structure
        )

        assert doc_index.metadata.has_structure is True
        assert len(doc_index.index) == 2

    def test_invalid_inputs(self) -> None:
        with pytest.raises(InvalidIndexType):
            generate_document_index(_files(), index_type="nested")
        with pytest.raises(InvalidScheme):
            generate_document_index(_files(), numbering_scheme="roman")
