"""Core docindex data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class IndexType(str, Enum):
    SIMPLE = "simple"
    DETAILED = "detailed"
    HIERARCHICAL = "hierarchical"


class NumberingScheme(str, Enum):
    CONTINUOUS = "continuous"
    DOCUMENT = "document"
    CUSTOM = "custom"


class ExportFormat(str, Enum):
    JSON = "json"
    CSV = "csv"
    TEXT = "text"
    HTML = "html"
    MARKDOWN = "markdown"
    PDF = "pdf"


@dataclass(slots=True)
class CustomNumbering:
    """Per-document override used by the ``custom`` numbering scheme."""

    start: int = 1
    prefix: str = ""


@dataclass(slots=True)
class DocumentInput:
    """A document as handed over by the text/page extraction stage."""

    name: str
    text_content: str = ""
    page_count: int = 0
    size: int = 0
    type: str = "application/pdf"
    uploaded_at: str = ""
    description: str = ""
    word_count: int = 0
    custom_numbering: Optional[CustomNumbering] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DocumentInput":
        if not data.get("name"):
            raise ValueError("Document record is missing a name")
        custom = data.get("customNumbering")
        return cls(
            name=str(data["name"]),
            text_content=data.get("textContent") or "",
            page_count=int(data.get("pageCount") or 0),
            size=int(data.get("size") or 0),
            type=data.get("type") or "application/pdf",
            uploaded_at=str(data.get("uploadedAt") or ""),
            description=data.get("description") or "",
            word_count=int(data.get("wordCount") or 0),
            custom_numbering=(
                CustomNumbering(
                    start=int(custom.get("start") or 1),
                    prefix=custom.get("prefix") or "",
                )
                if custom
                else None
            ),
        )


@dataclass(slots=True)
class WordEntry:
    count: int = 0
    positions: List[int] = field(default_factory=list)
    pages: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {"count": self.count, "positions": list(self.positions), "pages": self.pages}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WordEntry":
        return cls(count=data["count"], positions=list(data["positions"]), pages=data["pages"])


@dataclass(slots=True)
class PhraseEntry:
    count: int = 0
    positions: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"count": self.count, "positions": list(self.positions)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PhraseEntry":
        return cls(count=data["count"], positions=list(data["positions"]))


@dataclass(slots=True)
class FileIndex:
    """Word and phrase occurrences of a single document."""

    word_index: Dict[str, WordEntry] = field(default_factory=dict)
    phrase_index: Dict[str, PhraseEntry] = field(default_factory=dict)
    word_count: int = 0

    @property
    def phrases(self) -> List[str]:
        return list(self.phrase_index)


@dataclass(slots=True)
class WordPosting:
    files: Dict[str, WordEntry] = field(default_factory=dict)
    total_frequency: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "files": {name: entry.to_dict() for name, entry in self.files.items()},
            "totalFrequency": self.total_frequency,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WordPosting":
        return cls(
            files={name: WordEntry.from_dict(entry) for name, entry in data["files"].items()},
            total_frequency=data["totalFrequency"],
        )


@dataclass(slots=True)
class PhrasePosting:
    files: Dict[str, PhraseEntry] = field(default_factory=dict)
    total_frequency: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "files": {name: entry.to_dict() for name, entry in self.files.items()},
            "totalFrequency": self.total_frequency,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PhrasePosting":
        return cls(
            files={name: PhraseEntry.from_dict(entry) for name, entry in data["files"].items()},
            total_frequency=data["totalFrequency"],
        )


@dataclass(slots=True)
class FileMetadata:
    name: str
    size: int = 0
    page_count: int = 0
    description: str = ""
    word_count: int = 0
    processed_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "size": self.size,
            "pageCount": self.page_count,
            "description": self.description,
            "wordCount": self.word_count,
            "processedAt": self.processed_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FileMetadata":
        return cls(
            name=data["name"],
            size=data.get("size", 0),
            page_count=data.get("pageCount", 0),
            description=data.get("description", ""),
            word_count=data.get("wordCount", 0),
            processed_at=data.get("processedAt", ""),
        )


@dataclass(slots=True)
class IndexMetadata:
    total_files: int = 0
    total_words: int = 0
    unique_words: int = 0
    generated_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalFiles": self.total_files,
            "totalWords": self.total_words,
            "uniqueWords": self.unique_words,
            "generatedAt": self.generated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IndexMetadata":
        return cls(
            total_files=data["totalFiles"],
            total_words=data["totalWords"],
            unique_words=data["uniqueWords"],
            generated_at=data["generatedAt"],
        )


@dataclass(slots=True)
class MasterIndex:
    """Cross-document inverted index.

    Treated as an immutable snapshot once built: the merge step returns new
    instances instead of editing existing ones, so a finished index can be
    shared between concurrent readers.
    """

    word_index: Dict[str, WordPosting] = field(default_factory=dict)
    phrase_index: Dict[str, PhrasePosting] = field(default_factory=dict)
    file_index: Dict[str, FileMetadata] = field(default_factory=dict)
    metadata: IndexMetadata = field(default_factory=IndexMetadata)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "wordIndex": {word: posting.to_dict() for word, posting in self.word_index.items()},
            "phraseIndex": {
                phrase: posting.to_dict() for phrase, posting in self.phrase_index.items()
            },
            "fileIndex": {name: meta.to_dict() for name, meta in self.file_index.items()},
            "metadata": self.metadata.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MasterIndex":
        return cls(
            word_index={
                word: WordPosting.from_dict(posting)
                for word, posting in data.get("wordIndex", {}).items()
            },
            phrase_index={
                phrase: PhrasePosting.from_dict(posting)
                for phrase, posting in data.get("phraseIndex", {}).items()
            },
            file_index={
                name: FileMetadata.from_dict(meta)
                for name, meta in data.get("fileIndex", {}).items()
            },
            metadata=IndexMetadata.from_dict(data["metadata"]),
        )


@dataclass(slots=True, frozen=True)
class PageNumbering:
    start: int
    end: int
    prefix: str
    total: int

    def format_range(self) -> str:
        return f"{self.prefix}{self.start}-{self.prefix}{self.end}"

    def to_dict(self) -> Dict[str, Any]:
        return {"start": self.start, "end": self.end, "prefix": self.prefix, "total": self.total}


@dataclass(slots=True)
class SectionNode:
    """Node of a hierarchical document index structure.

    ``files`` set to ``None`` marks a pure container that emits no section
    entry of its own; an empty list still produces a section header.
    """

    title: str
    description: str = ""
    files: Optional[List[str]] = None
    children: List["SectionNode"] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "files": None if self.files is None else list(self.files),
            "children": [child.to_dict() for child in self.children],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SectionNode":
        files = data.get("files")
        return cls(
            title=data.get("title", ""),
            description=data.get("description", ""),
            files=None if files is None else [str(name) for name in files],
            children=[cls.from_dict(child) for child in data.get("children", [])],
        )


@dataclass(slots=True)
class DocumentIndexEntry:
    title: str
    pages: str = ""
    description: str = ""
    level: int = 0
    is_section: bool = False
    metadata: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "title": self.title,
            "pages": self.pages,
            "description": self.description,
            "level": self.level,
            "isSection": self.is_section,
        }
        if self.metadata is not None:
            data["metadata"] = dict(self.metadata)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DocumentIndexEntry":
        return cls(
            title=data["title"],
            pages=data.get("pages", ""),
            description=data.get("description", ""),
            level=data.get("level", 0),
            is_section=data.get("isSection", False),
            metadata=data.get("metadata"),
        )


@dataclass(slots=True)
class DocumentIndexMetadata:
    total_files: int = 0
    generated_at: str = ""
    include_descriptions: bool = True
    has_structure: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalFiles": self.total_files,
            "generatedAt": self.generated_at,
            "includeDescriptions": self.include_descriptions,
            "hasStructure": self.has_structure,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DocumentIndexMetadata":
        return cls(
            total_files=data["totalFiles"],
            generated_at=data["generatedAt"],
            include_descriptions=data.get("includeDescriptions", True),
            has_structure=data.get("hasStructure", False),
        )


@dataclass(slots=True)
class DocumentIndex:
    """Table-of-contents style listing of an assembled document batch."""

    type: IndexType
    numbering_scheme: NumberingScheme
    index: List[DocumentIndexEntry] = field(default_factory=list)
    metadata: DocumentIndexMetadata = field(default_factory=DocumentIndexMetadata)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "numberingScheme": self.numbering_scheme.value,
            "index": [entry.to_dict() for entry in self.index],
            "metadata": self.metadata.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DocumentIndex":
        return cls(
            type=IndexType(data["type"]),
            numbering_scheme=NumberingScheme(data["numberingScheme"]),
            index=[DocumentIndexEntry.from_dict(entry) for entry in data.get("index", [])],
            metadata=DocumentIndexMetadata.from_dict(data["metadata"]),
        )
