"""Cross-document master index construction."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Dict, Optional, Sequence

from docindex.config import AppConfig
from docindex.errors import DuplicateFile, EmptyInput
from docindex.index.builder import build_document_index
from docindex.models import (
    DocumentInput,
    FileIndex,
    FileMetadata,
    IndexMetadata,
    MasterIndex,
    PhrasePosting,
    WordPosting,
)

LOGGER = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def empty_master_index(generated_at: Optional[str] = None) -> MasterIndex:
    return MasterIndex(metadata=IndexMetadata(generated_at=generated_at or _now()))


def _add_postings(index, entries, file_name: str, posting_type, *, copy: bool) -> None:
    """Add one file's entries to a word or phrase index.

    With ``copy`` existing postings are replaced rather than updated, so
    indexes that share postings with ``index`` are left untouched.
    """
    for term, entry in entries.items():
        posting = index.get(term)
        if posting is None:
            index[term] = posting_type(files={file_name: entry}, total_frequency=entry.count)
        elif copy:
            index[term] = posting_type(
                files={**posting.files, file_name: entry},
                total_frequency=posting.total_frequency + entry.count,
            )
        else:
            posting.files[file_name] = entry
            posting.total_frequency += entry.count


def merge_file_index(
    master: MasterIndex,
    file_index: FileIndex,
    file_name: str,
    *,
    metadata: Optional[FileMetadata] = None,
) -> MasterIndex:
    """Fold one document's index into ``master`` and return the new master.

    Neither argument is modified. Merging is order independent: any order of
    the same documents produces equal indexes. A file name can only be merged
    once; a second merge raises :class:`DuplicateFile`.
    """
    if file_name in master.file_index:
        raise DuplicateFile(file_name)

    word_index = dict(master.word_index)
    _add_postings(word_index, file_index.word_index, file_name, WordPosting, copy=True)
    phrase_index = dict(master.phrase_index)
    _add_postings(phrase_index, file_index.phrase_index, file_name, PhrasePosting, copy=True)

    file_meta = metadata or FileMetadata(
        name=file_name, word_count=file_index.word_count, processed_at=_now()
    )
    file_meta_index = dict(master.file_index)
    file_meta_index[file_name] = file_meta

    return MasterIndex(
        word_index=word_index,
        phrase_index=phrase_index,
        file_index=file_meta_index,
        metadata=replace(
            master.metadata,
            total_files=len(file_meta_index),
            total_words=sum(meta.word_count for meta in file_meta_index.values()),
            unique_words=len(word_index),
        ),
    )


@dataclass(slots=True)
class IndexStats:
    indexed: int = 0
    empty: int = 0
    words: int = 0
    processed_files: list[str] = field(default_factory=list)

    def record(self, name: str, file_index: FileIndex) -> None:
        if file_index.word_count:
            self.indexed += 1
        else:
            self.empty += 1
        self.words += file_index.word_count
        self.processed_files.append(name)


class IndexBuilder:
    """Builds a master index from a batch of extracted documents.

    Per-document indexes are independent, so they are built on a thread pool;
    the results are then folded into the master index in input order.
    """

    def __init__(self, config: Optional[AppConfig] = None) -> None:
        self.config = config or AppConfig()
        self.tokenizer = self.config.tokenizer()
        self.last_stats = IndexStats()

    def _index_single(self, document: DocumentInput) -> FileIndex:
        return build_document_index(
            document,
            tokenizer=self.tokenizer,
            max_phrases=self.config.max_phrases,
            min_phrase_count=self.config.min_phrase_count,
        )

    def build(self, documents: Sequence[DocumentInput]) -> MasterIndex:
        if not documents:
            raise EmptyInput()

        LOGGER.info("Indexing %d documents", len(documents))
        with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
            file_indexes = list(executor.map(self._index_single, documents))

        # Postings below are private to this build, so they are updated in place.
        stats = IndexStats()
        word_index: Dict[str, WordPosting] = {}
        phrase_index: Dict[str, PhrasePosting] = {}
        file_meta_index: Dict[str, FileMetadata] = {}
        for document, file_index in zip(documents, file_indexes):
            if document.name in file_meta_index:
                raise DuplicateFile(document.name)
            _add_postings(
                word_index, file_index.word_index, document.name, WordPosting, copy=False
            )
            _add_postings(
                phrase_index, file_index.phrase_index, document.name, PhrasePosting, copy=False
            )
            file_meta_index[document.name] = FileMetadata(
                name=document.name,
                size=document.size,
                page_count=document.page_count,
                description=document.description,
                word_count=file_index.word_count,
                processed_at=_now(),
            )
            stats.record(document.name, file_index)

        master = MasterIndex(
            word_index=word_index,
            phrase_index=phrase_index,
            file_index=file_meta_index,
            metadata=IndexMetadata(
                total_files=len(file_meta_index),
                total_words=stats.words,
                unique_words=len(word_index),
                generated_at=_now(),
            ),
        )

        self.last_stats = stats
        LOGGER.info(
            "Index built: %d files, %d words, %d unique",
            master.metadata.total_files,
            master.metadata.total_words,
            master.metadata.unique_words,
        )
        return master


def build_master_index(
    documents: Sequence[DocumentInput], config: Optional[AppConfig] = None
) -> MasterIndex:
    return IndexBuilder(config).build(documents)
