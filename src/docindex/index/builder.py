"""Per-document word and phrase index construction."""

from __future__ import annotations

import logging
import math
from typing import Optional

from docindex.index.phrases import frequent_phrases
from docindex.models import DocumentInput, FileIndex, PhraseEntry, WordEntry
from docindex.utils.text import DEFAULT_TOKENIZER, Tokenizer

LOGGER = logging.getLogger(__name__)


def estimate_page(position: int, total_words: int, page_count: Optional[int]) -> int:
    """Map a token offset onto a 1-based page, assuming evenly spread text."""
    if not page_count or total_words <= 0:
        return 1
    ratio = position / total_words
    return min(math.floor(ratio * page_count) + 1, page_count)


def build_file_index(
    text: Optional[str],
    page_count: Optional[int],
    *,
    tokenizer: Optional[Tokenizer] = None,
    max_phrases: int = 100,
    min_phrase_count: int = 2,
) -> FileIndex:
    """Build the word/phrase index of a single document.

    Missing or empty text yields an empty index instead of an error so a
    single unreadable document never aborts a batch.
    """
    if not text:
        return FileIndex()

    tokenizer = tokenizer or DEFAULT_TOKENIZER
    lowered = text.lower()
    words = tokenizer.tokenize(lowered)
    total = len(words)

    word_index: dict[str, WordEntry] = {}
    for position, word in enumerate(words):
        entry = word_index.get(word)
        if entry is None:
            # page of the first occurrence
            entry = word_index[word] = WordEntry(
                pages=estimate_page(position, total, page_count)
            )
        entry.count += 1
        entry.positions.append(position)

    phrase_index: dict[str, PhraseEntry] = {}
    for phrase, count in frequent_phrases(
        lowered, tokenizer=tokenizer, max_phrases=max_phrases, min_count=min_phrase_count
    ):
        # Only the first offset is located; it is repeated once per occurrence.
        offset = lowered.find(phrase)
        phrase_index[phrase] = PhraseEntry(count=count, positions=[offset] * count)

    return FileIndex(word_index=word_index, phrase_index=phrase_index, word_count=total)


def build_document_index(
    document: DocumentInput,
    *,
    tokenizer: Optional[Tokenizer] = None,
    max_phrases: int = 100,
    min_phrase_count: int = 2,
) -> FileIndex:
    if not document.text_content:
        LOGGER.warning("No text content for %s, indexing it as empty", document.name)
    else:
        LOGGER.debug("Indexing %s (%d pages)", document.name, document.page_count)
    return build_file_index(
        document.text_content,
        document.page_count,
        tokenizer=tokenizer,
        max_phrases=max_phrases,
        min_phrase_count=min_phrase_count,
    )
