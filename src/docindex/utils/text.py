"""Text helpers: word tokenization, sentence splitting and whitespace cleanup."""

from __future__ import annotations

import re
from typing import AbstractSet, Iterable, List, Protocol

# English function words excluded from the index.
STOP_WORDS: frozenset[str] = frozenset(
    """
    the be to of and a in that have i it for not on with he as you do at
    this but his by from they we say her she or an will my one all would
    there their what so up out if about who get which go me when make can
    like time no just him know take people into year your good some could
    them see other than then now look only come its over think also back
    after use two how our work first well way even new want because any
    these give day most us
    """.split()
)

_WORD_RE = re.compile(r"\b[a-z]+\b", re.ASCII)
_SENTENCE_RE = re.compile(r"[.!?]+")


class Tokenizer(Protocol):
    """Capability used by the index builders to turn text into tokens."""

    def words(self, text: str) -> List[str]: ...

    def tokenize(self, text: str) -> List[str]: ...

    def sentences(self, text: str) -> List[str]: ...

    def is_stop_word(self, word: str) -> bool: ...


class RegexTokenizer:
    """Lowercasing ``[a-z]+`` tokenizer with length and stop-word filters."""

    def __init__(
        self,
        *,
        min_word_length: int = 3,
        max_word_length: int = 50,
        stop_words: AbstractSet[str] = STOP_WORDS,
    ) -> None:
        if min_word_length < 1 or max_word_length < min_word_length:
            raise ValueError(
                f"Invalid word length bounds: {min_word_length}..{max_word_length}"
            )
        self.min_word_length = min_word_length
        self.max_word_length = max_word_length
        self.stop_words = stop_words

    def words(self, text: str) -> List[str]:
        """Return every lowercase alphabetic word, unfiltered."""
        if not text:
            return []
        return _WORD_RE.findall(text.lower())

    def tokenize(self, text: str) -> List[str]:
        return [
            word
            for word in self.words(text)
            if self.min_word_length <= len(word) <= self.max_word_length
            and word not in self.stop_words
        ]

    def sentences(self, text: str) -> List[str]:
        if not text:
            return []
        return [piece.strip() for piece in _SENTENCE_RE.split(text) if piece.strip()]

    def is_stop_word(self, word: str) -> bool:
        return word in self.stop_words


DEFAULT_TOKENIZER = RegexTokenizer()


def tokenize(text: str) -> List[str]:
    return DEFAULT_TOKENIZER.tokenize(text)


def sentence_split(text: str) -> List[str]:
    return DEFAULT_TOKENIZER.sentences(text)


def normalize_whitespace(lines: Iterable[str]) -> str:
    """Collapse whitespace and join lines."""
    return "\n".join(line.strip() for line in lines if line.strip())
