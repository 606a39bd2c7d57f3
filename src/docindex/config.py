"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from docindex.errors import InvalidIndexType, InvalidScheme
from docindex.models import IndexType, NumberingScheme
from docindex.utils.text import RegexTokenizer


def coerce_index_type(value: IndexType | str) -> IndexType:
    try:
        return IndexType(value)
    except ValueError:
        raise InvalidIndexType(str(value)) from None


def coerce_scheme(value: NumberingScheme | str) -> NumberingScheme:
    try:
        return NumberingScheme(value)
    except ValueError:
        raise InvalidScheme(str(value)) from None


@dataclass(slots=True)
class AppConfig:
    min_word_length: int = 3
    max_word_length: int = 50
    max_phrases: int = 100
    min_phrase_count: int = 2
    phrase_boost: float = 1.5
    min_query_term_length: int = 2
    index_type: IndexType = IndexType.SIMPLE
    numbering_scheme: NumberingScheme = NumberingScheme.CONTINUOUS
    include_descriptions: bool = True
    workers: int | None = None
    output_path: Path | None = None

    def __post_init__(self) -> None:
        self.index_type = coerce_index_type(self.index_type)
        self.numbering_scheme = coerce_scheme(self.numbering_scheme)
        if self.min_word_length < 1 or self.max_word_length < self.min_word_length:
            raise ValueError(
                f"Invalid word length bounds: {self.min_word_length}..{self.max_word_length}"
            )
        if self.workers is not None and self.workers < 1:
            raise ValueError("workers must be a positive integer")

    def tokenizer(self) -> RegexTokenizer:
        return RegexTokenizer(
            min_word_length=self.min_word_length,
            max_word_length=self.max_word_length,
        )

    def resolve_output_path(self, base_dir: Path | None = None) -> Path | None:
        if self.output_path is None:
            return None
        if Path(self.output_path).is_absolute() or base_dir is None:
            return Path(self.output_path)
        return base_dir / self.output_path
