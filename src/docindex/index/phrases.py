"""Frequent 2- and 3-word phrase extraction."""

from __future__ import annotations

from collections import Counter
from typing import List, Optional, Tuple

from docindex.utils.text import DEFAULT_TOKENIZER, Tokenizer


def count_phrase_candidates(text: str, *, tokenizer: Optional[Tokenizer] = None) -> Counter[str]:
    """Count every bigram and trigram candidate across the sentences of ``text``.

    A bigram is kept when neither word is a stop word. A trigram only checks
    its first and last word, so a stop word in the middle is allowed
    ("bill of sale").
    """
    tokenizer = tokenizer or DEFAULT_TOKENIZER
    counts: Counter[str] = Counter()

    for sentence in tokenizer.sentences(text):
        words = tokenizer.words(sentence)
        for i in range(len(words) - 1):
            first, second = words[i], words[i + 1]
            if not tokenizer.is_stop_word(first) and not tokenizer.is_stop_word(second):
                counts[f"{first} {second}"] += 1

            if i < len(words) - 2:
                third = words[i + 2]
                if not tokenizer.is_stop_word(first) and not tokenizer.is_stop_word(third):
                    counts[f"{first} {second} {third}"] += 1

    return counts


def frequent_phrases(
    text: str,
    *,
    tokenizer: Optional[Tokenizer] = None,
    max_phrases: int = 100,
    min_count: int = 2,
) -> List[Tuple[str, int]]:
    """Return ``(phrase, count)`` pairs seen at least ``min_count`` times."""
    counts = count_phrase_candidates(text, tokenizer=tokenizer)
    # sorted() is stable: ties keep first-appearance order
    ranked = sorted(
        ((phrase, count) for phrase, count in counts.items() if count >= min_count),
        key=lambda item: item[1],
        reverse=True,
    )
    return ranked[:max_phrases]


def extract_phrases(
    text: str,
    *,
    tokenizer: Optional[Tokenizer] = None,
    max_phrases: int = 100,
    min_count: int = 2,
) -> List[str]:
    """Return the most frequent phrases of ``text``, most frequent first."""
    return [
        phrase
        for phrase, _ in frequent_phrases(
            text, tokenizer=tokenizer, max_phrases=max_phrases, min_count=min_count
        )
    ]
