from __future__ import annotations

from typing import FrozenSet, Iterable, List, Optional

from .spelling import DictionaryError, Spelling


def load_dictionary(path: str) -> FrozenSet[str]:
    """Public API (Spelling): read a Hunspell-style .dic word list, lower-cased."""
    return Spelling().load_dictionary(path)


def check_spelling(text: str, dictionary: Iterable[str], ignore_words: Optional[Iterable[str]] = None) -> List[str]:
    """Public API (Spelling)

    Contract:
    - Strip punctuation, lower-case, split on whitespace.
    - Skip empty tokens, ignore_words (case-insensitive) and pure numbers.
    - Return unknown words in text order (duplicates kept).
    """
    return Spelling().check_spelling(text, dictionary, ignore_words)
