from __future__ import annotations

import re
from pathlib import Path
from typing import FrozenSet, Iterable, List, Optional


class DictionaryError(RuntimeError):
    pass


class Spelling:
    _punct_re = re.compile(r"[.,/#!$%^&*;®:{}=`´¿¡?|–~©()]")
    _ws_re = re.compile(r"\s+")

    def load_dictionary(self, path: str) -> FrozenSet[str]:
        p = Path(path)
        try:
            lines = p.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            raise DictionaryError(f"Cannot read dictionary {p}: {e}") from e

        # Hunspell .dic: optional word count on the first line, flags after '/'
        if lines and lines[0].strip().isdigit():
            lines = lines[1:]
        words = set()
        for line in lines:
            word = line.split("/", 1)[0].strip().lower()
            if word:
                words.add(word)
        return frozenset(words)

    def check_spelling(
        self,
        text: str,
        dictionary: Iterable[str],
        ignore_words: Optional[Iterable[str]] = None,
    ) -> List[str]:
        known = dictionary if isinstance(dictionary, (set, frozenset)) else set(dictionary)
        ignored = {w.lower() for w in (ignore_words or [])}

        clean = self._punct_re.sub("", text).lower()
        misspelled: List[str] = []
        for word in self._ws_re.split(clean):
            if not word or word in ignored or word.isdigit():
                continue
            if word not in known:
                misspelled.append(word)
        return misspelled
