"""
Text decomposition
──────────────────
Every indicator and the section scorer read the same decomposition:

  raw        the text exactly as submitted (offsets are computed against it)
  lowered    lowercase copy with typographic apostrophes folded to "'",
             used for keyword matching only
  words      whitespace tokens
  sentences  pieces between . ! ? runs, trimmed, empties dropped
  raw_sentence_count
             number of pieces before dropping empties (what the density
             indicators divide by; never zero)
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

from nltk.tokenize import RegexpTokenizer, WhitespaceTokenizer

_WORDS = WhitespaceTokenizer()
_SENTENCES = RegexpTokenizer(r"[.!?]+", gaps=True, discard_empty=False)
_APOSTROPHES = str.maketrans({"’": "'", "ʼ": "'"})
_NON_WORD = re.compile(r"[^\w]+")


@dataclass(frozen=True)
class TextFeatures:
    raw: str
    lowered: str
    words: Tuple[str, ...]
    sentences: Tuple[str, ...]
    raw_sentence_count: int

    @property
    def clean_words(self) -> Tuple[str, ...]:
        """Lowercased words with punctuation stripped, empties dropped."""
        cleaned = (_NON_WORD.sub("", w.lower().translate(_APOSTROPHES)) for w in self.words)
        return tuple(w for w in cleaned if w)


def normalize(text: str) -> str:
    return text.lower().translate(_APOSTROPHES)


def split_sentences(text: str) -> Tuple[str, ...]:
    return tuple(s.strip() for s in _SENTENCES.tokenize(text) if s.strip())


def decompose(text: str) -> TextFeatures:
    pieces = _SENTENCES.tokenize(text)
    return TextFeatures(
        raw=text,
        lowered=normalize(text),
        words=tuple(_WORDS.tokenize(text)),
        sentences=tuple(s.strip() for s in pieces if s.strip()),
        raw_sentence_count=len(pieces),
    )


# ─── Keyword matching ───────────────────────────────────────────────────────

@lru_cache(maxsize=512)
def _phrase_pattern(phrase: str) -> "re.Pattern[str]":
    return re.compile(r"(?<!\w)" + re.escape(normalize(phrase)) + r"(?!\w)")


def contains_phrase(lowered: str, phrase: str) -> bool:
    """True when `phrase` appears in `lowered` as whole words."""
    return _phrase_pattern(phrase).search(lowered) is not None


def count_phrase(lowered: str, phrase: str) -> int:
    return len(_phrase_pattern(phrase).findall(lowered))


def count_pattern(text: str, pattern: str) -> int:
    """Number of non-overlapping case-insensitive matches of a regex."""
    return sum(1 for _ in re.finditer(pattern, text, re.IGNORECASE))


def bounded(score: float) -> float:
    """Clamp a raw heuristic value into [0, 100], rounded to 2 decimals."""
    if score != score:  # NaN
        return 0.0
    return round(min(100.0, max(0.0, float(score))), 2)
