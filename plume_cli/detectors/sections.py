"""
Section Scorer
──────────────
Walks the sentences in order and keeps the suspicious ones as located spans.

1. Localization: each sentence is searched in the original text from a
   monotonic cursor (end of the previous match), so repeated sentences map to
   successive occurrences. A sentence that cannot be found is skipped; the
   cursor stays where it was.
2. Local score: fixed penalties that stack (boilerplate phrase, very long
   sentence, enumeration opener). Reasons are listed in that order.
3. Level: > high_threshold → high, > medium_threshold → medium, else low.
4. Only scores above report_threshold are emitted.

Sections come out in ascending start order. They never overlap because the
cursor only moves forward; the highlight renderer relies on it.
"""

import re
from typing import List, Optional, Sequence, Tuple

from plume_cli.config import DEFAULT_CONFIG, HeuristicConfig
from plume_cli.detectors.text import contains_phrase, normalize, split_sentences
from plume_cli.errors import LocalizationMiss
from plume_cli.log import get_logger
from plume_cli.models import Section, SuspicionLevel

logger = get_logger(__name__)


def locate(text: str, sentence: str, cursor: int) -> Tuple[int, int]:
    """Return (start, end) of the first occurrence of `sentence` at or after `cursor`."""
    start = text.find(sentence, cursor)
    if start < 0 or not sentence:
        raise LocalizationMiss(sentence, cursor)
    return start, start + len(sentence)


def classify(score: int, config: HeuristicConfig = DEFAULT_CONFIG) -> SuspicionLevel:
    if score > config.high_threshold:
        return SuspicionLevel.HIGH
    if score > config.medium_threshold:
        return SuspicionLevel.MEDIUM
    return SuspicionLevel.LOW


class SectionScorer:
    def __init__(self, config: HeuristicConfig = DEFAULT_CONFIG):
        self.config = config
        markers = "|".join(re.escape(normalize(m)) for m in config.enumeration_markers)
        self._enumeration = re.compile(rf"^(?:{markers})(?!\w)") if markers else None

    def score_sentence(self, sentence: str) -> Tuple[int, List[str]]:
        c = self.config
        lowered = normalize(sentence)
        score = 0
        reasons = []

        if any(contains_phrase(lowered, p) for p in c.boilerplate_phrases):
            score += c.boilerplate_penalty
            reasons.append(c.boilerplate_reason)

        if len(sentence.split()) > c.long_sentence_words:
            score += c.long_sentence_penalty
            reasons.append(c.long_sentence_reason)

        if self._enumeration is not None and self._enumeration.match(lowered):
            score += c.enumeration_penalty
            reasons.append(c.enumeration_reason)

        return score, reasons

    def score(self, text: str, sentences: Optional[Sequence[str]] = None) -> Tuple[Section, ...]:
        if sentences is None:
            sentences = split_sentences(text)
        sections = []
        cursor = 0
        for sentence in sentences:
            try:
                start, end = locate(text, sentence, cursor)
            except LocalizationMiss as miss:
                logger.debug("sentence_not_located", cursor=miss.cursor, sentence=sentence[:40])
                continue
            cursor = end

            score, reasons = self.score_sentence(sentence)
            if score <= self.config.report_threshold:
                continue
            sections.append(Section(
                text=text[start:end],
                start_position=start,
                end_position=end,
                suspicion_level=classify(score, self.config),
                ai_probability=min(100, score),
                reasoning=", ".join(reasons) or self.config.default_reason,
            ))
        return tuple(sections)
