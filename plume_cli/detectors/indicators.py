"""
Indicator Library: base set
───────────────────────────
Eight indicators computed for every analysis. Each one is a pure function of
the text decomposition and the heuristic tables, returning a score in
[0, 100] where high means "reads like generated text":

  sentence_length          regular sentence lengths around 15-25 words
  vocabulary_repetition    share of content words used more than once
  transitions              over-use of connectors (cependant, en outre...)
  syntax_complexity        relative/concessive/final clauses per sentence,
                           suspicious when uniformly absent or dense
  temporal_markers         "de nos jours", "actuellement"... per sentence
  lexical_coherence        vocabulary locked onto a single semantic domain
  punctuation              punctuation marks per sentence in the 3-6 band
  argumentative_structure  premièrement / d'autre part / en conclusion

The extended set lives in `advanced.py`; :class:`IndicatorLibrary` runs both.
"""

from typing import Callable, Dict, Tuple

import numpy as np

from plume_cli import config as cfg
from plume_cli.config import DEFAULT_CONFIG, HeuristicConfig
from plume_cli.detectors import advanced
from plume_cli.detectors.text import (
    TextFeatures,
    bounded,
    contains_phrase,
    count_pattern,
    count_phrase,
    normalize,
)
from plume_cli.models import AnalysisType, Indicator

IndicatorFn = Callable[[TextFeatures, HeuristicConfig], float]


def sentence_length_score(features: TextFeatures, config: HeuristicConfig) -> float:
    """
    Generated prose keeps sentence lengths in a narrow band. Low variance of
    words-per-sentence scores high; an average parked between 15 and 25 words
    adds up to 60 more points.
    """
    if not features.sentences:
        return 20.0
    lengths = np.array([len(s.split()) for s in features.sentences], dtype=float)
    avg = float(lengths.mean())
    variance = float(lengths.var())

    regularity = max(0.0, 100.0 - variance * 2)
    length_suspicion = min(60.0, abs(20 - avg) * 3) if 15 < avg < 25 else 0.0
    return bounded(regularity + length_suspicion)


def vocabulary_repetition_score(features: TextFeatures, config: HeuristicConfig) -> float:
    counts: Dict[str, int] = {}
    for word in features.clean_words:
        if len(word) > 3:
            counts[word] = counts.get(word, 0) + 1
    if not counts:
        return 0.0
    repeated = sum(1 for c in counts.values() if c > 1)
    return bounded(repeated / len(counts) * 150)


def transition_score(features: TextFeatures, config: HeuristicConfig) -> float:
    sentences = [normalize(s) for s in features.sentences]
    if not sentences:
        return 0.0

    transition_count = 0
    chained = 0
    for index, sentence in enumerate(sentences):
        if not any(contains_phrase(sentence, t) for t in config.transitions):
            continue
        transition_count += 1
        # A connector right after a sentence already built on "ainsi"
        if index > 0 and contains_phrase(sentences[index - 1], config.chained_transition):
            chained += 1

    ratio = transition_count / len(sentences)
    excessive = (ratio - 0.4) * 200 if ratio > 0.4 else 0.0
    pattern = chained * 15 if chained > 2 else 0.0
    return bounded(excessive + pattern)


def syntax_complexity_score(features: TextFeatures, config: HeuristicConfig) -> float:
    matches = sum(count_pattern(features.raw, p) for p in config.complex_structures)
    ratio = matches / features.raw_sentence_count
    # Both extremes are suspicious: flat syntax, or relentlessly nested syntax
    if ratio < 0.1:
        return 60.0
    if ratio > 0.8:
        return 75.0
    return bounded(ratio * 40)


def temporal_marker_score(features: TextFeatures, config: HeuristicConfig) -> float:
    markers = sum(count_phrase(features.lowered, m) for m in config.temporal_markers)
    return bounded(markers / features.raw_sentence_count * 120)


def lexical_coherence_score(features: TextFeatures, config: HeuristicConfig) -> float:
    vocabulary = set(features.clean_words)
    shares = [
        sum(1 for w in words if normalize(w) in vocabulary) / len(words)
        for _, words in config.lexical_domains
        if words
    ]
    if not shares:
        return 0.0
    coherence = max(shares) * 100
    return bounded(coherence if coherence > 80 else coherence * 0.7)


def punctuation_score(features: TextFeatures, config: HeuristicConfig) -> float:
    marks = sum(1 for c in features.raw if c in ".!?;:,")
    avg = marks / features.raw_sentence_count
    if 3 < avg < 6:
        return bounded(abs(4.5 - avg) * 20)
    return 0.0


def argumentative_structure_score(features: TextFeatures, config: HeuristicConfig) -> float:
    sentences = [normalize(s) for s in features.sentences]
    if not sentences:
        return 0.0

    structured = 0
    interior = 0
    for index, sentence in enumerate(sentences):
        if any(contains_phrase(sentence, m) for m in config.argumentative_markers):
            structured += 1
            if 0 < index < len(sentences) - 1:
                interior += 1

    bonus = 30.0 if interior > 3 else 0.0
    return bounded(structured / len(sentences) * 100 + bonus)


BASE_FUNCTIONS: Dict[str, IndicatorFn] = {
    cfg.SENTENCE_LENGTH: sentence_length_score,
    cfg.VOCABULARY_REPETITION: vocabulary_repetition_score,
    cfg.TRANSITIONS: transition_score,
    cfg.SYNTAX_COMPLEXITY: syntax_complexity_score,
    cfg.TEMPORAL_MARKERS: temporal_marker_score,
    cfg.LEXICAL_COHERENCE: lexical_coherence_score,
    cfg.PUNCTUATION: punctuation_score,
    cfg.ARGUMENTATIVE_STRUCTURE: argumentative_structure_score,
}

ALL_FUNCTIONS: Dict[str, IndicatorFn] = {**BASE_FUNCTIONS, **advanced.EXTENDED_FUNCTIONS}


class IndicatorLibrary:
    """Runs the indicator functions named by the configured profiles."""

    def __init__(self, config: HeuristicConfig = DEFAULT_CONFIG):
        self.config = config

    def compute(self, features: TextFeatures, analysis_type: AnalysisType) -> Tuple[Indicator, ...]:
        profiles = self.config.base_profiles
        if analysis_type == AnalysisType.ADVANCED:
            profiles = profiles + self.config.extended_profiles

        indicators = []
        for profile in profiles:
            fn = ALL_FUNCTIONS[profile.key]
            indicators.append(Indicator(
                name=profile.name,
                score=bounded(fn(features, self.config)),
                description=profile.description,
                weight=profile.weight,
            ))
        return tuple(indicators)
