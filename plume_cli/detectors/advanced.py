"""
Indicator Library: extended set (advanced analyses only)
────────────────────────────────────────────────────────
Seven finer-grained signals. Same contract as the base set: pure, bounded,
independent of every other indicator.
"""

import re
from typing import Callable, Dict

from plume_cli import config as cfg
from plume_cli.config import HeuristicConfig
from plume_cli.detectors.text import (
    TextFeatures,
    bounded,
    contains_phrase,
    count_pattern,
    count_phrase,
)


def _distinct_present(features: TextFeatures, phrases) -> int:
    return sum(1 for p in phrases if contains_phrase(features.lowered, p))


def stylistic_score(features: TextFeatures, config: HeuristicConfig) -> float:
    """Stock phrasing: "il est important de", "en résumé", stacked "notamment"."""
    hits = sum(count_pattern(features.raw, p) for p in config.stylistic_patterns)
    return bounded(hits * 25)


def register_score(features: TextFeatures, config: HeuristicConfig) -> float:
    """Formal connectors with no informal counterweight (or the reverse)."""
    formal = _distinct_present(features, config.formal_register)
    informal = _distinct_present(features, config.informal_register)
    return bounded(abs(formal - informal) * 10)


def emotion_score(features: TextFeatures, config: HeuristicConfig) -> float:
    return bounded(_distinct_present(features, config.emotional_words) * 20)


def cultural_reference_score(features: TextFeatures, config: HeuristicConfig) -> float:
    # A couple of references is normal; a checklist of clichés is not
    refs = _distinct_present(features, config.cultural_references)
    return bounded(refs * 30) if refs > 2 else 0.0


def conceptual_originality_score(features: TextFeatures, config: HeuristicConfig) -> float:
    return bounded(_distinct_present(features, config.common_concepts) * 25)


def temporal_coherence_score(features: TextFeatures, config: HeuristicConfig) -> float:
    """
    Rough tense census from verb endings. Text leaning entirely on one tense
    drifts far from an even past/present/future split and scores high.
    """
    counts = [
        len(re.findall(config.past_tense_pattern, features.lowered)),
        len(re.findall(config.present_tense_pattern, features.lowered)),
        len(re.findall(config.future_tense_pattern, features.lowered)),
    ]
    total = sum(counts)
    if total == 0:
        return 20.0
    skew = sum((c / total - 0.33) ** 2 for c in counts)
    return bounded(skew * 200)


def domain_specificity_score(features: TextFeatures, config: HeuristicConfig) -> float:
    if not features.words:
        return 0.0
    generic = sum(count_phrase(features.lowered, w) for w in config.generic_words)
    return bounded(generic / len(features.words) * 300)


EXTENDED_FUNCTIONS: Dict[str, Callable[[TextFeatures, HeuristicConfig], float]] = {
    cfg.STYLISTIC: stylistic_score,
    cfg.REGISTER: register_score,
    cfg.EMOTION: emotion_score,
    cfg.CULTURAL_REFERENCES: cultural_reference_score,
    cfg.CONCEPTUAL_ORIGINALITY: conceptual_originality_score,
    cfg.TEMPORAL_COHERENCE: temporal_coherence_score,
    cfg.DOMAIN_SPECIFICITY: domain_specificity_score,
}
