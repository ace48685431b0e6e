"""
Configuration
─────────────
Two layers:

  Settings         runtime knobs read from the environment (.env supported):
                   database path, log level/format, boundary limits.
  HeuristicConfig  the read-only heuristic tables (keyword lists, indicator
                   profiles, thresholds, section penalties, attribution rules).
                   Injected into the indicator library, the section scorer and
                   the attribution rules; swap it to test alternate tables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from dotenv import find_dotenv, load_dotenv

from plume_cli.errors import ConfigError

load_dotenv(find_dotenv(usecwd=True))


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{name} doit être un nombre entier (valeur reçue : {value!r})") from None


@dataclass(frozen=True)
class Settings:
    """Environment-driven settings. Built by :func:`get_settings`."""

    db_path: Path = Path("plume.db")
    log_level: str = "WARNING"
    log_format: str = "console"
    min_text_length: int = 10
    max_text_length: int = 50_000
    max_file_size: int = 10 * 1024 * 1024


def get_settings() -> Settings:
    return Settings(
        db_path=Path(os.getenv("PLUME_DB_PATH", "plume.db")),
        log_level=os.getenv("PLUME_LOG_LEVEL", "WARNING").upper(),
        log_format=os.getenv("PLUME_LOG_FORMAT", "console").strip().lower(),
        min_text_length=_env_int("PLUME_MIN_TEXT_LENGTH", 10),
        max_text_length=_env_int("PLUME_MAX_TEXT_LENGTH", 50_000),
        max_file_size=_env_int("PLUME_MAX_FILE_SIZE", 10 * 1024 * 1024),
    )


# ─── Indicator profiles ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class IndicatorProfile:
    """Fixed name/description/weight of one indicator, keyed by function."""
    key: str
    name: str
    description: str
    weight: float


SENTENCE_LENGTH = "sentence_length"
VOCABULARY_REPETITION = "vocabulary_repetition"
TRANSITIONS = "transitions"
SYNTAX_COMPLEXITY = "syntax_complexity"
TEMPORAL_MARKERS = "temporal_markers"
LEXICAL_COHERENCE = "lexical_coherence"
PUNCTUATION = "punctuation"
ARGUMENTATIVE_STRUCTURE = "argumentative_structure"

STYLISTIC = "stylistic"
REGISTER = "register"
EMOTION = "emotion"
CULTURAL_REFERENCES = "cultural_references"
CONCEPTUAL_ORIGINALITY = "conceptual_originality"
TEMPORAL_COHERENCE = "temporal_coherence"
DOMAIN_SPECIFICITY = "domain_specificity"

BASE_PROFILES = (
    IndicatorProfile(SENTENCE_LENGTH, "Longueur des phrases",
                     "Mesure la régularité de la longueur des phrases", 1.2),
    IndicatorProfile(VOCABULARY_REPETITION, "Vocabulaire répétitif",
                     "Détecte l'usage répétitif de mots ou expressions", 1.5),
    IndicatorProfile(TRANSITIONS, "Transition entre idées",
                     "Analyse la fluidité des transitions", 1.3),
    IndicatorProfile(SYNTAX_COMPLEXITY, "Complexité syntaxique",
                     "Évalue la complexité des structures de phrases", 1.4),
    IndicatorProfile(TEMPORAL_MARKERS, "Marqueurs temporels",
                     "Détecte l'usage artificiel de marqueurs temporels", 1.1),
    IndicatorProfile(LEXICAL_COHERENCE, "Cohérence lexicale",
                     "Mesure la cohérence du vocabulaire utilisé", 1.6),
    IndicatorProfile(PUNCTUATION, "Patterns de ponctuation",
                     "Analyse les patterns de ponctuation", 1.0),
    IndicatorProfile(ARGUMENTATIVE_STRUCTURE, "Structure argumentative",
                     "Évalue la structure des arguments", 1.3),
)

EXTENDED_PROFILES = (
    IndicatorProfile(STYLISTIC, "Analyse stylistique",
                     "Détecte les patterns stylistiques d'IA", 1.8),
    IndicatorProfile(REGISTER, "Métadonnées linguistiques",
                     "Analyse le déséquilibre entre registre soutenu et familier", 1.5),
    IndicatorProfile(EMOTION, "Émotions et subjectivité",
                     "Détecte l'artificialité des émotions", 1.4),
    IndicatorProfile(CULTURAL_REFERENCES, "Références culturelles",
                     "Analyse la pertinence des références", 1.2),
    IndicatorProfile(CONCEPTUAL_ORIGINALITY, "Originalité conceptuelle",
                     "Mesure l'originalité des concepts", 1.7),
    IndicatorProfile(TEMPORAL_COHERENCE, "Cohérence temporelle",
                     "Vérifie la cohérence temporelle", 1.3),
    IndicatorProfile(DOMAIN_SPECIFICITY, "Spécificité du domaine",
                     "Évalue la spécificité du vocabulaire", 1.4),
)


# ─── Attribution rules ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class AttributionRule:
    """`label` is attributed when indicator `indicator_key` scores above `threshold`."""
    indicator_key: str
    threshold: float
    label: str


ATTRIBUTION_RULES = (
    AttributionRule(ARGUMENTATIVE_STRUCTURE, 80.0, "ChatGPT/GPT-4"),
    AttributionRule(STYLISTIC, 75.0, "Claude/Gemini"),
    AttributionRule(VOCABULARY_REPETITION, 70.0, "Generic model"),
)


# ─── Heuristic tables ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class HeuristicConfig:
    base_profiles: Tuple[IndicatorProfile, ...] = BASE_PROFILES
    extended_profiles: Tuple[IndicatorProfile, ...] = EXTENDED_PROFILES

    # Base indicators
    transitions: Tuple[str, ...] = (
        "cependant", "néanmoins", "toutefois", "en outre", "par ailleurs",
        "de plus", "en effet", "ainsi", "par conséquent", "donc",
        "en revanche", "au contraire", "malgré tout", "bien que",
    )
    chained_transition: str = "ainsi"
    complex_structures: Tuple[str, ...] = (
        r"\b(qui|que|dont|où)\b.*\b(qui|que|dont|où)\b",
        r"\b(bien que|quoique|malgré que)\b",
        r"\b(afin que|pour que|de sorte que)\b",
        r"\b(si.*alors|si.*,.*)",
    )
    temporal_markers: Tuple[str, ...] = (
        "aujourd'hui", "actuellement", "de nos jours", "à l'heure actuelle",
        "récemment", "dernièrement", "auparavant", "jadis", "autrefois",
    )
    lexical_domains: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
        ("éducation", ("étudiant", "école", "université", "cours", "professeur", "apprentissage")),
        ("technologie", ("technologie", "numérique", "ordinateur", "internet", "logiciel")),
        ("société", ("société", "social", "communauté", "culture", "politique")),
        ("science", ("recherche", "étude", "analyse", "méthode", "résultat", "données")),
    )
    argumentative_markers: Tuple[str, ...] = (
        "premièrement", "deuxièmement", "troisièmement", "enfin",
        "d'une part", "d'autre part", "en premier lieu", "en conclusion",
    )

    # Extended indicators
    stylistic_patterns: Tuple[str, ...] = (
        r"\b(il est important de|il convient de|il faut noter que)\b",
        r"\b(en résumé|pour conclure|en définitive)\b",
        r"\b(par exemple|notamment|en particulier)\b.*\b(par exemple|notamment|en particulier)\b",
    )
    formal_register: Tuple[str, ...] = (
        "néanmoins", "toutefois", "cependant", "par conséquent", "en outre",
    )
    informal_register: Tuple[str, ...] = (
        "bon", "alors", "du coup", "en fait", "quand même",
    )
    emotional_words: Tuple[str, ...] = (
        "magnifique", "extraordinaire", "fantastique", "merveilleux",
        "terrible", "affreux", "catastrophique", "dramatique",
    )
    cultural_references: Tuple[str, ...] = (
        "molière", "voltaire", "napoléon", "napoleon", "révolution française", "baguette",
    )
    common_concepts: Tuple[str, ...] = (
        "développement durable", "intelligence artificielle", "mondialisation",
        "changement climatique", "société moderne",
    )
    past_tense_pattern: str = r"\b\w+ait\b|\b\w+aient\b"
    present_tense_pattern: str = r"\b\w+e\b|\b\w+ent\b"
    future_tense_pattern: str = r"\b\w+era\b|\b\w+eront\b"
    generic_words: Tuple[str, ...] = (
        "chose", "important", "problème", "solution", "exemple", "situation",
    )

    # Section scorer
    boilerplate_phrases: Tuple[str, ...] = (
        "il est important de", "il convient de", "il faut noter que",
    )
    boilerplate_penalty: int = 30
    boilerplate_reason: str = "Expression typique d'IA"
    long_sentence_words: int = 25
    long_sentence_penalty: int = 20
    long_sentence_reason: str = "Phrase anormalement longue"
    enumeration_markers: Tuple[str, ...] = (
        "premièrement", "deuxièmement", "troisièmement", "enfin",
    )
    enumeration_penalty: int = 25
    enumeration_reason: str = "Structure artificielle"
    default_reason: str = "Analyse contextuelle"
    high_threshold: int = 50
    medium_threshold: int = 25
    report_threshold: int = 15

    # Attribution
    attribution_high_score: float = 70.0
    attribution_min_high: int = 3
    attribution_rules: Tuple[AttributionRule, ...] = field(default=ATTRIBUTION_RULES)

    def profile(self, key: str) -> IndicatorProfile:
        for p in self.base_profiles + self.extended_profiles:
            if p.key == key:
                return p
        raise KeyError(key)

    def indicator_name(self, key: str) -> Optional[str]:
        try:
            return self.profile(key).name
        except KeyError:
            return None


DEFAULT_CONFIG = HeuristicConfig()
