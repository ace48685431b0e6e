# tests/test_indicators.py
import pytest

from plume_cli.config import BASE_PROFILES, DEFAULT_CONFIG, EXTENDED_PROFILES
from plume_cli.detectors import advanced, indicators
from plume_cli.detectors.indicators import IndicatorLibrary
from plume_cli.detectors.text import decompose
from plume_cli.models import AnalysisType

EDGE_TEXTS = [
    "",
    "...",
    "a",
    "mot " * 500,
    "Premièrement. Deuxièmement. Troisièmement. Enfin. " * 20,
    "?!?!?!,,,;;;::: ",
]


def _score(fn, text):
    return fn(decompose(text), DEFAULT_CONFIG)


class TestIndicatorLibrary:
    def test_quick_analysis_has_base_indicators_in_order(self, ai_text):
        result = IndicatorLibrary().compute(decompose(ai_text), AnalysisType.QUICK)
        assert [i.name for i in result] == [p.name for p in BASE_PROFILES]
        assert [i.weight for i in result] == [p.weight for p in BASE_PROFILES]

    def test_advanced_analysis_adds_extended_indicators(self, ai_text):
        result = IndicatorLibrary().compute(decompose(ai_text), AnalysisType.ADVANCED)
        assert len(result) == 15
        assert [i.name for i in result[8:]] == [p.name for p in EXTENDED_PROFILES]

    def test_names_are_unique(self, ai_text):
        result = IndicatorLibrary().compute(decompose(ai_text), AnalysisType.ADVANCED)
        assert len({i.name for i in result}) == len(result)

    @pytest.mark.parametrize("text", EDGE_TEXTS)
    def test_scores_stay_bounded(self, text):
        for ind in IndicatorLibrary().compute(decompose(text), AnalysisType.ADVANCED):
            assert 0.0 <= ind.score <= 100.0, ind.name

    def test_deterministic(self, ai_text):
        library = IndicatorLibrary()
        assert library.compute(decompose(ai_text), AnalysisType.ADVANCED) == \
            library.compute(decompose(ai_text), AnalysisType.ADVANCED)


class TestBaseIndicators:
    def test_sentence_length_without_sentences(self):
        assert _score(indicators.sentence_length_score, "...") == 20.0

    def test_vocabulary_repetition(self):
        """'maison' répété, 'jardin' unique : 1/2 × 150."""
        assert _score(indicators.vocabulary_repetition_score, "maison maison jardin") == 75.0

    def test_vocabulary_repetition_ignores_short_words(self):
        assert _score(indicators.vocabulary_repetition_score, "le le la la") == 0.0

    def test_transitions_overused(self):
        text = "Cependant il pleut. Cependant il vente."
        assert _score(indicators.transition_score, text) == 100.0

    def test_transitions_absent(self):
        assert _score(indicators.transition_score, "Il pleut. Il vente.") == 0.0

    def test_flat_syntax_is_suspicious(self):
        assert _score(indicators.syntax_complexity_score, "Il pleut.") == 60.0

    def test_temporal_markers(self):
        assert _score(indicators.temporal_marker_score, "Aujourd'hui il pleut.") == 60.0
        assert _score(indicators.temporal_marker_score, "Aujourd’hui il pleut.") == 60.0

    def test_punctuation_band(self):
        """7 signes pour 2 morceaux : moyenne 3.5, soit |4.5 - 3.5| × 20."""
        assert _score(indicators.punctuation_score, "a, b, c, d, e, f, g.") == 20.0

    def test_punctuation_outside_band(self):
        assert _score(indicators.punctuation_score, "a, b.") == 0.0

    def test_argumentative_structure(self):
        text = "Premièrement, ceci. Deuxièmement, cela."
        assert _score(indicators.argumentative_structure_score, text) == 100.0

    def test_lexical_coherence_single_domain(self):
        text = "recherche étude analyse méthode résultat données"
        assert _score(indicators.lexical_coherence_score, text) == 100.0


class TestExtendedIndicators:
    def test_stylistic_stock_phrases(self):
        text = "Il est important de noter. En résumé, tout va bien."
        assert _score(advanced.stylistic_score, text) == 50.0

    def test_register_imbalance(self):
        text = "Néanmoins, toutefois, cependant."
        assert _score(advanced.register_score, text) == 30.0

    def test_emotion(self):
        assert _score(advanced.emotion_score, "C'est magnifique et fantastique.") == 40.0

    def test_cultural_references_need_more_than_two(self):
        assert _score(advanced.cultural_reference_score, "Molière et Voltaire.") == 0.0
        assert _score(advanced.cultural_reference_score, "Molière, Voltaire et Napoléon.") == 90.0

    def test_conceptual_originality(self):
        text = "La mondialisation et le changement climatique."
        assert _score(advanced.conceptual_originality_score, text) == 50.0

    def test_temporal_coherence_without_verbs(self):
        assert _score(advanced.temporal_coherence_score, "...") == 20.0

    def test_domain_specificity(self):
        """'chose' sur 4 mots ; 'importante' n'est pas 'important'."""
        assert _score(advanced.domain_specificity_score, "Une chose importante ici") == 75.0
