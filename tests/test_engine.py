# tests/test_engine.py
import dataclasses

import pytest

from plume_cli.config import BASE_PROFILES, HeuristicConfig
from plume_cli.engine import AnalysisEngine, parse_analysis_type
from plume_cli.errors import DegenerateInputError, ValidationError
from plume_cli.models import AnalysisType


class TestAnalysisEngine:
    def test_quick_analysis(self, engine, ai_text):
        result = engine.analyze(ai_text, "quick")
        assert result.analysis_type == AnalysisType.QUICK
        assert len(result.indicators) == 8
        assert 0.0 <= result.ai_probability <= 100.0
        assert result.original_text == ai_text
        assert result.id is None

    def test_advanced_analysis(self, engine, ai_text):
        result = engine.analyze(ai_text, AnalysisType.ADVANCED)
        assert len(result.indicators) == 15

    def test_sections_point_into_original_text(self, engine, ai_text):
        result = engine.analyze(ai_text)
        assert result.sections
        for s in result.sections:
            assert ai_text[s.start_position:s.end_position] == s.text

    def test_plain_text_has_no_sections(self, engine, human_text):
        assert engine.analyze(human_text).sections == ()

    def test_deterministic(self, engine, ai_text):
        assert engine.analyze(ai_text, "advanced").to_dict() == \
            engine.analyze(ai_text, "advanced").to_dict()

    def test_generated_style_scores_above_casual_style(self, engine, ai_text, human_text):
        assert engine.analyze(ai_text).ai_probability > engine.analyze(human_text).ai_probability

    def test_invalid_type(self, engine, ai_text):
        with pytest.raises(ValidationError, match="Type d'analyse invalide"):
            engine.analyze(ai_text, "deep")

    def test_zero_weights_abort(self, ai_text):
        config = HeuristicConfig(
            base_profiles=tuple(dataclasses.replace(p, weight=0.0) for p in BASE_PROFILES)
        )
        with pytest.raises(DegenerateInputError):
            AnalysisEngine(config).analyze(ai_text, "quick")

    def test_to_dict_uses_camel_case(self, engine, ai_text):
        body = engine.analyze(ai_text).to_dict()
        assert set(body) == {"id", "aiProbability", "suspectedAgent", "attribution",
                             "indicators", "sections", "originalText", "analysisType"}
        assert set(body["sections"][0]) == {"text", "startPosition", "endPosition",
                                            "suspicionLevel", "aiProbability", "reasoning"}


class TestParseAnalysisType:
    def test_accepts_strings_and_members(self):
        assert parse_analysis_type("advanced") == AnalysisType.ADVANCED
        assert parse_analysis_type(AnalysisType.QUICK) == AnalysisType.QUICK

    def test_rejects_unknown(self):
        with pytest.raises(ValidationError):
            parse_analysis_type("rapide")
