"""
Analysis engine: one synchronous, side-effect-free pass over a text.

    decompose ──► IndicatorLibrary ──► ScoreAggregator ──► probability
        │                         └──► attribute_agent ──► suspected agent
        └──────► SectionScorer ─────────────────────────► sections

Input bounds are the caller's job (see service.py). The result has no id;
storage assigns one afterwards.
"""

from typing import Union

from plume_cli.config import DEFAULT_CONFIG, HeuristicConfig
from plume_cli.detectors.attribution import attribute_agent
from plume_cli.detectors.indicators import IndicatorLibrary
from plume_cli.detectors.scoring import ScoreAggregator
from plume_cli.detectors.sections import SectionScorer
from plume_cli.detectors.text import decompose
from plume_cli.errors import ValidationError
from plume_cli.log import get_logger
from plume_cli.models import AnalysisResult, AnalysisType

logger = get_logger(__name__)


def parse_analysis_type(value: Union[str, AnalysisType]) -> AnalysisType:
    try:
        return AnalysisType(value)
    except ValueError:
        raise ValidationError("Type d'analyse invalide") from None


class AnalysisEngine:
    def __init__(self, config: HeuristicConfig = DEFAULT_CONFIG):
        self.config = config
        self.indicators = IndicatorLibrary(config)
        self.aggregator = ScoreAggregator()
        self.sections = SectionScorer(config)

    def analyze(self, text: str, analysis_type: Union[str, AnalysisType] = AnalysisType.QUICK) -> AnalysisResult:
        analysis_type = parse_analysis_type(analysis_type)
        features = decompose(text)

        indicators = self.indicators.compute(features, analysis_type)
        probability = self.aggregator.compute(indicators)
        attribution = attribute_agent(indicators, self.config)
        sections = self.sections.score(text, features.sentences)

        logger.info(
            "analysis_completed",
            analysis_type=analysis_type.value,
            characters=len(text),
            sentences=len(features.sentences),
            ai_probability=probability,
            suspected_agent=attribution.label if attribution else None,
            sections=len(sections),
        )
        return AnalysisResult(
            ai_probability=probability,
            indicators=indicators,
            sections=sections,
            original_text=text,
            analysis_type=analysis_type,
            attribution=attribution,
        )
