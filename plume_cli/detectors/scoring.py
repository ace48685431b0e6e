from typing import Sequence

from plume_cli.errors import DegenerateInputError
from plume_cli.models import Indicator


class ScoreAggregator:
    """
    Weighted-mean aggregator
    ────────────────────────
    probability = round(Σ(score × weight) / Σ(weight), 2), clamped to [0, 100].

    Weights come from the indicator profiles (1.0 - 1.8); heavier indicators
    are the ones with the most discriminating signal (lexical coherence,
    stylistic phrasing, conceptual originality).
    """

    def compute(self, indicators: Sequence[Indicator]) -> float:
        total_weight = sum(ind.weight for ind in indicators)
        if total_weight <= 0:
            raise DegenerateInputError(
                f"Cannot aggregate {len(indicators)} indicator(s) with a total weight of zero"
            )
        weighted = sum(ind.score * ind.weight for ind in indicators)
        probability = round(weighted / total_weight, 2)
        return min(100.0, max(0.0, probability))

    @staticmethod
    def band(probability: float) -> str:
        if probability >= 70:
            return "Probablement IA"
        if probability >= 40:
            return "Mixte / incertain"
        return "Probablement humain"
