"""
Agent attribution
─────────────────
A coarse, auditable guess at which model family wrote the text. Nothing is
attributed unless enough indicators are already high; then the ordered rule
list is walked and the first rule whose indicator clears its threshold wins.
The returned :class:`AgentAttribution` names that indicator, its score and the
threshold, so every label can be traced back to one comparison.
"""

from typing import Optional, Sequence

from plume_cli.config import DEFAULT_CONFIG, HeuristicConfig
from plume_cli.log import get_logger
from plume_cli.models import AgentAttribution, Indicator

logger = get_logger(__name__)


def attribute_agent(
    indicators: Sequence[Indicator],
    config: HeuristicConfig = DEFAULT_CONFIG,
) -> Optional[AgentAttribution]:
    high = [ind for ind in indicators if ind.score > config.attribution_high_score]
    if len(high) < config.attribution_min_high:
        return None

    by_name = {ind.name: ind for ind in indicators}
    for rule in config.attribution_rules:
        name = config.indicator_name(rule.indicator_key)
        indicator = by_name.get(name) if name else None
        if indicator is not None and indicator.score > rule.threshold:
            logger.debug("agent_attributed", label=rule.label, indicator=name,
                         score=indicator.score, threshold=rule.threshold,
                         high_indicators=len(high))
            return AgentAttribution(
                label=rule.label,
                indicator_name=name,
                threshold=rule.threshold,
                score=indicator.score,
            )
    return None
