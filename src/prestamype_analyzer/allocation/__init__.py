"""Budget allocation across scored opportunities."""

from typing import Iterable

from prestamype_analyzer.models.config import UserConfig
from prestamype_analyzer.models.market import DEFAULT_MARKET, MarketRules
from prestamype_analyzer.models.scored import Distribution, ScoredOpportunity

from .engine import AllocationEngine
from .summary import NO_MATCH_MESSAGE, summarize_distribution

__all__ = ["AllocationEngine", "NO_MATCH_MESSAGE", "allocate", "summarize_distribution"]


def allocate(
    opportunities: Iterable[ScoredOpportunity],
    config: UserConfig,
    market: MarketRules = DEFAULT_MARKET,
) -> list[Distribution]:
    """Greedy, score-ordered distribution of the config's budget."""
    return AllocationEngine(config, market).allocate(opportunities)
