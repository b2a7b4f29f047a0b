"""Opportunity scoring against user preferences."""

from typing import Iterable

from prestamype_analyzer.models.config import UserConfig
from prestamype_analyzer.models.market import DEFAULT_MARKET, MarketRules
from prestamype_analyzer.models.opportunity import OpportunityRecord
from prestamype_analyzer.models.scored import Recommendation, ScoredOpportunity

from .engine import ScoreBreakdown, ScoringEngine
from .rules import eligibility, is_acceptable_risk

__all__ = [
    "ScoreBreakdown",
    "ScoringEngine",
    "classify",
    "eligibility",
    "is_acceptable_risk",
    "score",
    "score_opportunities",
]


def score(
    opportunity: OpportunityRecord,
    config: UserConfig,
    market: MarketRules = DEFAULT_MARKET,
) -> int:
    """Desirability score in [0, 100] for one opportunity."""
    return ScoringEngine(config, market).score(opportunity)


def classify(
    opportunity: OpportunityRecord,
    config: UserConfig,
    market: MarketRules = DEFAULT_MARKET,
) -> Recommendation:
    """Recommendation tier (high / medium / low) for one opportunity."""
    return ScoringEngine(config, market).classify(opportunity)


def score_opportunities(
    config: UserConfig,
    opportunities: Iterable[OpportunityRecord],
    market: MarketRules = DEFAULT_MARKET,
) -> list[ScoredOpportunity]:
    """Score and rank opportunities, best first."""
    return ScoringEngine(config, market).score_many(opportunities)
