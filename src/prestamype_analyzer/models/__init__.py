"""Data models for opportunities, user config and derived results."""

from prestamype_analyzer.models.config import DEFAULT_CONFIG, UserConfig
from prestamype_analyzer.models.market import DEFAULT_MARKET, CurrencyInfo, MarketRules
from prestamype_analyzer.models.opportunity import OpportunityRecord, RiskGrade
from prestamype_analyzer.models.raw import RawOpportunity
from prestamype_analyzer.models.scored import (
    Distribution,
    EligibilityFlags,
    Recommendation,
    ScoredOpportunity,
)

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_MARKET",
    "CurrencyInfo",
    "Distribution",
    "EligibilityFlags",
    "MarketRules",
    "OpportunityRecord",
    "RawOpportunity",
    "Recommendation",
    "RiskGrade",
    "ScoredOpportunity",
    "UserConfig",
]
