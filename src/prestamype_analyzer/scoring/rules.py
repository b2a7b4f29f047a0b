"""Sub-score rules: each maps one aspect of an opportunity to [0, 100]."""

from typing import Optional

from prestamype_analyzer.models.config import UserConfig
from prestamype_analyzer.models.market import DEFAULT_MARKET, MarketRules
from prestamype_analyzer.models.opportunity import OpportunityRecord
from prestamype_analyzer.models.scored import EligibilityFlags

# Points above min_return at which the return score saturates
EXCELLENT_RETURN_MARGIN = 8.0

# (upper bound in months, score); first match wins
_TERM_STEPS: list[tuple[float, float]] = [
    (6, 100),
    (12, 85),
    (24, 70),
    (36, 55),
]
_LONG_TERM_SCORE = 40.0
_UNKNOWN_TERM_SCORE = 50.0
_UNKNOWN_PROGRESS_SCORE = 50.0


def is_acceptable_risk(
    risk: Optional[str],
    max_risk: str,
    market: MarketRules = DEFAULT_MARKET,
) -> bool:
    """Ordinal comparison A < B < C < D < E. Missing or unknown risk is acceptable."""
    opp_level = market.risk_ordinal(risk)
    if opp_level is None:
        return True
    max_level = market.risk_ordinal(max_risk)
    return max_level is None or opp_level <= max_level


def meets_return(opp: OpportunityRecord, config: UserConfig) -> bool:
    """Missing return counts as 0."""
    return (opp.return_rate or 0) >= config.min_return


def fits_budget(opp: OpportunityRecord, config: UserConfig) -> bool:
    """Minimum ticket within budget. Both compared as given, without conversion."""
    return opp.min_investment <= config.budget


def eligibility(
    opp: OpportunityRecord,
    config: UserConfig,
    market: MarketRules = DEFAULT_MARKET,
) -> EligibilityFlags:
    """Compute the three eligibility flags used for bonuses and allocation filtering."""
    return EligibilityFlags(
        fits_budget=fits_budget(opp, config),
        meets_return=meets_return(opp, config),
        acceptable_risk=is_acceptable_risk(opp.risk, config.max_risk, market),
    )


def return_score(return_rate: Optional[float], min_return: float) -> float:
    """
    Linear ramp to 50 below min_return, interpolation 50..100 up to min_return + 8,
    100 beyond. Missing or zero return scores 0.
    """
    if not return_rate:
        return 0.0
    excellent = min_return + EXCELLENT_RETURN_MARGIN
    if return_rate < min_return:
        if min_return <= 0:
            return 0.0
        return max(0.0, return_rate / min_return * 50)
    if return_rate >= excellent:
        return 100.0
    return 50 + (return_rate - min_return) / (excellent - min_return) * 50


def risk_score(
    risk: Optional[str],
    max_risk: str,
    market: MarketRules = DEFAULT_MARKET,
) -> float:
    """Base value per letter; minus 20 per step beyond the user's tolerance, floored at 0."""
    opp_level = market.risk_ordinal(risk)
    if opp_level is None:
        return market.neutral_risk_score
    base = market.risk_base_scores.get(risk, market.neutral_risk_score)
    max_level = market.risk_ordinal(max_risk)
    if max_level is None or opp_level <= max_level:
        return base
    return max(0.0, base - (opp_level - max_level) * market.risk_step_penalty)


def term_score(term: Optional[float]) -> float:
    """Shorter terms score higher; unknown term is neutral."""
    if not term:
        return _UNKNOWN_TERM_SCORE
    for upper, score in _TERM_STEPS:
        if term <= upper:
            return score
    return _LONG_TERM_SCORE


def progress_score(progress: Optional[float]) -> float:
    """Prefer mid-funded listings: [20, 80] is best, nearly-empty is worst."""
    if progress is None:
        return _UNKNOWN_PROGRESS_SCORE
    if 20 <= progress <= 80:
        return 100.0
    if 10 <= progress < 20:
        return 80.0
    if 80 < progress <= 90:
        return 80.0
    if progress > 90:
        return 60.0
    return 40.0


def accessibility_score(min_investment: float, within_budget: bool) -> float:
    """Start at 50, +30 within budget, then adjust by ticket size; clamped to [0, 100]."""
    score = 50.0
    if within_budget:
        score += 30
    if min_investment <= 100:
        score += 20
    elif min_investment <= 500:
        score += 10
    elif min_investment > 5000:
        score -= 10
    return max(0.0, min(100.0, score))
