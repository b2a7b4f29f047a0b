"""Scoring engine: weighted sub-scores, bonus/penalty pass and recommendation."""

import logging
import math
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from prestamype_analyzer.models.config import UserConfig
from prestamype_analyzer.models.market import DEFAULT_MARKET, MarketRules
from prestamype_analyzer.models.opportunity import OpportunityRecord
from prestamype_analyzer.models.scored import EligibilityFlags, Recommendation, ScoredOpportunity

from .recommendation import classify_score, strengths_and_issues
from .rules import (
    accessibility_score,
    eligibility,
    progress_score,
    return_score,
    risk_score,
    term_score,
)

logger = logging.getLogger(__name__)

WEIGHTS: dict[str, float] = {
    "return": 0.40,
    "risk": 0.25,
    "term": 0.15,
    "progress": 0.10,
    "accessibility": 0.10,
}

ALL_CRITERIA_BONUS = 1.10
MISSED_RETURN_PENALTY = 0.80
EXCESS_RISK_PENALTY = 0.70
OVER_BUDGET_PENALTY = 0.90


class ScoreBreakdown(BaseModel):
    """Sub-scores and multipliers behind one final score."""

    sub_scores: dict[str, float]
    weighted: float
    multipliers: list[tuple[str, float]] = Field(default_factory=list)
    adjusted: float
    score: int = Field(..., ge=0, le=100)
    flags: EligibilityFlags


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class ScoringEngine:
    """
    Scores opportunities against one config snapshot.
    Pure and total: malformed records were already coerced to defaults by the model.
    """

    def __init__(self, config: UserConfig, market: MarketRules = DEFAULT_MARKET):
        self.config = config
        self.market = market

    def eligibility(self, opp: OpportunityRecord) -> EligibilityFlags:
        return eligibility(opp, self.config, self.market)

    def breakdown(self, opp: OpportunityRecord) -> ScoreBreakdown:
        """Compute every intermediate value; score() and classify() read from this."""
        flags = self.eligibility(opp)
        sub_scores = {
            "return": return_score(opp.return_rate, self.config.min_return),
            "risk": risk_score(opp.risk, self.config.max_risk, self.market),
            "term": term_score(opp.term),
            "progress": progress_score(opp.progress),
            "accessibility": accessibility_score(opp.min_investment, flags.fits_budget),
        }
        weighted = sum(WEIGHTS[name] * value for name, value in sub_scores.items())

        # Applied in this order; all applicable multipliers compose
        multipliers: list[tuple[str, float]] = []
        if flags.all_met:
            multipliers.append(("all_criteria", ALL_CRITERIA_BONUS))
        if not flags.meets_return:
            multipliers.append(("below_min_return", MISSED_RETURN_PENALTY))
        if not flags.acceptable_risk:
            multipliers.append(("above_max_risk", EXCESS_RISK_PENALTY))
        if not flags.fits_budget:
            multipliers.append(("over_budget", OVER_BUDGET_PENALTY))
        if opp.category == self.market.preferred_category:
            multipliers.append(("preferred_category", self.market.preferred_category_bonus))

        adjusted = weighted
        for _, factor in multipliers:
            adjusted *= factor
        if not math.isfinite(adjusted):
            adjusted = 0.0

        score = _round_half_up(max(0.0, min(100.0, adjusted)))
        return ScoreBreakdown(
            sub_scores=sub_scores,
            weighted=weighted,
            multipliers=multipliers,
            adjusted=adjusted,
            score=score,
            flags=flags,
        )

    def score(self, opp: OpportunityRecord) -> int:
        """Integer desirability score in [0, 100]."""
        return self.breakdown(opp).score

    def classify(self, opp: OpportunityRecord, score: Optional[int] = None) -> Recommendation:
        """Recommendation tier for `opp`; computes the score when not given."""
        if score is None:
            score = self.score(opp)
        strengths, issues = strengths_and_issues(opp, self.config, self.eligibility(opp).fits_budget)
        return classify_score(score, strengths, issues)

    def score_one(self, opp: OpportunityRecord) -> ScoredOpportunity:
        """Decorate a record with score, recommendation and eligibility flags."""
        result = self.breakdown(opp)
        strengths, issues = strengths_and_issues(opp, self.config, result.flags.fits_budget)
        logger.debug("Scored %s: %d (%s)", opp.id, result.score, result.sub_scores)
        return ScoredOpportunity.model_validate(
            {
                **opp.model_dump(),
                "score": result.score,
                "recommendation": classify_score(result.score, strengths, issues),
                "fits_budget": result.flags.fits_budget,
                "meets_return": result.flags.meets_return,
                "acceptable_risk": result.flags.acceptable_risk,
            }
        )

    def score_many(self, opportunities: Iterable[OpportunityRecord]) -> list[ScoredOpportunity]:
        """Score all records; sorted by score descending, ties keep input order."""
        scored = [self.score_one(opp) for opp in opportunities]
        scored.sort(key=lambda s: s.score, reverse=True)
        return scored
