"""Derived records: scores, recommendations and budget distributions."""

from typing import Literal

from pydantic import BaseModel, Field

from prestamype_analyzer.models.opportunity import OpportunityRecord

RecommendationLevel = Literal["high", "medium", "low"]


class EligibilityFlags(BaseModel):
    """Threshold checks against the user's config, shared by scoring and allocation."""

    fits_budget: bool
    meets_return: bool
    acceptable_risk: bool

    @property
    def all_met(self) -> bool:
        return self.fits_budget and self.meets_return and self.acceptable_risk


class Recommendation(BaseModel):
    """Qualitative label attached to a scored opportunity."""

    level: RecommendationLevel
    text: str
    reasons: list[str] = Field(default_factory=list, max_length=2)


class ScoredOpportunity(OpportunityRecord):
    """Opportunity decorated with its score, recommendation and eligibility flags."""

    score: int = Field(..., ge=0, le=100)
    recommendation: Recommendation
    fits_budget: bool
    meets_return: bool
    acceptable_risk: bool


class Distribution(BaseModel):
    """One allocation step: how much of the budget goes to one opportunity."""

    opportunity: ScoredOpportunity
    currency: str = Field(..., description="Display currency of investment/expected_return")
    investment: float = Field(..., ge=0)
    investment_canonical: float = Field(..., ge=0)
    expected_return: float
    expected_return_canonical: float
    percentage: float = Field(..., ge=0, le=100, description="Share of the opportunity's amount")
