"""Qualitative recommendation derived from a score and simple threshold checks."""

from prestamype_analyzer.models.config import UserConfig
from prestamype_analyzer.models.opportunity import OpportunityRecord
from prestamype_analyzer.models.scored import Recommendation

HIGH_SCORE = 80
MEDIUM_SCORE = 60

# Return this many points above min_return counts as a strength
_STRONG_RETURN_MARGIN = 3.0
_LOW_RISK = ("A", "B")
_HIGH_RISK = ("D", "E")
_SHORT_TERM_MONTHS = 12
_LONG_TERM_MONTHS = 36


def strengths_and_issues(
    opp: OpportunityRecord,
    config: UserConfig,
    within_budget: bool,
) -> tuple[list[str], list[str]]:
    """Return (strengths, issues) in check order: return, risk, term, budget."""
    strengths: list[str] = []
    issues: list[str] = []

    rate = opp.return_rate or 0
    if rate >= config.min_return + _STRONG_RETURN_MARGIN:
        strengths.append("Excellent return")
    elif rate < config.min_return:
        issues.append("Return below minimum")

    if opp.risk in _LOW_RISK:
        strengths.append("Low risk")
    elif opp.risk in _HIGH_RISK:
        issues.append("High risk")

    if opp.term:
        if opp.term <= _SHORT_TERM_MONTHS:
            strengths.append("Short term")
        elif opp.term > _LONG_TERM_MONTHS:
            issues.append("Very long term")

    if not within_budget:
        issues.append("Outside budget")

    return strengths, issues


def classify_score(score: int, strengths: list[str], issues: list[str]) -> Recommendation:
    """high: up to 2 strengths; medium: 1 strength + 1 issue; low: up to 2 issues."""
    if score >= HIGH_SCORE:
        return Recommendation(level="high", text="Strongly recommended", reasons=strengths[:2])
    if score >= MEDIUM_SCORE:
        return Recommendation(
            level="medium",
            text="Recommended with reservations",
            reasons=strengths[:1] + issues[:1],
        )
    return Recommendation(level="low", text="Not recommended", reasons=issues[:2])
