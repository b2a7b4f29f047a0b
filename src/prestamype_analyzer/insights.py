"""Aggregate view over a scored set: counts, averages and general advice lines."""

from pydantic import BaseModel

from prestamype_analyzer.models.scored import ScoredOpportunity
from prestamype_analyzer.scoring.recommendation import HIGH_SCORE, MEDIUM_SCORE


class AnalysisOverview(BaseModel):
    """Headline numbers for a scored set."""

    total: int
    recommended: int
    within_budget: int
    average_return: float
    average_score: float


def build_overview(scored: list[ScoredOpportunity]) -> AnalysisOverview:
    """Counts and averages; averages are 0 for an empty set."""
    total = len(scored)
    if total == 0:
        return AnalysisOverview(
            total=0, recommended=0, within_budget=0, average_return=0.0, average_score=0.0
        )
    return AnalysisOverview(
        total=total,
        recommended=sum(1 for o in scored if o.score >= MEDIUM_SCORE),
        within_budget=sum(1 for o in scored if o.fits_budget),
        average_return=sum(o.return_rate or 0 for o in scored) / total,
        average_score=sum(o.score for o in scored) / total,
    )


def general_recommendations(scored: list[ScoredOpportunity]) -> list[str]:
    """Short advice lines; always at least one."""
    lines: list[str] = []

    top = [o for o in scored if o.score >= HIGH_SCORE][:3]
    if top:
        lines.append(f"{len(top)} excellent opportunities found")

    within_budget = sum(1 for o in scored if o.fits_budget and o.score >= MEDIUM_SCORE)
    if within_budget:
        lines.append(f"{within_budget} recommended opportunities within your budget")

    low_risk = sum(1 for o in scored if o.risk in ("A", "B") and o.score >= MEDIUM_SCORE)
    if low_risk:
        lines.append(f"{low_risk} low-risk opportunities recommended")

    if not lines:
        lines.append("Consider adjusting your criteria to find more opportunities")
    return lines
