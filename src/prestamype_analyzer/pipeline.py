"""Pipeline orchestration: normalize → score → allocate → summarize."""

import logging
from pathlib import Path
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from prestamype_analyzer.adapters import JsonExportAdapter
from prestamype_analyzer.allocation import AllocationEngine, summarize_distribution
from prestamype_analyzer.insights import AnalysisOverview, build_overview, general_recommendations
from prestamype_analyzer.models.config import UserConfig
from prestamype_analyzer.models.market import DEFAULT_MARKET, MarketRules
from prestamype_analyzer.models.opportunity import OpportunityRecord
from prestamype_analyzer.models.scored import Distribution, ScoredOpportunity
from prestamype_analyzer.scoring import ScoringEngine
from prestamype_analyzer.store import AnalysisStore

logger = logging.getLogger(__name__)


class AnalysisResult(BaseModel):
    """Everything a presentation layer needs to render one analysis."""

    config: UserConfig
    scored: list[ScoredOpportunity] = Field(default_factory=list)
    distributions: list[Distribution] = Field(default_factory=list)
    summary: list[str] = Field(default_factory=list)
    overview: AnalysisOverview
    recommendations: list[str] = Field(default_factory=list)


def run_analysis(
    config: UserConfig,
    opportunities: Iterable[OpportunityRecord],
    market: MarketRules = DEFAULT_MARKET,
) -> AnalysisResult:
    """
    Score every record, allocate the budget over the ranked list and build summary lines.
    Pure: same inputs give an equal result.
    """
    scored = ScoringEngine(config, market).score_many(opportunities)
    distributions = AllocationEngine(config, market).allocate(scored)
    logger.info("Scored %d opportunities, %d selected for investment", len(scored), len(distributions))
    return AnalysisResult(
        config=config,
        scored=scored,
        distributions=distributions,
        summary=summarize_distribution(distributions, config, market),
        overview=build_overview(scored),
        recommendations=general_recommendations(scored),
    )


def analyze_export(
    config: UserConfig,
    input_path: Path,
    *,
    db_path: Optional[Path] = None,
    market: MarketRules = DEFAULT_MARKET,
) -> AnalysisResult:
    """
    Run the analysis over a JSON export. When db_path is set, also store a snapshot.
    """
    records = JsonExportAdapter(input_path).fetch_all()
    result = run_analysis(config, records, market)
    if db_path is not None and result.scored:
        AnalysisStore(db_path).save(result.scored, config)
    return result
