"""Greedy budget allocation across the best-ranked eligible opportunities."""

import logging
import math
from typing import Iterable

from prestamype_analyzer.currency import (
    canonical_min_ticket,
    currency_info,
    from_canonical,
    to_canonical,
)
from prestamype_analyzer.models.config import UserConfig
from prestamype_analyzer.models.market import DEFAULT_MARKET, MarketRules
from prestamype_analyzer.models.scored import Distribution, ScoredOpportunity
from prestamype_analyzer.scoring.rules import is_acceptable_risk, meets_return

logger = logging.getLogger(__name__)


class AllocationEngine:
    """
    Walks opportunities in score order and assigns each a slice of the remaining budget.
    Single pass, no backtracking. All arithmetic happens in the canonical currency;
    investments are whole multiples of the currency's minimum ticket.
    """

    def __init__(self, config: UserConfig, market: MarketRules = DEFAULT_MARKET):
        self.config = config
        self.market = market

    def is_eligible(self, opp: ScoredOpportunity) -> bool:
        """Return and risk thresholds only, recomputed from the current config (never the score)."""
        return meets_return(opp, self.config) and is_acceptable_risk(
            opp.risk, self.config.max_risk, self.market
        )

    def budget_ratio(self, score: int) -> float:
        """Share of the remaining budget offered to an opportunity with this score."""
        return min(
            self.market.budget_ratio_cap,
            (score / 100) * self.market.budget_ratio_multiplier,
        )

    def ticket_count(self, opp: ScoredOpportunity, remaining: float, ticket: float) -> int:
        """Number of whole minimum tickets to invest in `opp` given `remaining` canonical budget."""
        progress = opp.progress or 0.0
        unfunded = opp.amount * (100 - progress) / 100
        max_possible = min(remaining, unfunded)
        if max_possible < ticket:
            return 0
        strategic = remaining * self.budget_ratio(opp.score)
        tickets = math.floor(min(strategic, max_possible) / ticket)
        return max(0, tickets)

    def expected_return(self, opp: ScoredOpportunity, investment: float) -> float:
        """Return over the listing's term in days (default 90 when no day count is known)."""
        term_days = opp.term_days or self.market.default_term_days
        value = investment * ((opp.return_rate or 0) / 100) * (term_days / 365)
        return value if math.isfinite(value) else 0.0

    def allocate(self, opportunities: Iterable[ScoredOpportunity]) -> list[Distribution]:
        """Ordered distributions, best score first. Empty when nothing qualifies."""
        currency = self.config.currency
        ticket = canonical_min_ticket(currency, self.market)
        display_ticket = currency_info(currency, self.market).min_investment

        eligible = [opp for opp in opportunities if self.is_eligible(opp)]
        eligible.sort(key=lambda o: o.score, reverse=True)
        if not eligible:
            logger.info("No opportunities meet return/risk thresholds")
            return []

        budget = to_canonical(self.config.budget, currency, self.market)
        remaining = budget
        distributions: list[Distribution] = []

        for opp in eligible:
            if remaining < ticket:
                break
            tickets = self.ticket_count(opp, remaining, ticket)
            if tickets <= 0:
                logger.debug("Skipping %s: no whole ticket fits", opp.id)
                continue

            investment_canonical = tickets * ticket
            expected_canonical = self.expected_return(opp, investment_canonical)
            percentage = investment_canonical / opp.amount * 100 if opp.amount > 0 else 0.0
            if not math.isfinite(percentage):
                percentage = 0.0

            distributions.append(
                Distribution(
                    opportunity=opp,
                    currency=currency,
                    investment=tickets * display_ticket,
                    investment_canonical=investment_canonical,
                    expected_return=from_canonical(expected_canonical, currency, self.market),
                    expected_return_canonical=expected_canonical,
                    percentage=min(100.0, percentage),
                )
            )
            remaining -= investment_canonical

        logger.info(
            "Allocated %.2f of %.2f (%s) across %d opportunities",
            budget - remaining,
            budget,
            self.market.canonical_currency,
            len(distributions),
        )
        return distributions
