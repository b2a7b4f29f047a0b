"""Human-readable lines describing an allocation."""

from prestamype_analyzer.currency import format_amount
from prestamype_analyzer.models.config import UserConfig
from prestamype_analyzer.models.market import DEFAULT_MARKET, MarketRules
from prestamype_analyzer.models.scored import Distribution

NO_MATCH_MESSAGE = "No opportunities match your investment criteria."


def summarize_distribution(
    distributions: list[Distribution],
    config: UserConfig,
    market: MarketRules = DEFAULT_MARKET,
) -> list[str]:
    """One line when empty; otherwise count, total invested, expected return and strategy."""
    if not distributions:
        return [NO_MATCH_MESSAGE]

    currency = config.currency
    count = len(distributions)
    total_investment = sum(d.investment for d in distributions)
    total_return = sum(d.expected_return for d in distributions)
    return_pct = total_return / total_investment * 100 if total_investment > 0 else 0.0

    lines = [
        f"Recommended distribution: {count} {'opportunity' if count == 1 else 'opportunities'}",
        f"Total investment: {format_amount(total_investment, currency, market)}"
        f" of {format_amount(config.budget, currency, market)}",
        f"Expected return: {format_amount(total_return, currency, market)} ({return_pct:.2f}%)",
    ]
    if count == 1:
        lines.append("Strategy: concentrated in the best opportunity")
    else:
        lines.append("Strategy: diversified across the best opportunities")
    return lines
