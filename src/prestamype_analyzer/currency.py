"""Currency conversion between the canonical unit (PEN) and the user's display currency."""

import math

from prestamype_analyzer.models.market import DEFAULT_MARKET, CurrencyInfo, MarketRules


def currency_info(code: str, market: MarketRules = DEFAULT_MARKET) -> CurrencyInfo:
    """Symbol, name and minimum investment for a currency code."""
    info = market.currencies.get(code)
    if info is None:
        raise ValueError(f"Unknown currency: {code}. Available: {list(market.currencies.keys())}")
    return info


def to_canonical(amount: float, currency: str, market: MarketRules = DEFAULT_MARKET) -> float:
    """Convert an amount in `currency` to the canonical unit."""
    currency_info(currency, market)
    if currency == market.canonical_currency:
        return amount
    return amount * market.exchange_rate


def from_canonical(amount: float, currency: str, market: MarketRules = DEFAULT_MARKET) -> float:
    """Convert a canonical amount to `currency`."""
    currency_info(currency, market)
    if currency == market.canonical_currency:
        return amount
    return amount / market.exchange_rate


def canonical_min_ticket(currency: str, market: MarketRules = DEFAULT_MARKET) -> float:
    """Minimum investable ticket for `currency`, expressed in the canonical unit (USD 25 -> 92.5)."""
    return to_canonical(currency_info(currency, market).min_investment, currency, market)


def format_amount(amount: float, currency: str, market: MarketRules = DEFAULT_MARKET) -> str:
    """Render e.g. 'S/1,500' with no decimals; non-finite amounts render as 0."""
    info = currency_info(currency, market)
    if not math.isfinite(amount):
        amount = 0
    return f"{info.symbol}{amount:,.0f}"
