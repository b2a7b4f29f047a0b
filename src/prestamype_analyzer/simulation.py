"""Per-opportunity investment simulation shown next to each listing."""

import math
from datetime import date, datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel

from prestamype_analyzer.currency import currency_info
from prestamype_analyzer.models.config import UserConfig
from prestamype_analyzer.models.market import DEFAULT_MARKET, MarketRules
from prestamype_analyzer.models.opportunity import OpportunityRecord

# Share of the budget suggested for a single listing, capped at this many minimum tickets
_SUGGESTED_BUDGET_SHARE = 0.15
_MAX_SUGGESTED_TICKETS = 50
_NO_CLOSE_DATE_DAYS = 999

_CREDIT_STATUS: dict[str, tuple[str, str]] = {
    "A": ("Excellent", "excellent"),
    "B": ("Good", "good"),
    "C": ("Fair", "fair"),
    "D": ("High risk", "poor"),
    "E": ("Very risky", "bad"),
}


class CreditStatus(BaseModel):
    text: str
    level: str
    guaranteed: bool = False


class SimulationAdvice(BaseModel):
    message: str
    urgency: Literal["critical", "high", "normal"]


class InvestmentAdvice(BaseModel):
    kind: Literal["warning", "excellent", "good", "neutral"]
    title: str
    message: str


class InvestmentSimulation(BaseModel):
    """What investing in one listing would look like for this user. Amounts are always finite."""

    opportunity_id: str
    potential_investment: float
    potential_gain: float
    days_to_maturity: int
    available_amount: float
    estimated_investors: int
    average_ticket: float
    payment_date: Optional[date] = None
    credit_status: CreditStatus
    advice: SimulationAdvice
    investment_advice: Optional[InvestmentAdvice] = None
    remaining_time: Optional[str] = None
    payment_guaranteed: bool = False


def _finite(value: float, fallback: float) -> float:
    return value if math.isfinite(value) else fallback


def days_until(target: Optional[date], today: date) -> int:
    """Whole days from today to target, never negative; 0 when unknown."""
    if target is None:
        return 0
    return max(0, (target - today).days)


def days_to_close(auction_close: Optional[datetime], now: datetime) -> int:
    """Days (rounded up) until the auction closes; a large sentinel when unknown."""
    if auction_close is None:
        return _NO_CLOSE_DATE_DAYS
    closing = auction_close if auction_close.tzinfo else auction_close.replace(tzinfo=timezone.utc)
    current = now if now.tzinfo else now.replace(tzinfo=timezone.utc)
    return max(0, math.ceil((closing - current).total_seconds() / 86400))


def credit_status(risk: Optional[str], payment_guaranteed: bool = False) -> CreditStatus:
    """Label a risk grade; a guaranteed payment is appended to the text."""
    text, level = _CREDIT_STATUS.get(risk or "", ("Not available", "unknown"))
    if payment_guaranteed:
        return CreditStatus(text=f"{text} (guaranteed)", level=level, guaranteed=True)
    return CreditStatus(text=text, level=level)


def simulation_advice(
    opp: OpportunityRecord,
    potential_investment: float,
    available_amount: float,
    now: datetime,
) -> SimulationAdvice:
    """Urgency hint: closing soon, almost funded, small stake, or a default nudge."""
    if days_to_close(opp.auction_close, now) <= 1:
        return SimulationAdvice(
            message="Closes soon! Invest now before it fills up.", urgency="critical"
        )
    if (opp.progress or 0) > 85:
        return SimulationAdvice(
            message="Almost fully funded. Only a little remains available.", urgency="high"
        )
    if potential_investment < available_amount * 0.01:
        return SimulationAdvice(
            message="You could increase your investment in this opportunity.", urgency="normal"
        )
    return SimulationAdvice(
        message="Good opportunity to diversify your portfolio.", urgency="normal"
    )


def investment_advice(
    opp: OpportunityRecord,
    score: int,
    config: UserConfig,
    available_amount: float,
    min_investment: float,
) -> InvestmentAdvice:
    """Score-driven advice card for a single listing."""
    if available_amount < min_investment:
        return InvestmentAdvice(
            kind="warning",
            title="No availability",
            message="Not enough amount left to invest",
        )
    if score >= 85:
        return InvestmentAdvice(
            kind="excellent",
            title="Exceptional opportunity",
            message="Combines high return with controlled risk",
        )
    if score >= 70:
        return InvestmentAdvice(
            kind="good",
            title="Good opportunity",
            message="Attractive return within your criteria",
        )
    if (opp.return_rate or 0) < config.min_return:
        return InvestmentAdvice(
            kind="warning",
            title="Low return",
            message=f"Below your minimum of {config.min_return:g}%",
        )
    return InvestmentAdvice(
        kind="neutral",
        title="Evaluate carefully",
        message="Review every factor before deciding",
    )


def simulate_investment(
    opp: OpportunityRecord,
    config: UserConfig,
    market: MarketRules = DEFAULT_MARKET,
    *,
    today: Optional[date] = None,
    now: Optional[datetime] = None,
) -> InvestmentSimulation:
    """
    Suggested stake, gain until maturity and crowd statistics for one listing.
    Uses the listing's own enrichment fields when present and estimates the rest.
    """
    now = now or datetime.now(timezone.utc)
    today = today or now.date()
    min_inv = currency_info(config.currency, market).min_investment

    days = days_until(opp.estimated_payment, today)
    progress = opp.progress or 0.0
    rate = opp.return_rate or 0.0

    raised = _finite(opp.raised_amount or opp.amount * (progress / 100), 0.0)
    available = _finite(opp.remaining_amount or opp.amount * ((100 - progress) / 100), 0.0)

    budget = config.budget or min_inv
    potential = max(
        min_inv,
        min(budget * _SUGGESTED_BUDGET_SHARE, available, min_inv * _MAX_SUGGESTED_TICKETS),
    )

    monthly_rate = opp.monthly_return / 100 if opp.monthly_return else rate / 100 / 12
    gain = potential * monthly_rate * (days / 30)

    investors = opp.total_investors or max(1, math.ceil(raised / min_inv))
    if opp.max_investment:
        average_ticket = opp.max_investment
    else:
        average_ticket = max(min_inv, raised / investors if raised > 0 else min_inv)

    potential = _finite(potential, min_inv)
    score = getattr(opp, "score", None)
    card = (
        investment_advice(opp, score, config, available, min_inv) if score is not None else None
    )
    return InvestmentSimulation(
        opportunity_id=opp.id,
        potential_investment=potential,
        potential_gain=_finite(gain, 0.0),
        days_to_maturity=days,
        available_amount=available,
        estimated_investors=investors,
        average_ticket=_finite(average_ticket, min_inv),
        payment_date=opp.estimated_payment,
        credit_status=credit_status(opp.risk, opp.payment_guaranteed),
        advice=simulation_advice(opp, potential, available, now),
        investment_advice=card,
        remaining_time=opp.remaining_time,
        payment_guaranteed=opp.payment_guaranteed,
    )
