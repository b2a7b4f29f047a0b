"""Marketplace constants injected into the scoring and allocation engines."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CurrencyInfo(BaseModel):
    """Display symbol and minimum ticket for one currency."""

    model_config = ConfigDict(frozen=True)

    code: str
    symbol: str
    name: str
    min_investment: float = Field(..., gt=0, description="Smallest investable ticket")


def _default_currencies() -> dict[str, CurrencyInfo]:
    return {
        "PEN": CurrencyInfo(code="PEN", symbol="S/", name="Soles", min_investment=100),
        "USD": CurrencyInfo(code="USD", symbol="$", name="Dollars", min_investment=25),
    }


class MarketRules(BaseModel):
    """
    Read-only rule table shared by the engines.
    Tests substitute alternate tables with model_copy(update=...).
    """

    model_config = ConfigDict(frozen=True)

    currencies: dict[str, CurrencyInfo] = Field(default_factory=_default_currencies)
    canonical_currency: str = "PEN"
    exchange_rate: float = Field(default=3.7, gt=0, description="Canonical units per alternate unit")

    risk_levels: tuple[str, ...] = ("A", "B", "C", "D", "E")
    risk_base_scores: dict[str, float] = Field(
        default_factory=lambda: {"A": 100, "B": 85, "C": 70, "D": 50, "E": 25}
    )
    neutral_risk_score: float = 50
    risk_step_penalty: float = 20

    budget_ratio_cap: float = 0.5
    budget_ratio_multiplier: float = 0.7
    default_term_days: int = 90
    default_min_investment: float = 50

    preferred_category: str = "inmobiliario"
    preferred_category_bonus: float = 1.05

    def risk_ordinal(self, risk: Optional[str]) -> Optional[int]:
        """Position of a risk letter in ascending risk order; None when unknown."""
        if risk is None or risk not in self.risk_levels:
            return None
        return self.risk_levels.index(risk)


DEFAULT_MARKET = MarketRules()
