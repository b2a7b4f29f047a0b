"""Unit tests for the per-opportunity investment simulation."""

import math
from datetime import date, datetime, timedelta, timezone

import pytest

from prestamype_analyzer.models.config import UserConfig
from prestamype_analyzer.models.opportunity import OpportunityRecord
from prestamype_analyzer.scoring import ScoringEngine
from prestamype_analyzer.simulation import (
    credit_status,
    days_to_close,
    days_until,
    simulate_investment,
)

TODAY = date(2025, 1, 1)
NOW = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def _make_opp(**kwargs) -> OpportunityRecord:
    defaults = {
        "id": "op-1",
        "title": "Factura",
        "amount": 10000,
        "return": 12,
        "risk": "A",
        "term": 6,
        "progress": 40,
        "minInvestment": 100,
        "estimatedPayment": "2025-03-02",
    }
    defaults.update(kwargs)
    return OpportunityRecord.model_validate(defaults)


class TestHelpers:
    """Tests for date helpers and credit labels."""

    def test_days_until(self) -> None:
        """Never negative; unknown is 0."""
        assert days_until(date(2025, 3, 2), TODAY) == 60
        assert days_until(date(2024, 12, 1), TODAY) == 0
        assert days_until(None, TODAY) == 0

    def test_days_to_close(self) -> None:
        """Rounded up; naive datetimes are read as UTC; unknown is far away."""
        assert days_to_close(NOW + timedelta(hours=12), NOW) == 1
        assert days_to_close(datetime(2025, 1, 3, 12, 0), NOW) == 2
        assert days_to_close(None, NOW) > 365

    @pytest.mark.parametrize(
        ("risk", "text"),
        [("A", "Excellent"), ("B", "Good"), ("C", "Fair"), ("D", "High risk"), ("E", "Very risky"), (None, "Not available")],
    )
    def test_credit_status(self, risk, text) -> None:
        """Each grade has a label."""
        assert credit_status(risk).text == text

    def test_guaranteed_suffix(self) -> None:
        """Guaranteed payments are flagged in the label."""
        status = credit_status("B", payment_guaranteed=True)
        assert status.text == "Good (guaranteed)"
        assert status.guaranteed is True


class TestSimulateInvestment:
    """Tests for simulate_investment."""

    def test_estimates(self, default_config: UserConfig) -> None:
        """Suggested stake, gain to maturity and crowd estimates."""
        sim = simulate_investment(_make_opp(), default_config, today=TODAY, now=NOW)
        assert sim.opportunity_id == "op-1"
        assert sim.days_to_maturity == 60
        assert sim.available_amount == pytest.approx(6000)
        assert sim.potential_investment == 100
        assert sim.potential_gain == pytest.approx(2.0)
        assert sim.estimated_investors == 40
        assert sim.average_ticket == pytest.approx(100)
        assert sim.payment_date == date(2025, 3, 2)
        assert sim.advice.urgency == "normal"
        assert sim.advice.message == "Good opportunity to diversify your portfolio."
        assert sim.investment_advice is None

    def test_enrichment_fields_take_precedence(self, default_config: UserConfig) -> None:
        """Known investor count, remaining amount and monthly return are used as-is."""
        opp = _make_opp(totalInvestors=7, remainingAmount=2500, monthlyReturn=2, maxInvestment=800)
        sim = simulate_investment(opp, default_config, today=TODAY, now=NOW)
        assert sim.estimated_investors == 7
        assert sim.available_amount == 2500
        assert sim.average_ticket == 800
        assert sim.potential_gain == pytest.approx(100 * 0.02 * 2)

    def test_closing_soon_is_critical(self, default_config: UserConfig) -> None:
        """Under a day to close."""
        opp = _make_opp(auctionClose=(NOW + timedelta(hours=12)).isoformat())
        sim = simulate_investment(opp, default_config, today=TODAY, now=NOW)
        assert sim.advice.urgency == "critical"

    def test_almost_funded_is_high(self, default_config: UserConfig) -> None:
        """Progress above 85%."""
        sim = simulate_investment(_make_opp(progress=90), default_config, today=TODAY, now=NOW)
        assert sim.advice.urgency == "high"

    def test_small_stake_hint(self, default_config: UserConfig) -> None:
        """A stake under 1% of what is available suggests investing more."""
        sim = simulate_investment(_make_opp(amount=500000), default_config, today=TODAY, now=NOW)
        assert sim.advice.message == "You could increase your investment in this opportunity."

    def test_zero_amount_is_safe(self, default_config: UserConfig) -> None:
        """Degenerate listings still produce finite numbers."""
        sim = simulate_investment(
            _make_opp(amount=0, progress=None, estimatedPayment=None),
            default_config,
            today=TODAY,
            now=NOW,
        )
        assert sim.available_amount == 0
        assert sim.estimated_investors == 1
        assert sim.potential_investment == 100
        assert sim.potential_gain == 0

    def test_huge_amount_stays_finite(self, default_config: UserConfig) -> None:
        """Amounts near the float limit never overflow into the estimates."""
        opp = OpportunityRecord.model_validate({"id": "x", "amount": 1e308, "progress": 50, "return": 12})
        sim = simulate_investment(opp, default_config, today=TODAY, now=NOW)
        assert math.isfinite(sim.available_amount)
        assert math.isfinite(sim.average_ticket)
        assert math.isfinite(sim.potential_gain)
        assert sim.estimated_investors >= 1
        assert sim.potential_investment == 100

    def test_scored_record_gets_advice_card(self, roomy_config: UserConfig) -> None:
        """Scored listings get a score-based card."""
        scored = ScoringEngine(roomy_config).score_one(_make_opp())
        sim = simulate_investment(scored, roomy_config, today=TODAY, now=NOW)
        assert sim.investment_advice is not None
        assert sim.investment_advice.kind == "excellent"

    def test_no_availability_card(self, roomy_config: UserConfig) -> None:
        """Fully funded scored listings warn first."""
        scored = ScoringEngine(roomy_config).score_one(_make_opp(progress=100))
        sim = simulate_investment(scored, roomy_config, today=TODAY, now=NOW)
        assert sim.investment_advice.kind == "warning"
        assert sim.investment_advice.title == "No availability"

    def test_usd_ticket(self) -> None:
        """Suggested stake uses the display currency's minimum ticket."""
        config = UserConfig(budget=100, currency="USD")
        sim = simulate_investment(_make_opp(), config, today=TODAY, now=NOW)
        assert sim.potential_investment == 25
