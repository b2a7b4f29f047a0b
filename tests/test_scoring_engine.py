"""Unit tests for ScoringEngine and recommendation classification."""

import pytest

from prestamype_analyzer.models.config import UserConfig
from prestamype_analyzer.models.market import DEFAULT_MARKET
from prestamype_analyzer.models.opportunity import OpportunityRecord
from prestamype_analyzer.models.scored import ScoredOpportunity
from prestamype_analyzer.scoring import ScoringEngine, classify, score, score_opportunities


def _make_opp(**kwargs) -> OpportunityRecord:
    """Well-formed opportunity; kwargs use extractor keys."""
    defaults = {
        "id": "op-1",
        "title": "Factura",
        "amount": 10000,
        "return": 12,
        "risk": "A",
        "term": 6,
        "progress": 0,
        "minInvestment": 100,
    }
    defaults.update(kwargs)
    return OpportunityRecord.model_validate(defaults)


@pytest.fixture
def engine(roomy_config: UserConfig) -> ScoringEngine:
    return ScoringEngine(roomy_config)


class TestScore:
    """Tests for ScoringEngine.score and breakdown."""

    def test_worked_example(self, engine: ScoringEngine) -> None:
        """Weighted 84, all criteria met x1.10 = 92.4, rounds to 92."""
        result = engine.breakdown(_make_opp())
        assert result.sub_scores == {
            "return": pytest.approx(75),
            "risk": 100,
            "term": 100,
            "progress": 40,
            "accessibility": 100,
        }
        assert result.weighted == pytest.approx(84)
        assert result.multipliers == [("all_criteria", 1.10)]
        assert result.score == 92

    def test_score_matches_breakdown(self, engine: ScoringEngine) -> None:
        """score() is the breakdown's final value."""
        assert engine.score(_make_opp()) == 92

    def test_penalties_compose(self) -> None:
        """Below min return and above max risk: 47.5 x 0.8 x 0.7 = 26.6 -> 27."""
        engine = ScoringEngine(UserConfig())
        opp = _make_opp(**{"return": 4}, risk="D", progress=50)
        result = engine.breakdown(opp)
        assert [name for name, _ in result.multipliers] == ["below_min_return", "above_max_risk"]
        assert result.weighted == pytest.approx(47.5)
        assert result.score == 27

    def test_over_budget_penalty(self) -> None:
        """A ticket above budget loses the all-criteria bonus and takes x0.90."""
        engine = ScoringEngine(UserConfig(budget=200))
        result = engine.breakdown(_make_opp(minInvestment=600))
        assert [name for name, _ in result.multipliers] == ["over_budget"]

    def test_preferred_category_bonus(self, engine: ScoringEngine) -> None:
        """inmobiliario adds x1.05 after the other multipliers: 92.4 x 1.05 -> 97."""
        result = engine.breakdown(_make_opp(category="Inmobiliario"))
        assert result.multipliers[-1] == ("preferred_category", 1.05)
        assert result.score == 97

    def test_empty_record_is_scored(self) -> None:
        """Missing fields fall back to neutral values: 35 x 0.8 = 28."""
        opp = OpportunityRecord(id="empty")
        assert ScoringEngine(UserConfig()).score(opp) == 28

    def test_clamped_to_100(self) -> None:
        """Bonuses cannot push past 100."""
        opp = _make_opp(**{"return": 30}, progress=50, category="inmobiliario")
        assert ScoringEngine(UserConfig(budget=1000)).score(opp) == 100

    @pytest.mark.parametrize(
        "record",
        [
            {"id": "a"},
            {"id": "b", "amount": "abc", "return": "x", "risk": "?", "term": "-", "progress": "n/a"},
            {"id": "c", "return": 500, "risk": "E", "term": 120, "progress": 100, "minInvestment": 99999},
            {"id": "d", "return": -10, "amount": -1},
        ],
    )
    def test_always_integer_in_range(self, record: dict) -> None:
        """Scores are integers in [0, 100] for any record."""
        value = ScoringEngine(UserConfig()).score(OpportunityRecord.model_validate(record))
        assert isinstance(value, int)
        assert 0 <= value <= 100

    def test_monotonic_in_return(self, engine: ScoringEngine) -> None:
        """Raising the return never lowers the score."""
        scores = [engine.score(_make_opp(**{"return": r})) for r in range(1, 31)]
        assert scores == sorted(scores)

    def test_risk_at_tolerance_vs_one_beyond(self) -> None:
        """Risk at max keeps base 85; one step beyond drops the sub-score by exactly 20 (70 -> 50)."""
        engine = ScoringEngine(UserConfig(max_risk="B"))
        at_max = engine.breakdown(_make_opp(risk="B")).sub_scores["risk"]
        beyond = engine.breakdown(_make_opp(risk="C")).sub_scores["risk"]
        assert at_max == 85
        assert beyond == DEFAULT_MARKET.risk_base_scores["C"] - 20

    def test_injected_market_changes_bonus(self, roomy_config: UserConfig) -> None:
        """Preferred category comes from the injected rules."""
        market = DEFAULT_MARKET.model_copy(update={"preferred_category": "factoring"})
        engine = ScoringEngine(roomy_config, market)
        result = engine.breakdown(_make_opp(category="factoring"))
        assert result.multipliers[-1][0] == "preferred_category"


class TestScoreMany:
    """Tests for ranking."""

    def test_sorted_descending(self, engine: ScoringEngine) -> None:
        """Best score first."""
        opps = [
            _make_opp(id="low", **{"return": 3}),
            _make_opp(id="high"),
            _make_opp(id="mid", **{"return": 9}),
        ]
        ranked = engine.score_many(opps)
        assert [o.id for o in ranked] == ["high", "mid", "low"]
        assert all(isinstance(o, ScoredOpportunity) for o in ranked)

    def test_ties_keep_input_order(self, engine: ScoringEngine) -> None:
        """Equal scores stay in their original relative order."""
        opps = [_make_opp(id=f"op-{i}") for i in range(4)]
        ranked = engine.score_many(opps)
        assert [o.id for o in ranked] == ["op-0", "op-1", "op-2", "op-3"]

    def test_flags_attached(self, engine: ScoringEngine) -> None:
        """Scored records carry the eligibility flags."""
        scored = engine.score_one(_make_opp(risk="C"))
        assert scored.fits_budget is True
        assert scored.meets_return is True
        assert scored.acceptable_risk is False

    def test_rescoring_is_idempotent(self, engine: ScoringEngine) -> None:
        """Scoring an already scored record with the same config gives the same result."""
        first = engine.score_one(_make_opp())
        second = engine.score_one(first)
        assert second == first

    def test_module_level_helpers(self, roomy_config: UserConfig) -> None:
        """score / classify / score_opportunities wrap the engine."""
        opp = _make_opp()
        assert score(opp, roomy_config) == 92
        assert classify(opp, roomy_config).level == "high"
        assert score_opportunities(roomy_config, [opp])[0].score == 92


class TestClassify:
    """Tests for recommendation tiers."""

    def test_high_lists_strengths(self, engine: ScoringEngine) -> None:
        """>= 80: up to two strengths in check order."""
        rec = engine.classify(_make_opp())
        assert rec.level == "high"
        assert rec.text == "Strongly recommended"
        assert rec.reasons == ["Excellent return", "Low risk"]

    def test_medium_mixes_strength_and_issue(self) -> None:
        """[60, 80): one strength and one issue (score 79)."""
        engine = ScoringEngine(UserConfig(budget=1000, max_risk="C"))
        opp = _make_opp(**{"return": 10}, risk="B", term=48, progress=50)
        assert engine.score(opp) == 79
        rec = engine.classify(opp)
        assert rec.level == "medium"
        assert rec.text == "Recommended with reservations"
        assert rec.reasons == ["Low risk", "Very long term"]

    def test_low_lists_issues(self) -> None:
        """< 60: up to two issues."""
        engine = ScoringEngine(UserConfig())
        opp = _make_opp(**{"return": 4}, risk="D", progress=50)
        rec = engine.classify(opp)
        assert rec.level == "low"
        assert rec.text == "Not recommended"
        assert rec.reasons == ["Return below minimum", "High risk"]

    def test_outside_budget_is_issue(self) -> None:
        """Not fitting the budget is reported."""
        engine = ScoringEngine(UserConfig(budget=200))
        opp = _make_opp(**{"return": 4}, minInvestment=600, risk="C", term=None)
        rec = engine.classify(opp)
        assert rec.level == "low"
        assert rec.reasons == ["Return below minimum", "Outside budget"]

    def test_explicit_score(self, engine: ScoringEngine) -> None:
        """A given score overrides the computed one for tiering."""
        assert engine.classify(_make_opp(), score=10).level == "low"
