"""Tests for pot odds and decisions."""

import pytest

from cidzor.game.odds import (
    Decision, correct_decision, evaluate_decision,
    odds_against_percentage, pot_odds_percentage, pot_odds_ratio,
)


class TestDecision:
    def test_parse(self):
        assert Decision.parse("call") == Decision.CALL
        assert Decision.parse(" FOLD ") == Decision.FOLD

    def test_parse_invalid(self):
        with pytest.raises(ValueError, match="Unknown decision"):
            Decision.parse("raise")

    def test_str(self):
        assert str(Decision.CALL) == "call"


class TestPercentages:
    def test_pot_odds(self):
        assert pot_odds_percentage(100, 50) == pytest.approx(25.0)

    def test_pot_odds_ratio(self):
        assert pot_odds_ratio(100, 50) == pytest.approx(3.0)

    def test_odds_against(self):
        assert odds_against_percentage(9) == pytest.approx(9 / 44 * 100)
        assert round(odds_against_percentage(9), 1) == 20.5

    def test_zero_outs(self):
        assert odds_against_percentage(0) == 0.0

    def test_bet_must_be_positive(self):
        with pytest.raises(ValueError):
            pot_odds_percentage(100, 0)
        with pytest.raises(ValueError):
            pot_odds_ratio(100, -10)

    def test_pot_cannot_be_negative(self):
        with pytest.raises(ValueError):
            pot_odds_percentage(-1, 10)


class TestCorrectDecision:
    def test_nine_outs_fold(self):
        # 20.5% to hit vs 25.0% price
        assert correct_decision(9, 100, 50) == Decision.FOLD

    def test_many_outs_call(self):
        assert correct_decision(15, 100, 50) == Decision.CALL

    def test_equal_is_fold(self):
        # 11 / 44 = 25% exactly, same as the price
        assert odds_against_percentage(11) == pytest.approx(pot_odds_percentage(100, 50))
        assert correct_decision(11, 100, 50) == Decision.FOLD

    def test_small_bet_into_big_pot(self):
        assert correct_decision(4, 700, 10) == Decision.CALL


class TestEvaluateDecision:
    def test_fold_is_correct(self):
        result = evaluate_decision("fold", outs=9, pot=100, bet=50)
        assert result.is_correct
        assert result.correct == Decision.FOLD
        assert result.pot_odds_percentage == pytest.approx(25.0)
        assert result.odds_against_percentage == pytest.approx(20.4545, abs=1e-3)
        assert result.pot_odds_ratio == pytest.approx(3.0)

    def test_call_is_wrong(self):
        result = evaluate_decision(Decision.CALL, outs=9, pot=100, bet=50)
        assert not result.is_correct

    def test_reasoning(self):
        assert evaluate_decision("fold", 9, 100, 50).reasoning() == (
            "Odds against (20.5%) < Pot odds (25.0%)"
        )
        assert evaluate_decision("call", 15, 100, 50).reasoning() == (
            "Odds against (34.1%) > Pot odds (25.0%)"
        )

    def test_invalid_decision(self):
        with pytest.raises(ValueError):
            evaluate_decision("check", 9, 100, 50)
