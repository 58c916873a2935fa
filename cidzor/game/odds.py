"""Pot odds arithmetic and call/fold decisions."""

from dataclasses import dataclass
from enum import Enum

# 52 minus the 8 known cards (2 + 2 hole, 4 board)
UNSEEN_ON_TURN = 44


class Decision(str, Enum):
    """Facing an all-in on the turn."""
    CALL = "call"
    FOLD = "fold"

    @classmethod
    def parse(cls, s: str) -> "Decision":
        """Parse decision from user input."""
        value = s.strip().lower()
        for decision in cls:
            if decision.value == value:
                return decision
        raise ValueError(f"Unknown decision: {s!r} (expected 'call' or 'fold')")

    def __str__(self) -> str:
        return self.value


def pot_odds_percentage(pot: float, bet: float) -> float:
    """
    Share of the final pot the caller has to put in.

    bet / (pot + bet + call) * 100, the call being equal to the bet.
    """
    if bet <= 0:
        raise ValueError(f"Bet must be positive, got {bet}")
    if pot < 0:
        raise ValueError(f"Pot cannot be negative, got {pot}")
    return bet / (pot + 2 * bet) * 100


def pot_odds_ratio(pot: float, bet: float) -> float:
    """Money in the middle per unit called, read as 'N:1'."""
    if bet <= 0:
        raise ValueError(f"Bet must be positive, got {bet}")
    return (pot + bet) / bet


def odds_against_percentage(outs: int, remaining: int = UNSEEN_ON_TURN) -> float:
    """Chance of hitting an out on the river, as a percentage."""
    if remaining <= 0:
        raise ValueError(f"Remaining cards must be positive, got {remaining}")
    return outs / remaining * 100


def correct_decision(
    outs: int,
    pot: float,
    bet: float,
    remaining: int = UNSEEN_ON_TURN,
) -> Decision:
    """Call only when the chance of hitting beats the price of calling."""
    if odds_against_percentage(outs, remaining) > pot_odds_percentage(pot, bet):
        return Decision.CALL
    return Decision.FOLD


@dataclass(frozen=True)
class DecisionResult:
    """A user's call/fold graded against the correct answer."""
    decision: Decision
    correct: Decision
    pot_odds_percentage: float
    odds_against_percentage: float
    pot_odds_ratio: float

    @property
    def is_correct(self) -> bool:
        return self.decision == self.correct

    def reasoning(self) -> str:
        op = ">" if self.correct == Decision.CALL else "<"
        if self.correct == Decision.FOLD and self.odds_against_percentage == self.pot_odds_percentage:
            op = "="
        return (
            f"Odds against ({self.odds_against_percentage:.1f}%) {op} "
            f"Pot odds ({self.pot_odds_percentage:.1f}%)"
        )


def evaluate_decision(
    decision: "Decision | str",
    outs: int,
    pot: float,
    bet: float,
    remaining: int = UNSEEN_ON_TURN,
) -> DecisionResult:
    """
    Grade a call/fold decision.

    Args:
        decision: User's decision, a Decision or 'call'/'fold'
        outs: Number of outs
        pot: Pot before the opponent's bet
        bet: Opponent's all-in amount
        remaining: Unseen cards

    Returns:
        DecisionResult with both percentages and the correct answer
    """
    if not isinstance(decision, Decision):
        decision = Decision.parse(decision)

    return DecisionResult(
        decision=decision,
        correct=correct_decision(outs, pot, bet, remaining),
        pot_odds_percentage=pot_odds_percentage(pot, bet),
        odds_against_percentage=odds_against_percentage(outs, remaining),
        pot_odds_ratio=pot_odds_ratio(pot, bet),
    )
