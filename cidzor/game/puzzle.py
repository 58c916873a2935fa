"""
Pot odds puzzle generation.

A puzzle is a turn spot where the opponent is currently ahead but the
player still has river outs. Deals are drawn by rejection sampling from
a freshly shuffled deck; if no qualifying deal turns up within the
attempt budget, an unconstrained deal is returned and flagged.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .cards import Card, Deck, format_cards
from .evaluator import describe, evaluate
from .odds import (
    Decision,
    correct_decision,
    odds_against_percentage,
    pot_odds_percentage,
)
from .outs import OutsResult, calculate_outs

logger = logging.getLogger(__name__)


@dataclass
class PuzzleConfig:
    """Configuration for puzzle generation."""
    max_attempts: int = 1000
    min_amount: int = 10     # Pot and bet are multiples of amount_step
    max_amount: int = 700
    amount_step: int = 10
    seed: Optional[int] = None

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.amount_step <= 0 or self.min_amount <= 0:
            raise ValueError("Amounts and amount_step must be positive")
        if self.max_amount < self.min_amount:
            raise ValueError(
                f"max_amount ({self.max_amount}) is below min_amount ({self.min_amount})"
            )


@dataclass(frozen=True)
class PuzzleState:
    """Everything the presentation layer needs to render one puzzle."""
    player: list[Card]
    opponent: list[Card]
    board: list[Card]
    pot: int
    bet: int
    outs: OutsResult
    player_score: int
    opponent_score: int
    attempts: int = 1
    is_fallback: bool = False

    @property
    def outs_count(self) -> int:
        return self.outs.count

    @property
    def pot_odds_percentage(self) -> float:
        return pot_odds_percentage(self.pot, self.bet)

    @property
    def odds_against_percentage(self) -> float:
        return odds_against_percentage(self.outs.count, self.outs.remaining)

    @property
    def correct_decision(self) -> Decision:
        return correct_decision(self.outs.count, self.pot, self.bet, self.outs.remaining)

    @property
    def player_is_behind(self) -> bool:
        return self.opponent_score > self.player_score

    def question(self) -> str:
        """The puzzle as a single readable prompt."""
        return (
            f"In Texas Hold'em, if I have {format_cards(self.player, pretty=True)}, "
            f"opponent has {format_cards(self.opponent, pretty=True)}, "
            f"and board is {format_cards(self.board, pretty=True)}, "
            f"and pot is ${self.pot} with opponent going all in for ${self.bet}, "
            f"what are the pot odds, what are the odds against (outs)?"
        )


class PuzzleGenerator:
    """
    Deals turn spots until the player is behind with outs.

    Each generate() call is independent; the only state carried between
    calls is the random generator.
    """

    def __init__(self, config: Optional[PuzzleConfig] = None):
        self.config = config or PuzzleConfig()
        self.rng = np.random.default_rng(self.config.seed)

    def deal(self) -> tuple[list[Card], list[Card], list[Card]]:
        """
        Shuffle a fresh deck and deal one spot.

        Returns:
            Tuple of (player hole, board, opponent hole)
        """
        deck = Deck(rng=self.rng)
        deck.shuffle()
        player = deck.deal(2)
        board = deck.deal(4)
        opponent = deck.deal(2)
        return player, board, opponent

    def random_amount(self) -> int:
        """Random multiple of amount_step between min_amount and max_amount."""
        cfg = self.config
        steps = (cfg.max_amount - cfg.min_amount) // cfg.amount_step
        return cfg.min_amount + int(self.rng.integers(0, steps + 1)) * cfg.amount_step

    @staticmethod
    def is_valid(player_score: int, opponent_score: int, outs: OutsResult) -> bool:
        """Opponent strictly ahead now and the player has at least one out."""
        return opponent_score > player_score and outs.count > 0

    def generate(self) -> PuzzleState:
        """
        Generate a puzzle.

        Returns:
            PuzzleState; is_fallback is set when the attempt budget ran out
        """
        for attempt in range(1, self.config.max_attempts + 1):
            player, board, opponent = self.deal()
            player_score = evaluate(player + board)
            opponent_score = evaluate(opponent + board)

            # Outs only matter when the opponent is ahead
            if opponent_score <= player_score:
                outs = None
            else:
                outs = calculate_outs(player, opponent, board)

            if attempt % 100 == 0:
                logger.debug(
                    "Attempt %d: player %s vs opponent %s",
                    attempt, describe(player_score), describe(opponent_score),
                )

            if outs is not None and self.is_valid(player_score, opponent_score, outs):
                logger.info(
                    "Puzzle found on attempt %d: %s vs %s on %s, %d outs",
                    attempt, format_cards(player), format_cards(opponent),
                    format_cards(board), outs.count,
                )
                return self._build(
                    player, board, opponent, player_score, opponent_score, outs, attempt
                )

        logger.warning(
            "No qualifying puzzle after %d attempts, using an unconstrained deal",
            self.config.max_attempts,
        )
        player, board, opponent = self.deal()
        return self._build(
            player,
            board,
            opponent,
            evaluate(player + board),
            evaluate(opponent + board),
            calculate_outs(player, opponent, board),
            self.config.max_attempts,
            is_fallback=True,
        )

    def _build(
        self,
        player: list[Card],
        board: list[Card],
        opponent: list[Card],
        player_score: int,
        opponent_score: int,
        outs: OutsResult,
        attempts: int,
        is_fallback: bool = False,
    ) -> PuzzleState:
        return PuzzleState(
            player=player,
            opponent=opponent,
            board=board,
            pot=self.random_amount(),
            bet=self.random_amount(),
            outs=outs,
            player_score=player_score,
            opponent_score=opponent_score,
            attempts=attempts,
            is_fallback=is_fallback,
        )


def analyze_spot(
    player: list[Card],
    board: list[Card],
    opponent: list[Card],
    pot: int,
    bet: int,
) -> PuzzleState:
    """Build a puzzle from a fixed deal instead of a random one."""
    if bet <= 0 or pot < 0:
        raise ValueError(f"Invalid pot/bet: pot={pot}, bet={bet}")
    outs = calculate_outs(player, opponent, board)
    return PuzzleState(
        player=list(player),
        opponent=list(opponent),
        board=list(board),
        pot=pot,
        bet=bet,
        outs=outs,
        player_score=evaluate(list(player) + list(board)),
        opponent_score=evaluate(list(opponent) + list(board)),
    )


def generate_puzzle(config: Optional[PuzzleConfig] = None) -> PuzzleState:
    """Generate a single puzzle with a fresh generator."""
    return PuzzleGenerator(config).generate()
