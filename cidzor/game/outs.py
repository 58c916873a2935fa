"""Outs calculation for a trailing hand on the turn."""

import logging
from dataclasses import dataclass, field
from typing import Sequence

from .cards import Card, check_distinct, format_cards, remaining_deck
from .evaluator import describe, evaluate

logger = logging.getLogger(__name__)

HOLE_SIZE = 2
TURN_BOARD_SIZE = 4


@dataclass(frozen=True)
class OutsResult:
    """River cards that put the player strictly ahead."""
    cards: list[Card] = field(default_factory=list)
    chops: list[Card] = field(default_factory=list)  # rivers that tie exactly
    remaining: int = 0

    @property
    def count(self) -> int:
        return len(self.cards)

    @property
    def win_probability(self) -> float:
        """Chance the river is an out (0-1)."""
        if self.remaining == 0:
            return 0.0
        return self.count / self.remaining


def calculate_outs(
    player_hole: Sequence[Card],
    opponent_hole: Sequence[Card],
    board: Sequence[Card],
) -> OutsResult:
    """
    Find every river card that lets the player overtake the opponent.

    A card counts only if the player's best hand then scores strictly
    higher than the opponent's; a chopped pot is not an out.

    Args:
        player_hole: Player's two hole cards
        opponent_hole: Opponent's two hole cards
        board: The four community cards dealt so far

    Returns:
        OutsResult listing outs and chops in deck order

    Raises:
        ValueError: on wrong card counts
        DuplicateCardError: if any card is repeated
    """
    if len(player_hole) != HOLE_SIZE or len(opponent_hole) != HOLE_SIZE:
        raise ValueError("Each player needs exactly 2 hole cards")
    if len(board) != TURN_BOARD_SIZE:
        raise ValueError(f"Board must have exactly 4 cards, got {len(board)}")
    check_distinct(player_hole, opponent_hole, board)

    player = list(player_hole) + list(board)
    opponent = list(opponent_hole) + list(board)

    if logger.isEnabledFor(logging.DEBUG):
        player_now = evaluate(player)
        opponent_now = evaluate(opponent)
        logger.debug(
            "Outs for %s vs %s on %s: player %d (%s), opponent %d (%s)",
            format_cards(player_hole), format_cards(opponent_hole), format_cards(board),
            player_now, describe(player_now), opponent_now, describe(opponent_now),
        )

    unseen = remaining_deck(player_hole, opponent_hole, board)
    outs: list[Card] = []
    chops: list[Card] = []

    for river in unseen:
        player_score = evaluate(player + [river])
        opponent_score = evaluate(opponent + [river])

        if player_score > opponent_score:
            outs.append(river)
            logger.debug(
                "River %s is an out: %s beats %s",
                river, describe(player_score), describe(opponent_score),
            )
        elif player_score == opponent_score:
            chops.append(river)

    logger.debug("Total outs: %d of %d (%s)", len(outs), len(unseen), format_cards(outs))
    return OutsResult(cards=outs, chops=chops, remaining=len(unseen))


def has_outs(
    player_hole: Sequence[Card],
    opponent_hole: Sequence[Card],
    board: Sequence[Card],
) -> bool:
    """Check whether any river card puts the player ahead."""
    return calculate_outs(player_hole, opponent_hole, board).count > 0
