"""
Poker hand evaluation.

Scores are plain integers: strictly greater means a strictly better hand,
equal means an exact tie. A score is built as

    category * CATEGORY_BASE + tiebreak

where the tiebreak packs up to five rank values (ordered by count desc,
then value desc) at base 100. The largest possible tiebreak stays below
CATEGORY_BASE, so no hand can spill into the next category.
"""

from collections import Counter
from enum import IntEnum
from itertools import combinations
from typing import Optional, Sequence

from .cards import Card, Rank

CATEGORY_BASE = 10 ** 10
TIEBREAK_WEIGHT = 100

# Returned for fewer than five cards; below every real hand
INVALID_SCORE = 0


class HandCategory(IntEnum):
    """Hand categories, weakest first."""
    HIGH_CARD = 1
    ONE_PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title().replace("Of A", "of a")


WHEEL = [Rank.ACE, Rank.FIVE, Rank.FOUR, Rank.THREE, Rank.TWO]


def _encode(category: HandCategory, tiebreak: Sequence[int]) -> int:
    packed = 0
    for i, value in enumerate(tiebreak):
        packed += value * TIEBREAK_WEIGHT ** (4 - i)
    return category * CATEGORY_BASE + packed


def _straight_high(values: list[int]) -> Optional[int]:
    """High card of a straight given five descending values, else None."""
    if len(set(values)) != 5:
        return None
    if values[0] - values[4] == 4:
        return values[0]
    if values == WHEEL:
        return Rank.FIVE
    return None


def evaluate_five(cards: Sequence[Card]) -> int:
    """
    Score exactly five cards.

    Returns INVALID_SCORE for any other count.
    """
    if len(cards) != 5:
        return INVALID_SCORE

    values = sorted((c.rank for c in cards), reverse=True)
    is_flush = len({c.suit for c in cards}) == 1
    straight_high = _straight_high(values)

    # (value, count) sorted by count desc, value desc
    counts = sorted(Counter(values).items(), key=lambda vc: (vc[1], vc[0]), reverse=True)
    grouped = [v for v, _ in counts]
    shape = [n for _, n in counts]

    if straight_high is not None and is_flush:
        return _encode(HandCategory.STRAIGHT_FLUSH, [straight_high])
    if shape[0] == 4:
        return _encode(HandCategory.FOUR_OF_A_KIND, grouped)
    if shape[:2] == [3, 2]:
        return _encode(HandCategory.FULL_HOUSE, grouped)
    if is_flush:
        return _encode(HandCategory.FLUSH, values)
    if straight_high is not None:
        return _encode(HandCategory.STRAIGHT, [straight_high])
    if shape[0] == 3:
        return _encode(HandCategory.THREE_OF_A_KIND, grouped)
    if shape[:2] == [2, 2]:
        return _encode(HandCategory.TWO_PAIR, grouped)
    if shape[0] == 2:
        return _encode(HandCategory.ONE_PAIR, grouped)
    return _encode(HandCategory.HIGH_CARD, values)


def best_five(cards: Sequence[Card]) -> tuple[int, list[Card]]:
    """
    Find the best five-card subset.

    Args:
        cards: Five or more cards

    Returns:
        Tuple of (score, best five cards). With fewer than five cards
        the score is INVALID_SCORE and the list is empty.
    """
    if len(cards) < 5:
        return INVALID_SCORE, []

    best_score = INVALID_SCORE
    best_combo: list[Card] = []
    for combo in combinations(cards, 5):
        score = evaluate_five(combo)
        if score > best_score:
            best_score = score
            best_combo = list(combo)

    return best_score, best_combo


def evaluate(cards: Sequence[Card]) -> int:
    """
    Score the best poker hand that can be made from the cards.

    Hole cards plus board, five to seven cards in practice. Callers may
    evaluate before enough cards are dealt, so fewer than five cards gives
    INVALID_SCORE rather than an error.
    """
    if len(cards) < 5:
        return INVALID_SCORE
    if len(cards) == 5:
        return evaluate_five(cards)
    return best_five(cards)[0]


def category_of(score: int) -> Optional[HandCategory]:
    """Hand category encoded in a score, None for INVALID_SCORE."""
    if score < CATEGORY_BASE:
        return None
    return HandCategory(score // CATEGORY_BASE)


def describe(score: int) -> str:
    """Human readable category, e.g. 'Two Pair'."""
    category = category_of(score)
    if category is None:
        return "Invalid"
    return category.label
