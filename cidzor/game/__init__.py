"""Poker puzzle engine."""

from .cards import (
    Card,
    Deck,
    Rank,
    Suit,
    DuplicateCardError,
    check_distinct,
    full_deck,
    parse_cards,
    remaining_deck,
)
from .evaluator import (
    HandCategory,
    INVALID_SCORE,
    best_five,
    category_of,
    describe,
    evaluate,
    evaluate_five,
)
from .outs import OutsResult, calculate_outs, has_outs
from .odds import (
    Decision,
    DecisionResult,
    correct_decision,
    evaluate_decision,
    odds_against_percentage,
    pot_odds_percentage,
    pot_odds_ratio,
)
from .puzzle import (
    PuzzleConfig,
    PuzzleGenerator,
    PuzzleState,
    analyze_spot,
    generate_puzzle,
)

__all__ = [
    # Cards
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "DuplicateCardError",
    "check_distinct",
    "full_deck",
    "parse_cards",
    "remaining_deck",
    # Evaluation
    "HandCategory",
    "INVALID_SCORE",
    "best_five",
    "category_of",
    "describe",
    "evaluate",
    "evaluate_five",
    # Outs
    "OutsResult",
    "calculate_outs",
    "has_outs",
    # Odds
    "Decision",
    "DecisionResult",
    "correct_decision",
    "evaluate_decision",
    "odds_against_percentage",
    "pot_odds_percentage",
    "pot_odds_ratio",
    # Puzzle
    "PuzzleConfig",
    "PuzzleGenerator",
    "PuzzleState",
    "analyze_spot",
    "generate_puzzle",
]
