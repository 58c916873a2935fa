"""Card and deck representation utilities."""

from dataclasses import dataclass
from enum import IntEnum
from itertools import chain
from typing import Iterable, Optional

import numpy as np
from treys import Card as TreysCard


class Rank(IntEnum):
    """Card ranks (2-14 where 14 is Ace)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


class Suit(IntEnum):
    """Card suits. Values are keys only, suits have no poker ordering."""
    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3


# Mapping for string conversion
RANK_STR = {
    2: "2", 3: "3", 4: "4", 5: "5", 6: "6", 7: "7", 8: "8", 9: "9",
    10: "T", 11: "J", 12: "Q", 13: "K", 14: "A"
}
STR_RANK = {v: k for k, v in RANK_STR.items()}
STR_RANK["10"] = 10

SUIT_STR = {0: "c", 1: "d", 2: "h", 3: "s"}
STR_SUIT = {v: k for k, v in SUIT_STR.items()}

SUIT_SYMBOL = {0: "♣", 1: "♦", 2: "♥", 3: "♠"}
STR_SUIT.update({v: k for k, v in SUIT_SYMBOL.items()})

DECK_SIZE = 52


class DuplicateCardError(ValueError):
    """Raised when the same card appears more than once in a deal."""


@dataclass(frozen=True)
class Card:
    """A playing card, identified by its (rank, suit) pair."""
    rank: int  # 2-14
    suit: int  # 0-3

    def __str__(self) -> str:
        return f"{RANK_STR[self.rank]}{SUIT_STR[self.suit]}"

    def __repr__(self) -> str:
        return str(self)

    @property
    def pretty(self) -> str:
        """Display form, e.g. 'A♠' or '10♥'."""
        rank = "10" if self.rank == Rank.TEN else RANK_STR[self.rank]
        return f"{rank}{SUIT_SYMBOL[self.suit]}"

    @property
    def is_red(self) -> bool:
        return self.suit in (Suit.HEARTS, Suit.DIAMONDS)

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Parse card from string like 'As', 'Th', '10h' or 'K♠'."""
        if len(s) not in (2, 3):
            raise ValueError(f"Invalid card string: {s}")
        rank_part = s[:-1].upper()
        suit_char = s[-1].lower()

        if rank_part not in STR_RANK:
            raise ValueError(f"Invalid rank: {rank_part}")
        if suit_char not in STR_SUIT:
            raise ValueError(f"Invalid suit: {suit_char}")

        return cls(rank=STR_RANK[rank_part], suit=STR_SUIT[suit_char])

    def to_treys(self) -> int:
        """Convert to treys library card format."""
        return TreysCard.new(str(self))


def parse_cards(s: str) -> list[Card]:
    """
    Parse a run of cards.

    Accepts whitespace/comma separated cards ('As Kh, 2c') as well as
    concatenated two-character cards ('AsKh2c').
    """
    tokens = s.replace(",", " ").split()
    if len(tokens) == 1 and len(tokens[0]) > 3:
        packed = tokens[0]
        if len(packed) % 2 != 0:
            raise ValueError(f"Invalid card string: {packed}")
        tokens = [packed[i:i + 2] for i in range(0, len(packed), 2)]
    return [Card.from_string(t) for t in tokens]


def format_cards(cards: Iterable[Card], pretty: bool = False) -> str:
    """Join cards for display."""
    return " ".join(c.pretty if pretty else str(c) for c in cards)


def full_deck() -> list[Card]:
    """All 52 cards, ranks x suits."""
    return [
        Card(rank, suit)
        for rank in range(2, 15)
        for suit in range(4)
    ]


def remaining_deck(*groups: Iterable[Card]) -> list[Card]:
    """Full deck minus every card in the given groups, in deck order."""
    used = set(chain.from_iterable(groups))
    return [c for c in full_deck() if c not in used]


def check_distinct(*groups: Iterable[Card]) -> None:
    """
    Verify no card appears twice across the groups.

    Raises:
        DuplicateCardError: if any card is repeated
    """
    seen: set[Card] = set()
    dupes: list[Card] = []
    for card in chain.from_iterable(groups):
        if card in seen:
            dupes.append(card)
        seen.add(card)
    if dupes:
        raise DuplicateCardError(
            f"Duplicate cards detected: {format_cards(dupes)}"
        )


class Deck:
    """A standard 52-card deck."""

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.cards: list[Card] = []
        self.reset()

    def reset(self) -> None:
        """Reset deck to full 52 cards."""
        self.cards = full_deck()

    def shuffle(self) -> None:
        """Shuffle the deck with a uniform random permutation."""
        order = self.rng.permutation(len(self.cards))
        self.cards = [self.cards[i] for i in order]

    def deal(self, n: int = 1) -> list[Card]:
        """Deal n cards from the deck."""
        if n > len(self.cards):
            raise ValueError(f"Cannot deal {n} cards, only {len(self.cards)} remaining")
        dealt = self.cards[:n]
        self.cards = self.cards[n:]
        return dealt

    def remove(self, cards: list[Card]) -> None:
        """Remove specific cards from the deck."""
        for card in cards:
            if card in self.cards:
                self.cards.remove(card)

    def __len__(self) -> int:
        return len(self.cards)
