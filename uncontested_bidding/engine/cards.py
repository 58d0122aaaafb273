"""Card identifiers and hand helpers for the uncontested bidding engine."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Sequence

import numpy as np

from .exceptions import RecordFormatError

__all__ = [
    "Suit",
    "Denomination",
    "NUM_SUITS",
    "NUM_RANKS",
    "NUM_CARDS",
    "NUM_CARDS_PER_HAND",
    "RANK_CHARS",
    "card_id",
    "card_suit",
    "card_rank",
    "card_string",
    "high_card_points",
    "suit_lengths",
    "is_balanced",
    "hand_string",
    "parse_hand",
    "encode_cards",
]


class Suit(str, Enum):
    """The four suits, ordered by identifier index."""

    CLUBS = "C"
    DIAMONDS = "D"
    HEARTS = "H"
    SPADES = "S"

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"Suit({self.value})"

    @property
    def index(self) -> int:
        return list(Suit).index(self)


class Denomination(str, Enum):
    """Bid denominations in ascending order; no-trump ranks highest."""

    CLUBS = "C"
    DIAMONDS = "D"
    HEARTS = "H"
    SPADES = "S"
    NO_TRUMP = "N"

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"Denomination({self.value})"

    @property
    def index(self) -> int:
        return list(Denomination).index(self)

    @classmethod
    def from_index(cls, index: int) -> "Denomination":
        return list(cls)[index]


NUM_SUITS = len(Suit)
NUM_RANKS = 13
NUM_CARDS = NUM_SUITS * NUM_RANKS
NUM_CARDS_PER_HAND = 13
RANK_CHARS = "23456789TJQKA"

# Rank index of the jack; honours above it score (rank - 8) points.
_JACK_RANK = RANK_CHARS.index("J")

# Shapes accepted as balanced, longest suit first.
BALANCED_SHAPES = {(4, 3, 3, 3), (4, 4, 3, 2), (5, 3, 3, 2)}

__all__.append("BALANCED_SHAPES")


def card_id(suit: Suit | int, rank: int) -> int:
    """Return the identifier for the card with the given suit and rank index."""

    suit_index = suit.index if isinstance(suit, Suit) else int(suit)
    if not 0 <= suit_index < NUM_SUITS or not 0 <= rank < NUM_RANKS:
        msg = f"No card with suit {suit_index} and rank {rank}"
        raise ValueError(msg)
    return rank * NUM_SUITS + suit_index


def card_suit(card: int) -> int:
    return card % NUM_SUITS


def card_rank(card: int) -> int:
    return card // NUM_SUITS


def card_string(card: int) -> str:
    """Return a two-character label such as ``SA`` or ``C2``."""

    return f"{list(Suit)[card_suit(card)].value}{RANK_CHARS[card_rank(card)]}"


def high_card_points(cards: Iterable[int]) -> int:
    """Count high-card points: A=4, K=3, Q=2, J=1."""

    total = 0
    for card in cards:
        rank = card_rank(card)
        if rank >= _JACK_RANK:
            total += rank - _JACK_RANK + 1
    return total


def suit_lengths(cards: Iterable[int]) -> List[int]:
    """Return the number of cards held in each suit, indexed by suit."""

    lengths = [0] * NUM_SUITS
    for card in cards:
        lengths[card_suit(card)] += 1
    return lengths


def is_balanced(cards: Iterable[int]) -> bool:
    """Return True for 4-3-3-3, 4-4-3-2 and 5-3-3-2 shapes."""

    shape = tuple(sorted(suit_lengths(cards), reverse=True))
    return shape in BALANCED_SHAPES


def hand_string(cards: Iterable[int]) -> str:
    """Format a hand as ``spades.hearts.diamonds.clubs`` with ranks descending."""

    by_suit: List[List[int]] = [[] for _ in range(NUM_SUITS)]
    for card in cards:
        by_suit[card_suit(card)].append(card_rank(card))
    holdings = []
    for suit_index in reversed(range(NUM_SUITS)):
        ranks = sorted(by_suit[suit_index], reverse=True)
        holdings.append("".join(RANK_CHARS[rank] for rank in ranks))
    return ".".join(holdings)


def parse_hand(text: str) -> List[int]:
    """Parse a dotted hand string back into card identifiers."""

    holdings = text.split(".")
    if len(holdings) != NUM_SUITS:
        msg = f"Hand {text!r} must list {NUM_SUITS} suits"
        raise RecordFormatError(msg)
    cards: List[int] = []
    for offset, holding in enumerate(holdings):
        suit_index = NUM_SUITS - 1 - offset
        for char in holding.upper():
            rank = RANK_CHARS.find(char)
            if rank < 0:
                msg = f"Unknown rank {char!r} in hand {text!r}"
                raise RecordFormatError(msg)
            cards.append(card_id(suit_index, rank))
    if len(cards) != NUM_CARDS_PER_HAND or len(set(cards)) != len(cards):
        msg = f"Hand {text!r} must hold {NUM_CARDS_PER_HAND} distinct cards"
        raise RecordFormatError(msg)
    return cards


def encode_cards(cards: Sequence[int]) -> np.ndarray:
    """Encode cards as a 52-slot one-hot numpy array."""

    vec = np.zeros(NUM_CARDS, dtype=np.float32)
    vec[list(cards)] = 1.0
    return vec
