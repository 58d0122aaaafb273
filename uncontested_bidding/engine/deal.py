"""Deals, deal filters and the rejection sampler."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from .cards import NUM_CARDS, NUM_CARDS_PER_HAND, card_rank, card_suit, hand_string, high_card_points, is_balanced
from .exceptions import ConfigError, FilterUnsatisfiableError, RecordFormatError

__all__ = [
    "Deal",
    "DealFilter",
    "DealSampler",
    "DEAL_FILTERS",
    "MAX_DEAL_ATTEMPTS",
    "NUM_HANDS",
    "SEAT_NAMES",
    "accept_any",
    "two_no_trump_opener",
    "get_deal_filter",
]

logger = logging.getLogger(__name__)

NUM_HANDS = 4
# Hand order inside a deal: the two bidders first, then the silent opponents.
SEAT_NAMES = ("W", "E", "N", "S")
MAX_DEAL_ATTEMPTS = 1_000_000

DealFilter = Callable[["Deal"], bool]


@dataclass
class Deal:
    """A permutation of the 52 card identifiers split into four 13-card hands."""

    cards: List[int] = field(default_factory=lambda: list(range(NUM_CARDS)))

    def __post_init__(self) -> None:
        if sorted(self.cards) != list(range(NUM_CARDS)):
            msg = "A deal must be a permutation of the 52 card identifiers"
            raise ValueError(msg)

    def __repr__(self) -> str:  # pragma: no cover - trivial
        hands = " ".join(f"{seat}:{hand_string(self.hand(i))}" for i, seat in enumerate(SEAT_NAMES))
        return f"Deal({hands})"

    @classmethod
    def from_hands(cls, hands: Sequence[Sequence[int]]) -> "Deal":
        """Build a deal from four hands given in seat order."""

        if len(hands) != NUM_HANDS or any(len(hand) != NUM_CARDS_PER_HAND for hand in hands):
            msg = f"Expected {NUM_HANDS} hands of {NUM_CARDS_PER_HAND} cards"
            raise RecordFormatError(msg)
        cards = [card for hand in hands for card in hand]
        if sorted(cards) != list(range(NUM_CARDS)):
            msg = "Hands must partition the 52-card deck"
            raise RecordFormatError(msg)
        return cls(cards=cards)

    def shuffle(self, rng: random.Random, begin: int = 0, end: int = NUM_CARDS) -> None:
        """Fisher-Yates shuffle of positions ``[begin, end)``.

        Uses raw 32-bit draws reduced modulo the remaining range so the
        result depends only on the generator state.
        """

        for i in range(begin, end - 1):
            j = i + rng.getrandbits(32) % (end - i)
            self.cards[i], self.cards[j] = self.cards[j], self.cards[i]

    def card(self, position: int) -> int:
        return self.cards[position]

    def suit(self, position: int) -> int:
        return card_suit(self.cards[position])

    def rank(self, position: int) -> int:
        return card_rank(self.cards[position])

    def hand(self, seat: int) -> List[int]:
        """Return the cards held by the given seat index."""

        start = seat * NUM_CARDS_PER_HAND
        return self.cards[start : start + NUM_CARDS_PER_HAND]

    def copy(self) -> "Deal":
        return Deal(cards=list(self.cards))


def accept_any(deal: Deal) -> bool:
    """Filter that accepts every deal."""

    return True


def two_no_trump_opener(deal: Deal) -> bool:
    """Accept deals where the first hand is balanced with 20-21 HCP."""

    hand = deal.hand(0)
    return 20 <= high_card_points(hand) <= 21 and is_balanced(hand)


DEAL_FILTERS: Dict[str, DealFilter] = {
    "any": accept_any,
    "2NT": two_no_trump_opener,
}


def get_deal_filter(name: str) -> DealFilter:
    """Look up a built-in deal filter by name."""

    try:
        return DEAL_FILTERS[name]
    except KeyError:
        msg = f"Unknown deal filter: {name}"
        raise ConfigError(msg) from None


@dataclass
class DealSampler:
    """Draws deals by rejection until the filter accepts one."""

    deal_filter: DealFilter = accept_any
    max_attempts: Optional[int] = MAX_DEAL_ATTEMPTS

    def __repr__(self) -> str:  # pragma: no cover - trivial
        name = getattr(self.deal_filter, "__name__", repr(self.deal_filter))
        return f"DealSampler(deal_filter={name}, max_attempts={self.max_attempts})"

    def sample(self, rng: random.Random, deal_filter: Optional[DealFilter] = None) -> Deal:
        """Shuffle a fresh deal until it passes the filter.

        The deal is reshuffled in place between attempts, so the accepted
        deal depends only on the generator state and the filter. Passing
        ``deal_filter`` overrides the sampler's own filter for this call.
        """

        accept = deal_filter or self.deal_filter
        deal = Deal()
        attempts = 0
        while True:
            if self.max_attempts is not None and attempts >= self.max_attempts:
                msg = f"Deal filter rejected {attempts} consecutive shuffles"
                raise FilterUnsatisfiableError(msg)
            attempts += 1
            deal.shuffle(rng)
            if accept(deal):
                logger.debug("Accepted deal after %d attempt(s)", attempts)
                return deal
