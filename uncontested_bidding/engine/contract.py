"""Contracts and their derivation from an auction."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from .calls import NUM_BIDS, NUM_DENOMINATIONS, PASS, Call, parse_call
from .cards import Denomination
from .exceptions import RecordFormatError

__all__ = ["Contract", "Doubled", "PLAYER_SEATS", "derive_contract", "all_contracts", "parse_contract"]

# Seat letter of each bidding player.
PLAYER_SEATS = ("W", "E")


class Doubled(str, Enum):
    """Penalty state of a contract; always undoubled without opponents."""

    UNDOUBLED = ""
    DOUBLED = "X"
    REDOUBLED = "XX"


@dataclass(frozen=True)
class Contract:
    """Final contract: level, denomination and declaring player."""

    level: int
    denomination: Denomination
    declarer: int = 0
    doubled: Doubled = Doubled.UNDOUBLED

    def __post_init__(self) -> None:
        if self.declarer not in (0, 1):
            msg = f"Declarer must be player 0 or 1, got {self.declarer}"
            raise ValueError(msg)
        # Validates the level range.
        Call.bid(self.level, self.denomination)

    def __str__(self) -> str:
        return f"{self.level}{self.denomination.value}{self.doubled.value}{PLAYER_SEATS[self.declarer]}"

    @property
    def rank(self) -> int:
        return Call.bid(self.level, self.denomination).rank

    @property
    def tricks_required(self) -> int:
        return self.level + 6


def parse_contract(text: str) -> Contract:
    """Parse ``3N`` (declared by West) or ``4SE`` style contract strings."""

    token = text.strip().upper()
    declarer = 0
    if len(token) == 3 and token[2] in PLAYER_SEATS:
        declarer = PLAYER_SEATS.index(token[2])
        token = token[:2]
    call = parse_call(token)
    if call.is_pass:
        msg = f"Contract {text!r} must name a bid"
        raise RecordFormatError(msg)
    return Contract(level=call.level, denomination=call.denomination, declarer=declarer)


def derive_contract(history: Sequence[int]) -> Optional[Contract]:
    """Return the contract reached by a sequence of call action ids.

    Calls alternate starting with player 0. The declarer is whichever
    partner first named the final denomination, at any level. Returns
    ``None`` when the auction contains no bid.
    """

    bids = [(index, Call.from_action(action)) for index, action in enumerate(history) if action != PASS]
    if not bids:
        return None
    _, final = max(bids, key=lambda item: item[1].rank)
    declarer = next(index % 2 for index, call in bids if call.denomination == final.denomination)
    return Contract(level=final.level, denomination=final.denomination, declarer=declarer)


def all_contracts(min_rank: int = 0) -> List[Contract]:
    """Every undoubled contract ranked at least ``min_rank``, by both players."""

    contracts: List[Contract] = []
    for rank in range(min_rank, NUM_BIDS):
        level, denom_index = divmod(rank, NUM_DENOMINATIONS)
        for declarer in (0, 1):
            contracts.append(Contract(level=level + 1, denomination=Denomination.from_index(denom_index), declarer=declarer))
    return contracts
