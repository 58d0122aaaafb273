"""Calls, action identifiers and legal-action masks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from .cards import Denomination
from .exceptions import IllegalActionError, RecordFormatError

__all__ = [
    "Call",
    "ActionMask",
    "PASS",
    "DEAL",
    "MAX_LEVEL",
    "NUM_DENOMINATIONS",
    "NUM_BIDS",
    "NUM_ACTIONS",
    "bid_action",
    "highest_bid_rank",
    "legal_call_actions",
    "parse_call",
    "mask_legal_actions",
]

MAX_LEVEL = 7
NUM_DENOMINATIONS = len(Denomination)
NUM_BIDS = MAX_LEVEL * NUM_DENOMINATIONS
NUM_ACTIONS = NUM_BIDS + 1
PASS = 0
# Outcome id of the single chance event that deals the cards.
DEAL = 0
_FIRST_BID = 1


@dataclass(frozen=True)
class Call:
    """A pass or a bid of ``level`` in ``denomination``."""

    level: Optional[int] = None
    denomination: Optional[Denomination] = None

    def __post_init__(self) -> None:
        if (self.level is None) != (self.denomination is None):
            msg = "A bid needs both a level and a denomination"
            raise ValueError(msg)
        if self.level is not None and not 1 <= self.level <= MAX_LEVEL:
            msg = f"Bid level must be between 1 and {MAX_LEVEL}, got {self.level}"
            raise ValueError(msg)

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"Call({self})"

    def __str__(self) -> str:
        if self.is_pass:
            return "Pass"
        return f"{self.level}{self.denomination.value}"

    @classmethod
    def pass_(cls) -> "Call":
        return cls()

    @classmethod
    def bid(cls, level: int, denomination: Denomination | str) -> "Call":
        return cls(level=level, denomination=Denomination(denomination))

    @classmethod
    def from_action(cls, action: int) -> "Call":
        """Decode an action identifier in ``[0, NUM_ACTIONS)``."""

        if not 0 <= action < NUM_ACTIONS:
            msg = f"Action {action} is outside the action space"
            raise IllegalActionError(msg)
        if action == PASS:
            return cls.pass_()
        rank = action - _FIRST_BID
        level, denom_index = divmod(rank, NUM_DENOMINATIONS)
        return cls(level=level + 1, denomination=Denomination.from_index(denom_index))

    @property
    def is_pass(self) -> bool:
        return self.level is None

    @property
    def rank(self) -> int:
        """Total order of bids; passes have no rank."""

        if self.is_pass:
            msg = "Pass has no bid rank"
            raise ValueError(msg)
        return (self.level - 1) * NUM_DENOMINATIONS + self.denomination.index

    @property
    def action(self) -> int:
        return PASS if self.is_pass else self.rank + _FIRST_BID


def bid_action(level: int, denomination: Denomination | str) -> int:
    """Return the action identifier of a bid."""

    return Call.bid(level, denomination).action


def parse_call(text: str) -> Call:
    """Parse ``Pass`` or a bid such as ``2N`` / ``4S``."""

    token = text.strip()
    if token.lower() in {"pass", "p"}:
        return Call.pass_()
    if len(token) != 2 or not token[0].isdigit():
        msg = f"Unrecognised call {text!r}"
        raise RecordFormatError(msg)
    try:
        return Call.bid(int(token[0]), token[1].upper())
    except ValueError as exc:
        msg = f"Unrecognised call {text!r}"
        raise RecordFormatError(msg) from exc


def highest_bid_rank(history: Iterable[int]) -> Optional[int]:
    """Return the rank of the highest bid among action ids, if any."""

    ranks = [action - _FIRST_BID for action in history if action != PASS]
    return max(ranks) if ranks else None


def legal_call_actions(history: Sequence[int]) -> List[int]:
    """Pass plus every bid ranked above the highest bid so far."""

    top = highest_bid_rank(history)
    first = _FIRST_BID if top is None else top + _FIRST_BID + 1
    return [PASS, *range(first, NUM_ACTIONS)]


@dataclass
class ActionMask:
    """Binary mask over the call action space."""

    values: List[int]

    def __post_init__(self) -> None:
        if any(val not in {0, 1} for val in self.values):
            msg = "Action masks must contain only 0 or 1 entries"
            raise ValueError(msg)

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"ActionMask(values={self.values})"

    def as_numpy(self):  # type: ignore[override]
        """Return the mask as a numpy array."""

        import numpy as np

        return np.array(self.values, dtype=np.int8)


def mask_legal_actions(legal: Iterable[int]) -> ActionMask:
    """Create a mask with ones at the given action identifiers."""

    mask = [0] * NUM_ACTIONS
    for action in legal:
        mask[action] = 1
    return ActionMask(values=mask)
