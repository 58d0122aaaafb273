"""Call history and legality rules for the two-player auction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .calls import PASS, Call, highest_bid_rank, legal_call_actions
from .contract import Contract, derive_contract
from .exceptions import IllegalActionError

__all__ = ["Auction"]


@dataclass
class Auction:
    """Calls made alternately by players 0 and 1, starting with player 0.

    ``forced`` holds call action ids that must be made, in order, before
    the players choose freely.
    """

    calls: List[int] = field(default_factory=list)
    forced: List[int] = field(default_factory=list)

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"Auction({self})"

    def __str__(self) -> str:
        return "-".join(str(Call.from_action(action)) for action in self.calls)

    @property
    def current_player(self) -> int:
        return len(self.calls) % 2

    @property
    def pending_forced(self) -> Optional[int]:
        """Next forced call still to be made, if any."""

        return self.forced[0] if self.forced else None

    def is_terminal(self) -> bool:
        """A pass closes the auction; the empty auction is never closed."""

        return bool(self.calls) and self.calls[-1] == PASS

    def legal_actions(self) -> List[int]:
        if self.is_terminal():
            return []
        if self.forced:
            return [self.forced[0]]
        return legal_call_actions(self.calls)

    def apply(self, action: int) -> None:
        """Record a call, enforcing legality and consuming forced calls."""

        if action not in self.legal_actions():
            msg = f"Call {_describe(action)} is not legal after {str(self) or 'the start'}"
            raise IllegalActionError(msg)
        if self.forced:
            self.forced.pop(0)
        self.calls.append(action)

    def highest_bid_rank(self) -> Optional[int]:
        return highest_bid_rank(self.calls)

    def contract(self) -> Optional[Contract]:
        return derive_contract(self.calls)

    def calls_by(self, player: int) -> List[int]:
        """Return the call action ids made by one player."""

        return self.calls[player::2]

    def copy(self) -> "Auction":
        return Auction(calls=list(self.calls), forced=list(self.forced))


def _describe(action: int) -> str:
    try:
        return str(Call.from_action(action))
    except IllegalActionError:
        return f"#{action}"
