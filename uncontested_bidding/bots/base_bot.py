"""Bot interface for bidding agents."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..engine.state import UncontestedBiddingState

__all__ = ["BotBase"]


class BotBase(ABC):
    """Abstract base class for bidding agents."""

    name: str = "bot"

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return self.name

    @abstractmethod
    def select_action(self, state: UncontestedBiddingState, player: int) -> int:
        """Return the call action id to make."""

    def notify_auction_end(self, state: UncontestedBiddingState) -> None:
        """Hook called after each auction."""

    def reset(self) -> None:
        """Reset internal state if any."""
