"""Simple point-count bidding heuristic."""

from __future__ import annotations

from dataclasses import dataclass

from ..engine.calls import PASS, Call
from ..engine.cards import Denomination, Suit, high_card_points, is_balanced, suit_lengths
from .base_bot import BotBase


@dataclass
class HeuristicBot(BotBase):
    """Opens on high-card strength and raises to game with a fit.

    Opens 1NT with a balanced 15-17, otherwise one of the longest suit with
    12+ HCP. Partner of the opener bids 3NT with 10+ HCP and passes
    otherwise. Every later call is a pass.
    """

    name: str = "heuristic"
    opening_points: int = 12
    game_points: int = 10

    def select_action(self, state, player: int) -> int:  # type: ignore[override]
        legal = state.legal_actions()
        if PASS not in legal:
            return legal[0]
        hand = state.deal.hand(player)
        hcp = high_card_points(hand)
        calls = state.auction.calls
        if not calls:
            return self._opening(hand, hcp, legal)
        if len(calls) == 1 and calls[0] != PASS and hcp >= self.game_points:
            game = Call.bid(3, Denomination.NO_TRUMP).action
            if game in legal:
                return game
        return PASS

    def _opening(self, hand, hcp: int, legal) -> int:
        if is_balanced(hand) and 15 <= hcp <= 17:
            return Call.bid(1, Denomination.NO_TRUMP).action
        if hcp < self.opening_points:
            return PASS
        lengths = suit_lengths(hand)
        longest = max(range(len(lengths)), key=lambda index: (lengths[index], index))
        action = Call.bid(1, list(Suit)[longest].value).action
        return action if action in legal else PASS
