"""Evaluation of bidding agents over many sampled deals."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..engine.game import UncontestedBiddingGame
from ..engine.state import UncontestedBiddingState
from .base_bot import BotBase

__all__ = ["Arena", "EvaluationResult", "play_auction"]


@dataclass
class EvaluationResult:
    """Average returns of a partnership over a number of auctions."""

    bots: str
    episodes: int
    mean_score: float
    mean_relative: Optional[float]

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"EvaluationResult({self.bots}: score={self.mean_score:.1f}, relative={self.mean_relative})"


def play_auction(game: UncontestedBiddingGame, bots: Sequence[BotBase]) -> UncontestedBiddingState:
    """Deal and bid one auction to completion."""

    state = game.new_initial_state()
    while not state.is_terminal():
        if state.is_chance_node():
            action, _ = state.chance_outcomes()[0]
            state.apply_action(action)
            continue
        player = state.current_player()
        state.apply_action(bots[player].select_action(state, player))
    for bot in bots:
        bot.notify_auction_end(state)
    return state


@dataclass
class Arena:
    """Runs a partnership of two bots through sampled auctions."""

    game: UncontestedBiddingGame

    def run(self, bots: Sequence[BotBase], episodes: int = 10) -> EvaluationResult:
        """Play ``episodes`` auctions and average the returns."""

        if len(bots) != 2:
            msg = "A partnership needs exactly two bots"
            raise ValueError(msg)
        for bot in bots:
            bot.reset()
        scores: List[float] = []
        relatives: List[float] = []
        for _ in range(episodes):
            state = play_auction(self.game, bots)
            score, second = state.returns()
            scores.append(score)
            relatives.append(second)
        mean_score = sum(scores) / episodes if episodes else 0.0
        mean_relative = None
        if self.game.relative_scoring and episodes:
            mean_relative = sum(relatives) / episodes
        return EvaluationResult(
            bots=f"{bots[0].name}+{bots[1].name}",
            episodes=episodes,
            mean_score=mean_score,
            mean_relative=mean_relative,
        )
