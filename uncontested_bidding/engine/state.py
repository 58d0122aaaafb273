"""Session state for a single uncontested auction."""

from __future__ import annotations

import copy
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Tuple

import numpy as np

from .auction import Auction
from .calls import DEAL, NUM_ACTIONS, Call
from .cards import NUM_CARDS, encode_cards, hand_string
from .deal import Deal
from .exceptions import IllegalActionError
from .record import auction_string, format_record
from .scoring import ScoreResult

if TYPE_CHECKING:  # pragma: no cover
    from .game import UncontestedBiddingGame

__all__ = [
    "PlayerID",
    "Phase",
    "CHANCE_PLAYER",
    "TERMINAL_PLAYER",
    "NUM_PLAYERS",
    "STATE_SIZE",
    "UncontestedBiddingState",
]

PlayerID = int

NUM_PLAYERS = 2
CHANCE_PLAYER = -1
TERMINAL_PLAYER = -4
STATE_SIZE = NUM_CARDS + NUM_PLAYERS * NUM_ACTIONS + NUM_PLAYERS


class Phase(str, Enum):
    """Lifecycle of a session."""

    NOT_DEALT = "not_dealt"
    IN_AUCTION = "in_auction"
    TERMINAL = "terminal"


@dataclass
class UncontestedBiddingState:
    """One auction: the deal chance event, the calls, and the final score.

    The state owns its random generator and deal; ``game`` is shared,
    read-only configuration.
    """

    game: "UncontestedBiddingGame"
    rng: random.Random
    auction: Auction = field(default_factory=Auction)
    deal: Optional[Deal] = None
    result: Optional[ScoreResult] = None
    rng_seed: int = 0
    action_history: List[int] = field(default_factory=list)

    def __repr__(self) -> str:  # pragma: no cover - simple
        return f"UncontestedBiddingState(phase={self.phase.value}, record={self.to_string()!r})"

    def __str__(self) -> str:
        return self.to_string()

    @property
    def phase(self) -> Phase:
        if self.deal is None:
            return Phase.NOT_DEALT
        if self.auction.is_terminal():
            return Phase.TERMINAL
        return Phase.IN_AUCTION

    def current_player(self) -> PlayerID:
        phase = self.phase
        if phase is Phase.NOT_DEALT:
            return CHANCE_PLAYER
        if phase is Phase.TERMINAL:
            return TERMINAL_PLAYER
        return self.auction.current_player

    def is_chance_node(self) -> bool:
        return self.phase is Phase.NOT_DEALT

    def is_terminal(self) -> bool:
        return self.phase is Phase.TERMINAL

    def legal_actions(self) -> List[int]:
        """Legal action ids for the player to move (the deal outcome at the chance node)."""

        if self.phase is Phase.NOT_DEALT:
            return [DEAL]
        return self.auction.legal_actions()

    def chance_outcomes(self) -> List[Tuple[int, float]]:
        """The deal is one outcome with probability 1; its effect is random."""

        if self.phase is Phase.NOT_DEALT:
            return [(DEAL, 1.0)]
        return []

    def apply_action(self, action: int) -> None:
        """Apply the deal outcome or a call, scoring the auction once it closes."""

        phase = self.phase
        if phase is Phase.TERMINAL:
            msg = f"Auction is over; cannot apply action {action}"
            raise IllegalActionError(msg)
        if phase is Phase.NOT_DEALT:
            if action != DEAL:
                msg = f"Only the deal outcome {DEAL} is legal before dealing, got {action}"
                raise IllegalActionError(msg)
            self.deal = self.game.sampler.sample(self.rng)
            self.action_history.append(action)
            return
        auction = self.auction.copy()
        auction.apply(action)
        if auction.is_terminal():
            # Scoring failures leave the session unchanged.
            self.result = self.game.scorer.score(self.deal, auction.calls, self.game.reference_contracts)
        self.auction = auction
        self.action_history.append(action)

    def apply_call(self, call: Call) -> None:
        self.apply_action(call.action)

    def history(self) -> List[int]:
        return list(self.action_history)

    def returns(self) -> List[float]:
        """Player 0 receives the raw score; player 1 the relative score if configured."""

        if self.result is None:
            return [0.0] * NUM_PLAYERS
        return self.result.returns()

    def information_state(self, player: PlayerID) -> str:
        """The player's own hand followed by the auction so far."""

        _check_player(player)
        parts = []
        if self.deal is not None:
            parts.append(hand_string(self.deal.hand(player)))
        parts.append(auction_string(self.auction.calls))
        return " ".join(part for part in parts if part)

    def information_state_tensor(self, player: PlayerID) -> np.ndarray:
        """Own cards, each player's calls and a seat flag as a flat vector."""

        _check_player(player)
        values = np.zeros(STATE_SIZE, dtype=np.float32)
        if self.deal is not None:
            values[:NUM_CARDS] = encode_cards(self.deal.hand(player))
        for index, action in enumerate(self.auction.calls):
            values[NUM_CARDS + (index % NUM_PLAYERS) * NUM_ACTIONS + action] = 1.0
        values[NUM_CARDS + NUM_PLAYERS * NUM_ACTIONS + player] = 1.0
        return values

    def action_to_string(self, player: PlayerID, action: int) -> str:
        if player == CHANCE_PLAYER:
            return "Deal"
        return str(Call.from_action(action))

    def to_string(self) -> str:
        return format_record(self.deal, self.auction.calls)

    def clone(self) -> "UncontestedBiddingState":
        """Independent copy sharing only the game configuration."""

        rng = random.Random()
        rng.setstate(self.rng.getstate())
        return UncontestedBiddingState(
            game=self.game,
            rng=rng,
            auction=self.auction.copy(),
            deal=None if self.deal is None else self.deal.copy(),
            result=copy.deepcopy(self.result),
            rng_seed=self.rng_seed,
            action_history=list(self.action_history),
        )


def _check_player(player: PlayerID) -> None:
    if player not in range(NUM_PLAYERS):
        msg = f"Player must be 0 or 1, got {player}"
        raise ValueError(msg)
