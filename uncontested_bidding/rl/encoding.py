"""State and action encodings for reinforcement learning."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

import numpy as np

from ..engine.calls import NUM_ACTIONS, mask_legal_actions
from ..engine.cards import NUM_CARDS
from ..engine.state import NUM_PLAYERS, STATE_SIZE, PlayerID, UncontestedBiddingState

__all__ = [
    "CARDS_DIM",
    "CALLS_DIM",
    "SEAT_DIM",
    "STATE_SIZE",
    "Observation",
    "encode_state",
    "encode_action_mask",
    "split_information_state",
]

CARDS_DIM = NUM_CARDS
CALLS_DIM = NUM_PLAYERS * NUM_ACTIONS
SEAT_DIM = NUM_PLAYERS


@dataclass(frozen=True)
class Observation:
    """Structured numpy observation for a bidding agent."""

    tensors: Dict[str, np.ndarray]

    def __repr__(self) -> str:  # pragma: no cover - trivial helper
        keys = ", ".join(sorted(self.tensors))
        return f"Observation(keys=[{keys}])"


def encode_state(state: UncontestedBiddingState, player: PlayerID) -> Observation:
    """Encode the given state from the player's perspective."""

    info_state = state.information_state_tensor(player)
    hand, calls, seat = split_information_state(info_state)
    mask, _ = encode_action_mask(state)
    tensors = {
        "info_state": info_state,
        "hand": hand,
        "calls": calls.reshape(NUM_PLAYERS, NUM_ACTIONS),
        "seat": seat,
        "legal_mask": mask,
    }
    return Observation(tensors=tensors)


def encode_action_mask(state: UncontestedBiddingState) -> Tuple[np.ndarray, List[int]]:
    """Return a float mask over the call actions and the legal action ids.

    The mask is all zeros at chance and terminal nodes.
    """

    if state.is_chance_node() or state.is_terminal():
        return np.zeros(NUM_ACTIONS, dtype=np.float32), []
    legal = state.legal_actions()
    mask = mask_legal_actions(legal).as_numpy().astype(np.float32)
    return mask, legal


def split_information_state(values: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Split a flat information-state vector into hand, calls and seat parts."""

    if values.shape != (STATE_SIZE,):
        msg = f"Expected vector of shape ({STATE_SIZE},), got {values.shape}"
        raise ValueError(msg)
    return values[:CARDS_DIM], values[CARDS_DIM : CARDS_DIM + CALLS_DIM], values[CARDS_DIM + CALLS_DIM :]
