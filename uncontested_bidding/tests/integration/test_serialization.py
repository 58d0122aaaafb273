"""Serialization round trips through the textual record."""

from __future__ import annotations

import pytest

from ...engine.calls import DEAL, PASS, bid_action
from ...engine.exceptions import IllegalActionError, RecordFormatError
from ...engine.game import UncontestedBiddingGame
from ...engine.rules import GameConfig
from ..fixtures.oracles import HcpOracle


def _game(**overrides) -> UncontestedBiddingGame:
    return UncontestedBiddingGame.new(GameConfig(rng_seed=5), oracle=HcpOracle(), **overrides)


def test_round_trip_mid_auction() -> None:
    game = _game()
    state = game.new_initial_state()
    state.apply_action(DEAL)
    state.apply_action(bid_action(1, "D"))
    state.apply_action(bid_action(2, "H"))
    restored = game.deserialize_state(game.serialize_state(state))
    assert restored.to_string() == state.to_string()
    assert restored.current_player() == state.current_player()
    assert restored.legal_actions() == state.legal_actions()
    for player in (0, 1):
        assert restored.information_state(player) == state.information_state(player)
        assert (restored.information_state_tensor(player) == state.information_state_tensor(player)).all()


def test_round_trip_terminal_scores() -> None:
    game = _game(reference_contracts=["3N", "4S"])
    state = game.new_initial_state()
    state.apply_action(DEAL)
    state.apply_action(bid_action(2, "S"))
    state.apply_action(bid_action(4, "S"))
    state.apply_action(PASS)
    restored = game.deserialize_state(state.to_string())
    assert restored.is_terminal()
    assert restored.returns() == state.returns()
    assert restored.result.reference_scores == state.result.reference_scores


def test_round_trip_before_deal() -> None:
    game = _game(subgame="2NT")
    state = game.new_initial_state()
    assert state.to_string() == "2N"
    restored = game.deserialize_state(state.to_string())
    assert restored.is_chance_node()
    assert restored.auction.calls == [bid_action(2, "N")]


def test_record_missing_forced_prefix_rejected() -> None:
    game = _game(subgame="2NT")
    with pytest.raises(RecordFormatError):
        game.deserialize_state("")


def test_record_with_calls_but_no_deal_rejected() -> None:
    with pytest.raises(RecordFormatError):
        _game().deserialize_state("1N-Pass")


def test_record_with_illegal_auction_rejected() -> None:
    game = _game()
    state = game.new_initial_state()
    state.apply_action(DEAL)
    hands = state.to_string()
    with pytest.raises(IllegalActionError):
        game.deserialize_state(f"{hands} 2N-1N")
