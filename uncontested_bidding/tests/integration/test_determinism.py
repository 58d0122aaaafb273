"""Determinism and cloning tests."""

from __future__ import annotations

from ...engine.calls import DEAL, PASS, bid_action
from ...engine.game import UncontestedBiddingGame
from ...engine.rules import GameConfig
from ..fixtures.oracles import HcpOracle


def _game(seed: int = 123, **overrides) -> UncontestedBiddingGame:
    return UncontestedBiddingGame.new(GameConfig(rng_seed=seed), oracle=HcpOracle(), **overrides)


def _play(state, calls):
    state.apply_action(DEAL)
    for action in calls:
        state.apply_action(action)
    return state


def test_same_seed_produces_same_session() -> None:
    calls = [bid_action(1, "S"), bid_action(2, "N"), bid_action(4, "S"), PASS]
    state_a = _play(_game().new_initial_state(), calls)
    state_b = _play(_game().new_initial_state(), calls)
    assert state_a.deal.cards == state_b.deal.cards
    assert state_a.history() == state_b.history()
    assert state_a.returns() == state_b.returns()


def test_same_seed_filtered_deals_match() -> None:
    deal_a = _play(_game(subgame="2NT").new_initial_state(), []).deal
    deal_b = _play(_game(subgame="2NT").new_initial_state(), []).deal
    assert deal_a.cards == deal_b.cards


def test_seed_counter_advances_per_session() -> None:
    game = _game(seed=10)
    first = game.new_initial_state()
    second = game.new_initial_state()
    assert (first.rng_seed, second.rng_seed) == (11, 12)
    assert game.rng_seed == 12
    assert _play(first, []).deal.cards != _play(second, []).deal.cards


def test_history_includes_deal_and_forced_calls() -> None:
    state = _game(subgame="2NT").new_initial_state()
    _play(state, [PASS])
    assert state.history() == [bid_action(2, "N"), DEAL, PASS]


def test_clone_before_deal_draws_identical_deal() -> None:
    original = _game().new_initial_state()
    clone = original.clone()
    _play(original, [])
    _play(clone, [])
    assert original.deal.cards == clone.deal.cards
    assert original.deal is not clone.deal


def test_clones_diverge_without_interference() -> None:
    original = _play(_game().new_initial_state(), [bid_action(1, "C")])
    clone = original.clone()
    clone.apply_action(bid_action(3, "N"))
    clone.apply_action(PASS)
    assert original.auction.calls == [bid_action(1, "C")]
    assert not original.is_terminal()
    assert original.result is None
    original.apply_action(PASS)
    assert str(original.result.contract) == "1CW"
    assert str(clone.result.contract) == "3NE"
    assert original.deal.cards == clone.deal.cards


def test_clone_deal_mutation_is_isolated() -> None:
    original = _play(_game().new_initial_state(), [])
    clone = original.clone()
    clone.deal.cards.reverse()
    assert original.deal.cards != clone.deal.cards
