"""Tests for deals and the rejection sampler."""

from __future__ import annotations

import random

import pytest

from ...engine.cards import NUM_CARDS, high_card_points, is_balanced
from ...engine.deal import DEAL_FILTERS, Deal, DealSampler, accept_any, get_deal_filter, two_no_trump_opener
from ...engine.exceptions import ConfigError, FilterUnsatisfiableError, RecordFormatError
from ..fixtures.deals import STRONG_BALANCED, STRONG_TWO_SUITER, YARBOROUGH, deal_with_first_hand


def test_new_deal_is_identity() -> None:
    deal = Deal()
    assert deal.cards == list(range(NUM_CARDS))
    assert deal.hand(1) == list(range(13, 26))


def test_shuffle_produces_permutation() -> None:
    rng = random.Random(7)
    deal = Deal()
    for _ in range(20):
        deal.shuffle(rng)
        assert sorted(deal.cards) == list(range(NUM_CARDS))


def test_shuffle_is_reproducible() -> None:
    first, second = Deal(), Deal()
    first.shuffle(random.Random(42))
    second.shuffle(random.Random(42))
    assert first.cards == second.cards
    assert first.cards != list(range(NUM_CARDS))


def test_shuffle_range_leaves_other_positions() -> None:
    deal = Deal()
    deal.shuffle(random.Random(3), begin=13, end=26)
    assert deal.cards[:13] == list(range(13))
    assert deal.cards[26:] == list(range(26, NUM_CARDS))
    assert sorted(deal.cards[13:26]) == list(range(13, 26))


def test_position_accessors() -> None:
    deal = Deal()
    assert deal.card(5) == 5
    assert deal.suit(5) == 1
    assert deal.rank(5) == 1


def test_deal_rejects_non_permutation() -> None:
    with pytest.raises(ValueError):
        Deal(cards=[0] * NUM_CARDS)


def test_from_hands_validates_partition() -> None:
    deal = Deal.from_hands([list(range(i * 13, (i + 1) * 13)) for i in range(4)])
    assert deal.cards == list(range(NUM_CARDS))
    with pytest.raises(RecordFormatError):
        Deal.from_hands([list(range(13))] * 4)
    with pytest.raises(RecordFormatError):
        Deal.from_hands([list(range(13))])


def test_copy_is_independent() -> None:
    deal = Deal()
    clone = deal.copy()
    clone.shuffle(random.Random(1))
    assert deal.cards == list(range(NUM_CARDS))


def test_two_no_trump_filter() -> None:
    assert two_no_trump_opener(deal_with_first_hand(STRONG_BALANCED))
    assert not two_no_trump_opener(deal_with_first_hand(YARBOROUGH))
    assert not two_no_trump_opener(deal_with_first_hand(STRONG_TWO_SUITER))


def test_filter_registry() -> None:
    assert get_deal_filter("any") is accept_any
    assert set(DEAL_FILTERS) == {"any", "2NT"}
    with pytest.raises(ConfigError):
        get_deal_filter("weak-two")


def test_sampler_respects_filter() -> None:
    sampler = DealSampler(deal_filter=two_no_trump_opener)
    deal = sampler.sample(random.Random(11))
    hand = deal.hand(0)
    assert 20 <= high_card_points(hand) <= 21
    assert is_balanced(hand)


def test_sampler_is_reproducible() -> None:
    sampler = DealSampler(deal_filter=two_no_trump_opener)
    assert sampler.sample(random.Random(5)).cards == sampler.sample(random.Random(5)).cards


def test_sampler_accepts_first_shuffle_without_filter() -> None:
    rng_a, rng_b = random.Random(9), random.Random(9)
    expected = Deal()
    expected.shuffle(rng_b)
    assert DealSampler().sample(rng_a).cards == expected.cards


def test_sampler_filter_override() -> None:
    deal = DealSampler().sample(random.Random(2), deal_filter=two_no_trump_opener)
    assert two_no_trump_opener(deal)


def test_unsatisfiable_filter_raises() -> None:
    sampler = DealSampler(deal_filter=lambda deal: False, max_attempts=50)
    with pytest.raises(FilterUnsatisfiableError):
        sampler.sample(random.Random(0))


def test_bound_does_not_change_satisfiable_results() -> None:
    bounded = DealSampler(deal_filter=two_no_trump_opener, max_attempts=1_000_000)
    unbounded = DealSampler(deal_filter=two_no_trump_opener, max_attempts=None)
    assert bounded.sample(random.Random(8)).cards == unbounded.sample(random.Random(8)).cards
