"""Tests for textual deal and auction records."""

from __future__ import annotations

import pytest

from ...engine.calls import PASS, bid_action
from ...engine.deal import Deal
from ...engine.exceptions import RecordFormatError
from ...engine.record import auction_string, deal_string, format_record, parse_auction, parse_record
from ..fixtures.deals import STRONG_BALANCED, deal_with_first_hand


def test_auction_string_round_trip() -> None:
    calls = [bid_action(2, "N"), bid_action(3, "C"), bid_action(3, "N"), PASS]
    text = auction_string(calls)
    assert text == "2N-3C-3N-Pass"
    assert parse_auction(text) == calls
    assert parse_auction("") == []


def test_deal_string_lists_seats_in_order() -> None:
    text = deal_string(deal_with_first_hand(STRONG_BALANCED))
    assert text.startswith(f"W:{STRONG_BALANCED} E:")
    assert [token[0] for token in text.split()] == ["W", "E", "N", "S"]


def test_record_round_trip() -> None:
    deal = deal_with_first_hand(STRONG_BALANCED)
    calls = [bid_action(1, "N"), PASS]
    parsed_deal, parsed_calls = parse_record(format_record(deal, calls))
    assert parsed_calls == calls
    for seat in range(4):
        assert sorted(parsed_deal.hand(seat)) == sorted(deal.hand(seat))


def test_undealt_record() -> None:
    assert format_record(None, [bid_action(2, "N")]) == "2N"
    assert parse_record("2N") == (None, [bid_action(2, "N")])
    assert parse_record("") == (None, [])


def test_dealt_record_without_calls() -> None:
    text = format_record(Deal(), [])
    assert not text.endswith(" ")
    deal, calls = parse_record(text)
    assert calls == []
    assert deal is not None


def test_malformed_records() -> None:
    text = deal_string(Deal())
    with pytest.raises(RecordFormatError):
        parse_record(text.split(" ", 1)[1])
    with pytest.raises(RecordFormatError):
        parse_record(f"{text} 1N Pass")
    with pytest.raises(RecordFormatError):
        parse_record(f"{text} 1N-9N")
    west = text.split()[0]
    with pytest.raises(RecordFormatError):
        parse_record(f"{west} {text}")
