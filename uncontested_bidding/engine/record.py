"""Textual records of deals and auctions.

A dealt record lists the four hands followed by the auction::

    W:AK32.KQ4.AJ9.KQ5 E:... N:... S:... 2N-3C-3D-3N-Pass

An undealt record is the auction alone (possibly empty).
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .calls import Call, parse_call
from .cards import hand_string, parse_hand
from .deal import NUM_HANDS, SEAT_NAMES, Deal
from .exceptions import RecordFormatError

__all__ = ["auction_string", "parse_auction", "deal_string", "format_record", "parse_record"]


def auction_string(calls: Sequence[int]) -> str:
    return "-".join(str(Call.from_action(action)) for action in calls)


def parse_auction(text: str) -> List[int]:
    if not text:
        return []
    return [parse_call(token).action for token in text.split("-")]


def deal_string(deal: Deal) -> str:
    return " ".join(f"{seat}:{hand_string(deal.hand(i))}" for i, seat in enumerate(SEAT_NAMES))


def format_record(deal: Optional[Deal], calls: Sequence[int]) -> str:
    """Format a session record; the deal part is omitted before dealing."""

    auction = auction_string(calls)
    if deal is None:
        return auction
    return f"{deal_string(deal)} {auction}".rstrip()


def parse_record(text: str) -> Tuple[Optional[Deal], List[int]]:
    """Parse a record produced by :func:`format_record`."""

    hands = {}
    auction_tokens = []
    for token in text.split():
        seat, sep, holding = token.partition(":")
        if sep and seat in SEAT_NAMES:
            if seat in hands:
                msg = f"Seat {seat} appears twice in record"
                raise RecordFormatError(msg)
            hands[seat] = parse_hand(holding)
        else:
            auction_tokens.append(token)
    if len(auction_tokens) > 1:
        msg = f"Unexpected tokens in record: {auction_tokens[1:]}"
        raise RecordFormatError(msg)
    calls = parse_auction(auction_tokens[0]) if auction_tokens else []
    if not hands:
        return None, calls
    if len(hands) != NUM_HANDS:
        msg = f"Record lists {len(hands)} hands, expected {NUM_HANDS}"
        raise RecordFormatError(msg)
    deal = Deal.from_hands([hands[seat] for seat in SEAT_NAMES])
    return deal, calls
