"""Tests for contract derivation."""

from __future__ import annotations

import pytest

from ...engine.calls import PASS, bid_action
from ...engine.cards import Denomination
from ...engine.contract import Contract, all_contracts, derive_contract, parse_contract
from ...engine.exceptions import RecordFormatError


def test_passed_out_has_no_contract() -> None:
    assert derive_contract([PASS]) is None
    assert derive_contract([]) is None


def test_final_bid_is_contract() -> None:
    contract = derive_contract([bid_action(1, "N"), PASS])
    assert contract == Contract(level=1, denomination=Denomination.NO_TRUMP, declarer=0)
    assert str(contract) == "1NW"


def test_declarer_is_first_to_name_denomination() -> None:
    # West names hearts, East bids spades, West raises hearts: West declares.
    history = [bid_action(1, "H"), bid_action(1, "S"), bid_action(2, "H"), PASS]
    assert derive_contract(history).declarer == 0


def test_partner_raise_keeps_original_declarer() -> None:
    # East names spades first; West's raise does not make West declarer.
    history = [bid_action(1, "C"), bid_action(1, "S"), bid_action(4, "S"), PASS]
    contract = derive_contract(history)
    assert contract.level == 4
    assert contract.denomination is Denomination.SPADES
    assert contract.declarer == 1


def test_parse_contract() -> None:
    assert parse_contract("3N") == Contract(3, Denomination.NO_TRUMP, 0)
    assert parse_contract("4se") == Contract(4, Denomination.SPADES, 1)
    with pytest.raises(RecordFormatError):
        parse_contract("Pass")
    with pytest.raises(RecordFormatError):
        parse_contract("3NQ")


def test_contract_validation() -> None:
    with pytest.raises(ValueError):
        Contract(3, Denomination.CLUBS, declarer=2)
    with pytest.raises(ValueError):
        Contract(0, Denomination.CLUBS)


def test_all_contracts() -> None:
    contracts = all_contracts()
    assert len(contracts) == 70
    assert len(set(contracts)) == 70
    assert all(c.rank >= 9 for c in all_contracts(min_rank=9))
    assert len(all_contracts(min_rank=9)) == 2 * (35 - 9)


def test_tricks_required() -> None:
    assert Contract(4, Denomination.HEARTS).tricks_required == 10
