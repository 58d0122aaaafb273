"""Scoring of completed auctions against a double-dummy oracle."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol, Sequence, Tuple

from .cards import NUM_CARDS_PER_HAND, hand_string
from .contract import Contract, derive_contract
from .deal import Deal
from .exceptions import OracleInvariantError, ScoringFailureError, UncontestedBiddingError

__all__ = [
    "MIN_SCORE",
    "MAX_SCORE",
    "ScoringOracle",
    "DoubleDummyOracle",
    "ScoreResult",
    "ScoringOrchestrator",
]

logger = logging.getLogger(__name__)

MIN_SCORE = -650  # 13 undertricks, at 50 each
MAX_SCORE = 1520  # 7NT making


class ScoringOracle(Protocol):
    """Perfect-information trick counter and bridge scoring table."""

    def tricks(self, deal: Deal, contract: Contract) -> int:
        """Return the tricks declarer takes double dummy."""

    def points(self, contract: Contract, tricks: int, vulnerable: bool = False) -> int:
        """Return the signed declarer score for taking ``tricks``."""


@dataclass
class DoubleDummyOracle:
    """Oracle backed by the DDS solver shipped with ``endplay``.

    The double-dummy table of the most recent deal is cached so the achieved
    contract and every reference contract are solved from one table.
    """

    _cache_key: Optional[Tuple[int, ...]] = field(default=None, repr=False)
    _cache_table: Any = field(default=None, repr=False)

    def tricks(self, deal: Deal, contract: Contract) -> int:
        from endplay.types import Denom, Player

        table = self._table(deal)
        denom = Denom[_ENDPLAY_DENOMS[contract.denomination.index]]
        player = Player[("west", "east")[contract.declarer]]
        return int(table[denom, player])

    def points(self, contract: Contract, tricks: int, vulnerable: bool = False) -> int:
        from endplay.types import Contract as EndplayContract
        from endplay.types import Denom, Penalty, Player, Vul

        ep_contract = EndplayContract(
            level=contract.level,
            denom=Denom[_ENDPLAY_DENOMS[contract.denomination.index]],
            declarer=Player[("west", "east")[contract.declarer]],
            penalty=Penalty.passed,
            result=tricks - contract.tricks_required,
        )
        return int(ep_contract.score(Vul.both if vulnerable else Vul.none))

    def _table(self, deal: Deal):
        key = tuple(deal.cards)
        if key != self._cache_key:
            from endplay.dds import calc_dd_table
            from endplay.types import Deal as EndplayDeal

            self._cache_table = calc_dd_table(EndplayDeal(_pbn(deal)))
            self._cache_key = key
        return self._cache_table


# endplay denomination names indexed by our denomination order.
_ENDPLAY_DENOMS = ("clubs", "diamonds", "hearts", "spades", "nt")


def _pbn(deal: Deal) -> str:
    """Return the deal as a PBN string starting from West, clockwise."""

    west, east, north, south = (hand_string(deal.hand(seat)) for seat in range(4))
    return f"W:{west} {north} {east} {south}"


@dataclass
class ScoreResult:
    """Scores of the achieved contract and each reference contract on one deal."""

    contract: Optional[Contract]
    score: int
    reference_scores: List[int] = field(default_factory=list)

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"ScoreResult(contract={self.contract}, score={self.score}, reference_scores={self.reference_scores})"

    @property
    def passed_out(self) -> bool:
        return self.contract is None

    @property
    def relative_score(self) -> Optional[int]:
        """Score minus the best reference score, if references exist."""

        if not self.reference_scores:
            return None
        return self.score - max(self.reference_scores)

    def returns(self) -> List[float]:
        """Per-player payoff: raw score for player 0, relative for player 1."""

        relative = self.relative_score
        return [float(self.score), float(self.score if relative is None else relative)]


@dataclass
class ScoringOrchestrator:
    """Turns a finished auction into point scores via a scoring oracle."""

    oracle: ScoringOracle = field(default_factory=DoubleDummyOracle)

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"ScoringOrchestrator(oracle={self.oracle!r})"

    def score(self, deal: Deal, calls: Sequence[int], reference_contracts: Sequence[Contract] = ()) -> ScoreResult:
        """Score the contract reached by ``calls`` and every reference contract.

        All contracts are evaluated on the same ``deal``. A passed-out
        auction scores zero, as does every reference contract.
        """

        contract = derive_contract(calls)
        if contract is None:
            return ScoreResult(contract=None, score=0, reference_scores=[0] * len(reference_contracts))
        score = self.contract_score(deal, contract)
        reference_scores = [self.contract_score(deal, ref) for ref in reference_contracts]
        logger.debug("Scored %s for %d (references %s)", contract, score, reference_scores)
        return ScoreResult(contract=contract, score=score, reference_scores=reference_scores)

    def contract_score(self, deal: Deal, contract: Contract) -> int:
        """Return the double-dummy score of one contract on ``deal``."""

        tricks = self._call_oracle(self.oracle.tricks, deal, contract)
        if not 0 <= tricks <= NUM_CARDS_PER_HAND:
            msg = f"Oracle returned {tricks} tricks for {contract}"
            raise OracleInvariantError(msg)
        points = self._call_oracle(self.oracle.points, contract, tricks, vulnerable=False)
        if not MIN_SCORE <= points <= MAX_SCORE:
            msg = f"Oracle returned score {points} for {contract}, outside [{MIN_SCORE}, {MAX_SCORE}]"
            raise OracleInvariantError(msg)
        return points

    @staticmethod
    def _call_oracle(method, *args, **kwargs) -> int:
        """Invoke an oracle method, wrapping foreign failures."""

        try:
            return int(method(*args, **kwargs))
        except UncontestedBiddingError:
            raise
        except Exception as exc:
            msg = f"Scoring oracle failed on {method.__name__}{args}"
            raise ScoringFailureError(msg) from exc
