"""Game definition and session factory."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

from .auction import Auction
from .calls import DEAL, NUM_ACTIONS, PASS, Call, parse_call
from .contract import Contract, all_contracts, parse_contract
from .deal import MAX_DEAL_ATTEMPTS, DealFilter, DealSampler, accept_any, get_deal_filter
from .exceptions import ConfigError, IllegalActionError, RecordFormatError
from .record import parse_record
from .rules import GameConfig, load_config
from .scoring import MAX_SCORE, MIN_SCORE, ScoringOracle, ScoringOrchestrator
from .state import NUM_PLAYERS, STATE_SIZE, UncontestedBiddingState

__all__ = ["UncontestedBiddingGame", "reachable_contracts"]

logger = logging.getLogger(__name__)


@dataclass
class UncontestedBiddingGame:
    """Session factory holding configuration shared by every session.

    ``rng_seed`` is a counter: each new session advances it and seeds its
    own generator with the new value.
    """

    reference_contracts: Tuple[Contract, ...] = ()
    forced_calls: Tuple[int, ...] = ()
    deal_filter: DealFilter = accept_any
    rng_seed: int = 0
    max_deal_attempts: Optional[int] = MAX_DEAL_ATTEMPTS
    auto_apply_forced: bool = True
    scorer: ScoringOrchestrator = field(default_factory=ScoringOrchestrator)
    sampler: DealSampler = field(init=False)

    def __post_init__(self) -> None:
        self.reference_contracts = tuple(self.reference_contracts)
        self.forced_calls = tuple(self.forced_calls)
        probe = Auction()
        for action in self.forced_calls:
            if action == PASS:
                msg = "Forced calls must be bids"
                raise ConfigError(msg)
            try:
                probe.apply(action)
            except IllegalActionError as exc:
                msg = f"Forced calls {self.forced_calls} are not a legal auction prefix"
                raise ConfigError(msg) from exc
        self.sampler = DealSampler(deal_filter=self.deal_filter, max_attempts=self.max_deal_attempts)

    def __repr__(self) -> str:  # pragma: no cover - trivial
        forced = "-".join(str(Call.from_action(action)) for action in self.forced_calls)
        return f"UncontestedBiddingGame(forced={forced!r}, references={len(self.reference_contracts)}, rng_seed={self.rng_seed})"

    @classmethod
    def new(
        cls,
        config: Optional[GameConfig] = None,
        oracle: Optional[ScoringOracle] = None,
        **overrides,
    ) -> "UncontestedBiddingGame":
        """Construct a game from configuration, defaulting to the bundled preset."""

        cfg = config or load_config()
        if overrides:
            cfg = GameConfig.model_validate({**cfg.model_dump(), **overrides})
        forced = tuple(parse_call(text).action for text in cfg.forced_calls)
        if cfg.reference_contracts:
            references = tuple(parse_contract(text) for text in cfg.reference_contracts)
        elif cfg.relative_scoring:
            references = tuple(reachable_contracts(forced))
        else:
            references = ()
        scorer = ScoringOrchestrator(oracle=oracle) if oracle is not None else ScoringOrchestrator()
        return cls(
            reference_contracts=references,
            forced_calls=forced,
            deal_filter=get_deal_filter(cfg.deal_filter_name),
            rng_seed=cfg.rng_seed,
            max_deal_attempts=cfg.max_deal_attempts,
            auto_apply_forced=cfg.auto_apply_forced,
            scorer=scorer,
        )

    @property
    def relative_scoring(self) -> bool:
        return bool(self.reference_contracts)

    def new_initial_state(self) -> UncontestedBiddingState:
        """Create a session with the next seed; forced calls are pre-applied by default."""

        state = self._make_state()
        if self.auto_apply_forced:
            for action in self.forced_calls:
                state.auction.apply(action)
                state.action_history.append(action)
        return state

    def serialize_state(self, state: UncontestedBiddingState) -> str:
        return state.to_string()

    def deserialize_state(self, text: str) -> UncontestedBiddingState:
        """Rebuild a session from its record, replaying every call."""

        deal, calls = parse_record(text)
        prefix = list(self.forced_calls) if self.auto_apply_forced else []
        if calls[: len(prefix)] != prefix:
            msg = f"Record {text!r} does not start with the forced calls"
            raise RecordFormatError(msg)
        if deal is None and len(calls) > len(prefix):
            msg = f"Record {text!r} has calls but no deal"
            raise RecordFormatError(msg)
        state = self._make_state()
        for action in prefix:
            state.auction.apply(action)
            state.action_history.append(action)
        if deal is None:
            return state
        state.deal = deal
        state.action_history.append(DEAL)
        for action in calls[len(prefix) :]:
            state.apply_action(action)
        return state

    def num_distinct_actions(self) -> int:
        return NUM_ACTIONS

    def num_players(self) -> int:
        return NUM_PLAYERS

    def min_utility(self) -> float:
        return float(MIN_SCORE - MAX_SCORE if self.relative_scoring else MIN_SCORE)

    def max_utility(self) -> float:
        return float(0 if self.relative_scoring else MAX_SCORE)

    def information_state_shape(self) -> Tuple[int, ...]:
        return (STATE_SIZE,)

    def max_game_length(self) -> int:
        return NUM_ACTIONS

    def _make_state(self) -> UncontestedBiddingState:
        self.rng_seed += 1
        logger.debug("Creating session with rng seed %d", self.rng_seed)
        forced = [] if self.auto_apply_forced else list(self.forced_calls)
        return UncontestedBiddingState(
            game=self,
            rng=random.Random(self.rng_seed),
            auction=Auction(forced=forced),
            rng_seed=self.rng_seed,
        )


def reachable_contracts(forced_calls: Sequence[int]) -> list:
    """Contracts the auction can still reach after the forced calls.

    A denomination already named in the forced prefix can only be declared
    by the partner who named it first.
    """

    probe = Auction(calls=list(forced_calls))
    top = probe.highest_bid_rank()
    first_bidder = {}
    for index, action in enumerate(forced_calls):
        call = Call.from_action(action)
        first_bidder.setdefault(call.denomination, index % 2)
    contracts = all_contracts(min_rank=0 if top is None else top)
    return [c for c in contracts if first_bidder.get(c.denomination, c.declarer) == c.declarer]
