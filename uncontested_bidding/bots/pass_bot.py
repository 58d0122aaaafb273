"""Bot that passes whenever allowed."""

from __future__ import annotations

from dataclasses import dataclass

from ..engine.calls import PASS
from .base_bot import BotBase


@dataclass
class PassBot(BotBase):
    """Passes at the first opportunity; makes forced calls when required."""

    name: str = "pass"

    def select_action(self, state, player: int) -> int:  # type: ignore[override]
        legal = state.legal_actions()
        return PASS if PASS in legal else legal[0]
