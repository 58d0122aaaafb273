"""Random baseline bot."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from .base_bot import BotBase


@dataclass
class RandomBot(BotBase):
    """Uniformly selects a legal call."""

    name: str = "random"
    rng: random.Random = field(default_factory=random.Random)

    def select_action(self, state, player: int) -> int:  # type: ignore[override]
        """Choose a random legal action."""

        return self.rng.choice(state.legal_actions())
