"""Uncontested bridge bidding package."""

from __future__ import annotations

from .engine.game import UncontestedBiddingGame
from .engine.rules import load_config

__all__ = ["UncontestedBiddingGame", "load_config"]
