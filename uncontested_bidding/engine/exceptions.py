"""Exception hierarchy for the uncontested bidding engine."""

from __future__ import annotations

__all__ = [
    "UncontestedBiddingError",
    "IllegalActionError",
    "FilterUnsatisfiableError",
    "ScoringFailureError",
    "OracleInvariantError",
    "RecordFormatError",
    "ConfigError",
]


class UncontestedBiddingError(Exception):
    """Base exception for the project."""

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"{self.__class__.__name__}({self.args})"


class IllegalActionError(UncontestedBiddingError):
    """Raised when an action outside the legal set is applied."""


class FilterUnsatisfiableError(UncontestedBiddingError):
    """Raised when the deal filter rejects every shuffle within the attempt bound."""


class ScoringFailureError(UncontestedBiddingError):
    """Raised when the scoring oracle fails for a deal and contract."""


class OracleInvariantError(UncontestedBiddingError):
    """Raised when the oracle returns a trick count or score out of range."""


class RecordFormatError(UncontestedBiddingError):
    """Raised when a textual deal or auction record cannot be parsed."""


class ConfigError(UncontestedBiddingError):
    """Raised when game parameters are invalid."""
