"""Game configuration models for uncontested bidding."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

from .exceptions import ConfigError

__all__ = ["GameConfig", "SUBGAMES", "load_config", "ConfigRepository", "build_default_repository"]

# Subgame name -> (forced opening calls, deal filter name).
SUBGAMES: Dict[str, tuple] = {
    "": ((), "any"),
    "2NT": (("2N",), "2NT"),
}


@dataclass
class GameConfig:
    """Parameters of a family of uncontested bidding sessions."""

    subgame: str = ""
    relative_scoring: bool = False
    reference_contracts: List[str] = field(default_factory=list)
    rng_seed: int = 0
    max_deal_attempts: Optional[int] = 1_000_000
    auto_apply_forced: bool = True

    def __post_init__(self) -> None:
        if self.subgame not in SUBGAMES:
            msg = f"Unknown subgame {self.subgame!r}; expected one of {sorted(SUBGAMES)}"
            raise ConfigError(msg)
        if self.max_deal_attempts is not None and self.max_deal_attempts <= 0:
            msg = "max_deal_attempts must be positive or null"
            raise ConfigError(msg)

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return (
            "GameConfig("  # pylint: disable=line-too-long
            f"subgame={self.subgame!r}, relative_scoring={self.relative_scoring}, "
            f"reference_contracts={self.reference_contracts}, rng_seed={self.rng_seed})"
        )

    @property
    def forced_calls(self) -> tuple:
        return SUBGAMES[self.subgame][0]

    @property
    def deal_filter_name(self) -> str:
        return SUBGAMES[self.subgame][1]

    def model_dump(self) -> Dict[str, Any]:
        return {
            "subgame": self.subgame,
            "relative_scoring": self.relative_scoring,
            "reference_contracts": list(self.reference_contracts),
            "rng_seed": self.rng_seed,
            "max_deal_attempts": self.max_deal_attempts,
            "auto_apply_forced": self.auto_apply_forced,
        }

    @classmethod
    def model_validate(cls, data: Dict[str, Any]) -> "GameConfig":
        """Create a configuration instance from raw data."""

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            msg = f"Unknown configuration keys: {sorted(unknown)}"
            raise ConfigError(msg)
        values = dict(data)
        if values.get("subgame") is None:
            values.pop("subgame", None)
        refs = values.get("reference_contracts")
        if isinstance(refs, str):
            values["reference_contracts"] = [item.strip() for item in refs.split(",") if item.strip()]
        return cls(**values)


DEFAULT_CONFIG_PATH = Path(__file__).with_name("uncontested_bidding.yaml")


def load_config(path: Path | str | None = None, preset: str = "default") -> GameConfig:
    """Load a named preset from YAML, falling back to defaults."""

    cfg_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    data: Dict[str, Any] = {}
    if cfg_path.exists():
        with cfg_path.open("r", encoding="utf-8") as fh:
            data = _safe_load(fh)
    if not data and preset == "default":
        return GameConfig()
    if preset not in data:
        msg = f"Unknown configuration preset: {preset}"
        raise ConfigError(msg)
    return GameConfig.model_validate(data[preset] or {})


def _safe_load(stream) -> Dict[str, Any]:
    from yaml import safe_load

    loaded = safe_load(stream) or {}
    if not isinstance(loaded, dict):
        msg = "Configuration file must contain a mapping of presets"
        raise ConfigError(msg)
    return loaded


@dataclass
class ConfigRepository:
    """Repository of named configuration presets loaded from one file."""

    path: Path = DEFAULT_CONFIG_PATH

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"ConfigRepository(path={self.path})"

    def get(self, name: str | None = None) -> GameConfig:
        """Retrieve a named configuration; ``None`` selects ``default``."""

        return load_config(self.path, preset=name or "default")


def build_default_repository() -> ConfigRepository:
    """Create a repository reading the bundled presets."""

    return ConfigRepository()
