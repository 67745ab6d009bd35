"""Game configuration.

Defaults: a 21x21 maze, 45 unit rounds, the goal shown after 10 units and
a wellness break every third win. Values can be overridden
through ``MAZESWIPE_<FIELD>`` environment variables (optionally loaded from a
``.env`` file) and, with highest precedence, through ``MAZESWIPE_<FIELD>``
keys on a Flask app config mapping.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional

from mazeswipe.maze.config import DEFAULT_COLS, DEFAULT_ROWS, validate_dimensions

ENV_PREFIX = "MAZESWIPE_"
_FALSEY = {"0", "false", "no", "off", ""}


class ConfigError(ValueError):
    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


@dataclass(frozen=True)
class GameConfig:
    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    round_duration: int = 45
    goal_reveal_delay: float = 10.0
    tick_interval: float = 1.0
    wellness_every: int = 3
    max_slide_duration: float = 1.5
    slide_duration_scale: float = 2.0
    cell_size: int = 32
    hard_mode: bool = False
    goal_wander_interval: float = 1.0
    strict_connectivity: bool = True
    max_generation_attempts: int = 3
    seed: Optional[int] = None

    def __post_init__(self):
        validate_dimensions(self.rows, self.cols)
        if self.round_duration <= 0:
            raise ConfigError("round_duration", "must be positive")
        if self.goal_reveal_delay < 0:
            raise ConfigError("goal_reveal_delay", "must not be negative")
        if self.tick_interval <= 0:
            raise ConfigError("tick_interval", "must be positive")
        # 0 disables wellness breaks
        if self.wellness_every < 0:
            raise ConfigError("wellness_every", "must not be negative")
        if self.max_slide_duration <= 0:
            raise ConfigError("max_slide_duration", "must be positive")
        if self.slide_duration_scale <= 0:
            raise ConfigError("slide_duration_scale", "must be positive")
        if self.cell_size <= 0:
            raise ConfigError("cell_size", "must be positive")
        if self.goal_wander_interval <= 0:
            raise ConfigError("goal_wander_interval", "must be positive")
        if self.max_generation_attempts < 1:
            raise ConfigError("max_generation_attempts", "must be at least 1")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any], base: Optional["GameConfig"] = None) -> "GameConfig":
        """Apply ``MAZESWIPE_<FIELD>`` keys from ``mapping`` on top of ``base``."""
        base = base or cls()
        overrides = {}
        for f in fields(cls):
            key = ENV_PREFIX + f.name.upper()
            if key not in mapping:
                continue
            overrides[f.name] = _coerce(f.name, getattr(base, f.name), mapping[key])
        return replace(base, **overrides) if overrides else base

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GameConfig":
        return cls.from_mapping(os.environ if environ is None else environ)

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _coerce(name: str, current: Any, raw: Any) -> Any:
    if raw is None or not isinstance(raw, str):
        return raw
    value = raw.strip()
    try:
        if name == "seed":
            return None if value.lower() in ("", "none", "random") else int(value)
        if isinstance(current, bool):
            return value.lower() not in _FALSEY
        if isinstance(current, int):
            return int(value)
        if isinstance(current, float):
            return float(value)
    except ValueError:
        raise ConfigError(name, f"cannot parse {raw!r}") from None
    return value


__all__ = ["ConfigError", "GameConfig"]
