"""Game configuration for the science game core.

GameConfig is fixed for the lifetime of a game and must be identical on
every node replaying it. Defaults come from sciencegame.parameters.

Configuration via environment variables (see load_config_from_env):
    SCIENCEGAME_MIN_PLAYERS: Minimum players to start (default: 2)
    SCIENCEGAME_MAX_PLAYERS: Registration cap (default: unbounded)
    SCIENCEGAME_ROUND_COUNT: Rounds per game (default: whole question pool)
    SCIENCEGAME_ELIMINATE_ON_MISS: "1"/"true" or "0"/"false" (other values raise)
    SCIENCEGAME_POINTS_VALUE: Payout weight per point (default: 1)
    SCIENCEGAME_PAYOUT_SCHEDULE: Comma-separated payout weights by rank
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, model_validator

from sciencegame.parameters import (
    DEFAULT_ELIMINATE_ON_MISS,
    DEFAULT_MAX_PLAYERS,
    DEFAULT_MIN_PLAYERS,
    DEFAULT_PAYOUT_SCHEDULE,
    DEFAULT_POINTS_VALUE,
    DEFAULT_ROUND_COUNT,
)

ENV_PREFIX = "SCIENCEGAME_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class GameConfig(BaseModel):
    """Rules for a single game.

    Attributes:
        min_players: Players required before StartGame is accepted
        max_players: Registration capacity (None for unbounded)
        round_count: Rounds to play (None for one per pooled question)
        eliminate_on_miss: Deactivate players who miss a round
        points_value: Payout weight per point when no schedule is set
        payout_schedule: Payout weight per rank, rank 1 first
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    min_players: int = Field(default=DEFAULT_MIN_PLAYERS, ge=1)
    max_players: int | None = Field(default=DEFAULT_MAX_PLAYERS, ge=1)
    round_count: int | None = Field(default=DEFAULT_ROUND_COUNT, ge=1)
    eliminate_on_miss: bool = Field(default=DEFAULT_ELIMINATE_ON_MISS)
    points_value: int = Field(default=DEFAULT_POINTS_VALUE, ge=0)
    payout_schedule: tuple[int, ...] | None = Field(default=DEFAULT_PAYOUT_SCHEDULE)

    @model_validator(mode="after")
    def check_bounds(self) -> GameConfig:
        """Validate cross-field constraints."""
        if self.max_players is not None and self.max_players < self.min_players:
            raise ValueError(
                f"max_players ({self.max_players}) must be >= min_players ({self.min_players})"
            )
        if self.payout_schedule is not None and any(w < 0 for w in self.payout_schedule):
            raise ValueError("payout_schedule weights must be non-negative")
        return self


def _parse_optional_int(value: str | None) -> int | None:
    if value is None or value.strip() == "":
        return None
    return int(value)


def _parse_optional_bool(value: str | None) -> bool | None:
    if value is None or value.strip() == "":
        return None
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean value: {value!r}")


def load_config_from_env(environ: Mapping[str, str] | None = None) -> GameConfig:
    """Build a GameConfig from SCIENCEGAME_* environment variables.

    Args:
        environ: Mapping to read from (default: os.environ)

    Raises:
        ValueError: If a variable cannot be parsed
        pydantic.ValidationError: If the resulting config is invalid
    """
    env = os.environ if environ is None else environ

    def get(name: str) -> str | None:
        return env.get(f"{ENV_PREFIX}{name}")

    values: dict = {}

    min_players = _parse_optional_int(get("MIN_PLAYERS"))
    if min_players is not None:
        values["min_players"] = min_players

    max_players = _parse_optional_int(get("MAX_PLAYERS"))
    if max_players is not None:
        values["max_players"] = max_players

    round_count = _parse_optional_int(get("ROUND_COUNT"))
    if round_count is not None:
        values["round_count"] = round_count

    eliminate = _parse_optional_bool(get("ELIMINATE_ON_MISS"))
    if eliminate is not None:
        values["eliminate_on_miss"] = eliminate

    points_value = _parse_optional_int(get("POINTS_VALUE"))
    if points_value is not None:
        values["points_value"] = points_value

    schedule = get("PAYOUT_SCHEDULE")
    if schedule is not None and schedule.strip():
        values["payout_schedule"] = tuple(int(part) for part in schedule.split(","))

    return GameConfig(**values)
