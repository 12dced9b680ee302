"""Inbound event variants.

The substrate delivers a single totally ordered stream of these events.
The set is closed: every event is one of the five models below, tagged by
its ``type`` field, so the legal transitions stay enumerable.

Identity fields are assumed to be authenticated upstream.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _EventBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    tick: int = Field(ge=0, strict=True)


class PlayerJoin(_EventBase):
    """A player registers for the game."""

    type: Literal["player_join"] = "player_join"
    player_id: str = Field(min_length=1)


class StartGame(_EventBase):
    """Close registration and open the first round."""

    type: Literal["start_game"] = "start_game"


class SubmitAnswer(_EventBase):
    """A player answers the given round."""

    type: Literal["submit_answer"] = "submit_answer"
    player_id: str = Field(min_length=1)
    round: int = Field(ge=1, strict=True)
    answer: str


class Tick(_EventBase):
    """Advance the logical clock."""

    type: Literal["tick"] = "tick"


class ForceEnd(_EventBase):
    """Substrate/admin-issued cancellation; finalizes the game."""

    type: Literal["force_end"] = "force_end"


GameEvent = Annotated[
    Union[PlayerJoin, StartGame, SubmitAnswer, Tick, ForceEnd],
    Field(discriminator="type"),
]

EVENT_ADAPTER: TypeAdapter[GameEvent] = TypeAdapter(GameEvent)

EVENT_TYPES: tuple[str, ...] = (
    "player_join",
    "start_game",
    "submit_answer",
    "tick",
    "force_end",
)
