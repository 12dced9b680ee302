"""Game state models for the science game.

This module defines the state objects threaded through the game state
machine. GameState is the only entity the substrate persists and replays,
so every model here serializes to JSON deterministically: mappings keep
insertion order and no field depends on wall-clock time or randomness.

Ownership rules:
- Player records live in GameState.players and are mutated only by the
  Player Registry and Round Engine.
- At most one Round is live (GameState.current_round).
- Scored rounds are archived as RoundSummary entries.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from sciencegame.models.questions import Question


class GamePhase(Enum):
    """Top-level game phase."""

    WAITING_FOR_PLAYERS = "waiting_for_players"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class RoundStatus(Enum):
    """Lifecycle of a single round: open -> closed -> scored."""

    OPEN = "open"
    CLOSED = "closed"
    SCORED = "scored"


class CloseReason(Enum):
    """Why a round stopped accepting answers."""

    DEADLINE = "deadline"
    ALL_ANSWERED = "all_answered"
    FORCE_END = "force_end"


class Player(BaseModel):
    """Per-player state.

    Attributes:
        player_id: Opaque identity handle supplied by the substrate
        join_order: 0-based registration sequence index (unique)
        joined_tick: Tick of the PlayerJoin event
        score: Cumulative score
        current_answer: Answer submitted in the live round, if any
        active: False once the player has been eliminated
        correct_answers: Number of credited answers
        response_ticks: Sum of ticks-to-answer over credited answers
        submission_orders: Sum of within-round arrival order over credited answers
    """

    player_id: str
    join_order: int = Field(ge=0)
    joined_tick: int = Field(default=0, ge=0)
    score: int = Field(default=0, ge=0)
    current_answer: str | None = Field(default=None)
    active: bool = Field(default=True)
    correct_answers: int = Field(default=0, ge=0)
    response_ticks: int = Field(default=0, ge=0)
    submission_orders: int = Field(default=0, ge=0)

    def ranking_key(self) -> tuple[int, int, int, int]:
        """Sort key for the scoreboard total order.

        Higher score first, then faster cumulative response, then earlier
        cumulative arrival, then earlier registration.
        """
        return (-self.score, self.response_ticks, self.submission_orders, self.join_order)


class Submission(BaseModel):
    """A stored answer for one round."""

    answer: str
    tick: int = Field(ge=0)
    order: int = Field(ge=0)


class Round(BaseModel):
    """One question's lifecycle.

    Attributes:
        number: 1-based round id
        question: The question being asked
        status: open, closed or scored
        submissions: Player id -> Submission, in arrival order
        opened_tick: Tick the round was opened
        deadline_tick: Last tick at which answers are accepted
        close_reason: Set when the round closes
        closed_tick: Tick at which the round closed
    """

    number: int = Field(ge=1)
    question: Question
    status: RoundStatus = Field(default=RoundStatus.OPEN)
    submissions: dict[str, Submission] = Field(default_factory=dict)
    opened_tick: int = Field(ge=0)
    deadline_tick: int = Field(ge=0)
    close_reason: CloseReason | None = Field(default=None)
    closed_tick: int | None = Field(default=None)

    @property
    def is_open(self) -> bool:
        return self.status == RoundStatus.OPEN


class RoundSummary(BaseModel):
    """Archived result of a scored round."""

    model_config = ConfigDict(frozen=True)

    number: int
    question_id: str
    opened_tick: int
    closed_tick: int
    close_reason: CloseReason
    awards: dict[str, int] = Field(default_factory=dict)
    correct_players: list[str] = Field(default_factory=list)
    unanswered_players: list[str] = Field(default_factory=list)

    @property
    def total_awarded(self) -> int:
        """Total points handed out in this round."""
        return sum(self.awards.values())


class SettlementEntry(BaseModel):
    """One ranked payout instruction for the chain-settlement layer."""

    model_config = ConfigDict(frozen=True)

    player_id: str
    rank: int = Field(ge=1)
    score: int = Field(ge=0)
    payout_weight: int = Field(ge=0)


class GameState(BaseModel):
    """Complete authoritative game state.

    Attributes:
        phase: Current game phase
        seed: Opaque seed distributed by the substrate for question selection
        tick: Highest tick seen so far
        players: Player id -> Player, in registration order
        current_round: The live round (only while IN_PROGRESS)
        finished_rounds: Summaries of scored rounds, oldest first
        rounds_started: Number of rounds opened so far
        settlement: Final ranked settlement, set exactly once on finish
    """

    phase: GamePhase = Field(default=GamePhase.WAITING_FOR_PLAYERS)
    seed: str = Field(default="")
    tick: int = Field(default=0, ge=0)
    players: dict[str, Player] = Field(default_factory=dict)
    current_round: Round | None = Field(default=None)
    finished_rounds: list[RoundSummary] = Field(default_factory=list)
    rounds_started: int = Field(default=0, ge=0)
    settlement: tuple[SettlementEntry, ...] | None = Field(default=None)

    @property
    def is_finished(self) -> bool:
        return self.phase == GamePhase.FINISHED

    # Serialization methods
    def to_json(self) -> str:
        """Serialize state to JSON string."""
        return self.model_dump_json(indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> GameState:
        """Deserialize state from JSON string."""
        return cls.model_validate_json(json_str)

    def to_dict(self) -> dict:
        """Serialize state to a JSON-compatible dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> GameState:
        """Deserialize state from dictionary."""
        return cls.model_validate(data)


def new_game_state(seed: str | int = "") -> GameState:
    """Create the initial state for a new game."""
    return GameState(seed=str(seed))
