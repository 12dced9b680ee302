"""Science game models.

This module exports the core data structures for the game.
"""

from .events import (
    EVENT_ADAPTER,
    EVENT_TYPES,
    ForceEnd,
    GameEvent,
    PlayerJoin,
    StartGame,
    SubmitAnswer,
    Tick,
)
from .questions import Question
from .state import (
    CloseReason,
    GamePhase,
    GameState,
    Player,
    Round,
    RoundStatus,
    RoundSummary,
    SettlementEntry,
    Submission,
    new_game_state,
)

__all__ = [
    # Enums
    "GamePhase",
    "RoundStatus",
    "CloseReason",
    # State Models
    "GameState",
    "Player",
    "Round",
    "RoundSummary",
    "SettlementEntry",
    "Submission",
    "Question",
    # Events
    "GameEvent",
    "PlayerJoin",
    "StartGame",
    "SubmitAnswer",
    "Tick",
    "ForceEnd",
    "EVENT_ADAPTER",
    "EVENT_TYPES",
    # State Functions
    "new_game_state",
]
