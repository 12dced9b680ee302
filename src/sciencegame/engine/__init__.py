"""Game engine module for the science game.

This module contains the core game logic including:
- question_bank: Deterministic seeded question selection
- registry: Player registration, submissions and scoreboard
- rounds: Single-round lifecycle (open, close, score)
- state_machine: Phase transitions and the apply() entry point
- dispatcher: Structural event validation and routing
- settlement: Ranked payout instructions

Usage:
    from sciencegame.engine import Dispatcher, GameStateMachine, QuestionBank

    machine = GameStateMachine(QuestionBank(questions))
    dispatcher = Dispatcher(machine)
    state = machine.new_game(seed="block-hash")

    state = dispatcher.dispatch(state, {"type": "player_join", "tick": 1, "player_id": "alice"}).state
    state = dispatcher.dispatch(state, {"type": "player_join", "tick": 1, "player_id": "bob"}).state
    result = dispatcher.dispatch(state, {"type": "start_game", "tick": 2})

    if result.finished:
        for entry in result.settlement:
            print(entry.rank, entry.player_id, entry.payout_weight)
"""

from sciencegame.engine.dispatcher import Dispatcher, parse_event
from sciencegame.engine.errors import (
    AlreadyJoined,
    DeadlineExceeded,
    DuplicateSubmission,
    GameFinished,
    InvalidPhase,
    MalformedEvent,
    NotEnoughPlayers,
    PlayerEliminated,
    QuestionBankExhausted,
    RegistrationClosed,
    RoundAlreadyOpen,
    RoundNotOpen,
    TransitionError,
    UnknownPlayer,
)
from sciencegame.engine.question_bank import QuestionBank
from sciencegame.engine.registry import PlayerRegistry
from sciencegame.engine.rounds import RoundEngine
from sciencegame.engine.settlement import build_settlement
from sciencegame.engine.state_machine import GameStateMachine, Transition, apply

__all__ = [
    # Components
    "QuestionBank",
    "PlayerRegistry",
    "RoundEngine",
    "GameStateMachine",
    "Transition",
    "Dispatcher",
    # Functions
    "apply",
    "build_settlement",
    "parse_event",
    # Errors
    "TransitionError",
    "AlreadyJoined",
    "RegistrationClosed",
    "UnknownPlayer",
    "PlayerEliminated",
    "RoundNotOpen",
    "DuplicateSubmission",
    "DeadlineExceeded",
    "RoundAlreadyOpen",
    "QuestionBankExhausted",
    "NotEnoughPlayers",
    "InvalidPhase",
    "GameFinished",
    "MalformedEvent",
]
