"""Event dispatcher.

Maps an inbound event envelope onto a GameStateMachine transition. The
dispatcher only checks structure: a known ``type``, required fields with
the right types, no unknown fields, and a tick that does not move
backwards. Game-rule checks belong to the state machine.

Usage:
    from sciencegame.engine import Dispatcher, GameStateMachine, QuestionBank

    machine = GameStateMachine(QuestionBank(questions))
    dispatcher = Dispatcher(machine)
    state = machine.new_game(seed="abc")
    result = dispatcher.dispatch(state, {"type": "player_join", "tick": 0, "player_id": "p1"})
    state = result.state
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Union

from pydantic import BaseModel, ValidationError

from sciencegame.engine.errors import MalformedEvent
from sciencegame.engine.state_machine import GameStateMachine, Transition
from sciencegame.models.events import EVENT_ADAPTER, EVENT_TYPES, GameEvent
from sciencegame.models.state import GameState

logger = logging.getLogger(__name__)

EventEnvelope = Union[Mapping[str, Any], BaseModel]


def parse_event(payload: EventEnvelope) -> GameEvent:
    """Validate an event envelope.

    Args:
        payload: A dict from the substrate, or an already-built event model

    Returns:
        The typed event

    Raises:
        MalformedEvent: If the envelope is structurally invalid
    """
    if isinstance(payload, BaseModel):
        payload = payload.model_dump()
    if not isinstance(payload, Mapping):
        raise MalformedEvent(f"Event must be a mapping, got {type(payload).__name__}")

    event_type = payload.get("type")
    if event_type not in EVENT_TYPES:
        raise MalformedEvent(f"Unknown event type: {event_type!r}. Valid types: {list(EVENT_TYPES)}")

    try:
        return EVENT_ADAPTER.validate_python(dict(payload))
    except ValidationError as e:
        fields = ", ".join(".".join(str(part) for part in err["loc"]) for err in e.errors())
        raise MalformedEvent(f"Malformed {event_type} event: invalid fields [{fields}]") from e


class Dispatcher:
    """Structural validation in front of a GameStateMachine.

    Attributes:
        machine: State machine that applies validated events
    """

    def __init__(self, machine: GameStateMachine) -> None:
        self.machine = machine

    def dispatch(self, state: GameState, payload: EventEnvelope) -> Transition:
        """Validate and apply one event.

        Raises:
            MalformedEvent: If the envelope is invalid or its tick regresses
            TransitionError: If the state machine rejects the event
        """
        event = parse_event(payload)
        if event.tick < state.tick:
            raise MalformedEvent(f"Tick {event.tick} is behind current tick {state.tick}")

        transition = self.machine.apply(state, event)
        logger.debug(f"Applied {event.type} at tick {event.tick}; phase {transition.state.phase.value}")
        return transition

    def replay(self, state: GameState, payloads: Iterable[EventEnvelope]) -> GameState:
        """Fold dispatch() over a sequence of events.

        Raises:
            TransitionError: On the first rejected event
        """
        for payload in payloads:
            state = self.dispatch(state, payload).state
        return state
