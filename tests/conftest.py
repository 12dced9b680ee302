"""Shared pytest fixtures and markers for all tests."""

import pytest

from sciencegame.config import GameConfig
from sciencegame.engine.dispatcher import Dispatcher
from sciencegame.engine.question_bank import QuestionBank
from sciencegame.engine.state_machine import GameStateMachine
from sciencegame.models.events import PlayerJoin, StartGame
from sciencegame.models.questions import Question


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "scenario: marks end-to-end game scenario tests"
    )


SAMPLE_QUESTIONS = [
    {"question_id": "q-water", "prompt": "Formula of water?", "correct_answer": "H2O", "weight": 2, "time_limit": 10},
    {"question_id": "q-helium", "prompt": "Lightest noble gas?", "correct_answer": "helium", "weight": 1, "time_limit": 10},
    {"question_id": "q-planets", "prompt": "Planets in the solar system?", "correct_answer": "8", "weight": 3, "time_limit": 10},
]


@pytest.fixture
def questions():
    """Provide a small question pool."""
    return [Question.model_validate(record) for record in SAMPLE_QUESTIONS]


@pytest.fixture
def answers():
    """Map question id to its correct answer."""
    return {record["question_id"]: record["correct_answer"] for record in SAMPLE_QUESTIONS}


@pytest.fixture
def bank(questions):
    """Provide a QuestionBank over the sample pool."""
    return QuestionBank(questions)


@pytest.fixture
def machine(bank):
    """Provide a state machine with default rules."""
    return GameStateMachine(bank, GameConfig(min_players=2))


@pytest.fixture
def dispatcher(machine):
    """Provide a dispatcher over the default machine."""
    return Dispatcher(machine)


@pytest.fixture
def started_game(machine):
    """Three players joined and the game started at tick 1.

    Returns the state with round 1 open (opened at tick 1, deadline tick 11).
    """
    state = machine.new_game(seed="seed-1")
    for player_id in ("alice", "bob", "carol"):
        state = machine.apply(state, PlayerJoin(tick=0, player_id=player_id)).state
    return machine.apply(state, StartGame(tick=1)).state
