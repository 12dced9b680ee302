"""Game state machine for the science game.

This module implements the single entry point the substrate calls:
``GameStateMachine.apply(state, event) -> Transition``. It is a pure
function of (prior state, event): the prior state is never mutated, all
work happens on a deep copy, and any rejection raises a TransitionError
before the copy is returned, so transitions are all-or-nothing.

Phases:
1. WAITING_FOR_PLAYERS - PlayerJoin registers, StartGame opens round 1
2. IN_PROGRESS - SubmitAnswer and Tick drive the live round; a round that
   closes (deadline or everyone answered) is scored immediately and the
   next round opens, or the game finishes
3. FINISHED - terminal; every further event is rejected with GameFinished

ForceEnd scores the live round with the submissions received so far and
finalizes. Settlement is built exactly once, on entering FINISHED.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from sciencegame.config import GameConfig
from sciencegame.engine.errors import (
    GameFinished,
    InvalidPhase,
    MalformedEvent,
    NotEnoughPlayers,
    QuestionBankExhausted,
    RoundNotOpen,
)
from sciencegame.engine.question_bank import QuestionBank
from sciencegame.engine.registry import PlayerRegistry
from sciencegame.engine.rounds import RoundEngine
from sciencegame.engine.settlement import build_settlement
from sciencegame.models.events import (
    ForceEnd,
    GameEvent,
    PlayerJoin,
    StartGame,
    SubmitAnswer,
    Tick,
)
from sciencegame.models.state import (
    GamePhase,
    GameState,
    RoundSummary,
    SettlementEntry,
    new_game_state,
)

logger = logging.getLogger(__name__)


@dataclass
class Transition:
    """Result of applying one event.

    Attributes:
        state: The new authoritative game state
        settlement: Settlement entries if the game finished on this event
        scored_rounds: Summaries of rounds scored while applying the event
    """

    state: GameState
    settlement: Optional[list[SettlementEntry]] = None
    scored_rounds: list[RoundSummary] = field(default_factory=list)

    @property
    def finished(self) -> bool:
        return self.settlement is not None


class _Context:
    """Per-event working set bound to a private copy of the state."""

    def __init__(self, state: GameState, config: GameConfig) -> None:
        self.state = state
        self.registry = PlayerRegistry(state, max_players=config.max_players)
        self.rounds = RoundEngine(state, self.registry, eliminate_on_miss=config.eliminate_on_miss)
        self.scored: list[RoundSummary] = []
        self.settlement: Optional[list[SettlementEntry]] = None


class GameStateMachine:
    """Orchestrates rounds, scoring and finalization.

    The machine itself is stateless between events: the question bank and
    config are fixed at construction, and everything that changes lives in
    the GameState passed to apply().

    Attributes:
        question_bank: Pool questions are drawn from
        config: Game rules
    """

    def __init__(self, question_bank: QuestionBank, config: Optional[GameConfig] = None) -> None:
        self.question_bank = question_bank
        self.config = config or GameConfig()

    @property
    def total_rounds(self) -> int:
        """Number of rounds a game will play."""
        if self.config.round_count is not None:
            return self.config.round_count
        return len(self.question_bank)

    def new_game(self, seed: str | int) -> GameState:
        """Create the initial WAITING_FOR_PLAYERS state."""
        return new_game_state(seed)

    # =========================================================================
    # Public API
    # =========================================================================

    def apply(self, state: GameState, event: GameEvent) -> Transition:
        """Apply one event.

        Args:
            state: Prior state (never mutated)
            event: A parsed event

        Returns:
            Transition with the new state and any settlement

        Raises:
            TransitionError: If the event is rejected; no state changes
        """
        if state.is_finished:
            raise GameFinished("Game already finished")
        if event.tick < state.tick:
            raise MalformedEvent(f"Tick {event.tick} is behind current tick {state.tick}")

        ctx = _Context(state.model_copy(deep=True), self.config)

        if isinstance(event, PlayerJoin):
            self._on_player_join(ctx, event)
        elif isinstance(event, StartGame):
            self._on_start_game(ctx, event)
        elif isinstance(event, SubmitAnswer):
            self._on_submit_answer(ctx, event)
        elif isinstance(event, Tick):
            self._on_tick(ctx, event)
        elif isinstance(event, ForceEnd):
            self._on_force_end(ctx, event)
        else:
            raise MalformedEvent(f"Unsupported event: {type(event).__name__}")

        return Transition(state=ctx.state, settlement=ctx.settlement, scored_rounds=ctx.scored)

    def replay(self, state: GameState, events: list[GameEvent]) -> GameState:
        """Fold apply() over events, stopping at the first rejection."""
        for event in events:
            state = self.apply(state, event).state
        return state

    # =========================================================================
    # Event handlers
    # =========================================================================

    def _on_player_join(self, ctx: _Context, event: PlayerJoin) -> None:
        ctx.registry.register(event.player_id, event.tick)
        ctx.state.tick = event.tick

    def _on_start_game(self, ctx: _Context, event: StartGame) -> None:
        if ctx.state.phase != GamePhase.WAITING_FOR_PLAYERS:
            raise InvalidPhase(f"Cannot start game in phase {ctx.state.phase.value}")

        registered = len(ctx.registry)
        if registered < self.config.min_players:
            raise NotEnoughPlayers(registered, self.config.min_players)

        pool_size = len(self.question_bank)
        if pool_size == 0 or self.total_rounds > pool_size:
            raise QuestionBankExhausted(max(self.total_rounds - 1, 0), pool_size)

        ctx.state.tick = event.tick
        ctx.state.phase = GamePhase.IN_PROGRESS
        logger.info(f"Game started at tick {event.tick} with {registered} players")
        self._open_next_round(ctx)

    def _on_submit_answer(self, ctx: _Context, event: SubmitAnswer) -> None:
        if ctx.state.phase != GamePhase.IN_PROGRESS:
            raise RoundNotOpen("Game has not started")

        ctx.rounds.accept(event.player_id, event.answer, event.tick, round_number=event.round)
        ctx.state.tick = event.tick
        self._settle_round(ctx)

    def _on_tick(self, ctx: _Context, event: Tick) -> None:
        ctx.state.tick = event.tick
        if ctx.state.phase == GamePhase.IN_PROGRESS:
            self._settle_round(ctx)

    def _on_force_end(self, ctx: _Context, event: ForceEnd) -> None:
        ctx.state.tick = event.tick
        if ctx.rounds.current is not None:
            ctx.rounds.close(event.tick, force=True)
            ctx.scored.append(ctx.rounds.score())
        logger.info(f"Game force-ended at tick {event.tick}")
        self._finalize(ctx)

    # =========================================================================
    # Internal transitions
    # =========================================================================

    def _settle_round(self, ctx: _Context) -> None:
        """Close, score and advance past the live round when it is due."""
        if not ctx.rounds.close(ctx.state.tick):
            return
        ctx.scored.append(ctx.rounds.score())

        if ctx.state.rounds_started >= self.total_rounds:
            self._finalize(ctx)
        elif not ctx.registry.active_players():
            logger.info("No active players remain")
            self._finalize(ctx)
        else:
            self._open_next_round(ctx)

    def _open_next_round(self, ctx: _Context) -> None:
        question = self.question_bank.select(ctx.state.seed, ctx.state.rounds_started)
        ctx.rounds.open(question, ctx.state.tick + question.time_limit)

    def _finalize(self, ctx: _Context) -> None:
        ctx.state.phase = GamePhase.FINISHED
        ctx.state.current_round = None
        ctx.settlement = build_settlement(
            ctx.registry.scoreboard(),
            payout_schedule=self.config.payout_schedule,
            points_value=self.config.points_value,
        )
        ctx.state.settlement = tuple(ctx.settlement)
        logger.info(
            f"Game finished after {len(ctx.state.finished_rounds)} rounds; "
            f"{len(ctx.settlement)} settlement entries"
        )


def apply(
    state: GameState,
    event: GameEvent,
    question_bank: QuestionBank,
    config: Optional[GameConfig] = None,
) -> Transition:
    """Functional form of GameStateMachine.apply()."""
    return GameStateMachine(question_bank, config).apply(state, event)
