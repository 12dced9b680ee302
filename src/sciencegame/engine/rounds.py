"""Round engine.

Drives one question's lifecycle: open -> closed -> scored.

Close rules:
- Deadline: tick >= deadline_tick
- Early close: every active player has submitted
- Forced: ForceEnd closes the live round with whatever was received

Scoring is exact match with no partial credit. Each player has at most
one submission per round, so a player gains at most one question weight
per round.
"""

from __future__ import annotations

import logging

from sciencegame.engine.errors import RoundAlreadyOpen, RoundNotOpen
from sciencegame.engine.registry import PlayerRegistry
from sciencegame.models.questions import Question
from sciencegame.models.state import (
    CloseReason,
    GameState,
    Round,
    RoundStatus,
    RoundSummary,
    Submission,
)

logger = logging.getLogger(__name__)


class RoundEngine:
    """Lifecycle operations on GameState.current_round.

    Attributes:
        state: Game state holding the live round
        registry: Registry used for submission validation and eligibility
        eliminate_on_miss: Deactivate players without a correct answer on scoring
    """

    def __init__(
        self,
        state: GameState,
        registry: PlayerRegistry,
        eliminate_on_miss: bool = False,
    ) -> None:
        self.state = state
        self.registry = registry
        self.eliminate_on_miss = eliminate_on_miss

    @property
    def current(self) -> Round | None:
        return self.state.current_round

    def open(self, question: Question, deadline_tick: int) -> Round:
        """Create the next round.

        Raises:
            RoundAlreadyOpen: If a round is still live
        """
        if self.state.current_round is not None:
            raise RoundAlreadyOpen(f"Round {self.state.current_round.number} is still live")

        number = self.state.rounds_started + 1
        new_round = Round(
            number=number,
            question=question,
            opened_tick=self.state.tick,
            deadline_tick=deadline_tick,
        )
        self.state.current_round = new_round
        self.state.rounds_started = number
        self.registry.clear_answers()
        logger.info(
            f"Opened round {number} (question {question.question_id}) "
            f"at tick {self.state.tick}, deadline {deadline_tick}"
        )
        return new_round

    def accept(
        self,
        player_id: str,
        answer: str,
        tick: int,
        round_number: int | None = None,
    ) -> Submission:
        """Record an answer for the live round via the registry.

        Args:
            round_number: Round the player is answering; defaults to the
                live round. A stale number is rejected with RoundNotOpen.
        """
        current = self._require_round()
        if round_number is None:
            round_number = current.number
        return self.registry.record_submission(player_id, round_number, answer, tick)

    def close_reason(self, tick: int) -> CloseReason | None:
        """Reason the live round should close at ``tick``, or None."""
        current = self.state.current_round
        if current is None or not current.is_open:
            return None
        if tick >= current.deadline_tick:
            return CloseReason.DEADLINE
        if not self.registry.pending_players(current):
            return CloseReason.ALL_ANSWERED
        return None

    def close(self, tick: int, force: bool = False) -> bool:
        """Close the live round if a close condition holds.

        Args:
            tick: Current tick
            force: Close unconditionally (ForceEnd)

        Returns:
            True if the round transitioned open -> closed
        """
        current = self.state.current_round
        if current is None or not current.is_open:
            return False

        reason = self.close_reason(tick)
        if reason is None and force:
            reason = CloseReason.FORCE_END
        if reason is None:
            return False

        current.status = RoundStatus.CLOSED
        current.close_reason = reason
        current.closed_tick = tick
        logger.debug(f"Closed round {current.number} at tick {tick} ({reason.value})")
        return True

    def score(self) -> RoundSummary:
        """Score the closed round and archive it.

        Raises:
            RoundNotOpen: If there is no closed round to score
        """
        current = self._require_round()
        if current.status != RoundStatus.CLOSED:
            raise RoundNotOpen(f"Round {current.number} is {current.status.value}, not closed")

        question = current.question
        awards: dict[str, int] = {}
        correct_players: list[str] = []
        for player_id, submission in sorted(current.submissions.items(), key=lambda item: item[1].order):
            player = self.registry.get(player_id)
            if question.is_correct(submission.answer):
                awards[player_id] = question.weight
                correct_players.append(player_id)
                player.score += question.weight
                player.correct_answers += 1
                player.response_ticks += submission.tick - current.opened_tick
                player.submission_orders += submission.order
            else:
                awards[player_id] = 0

        unanswered = self.registry.pending_players(current)

        if self.eliminate_on_miss:
            for player in self.registry.active_players():
                if player.player_id not in awards or awards[player.player_id] == 0:
                    player.active = False
                    logger.info(f"Player {player.player_id} eliminated in round {current.number}")

        current.status = RoundStatus.SCORED
        summary = RoundSummary(
            number=current.number,
            question_id=question.question_id,
            opened_tick=current.opened_tick,
            closed_tick=current.closed_tick if current.closed_tick is not None else self.state.tick,
            close_reason=current.close_reason or CloseReason.FORCE_END,
            awards=awards,
            correct_players=correct_players,
            unanswered_players=unanswered,
        )
        self.state.finished_rounds.append(summary)
        self.state.current_round = None
        logger.info(
            f"Scored round {summary.number}: {len(correct_players)}/{len(awards)} correct, "
            f"{summary.total_awarded} points awarded"
        )
        return summary

    def _require_round(self) -> Round:
        if self.state.current_round is None:
            raise RoundNotOpen("No round is live")
        return self.state.current_round
