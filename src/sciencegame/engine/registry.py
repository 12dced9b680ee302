"""Player registry.

Tracks joined players, their eligibility and their per-round submission
state. The registry operates on the GameState it is handed; the state
machine always hands it a private working copy, so a raised error never
leaves a partially mutated state behind.
"""

from __future__ import annotations

import logging

from sciencegame.engine.errors import (
    AlreadyJoined,
    DeadlineExceeded,
    DuplicateSubmission,
    PlayerEliminated,
    RegistrationClosed,
    RoundNotOpen,
    UnknownPlayer,
)
from sciencegame.models.state import GamePhase, GameState, Player, Round, Submission

logger = logging.getLogger(__name__)


class PlayerRegistry:
    """Registration, submission bookkeeping and ranking for one game.

    Attributes:
        state: The game state whose players this registry manages
        max_players: Optional registration capacity
    """

    def __init__(self, state: GameState, max_players: int | None = None) -> None:
        self.state = state
        self.max_players = max_players

    def register(self, player_id: str, join_tick: int) -> Player:
        """Add a player to the game.

        Raises:
            RegistrationClosed: If the game has started or is full
            AlreadyJoined: If the player is already registered
        """
        if self.state.phase != GamePhase.WAITING_FOR_PLAYERS:
            raise RegistrationClosed("Registration closed: game already started")
        if player_id in self.state.players:
            raise AlreadyJoined(player_id)
        if self.max_players is not None and len(self.state.players) >= self.max_players:
            raise RegistrationClosed(f"Registration closed: {self.max_players} players joined")

        player = Player(
            player_id=player_id,
            join_order=len(self.state.players),
            joined_tick=join_tick,
        )
        self.state.players[player_id] = player
        logger.debug(f"Registered player {player_id} at tick {join_tick}")
        return player

    def record_submission(
        self,
        player_id: str,
        round_number: int,
        answer: str,
        tick: int,
    ) -> Submission:
        """Store a player's answer for the live round.

        Raises:
            UnknownPlayer: If the player is not registered
            PlayerEliminated: If the player is no longer active
            RoundNotOpen: If no open round has this number
            DuplicateSubmission: If the player already answered this round
            DeadlineExceeded: If tick is past the round deadline
        """
        player = self.state.players.get(player_id)
        if player is None:
            raise UnknownPlayer(player_id)

        current = self.state.current_round
        if current is None or not current.is_open:
            raise RoundNotOpen("No round is open")
        if current.number != round_number:
            raise RoundNotOpen(f"Round {round_number} is not open (current round is {current.number})")

        if not player.active:
            raise PlayerEliminated(player_id)
        if player_id in current.submissions:
            raise DuplicateSubmission(player_id, round_number)
        if tick > current.deadline_tick:
            raise DeadlineExceeded(tick, current.deadline_tick)

        submission = Submission(answer=answer, tick=tick, order=len(current.submissions))
        current.submissions[player_id] = submission
        player.current_answer = answer
        logger.debug(f"Round {round_number}: player {player_id} answered at tick {tick}")
        return submission

    def get(self, player_id: str) -> Player:
        """Get a registered player.

        Raises:
            UnknownPlayer: If the player is not registered
        """
        player = self.state.players.get(player_id)
        if player is None:
            raise UnknownPlayer(player_id)
        return player

    def active_players(self) -> list[Player]:
        """Players still eligible to answer, in registration order."""
        return [p for p in self.state.players.values() if p.active]

    def pending_players(self, round_: Round) -> list[str]:
        """Active players who have not answered the given round."""
        return [p.player_id for p in self.active_players() if p.player_id not in round_.submissions]

    def clear_answers(self) -> None:
        """Reset every player's current-round answer."""
        for player in self.state.players.values():
            player.current_answer = None

    def scoreboard(self) -> list[Player]:
        """Players ordered by (score desc, response ticks, submission order, join order).

        join_order is unique per player, so the ordering is total and no
        two players ever compare equal.
        """
        return sorted(self.state.players.values(), key=Player.ranking_key)

    def __len__(self) -> int:
        return len(self.state.players)
