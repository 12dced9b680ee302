"""Typed transition rejections.

Every error here rejects a single event and leaves the game state
unchanged. None of them is fatal; recovery (e.g. redelivering a corrected
event) is up to the substrate. Each class carries a stable ``code`` string
the substrate can report without depending on Python class names.
"""

from __future__ import annotations


class TransitionError(Exception):
    """Base class for all rejected transitions."""

    code = "transition_error"

    def __init__(self, message: str = "") -> None:
        self.message = message or self.__class__.__doc__ or self.code
        super().__init__(self.message)


# ============ Registry errors ============


class AlreadyJoined(TransitionError):
    """Player is already registered."""

    code = "already_joined"

    def __init__(self, player_id: str) -> None:
        self.player_id = player_id
        super().__init__(f"Player {player_id} already joined")


class RegistrationClosed(TransitionError):
    """Registration is not accepting players."""

    code = "registration_closed"


class UnknownPlayer(TransitionError):
    """Player is not registered."""

    code = "unknown_player"

    def __init__(self, player_id: str) -> None:
        self.player_id = player_id
        super().__init__(f"Player {player_id} is not registered")


class PlayerEliminated(TransitionError):
    """Player has been eliminated and may not answer."""

    code = "player_eliminated"

    def __init__(self, player_id: str) -> None:
        self.player_id = player_id
        super().__init__(f"Player {player_id} has been eliminated")


# ============ Submission timing errors ============


class RoundNotOpen(TransitionError):
    """No open round matches the submission."""

    code = "round_not_open"


class DuplicateSubmission(TransitionError):
    """Player already answered this round."""

    code = "duplicate_submission"

    def __init__(self, player_id: str, round_number: int) -> None:
        self.player_id = player_id
        self.round_number = round_number
        super().__init__(f"Player {player_id} already answered round {round_number}")


class DeadlineExceeded(TransitionError):
    """Submission arrived after the round deadline."""

    code = "deadline_exceeded"

    def __init__(self, tick: int, deadline_tick: int) -> None:
        self.tick = tick
        self.deadline_tick = deadline_tick
        super().__init__(f"Tick {tick} is past deadline tick {deadline_tick}")


# ============ Round lifecycle / configuration errors ============


class RoundAlreadyOpen(TransitionError):
    """A round is already live."""

    code = "round_already_open"


class QuestionBankExhausted(TransitionError):
    """Requested question index is beyond the pool."""

    code = "question_bank_exhausted"

    def __init__(self, index: int, pool_size: int) -> None:
        self.index = index
        self.pool_size = pool_size
        super().__init__(f"Question index {index} outside pool of {pool_size}")


class NotEnoughPlayers(TransitionError):
    """Too few players registered to start."""

    code = "not_enough_players"

    def __init__(self, registered: int, required: int) -> None:
        self.registered = registered
        self.required = required
        super().__init__(f"{registered} players registered, {required} required")


# ============ Phase errors ============


class InvalidPhase(TransitionError):
    """Event is not legal in the current phase."""

    code = "invalid_phase"


class GameFinished(TransitionError):
    """Game is finished; no further events are applied."""

    code = "game_finished"


# ============ Dispatcher errors ============


class MalformedEvent(TransitionError):
    """Event envelope is structurally invalid."""

    code = "malformed_event"
