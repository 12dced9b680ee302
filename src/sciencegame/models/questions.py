"""Question model for the science game.

Questions are immutable once loaded into a QuestionBank. Time limits are
expressed in ticks so that every party replaying the same events agrees on
round deadlines.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from sciencegame.parameters import DEFAULT_TIME_LIMIT, DEFAULT_WEIGHT


class Question(BaseModel):
    """A single question record.

    Attributes:
        question_id: Unique identifier within a pool
        prompt: Opaque prompt payload handed to clients
        correct_answer: Canonical answer, compared by exact match
        weight: Points awarded for a correct answer
        time_limit: Ticks the round stays open after it is opened
    """

    model_config = ConfigDict(frozen=True)

    question_id: str = Field(min_length=1)
    prompt: Any = Field(default="")
    correct_answer: str
    weight: int = Field(default=DEFAULT_WEIGHT, ge=1)
    time_limit: int = Field(default=DEFAULT_TIME_LIMIT, ge=1)

    def is_correct(self, answer: str) -> bool:
        """Exact-match comparison against the canonical answer."""
        return answer == self.correct_answer
