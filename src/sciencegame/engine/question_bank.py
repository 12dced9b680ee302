"""Question bank with deterministic seeded selection.

The bank never generates randomness of its own. Selection order is a
permutation of the pool derived from the substrate-supplied seed by
hashing, so every node computes the same question for a given
(seed, index) regardless of interpreter or platform.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable
from functools import lru_cache

from sciencegame.engine.errors import QuestionBankExhausted
from sciencegame.models.questions import Question


def _selection_key(seed: str, question_id: str) -> bytes:
    return hashlib.sha256(f"{seed}:{question_id}".encode("utf-8")).digest()


class QuestionBank:
    """Immutable, ordered pool of questions.

    Attributes:
        questions: Loaded questions in pool order
    """

    def __init__(self, questions: Iterable[Question]) -> None:
        self.questions: tuple[Question, ...] = tuple(questions)
        seen: set[str] = set()
        for question in self.questions:
            if question.question_id in seen:
                raise ValueError(f"Duplicate question id: {question.question_id}")
            seen.add(question.question_id)
        self._order = lru_cache(maxsize=32)(self._compute_order)

    @classmethod
    def from_dicts(cls, records: Iterable[dict]) -> QuestionBank:
        """Build a bank from raw question records.

        Raises:
            pydantic.ValidationError: If a record is invalid
            ValueError: If question ids repeat
        """
        return cls(Question.model_validate(record) for record in records)

    def __len__(self) -> int:
        return len(self.questions)

    def _compute_order(self, seed: str) -> tuple[Question, ...]:
        # question_id breaks the (astronomically unlikely) digest tie
        return tuple(
            sorted(
                self.questions,
                key=lambda q: (_selection_key(seed, q.question_id), q.question_id),
            )
        )

    def select(self, seed: str | int, index: int) -> Question:
        """Return the question at ``index`` in the seed's selection order.

        Args:
            seed: Opaque seed from the substrate
            index: 0-based position in the selection order

        Raises:
            QuestionBankExhausted: If index is outside the pool
        """
        if index < 0 or index >= len(self.questions):
            raise QuestionBankExhausted(index, len(self.questions))
        return self._order(str(seed))[index]
