"""Abstract repository interface for question pool storage.

Question pools are loaded by tooling (replay harnesses, tests, the
substrate's game setup) and turned into a QuestionBank. The core itself
never touches storage while applying events, and the repository is
read-only: pools are authored outside the game.
"""

from abc import ABC, abstractmethod
from typing import Optional

from sciencegame.engine.question_bank import QuestionBank


class QuestionPoolRepository(ABC):
    """Abstract base class for question pool storage."""

    @abstractmethod
    def list_pools(self) -> list[dict]:
        """Return metadata for all available pools.

        Returns:
            List of dicts containing: {id, name, question_count}
        """
        pass

    @abstractmethod
    def get_pool(self, pool_id: str) -> Optional[dict]:
        """Load complete pool by ID.

        Args:
            pool_id: Unique identifier for the pool

        Returns:
            Pool dict with 'name' and 'questions', or None if not found
        """
        pass

    def load_bank(self, pool_id: str) -> QuestionBank:
        """Build a QuestionBank from a stored pool.

        Raises:
            ValueError: If the pool does not exist or has duplicate ids
            pydantic.ValidationError: If a question record is invalid
        """
        pool = self.get_pool(pool_id)
        if pool is None:
            raise ValueError(f"Question pool not found: {pool_id}")
        return QuestionBank.from_dicts(pool.get("questions", []))
