"""Storage configuration for the science game.

Configuration via environment variables:
    SCIENCEGAME_QUESTIONS_PATH: Path to question pools directory (default: "questions")
"""

import os

from .file_repo import FileQuestionPoolRepository
from .repository import QuestionPoolRepository

DEFAULT_QUESTIONS_PATH = "questions"


def get_questions_path() -> str:
    """Get configured question pools path from environment."""
    return os.environ.get("SCIENCEGAME_QUESTIONS_PATH", DEFAULT_QUESTIONS_PATH)


def get_question_repository(path: str | None = None) -> QuestionPoolRepository:
    """Factory function to create the question pool repository.

    Args:
        path: Pools directory. If None, uses environment config.
    """
    return FileQuestionPoolRepository(path if path is not None else get_questions_path())
