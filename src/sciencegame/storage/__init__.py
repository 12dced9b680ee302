"""Storage module for the science game.

This module provides the question pool repository used to load a
QuestionBank from disk.

Usage:
    from sciencegame.storage import get_question_repository

    repo = get_question_repository()
    bank = repo.load_bank("basic-chemistry")

Configuration via environment variables:
    SCIENCEGAME_QUESTIONS_PATH: Path to question pools directory (default: "questions")
"""

from .config import DEFAULT_QUESTIONS_PATH, get_question_repository, get_questions_path
from .file_repo import FileQuestionPoolRepository
from .repository import QuestionPoolRepository

__all__ = [
    "QuestionPoolRepository",
    "FileQuestionPoolRepository",
    "DEFAULT_QUESTIONS_PATH",
    "get_questions_path",
    "get_question_repository",
]
