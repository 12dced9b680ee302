"""Deterministic game-evaluation core for a multiplayer science/trivia game."""

__version__ = "0.1.0"
