"""Shared game-layer definitions: phase FSM states and configuration."""

from __future__ import annotations

from enum import IntEnum, auto

DEFAULT_STORAGE_KEY = "chessGameState"


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    AWAITING_MOVE = auto()
    GAME_OVER = auto()


class GameConfig:
    """Immutable rule and storage options for a game.

    Args:
        enforce_game_over: Refuse all input once checkmate is declared.
            When off, checkmate is only reported.
        strict_castling: Forbid castling out of check or across an
            attacked square. When off, castling needs only an unmoved
            king and rook with empty squares between them.
        storage_key: Key under which a store keeps the saved game.
    """

    __slots__ = ("enforce_game_over", "strict_castling", "storage_key")

    def __init__(
        self,
        enforce_game_over: bool = True,
        strict_castling: bool = True,
        storage_key: str = DEFAULT_STORAGE_KEY,
    ) -> None:
        self.enforce_game_over = enforce_game_over
        self.strict_castling = strict_castling
        self.storage_key = storage_key

    @classmethod
    def permissive(cls) -> GameConfig:
        """Baseline rules: advisory checkmate, occupancy-only castling."""
        return cls(enforce_game_over=False, strict_castling=False)

    def __repr__(self) -> str:
        return (
            f"GameConfig(enforce_game_over={self.enforce_game_over}, "
            f"strict_castling={self.strict_castling}, storage_key={self.storage_key!r})"
        )
