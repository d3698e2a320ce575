"""Game management layer: state, controller, move log and persistence.

Quick start::

    from tilechess.game import GameController
    from tilechess.core import Coordinate

    ctrl = GameController()
    ctrl.new_game()
    ctrl.on_drag_start("pawn-white-5")          # [(5,3), (5,4)]
    ctrl.on_drop("pawn-white-5", Coordinate(5, 4))
"""

from tilechess.game.controller import GameController, GameEvents, KingStatus, MoveOutcome
from tilechess.game.interfaces import DEFAULT_STORAGE_KEY, GameConfig, GamePhase
from tilechess.game.move_log import MoveLog, ScoreEntry, format_move
from tilechess.game.persistence import (
    GameStore,
    MemoryStore,
    PersistenceError,
    QSettingsStore,
    deserialize_state,
    dumps,
    loads,
    serialize_state,
)
from tilechess.game.state import GameState

__all__ = [
    # Definitions
    "DEFAULT_STORAGE_KEY",
    "GameConfig",
    "GamePhase",
    # Concrete
    "GameController",
    "GameEvents",
    "GameState",
    "KingStatus",
    "MoveLog",
    "MoveOutcome",
    "ScoreEntry",
    "format_move",
    # Persistence
    "GameStore",
    "MemoryStore",
    "PersistenceError",
    "QSettingsStore",
    "deserialize_state",
    "dumps",
    "loads",
    "serialize_state",
]
