"""GameController, the entry point the board UI talks to.

Coordinates: GameState, legality filter, persistence.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tilechess.core.enums import Color, Maneuver
from tilechess.core.legality import legal_destinations
from tilechess.core.moves import MoveRecord
from tilechess.game.interfaces import GameConfig, GamePhase
from tilechess.game.persistence import GameStore, PersistenceError, QSettingsStore, dumps, loads
from tilechess.game.state import GameState

if TYPE_CHECKING:
    from PyQt6.QtCore import QSettings

    from tilechess.core.types import Coordinate

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, str, GameState], None]  # record, text, state
CheckCallback = Callable[[Color, bool], None]  # king color, checked
CheckmateCallback = Callable[[Color], None]  # mated color


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_check_changed: list[CheckCallback] = field(default_factory=list)
    on_checkmate: list[CheckmateCallback] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class KingStatus:
    """Check information for one king after a move."""

    checked: bool = False
    threatener_id: str | None = None
    checkmated: bool = False


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """Answer to a drop: whether it was applied and what it changed."""

    applied: bool
    record: MoveRecord | None = None
    notation: str = ""
    kings: dict[Color, KingStatus] = field(default_factory=dict)

    @property
    def maneuver(self) -> Maneuver | None:
        return self.record.maneuver if self.record is not None else None

    @property
    def captured_id(self) -> str | None:
        return self.record.captured_id if self.record is not None else None

    @classmethod
    def rejected(cls) -> MoveOutcome:
        return cls(applied=False)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Validates drags and drops, applies moves, notifies listeners.

    Every call runs to completion before returning; a drop either applies
    the whole move (captures, rook relocation, flags, check state) or
    changes nothing.
    """

    __slots__ = ("_state", "_config", "events")

    def __init__(self, config: GameConfig | None = None) -> None:
        self._config = config if config is not None else GameConfig()
        self._state = GameState()
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def phase(self) -> GamePhase:
        return self._state.phase

    # ── Lifecycle ────────────────────────────────────────────────────────

    def new_game(
        self,
        placement: str | None = None,
        side_to_move: Color = Color.WHITE,
        *,
        castling: str | None = None,
        en_passant: str | None = None,
    ) -> None:
        self._state = GameState()
        self._state.setup(placement, side_to_move, castling=castling, en_passant=en_passant)

    def load_state(self, state: GameState) -> None:
        self._state = state

    # ── Board API ────────────────────────────────────────────────────────

    def on_drag_start(self, piece_id: str) -> list[Coordinate]:
        """Destinations to highlight for the piece being dragged."""
        piece = self._state.board.get(piece_id)
        if piece is None or piece.captured:
            _LOGGER.debug("Drag of unknown piece %s ignored", piece_id)
            return []
        if self._state.is_game_over or not self._state.is_players_turn(piece.color):
            return []
        highlights = legal_destinations(
            piece, self._state.board, strict_castling=self._config.strict_castling
        )
        _LOGGER.debug("Highlights for %s: %s", piece_id, ", ".join(map(str, highlights)))
        return highlights

    def on_drop(self, piece_id: str, dest: Coordinate) -> MoveOutcome:
        """Commit the drag of *piece_id* onto *dest* if it is highlighted."""
        if dest not in self.on_drag_start(piece_id):
            _LOGGER.debug("Drop of %s on %s rejected", piece_id, dest)
            return MoveOutcome.rejected()

        piece = self._state.board.get(piece_id)
        assert piece is not None
        before = {color: self._state.board.king(color).checked for color in Color}
        mated_before = self._state.checkmated

        record = self._state.apply_move(
            piece,
            dest,
            strict_castling=self._config.strict_castling,
            enforce_game_over=self._config.enforce_game_over,
        )
        text = self._state.move_log.latest_entry()
        _LOGGER.info("%s %s: %s", piece.color, piece_id, text)

        kings = self.king_statuses()
        self._emit_move(record, text)
        for color, status in kings.items():
            if status.checked != before[color]:
                if status.checked:
                    _LOGGER.info("%s king in check from %s", color, status.threatener_id)
                self._emit_check_changed(color, status.checked)
        mated = self._state.checkmated
        if mated is not None and mated_before is None:
            _LOGGER.info("Checkmate declared: %s is mated", mated)
            self._emit_checkmate(mated)

        return MoveOutcome(applied=True, record=record, notation=text, kings=kings)

    def king_statuses(self) -> dict[Color, KingStatus]:
        mated = self._state.checkmated
        statuses: dict[Color, KingStatus] = {}
        for color in Color:
            king = self._state.board.king(color)
            statuses[color] = KingStatus(
                checked=king.checked,
                threatener_id=king.threatener_id,
                checkmated=mated == color,
            )
        return statuses

    # ── Persistence ──────────────────────────────────────────────────────

    def settings_store(self, settings: QSettings | None = None) -> QSettingsStore:
        """A :class:`QSettingsStore` keyed by the configured storage key."""
        return QSettingsStore(settings, key=self._config.storage_key)

    def save(self, store: GameStore) -> None:
        store.save(dumps(self._state))
        _LOGGER.info("Saved game after %d plies", self._state.ply_count)

    def restore(self, store: GameStore) -> bool:
        """Load the stored game; start fresh when nothing usable is stored."""
        text = store.load()
        if text is None:
            _LOGGER.info("No saved game state found, starting fresh")
            self.new_game()
            return False
        try:
            state = loads(text)
        except PersistenceError:
            _LOGGER.warning("Discarding unreadable saved game", exc_info=True)
            self.new_game()
            return False
        self._state = state
        _LOGGER.info("Loaded game state (%d plies)", state.ply_count)
        return True

    def reset(self, store: GameStore | None = None) -> None:
        if store is not None:
            store.clear()
        self.new_game()

    # ── Internal helpers ─────────────────────────────────────────────────

    def _emit_move(self, record: MoveRecord, text: str) -> None:
        for cb in self.events.on_move:
            cb(record, text, self._state)

    def _emit_check_changed(self, color: Color, checked: bool) -> None:
        for cb in self.events.on_check_changed:
            cb(color, checked)

    def _emit_checkmate(self, color: Color) -> None:
        for cb in self.events.on_checkmate:
            cb(color)
