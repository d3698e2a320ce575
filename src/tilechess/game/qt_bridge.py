"""Qt bridge exposing the controller to a board widget via signals/slots."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from tilechess.core.enums import Color
from tilechess.core.types import Coordinate
from tilechess.game.controller import GameController, MoveOutcome


class BoardBridge(QObject):
    """Thread-affine adapter between an input handler and the controller.

    The board view connects its drag/drop handlers to the slots and
    repaints from the signals; it never touches the rules directly.
    """

    highlights_ready = pyqtSignal(str, object)  # piece id, list[Coordinate]
    move_applied = pyqtSignal(object)  # MoveOutcome
    move_rejected = pyqtSignal(str)  # piece id
    check_changed = pyqtSignal(int, bool)  # Color, checked
    checkmate_declared = pyqtSignal(int)  # mated Color

    def __init__(self, controller: GameController | None = None, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._controller = controller if controller is not None else GameController()
        self._controller.events.on_check_changed.append(self._on_check_changed)
        self._controller.events.on_checkmate.append(self._on_checkmate)

    @property
    def controller(self) -> GameController:
        return self._controller

    @pyqtSlot(str)
    def drag_start(self, piece_id: str) -> None:
        """Compute and emit the highlights for *piece_id*."""
        self.highlights_ready.emit(piece_id, self._controller.on_drag_start(piece_id))

    @pyqtSlot(str, int, int)
    def drop(self, piece_id: str, x: int, y: int) -> None:
        outcome: MoveOutcome = self._controller.on_drop(piece_id, Coordinate(x, y))
        if outcome.applied:
            self.move_applied.emit(outcome)
        else:
            self.move_rejected.emit(piece_id)

    @pyqtSlot()
    def new_game(self) -> None:
        self._controller.new_game()

    def _on_check_changed(self, color: Color, checked: bool) -> None:
        self.check_changed.emit(int(color), checked)

    def _on_checkmate(self, color: Color) -> None:
        self.checkmate_declared.emit(int(color))
