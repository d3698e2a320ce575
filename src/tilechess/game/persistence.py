"""Saving and restoring games as plain data / JSON strings.

The serialized shape mirrors what a browser front end keeps in local
storage::

    {
        "pieces": [{"id", "type", "color", "x", "y", "captured", ...}, ...],
        "moveHistory": [{"pieceId", "pieceType", "color", "origin", ...}, ...],
        "moveLog": {"turnHistory": [{"white", "black"}, ...], "turn": 0},
        "currentTurn": "white",
        "phase": "awaiting_move",
        "result": "in_progress",
    }

Castling and en passant destinations are written for consumers that want
them, but they are recomputed from the board on load.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

from PyQt6.QtCore import QSettings

from tilechess.core.board import Board
from tilechess.core.enums import Color, GameResult, Maneuver, PieceType
from tilechess.core.moves import MoveRecord
from tilechess.core.special_moves import castling_destinations, en_passant_option
from tilechess.core.types import Coordinate
from tilechess.game.interfaces import DEFAULT_STORAGE_KEY, GamePhase
from tilechess.game.move_log import MoveLog, ScoreEntry
from tilechess.game.state import GameState

_LOGGER = logging.getLogger(__name__)


class PersistenceError(ValueError):
    """Serialized game data is malformed or inconsistent."""


# ── Stores ───────────────────────────────────────────────────────────────────


class GameStore(Protocol):
    """A string slot the game is saved into."""

    def load(self) -> str | None: ...

    def save(self, text: str) -> None: ...

    def clear(self) -> None: ...


class MemoryStore:
    """In-process store, handy for tests and undo snapshots."""

    __slots__ = ("_text",)

    def __init__(self, text: str | None = None) -> None:
        self._text = text

    def load(self) -> str | None:
        return self._text

    def save(self, text: str) -> None:
        self._text = text

    def clear(self) -> None:
        self._text = None


class QSettingsStore:
    """Store backed by :class:`QSettings` (registry, plist or ini file)."""

    __slots__ = ("_settings", "_key")

    def __init__(self, settings: QSettings | None = None, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._settings = settings if settings is not None else QSettings("tilechess", "tilechess")
        self._key = key

    def load(self) -> str | None:
        if not self._settings.contains(self._key):
            return None
        return self._settings.value(self._key, type=str)

    def save(self, text: str) -> None:
        self._settings.setValue(self._key, text)
        self._settings.sync()

    def clear(self) -> None:
        self._settings.remove(self._key)
        self._settings.sync()


# ── Serialization ────────────────────────────────────────────────────────────


def _coord_to_dict(coord: Coordinate | None) -> dict[str, int] | None:
    if coord is None:
        return None
    return {"x": coord.x, "y": coord.y}


def _coord_from_dict(data: Any) -> Coordinate:
    try:
        return Coordinate(int(data["x"]), int(data["y"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise PersistenceError(f"Invalid coordinate: {data!r}") from exc


def _enum_by_name(enum_cls: Any, value: Any) -> Any:
    try:
        return enum_cls[str(value).upper()]
    except KeyError:
        raise PersistenceError(f"Invalid {enum_cls.__name__}: {value!r}") from None


def _serialize_board(board: Board) -> list[dict[str, Any]]:
    pieces: list[dict[str, Any]] = []
    for piece in board.all_pieces():
        data: dict[str, Any] = {
            "id": piece.id,
            "type": str(piece.piece_type),
            "color": str(piece.color),
            "x": piece.position.x,
            "y": piece.position.y,
            "captured": piece.captured,
        }
        if piece.first_move_tracked:
            data["hasMoved"] = piece.has_moved
        if piece.is_pawn:
            data["justDoubleAdvanced"] = piece.just_double_advanced
            ep = None if piece.captured else en_passant_option(piece, board)
            data["enPassantDestination"] = _coord_to_dict(ep.destination if ep else None)
        if piece.is_king:
            kingside, queenside = castling_destinations(piece, board)
            data["kingCastlingDestination"] = _coord_to_dict(kingside)
            data["queenCastlingDestination"] = _coord_to_dict(queenside)
            data["checked"] = piece.checked
            data["threatenerId"] = piece.threatener_id
        pieces.append(data)
    return pieces


def _serialize_record(record: MoveRecord) -> dict[str, Any]:
    return {
        "pieceId": record.piece_id,
        "pieceType": str(record.piece_type),
        "color": str(record.color),
        "origin": _coord_to_dict(record.origin),
        "destination": _coord_to_dict(record.destination),
        "maneuver": record.maneuver.value,
        "capturedId": record.captured_id,
    }


def serialize_state(state: GameState) -> dict[str, Any]:
    """Plain-data snapshot of *state* (JSON compatible)."""
    return {
        "pieces": _serialize_board(state.board),
        "moveHistory": [_serialize_record(r) for r in state.move_history],
        "moveLog": {
            "turnHistory": [
                {"white": entry.white, "black": entry.black}
                for entry in state.move_log.turn_history
            ],
            "turn": state.move_log.turn,
        },
        "currentTurn": str(state.side_to_move),
        "phase": state.phase.name.lower(),
        "result": state.result.name.lower(),
    }


def _deserialize_board(pieces: Any) -> Board:
    if not isinstance(pieces, list):
        raise PersistenceError("'pieces' must be a list")

    board = Board()
    check_state: list[tuple[str, bool, str | None]] = []
    for data in pieces:
        if not isinstance(data, Mapping):
            raise PersistenceError(f"Invalid piece entry: {data!r}")
        try:
            piece = board.add(
                _enum_by_name(PieceType, data["type"]),
                _enum_by_name(Color, data["color"]),
                Coordinate(int(data["x"]), int(data["y"])),
                piece_id=data.get("id"),
                has_moved=bool(data.get("hasMoved", False)),
                just_double_advanced=bool(data.get("justDoubleAdvanced", False)),
                captured=bool(data.get("captured", False)),
            )
        except PersistenceError:
            raise
        except (KeyError, TypeError, ValueError) as exc:
            raise PersistenceError(f"Invalid piece entry {data!r}: {exc}") from exc
        if piece.is_king:
            check_state.append(
                (piece.id, bool(data.get("checked", False)), data.get("threatenerId"))
            )

    for king_id, checked, threatener_id in check_state:
        king = board.get(king_id)
        assert king is not None
        if threatener_id is None:
            if checked:
                raise PersistenceError(f"{king_id} is checked but has no threatener")
            continue
        threatener = board.get(threatener_id)
        if threatener is None:
            raise PersistenceError(f"Unknown threatener {threatener_id!r} for {king_id}")
        if checked:
            king.enter_check(threatener)

    for color in Color:
        try:
            board.king(color)
        except ValueError as exc:
            raise PersistenceError(str(exc)) from exc
    return board


def _deserialize_record(data: Any) -> MoveRecord:
    try:
        return MoveRecord(
            piece_id=str(data["pieceId"]),
            piece_type=_enum_by_name(PieceType, data["pieceType"]),
            color=_enum_by_name(Color, data["color"]),
            origin=_coord_from_dict(data["origin"]),
            destination=_coord_from_dict(data["destination"]),
            maneuver=Maneuver(data.get("maneuver", Maneuver.NONE.value)),
            captured_id=data.get("capturedId"),
        )
    except PersistenceError:
        raise
    except (KeyError, TypeError, ValueError) as exc:
        raise PersistenceError(f"Invalid move record {data!r}: {exc}") from exc


def _deserialize_move_log(data: Any) -> MoveLog:
    log = MoveLog()
    if data is None:
        return log
    try:
        log.turn_history = [
            ScoreEntry(str(entry.get("white", "")), str(entry.get("black", "")))
            for entry in data["turnHistory"]
        ]
        log.turn = int(data["turn"])
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise PersistenceError(f"Invalid move log: {exc}") from exc
    if not 0 <= log.turn < len(log.turn_history):
        raise PersistenceError(f"Move log turn {log.turn} out of range")
    return log


def deserialize_state(data: Mapping[str, Any]) -> GameState:
    """Rebuild a :class:`GameState` from :func:`serialize_state` output."""
    if not isinstance(data, Mapping):
        raise PersistenceError("Game state must be a mapping")
    if "pieces" not in data:
        raise PersistenceError("Game state has no 'pieces'")

    return GameState(
        board=_deserialize_board(data["pieces"]),
        side_to_move=_enum_by_name(Color, data.get("currentTurn", "white")),
        phase=_enum_by_name(GamePhase, data.get("phase", "awaiting_move")),
        result=_enum_by_name(GameResult, data.get("result", "in_progress")),
        move_history=[_deserialize_record(r) for r in data.get("moveHistory", [])],
        move_log=_deserialize_move_log(data.get("moveLog")),
    )


def dumps(state: GameState) -> str:
    """Serialise *state* to a JSON string."""
    return json.dumps(serialize_state(state), separators=(",", ":"))


def loads(text: str) -> GameState:
    """Parse a JSON string produced by :func:`dumps`."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PersistenceError(f"Saved game is not valid JSON: {exc}") from exc
    state = deserialize_state(data)
    _LOGGER.debug("Decoded game state with %d pieces", len(state.board))
    return state
