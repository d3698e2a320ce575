"""Turn-indexed move log with algebraic move text."""

from __future__ import annotations

from dataclasses import dataclass

from tilechess.core.enums import Color, Maneuver, PieceType
from tilechess.core.moves import MoveRecord

_ABBREVIATIONS: dict[PieceType, str] = {
    PieceType.PAWN: "",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}


def format_move(record: MoveRecord, *, check: bool = False, mate: bool = False) -> str:
    """Algebraic text for *record*, e.g. ``Nf3``, ``dxe6 e.p.``, ``O-O-O``."""
    if record.maneuver == Maneuver.CASTLE_KINGSIDE:
        text = "O-O"
    elif record.maneuver == Maneuver.CASTLE_QUEENSIDE:
        text = "O-O-O"
    else:
        dest = record.destination.name
        abbr = _ABBREVIATIONS[record.piece_type]
        if record.maneuver in (Maneuver.CAPTURE, Maneuver.EN_PASSANT):
            # Pawns are identified by the file they capture from.
            prefix = abbr or record.origin.name[0]
            text = f"{prefix}x{dest}"
        else:
            text = f"{abbr}{dest}"

    if mate:
        text += "#"
    elif check:
        text += "+"
    if record.maneuver == Maneuver.EN_PASSANT:
        text += " e.p."
    return text


@dataclass(slots=True)
class ScoreEntry:
    """One numbered turn: white's move and black's reply."""

    white: str = ""
    black: str = ""

    def __getitem__(self, color: Color) -> str:
        return self.white if color == Color.WHITE else self.black

    def __setitem__(self, color: Color, text: str) -> None:
        if color == Color.WHITE:
            self.white = text
        else:
            self.black = text


class MoveLog:
    """Score sheet. The turn counter advances once black has replied."""

    __slots__ = ("turn", "turn_history")

    def __init__(self) -> None:
        self.turn = 0
        self.turn_history: list[ScoreEntry] = [ScoreEntry()]

    def record(self, record: MoveRecord, *, check: bool = False, mate: bool = False) -> str:
        """Write *record* under the current turn and return its text."""
        text = format_move(record, check=check, mate=mate)
        self.write(text, record.color)
        return text

    def write(self, text: str, color: Color) -> None:
        self.turn_history[self.turn][color] = text
        if color == Color.BLACK:
            self.turn += 1
            self.turn_history.append(ScoreEntry())

    def latest_entry(self) -> str:
        """Text of the most recent move, ``""`` before the first one."""
        current = self.turn_history[self.turn]
        if current.white:
            return current.white
        if self.turn > 0:
            return self.turn_history[self.turn - 1].black
        return ""

    def __len__(self) -> int:
        return sum(bool(e.white) + bool(e.black) for e in self.turn_history)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MoveLog):
            return NotImplemented
        return self.turn == other.turn and self.turn_history == other.turn_history

    def __repr__(self) -> str:
        lines = [
            f"{number}. {entry.white} {entry.black}".rstrip()
            for number, entry in enumerate(self.turn_history, start=1)
            if entry.white or entry.black
        ]
        return "\n".join(lines)
