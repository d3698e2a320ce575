"""Piece record: identity, placement and per-type capability flags."""

from __future__ import annotations

from dataclasses import dataclass

from tilechess.core.enums import Color, PieceType
from tilechess.core.types import Coordinate

_FIRST_MOVE_TRACKED = frozenset({PieceType.PAWN, PieceType.ROOK, PieceType.KING})
_SLIDING = frozenset({PieceType.BISHOP, PieceType.ROOK, PieceType.QUEEN})

_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "P",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
_FROM_LETTER: dict[str, PieceType] = {v: k for k, v in _LETTERS.items()}


def make_piece_id(piece_type: PieceType, color: Color, sequence: int) -> str:
    """Stable identifier, e.g. ``"knight-white-2"``."""
    return f"{piece_type}-{color}-{sequence}"


@dataclass(slots=True)
class Piece:
    """Mutable piece state.

    Only the facts that must survive between turns are stored here:
    ``has_moved`` (pawn, rook, king), ``just_double_advanced`` (pawn) and the
    check state of kings. Castling and en passant destinations are derived
    on demand by :mod:`tilechess.core.special_moves`.
    """

    id: str
    piece_type: PieceType
    color: Color
    position: Coordinate
    captured: bool = False
    has_moved: bool = False
    just_double_advanced: bool = False
    checked: bool = False
    threatener_id: str | None = None

    # -- Capabilities ---------------------------------------------------------

    @property
    def first_move_tracked(self) -> bool:
        return self.piece_type in _FIRST_MOVE_TRACKED

    @property
    def is_sliding(self) -> bool:
        return self.piece_type in _SLIDING

    @property
    def is_king(self) -> bool:
        return self.piece_type == PieceType.KING

    @property
    def is_pawn(self) -> bool:
        return self.piece_type == PieceType.PAWN

    # -- Mutation -------------------------------------------------------------

    def move_to(self, dest: Coordinate) -> None:
        """Relocate the piece, updating first-move and double-advance flags.

        Occupancy bookkeeping lives in :class:`~tilechess.core.board.Board`;
        call :meth:`Board.move_piece` rather than this directly.
        """
        if self.is_pawn:
            self.just_double_advanced = abs(dest.y - self.position.y) == 2
        self.position = dest
        if self.first_move_tracked:
            self.has_moved = True

    def enter_check(self, threatener: Piece) -> None:
        self.checked = True
        self.threatener_id = threatener.id

    def leave_check(self) -> None:
        self.checked = False
        self.threatener_id = None

    # -- Display --------------------------------------------------------------

    @property
    def letter(self) -> str:
        """Upper-case piece letter (``P`` for pawns)."""
        return _LETTERS[self.piece_type]

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return self.letter if self.color == Color.WHITE else self.letter.lower()


def piece_type_from_letter(char: str) -> tuple[Color, PieceType]:
    """Map a FEN character to ``(color, piece_type)``, e.g. 'n' → black knight."""
    try:
        ptype = _FROM_LETTER[char.upper()]
    except KeyError:
        raise ValueError(f"Invalid piece character: {char!r}") from None
    color = Color.WHITE if char.isupper() else Color.BLACK
    return color, ptype
