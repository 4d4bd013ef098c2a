"""
Castling rights bookkeeping.

NOTE: Castling is not executed by this engine. The rights are tracked as part of the session state so that a later
castling rule can pick them up, but neither move generation nor move execution reads or writes them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Self

from chess_session.chess.pieces import Color


class CastlingDirection(Enum):
    """The four castling directions. Values represent their encodings in FEN string."""

    WHITE_KING_SIDE = "K"
    WHITE_QUEEN_SIDE = "Q"
    BLACK_KING_SIDE = "k"
    BLACK_QUEEN_SIDE = "q"


CASTLING_ORDER: tuple[CastlingDirection, ...] = (
    CastlingDirection.WHITE_KING_SIDE,
    CastlingDirection.WHITE_QUEEN_SIDE,
    CastlingDirection.BLACK_KING_SIDE,
    CastlingDirection.BLACK_QUEEN_SIDE,
)

DIRECTIONS_PER_COLOR: dict[Color, tuple[CastlingDirection, CastlingDirection]] = {
    Color.WHITE: (CastlingDirection.WHITE_KING_SIDE, CastlingDirection.WHITE_QUEEN_SIDE),
    Color.BLACK: (CastlingDirection.BLACK_KING_SIDE, CastlingDirection.BLACK_QUEEN_SIDE),
}


def _all_rights() -> dict[CastlingDirection, bool]:
    return {direction: True for direction in CastlingDirection}


@dataclass
class CastlingRights:
    """Independent king-side / queen-side availability per color. All available at the start of a game."""

    rights: dict[CastlingDirection, bool] = field(default_factory=_all_rights)

    @classmethod
    def from_fen(cls, castle_fen: str) -> Self:
        """parse the part of the FEN string that encodes castling rights"""
        return cls(
            {direction: (direction.value in castle_fen) for direction in CastlingDirection}
        )

    def to_fen(self) -> str:
        """create the part of the FEN string that encodes castling rights"""
        castling_chars = "".join(
            [direction.value for direction in CASTLING_ORDER if self.rights[direction]]
        )
        return castling_chars or "-"

    def king_side(self, color: Color) -> bool:
        return self.rights[DIRECTIONS_PER_COLOR[color][0]]

    def queen_side(self, color: Color) -> bool:
        return self.rights[DIRECTIONS_PER_COLOR[color][1]]
