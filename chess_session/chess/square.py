"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

from chess_session.core.exceptions import InvalidRequestError, OutOfBoundsError

# Chess board is always 8x8 (rows, columns).
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True)
class Square:
    """
    Grid coordinates: row 0 is black's home rank (the 8th rank), row 7 is white's home rank (the 1st rank).
    Column 0 is the a-file.
    """

    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a8' - 'h1' get converted to (0,0) - (7,7)"""
        if len(sq) != 2 or not (sq[0].isalpha() and sq[1].isdecimal()):
            raise InvalidRequestError(f"Cannot interpret {sq!r} as a square name.")
        col = ord(sq[0]) - ord("a")
        row = BOARD_DIMENSIONS[0] - int(sq[1])
        square = cls(row, col)
        square.ensure_within_bounds()
        return square

    def to_algebraic(self) -> str:
        return f"{self.file_letter}{self.rank_number}"

    @property
    def file_letter(self) -> str:
        return chr(ord("a") + self.col)

    @property
    def rank_number(self) -> int:
        return BOARD_DIMENSIONS[0] - self.row

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_DIMENSIONS[0]) and (
            0 <= self.col < BOARD_DIMENSIONS[1]
        )

    def ensure_within_bounds(self) -> None:
        if not self.is_within_bounds():
            raise OutOfBoundsError(
                f"Square (row={self.row}, col={self.col}) is not on the board."
            )

    def offset(self, d_row: int, d_col: int) -> Square:
        """The square shifted by a vector. May lie outside of the board, check with `is_within_bounds()`"""
        return Square(self.row + d_row, self.col + d_col)
