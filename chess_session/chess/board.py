"""The Board holds the configuration of pieces. Pure data: the movement rules live in moves.py"""

from copy import deepcopy
from dataclasses import dataclass
from typing import Optional, Self

from chess_session.chess.pieces import Color, Piece
from chess_session.chess.square import BOARD_DIMENSIONS, Square
from chess_session.core.exceptions import InvalidRequestError

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
EMPTY_FEN = "/".join(["8"] * BOARD_DIMENSIONS[0])


def all_squares() -> list[Square]:
    """Row by row, starting at a8 (row 0, col 0)"""
    return [
        Square(row, col)
        for row in range(BOARD_DIMENSIONS[0])
        for col in range(BOARD_DIMENSIONS[1])
    ]


@dataclass
class Board:
    position: dict[Square, Optional[Piece]]

    @classmethod
    def empty(cls) -> Self:
        return cls({square: None for square in all_squares()})

    @classmethod
    def initial(cls) -> Self:
        """Standard starting position: black on rows 0-1, white on rows 6-7."""
        return cls.from_fen(STARTING_FEN)

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the piece placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank (row 0), starting with the rook on a8
        * black pawns cover the 7th rank (row 1) entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 (row 6) holds the white pawns (capital letters)
        * rank 1 (row 7) holds the white pieces
        """
        board = cls.empty()
        fen_by_rows = fen_str.split("/")
        if len(fen_by_rows) != BOARD_DIMENSIONS[0]:
            raise InvalidRequestError(
                f"Piece placement must describe {BOARD_DIMENSIONS[0]} ranks: {fen_str!r}"
            )

        # FEN is read from the top rank (8th) to the bottom rank (1st), which is exactly the row order
        for row, fen_one_row in enumerate(fen_by_rows):
            col = 0
            for character in fen_one_row:
                if character.isdigit():
                    # A number denotes the amount of empty squares after each other
                    col += int(character)
                    continue
                try:
                    piece = Piece.from_fen(character)
                except KeyError:
                    raise InvalidRequestError(
                        f"Unknown piece character {character!r} in {fen_str!r}"
                    ) from None
                square = Square(row, col)
                if not square.is_within_bounds():
                    raise InvalidRequestError(f"Rank too long in {fen_str!r}")
                board.position[square] = piece
                col += 1

            if col != BOARD_DIMENSIONS[1]:
                raise InvalidRequestError(
                    f"Rank {fen_one_row!r} does not describe {BOARD_DIMENSIONS[1]} squares."
                )
        return board

    def to_fen(self) -> str:
        """Rows are separated by slashes in the FEN string."""
        return "/".join(self._row_to_fen(row) for row in range(BOARD_DIMENSIONS[0]))

    def _row_to_fen(self, row: int) -> str:
        """FEN string of a single row"""
        fen_characters: list[str] = []
        empty_count = 0
        for col in range(BOARD_DIMENSIONS[1]):
            piece = self.get(Square(row, col))

            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire row is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def get(self, square: Square) -> Optional[Piece]:
        square.ensure_within_bounds()
        return self.position[square]

    def set(self, square: Square, piece: Optional[Piece]) -> None:
        square.ensure_within_bounds()
        self.position[square] = piece

    def clone(self) -> "Board":
        """Deep copy: the pieces are copied too, so promoting a piece on one board never touches another."""
        return deepcopy(self)

    def is_empty(self, square: Square) -> bool:
        return self.get(square) is None

    def occupied_squares(self) -> list[Square]:
        return [square for square, piece in self.position.items() if piece is not None]

    def locate_color(self, color: Color) -> list[Square]:
        return [
            square
            for square, piece in self.position.items()
            if piece is not None and piece.color == color
        ]

    def piece_count(self) -> int:
        return len(self.occupied_squares())

    def rows(self) -> list[list[Optional[Piece]]]:
        """Grid view (row 0 first), convenient for rendering."""
        return [
            [self.position[Square(row, col)] for col in range(BOARD_DIMENSIONS[1])]
            for row in range(BOARD_DIMENSIONS[0])
        ]
