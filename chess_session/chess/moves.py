"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define the candidate destinations for each piece type.

The moves are pseudo-legal: nothing checks whether the moving side leaves its own king in check.
A king-safety filter can be layered on top of `legal_moves()` later, without touching the rules below.
"""

from typing import Callable, Optional, Protocol

from chess_session.chess.pieces import Color, Piece, PieceType
from chess_session.chess.square import Square
from chess_session.core.exceptions import EmptySquareError


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def get(self, square: Square) -> Optional[Piece]: ...


Vector = tuple[int, int]  # (d_row, d_col)

# White moves UP the board (towards row 0), black moves DOWN
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
PAWN_HOME_ROWS: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}
PAWN_CAPTURE_COLUMNS: tuple[int, ...] = (1, -1)

ORTHOGONALS: list[Vector] = [(0, 1), (0, -1), (1, 0), (-1, 0)]
DIAGONALS: list[Vector] = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
KING_DELTAS: list[Vector] = ORTHOGONALS + DIAGONALS
KNIGHT_DELTAS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]


def _moving_piece(square: Square, board: Board) -> Piece:
    piece = board.get(square)
    if piece is None:
        raise EmptySquareError(f"No piece on {square.to_algebraic()} to generate moves for.")
    return piece


# --- MOVEMENT RULES ---
def raycasting_move(square: Square, board: Board, directions: list[Vector]) -> list[Square]:
    """
    Raycasting algorithm
    -----

    The main trick we use to check the 'line of sight of a piece'.
    We walk along each direction until we hit another piece or the edge of the board.
    An opponent's piece is the last square of the ray (it can be captured), your own piece blocks the ray.
    """
    player_color = _moving_piece(square, board).color

    moves: list[Square] = []
    for d_row, d_col in directions:
        target_square = square
        while True:
            target_square = target_square.offset(d_row, d_col)
            if not target_square.is_within_bounds():
                break

            target_piece = board.get(target_square)
            if target_piece is not None:
                if target_piece.color != player_color:
                    moves.append(target_square)
                break

            moves.append(target_square)
    return moves


def single_step_move(square: Square, board: Board, deltas: list[Vector]) -> list[Square]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just take a single step"""
    player_color = _moving_piece(square, board).color

    moves: list[Square] = []
    for d_row, d_col in deltas:
        target_square = square.offset(d_row, d_col)
        if not target_square.is_within_bounds():
            continue

        target_piece = board.get(target_square)
        if target_piece is None or target_piece.color != player_color:
            moves.append(target_square)
    return moves


def candidate_pawn_moves(square: Square, board: Board) -> list[Square]:
    """
    A pawn:
    - moves by a single square forward (onto an empty square only).
    - It can move by two from its home row, if both squares ahead are empty.
    - takes diagonally forward (only an opponent's piece).

    NOTE: No en passant.
    """
    pawn = _moving_piece(square, board)
    direction = PAWN_DIRECTION[pawn.color]

    moves: list[Square] = []
    one_ahead = square.offset(direction, 0)
    if one_ahead.is_within_bounds() and board.get(one_ahead) is None:
        moves.append(one_ahead)

        two_ahead = square.offset(2 * direction, 0)
        on_home_row = square.row == PAWN_HOME_ROWS[pawn.color]
        if on_home_row and two_ahead.is_within_bounds() and board.get(two_ahead) is None:
            moves.append(two_ahead)

    for d_col in PAWN_CAPTURE_COLUMNS:
        target_square = square.offset(direction, d_col)
        if not target_square.is_within_bounds():
            continue
        target_piece = board.get(target_square)
        if target_piece is not None and target_piece.color != pawn.color:
            moves.append(target_square)
    return moves


def candidate_knight_moves(square: Square, board: Board) -> list[Square]:
    """Knights always move such that |delta_row| + |delta_col| = 3"""
    return single_step_move(square, board, KNIGHT_DELTAS)


def candidate_bishop_moves(square: Square, board: Board) -> list[Square]:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    return raycasting_move(square, board, DIAGONALS)


def candidate_rook_moves(square: Square, board: Board) -> list[Square]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, board, ORTHOGONALS)


def candidate_queen_moves(square: Square, board: Board) -> list[Square]:
    """The Queen combines the rook moves and the bishop moves: all 8 directions"""
    return raycasting_move(square, board, ORTHOGONALS + DIAGONALS)


def candidate_king_moves(square: Square, board: Board) -> list[Square]:
    """
    The king can move by a single square at the time.

    NOTE: No castling.
    """
    return single_step_move(square, board, KING_DELTAS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Square, Board], list[Square]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


def legal_moves(board: Board, square: Square) -> list[Square]:
    """
    Destinations the piece on `square` may move to.
    ----

    Pure function of the board: calling it twice on an unchanged board gives the same list.
    Raises EmptySquareError if there is no piece to move (and OutOfBoundsError for squares off the board).
    """
    square.ensure_within_bounds()
    piece = _moving_piece(square, board)
    movement_rule = MOVEMENT_RULES[piece.type]
    return movement_rule(square, board)
