"""
Applying a move to the session state.

The executor trusts its caller: it does not check whether the move is one of the candidate moves.
The GameSession filters moves before they get here.
"""

import logging
from typing import Protocol

from chess_session.chess.board import Board
from chess_session.chess.pieces import Color, Piece, PieceType
from chess_session.chess.square import Square

logger = logging.getLogger(__name__)

# The farthest row from each side's start
PROMOTION_ROWS: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 7}
PROMOTION_PIECE = PieceType.QUEEN


class SessionState(Protocol):
    """Just the parts of the session a move updates"""

    board: Board
    turn: Color
    history: list[Board]
    log: list[str]


def describe_move(piece: Piece, from_square: Square, to_square: Square) -> str:
    """Move log entry, ex. 'N: b1 → c3'"""
    return f"{piece.letter}: {from_square.to_algebraic()} → {to_square.to_algebraic()}"


def is_promotion(piece: Piece, to_square: Square) -> bool:
    return piece.type == PieceType.PAWN and to_square.row == PROMOTION_ROWS[piece.color]


def execute_move(state: SessionState, from_square: Square, to_square: Square) -> str:
    """
    Make the move
    -----

    1. store a snapshot of the board before the move (for undo)
    2. promote a pawn reaching the farthest row into a queen
    3. place the piece on the target square (capturing whatever stood there), clear the starting square
    4. hand the turn to the opponent

    Returns the move log entry (which is also prepended to the session's log).
    NOTE: the log entry uses the letter of the piece before promotion, so a promoting pawn is logged as 'P'.
    """
    piece = state.board.get(from_square)
    # for the type checker: the caller only executes moves of pieces that exist
    assert piece is not None

    description = describe_move(piece, from_square, to_square)

    state.history.append(state.board.clone())

    if is_promotion(piece, to_square):
        piece.promote_to(PROMOTION_PIECE)
        logger.info("Pawn promoted to %s on %s", PROMOTION_PIECE.name.lower(), to_square.to_algebraic())

    state.board.set(to_square, piece)
    state.board.set(from_square, None)
    state.turn = state.turn.opponent

    state.log.insert(0, description)
    return description
