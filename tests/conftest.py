"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest

from chess_session.chess.board import EMPTY_FEN, Board
from chess_session.chess.game import GameSession
from chess_session.chess.pieces import Color, Piece
from chess_session.chess.square import Square
from chess_session.db.repository import InMemorySessionRepository


@pytest.fixture
def board_with_pieces() -> Callable[[dict[str, str]], Board]:
    """Call the inner function with a mapping of algebraic square -> FEN character, ex. {"d4": "R", "d6": "p"}"""

    def _create_board(pieces: dict[str, str]) -> Board:
        board = Board.from_fen(EMPTY_FEN)
        for square_name, fen_char in pieces.items():
            board.set(Square.from_algebraic(square_name), Piece.from_fen(fen_char))
        return board

    return _create_board


@pytest.fixture
def session_with_pieces(
    board_with_pieces: Callable[[dict[str, str]], Board],
) -> Callable[[dict[str, str], Color], GameSession]:
    """Session starting in a custom position, with the given color to move"""

    def _create_session(pieces: dict[str, str], turn: Color = Color.WHITE) -> GameSession:
        return GameSession(board=board_with_pieces(pieces), turn=turn)

    return _create_session


@pytest.fixture
def repository() -> Generator[InMemorySessionRepository, None, None]:
    """Ensures to clear the repository between tests"""
    repo = InMemorySessionRepository()
    try:
        yield repo
    finally:
        repo.clear()
