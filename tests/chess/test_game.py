"""Unit tests for /chess_session/chess/game.py"""

import logging
from typing import Callable

import pytest

from chess_session.chess.board import Board
from chess_session.chess.castling import CastlingRights
from chess_session.chess.game import GameSession, SelectionStatus
from chess_session.chess.pieces import Color, Piece, PieceType
from chess_session.chess.square import Square
from chess_session.core.exceptions import (
    EmptySquareError,
    IllegalMoveError,
    NotYourTurnError,
    OutOfBoundsError,
)
from chess_session.core.models import SessionModel

SessionFactory = Callable[..., GameSession]


def sq(name: str) -> Square:
    return Square.from_algebraic(name)


def click(session: GameSession, *square_names: str) -> None:
    for name in square_names:
        session.select_or_move(sq(name))


# -- CREATION LOGIC --
def test_new_game() -> None:
    session = GameSession.new_game()
    assert session.board == Board.initial()
    assert session.turn == Color.WHITE
    assert session.history == []
    assert session.log == []
    assert session.selected is None
    assert session.candidates == []
    assert session.status == SelectionStatus.IDLE
    assert not session.flipped
    assert not session.can_undo


def test_unused_state_is_present_but_inert() -> None:
    """Castling rights / en passant target exist in the state, moves never touch them"""
    session = GameSession.new_game()
    assert session.castling_rights == CastlingRights()
    assert session.en_passant is None

    click(session, "e2", "e4", "e7", "e5", "e1", "e2")
    assert session.board.get(sq("e2")) == Piece(PieceType.KING, Color.WHITE)
    assert session.castling_rights == CastlingRights()
    assert session.en_passant is None


def test_sessions_do_not_share_state() -> None:
    first = GameSession.new_game()
    second = GameSession.new_game()
    click(first, "e2", "e4")
    assert second.board == Board.initial()
    assert second.log == []


# -- SELECTION STATE MACHINE --
def test_select_own_piece() -> None:
    session = GameSession.new_game()
    session.select_or_move(Square(7, 1))
    assert session.selected == Square(7, 1)
    assert set(session.candidates) == {Square(5, 0), Square(5, 2)}
    assert session.status == SelectionStatus.SELECTED


@pytest.mark.parametrize("square_name", ["e4", "e7", "d8"])
def test_click_on_empty_or_opponent_square_while_idle_is_a_noop(square_name: str) -> None:
    session = GameSession.new_game()
    result = session.select_or_move(sq(square_name))
    assert result is None
    assert session.status == SelectionStatus.IDLE
    assert session.board == Board.initial()
    assert session.turn == Color.WHITE


def test_reselect_other_own_piece() -> None:
    session = GameSession.new_game()
    click(session, "b1", "e2")
    assert session.selected == sq("e2")
    assert session.candidates == [sq("e3"), sq("e4")]


def test_reselect_wins_over_capturing_own_piece(session_with_pieces: SessionFactory) -> None:
    """Clicking an own piece always selects it, even if it stands on a square the selection could reach."""
    session = session_with_pieces({"a1": "R", "a4": "N"})
    click(session, "a1")
    click(session, "a4")
    assert session.selected == sq("a4")
    assert session.history == []


def test_cancel_selection() -> None:
    session = GameSession.new_game()
    click(session, "b1", "e5")
    assert session.status == SelectionStatus.IDLE
    assert session.candidates == []
    assert session.board == Board.initial()
    assert session.turn == Color.WHITE


def test_click_off_the_board() -> None:
    session = GameSession.new_game()
    with pytest.raises(OutOfBoundsError):
        session.select_or_move(Square(-1, 0))


def test_cannot_select_opponent_pieces() -> None:
    session = GameSession.new_game()
    click(session, "e7")
    assert session.selected is None


# -- MOVES --
def test_knight_scenario() -> None:
    """b1 -> c3: black to move, one history entry, log line"""
    session = GameSession.new_game()
    session.select_or_move(Square(7, 1))
    description = session.select_or_move(Square(5, 2))

    assert description == "N: b1 → c3"
    assert session.turn == Color.BLACK
    assert session.history_depth == 1
    assert session.log == ["N: b1 → c3"]
    assert session.selected is None
    assert session.candidates == []
    assert session.board.get(Square(5, 2)) == Piece(PieceType.KNIGHT, Color.WHITE)


def test_pawn_scenario_has_no_en_passant() -> None:
    session = GameSession.new_game()
    click(session, "e2")
    assert set(session.candidates) == {Square(5, 4), Square(4, 4)}

    click(session, "e4")
    assert session.turn == Color.BLACK
    assert session.legal_moves(Square(1, 3)) == [Square(2, 3), Square(3, 3)]


def test_turn_alternates() -> None:
    session = GameSession.new_game()
    moves = [("e2", "e4"), ("e7", "e5"), ("g1", "f3"), ("b8", "c6"), ("f1", "c4")]
    expected_turn = Color.WHITE
    for from_name, to_name in moves:
        assert session.turn == expected_turn
        click(session, from_name, to_name)
        expected_turn = expected_turn.opponent
    assert session.turn == Color.BLACK
    assert session.history_depth == len(moves)
    assert session.log[0] == "B: f1 → c4"


def test_black_cannot_move_on_whites_turn() -> None:
    session = GameSession.new_game()
    click(session, "e7", "e5")
    assert session.board == Board.initial()
    assert session.history == []


def test_pieces_are_conserved_on_quiet_moves() -> None:
    session = GameSession.new_game()
    click(session, "g1", "f3", "g8", "f6")
    assert session.board.piece_count() == 32


def test_capture_through_clicks(session_with_pieces: SessionFactory) -> None:
    session = session_with_pieces({"c1": "B", "e3": "p", "e8": "k", "e1": "K"})
    click(session, "c1")
    assert sq("e3") in session.candidates
    assert sq("f4") not in session.candidates

    click(session, "e3")
    assert session.board.piece_count() == 3
    assert session.board.get(sq("e3")) == Piece(PieceType.BISHOP, Color.WHITE)
    assert session.log == ["B: c1 → e3"]


def test_promotion_through_clicks(session_with_pieces: SessionFactory) -> None:
    session = session_with_pieces({"b2": "p"}, Color.BLACK)
    click(session, "b2", "b1")
    assert session.board.get(sq("b1")) == Piece(PieceType.QUEEN, Color.BLACK)
    assert session.turn == Color.WHITE


def test_moves_ignore_check(session_with_pieces: SessionFactory) -> None:
    """Pseudo-legal: the king may step next to the opponent's rook line"""
    session = session_with_pieces({"e1": "K", "a2": "r", "e8": "k"})
    click(session, "e1")
    assert sq("e2") in session.candidates
    click(session, "e2")
    assert session.board.get(sq("e2")) == Piece(PieceType.KING, Color.WHITE)


# -- DIRECT MOVES --
def test_direct_move() -> None:
    session = GameSession.new_game()
    click(session, "b1")
    assert session.move(sq("g1"), sq("f3")) == "N: g1 → f3"
    assert session.selected is None
    assert session.turn == Color.BLACK


def test_direct_move_from_empty_square() -> None:
    session = GameSession.new_game()
    with pytest.raises(EmptySquareError):
        session.move(sq("e4"), sq("e5"))


def test_direct_move_out_of_turn() -> None:
    session = GameSession.new_game()
    with pytest.raises(NotYourTurnError):
        session.move(sq("e7"), sq("e5"))
    assert session.board == Board.initial()


@pytest.mark.parametrize("to_name", ["e5", "d3", "e2", "e1"])
def test_direct_illegal_move_leaves_state_untouched(to_name: str) -> None:
    session = GameSession.new_game()
    with pytest.raises(IllegalMoveError):
        session.move(sq("e2"), sq(to_name))
    assert session.board == Board.initial()
    assert session.turn == Color.WHITE
    assert session.history == []
    assert session.log == []


def test_rejected_move_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    session = GameSession.new_game()
    with caplog.at_level(logging.WARNING, logger="chess_session"):
        with pytest.raises(IllegalMoveError):
            session.move(sq("e2"), sq("e5"))
    assert "Rejected illegal move e2e5" in caplog.text


def test_executed_move_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    session = GameSession.new_game()
    with caplog.at_level(logging.INFO, logger="chess_session"):
        click(session, "b1", "c3")
    assert "N: b1 → c3" in caplog.text


# -- UNDO --
def test_undo_restores_board_and_turn() -> None:
    session = GameSession.new_game()
    click(session, "e2", "e4")
    assert session.undo()
    assert session.board == Board.initial()
    assert session.turn == Color.WHITE
    assert session.history == []
    assert session.log == []


def test_undo_removes_most_recent_log_entry() -> None:
    session = GameSession.new_game()
    click(session, "e2", "e4", "e7", "e5")
    session.undo()
    assert session.log == ["P: e2 → e4"]
    assert session.turn == Color.BLACK


def test_undo_after_capture_and_promotion(session_with_pieces: SessionFactory) -> None:
    session = session_with_pieces({"g7": "P", "h8": "r", "a1": "K"})
    before = session.board.clone()
    click(session, "g7", "h8")
    assert session.board.get(sq("h8")) == Piece(PieceType.QUEEN, Color.WHITE)

    session.undo()
    assert session.board == before
    assert session.board.get(sq("g7")) == Piece(PieceType.PAWN, Color.WHITE)
    assert session.turn == Color.WHITE


def test_undo_clears_selection() -> None:
    session = GameSession.new_game()
    click(session, "e2", "e4", "g8")
    assert session.selected == sq("g8")
    session.undo()
    assert session.selected is None
    assert session.candidates == []


def test_undo_on_empty_history_is_a_noop() -> None:
    session = GameSession.new_game()
    assert not session.undo()
    assert session.turn == Color.WHITE
    assert session.board == Board.initial()


def test_undo_all_moves() -> None:
    session = GameSession.new_game()
    click(session, "e2", "e4", "e7", "e5", "d1", "h5", "b8", "c6", "h5", "f7")
    assert session.history_depth == 5
    assert session.board.piece_count() == 31
    while session.undo():
        pass
    assert session.board == Board.initial()
    assert session.turn == Color.WHITE
    assert session.log == []


# -- RESET / FLIP --
def test_reset() -> None:
    session = GameSession.new_game()
    click(session, "e2", "e4", "e7", "e5", "g1")
    session.flip_view()
    session.reset()

    assert session.board == Board.initial()
    assert session.turn == Color.WHITE
    assert session.history == []
    assert session.log == []
    assert session.selected is None
    assert session.castling_rights == CastlingRights()
    # a display preference, not game state
    assert session.flipped


def test_flip_view_only_touches_orientation() -> None:
    session = GameSession.new_game()
    click(session, "e2")
    assert session.flip_view()
    assert session.flipped
    assert session.selected == sq("e2")
    assert session.board == Board.initial()
    assert not session.flip_view()


# -- BOUNDARY MODEL --
def test_to_model() -> None:
    session = GameSession.new_game()
    click(session, "b1", "c3", "e7")
    model = session.to_model()
    assert model == SessionModel(
        placement="rnbqkbnr/pppppppp/8/8/8/2N5/PPPPPPPP/R1BQKBNR",
        turn="black",
        history=["rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"],
        log=["N: b1 → c3"],
        flipped=False,
        castling="KQkq",
        en_passant=None,
        selected="e7",
        candidates=["e6", "e5"],
    )


def test_model_roundtrip() -> None:
    session = GameSession.new_game(flipped=True)
    click(session, "e2", "e4", "g8", "f6", "b1")
    restored = GameSession.from_model(session.to_model())
    assert restored == session

    restored.undo()
    assert restored.turn == Color.BLACK
    assert restored.board.get(sq("g8")) == Piece(PieceType.KNIGHT, Color.BLACK)


@pytest.mark.parametrize(
    "from_square, to_square",
    [(Square(6, 4), Square(9, 4)), (Square(6, 4), Square(4, -1)), (Square(8, 4), Square(5, 4))],
)
def test_direct_move_off_the_board(from_square: Square, to_square: Square) -> None:
    session = GameSession.new_game()
    with pytest.raises(OutOfBoundsError):
        session.move(from_square, to_square)
    assert session.board == Board.initial()
    assert session.turn == Color.WHITE
    assert session.history == []
    assert session.log == []
