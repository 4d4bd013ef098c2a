"""
The GameSession is the entrypoint into the domain layer for the service layer (or any presentation layer).
It owns the board, the turn, the current selection and the undo history, and it is the only object that mutates them.

Reading state: attributes / properties.
Driving the game: `select_or_move()`, `move()`, `undo()`, `reset()`, `flip_view()`.

Single writer: commands are not meant to interleave, callers must serialize them.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Self

from chess_session.chess.board import Board
from chess_session.chess.castling import CastlingRights
from chess_session.chess.executor import execute_move
from chess_session.chess.moves import legal_moves
from chess_session.chess.pieces import Color
from chess_session.chess.square import Square
from chess_session.core.exceptions import (
    EmptySquareError,
    IllegalMoveError,
    NotYourTurnError,
)
from chess_session.core.models import SessionModel

logger = logging.getLogger(__name__)


class SelectionStatus(Enum):
    IDLE = auto()
    SELECTED = auto()


@dataclass
class GameSession:
    # --- DOMAIN LAYER API CALLED BY SERVICE ---

    board: Board = field(default_factory=Board.initial)
    turn: Color = Color.WHITE
    history: list[Board] = field(default_factory=list)  # board snapshots, one per executed move
    log: list[str] = field(default_factory=list)  # most recent first
    selected: Optional[Square] = None
    candidates: list[Square] = field(default_factory=list)
    flipped: bool = False
    # NOTE: tracked, but not used by move generation / execution (no castling, no en passant)
    castling_rights: CastlingRights = field(default_factory=CastlingRights)
    en_passant: Optional[Square] = None

    @classmethod
    def new_game(cls, flipped: bool = False) -> Self:
        """Standard starting position, white to move."""
        return cls(flipped=flipped)

    @classmethod
    def from_model(cls, model: SessionModel) -> Self:
        """Define how to construct a GameSession from the information the Service layer has"""
        return cls(
            board=Board.from_fen(model.placement),
            turn=Color(model.turn),
            history=[Board.from_fen(placement) for placement in model.history],
            log=list(model.log),
            selected=Square.from_algebraic(model.selected) if model.selected else None,
            candidates=[Square.from_algebraic(sq) for sq in model.candidates],
            flipped=model.flipped,
            castling_rights=CastlingRights.from_fen(model.castling),
            en_passant=Square.from_algebraic(model.en_passant) if model.en_passant else None,
        )

    def to_model(self) -> SessionModel:
        """Encode back into a format the Service layer uses"""
        return SessionModel(
            placement=self.board.to_fen(),
            turn=self.turn.value,
            history=[snapshot.to_fen() for snapshot in self.history],
            log=list(self.log),
            flipped=self.flipped,
            castling=self.castling_rights.to_fen(),
            en_passant=self.en_passant.to_algebraic() if self.en_passant else None,
            selected=self.selected.to_algebraic() if self.selected else None,
            candidates=[square.to_algebraic() for square in self.candidates],
        )

    # --- QUERIES ---
    @property
    def status(self) -> SelectionStatus:
        return SelectionStatus.SELECTED if self.selected is not None else SelectionStatus.IDLE

    @property
    def history_depth(self) -> int:
        return len(self.history)

    @property
    def can_undo(self) -> bool:
        return len(self.history) > 0

    def legal_moves(self, square: Square) -> list[Square]:
        """Candidate destinations of the piece on the square (any color, does not change the selection)."""
        return legal_moves(self.board, square)

    # --- COMMANDS ---
    def select_or_move(self, square: Square) -> Optional[str]:
        """
        Handle a click on a square
        ----

        1. Your own piece? --> (re)select it and cache its candidate moves. This wins over moving onto the square.
        2. One of the cached candidates of the selected piece? --> make the move, clear the selection.
        3. Anything else --> clear the selection (nothing happens if nothing was selected).

        Returns the move log entry if a move was made.
        """
        square.ensure_within_bounds()

        if self._is_own_piece(square):
            self._select(square)
            return None

        if self.selected is not None and square in self.candidates:
            from_square = self.selected
            self._clear_selection()
            return self._execute(from_square, square)

        if self.selected is not None:
            logger.debug("Selection of %s cancelled", self.selected.to_algebraic())
        self._clear_selection()
        return None

    def move(self, from_square: Square, to_square: Square) -> str:
        """
        Direct move (without clicking through the selection)
        ----

        Checks what the click handling guarantees implicitly:
        1. there is a piece to move
        2. it is its color's turn
        3. the target is one of its candidate moves

        The move is either made completely, or an error is raised and nothing changed.
        """
        from_square.ensure_within_bounds()
        to_square.ensure_within_bounds()

        piece = self.board.get(from_square)
        if piece is None:
            logger.warning("Rejected move from empty square %s", from_square.to_algebraic())
            raise EmptySquareError(f"No piece on {from_square.to_algebraic()}.")

        if piece.color != self.turn:
            logger.warning("Rejected move of %s piece: %s to move", piece.color.value, self.turn.value)
            raise NotYourTurnError(
                f"It is not {piece.color.value}'s turn. Waiting for {self.turn.value} to make a move first."
            )

        if to_square not in legal_moves(self.board, from_square):
            logger.warning(
                "Rejected illegal move %s%s", from_square.to_algebraic(), to_square.to_algebraic()
            )
            raise IllegalMoveError(
                f"Move not allowed: {from_square.to_algebraic()}{to_square.to_algebraic()}"
            )

        self._clear_selection()
        return self._execute(from_square, to_square)

    def undo(self) -> bool:
        """Take back the last move. Returns False (and changes nothing) when there is nothing to undo."""
        if not self.history:
            return False

        self.board = self.history.pop()
        self.turn = self.turn.opponent
        if self.log:
            undone = self.log.pop(0)
            logger.info("Undo %s", undone)
        self._clear_selection()
        return True

    def reset(self) -> None:
        """Back to the starting position, white to move. The view orientation is kept. Asking the user for confirmation is up to the presentation layer."""
        self.board = Board.initial()
        self.turn = Color.WHITE
        self.history = []
        self.log = []
        self.castling_rights = CastlingRights()
        self.en_passant = None
        self._clear_selection()
        logger.info("Game reset")

    def flip_view(self) -> bool:
        """Toggle the display orientation. Only a rendering hint: board, turn and moves are unaffected."""
        self.flipped = not self.flipped
        return self.flipped

    # -- PRIVATE HELPERS ---
    def _is_own_piece(self, square: Square) -> bool:
        piece = self.board.get(square)
        return piece is not None and piece.color == self.turn

    def _select(self, square: Square) -> None:
        self.selected = square
        self.candidates = legal_moves(self.board, square)
        logger.debug(
            "Selected %s: %d candidate moves", square.to_algebraic(), len(self.candidates)
        )

    def _clear_selection(self) -> None:
        self.selected = None
        self.candidates = []

    def _execute(self, from_square: Square, to_square: Square) -> str:
        description = execute_move(self, from_square, to_square)
        logger.info("Move %s, %s to move", description, self.turn.value)
        return description
