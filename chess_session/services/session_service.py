"""Orchestration of communication from the presentation layer to the game sessions (and the reverse direction)."""

import logging
from typing import Optional
from uuid import UUID

from chess_session.api.models import (
    CreateSessionRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    SessionRequest,
    SessionResponse,
    SquareClickRequest,
)
from chess_session.chess.game import GameSession
from chess_session.chess.square import Square
from chess_session.core.exceptions import SessionNotFoundError
from chess_session.core.shared_types import Color, Status
from chess_session.db.repository import InMemorySessionRepository, SessionRepository

logger = logging.getLogger(__name__)


class SessionService:
    """
    Orchestration of layers for chess sessions.

    NOTE: Commands on the same session must not interleave. Callers serialize them (one writer per session).
    """

    def __init__(self, repository: Optional[SessionRepository] = None) -> None:
        self.repo = repository if repository is not None else InMemorySessionRepository()

    # -- Presentation layer commands ---
    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """Start a new game in the standard starting position."""
        session = GameSession.new_game(flipped=request.flipped)
        session_id = self.repo.create_session(session)
        logger.info("Created session %s", session_id)
        return self._create_session_response(session_id, session)

    def get_session(self, request: SessionRequest) -> SessionResponse:
        """Retrieve current state (to render the board)."""
        session = self._fetch_session(request.session_id)
        return self._create_session_response(request.session_id, session)

    def click_square(self, request: SquareClickRequest) -> SessionResponse:
        """Select a piece, move the selected piece, or cancel the selection (depending on the square clicked)."""
        session = self._fetch_session(request.session_id)
        last_move = session.select_or_move(Square.from_algebraic(request.square))
        return self._create_session_response(request.session_id, session, last_move)

    def move(self, request: MoveRequest) -> SessionResponse:
        """Make a move directly. Errors of the domain layer are propagated."""
        session = self._fetch_session(request.session_id)
        last_move = session.move(
            Square.from_algebraic(request.from_square),
            Square.from_algebraic(request.to_square),
        )
        return self._create_session_response(request.session_id, session, last_move)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Candidate moves of any piece, without touching the selection."""
        session = self._fetch_session(request.session_id)
        candidates = session.legal_moves(Square.from_algebraic(request.square))
        return LegalMovesResponse(
            session_id=request.session_id,
            square=request.square,
            candidates=[square.to_algebraic() for square in candidates],
        )

    def undo(self, request: SessionRequest) -> SessionResponse:
        session = self._fetch_session(request.session_id)
        session.undo()
        return self._create_session_response(request.session_id, session)

    def reset(self, request: SessionRequest) -> SessionResponse:
        """NOTE: Asking the user to confirm is the job of the presentation layer."""
        session = self._fetch_session(request.session_id)
        session.reset()
        return self._create_session_response(request.session_id, session)

    def flip_view(self, request: SessionRequest) -> SessionResponse:
        session = self._fetch_session(request.session_id)
        session.flip_view()
        return self._create_session_response(request.session_id, session)

    def delete_session(self, request: SessionRequest) -> None:
        """Handle a request to discard a session."""
        if self.repo.delete_session(request.session_id) is None:
            raise SessionNotFoundError(f"Session with {request.session_id=} not found.")
        logger.info("Deleted session %s", request.session_id)

    # -- Internal helpers --
    def _create_session_response(
        self, session_id: UUID, session: GameSession, last_move: Optional[str] = None
    ) -> SessionResponse:
        """Convert the session into a SessionResponse (through the boundary SessionModel)."""
        model = session.to_model()
        return SessionResponse(
            session_id=session_id,
            board=[
                [piece.to_fen() if piece is not None else None for piece in row]
                for row in session.board.rows()
            ],
            placement=model.placement,
            turn=Color(model.turn),
            status=Status.SELECTED if model.selected else Status.IDLE,
            selected=model.selected,
            candidates=model.candidates,
            flipped=model.flipped,
            log=model.log,
            history_depth=len(model.history),
            last_move=last_move,
        )

    def _fetch_session(self, session_id: UUID) -> GameSession:
        """Attempt to find the session in the repository and raise error if it fails."""
        session = self.repo.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(f"Session with {session_id=} not found.")
        return session
