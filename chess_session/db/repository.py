"""
Protocol repository + in-memory implementation.

Sessions live as long as the process does: saving/loading games is not part of this engine.
"""

from typing import Protocol
from uuid import UUID, uuid4

from chess_session.chess.game import GameSession


class SessionRepository(Protocol):
    """Keeps track of the live sessions"""

    def get_session(self, session_id: UUID) -> GameSession | None:
        """Get session by ID, if it exists."""
        ...

    def create_session(self, session: GameSession) -> UUID:
        """Register a new session and return its newly created ID."""
        ...

    def delete_session(self, session_id: UUID) -> GameSession | None:
        """Forget a session."""
        ...


class InMemorySessionRepository:
    """Sessions stored in a dictionary"""

    def __init__(self) -> None:
        self._sessions: dict[UUID, GameSession] = {}

    def get_session(self, session_id: UUID) -> GameSession | None:
        return self._sessions.get(session_id)

    def create_session(self, session: GameSession) -> UUID:
        new_id = uuid4()
        self._sessions[new_id] = session
        return new_id

    def delete_session(self, session_id: UUID) -> GameSession | None:
        return self._sessions.pop(session_id, None)

    def session_ids(self) -> list[UUID]:
        return list(self._sessions.keys())

    def clear(self) -> None:
        self._sessions.clear()
