"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from chess_session.core.exceptions import InvalidRequestError
from chess_session.core.shared_types import Color, Status

PieceCharacter = str  # FEN character: capital letters for white pieces, lower case for black
SquareName = str  # algebraic notation, ex. "e2"


def validate_square_name(value: str) -> str:
    """Algebraic notation within the board: a file 'a'-'h' followed by a rank '1'-'8'"""
    if len(value) != 2:
        raise InvalidRequestError(f"Cannot interpret {value!r} as a valid square name.")

    file_character, rank_character = value[0], value[1]
    if not ("a" <= file_character <= "h" and "1" <= rank_character <= "8"):
        raise InvalidRequestError(f"Cannot interpret {value!r} as a valid square name.")
    return value


# --- REQUEST MODELS ---
class CreateSessionRequest(BaseModel):
    flipped: bool = False


class SessionRequest(BaseModel):
    """Requests that only need to identify the session: get state, undo, reset, flip view, delete."""

    session_id: UUID


class SquareClickRequest(BaseModel):
    session_id: UUID
    square: SquareName

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return validate_square_name(value)


class LegalMovesRequest(BaseModel):
    session_id: UUID
    square: SquareName

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return validate_square_name(value)


class MoveRequest(BaseModel):
    session_id: UUID
    from_square: SquareName
    to_square: SquareName

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        return validate_square_name(value)


# --- RESPONSE MODELS ---
class SessionResponse(BaseModel):
    """Everything the presentation layer needs to redraw after a command."""

    session_id: UUID
    board: list[list[Optional[PieceCharacter]]]  # row 0 (8th rank) first
    placement: str
    turn: Color
    status: Status
    selected: Optional[SquareName]
    candidates: list[SquareName]
    flipped: bool
    log: list[str]  # most recent first
    history_depth: int
    last_move: Optional[str] = None


class LegalMovesResponse(BaseModel):
    session_id: UUID
    square: SquareName
    candidates: list[SquareName]
