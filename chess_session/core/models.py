"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Both the API layer (higher) and the domain layer (lower) convert into / from the model(s) defined here.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class SessionModel:
    """Transport-safe representation of a game session. Boards are encoded as FEN piece placements, squares in algebraic notation."""

    placement: str
    turn: str
    history: list[str] = field(default_factory=list)
    log: list[str] = field(default_factory=list)
    flipped: bool = False
    castling: str = "KQkq"
    en_passant: Optional[str] = None
    selected: Optional[str] = None
    candidates: list[str] = field(default_factory=list)
