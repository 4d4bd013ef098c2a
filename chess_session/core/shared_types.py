"""
Type definitions used across layers
"""

from enum import StrEnum

# NOTE The domain layer has its own Color enum (chess_session/chess/pieces.py). These transport versions carry the same names,
# NOTE so the imports show which version is used in what part of the code.


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"


class Status(StrEnum):
    IDLE = "idle"
    SELECTED = "selected"
