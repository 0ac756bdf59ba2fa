"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and the domain layer (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the API layer or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Optional

# Type aliases to make GameModel easier to read
PieceColor = str
PlayerName = str
SquareName = str


@dataclass
class HistoryModel:
    """Transport-safe snapshot of the turn state before a move was applied (used for undo)."""

    board: str
    turn: PieceColor
    must_capture_from: Optional[SquareName] = None


@dataclass
class GameModel:
    """Transport-safe representation of a dama game used between API, Service, and Game layers."""

    board: str
    turn: PieceColor
    must_capture_from: Optional[SquareName]
    mode: str
    status: str
    players: dict[PieceColor, PlayerName] = field(default_factory=dict)
    moves: list[str] = field(default_factory=list)
    history: list[HistoryModel] = field(default_factory=list)
