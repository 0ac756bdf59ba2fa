"""
Type definitions used across layers
"""

from enum import StrEnum
from typing import Final, Literal


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    WHITE_WON = "white won"
    BLACK_WON = "black won"
    DRAW = "draw"


class GameMode(StrEnum):
    """
    pvp: two players on one board, pve: human (white) against the AI (black).
    online: plays exactly like pvp; the remote transport between the two players is up to the host.
    """

    PVP = "pvp"
    PVE = "pve"
    ONLINE = "online"


# Marker returned by the win detector when neither side has a piece left
DRAW: Final = "draw"
Winner = Color | Literal["draw"]

WINNING_STATUS: dict[Color, Status] = {
    Color.WHITE: Status.WHITE_WON,
    Color.BLACK: Status.BLACK_WON,
}
