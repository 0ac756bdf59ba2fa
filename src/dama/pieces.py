"""Defines the pieces used in dama: men and (flying) kings"""

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Self

from src.core.exceptions import InvalidBoardError
from src.core.shared_types import Color
from src.dama.position import BOARD_SIZE


class PieceType(Enum):
    MAN = auto()
    KING = auto()


NOTATION_TO_COLOR: dict[str, Color] = {
    "w": Color.WHITE,
    "b": Color.BLACK,
}

COLOR_TO_NOTATION: dict[Color, str] = {
    value: key for key, value in NOTATION_TO_COLOR.items()
}


PIECE_POINTS: dict[PieceType, int] = {
    PieceType.MAN: 10,
    PieceType.KING: 50,
}

# White moves UP the board (towards row 0), Black moves DOWN (towards row 7)
FORWARD_ROW_STEP: dict[Color, int] = {
    Color.WHITE: -1,
    Color.BLACK: 1,
}

PROMOTION_ROW: dict[Color, int] = {
    Color.WHITE: 0,
    Color.BLACK: BOARD_SIZE - 1,
}


@dataclass(frozen=True)
class Piece:
    color: Color
    is_king: bool = False

    @property
    def type(self) -> PieceType:
        return PieceType.KING if self.is_king else PieceType.MAN

    @property
    def points(self) -> int:
        return PIECE_POINTS[self.type]

    @classmethod
    def from_notation(cls, character: str) -> Self:
        # lower case: men, upper case: kings
        color = NOTATION_TO_COLOR.get(character.lower())
        if color is None:
            raise InvalidBoardError(f"Unknown piece character: {character!r}")
        return cls(color, is_king=character.isupper())

    def to_notation(self) -> str:
        character = COLOR_TO_NOTATION[self.color]
        return character.upper() if self.is_king else character

    def promoted(self) -> Self:
        """Pieces are values: promotion hands back a new (king) piece of the same color"""
        return replace(self, is_king=True)
