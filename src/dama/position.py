"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Dama is played on the dark squares of an 8x8 board
BOARD_SIZE = 8


def is_on_board(row: int, col: int) -> bool:
    return (0 <= row < BOARD_SIZE) and (0 <= col < BOARD_SIZE)


def is_playable(row: int, col: int) -> bool:
    """Only the dark squares are used: those where row + col is odd"""
    return is_on_board(row, col) and (row + col) % 2 == 1


@dataclass(frozen=True, order=True)
class Position:
    """
    Row 0 is the edge where Black starts (White promotes there), row 7 is the edge where White starts.
    """

    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Position:
        """
        Algebraic notation: files 'a'-'h' are the columns 0-7, ranks '1'-'8' count up from White's back row.
        So 'a1' is (7, 0) and 'h8' is (0, 7)
        """
        col = ord(sq[0].lower()) - ord("a")
        row = BOARD_SIZE - int(sq[1:])
        return cls(row, col)

    def to_algebraic(self) -> str:
        return f"{chr(self.col + ord('a'))}{BOARD_SIZE - self.row}"

    def is_within_bounds(self) -> bool:
        return is_on_board(self.row, self.col)

    def is_playable(self) -> bool:
        return is_playable(self.row, self.col)

    def shifted(self, dr: int, dc: int, steps: int = 1) -> Position:
        return Position(self.row + dr * steps, self.col + dc * steps)
