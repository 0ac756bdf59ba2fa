"""
The Game board: which piece stands on which (dark) square.

A Board is a value. None of its methods change it in place: moving, removing, placing or promoting
a piece hands back a new Board. The search AI explores many futures starting from the same board,
so sharing one board between branches must never leak changes from one branch into another.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Self

from src.core.exceptions import InvalidBoardError
from src.core.shared_types import Color
from src.dama.pieces import Piece
from src.dama.position import BOARD_SIZE, Position, is_playable

# Rows 0-2: Black, rows 5-7: White. Only dark squares.
STARTING_ROWS: dict[Color, range] = {
    Color.BLACK: range(0, 3),
    Color.WHITE: range(BOARD_SIZE - 3, BOARD_SIZE),
}

Grid = list[list[Optional[Piece]]]


@dataclass(frozen=True)
class Board:
    squares: dict[Position, Piece] = field(default_factory=dict)

    def __hash__(self) -> int:
        # the dict field is not hashable: hash the occupied squares instead
        return hash(frozenset(self.squares.items()))

    @classmethod
    def empty(cls) -> Self:
        return cls({})

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        """Construct a board from its notation string.

        Similar to the first part of a chess FEN string, but read from row 0 downwards
        ex. standard starting position:
        1b1b1b1b/b1b1b1b1/1b1b1b1b/8/8/w1w1w1w1/1w1w1w1w/w1w1w1w1
        means:
        * Rows are separated by slashes. The first one is row 0 (where Black starts)
        * A number denotes that many empty squares after each other
        * 'w' / 'b' are White / Black men, 'W' / 'B' are White / Black kings
        """
        rows = notation.strip().split("/")
        if len(rows) != BOARD_SIZE:
            raise InvalidBoardError(
                f"Board notation needs {BOARD_SIZE} rows, got {len(rows)}: {notation!r}"
            )

        squares: dict[Position, Piece] = {}
        for row, row_notation in enumerate(rows):
            col = 0
            for character in row_notation:
                if character.isdigit():
                    col += int(character)
                    continue
                if not is_playable(row, col):
                    raise InvalidBoardError(
                        f"Piece {character!r} placed on a light or off-board square ({row}, {col})"
                    )
                squares[Position(row, col)] = Piece.from_notation(character)
                col += 1

            if col != BOARD_SIZE:
                raise InvalidBoardError(
                    f"Row {row} of the board notation covers {col} squares instead of {BOARD_SIZE}: {row_notation!r}"
                )
        return cls(squares)

    def to_notation(self) -> str:
        return "/".join(self._row_to_notation(row) for row in range(BOARD_SIZE))

    def _row_to_notation(self, row: int) -> str:
        characters: list[str] = []
        empty_count = 0
        for col in range(BOARD_SIZE):
            piece = self.piece(Position(row, col))
            if piece is None:
                empty_count += 1
                continue
            if empty_count > 0:
                characters.append(str(empty_count))
                empty_count = 0
            characters.append(piece.to_notation())

        # an entirely empty row still gets its number
        if empty_count > 0:
            characters.append(str(empty_count))
        return "".join(characters)

    @classmethod
    def from_rows(cls, rows: Grid) -> Self:
        """From the plain grid shape: rows of `Piece | None`, indexed [row][col]"""
        if len(rows) != BOARD_SIZE or any(len(cells) != BOARD_SIZE for cells in rows):
            raise InvalidBoardError(f"Board grid must be {BOARD_SIZE}x{BOARD_SIZE}")

        squares: dict[Position, Piece] = {}
        for row, cells in enumerate(rows):
            for col, piece in enumerate(cells):
                if piece is None:
                    continue
                if not is_playable(row, col):
                    raise InvalidBoardError(
                        f"Piece placed on a light square ({row}, {col})"
                    )
                squares[Position(row, col)] = piece
        return cls(squares)

    def to_rows(self) -> Grid:
        return [
            [self.piece(Position(row, col)) for col in range(BOARD_SIZE)]
            for row in range(BOARD_SIZE)
        ]

    def piece(self, position: Position) -> Optional[Piece]:
        """The piece on that square. None for an empty (or off-board) square"""
        return self.squares.get(position)

    def is_empty(self, position: Position) -> bool:
        return position.is_within_bounds() and position not in self.squares

    def locate_color(self, color: Color) -> list[Position]:
        return sorted(
            position for position, piece in self.squares.items() if piece.color == color
        )

    def count_pieces(self) -> dict[Color, int]:
        counts = {color: 0 for color in Color}
        for piece in self.squares.values():
            counts[piece.color] += 1
        return counts

    def count_material(self) -> dict[Color, int]:
        """Tally the points of material each player has on the board"""
        material = {color: 0 for color in Color}
        for piece in self.squares.values():
            material[piece.color] += piece.points
        return material

    # --- COPY-ON-WRITE UPDATES ---
    def move_piece(self, from_position: Position, to_position: Position) -> Self:
        squares = dict(self.squares)
        squares[to_position] = squares.pop(from_position)
        return type(self)(squares)

    def remove_pieces(self, positions: Iterable[Position]) -> Self:
        squares = dict(self.squares)
        for position in positions:
            squares.pop(position, None)
        return type(self)(squares)

    def place_piece(self, piece: Piece, position: Position) -> Self:
        squares = dict(self.squares)
        squares[position] = piece
        return type(self)(squares)

    def promote_piece(self, position: Position) -> Self:
        return self.place_piece(self.squares[position].promoted(), position)


def create_initial_board() -> Board:
    """Men of both colors on every dark square of their three starting rows. Rows 3-4 are empty."""
    squares: dict[Position, Piece] = {}
    for color, rows in STARTING_ROWS.items():
        for row in rows:
            for col in range(BOARD_SIZE):
                if is_playable(row, col):
                    squares[Position(row, col)] = Piece(color)
    return Board(squares)
