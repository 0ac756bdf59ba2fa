"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define the raw move sets for each piece type.


The mandatory (max-)capture rule is applied later, in rules.py
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Self

from src.core.exceptions import InvalidRequestError
from src.dama.pieces import FORWARD_ROW_STEP, PROMOTION_ROW, Piece, PieceType
from src.dama.position import Position


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, position: Position) -> Optional[Piece]: ...
    def is_empty(self, position: Position) -> bool: ...


Vector = tuple[int, int]

DIAGONALS: list[Vector] = [(-1, -1), (-1, 1), (1, -1), (1, 1)]


@dataclass(frozen=True)
class Move:
    """
    A single atomic step: one hop for a man, one slide for a king.
    A multi-jump turn is a sequence of Moves, each applied on its own.
    """

    from_pos: Position
    to_pos: Position
    captures: tuple[Position, ...] = ()
    is_promotion: bool = False

    @property
    def is_capture(self) -> bool:
        return len(self.captures) > 0

    @property
    def key(self) -> tuple[Position, Position]:
        """Moves are told apart by their squares only"""
        return (self.from_pos, self.to_pos)

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        """
        Draughts style notation
        ---
        ---
        examples:
        * "c3-d4": the piece on c3 steps to d4
        * "c3xe5": the piece on c3 jumps to e5

        NOTE: the captured squares are not part of the notation. Look them up in the list of legal moves.
        """
        separator = "x" if "x" in notation else "-"
        try:
            from_sq, to_sq = notation.strip().split(separator)
            return cls(Position.from_algebraic(from_sq), Position.from_algebraic(to_sq))
        except (ValueError, IndexError) as exc:
            raise InvalidRequestError(f"Cannot read move notation: {notation!r}") from exc

    def to_notation(self) -> str:
        separator = "x" if self.is_capture else "-"
        return f"{self.from_pos.to_algebraic()}{separator}{self.to_pos.to_algebraic()}"


def forward_diagonals(piece: Piece) -> list[Vector]:
    """Men only move (and capture) forward, relative to their own color"""
    dr = FORWARD_ROW_STEP[piece.color]
    return [(dr, -1), (dr, 1)]


# --- MOVEMENT RULES ---
def reaches_promotion_row(piece: Piece, target: Position) -> bool:
    return (not piece.is_king) and target.row == PROMOTION_ROW[piece.color]


def single_step_move(position: Position, board: Board, deltas: list[Vector]) -> list[Move]:
    """A single step along each of the given directions, onto an empty square"""
    piece = board.piece(position)
    if piece is None:
        return []

    moves: list[Move] = []
    for dr, dc in deltas:
        target = position.shifted(dr, dc)
        if board.is_empty(target):
            moves.append(
                Move(
                    from_pos=position,
                    to_pos=target,
                    is_promotion=reaches_promotion_row(piece, target),
                )
            )
    return moves


def raycasting_move(position: Position, board: Board, directions: list[Vector]) -> list[Move]:
    """
    Raycasting algorithm
    -----

    ---
    Move along each direction until we hit another piece or the edge of the board.
    Every empty square on the way is a landing square (flying king).
    """
    moves: list[Move] = []
    for dr, dc in directions:
        target = position.shifted(dr, dc)
        while board.is_empty(target):
            moves.append(Move(from_pos=position, to_pos=target))
            target = target.shifted(dr, dc)
    return moves


def candidate_man_moves(position: Position, board: Board) -> list[Move]:
    """A man steps one square forward along either diagonal"""
    piece = board.piece(position)
    if piece is None:
        return []
    return single_step_move(position, board, forward_diagonals(piece))


def candidate_king_moves(position: Position, board: Board) -> list[Move]:
    """A (flying) king slides any distance along a clear diagonal"""
    return raycasting_move(position, board, DIAGONALS)


# --- CAPTURING RULES ---
def single_step_capture(
    position: Position, board: Board, deltas: list[Vector]
) -> list[Move]:
    """Jump over an adjacent opposing piece onto the empty square right behind it"""
    piece = board.piece(position)
    if piece is None:
        return []

    moves: list[Move] = []
    for dr, dc in deltas:
        jumped = position.shifted(dr, dc)
        landing = position.shifted(dr, dc, steps=2)
        jumped_piece = board.piece(jumped)
        if (
            jumped_piece is not None
            and jumped_piece.color != piece.color
            and board.is_empty(landing)
        ):
            moves.append(
                Move(
                    from_pos=position,
                    to_pos=landing,
                    captures=(jumped,),
                    is_promotion=reaches_promotion_row(piece, landing),
                )
            )
    return moves


def raycasting_capture(
    position: Position, board: Board, directions: list[Vector]
) -> list[Move]:
    """
    Raycasting algorithm for captures.
    ---

    ---
    Walk outward along each direction:
    * empty squares before any piece are not capture destinations (those are plain moves)
    * the first piece met must be an opponent's, otherwise the direction is blocked
    * every empty square behind that single opponent piece is a landing square, up to the next piece or the edge
    * a second piece ends the scan: never jump two pieces in one hop
    """
    piece = board.piece(position)
    if piece is None:
        return []

    moves: list[Move] = []
    for dr, dc in directions:
        target = position.shifted(dr, dc)
        jumped: Optional[Position] = None
        while target.is_within_bounds():
            target_piece = board.piece(target)
            if target_piece is None:
                if jumped is not None:
                    moves.append(
                        Move(from_pos=position, to_pos=target, captures=(jumped,))
                    )
            elif target_piece.color == piece.color or jumped is not None:
                break
            else:
                jumped = target
            target = target.shifted(dr, dc)
    return moves


def candidate_man_captures(position: Position, board: Board) -> list[Move]:
    piece = board.piece(position)
    if piece is None:
        return []
    return single_step_capture(position, board, forward_diagonals(piece))


def candidate_king_captures(position: Position, board: Board) -> list[Move]:
    return raycasting_capture(position, board, DIAGONALS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Position, Board], list[Move]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.MAN: candidate_man_moves,
    PieceType.KING: candidate_king_moves,
}

# --- STRATEGY PATTERN: CAPTURING RULES ---
CAPTURE_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.MAN: candidate_man_captures,
    PieceType.KING: candidate_king_captures,
}


def moves_for_piece(position: Position, board: Board) -> list[Move]:
    """All raw moves of the piece on that square: plain moves followed by captures. Empty square -> no moves."""
    piece = board.piece(position)
    if piece is None:
        return []
    plain_moves = MOVEMENT_RULES[piece.type](position, board)
    captures = CAPTURE_RULES[piece.type](position, board)
    return plain_moves + captures


def captures_for_piece(position: Position, board: Board) -> list[Move]:
    piece = board.piece(position)
    if piece is None:
        return []
    return CAPTURE_RULES[piece.type](position, board)
