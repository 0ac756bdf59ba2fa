"""
The rules of the turn: mandatory maximum captures, applying a single move step, and detecting a winner.

Every function in here is pure. They take a Board value and hand back new values; none of them keep state
between calls. The turn state (whose turn, which piece is locked mid-chain) belongs to the caller.
"""

from dataclasses import dataclass
from typing import Optional

from src.core.shared_types import DRAW, Color, Winner
from src.dama.board import Board
from src.dama.moves import (
    Move,
    captures_for_piece,
    moves_for_piece,
    reaches_promotion_row,
)
from src.dama.position import Position


@dataclass(frozen=True)
class CaptureChain:
    """An ordered sequence of capture steps made by one piece within a single turn"""

    moves: tuple[Move, ...]

    @property
    def count(self) -> int:
        return len(self.moves)

    @property
    def first_step(self) -> Move:
        return self.moves[0]


@dataclass(frozen=True)
class MoveResult:
    """What happened after applying a single move step"""

    board: Board
    turn_ended: bool
    must_capture_from: Optional[Position]
    promoted: bool
    captured: bool


def _play_step(board: Board, move: Move) -> tuple[Board, bool]:
    """
    Relocate the moving piece, clear the captured squares and promote if needed.
    Returns the new board and whether a promotion happened.
    """
    piece = board.piece(move.from_pos)
    assert piece is not None, f"No piece to move on {move.from_pos}"

    new_board = board.remove_pieces(move.captures).move_piece(
        move.from_pos, move.to_pos
    )
    promoted = reaches_promotion_row(piece, move.to_pos)
    if promoted:
        new_board = new_board.promote_piece(move.to_pos)
    return new_board, promoted


# --- CAPTURE CHAINS ---
def max_capture_chains(
    board: Board, position: Position, chain: tuple[Move, ...] = ()
) -> list[CaptureChain]:
    """
    Exhaustive depth-first search of every capture chain the piece on `position` can make.
    ----

    ----
    1. Find the raw captures available from this square.
    2. None? The chain (if any) ends here.
    3. For each capture: play it on a new board and continue searching from the landing square,
       UNLESS the capture promoted the man. Promotion ends the capture sequence on the spot.

    Every terminal chain is reported, not just the longest ones: the global maximum is only known once all
    pieces have been searched (see `get_valid_moves_for_player`).
    """
    if board.piece(position) is None:
        return []

    captures = captures_for_piece(position, board)
    if not captures:
        return [CaptureChain(chain)] if chain else []

    chains: list[CaptureChain] = []
    for move in captures:
        next_board, promoted = _play_step(board, move)
        extended = chain + (move,)
        if promoted:
            chains.append(CaptureChain(extended))
            continue
        chains.extend(max_capture_chains(next_board, move.to_pos, extended))
    return chains


# --- LEGAL MOVES ---
def _eligible_pieces(
    board: Board, player: Color, must_capture_from: Optional[Position]
) -> list[Position]:
    pieces = board.locate_color(player)
    if must_capture_from is None:
        return pieces
    return [position for position in pieces if position == must_capture_from]


def _capture_chains(board: Board, pieces: list[Position]) -> list[CaptureChain]:
    return [chain for position in pieces for chain in max_capture_chains(board, position)]


def get_valid_moves_for_player(
    board: Board, player: Color, must_capture_from: Optional[Position] = None
) -> list[Move]:
    """
    The legal moves for the player's next move step.
    ----

    ----
    **Combines the following**

    1. Eligible pieces: all the player's pieces, or only the piece on `must_capture_from` (mid-chain lock).
    2. Find all capture chains of the eligible pieces and the global maximum capture count.
    3. Captures available? Then capturing is mandatory, and only the first steps of the chains
       reaching the global maximum are legal (one move per from/to pair).
    4. No captures and no lock: every plain move of every piece.
    5. No captures but a lock: nothing. The chain is over and the turn should have been ended already.
    """
    pieces = _eligible_pieces(board, player, must_capture_from)
    chains = _capture_chains(board, pieces)

    max_count = max((chain.count for chain in chains), default=0)
    if max_count > 0:
        best_first_steps: dict[tuple[Position, Position], Move] = {}
        for chain in chains:
            if chain.count == max_count:
                best_first_steps.setdefault(chain.first_step.key, chain.first_step)
        return list(best_first_steps.values())

    if must_capture_from is not None:
        return []

    return [move for position in pieces for move in moves_for_piece(position, board)]


def max_capture_count(
    board: Board, player: Color, must_capture_from: Optional[Position] = None
) -> int:
    """Highest number of pieces the player can take this turn (0 if there is nothing to capture)"""
    pieces = _eligible_pieces(board, player, must_capture_from)
    return max((chain.count for chain in _capture_chains(board, pieces)), default=0)


# --- APPLYING A MOVE ---
def apply_move(board: Board, move: Move) -> MoveResult:
    """
    Apply one move step to a new board
    -----

    The move must come from `get_valid_moves_for_player`; it is not validated again here.

    1. move the piece, remove the captured pieces, promote a man reaching the far row
    2. captured but not promoted? Check if the same piece can keep capturing from its landing square.
       If so, the turn continues with that piece locked in.
    3. otherwise (plain move, promotion, or nothing left to take) the turn is over.
    """
    piece = board.piece(move.from_pos)
    assert piece is not None, f"No piece to move on {move.from_pos}"

    new_board, promoted = _play_step(board, move)
    captured = move.is_capture

    if captured and not promoted:
        follow_ups = get_valid_moves_for_player(new_board, piece.color, move.to_pos)
        if follow_ups:
            return MoveResult(
                board=new_board,
                turn_ended=False,
                must_capture_from=move.to_pos,
                promoted=promoted,
                captured=captured,
            )

    return MoveResult(
        board=new_board,
        turn_ended=True,
        must_capture_from=None,
        promoted=promoted,
        captured=captured,
    )


# --- END OF THE GAME ---
def check_winner(board: Board) -> Optional[Winner]:
    """
    The color that still has pieces once the other color has none left.

    NOTE: Running out of legal moves also loses the game, but that is checked by whoever holds the turn state
    (it needs to know whose turn it is).
    """
    counts = board.count_pieces()
    white_left = counts[Color.WHITE] > 0
    black_left = counts[Color.BLACK] > 0
    if white_left and black_left:
        return None
    if white_left:
        return Color.WHITE
    if black_left:
        return Color.BLACK
    return DRAW
