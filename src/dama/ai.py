"""
Computer opponent: depth-limited minimax with alpha-beta pruning over the rules in rules.py.

The search is stateless between calls. The only outside influence is the random number generator used to
shuffle the root moves (so equally good moves are not always resolved the same way). Pass a seeded
`random.Random` to make the choice reproducible.
"""

import logging
import math
import random
from dataclasses import dataclass
from typing import Optional

from src.core.config import get_settings
from src.core.shared_types import Color
from src.dama.board import Board
from src.dama.moves import Move
from src.dama.pieces import PIECE_POINTS, PieceType
from src.dama.position import BOARD_SIZE, Position
from src.dama.rules import apply_move, check_winner, get_valid_moves_for_player

logger = logging.getLogger(__name__)

WIN_SCORE = 10_000
POSITIONAL_WEIGHT = 0.1

# Bonus for men, indexed by how far the man has advanced from its own back row (row index mirrored for White).
# Encourages center control and advancement.
POSITIONAL_BONUS: list[list[int]] = [
    [0, 0, 0, 0, 0, 0, 0, 0],
    [4, 2, 4, 2, 4, 2, 4, 2],
    [2, 3, 2, 3, 2, 3, 2, 3],
    [2, 4, 2, 4, 2, 4, 2, 4],
    [2, 4, 2, 4, 2, 4, 2, 4],
    [2, 3, 2, 3, 2, 3, 2, 3],
    [4, 2, 4, 2, 4, 2, 4, 2],
    [4, 4, 4, 4, 4, 4, 4, 4],
]


@dataclass
class SearchStats:
    """Counts the positions visited below the root. Zero when the move was forced."""

    nodes: int = 0


def advancement(color: Color, position: Position) -> int:
    """Black starts on row 0 and moves down, White starts on row 7 and moves up"""
    return position.row if color == Color.BLACK else BOARD_SIZE - 1 - position.row


def evaluate_board(board: Board, player: Color) -> float:
    """
    Static evaluation from `player`'s point of view
    ---

    * a won / lost board scores +/- WIN_SCORE
    * otherwise: material (king 50, man 10) plus a small positional bonus for men,
      summed as (own pieces) - (opponent pieces)
    """
    winner = check_winner(board)
    if winner == player:
        return WIN_SCORE
    if winner == player.opponent:
        return -WIN_SCORE

    score = 0.0
    for position, piece in board.squares.items():
        value: float = PIECE_POINTS[piece.type]
        if piece.type == PieceType.MAN:
            bonus = POSITIONAL_BONUS[advancement(piece.color, position)][position.col]
            value += bonus * POSITIONAL_WEIGHT
        score += value if piece.color == player else -value
    return score


def _next_turn(
    current_player: Color, maximizing: bool, turn_ended: bool
) -> tuple[Color, bool]:
    """A multi-jump in progress keeps the same player (and the same role) at the next level"""
    if not turn_ended:
        return current_player, maximizing
    return current_player.opponent, not maximizing


def minimax(
    board: Board,
    depth: int,
    alpha: float,
    beta: float,
    maximizing: bool,
    must_capture_from: Optional[Position],
    current_player: Color,
    root_player: Color,
    stats: Optional[SearchStats] = None,
) -> float:
    """
    Minimax with alpha-beta pruning
    -----

    ----
    The maximizing role belongs to the root player. The depth goes down by one for every move step,
    also for the steps of a capture chain that do not hand over the turn.
    """
    if stats is not None:
        stats.nodes += 1

    # 1. Termination conditions
    if depth <= 0 or check_winner(board) is not None:
        return evaluate_board(board, root_player)

    # 2. Get moves. Nothing to play means the player to move has lost.
    moves = get_valid_moves_for_player(board, current_player, must_capture_from)
    if not moves:
        return -WIN_SCORE if maximizing else WIN_SCORE

    # 3. Recursion
    best = -math.inf if maximizing else math.inf
    for move in moves:
        result = apply_move(board, move)
        next_player, next_maximizing = _next_turn(
            current_player, maximizing, result.turn_ended
        )
        score = minimax(
            result.board,
            depth - 1,
            alpha,
            beta,
            next_maximizing,
            result.must_capture_from,
            next_player,
            root_player,
            stats,
        )
        if maximizing:
            best = max(best, score)
            alpha = max(alpha, score)
        else:
            best = min(best, score)
            beta = min(beta, score)
        if beta <= alpha:
            break
    return best


def get_best_move(
    board: Board,
    player: Color,
    must_capture_from: Optional[Position] = None,
    *,
    depth: Optional[int] = None,
    rng: Optional[random.Random] = None,
    stats: Optional[SearchStats] = None,
) -> Optional[Move]:
    """
    Pick the move with the best minimax score for `player`.

    * No legal moves: None (the host treats this as a loss for the player)
    * A single legal move (typically a forced capture): returned without searching
    """
    moves = get_valid_moves_for_player(board, player, must_capture_from)
    if not moves:
        return None
    if len(moves) == 1:
        return moves[0]

    settings = get_settings()
    search_depth = depth if depth is not None else settings.ai_search_depth
    rng = rng if rng is not None else random.Random(settings.ai_seed)

    # Shuffle for variety when scores are tied
    candidates = list(moves)
    rng.shuffle(candidates)

    best_move: Optional[Move] = None
    best_score = -math.inf
    for move in candidates:
        result = apply_move(board, move)
        next_player, maximizing = _next_turn(player, True, result.turn_ended)
        score = minimax(
            result.board,
            search_depth - 1,
            best_score,
            math.inf,
            maximizing,
            result.must_capture_from,
            next_player,
            player,
            stats,
        )
        if score > best_score:
            best_score = score
            best_move = move

    logger.debug(
        "AI (%s) picked %s with score %.1f out of %d moves",
        player,
        best_move.to_notation() if best_move else None,
        best_score,
        len(candidates),
    )
    return best_move


class DamaAI:
    """A computer player with a fixed search depth and its own random number generator"""

    def __init__(self, depth: Optional[int] = None, seed: Optional[int] = None) -> None:
        settings = get_settings()
        self.depth = depth if depth is not None else settings.ai_search_depth
        self.rng = random.Random(seed if seed is not None else settings.ai_seed)

    def choose_move(
        self,
        board: Board,
        player: Color,
        must_capture_from: Optional[Position] = None,
    ) -> Optional[Move]:
        return get_best_move(
            board, player, must_capture_from, depth=self.depth, rng=self.rng
        )
