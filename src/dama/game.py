"""
The Game class will be the entrypoint into the domain layer for the service layer.
It owns the turn state (whose turn it is, which piece is locked in the middle of a capture chain) and
orchestrates the pure rules of rules.py to play a game from start to finish. Passes this information to
the service layer, which can then pass it onwards to the API layer.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    NothingToUndoError,
    NotYourTurnError,
)
from src.core.models import GameModel, HistoryModel
from src.core.shared_types import DRAW, WINNING_STATUS, Color, GameMode, Status, Winner
from src.dama.ai import DamaAI
from src.dama.board import Board, create_initial_board
from src.dama.moves import Move
from src.dama.position import Position
from src.dama.rules import (
    MoveResult,
    apply_move,
    check_winner,
    get_valid_moves_for_player,
)

logger = logging.getLogger(__name__)

# In a game against the computer, the human plays White (and moves first)
AI_COLOR = Color.BLACK


@dataclass
class HistoryEntry:
    """Snapshot of the turn state BEFORE a move step was applied"""

    board: Board
    turn: Color
    must_capture_from: Optional[Position]


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    turn: Color
    must_capture_from: Optional[Position]
    mode: GameMode
    status: Status
    players: dict[Color, str] = field(default_factory=dict)
    moves: list[str] = field(default_factory=list)  # move notations, one per step
    history: list[HistoryEntry] = field(default_factory=list)

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""
        try:
            turn = Color(model.turn)
            mode = GameMode(model.mode)
            status = Status(model.status)
            players = {Color(color): name for color, name in model.players.items()}
            history_turns = [Color(entry.turn) for entry in model.history]
        except ValueError as exc:
            raise GameStateError(f"Cannot restore game: {exc}") from exc

        return cls(
            board=Board.from_notation(model.board),
            turn=turn,
            must_capture_from=_parse_square(model.must_capture_from),
            mode=mode,
            status=status,
            players=players,
            moves=list(model.moves),
            history=[
                HistoryEntry(
                    board=Board.from_notation(entry.board),
                    turn=entry_turn,
                    must_capture_from=_parse_square(entry.must_capture_from),
                )
                for entry, entry_turn in zip(model.history, history_turns)
            ],
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            board=self.board.to_notation(),
            turn=self.turn.value,
            must_capture_from=_square_name(self.must_capture_from),
            mode=self.mode.value,
            status=self.status.value,
            players={color.value: name for color, name in self.players.items()},
            moves=list(self.moves),
            history=[
                HistoryModel(
                    board=entry.board.to_notation(),
                    turn=entry.turn.value,
                    must_capture_from=_square_name(entry.must_capture_from),
                )
                for entry in self.history
            ],
        )

    @classmethod
    def new_game(
        cls,
        mode: GameMode = GameMode.PVP,
        players: Optional[dict[Color, str]] = None,
        starting_board: Optional[str] = None,
    ) -> Self:
        """To start a new game. White moves first."""
        board = (
            Board.from_notation(starting_board)
            if starting_board
            else create_initial_board()
        )
        game = cls(
            board=board,
            turn=Color.WHITE,
            must_capture_from=None,
            mode=mode,
            status=Status.IN_PROGRESS,
            players=dict(players or {}),
        )
        # a custom starting board may already be decided
        game._update_game_status()
        return game

    @property
    def winner(self) -> Optional[Winner]:
        if self.status == Status.DRAW:
            return DRAW
        return next(
            (color for color, status in WINNING_STATUS.items() if status == self.status),
            None,
        )

    def legal_moves(self, color: Color) -> list[Move]:
        """
        Service will request the set of legal moves.
        ----

        1. Check the game is still going and that it is your turn
        2. Yes? Generate the legal moves (locked to a single piece in the middle of a capture chain)
        """
        self._assert_in_progress()
        self._assert_your_turn(color)
        return self._generate_legal_moves()

    def make_move(self, move: Move, color: Color) -> MoveResult:
        """
        Attempt to make a single move step
        -----

        1. check the move is legal. Moves are matched on their squares, so a Move parsed from notation works too.
        2. store the turn state before the move (for undo)
        3. apply the move on the board
        4. keep the piece locked if the chain continues, else hand over the turn
        5. update game status (if needed)
        """
        self._assert_in_progress()
        self._assert_your_turn(color)

        legal_move = next(
            (legal for legal in self._generate_legal_moves() if legal.key == move.key),
            None,
        )
        if legal_move is None:
            raise IllegalMoveError(f"Move not allowed: {move.to_notation()}")

        self.history.append(HistoryEntry(self.board, self.turn, self.must_capture_from))
        result = apply_move(self.board, legal_move)

        self.board = result.board
        self.must_capture_from = result.must_capture_from
        if result.turn_ended:
            self.turn = self.turn.opponent
        self.moves.append(legal_move.to_notation())

        self._update_game_status()
        return result

    def play_ai_turn(self, ai: DamaAI) -> Optional[MoveResult]:
        """
        Let the computer play ONE move step for the side to move.
        While the returned result says the turn continues, call again to finish the capture chain.
        """
        self._assert_in_progress()
        move = ai.choose_move(self.board, self.turn, self.must_capture_from)
        if move is None:
            # no legal move: the side to move loses
            self._end_game(WINNING_STATUS[self.turn.opponent])
            return None
        return self.make_move(move, self.turn)

    def undo(self) -> None:
        """
        Take back the last move step.
        ----

        Against the computer, keep taking back steps until it is the start of one of the human's turns:
        the computer's replies and all steps of the human's last capture chain are undone together.
        """
        if not self.history:
            raise NothingToUndoError("No moves to undo.")

        target = self.history.pop()
        if self.mode == GameMode.PVE:
            while self.history and (
                target.turn == AI_COLOR or target.must_capture_from is not None
            ):
                target = self.history.pop()

        self.board = target.board
        self.turn = target.turn
        self.must_capture_from = target.must_capture_from
        self.moves = self.moves[: len(self.history)]
        self.status = Status.IN_PROGRESS
        logger.info("Undo: back to %s to move (%d steps played)", self.turn, len(self.moves))

    # -- PRIVATE HELPERS ---
    def _generate_legal_moves(self) -> list[Move]:
        return get_valid_moves_for_player(self.board, self.turn, self.must_capture_from)

    def _assert_in_progress(self) -> None:
        if self.status != Status.IN_PROGRESS:
            raise GameStateError(f"Game is not in progress. status: {self.status}")

    def _assert_your_turn(self, color: Color) -> None:
        """You must wait for your turn before calculating legal moves / making a move."""
        if color != self.turn:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for {self.turn} to make a move first."
            )

    def _update_game_status(self) -> None:
        """
        Performs checks to see if game has ended and changes status accordingly.

        1. one side has no pieces left
        2. the side to move has no legal moves left (it loses)
        """
        winner = check_winner(self.board)
        if winner == DRAW:
            self._end_game(Status.DRAW)
        elif winner is not None:
            self._end_game(WINNING_STATUS[Color(winner)])
        elif not self._generate_legal_moves():
            self._end_game(WINNING_STATUS[self.turn.opponent])

    def _end_game(self, status: Status) -> None:
        self.status = status
        self.must_capture_from = None
        logger.info("Game over: %s after %d steps", status, len(self.moves))


def _parse_square(square: Optional[str]) -> Optional[Position]:
    return Position.from_algebraic(square) if square else None


def _square_name(position: Optional[Position]) -> Optional[str]:
    return position.to_algebraic() if position is not None else None
