"""
Orchestration of communication from API layer to business logic (and the reverse direction).

The service is stateless: every request carries the snapshot of the game it is about, and every response
hands back the updated snapshot. Storing or transmitting snapshots is up to the caller.
"""

import logging
from typing import Optional

from src.api.models import (
    AiMoveRequest,
    BoardGrid,
    GameResponse,
    GameSnapshot,
    HistorySchema,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    MoveResultSchema,
    MoveSchema,
    NewGameRequest,
    PieceSchema,
    PositionSchema,
    UndoRequest,
)
from src.core.log_setup import setup_logging
from src.core.models import GameModel, HistoryModel
from src.dama.ai import DamaAI
from src.dama.board import Board
from src.dama.game import Game
from src.dama.moves import Move
from src.dama.pieces import Piece
from src.dama.position import Position
from src.dama.rules import MoveResult

logger = logging.getLogger(__name__)


class DamaService:
    """Orchestration of layers for a dama game."""

    def __init__(self, ai_depth: Optional[int] = None) -> None:
        # the service is what hosts construct: install the package log handler (level from the settings)
        setup_logging()
        # None: use the search depth from the settings
        self.ai_depth = ai_depth

    # -- API routes logic ---
    def create_new_game(self, request: NewGameRequest) -> GameResponse:
        """Start a game from the standard layout (or from a custom board)."""
        game = Game.new_game(
            mode=request.mode,
            players=request.players,
            starting_board=request.starting_board,
        )
        logger.info("New %s game created", game.mode)
        return self._create_game_response(game)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """retrieve set of legal moves."""
        game = self._restore_game(request.game)
        legal_moves = game.legal_moves(request.color)
        return LegalMovesResponse(
            color=request.color,
            must_capture_from=_optional_position_schema(game.must_capture_from),
            legal_moves=[_move_schema(move) for move in legal_moves],
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt (a single step: one hop of a capture chain, or a plain move)."""
        game = self._restore_game(request.game)
        move = Move(_position(request.from_pos), _position(request.to_pos))
        result = game.make_move(move, request.color)
        return self._create_game_response(game, result)

    def ai_move(self, request: AiMoveRequest) -> GameResponse:
        """
        Let the computer play one step for the side to move.
        If the response says the turn did not end, the caller asks again to continue the capture chain.
        """
        game = self._restore_game(request.game)
        depth = request.depth if request.depth is not None else self.ai_depth
        ai = DamaAI(depth=depth, seed=request.seed)
        result = game.play_ai_turn(ai)
        if result is None:
            logger.info("AI (%s) has no legal move left", game.turn)
        return self._create_game_response(game, result)

    def undo(self, request: UndoRequest) -> GameResponse:
        """Take back the last step (or, against the computer, the last full exchange)."""
        game = self._restore_game(request.game)
        game.undo()
        return self._create_game_response(game)

    # -- Internal helpers --
    def _restore_game(self, snapshot: GameSnapshot) -> Game:
        return Game.from_model(_snapshot_to_model(snapshot))

    def _create_game_response(
        self, game: Game, result: Optional[MoveResult] = None
    ) -> GameResponse:
        """Convert the Game to a GameResponse (with the outcome of the step just played, if any)."""
        return GameResponse(
            game=_model_to_snapshot(game.to_model()),
            winner=str(game.winner) if game.winner is not None else None,
            last_move=game.moves[-1] if result is not None else None,
            result=_result_schema(result) if result is not None else None,
        )


# --- CONVERSIONS BETWEEN WIRE SCHEMAS AND DOMAIN / TRANSPORT MODELS ---
def _position(schema: PositionSchema) -> Position:
    return Position(schema.row, schema.col)


def _position_schema(position: Position) -> PositionSchema:
    return PositionSchema(row=position.row, col=position.col)


def _optional_position_schema(position: Optional[Position]) -> Optional[PositionSchema]:
    return _position_schema(position) if position is not None else None


def _square_name(schema: Optional[PositionSchema]) -> Optional[str]:
    return _position(schema).to_algebraic() if schema is not None else None


def _square_schema(square: Optional[str]) -> Optional[PositionSchema]:
    return _position_schema(Position.from_algebraic(square)) if square else None


def _move_schema(move: Move) -> MoveSchema:
    return MoveSchema(
        from_pos=_position_schema(move.from_pos),
        to_pos=_position_schema(move.to_pos),
        captures=[_position_schema(captured) for captured in move.captures],
        is_promotion=move.is_promotion,
    )


def _result_schema(result: MoveResult) -> MoveResultSchema:
    return MoveResultSchema(
        turn_ended=result.turn_ended,
        must_capture_from=_optional_position_schema(result.must_capture_from),
        promoted=result.promoted,
        captured=result.captured,
    )


def _grid_to_notation(grid: BoardGrid) -> str:
    rows = [
        [
            Piece(cell.color, cell.is_king) if cell is not None else None
            for cell in cells
        ]
        for cells in grid
    ]
    return Board.from_rows(rows).to_notation()


def _notation_to_grid(notation: str) -> BoardGrid:
    return [
        [
            PieceSchema(color=piece.color, is_king=piece.is_king)
            if piece is not None
            else None
            for piece in cells
        ]
        for cells in Board.from_notation(notation).to_rows()
    ]


def _snapshot_to_model(snapshot: GameSnapshot) -> GameModel:
    return GameModel(
        board=_grid_to_notation(snapshot.board),
        turn=snapshot.turn.value,
        must_capture_from=_square_name(snapshot.must_capture_from),
        mode=snapshot.game_mode.value,
        status=snapshot.status.value,
        players={color.value: name for color, name in snapshot.players.items()},
        moves=list(snapshot.moves),
        history=[
            HistoryModel(
                board=_grid_to_notation(entry.board),
                turn=entry.turn.value,
                must_capture_from=_square_name(entry.must_capture_from),
            )
            for entry in snapshot.history
        ],
    )


def _model_to_snapshot(model: GameModel) -> GameSnapshot:
    return GameSnapshot(
        board=_notation_to_grid(model.board),
        turn=model.turn,
        must_capture_from=_square_schema(model.must_capture_from),
        game_mode=model.mode,
        status=model.status,
        players=model.players,
        moves=model.moves,
        history=[
            HistorySchema(
                board=_notation_to_grid(entry.board),
                turn=entry.turn,
                must_capture_from=_square_schema(entry.must_capture_from),
            )
            for entry in model.history
        ],
    )
