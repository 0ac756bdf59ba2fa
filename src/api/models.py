"""
Requests and Response models

The wire shapes mirror the in-memory shapes of the game: positions are {row, col}, pieces are {color, isKing},
the board is an 8x8 grid of pieces or nulls, and a move is {from, to, captures, isPromotion}.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, GameMode, Status

BOARD_SIZE = 8

PlayerName = str


class WireModel(BaseModel):
    """Accept both the camelCase wire names and the python field names"""

    model_config = ConfigDict(populate_by_name=True)


class PositionSchema(WireModel):
    row: int
    col: int

    @model_validator(mode="after")
    def validate_dark_square(self) -> "PositionSchema":
        on_board = 0 <= self.row < BOARD_SIZE and 0 <= self.col < BOARD_SIZE
        if not on_board or (self.row + self.col) % 2 == 0:
            raise InvalidRequestError(
                f"({self.row}, {self.col}) is not a playable square of the board."
            )
        return self


class PieceSchema(WireModel):
    color: Color
    is_king: bool = Field(default=False, alias="isKing")


BoardGrid = list[list[Optional[PieceSchema]]]


def _validate_grid(value: BoardGrid) -> BoardGrid:
    if len(value) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in value):
        raise InvalidRequestError(
            f"Board must be a {BOARD_SIZE}x{BOARD_SIZE} grid of pieces or nulls."
        )
    return value


class MoveSchema(WireModel):
    from_pos: PositionSchema = Field(alias="from")
    to_pos: PositionSchema = Field(alias="to")
    captures: list[PositionSchema] = Field(default_factory=list)
    is_promotion: bool = Field(default=False, alias="isPromotion")


class HistorySchema(WireModel):
    board: BoardGrid
    turn: Color
    must_capture_from: Optional[PositionSchema] = Field(
        default=None, alias="mustCaptureFrom"
    )

    @field_validator("board")
    @classmethod
    def validate_board(cls, value: BoardGrid) -> BoardGrid:
        return _validate_grid(value)


class GameSnapshot(WireModel):
    """Everything needed to pick up a game where it was left"""

    board: BoardGrid
    turn: Color
    must_capture_from: Optional[PositionSchema] = Field(
        default=None, alias="mustCaptureFrom"
    )
    game_mode: GameMode = Field(default=GameMode.PVP, alias="gameMode")
    status: Status = Status.IN_PROGRESS
    players: dict[Color, PlayerName] = Field(default_factory=dict)
    moves: list[str] = Field(default_factory=list)
    history: list[HistorySchema] = Field(default_factory=list)

    @field_validator("board")
    @classmethod
    def validate_board(cls, value: BoardGrid) -> BoardGrid:
        return _validate_grid(value)


# --- REQUEST MODELS ---
class NewGameRequest(WireModel):
    mode: GameMode = GameMode.PVP
    players: dict[Color, PlayerName] = Field(default_factory=dict)
    starting_board: Optional[str] = Field(default=None, alias="startingBoard")

    @field_validator("starting_board")
    @classmethod
    def validate_starting_board(cls, value: Optional[str]) -> Optional[str]:
        """Only the structure is checked here. The board itself parses the squares."""
        if value is None:
            return value

        rows = value.strip().split("/")
        if len(rows) != BOARD_SIZE:
            raise InvalidRequestError(
                f"Board notation must contain {BOARD_SIZE} slash-separated rows."
            )
        return value


class LegalMovesRequest(WireModel):
    game: GameSnapshot
    color: Color


class MoveRequest(WireModel):
    game: GameSnapshot
    color: Color
    from_pos: PositionSchema = Field(alias="from")
    to_pos: PositionSchema = Field(alias="to")


class AiMoveRequest(WireModel):
    game: GameSnapshot
    depth: Optional[int] = Field(default=None, ge=1, le=6)
    seed: Optional[int] = None


class UndoRequest(WireModel):
    game: GameSnapshot


# --- RESPONSE MODELS ---
class MoveResultSchema(WireModel):
    turn_ended: bool = Field(alias="turnEnded")
    must_capture_from: Optional[PositionSchema] = Field(
        default=None, alias="mustCaptureFrom"
    )
    promoted: bool
    captured: bool


class LegalMovesResponse(WireModel):
    color: Color
    must_capture_from: Optional[PositionSchema] = Field(
        default=None, alias="mustCaptureFrom"
    )
    legal_moves: list[MoveSchema] = Field(alias="legalMoves")


class GameResponse(WireModel):
    game: GameSnapshot
    winner: Optional[str] = None
    last_move: Optional[str] = Field(default=None, alias="lastMove")
    result: Optional[MoveResultSchema] = None
