import pytest
from pydantic import ValidationError

from src.api.models import (
    AiMoveRequest,
    GameSnapshot,
    MoveRequest,
    MoveSchema,
    NewGameRequest,
    PositionSchema,
)
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, GameMode, Status


@pytest.fixture
def empty_grid() -> list[list[None]]:
    return [[None] * 8 for _ in range(8)]


# -- Validation - PositionSchema --
@pytest.mark.parametrize("row, col", [(0, 1), (7, 0), (4, 3)])
def test_valid_positions(row: int, col: int) -> None:
    position = PositionSchema(row=row, col=col)
    assert (position.row, position.col) == (row, col)


@pytest.mark.parametrize(
    "row, col",
    [
        (0, 0),  # light square
        (3, 3),  # light square
        (-1, 0),
        (8, 1),
        (2, 9),
    ],
)
def test_invalid_positions(row: int, col: int) -> None:
    with pytest.raises(InvalidRequestError):
        PositionSchema(row=row, col=col)


# -- Validation - NewGameRequest --
def test_starting_board_is_optional() -> None:
    request = NewGameRequest()
    assert request.starting_board is None
    assert request.mode == GameMode.PVP
    assert request.players == {}


def test_new_game_request_from_wire_names() -> None:
    notation = "7b/8/8/4b3/8/2b5/1w6/8"
    request = NewGameRequest.model_validate(
        {"mode": "pve", "players": {"white": "player_1"}, "startingBoard": notation}
    )
    assert request.mode == GameMode.PVE
    assert request.players == {Color.WHITE: "player_1"}
    assert request.starting_board == notation


@pytest.mark.parametrize(
    "invalid_board",
    [
        "8/8/8/8/8/8/8",  # 7 rows
        "8/8/8/8/8/8/8/8/8",  # 9 rows
        "",
    ],
)
def test_invalid_starting_board(invalid_board: str) -> None:
    """Structurally invalid board notation: not 8 slash-separated rows"""
    with pytest.raises(InvalidRequestError):
        NewGameRequest(starting_board=invalid_board)


def test_invalid_mode() -> None:
    with pytest.raises(ValidationError):
        NewGameRequest.model_validate({"mode": "tournament"})


# -- Validation - GameSnapshot --
def test_snapshot_defaults(empty_grid) -> None:
    snapshot = GameSnapshot(board=empty_grid, turn=Color.WHITE)
    assert snapshot.game_mode == GameMode.PVP
    assert snapshot.status == Status.IN_PROGRESS
    assert snapshot.must_capture_from is None
    assert snapshot.moves == []
    assert snapshot.history == []


def test_snapshot_wire_names(empty_grid) -> None:
    empty_grid[0][1] = {"color": "black", "isKing": True}
    snapshot = GameSnapshot.model_validate(
        {
            "board": empty_grid,
            "turn": "black",
            "mustCaptureFrom": {"row": 0, "col": 1},
            "gameMode": "pve",
            "status": "in progress",
        }
    )
    assert snapshot.board[0][1] is not None
    assert snapshot.board[0][1].is_king
    assert snapshot.must_capture_from == PositionSchema(row=0, col=1)

    dumped = snapshot.model_dump(by_alias=True, mode="json")
    assert dumped["board"][0][1] == {"color": "black", "isKing": True}
    assert dumped["mustCaptureFrom"] == {"row": 0, "col": 1}
    assert dumped["gameMode"] == "pve"


@pytest.mark.parametrize(
    "grid",
    [
        [[None] * 8 for _ in range(7)],
        [[None] * 7 for _ in range(8)],
        [],
    ],
)
def test_snapshot_invalid_grid(grid: list) -> None:
    with pytest.raises(InvalidRequestError):
        GameSnapshot(board=grid, turn=Color.WHITE)


# -- Validation - MoveSchema / MoveRequest --
def test_move_schema_wire_names() -> None:
    move = MoveSchema.model_validate(
        {
            "from": {"row": 5, "col": 2},
            "to": {"row": 3, "col": 4},
            "captures": [{"row": 4, "col": 3}],
            "isPromotion": False,
        }
    )
    assert move.from_pos == PositionSchema(row=5, col=2)
    assert move.captures == [PositionSchema(row=4, col=3)]
    assert set(move.model_dump(by_alias=True)) == {"from", "to", "captures", "isPromotion"}


def test_move_request_rejects_light_square(empty_grid) -> None:
    with pytest.raises(InvalidRequestError):
        MoveRequest.model_validate(
            {
                "game": {"board": empty_grid, "turn": "white"},
                "color": "white",
                "from": {"row": 5, "col": 2},
                "to": {"row": 4, "col": 2},
            }
        )


# -- Validation - AiMoveRequest --
@pytest.mark.parametrize("depth", [0, 7, -1])
def test_ai_depth_out_of_range(empty_grid, depth: int) -> None:
    with pytest.raises(ValidationError):
        AiMoveRequest(game=GameSnapshot(board=empty_grid, turn=Color.BLACK), depth=depth)


def test_ai_depth_and_seed_are_optional(empty_grid) -> None:
    request = AiMoveRequest(game=GameSnapshot(board=empty_grid, turn=Color.BLACK))
    assert request.depth is None
    assert request.seed is None
