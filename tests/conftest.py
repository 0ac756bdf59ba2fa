"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Iterator

import pytest

from src.core.config import get_settings
from src.dama.board import Board
from src.dama.pieces import Piece
from src.dama.position import Position

BoardFactory = Callable[[dict[tuple[int, int], str]], Board]


@pytest.fixture
def board_from_pieces() -> BoardFactory:
    """
    Build a Board straight from {(row, col): piece character}.
    Bypasses the notation parser, so pieces may stand on any square.
    """

    def _create_board(pieces: dict[tuple[int, int], str]) -> Board:
        return Board(
            {
                Position(row, col): Piece.from_notation(character)
                for (row, col), character in pieces.items()
            }
        )

    return _create_board


@pytest.fixture(autouse=True)
def fresh_settings() -> Iterator[None]:
    """Settings are cached per process. Clear the cache so env overrides never leak between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
