"""
Custom errors raised at the edges of the domain layer.

The rules engine itself never raises for well-formed input. These errors are raised by the Game host,
the board notation parser and the request validators, and propagate up to whoever called the Service.
"""


class DamaError(Exception):
    """Base class for all errors raised by this package."""


class GameStateError(DamaError):
    """The game is not in a state that allows the requested action (ex. it has already finished)."""


class NotYourTurnError(DamaError):
    """A player attempted to act while the opponent is to move."""


class IllegalMoveError(DamaError):
    """The move is not part of the current set of legal moves."""


class NothingToUndoError(DamaError):
    """Undo requested on a game without any recorded history."""


class InvalidBoardError(DamaError):
    """Board notation / grid could not be parsed into a valid board."""


class InvalidRequestError(DamaError):
    """
    Incoming request data is malformed.

    NOTE: not a ValueError, so when raised inside a pydantic validator it propagates as is
    instead of being folded into a pydantic ValidationError.
    """
