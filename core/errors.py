"""Exception hierarchy for the Scotland Yard rules engine.

Every error raised by the engine derives from ScotlandYardError so callers
can catch the whole family at once. The two rule errors also derive from
ValueError, matching the engine's use of ValueError for rule violations.

Usage:
    from core.errors import IllegalMoveError

    try:
        state = state.advance(move)
    except IllegalMoveError as e:
        print(f"Rejected: {e}")
"""


class ScotlandYardError(Exception):
    """Base exception for all engine errors."""


class InvalidConfigurationError(ScotlandYardError, ValueError):
    """Raised when a game state would violate a construction invariant.

    The input must be fixed; retrying with it will fail again.
    """


class IllegalMoveError(ScotlandYardError, ValueError):
    """Raised when a move is submitted that is not currently legal.

    The state the move was submitted to is left untouched.
    """

    def __init__(self, move: object):
        super().__init__(f"Illegal move: {move}")
        self.move = move


class BoardLoadError(ScotlandYardError):
    """Raised when board loading or validation fails."""
