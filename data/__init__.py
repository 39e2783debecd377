"""Board data loading utilities for the Scotland Yard rules engine."""

from .loader import (
    BoardLoader,
    load_board,
    load_default_board,
    get_board_stats,
)

__all__ = [
    "BoardLoader",
    "load_board",
    "load_default_board",
    "get_board_stats",
]
