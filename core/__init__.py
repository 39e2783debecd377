"""Core data models for the Scotland Yard rules engine."""

from .constants import (
    Ticket,
    Transport,
    Piece,
    DETECTIVE_PIECES,
    MIN_DETECTIVES,
    MAX_DETECTIVES,
    FORBIDDEN_DETECTIVE_TICKETS,
    STANDARD_ROUND_COUNT,
    STANDARD_REVEAL_ROUNDS,
    MRX_START_LOCATIONS,
    DETECTIVE_START_LOCATIONS,
    standard_rounds,
)

from .board import (
    NodeId,
    EdgeId,
    make_edge_id,
    TransportGraph,
)

from .player import Player, TicketBoard

from .move import (
    SingleMove,
    DoubleMove,
    Move,
    LogEntry,
    final_destination,
    legs,
)

from .game_setup import GameSetup

from .config import TicketConfig, GameConfig

from .errors import (
    ScotlandYardError,
    InvalidConfigurationError,
    IllegalMoveError,
    BoardLoadError,
)

__all__ = [
    # Constants
    "Ticket",
    "Transport",
    "Piece",
    "DETECTIVE_PIECES",
    "MIN_DETECTIVES",
    "MAX_DETECTIVES",
    "FORBIDDEN_DETECTIVE_TICKETS",
    "STANDARD_ROUND_COUNT",
    "STANDARD_REVEAL_ROUNDS",
    "MRX_START_LOCATIONS",
    "DETECTIVE_START_LOCATIONS",
    "standard_rounds",
    # Board
    "NodeId",
    "EdgeId",
    "make_edge_id",
    "TransportGraph",
    # Player
    "Player",
    "TicketBoard",
    # Moves
    "SingleMove",
    "DoubleMove",
    "Move",
    "LogEntry",
    "final_destination",
    "legs",
    # Setup and configuration
    "GameSetup",
    "TicketConfig",
    "GameConfig",
    # Errors
    "ScotlandYardError",
    "InvalidConfigurationError",
    "IllegalMoveError",
    "BoardLoadError",
]
