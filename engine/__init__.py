"""Game engine for the Scotland Yard rules engine.

This module provides the game logic including:
- Legal move generation for Mr X and the detectives
- Win condition evaluation
- The immutable game state and its transition function
- An observable model for drivers and user interfaces
"""

from .moves import (
    make_single_moves,
    make_double_moves,
    make_moves,
)

from .winner import determine_winner

from .game_state import GameState, build_game_state

from .model import Model, Observer, Event

from .setup import initialize_game, deal_start_locations

__all__ = [
    # Move generation
    "make_single_moves",
    "make_double_moves",
    "make_moves",
    # Win evaluation
    "determine_winner",
    # Game state
    "GameState",
    "build_game_state",
    # Model
    "Model",
    "Observer",
    "Event",
    # Setup
    "initialize_game",
    "deal_start_locations",
]
