"""Observable game model.

Model wraps the immutable GameState for drivers and user interfaces: it
holds the current state, applies chosen moves, and notifies registered
observers after each transition.

Usage:
    model = Model(setup, mrx, detectives)
    model.register_observer(my_view)

    while not model.current_board.winner:
        move = pick(model.current_board.available_moves)
        model.choose_move(move)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterable

from core.game_setup import GameSetup
from core.move import Move
from core.player import Player

from .game_state import GameState, build_game_state

logger = logging.getLogger(__name__)


class Event(Enum):
    """Notifications sent to observers."""

    MOVE_MADE = "move_made"
    GAME_OVER = "game_over"


class Observer(ABC):
    """Receives model change notifications."""

    @abstractmethod
    def on_model_changed(self, board: GameState, event: Event) -> None:
        """Called once per event, after the state transition completes.

        Args:
            board: The state after the move.
            event: What happened.
        """
        pass


class Model:
    """Holds the current game state and the observers watching it.

    Not safe for concurrent choose_move() calls; drive it from one thread.
    """

    def __init__(
        self,
        setup: GameSetup,
        mrx: Player,
        detectives: Iterable[Player],
    ):
        """Initialize the model with the opening state.

        Raises:
            InvalidConfigurationError: If the players or setup are invalid.
        """
        self._state = build_game_state(setup, mrx, detectives)
        self._observers: list[Observer] = []

    @property
    def current_board(self) -> GameState:
        return self._state

    @property
    def observers(self) -> tuple[Observer, ...]:
        """Registered observers in registration order."""
        return tuple(self._observers)

    def register_observer(self, observer: Observer) -> None:
        """Add an observer.

        Raises:
            TypeError: If observer is None.
            ValueError: If the observer is already registered.
        """
        if observer is None:
            raise TypeError("Observer must not be None")
        if observer in self._observers:
            raise ValueError(f"Observer already registered: {observer!r}")
        self._observers.append(observer)

    def unregister_observer(self, observer: Observer) -> None:
        """Remove an observer.

        Raises:
            TypeError: If observer is None.
            ValueError: If the observer was never registered.
        """
        if observer is None:
            raise TypeError("Observer must not be None")
        if observer not in self._observers:
            raise ValueError(f"Observer not registered: {observer!r}")
        self._observers.remove(observer)

    def choose_move(self, move: Move) -> None:
        """Apply a move and notify observers.

        Observers get MOVE_MADE, then GAME_OVER if the move ended the game.

        Raises:
            IllegalMoveError: If the move is not legal; nobody is notified.
        """
        self._state = self._state.advance(move)
        self._notify(Event.MOVE_MADE)

        if self._state.winner:
            self._notify(Event.GAME_OVER)

    def _notify(self, event: Event) -> None:
        logger.debug("Notifying %d observers of %s", len(self._observers), event.value)
        for observer in tuple(self._observers):
            observer.on_model_changed(self._state, event)
