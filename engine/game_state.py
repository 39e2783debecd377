"""Game state for the Scotland Yard rules engine.

GameState is an immutable snapshot of a game in progress. Each state is
fully resolved when it is built:

    validate -> generate legal moves -> evaluate winner -> clear moves if won

and is never recomputed afterwards. advance() derives the next state from
the current one plus a chosen move, leaving the current state untouched so
earlier snapshots stay valid.
"""

from __future__ import annotations

import hashlib
import json
import logging
from typing import Any, Iterable, Optional

from core.board import NodeId
from core.constants import FORBIDDEN_DETECTIVE_TICKETS, Piece
from core.errors import IllegalMoveError, InvalidConfigurationError
from core.game_setup import GameSetup
from core.move import LogEntry, Move, final_destination, legs
from core.player import Player, TicketBoard

from .moves import make_moves, make_single_moves
from .winner import determine_winner

logger = logging.getLogger(__name__)


class GameState:
    """A point-in-time game, with its legal moves and winner resolved.

    Attributes are read-only; use advance() to obtain the next state.
    """

    __slots__ = (
        "_setup",
        "_remaining",
        "_log",
        "_mrx",
        "_detectives",
        "_moves",
        "_winner",
    )

    def __init__(
        self,
        setup: GameSetup,
        remaining: Iterable[Piece],
        log: Iterable[LogEntry],
        mrx: Player,
        detectives: Iterable[Player],
    ):
        """Build and fully resolve a state.

        Raises:
            InvalidConfigurationError: If any construction invariant is violated.
        """
        remaining = frozenset(remaining)
        log = tuple(log)
        detectives = list(detectives) if detectives is not None else []

        _check_parameters(setup, remaining, log, mrx, detectives)

        self._setup = setup
        self._remaining = remaining
        self._log = log
        self._mrx = mrx
        self._detectives = tuple(detectives)

        moves = make_moves(setup, mrx, detectives, remaining, log)
        self._winner = determine_winner(setup, mrx, detectives, remaining, log, moves)
        self._moves = frozenset() if self._winner else moves

    # -------------------------------------------------------------------------
    # Board queries
    # -------------------------------------------------------------------------

    @property
    def setup(self) -> GameSetup:
        return self._setup

    @property
    def players(self) -> frozenset[Piece]:
        """All pieces in the game, Mr X included."""
        return frozenset([self._mrx.piece, *(d.piece for d in self._detectives)])

    @property
    def mrx(self) -> Player:
        return self._mrx

    @property
    def detectives(self) -> tuple[Player, ...]:
        return self._detectives

    @property
    def remaining(self) -> frozenset[Piece]:
        """Pieces still entitled to act this round."""
        return self._remaining

    @property
    def mrx_travel_log(self) -> tuple[LogEntry, ...]:
        return self._log

    @property
    def winner(self) -> frozenset[Piece]:
        """Winning pieces; empty while the game goes on."""
        return self._winner

    @property
    def available_moves(self) -> frozenset[Move]:
        """Legal moves; always empty once there is a winner."""
        return self._moves

    def get_detective_location(self, piece: Piece) -> Optional[NodeId]:
        """Get a detective's location, or None for Mr X or an absent piece."""
        for detective in self._detectives:
            if detective.piece is piece:
                return detective.location
        return None

    def get_player_tickets(self, piece: Piece) -> Optional[TicketBoard]:
        """Get a piece's ticket counts, or None if the piece is not in play."""
        player = self._find_player(piece)
        return player.ticket_board() if player is not None else None

    def get_player(self, piece: Piece) -> Optional[Player]:
        return self._find_player(piece)

    def is_mrx_turn(self) -> bool:
        return self._mrx.piece in self._remaining

    def is_game_over(self) -> bool:
        return bool(self._winner)

    def current_round(self) -> int:
        """1-based number of the round being played."""
        return len(self._log) + (1 if self.is_mrx_turn() else 0)

    def _find_player(self, piece: Piece) -> Optional[Player]:
        if self._mrx.piece is piece:
            return self._mrx
        for detective in self._detectives:
            if detective.piece is piece:
                return detective
        return None

    # -------------------------------------------------------------------------
    # Transition
    # -------------------------------------------------------------------------

    def advance(self, move: Move) -> GameState:
        """Apply a legal move and return the resulting state.

        Args:
            move: One of ``available_moves``.

        Returns:
            The next state. This state is not modified.

        Raises:
            IllegalMoveError: If the move is not currently legal (including
                any move submitted once the game is over).
        """
        if move not in self._moves:
            raise IllegalMoveError(move)

        remaining = set(self._remaining)
        remaining.discard(move.commenced_by)
        log = self._log
        mrx = self._mrx
        detectives = list(self._detectives)

        if move.commenced_by.is_mrx:
            mrx = mrx.at(final_destination(move)).use(move.tickets())
            log = self._append_to_log(log, move)

            # Detectives without tickets can never move again
            remaining.update(d.piece for d in detectives if d.has_any_tickets())
        else:
            for i, detective in enumerate(detectives):
                if detective.piece is move.commenced_by:
                    detectives[i] = detective.at(final_destination(move)).use(move.tickets())
                    mrx = mrx.give(move.tickets())
                    break

            # Detectives left without a move sit out the rest of the round
            remaining = {
                piece for piece in remaining
                if self._can_move(piece, detectives)
            }
            if not remaining:
                remaining.add(mrx.piece)

        logger.debug("Applied %s; remaining %s", move, sorted(p.name for p in remaining))
        next_state = GameState(self._setup, remaining, log, mrx, detectives)
        if next_state.winner:
            logger.info("Game over: %s win", sorted(p.name for p in next_state.winner))
        return next_state

    def _append_to_log(self, log: tuple[LogEntry, ...], move: Move) -> tuple[LogEntry, ...]:
        """Append one entry per leg; the round index is the log length so far."""
        entries = list(log)
        for ticket, destination in legs(move):
            if self._setup.is_reveal_round(len(entries)):
                entries.append(LogEntry.reveal(ticket, destination))
            else:
                entries.append(LogEntry.hidden(ticket))
        return tuple(entries)

    def _can_move(self, piece: Piece, detectives: list[Player]) -> bool:
        for detective in detectives:
            if detective.piece is piece:
                return bool(make_single_moves(
                    self._setup, detectives, detective, detective.location
                ))
        return False

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize the game state to a dictionary.

        Returns:
            Dictionary representation of the game state (topology excluded).
        """
        return {
            "rounds": list(self._setup.rounds),
            "remaining": sorted(p.name for p in self._remaining),
            "log": [
                {"ticket": entry.ticket.value, "location": entry.location}
                for entry in self._log
            ],
            "players": [
                {
                    "piece": player.piece.name,
                    "location": player.location,
                    "tickets": {t.value: n for t, n in player.tickets.items()},
                }
                for player in (self._mrx, *self._detectives)
            ],
            "winner": sorted(p.name for p in self._winner),
            "moves": sorted(str(m) for m in self._moves),
        }

    def state_hash(self) -> str:
        """Compute a hash of the game state.

        Returns:
            A hex string hash of the serialized state.
        """
        state_json = json.dumps(self.to_dict(), sort_keys=True)
        return hashlib.sha256(state_json.encode()).hexdigest()

    def __str__(self) -> str:
        """Return a human-readable string representation."""
        lines = [
            f"GameState(round={self.current_round()}/{len(self._setup.rounds)}, "
            f"log={len(self._log)}, winner={sorted(p.name for p in self._winner)})",
            f"  {self._mrx}",
        ]
        for detective in self._detectives:
            marker = "" if detective.piece in self._remaining else " [done]"
            lines.append(f"  {detective}{marker}")
        lines.append(f"  Legal moves: {len(self._moves)}")
        return "\n".join(lines)


def _check_parameters(
    setup: Optional[GameSetup],
    remaining: frozenset[Piece],
    log: tuple[LogEntry, ...],
    mrx: Optional[Player],
    detectives: list[Optional[Player]],
) -> None:
    """Raise InvalidConfigurationError on the first violated invariant."""
    if setup is None:
        raise InvalidConfigurationError("Setup is missing")
    if not setup.rounds:
        raise InvalidConfigurationError("Rounds is empty")
    if setup.graph.is_empty():
        raise InvalidConfigurationError("Graph is empty")
    if mrx is None:
        raise InvalidConfigurationError("Mr X is missing")
    if not mrx.is_mrx:
        raise InvalidConfigurationError("Mr X must be the black piece")
    if not detectives:
        raise InvalidConfigurationError("Detectives is empty")

    seen_pieces: set[Piece] = set()
    seen_locations: set[NodeId] = set()
    for detective in detectives:
        if detective is None:
            raise InvalidConfigurationError("One or more detectives are missing")
        if detective.is_mrx:
            raise InvalidConfigurationError("There can only be one Mr X")
        for ticket in FORBIDDEN_DETECTIVE_TICKETS:
            if detective.has(ticket):
                raise InvalidConfigurationError(
                    f"Detective {detective.piece.name} holds a {ticket.value} ticket"
                )
        if detective.piece in seen_pieces:
            raise InvalidConfigurationError(f"Duplicate detective {detective.piece.name}")
        if detective.location in seen_locations:
            raise InvalidConfigurationError(
                f"Two detectives share location {detective.location}"
            )
        seen_pieces.add(detective.piece)
        seen_locations.add(detective.location)

    if not remaining:
        raise InvalidConfigurationError("No piece is left to move")
    unknown = remaining - seen_pieces - {mrx.piece}
    if unknown:
        raise InvalidConfigurationError(
            f"Remaining contains pieces not in play: {sorted(p.name for p in unknown)}"
        )
    if len(log) > len(setup.rounds):
        raise InvalidConfigurationError("Travel log is longer than the game allows")


def build_game_state(
    setup: GameSetup,
    mrx: Player,
    detectives: Iterable[Player],
) -> GameState:
    """Create the opening state: Mr X to move, empty travel log."""
    if mrx is None:
        raise InvalidConfigurationError("Mr X is missing")
    return GameState(setup, {mrx.piece}, (), mrx, detectives)
