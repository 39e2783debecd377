"""Legal move generation.

Single moves follow the board edges a piece holds tickets for and never
land on a detective. Mr X may additionally spend a secret ticket on any
edge, and chain two single moves into a double move while he holds a
double ticket and at least two rounds remain.
"""

from __future__ import annotations

import logging
from typing import Iterable

from core.board import NodeId
from core.constants import Piece, Ticket
from core.game_setup import GameSetup
from core.move import DoubleMove, LogEntry, Move, SingleMove
from core.player import Player

logger = logging.getLogger(__name__)


def make_single_moves(
    setup: GameSetup,
    detectives: Iterable[Player],
    player: Player,
    source: NodeId,
) -> frozenset[SingleMove]:
    """Return every single move ``player`` could make from ``source``.

    Args:
        setup: Game setup providing the board.
        detectives: All detectives; their locations block destinations.
        player: The piece moving (its tickets decide what is affordable).
        source: Node to move from. Differs from ``player.location`` for the
            second leg of a double move.

    Returns:
        Set of legal single moves.
    """
    occupied = {d.location for d in detectives}
    moves: set[SingleMove] = set()

    for destination in setup.graph.adjacent_nodes(source):
        if destination in occupied:
            continue

        for transport in setup.graph.transports_between(source, destination):
            ticket = transport.required_ticket
            if player.has(ticket):
                moves.add(SingleMove(player.piece, source, ticket, destination))

        # A secret ticket works on any edge, whatever its transports
        if player.is_mrx and player.has(Ticket.SECRET):
            moves.add(SingleMove(player.piece, source, Ticket.SECRET, destination))

    return frozenset(moves)


def make_double_moves(
    setup: GameSetup,
    detectives: Iterable[Player],
    mrx: Player,
    first_legs: Iterable[SingleMove],
) -> frozenset[DoubleMove]:
    """Chain each first leg with every single move from its destination.

    Two legs on the same ticket kind need two tickets of that kind.
    """
    detectives = list(detectives)
    moves: set[DoubleMove] = set()

    for first in first_legs:
        for second in make_single_moves(setup, detectives, mrx, first.destination):
            if first.ticket != second.ticket or mrx.has_at_least(first.ticket, 2):
                moves.add(DoubleMove(
                    mrx.piece,
                    mrx.location,
                    first.ticket,
                    first.destination,
                    second.ticket,
                    second.destination,
                ))

    return frozenset(moves)


def make_moves(
    setup: GameSetup,
    mrx: Player,
    detectives: list[Player],
    remaining: frozenset[Piece],
    log: tuple[LogEntry, ...],
) -> frozenset[Move]:
    """Return every legal move for the side whose turn it is.

    On Mr X's turn this is his single moves plus, when allowed, his double
    moves. On the detectives' turn it is the union of the single moves of
    every detective still in ``remaining``.
    """
    moves: set[Move] = set()

    if mrx.piece in remaining:
        single_moves = make_single_moves(setup, detectives, mrx, mrx.location)
        moves.update(single_moves)

        rounds_left = len(setup.rounds) - len(log)
        if mrx.has(Ticket.DOUBLE) and rounds_left >= 2:
            moves.update(make_double_moves(setup, detectives, mrx, single_moves))
    else:
        for detective in detectives:
            # Detectives that already moved this round have nothing left to do
            if detective.piece not in remaining:
                continue
            moves.update(make_single_moves(setup, detectives, detective, detective.location))

    logger.debug("Generated %d moves for %s", len(moves), sorted(p.name for p in remaining))
    return frozenset(moves)
