"""Win condition evaluation.

Conditions are checked in a fixed priority order; the first that holds
decides the winner. The order settles ties such as a capture on the very
last round, which the detectives win.
"""

from __future__ import annotations

import logging
from typing import Iterable

from core.constants import Piece
from core.game_setup import GameSetup
from core.move import LogEntry, Move
from core.player import Player

logger = logging.getLogger(__name__)


def detective_pieces(detectives: Iterable[Player]) -> frozenset[Piece]:
    """Return the pieces of the given detectives."""
    return frozenset(d.piece for d in detectives)


def determine_winner(
    setup: GameSetup,
    mrx: Player,
    detectives: list[Player],
    remaining: frozenset[Piece],
    log: tuple[LogEntry, ...],
    moves: frozenset[Move],
) -> frozenset[Piece]:
    """Decide whether either side has already won.

    Args:
        setup: Game setup (round schedule length bounds the game).
        mrx: The Mr X player.
        detectives: All detective players.
        remaining: Pieces still to act this round.
        log: Mr X's travel log so far.
        moves: Moves generated for this state.

    Returns:
        The winning pieces, or an empty set if the game goes on.
    """
    mrx_to_move = mrx.piece in remaining

    # 1. Capture
    if any(d.location == mrx.location for d in detectives):
        winner = detective_pieces(detectives)
        reason = "capture"
    # 2. Every detective has run out of tickets
    elif not any(d.has_any_tickets() for d in detectives):
        winner = frozenset({mrx.piece})
        reason = "detectives out of tickets"
    # 3. All rounds played and the last round is complete
    elif len(log) == len(setup.rounds) and mrx_to_move:
        winner = frozenset({mrx.piece})
        reason = "rounds exhausted"
    # 4. Mr X is cornered
    elif mrx_to_move and not moves:
        winner = detective_pieces(detectives)
        reason = "mr x trapped"
    # 5. No detective can move
    elif not mrx_to_move and not any(m.commenced_by.is_detective for m in moves):
        winner = frozenset({mrx.piece})
        reason = "detectives stuck"
    else:
        return frozenset()

    logger.debug("Winner %s (%s)", sorted(p.name for p in winner), reason)
    return winner
