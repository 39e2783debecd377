"""Initial game setup for the Scotland Yard rules engine.

Handles what happens once before the first move:
1. Deal distinct start locations (Mr X and detectives never share one)
2. Hand out starting tickets from the configuration
3. Build the observable model holding the opening state
"""

from __future__ import annotations

import logging
import random
from typing import Optional, Sequence

from core.board import NodeId, TransportGraph
from core.config import GameConfig
from core.constants import (
    DETECTIVE_PIECES,
    DETECTIVE_START_LOCATIONS,
    MRX_START_LOCATIONS,
    Piece,
)
from core.errors import InvalidConfigurationError
from core.game_setup import GameSetup
from core.player import Player

from .model import Model

logger = logging.getLogger(__name__)


def _start_pool(graph: TransportGraph, preferred: Sequence[NodeId], needed: int) -> list[NodeId]:
    """Return the preferred start nodes present on the board.

    Falls back to every board node when the board is too small or does not
    use the standard numbering.
    """
    pool = [node_id for node_id in preferred if graph.has_node(node_id)]
    if len(pool) < needed:
        pool = sorted(graph.nodes())
    return pool


def deal_start_locations(
    graph: TransportGraph,
    num_detectives: int,
    rng: random.Random,
) -> tuple[NodeId, list[NodeId]]:
    """Pick Mr X's start node and one distinct start node per detective.

    Raises:
        InvalidConfigurationError: If the board has fewer nodes than pieces.
    """
    if len(graph.nodes()) < num_detectives + 1:
        raise InvalidConfigurationError(
            f"Board has {len(graph.nodes())} nodes, need at least {num_detectives + 1}"
        )

    detective_pool = _start_pool(graph, DETECTIVE_START_LOCATIONS, num_detectives)
    detective_locations = rng.sample(detective_pool, num_detectives)

    mrx_pool = [
        node_id for node_id in _start_pool(graph, MRX_START_LOCATIONS, 1)
        if node_id not in detective_locations
    ]
    if not mrx_pool:
        mrx_pool = sorted(graph.nodes() - set(detective_locations))
    mrx_location = rng.choice(mrx_pool)

    return mrx_location, detective_locations


def initialize_game(
    config: Optional[GameConfig] = None,
    graph: Optional[TransportGraph] = None,
    seed: Optional[int] = None,
) -> Model:
    """Set up a new game.

    Args:
        config: Game parameters. Defaults to the standard rules.
        graph: Board to play on. Defaults to the bundled board.
        seed: Seed for start location dealing, for reproducible games.

    Returns:
        A Model holding the opening state.
    """
    config = config or GameConfig()
    if graph is None:
        from data.loader import load_default_board
        graph = load_default_board()

    rng = random.Random(seed)
    mrx_location, detective_locations = deal_start_locations(
        graph, config.num_detectives, rng
    )

    mrx = Player(
        piece=Piece.MRX,
        tickets=config.tickets.mrx_tickets(config.num_detectives),
        location=mrx_location,
    )
    detectives = [
        Player(piece=piece, tickets=config.tickets.detective_tickets(), location=location)
        for piece, location in zip(DETECTIVE_PIECES, detective_locations)
    ]

    logger.info(
        "New game: %d detectives, %d rounds, Mr X at %d",
        config.num_detectives, len(config.rounds), mrx_location,
    )
    return Model(GameSetup(graph=graph, rounds=config.rounds), mrx, detectives)
