"""Immutable game setup: the board and Mr X's reveal schedule."""

from __future__ import annotations

from dataclasses import dataclass

from .board import TransportGraph
from .constants import standard_rounds


@dataclass(frozen=True)
class GameSetup:
    """Board and round schedule, fixed for the game's lifetime.

    Attributes:
        graph: The transport graph.
        rounds: One flag per round; True means Mr X's move that round is
            revealed. Its length is the maximum number of Mr X log entries.
    """

    graph: TransportGraph
    rounds: tuple[bool, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "rounds", tuple(self.rounds))

    @classmethod
    def standard(cls, graph: TransportGraph) -> GameSetup:
        """Setup using the standard 24 round schedule."""
        return cls(graph=graph, rounds=standard_rounds())

    def is_reveal_round(self, round_idx: int) -> bool:
        """Check the reveal flag of a 0-based round index."""
        return self.rounds[round_idx]
