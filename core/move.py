"""Moves and travel log entries.

A move is either a SingleMove (one edge, one ticket) or a DoubleMove
(two Mr X legs authorised by a double ticket). Both are immutable and
hashable, so a set of legal moves deduplicates identical moves.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .board import NodeId
from .constants import Piece, Ticket


@dataclass(frozen=True)
class SingleMove:
    """A single-edge move.

    Attributes:
        commenced_by: The piece making the move.
        source: Node the piece leaves.
        ticket: Ticket spent.
        destination: Node the piece arrives on.
    """

    commenced_by: Piece
    source: NodeId
    ticket: Ticket
    destination: NodeId

    def tickets(self) -> tuple[Ticket, ...]:
        return (self.ticket,)

    def __str__(self) -> str:
        return f"{self.commenced_by.name}: {self.source} -{self.ticket.value}-> {self.destination}"


@dataclass(frozen=True)
class DoubleMove:
    """Two consecutive Mr X legs taken in one turn.

    Attributes:
        commenced_by: Always Piece.MRX.
        source: Node Mr X leaves.
        ticket1: Ticket spent on the first leg.
        destination1: Intermediate node.
        ticket2: Ticket spent on the second leg.
        destination2: Final node.
    """

    commenced_by: Piece
    source: NodeId
    ticket1: Ticket
    destination1: NodeId
    ticket2: Ticket
    destination2: NodeId

    def tickets(self) -> tuple[Ticket, ...]:
        """All tickets consumed, including the double ticket itself."""
        return (self.ticket1, self.ticket2, Ticket.DOUBLE)

    def __str__(self) -> str:
        return (
            f"{self.commenced_by.name}: {self.source} -{self.ticket1.value}-> "
            f"{self.destination1} -{self.ticket2.value}-> {self.destination2}"
        )


Move = Union[SingleMove, DoubleMove]


def final_destination(move: Move) -> NodeId:
    """Return where the moving piece ends up."""
    if isinstance(move, DoubleMove):
        return move.destination2
    return move.destination


def legs(move: Move) -> list[tuple[Ticket, NodeId]]:
    """Return the (ticket, destination) pair of each leg, in order."""
    if isinstance(move, DoubleMove):
        return [(move.ticket1, move.destination1), (move.ticket2, move.destination2)]
    return [(move.ticket, move.destination)]


@dataclass(frozen=True)
class LogEntry:
    """One leg of Mr X's travel log.

    The location is only recorded on reveal rounds.
    """

    ticket: Ticket
    location: Optional[NodeId] = None

    @classmethod
    def reveal(cls, ticket: Ticket, location: NodeId) -> LogEntry:
        return cls(ticket=ticket, location=location)

    @classmethod
    def hidden(cls, ticket: Ticket) -> LogEntry:
        return cls(ticket=ticket)

    @property
    def is_revealed(self) -> bool:
        return self.location is not None

    def __str__(self) -> str:
        where = self.location if self.is_revealed else "?"
        return f"{self.ticket.value} -> {where}"
