"""Player model for the Scotland Yard rules engine.

A player is a piece standing on a location with a ticket inventory.
Players are immutable: moving or spending tickets returns a new Player,
so earlier game states never see later changes.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Iterable, Mapping

from .board import NodeId
from .constants import Piece, Ticket


@dataclass(frozen=True)
class TicketBoard:
    """Read-only view of a player's ticket counts."""

    counts: Mapping[Ticket, int]

    def __hash__(self) -> int:
        return hash(tuple(sorted((t.value, n) for t, n in self.counts.items())))

    def get_count(self, ticket: Ticket) -> int:
        """Return how many tickets of the given kind the player holds."""
        return self.counts.get(ticket, 0)


@dataclass(frozen=True)
class Player:
    """Represents a piece in play.

    Attributes:
        piece: Which piece this player controls.
        tickets: Ticket counts; missing kinds count as zero.
        location: Node the piece currently stands on.
    """

    piece: Piece
    tickets: Mapping[Ticket, int]
    location: NodeId

    def __post_init__(self) -> None:
        counts = {ticket: self.tickets.get(ticket, 0) for ticket in Ticket}
        negative = [t.value for t, n in counts.items() if n < 0]
        if negative:
            raise ValueError(f"{self.piece.name} has negative ticket counts: {negative}")
        # Bypass frozen to store a read-only copy of the inventory
        object.__setattr__(self, "tickets", MappingProxyType(counts))

    def __hash__(self) -> int:
        return hash((self.piece, tuple(self.tickets.items()), self.location))

    @property
    def is_mrx(self) -> bool:
        return self.piece.is_mrx

    @property
    def is_detective(self) -> bool:
        return self.piece.is_detective

    def has(self, ticket: Ticket) -> bool:
        """Check if the player holds at least one ticket of a kind."""
        return self.tickets[ticket] > 0

    def has_at_least(self, ticket: Ticket, quantity: int) -> bool:
        return self.tickets[ticket] >= quantity

    def has_any_tickets(self) -> bool:
        """Check if the player holds any ticket at all."""
        return any(count > 0 for count in self.tickets.values())

    def total_tickets(self) -> int:
        return sum(self.tickets.values())

    def at(self, location: NodeId) -> Player:
        """Return a copy of this player standing on another node."""
        return replace(self, location=location)

    def use(self, tickets: Iterable[Ticket]) -> Player:
        """Return a copy with the given tickets spent.

        Raises:
            ValueError: If the player does not hold enough tickets.
        """
        counts = dict(self.tickets)
        for ticket in tickets:
            if counts[ticket] <= 0:
                raise ValueError(f"{self.piece.name} has no {ticket.value} ticket to use")
            counts[ticket] -= 1
        return replace(self, tickets=counts)

    def give(self, tickets: Iterable[Ticket]) -> Player:
        """Return a copy with the given tickets added."""
        counts = dict(self.tickets)
        for ticket in tickets:
            counts[ticket] += 1
        return replace(self, tickets=counts)

    def ticket_board(self) -> TicketBoard:
        return TicketBoard(counts=self.tickets)

    def __str__(self) -> str:
        held = ", ".join(f"{t.value}={n}" for t, n in self.tickets.items() if n)
        return f"{self.piece.name}@{self.location} [{held}]"
