"""Configuration for setting up a game.

All values default to the standard rules; override them to play
shorter games or handicapped variants.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .constants import (
    Ticket,
    MIN_DETECTIVES,
    MAX_DETECTIVES,
    DETECTIVE_TAXI_TICKETS,
    DETECTIVE_BUS_TICKETS,
    DETECTIVE_UNDERGROUND_TICKETS,
    MRX_TAXI_TICKETS,
    MRX_BUS_TICKETS,
    MRX_UNDERGROUND_TICKETS,
    MRX_DOUBLE_TICKETS,
    standard_rounds,
)


@dataclass(frozen=True)
class TicketConfig:
    """Starting ticket allotments.

    ``mrx_secret`` of None means one secret ticket per detective.
    """

    detective_taxi: int = DETECTIVE_TAXI_TICKETS
    detective_bus: int = DETECTIVE_BUS_TICKETS
    detective_underground: int = DETECTIVE_UNDERGROUND_TICKETS
    mrx_taxi: int = MRX_TAXI_TICKETS
    mrx_bus: int = MRX_BUS_TICKETS
    mrx_underground: int = MRX_UNDERGROUND_TICKETS
    mrx_double: int = MRX_DOUBLE_TICKETS
    mrx_secret: int | None = None

    def detective_tickets(self) -> dict[Ticket, int]:
        return {
            Ticket.TAXI: self.detective_taxi,
            Ticket.BUS: self.detective_bus,
            Ticket.UNDERGROUND: self.detective_underground,
            Ticket.DOUBLE: 0,
            Ticket.SECRET: 0,
        }

    def mrx_tickets(self, num_detectives: int) -> dict[Ticket, int]:
        secret = num_detectives if self.mrx_secret is None else self.mrx_secret
        return {
            Ticket.TAXI: self.mrx_taxi,
            Ticket.BUS: self.mrx_bus,
            Ticket.UNDERGROUND: self.mrx_underground,
            Ticket.DOUBLE: self.mrx_double,
            Ticket.SECRET: secret,
        }


@dataclass(frozen=True)
class GameConfig:
    """Parameters for a new game.

    Attributes:
        num_detectives: Number of detectives in play.
        rounds: Reveal schedule, one flag per round.
        tickets: Starting ticket allotments.
    """

    num_detectives: int = MAX_DETECTIVES
    rounds: tuple[bool, ...] = field(default_factory=standard_rounds)
    tickets: TicketConfig = field(default_factory=TicketConfig)

    def __post_init__(self) -> None:
        if not MIN_DETECTIVES <= self.num_detectives <= MAX_DETECTIVES:
            raise ValueError(
                f"Number of detectives must be between {MIN_DETECTIVES} and "
                f"{MAX_DETECTIVES}, got {self.num_detectives}"
            )
        if not self.rounds:
            raise ValueError("Round schedule must contain at least one round")
        object.__setattr__(self, "rounds", tuple(self.rounds))
