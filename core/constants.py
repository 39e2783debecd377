"""Constants and enums for the Scotland Yard rules engine."""

from enum import Enum


class Ticket(Enum):
    """Ticket kinds a player can spend."""

    TAXI = "taxi"
    BUS = "bus"
    UNDERGROUND = "underground"
    DOUBLE = "double"  # Authorises a compound Mr X move
    SECRET = "secret"  # Usable on any edge, hides the transport used


class Transport(Enum):
    """Transport modes labelling the edges of the board."""

    TAXI = "taxi"
    BUS = "bus"
    UNDERGROUND = "underground"
    FERRY = "ferry"

    @property
    def required_ticket(self) -> Ticket:
        """The ticket a player must spend to travel by this mode."""
        return _REQUIRED_TICKETS[self]


_REQUIRED_TICKETS = {
    Transport.TAXI: Ticket.TAXI,
    Transport.BUS: Ticket.BUS,
    Transport.UNDERGROUND: Ticket.UNDERGROUND,
    Transport.FERRY: Ticket.SECRET,
}


class Piece(Enum):
    """Playing pieces. MRX is the fugitive, the colours are detectives."""

    MRX = "#000"
    RED = "#f00"
    GREEN = "#0f0"
    BLUE = "#00f"
    WHITE = "#fff"
    YELLOW = "#ff0"

    @property
    def colour(self) -> str:
        """Web colour of the piece."""
        return self.value

    @property
    def is_mrx(self) -> bool:
        return self is Piece.MRX

    @property
    def is_detective(self) -> bool:
        return self is not Piece.MRX


# Detective pieces in seating order
DETECTIVE_PIECES = [
    Piece.RED,
    Piece.GREEN,
    Piece.BLUE,
    Piece.WHITE,
    Piece.YELLOW,
]

# Player limits
MIN_DETECTIVES = 1
MAX_DETECTIVES = len(DETECTIVE_PIECES)

# Tickets handed out at game start
DETECTIVE_TAXI_TICKETS = 11
DETECTIVE_BUS_TICKETS = 8
DETECTIVE_UNDERGROUND_TICKETS = 4
MRX_TAXI_TICKETS = 4
MRX_BUS_TICKETS = 3
MRX_UNDERGROUND_TICKETS = 3
MRX_DOUBLE_TICKETS = 2
# Mr X receives one secret ticket per detective in play

# Tickets a detective may never hold
FORBIDDEN_DETECTIVE_TICKETS = (Ticket.DOUBLE, Ticket.SECRET)

# Standard game length and the rounds (1-based) where Mr X surfaces
STANDARD_ROUND_COUNT = 24
STANDARD_REVEAL_ROUNDS = (3, 8, 13, 18, 24)

# Start cards of the standard board
MRX_START_LOCATIONS = (35, 45, 51, 71, 78, 104, 106, 127, 132, 146, 166, 170, 172)
DETECTIVE_START_LOCATIONS = (
    26, 29, 50, 53, 91, 94, 103, 112, 117, 123, 138, 141, 155, 174,
)


def standard_rounds() -> tuple[bool, ...]:
    """Return the standard 24 round reveal schedule."""
    return tuple(
        (i + 1) in STANDARD_REVEAL_ROUNDS for i in range(STANDARD_ROUND_COUNT)
    )
